"""Enumerations used throughout the collectors package."""

from enum import Enum


class Characteristics(Enum):
    """Properties of a collector that the ``collect`` driver may rely on."""

    # Merged chunks may be combined in any order.
    UNORDERED = "unordered"
    # A single container may be shared by every worker.
    CONCURRENT = "concurrent"
    # The container is the result; the finisher is skipped.
    IDENTITY_FINISH = "identity_finish"
