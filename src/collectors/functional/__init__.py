"""Functional primitives for collectors.

This module provides the accumulate/merge protocol and a library of
composable collectors. Collectors are stateless descriptions of a reduction,
so the same collector can be evaluated sequentially or in parallel chunks.
"""

from collectors.functional.collector import Collector, collect
from collectors.functional.builtins import (
    to_list,
    to_set,
    to_dict,
    joining,
    grouping_by,
    partitioning_by,
    mapping,
    filtering,
    counting,
    summing,
    averaging,
    reducing,
    collecting_and_then,
)
from collectors.functional.frames import to_frame, grouping_frame

__all__ = [
    "Collector",
    "collect",
    "to_list",
    "to_set",
    "to_dict",
    "joining",
    "grouping_by",
    "partitioning_by",
    "mapping",
    "filtering",
    "counting",
    "summing",
    "averaging",
    "reducing",
    "collecting_and_then",
    "to_frame",
    "grouping_frame",
]
