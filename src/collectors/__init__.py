"""Functional-style collection processing over immutable records."""

from collectors.core import PEOPLE, Person, Characteristics, Settings
from collectors.functional import Collector, collect

__all__ = [
    "PEOPLE",
    "Person",
    "Characteristics",
    "Settings",
    "Collector",
    "collect",
]
