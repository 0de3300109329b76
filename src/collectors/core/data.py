"""The fixed record sequence processed by the demonstration."""

from typing import Tuple

from .models import Person

__all__ = ["PEOPLE"]

PEOPLE: Tuple[Person, ...] = (
    Person(name="Alan", age=44, country="US"),
    Person(name="Bruce", age=17, country="US"),
    Person(name="Crane", age=19, country="UK"),
    Person(name="Dolly", age=15, country="CN"),
    Person(name="Ella", age=31, country="FR"),
)
