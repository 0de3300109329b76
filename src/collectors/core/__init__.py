"""Core records, types and settings."""

from collectors.core.models import Person, PersonList, render_people
from collectors.core.enums import Characteristics
from collectors.core.data import PEOPLE
from collectors.core.config import Settings

__all__ = [
    "Person",
    "PersonList",
    "render_people",
    "Characteristics",
    "PEOPLE",
    "Settings",
]
