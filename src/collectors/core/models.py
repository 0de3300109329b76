"""Record models used by the collection-processing demonstration."""

from typing import Annotated, Iterable, List
import annotated_types as at
from pydantic import BaseModel, ConfigDict, Field

from .types import Age, CountryCode

__all__ = ["Person", "PersonList", "render_people"]


class Person(BaseModel):
    """An immutable person record.

    Instances are frozen: any attempt to assign a field raises a
    ``pydantic.ValidationError``. Being frozen also makes them hashable, so
    results can be compared as sets regardless of evaluation order.

    Attributes:
        name: Display name of the person.
        age: Age in whole years.
        country: Short country code (e.g., "US", "UK").
    """

    name: str = Field(..., min_length=1, description="Display name of the person.")
    age: Age = Field(..., description="Age in whole years.")
    country: CountryCode = Field(
        ..., description="Short country code (e.g., 'US', 'UK')."
    )

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"Person(name={self.name}, age={self.age}, country={self.country})"

    def __repr__(self) -> str:
        return str(self)


# A list of Person objects with at least one element
PersonList = Annotated[List[Person], at.MinLen(1)]


def render_people(people: Iterable[Person]) -> str:
    """Render a sequence of records as ``[Person(...), Person(...)]``."""
    return "[" + ", ".join(str(person) for person in people) + "]"
