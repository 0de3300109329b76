"""Reusable type definitions for the collectors data module.

Type Aliases:
    Age: Non-negative integer age in years.
    CountryCode: Two or three letter country code, normalised to upper case.
"""

from typing import Annotated, Any
import annotated_types as at
from pydantic.functional_validators import BeforeValidator

__all__ = [
    "Age",
    "CountryCode",
]

Age = Annotated[int, at.Ge(0)]


def normalize_country_code(value: Any) -> Any:
    """Strip and upper-case a country code before length validation.

    Args:
        value: Raw value passed to the model.

    Returns:
        The normalised code, or the value unchanged if it is not a string.
    """
    if isinstance(value, str):
        return value.strip().upper()
    return value


CountryCode = Annotated[
    str, at.MinLen(2), at.MaxLen(3), BeforeValidator(normalize_country_code)
]

