"""Enumerations for fakerengine type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class LetterCase(StrEnum):
    """Case policy for letter-fill placeholders.

    StrEnum provides automatic string conversion: str(LetterCase.UPPER) == "upper"
    """

    LOWER = "lower"
    """Draw from a-z"""

    UPPER = "upper"
    """Draw from A-Z"""

    MIXED = "mixed"
    """Draw from a-z and A-Z"""


__all__ = [
    "LetterCase",
]
