"""Digit and letter placeholder fill.

numerify replaces every "#" with a digit, letterify every "?" with a letter,
bothify does both. All other characters are copied unchanged.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import string

from fakerengine.constants import DIGIT_PLACEHOLDER, LETTER_PLACEHOLDER
from fakerengine.enums import LetterCase
from fakerengine.runtime.random_source import RandomSource

__all__ = ["bothify", "letter_alphabet", "letterify", "numerify"]

_DIGITS = string.digits


def letter_alphabet(letter_case: LetterCase | str) -> str:
    """Alphabet drawn from for a case policy.

    Raises:
        ValueError: If letter_case is not a LetterCase value
    """
    match LetterCase(letter_case):
        case LetterCase.LOWER:
            return string.ascii_lowercase
        case LetterCase.UPPER:
            return string.ascii_uppercase
        case LetterCase.MIXED:
            return string.ascii_letters


def _fill(template: str, placeholder: str, alphabet: str, random_source: RandomSource) -> str:
    if placeholder not in template:
        return template
    size = len(alphabet)
    return "".join(
        alphabet[random_source.next_int(size)] if ch == placeholder else ch for ch in template
    )


def numerify(template: str, random_source: RandomSource) -> str:
    """Replace every "#" with a uniform digit 0-9.

    Example:
        >>> len(numerify("####", RandomSource(1)))
        4
    """
    return _fill(template, DIGIT_PLACEHOLDER, _DIGITS, random_source)


def letterify(
    template: str,
    random_source: RandomSource,
    letter_case: LetterCase | str = LetterCase.LOWER,
) -> str:
    """Replace every "?" with a uniform ASCII letter.

    Args:
        template: Text with "?" placeholders
        random_source: Session random source
        letter_case: Case policy (default: lower case)
    """
    return _fill(template, LETTER_PLACEHOLDER, letter_alphabet(letter_case), random_source)


def bothify(
    template: str,
    random_source: RandomSource,
    letter_case: LetterCase | str = LetterCase.LOWER,
) -> str:
    """Digit-fill then letter-fill.

    Example:
        >>> out = bothify("##-??", RandomSource(7))
        >>> out[:2].isdigit() and out[2] == "-" and out[3:].isalpha()
        True
    """
    return letterify(numerify(template, random_source), random_source, letter_case)
