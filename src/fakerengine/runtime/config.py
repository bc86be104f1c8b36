"""Session configuration.

Provides a single frozen dataclass that encapsulates all tunable limits and
policies of a FakerSession.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from fakerengine.constants import (
    DEFAULT_LOCALE,
    DEFAULT_MAX_EXPANSION_PASSES,
    DEFAULT_MAX_EXPANSION_SIZE,
    DEFAULT_MAX_UNBOUNDED_REPEAT,
    MAX_DEPTH,
)
from fakerengine.enums import LetterCase

__all__ = ["SessionConfig"]


@dataclass(frozen=True, slots=True)
class SessionConfig:
    """Immutable configuration for FakerSession.

    All fields have sensible defaults; ``SessionConfig()`` is usable as is.

    Attributes:
        default_locale: Terminal locale of every fallback chain (default: "en").
        max_expansion_passes: Scan-and-substitute passes allowed per
            evaluate() call before RecursionLimitExceededError (default: 32).
        max_expansion_size: Characters one evaluate() call may produce
            (default: 1,000,000).
        max_nesting_depth: Depth limit for regex groups and provider
            re-entry into evaluate() (default: 100).
        max_unbounded_repeat: Extra repetitions drawn for *, + and {n,}
            (default: 10).
        letter_case: Case policy of letterify()/bothify() when the caller
            does not pass one (default: LetterCase.LOWER).
        expand_slash_regex: Expand data values written as /regex/ through
            the regex generator (default: True).

    Example:
        >>> config = SessionConfig(letter_case=LetterCase.UPPER, max_expansion_passes=8)
        >>> session = FakerSession("en", trees, seed=1, config=config)
    """

    default_locale: str = DEFAULT_LOCALE
    max_expansion_passes: int = DEFAULT_MAX_EXPANSION_PASSES
    max_expansion_size: int = DEFAULT_MAX_EXPANSION_SIZE
    max_nesting_depth: int = MAX_DEPTH
    max_unbounded_repeat: int = DEFAULT_MAX_UNBOUNDED_REPEAT
    letter_case: LetterCase = LetterCase.LOWER
    expand_slash_regex: bool = True

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If a limit is out of range or letter_case is unknown
        """
        if self.max_expansion_passes <= 0:
            msg = "max_expansion_passes must be positive"
            raise ValueError(msg)
        if self.max_expansion_size <= 0:
            msg = "max_expansion_size must be positive"
            raise ValueError(msg)
        if self.max_nesting_depth <= 0:
            msg = "max_nesting_depth must be positive"
            raise ValueError(msg)
        if self.max_unbounded_repeat < 0:
            msg = "max_unbounded_repeat must be non-negative"
            raise ValueError(msg)
        # Accepts plain strings ("upper") as well as LetterCase members.
        object.__setattr__(self, "letter_case", LetterCase(self.letter_case))
