"""fakerengine exception hierarchy with structured diagnostics.

All exceptions optionally store Diagnostic objects for rich error information.
Every error is deterministic: the same inputs reproduce it, so nothing in the
engine retries or swallows these exceptions.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, ErrorCategory

__all__ = [
    "EmptyCandidateListError",
    "FakerError",
    "FakerReferenceError",
    "FakerResolutionError",
    "FakerSyntaxError",
    "RecursionLimitExceededError",
    "UnsupportedPatternConstructError",
]


class FakerError(Exception):
    """Base exception for all fakerengine errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    category: ErrorCategory = ErrorCategory.RESOLUTION

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize FakerError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class FakerSyntaxError(FakerError):
    """Malformed directive or regex pattern.

    Examples:
    - Unterminated directive: "#{Address.city"
    - Empty directive body: "#{}"
    - Unbalanced group in a pattern: "(ab"
    """

    category = ErrorCategory.SYNTAX


class FakerResolutionError(FakerError):
    """Runtime error while producing a value.

    Examples:
    - Provider raised on its arguments
    - Arguments given to a data-backed directive
    """


class FakerReferenceError(FakerResolutionError):
    """Key path not defined at any level of the fallback chain.

    A leaf holding a single empty string is a valid value and never raises
    this error.
    """

    category = ErrorCategory.REFERENCE


class EmptyCandidateListError(FakerResolutionError):
    """Resolved value list has zero entries."""


class RecursionLimitExceededError(FakerResolutionError):
    """Expansion did not terminate within its bounds.

    Raised when a template still holds directives after the maximum number
    of passes, when its output outgrows the expansion budget, or when
    providers re-enter evaluation too deeply. Indicates a cyclic or runaway
    template.
    """


class UnsupportedPatternConstructError(FakerError):
    """Regex feature outside the supported generation subset.

    Examples:
    - Backreference: "(a)\\1"
    - Lookahead: "a(?=b)"
    - Word boundary: "\\bword"
    """

    category = ErrorCategory.PATTERN
