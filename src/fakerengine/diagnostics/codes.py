"""Diagnostic codes, source spans and the Diagnostic record.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "ErrorCategory",
    "SourceSpan",
]


class ErrorCategory(StrEnum):
    """Broad family of a failure, carried on every FakerError subclass.

    Members are plain strings, so ``error.category == "reference"`` works in
    log filters.
    """

    SYNTAX = "syntax"  # Malformed directive or regex
    REFERENCE = "reference"  # Key or provider missing from every locale
    RESOLUTION = "resolution"  # Value could not be produced at runtime
    PATTERN = "pattern"  # Regex feature outside the generator subset


class DiagnosticCode(Enum):
    """Numbered failure kinds.

    The thousand digit matches the category: 1xxx reference, 2xxx
    resolution, 3xxx syntax and 4xxx unsupported pattern features.
    """

    KEY_NOT_FOUND = 1001
    KEY_IS_NOT_LEAF = 1002
    PROVIDER_NOT_FOUND = 1003

    EMPTY_CANDIDATE_LIST = 2001
    MAX_PASSES_EXCEEDED = 2002
    EXPANSION_BUDGET_EXCEEDED = 2003
    MAX_DEPTH_EXCEEDED = 2004
    PROVIDER_FAILED = 2005
    ARGUMENTS_WITHOUT_PROVIDER = 2006

    UNEXPECTED_EOF = 3001
    UNTERMINATED_DIRECTIVE = 3002
    INVALID_DIRECTIVE = 3003
    INVALID_ARGUMENT = 3004
    UNBALANCED_GROUP = 3005
    UNTERMINATED_CLASS = 3006
    INVALID_RANGE = 3007
    NOTHING_TO_REPEAT = 3008
    INVALID_QUANTIFIER = 3009
    EMPTY_CLASS = 3010
    DANGLING_ESCAPE = 3011
    QUANTIFIER_TOO_LARGE = 3012

    UNSUPPORTED_BACKREFERENCE = 4001
    UNSUPPORTED_LOOKAROUND = 4002
    UNSUPPORTED_ASSERTION = 4003
    UNSUPPORTED_GROUP_FLAG = 4004

    @property
    def category(self) -> ErrorCategory:
        """Category implied by the code's thousand digit."""
        return _CATEGORY_BY_THOUSAND[self.value // 1000]


_CATEGORY_BY_THOUSAND = {
    1: ErrorCategory.REFERENCE,
    2: ErrorCategory.RESOLUTION,
    3: ErrorCategory.SYNTAX,
    4: ErrorCategory.PATTERN,
}


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Character range inside a template or regex.

    Offsets count code points. start is inclusive, end exclusive; line and
    column are 1-based and describe start.
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        problems = (
            (self.start < 0, f"start must be >= 0, got {self.start}"),
            (self.end < self.start, f"end ({self.end}) must be >= start ({self.start})"),
            (self.line < 1, f"line must be >= 1, got {self.line}"),
            (self.column < 1, f"column must be >= 1, got {self.column}"),
        )
        for failed, detail in problems:
            if failed:
                msg = f"Invalid SourceSpan: {detail}"
                raise ValueError(msg)

    @classmethod
    def locate(cls, text: str, start: int, end: int) -> SourceSpan:
        """Span over text[start:end] with line and column worked out from text.

        "\\n" separates lines. end is clamped into [start, len(text)].

        Example:
            >>> SourceSpan.locate("ab\\ncd", 4, 5)
            SourceSpan(start=4, end=5, line=2, column=2)
        """
        line_start = text.rfind("\n", 0, start) + 1
        return cls(
            start=start,
            end=max(start, min(end, len(text))),
            line=text.count("\n", 0, start) + 1,
            column=start - line_start + 1,
        )


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """One reportable problem.

    Attributes:
        code: What went wrong
        message: One-line description
        span: Where in source it went wrong, when known
        hint: How to fix it
        key_path: Dotted key being resolved
        locale_chain: Locales searched, most specific first
        source: Template or regex text the span indexes into
        severity: "error" or "warning"
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    key_path: str | None = None
    locale_chain: tuple[str, ...] | None = None
    source: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        return self.message

    @property
    def category(self) -> ErrorCategory:
        return self.code.category

    def format_error(self) -> str:
        """Multi-line report, as printed in exception messages."""
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
