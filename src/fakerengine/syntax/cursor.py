"""Read position over template and regex text.

Both parsers walk their input with a Cursor. A cursor never changes; every
move returns a new one, so a sub-parser that fails leaves its caller's
position intact and a loop that forgets to advance is easy to spot.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from fakerengine.diagnostics import ErrorTemplate, SourceSpan

__all__ = ["Cursor", "ParseResult"]

_BLANKS = frozenset(" \t\r\n")


@dataclass(frozen=True, slots=True)
class Cursor:
    """Offset into source.

    Example:
        >>> start = Cursor("#{Name}", 0)
        >>> start.advance(2).current
        'N'
        >>> start.current
        '#'
    """

    source: str
    pos: int

    @property
    def is_eof(self) -> bool:
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Character under the cursor.

        Raises:
            EOFError: At end of input. Parsers test is_eof first, so this
                only fires on a parser bug.
        """
        if self.is_eof:
            raise EOFError(ErrorTemplate.unexpected_eof(self.pos).message)
        return self.source[self.pos]

    def peek(self, offset: int = 0) -> str | None:
        """Character offset places ahead, None past the end."""
        index = self.pos + offset
        return self.source[index] if index < len(self.source) else None

    def advance(self, count: int = 1) -> Cursor:
        """Cursor count characters further on, stopping at the end."""
        return Cursor(self.source, min(self.pos + count, len(self.source)))

    def slice_to(self, end_pos: int) -> str:
        """Text between here and end_pos."""
        return self.source[self.pos : end_pos]

    def slice_ahead(self, n: int) -> str:
        """The next n characters (fewer near the end)."""
        return self.source[self.pos : self.pos + n]

    def startswith(self, prefix: str) -> bool:
        return self.source.startswith(prefix, self.pos)

    def skip_whitespace(self) -> Cursor:
        """Cursor at the next character that is not a space, tab or newline."""
        pos = self.pos
        while pos < len(self.source) and self.source[pos] in _BLANKS:
            pos += 1
        return Cursor(self.source, pos)

    def expect(self, char: str) -> Cursor | None:
        """Cursor past char when char comes next, else None."""
        return self.advance() if self.peek() == char else None

    @property
    def location(self) -> tuple[int, int]:
        """1-based (line, column) of the cursor, for error messages."""
        span = SourceSpan.locate(self.source, self.pos, self.pos)
        return (span.line, span.column)

    def span_to(self, end_pos: int) -> SourceSpan:
        """Span from here to end_pos, clamped into the remaining text."""
        return SourceSpan.locate(self.source, self.pos, end_pos)


@dataclass(frozen=True, slots=True)
class ParseResult[T]:
    """What a sub-parser produced, and where it stopped.

    Sub-parsers return this on success and raise FakerSyntaxError otherwise.
    """

    value: T
    cursor: Cursor
