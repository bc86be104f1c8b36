"""Template parser.

Splits a template string into literal text runs and #{...} directives.

Grammar:
    directive  := "#{" ws? reference ws? arguments? ws? "}"
    reference  := identifier ("." identifier)*
    identifier := [A-Za-z_][A-Za-z0-9_-]*
    arguments  := "(" ws? (argument (ws? "," ws? argument)*)? ws? ")"
    argument   := quoted-string | "true" | "false" | integer | float | bare-word

A "#" not followed by "{" is literal text. Any other deviation inside a
directive raises FakerSyntaxError; there is no error recovery, since a
template is a single short value rather than a document.

Parsed templates are immutable and cached.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from functools import lru_cache

from fakerengine.constants import DIRECTIVE_CLOSE, DIRECTIVE_OPEN, MAX_TEMPLATE_CACHE_SIZE
from fakerengine.diagnostics import ErrorTemplate, FakerSyntaxError
from fakerengine.syntax.ast import ArgumentValue, Directive, Template, TemplateElement, TextElement
from fakerengine.syntax.cursor import Cursor, ParseResult

__all__ = ["clear_template_cache", "contains_directive", "parse_template"]

_INTEGER = re.compile(r"[+-]?\d+")
_FLOAT = re.compile(r"[+-]?(?:\d+\.\d*|\.\d+|\d+(?:\.\d*)?[eE][+-]?\d+)")

# Characters that end a bare-word argument.
_BARE_WORD_STOP = frozenset(",()}'\" \t\r\n")

_STRING_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "\\": "\\", "'": "'", '"': '"'}


def is_identifier_start(ch: str) -> bool:
    """First character of an identifier: ASCII letter or underscore."""
    return ch == "_" or ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def is_identifier_char(ch: str) -> bool:
    """Continuation character of an identifier."""
    return is_identifier_start(ch) or ("0" <= ch <= "9") or ch == "-"


def contains_directive(text: str) -> bool:
    """Fast check for an opening marker, without parsing."""
    return DIRECTIVE_OPEN in text


class _DirectiveParser:
    """Parses the body of one directive.

    Holds the opening-marker cursor so EOF errors point at the directive
    that was left open.
    """

    __slots__ = ("_open", "_source")

    def __init__(self, source: str, open_cursor: Cursor) -> None:
        self._source = source
        self._open = open_cursor

    def _unterminated(self) -> FakerSyntaxError:
        span = self._open.span_to(self._open.pos + len(DIRECTIVE_OPEN))
        return FakerSyntaxError(ErrorTemplate.unterminated_directive(span, self._source))

    def _invalid(self, reason: str, cursor: Cursor) -> FakerSyntaxError:
        span = cursor.span_to(cursor.pos + 1)
        return FakerSyntaxError(ErrorTemplate.invalid_directive(reason, span, self._source))

    def _invalid_argument(self, reason: str, cursor: Cursor) -> FakerSyntaxError:
        span = cursor.span_to(cursor.pos + 1)
        return FakerSyntaxError(ErrorTemplate.invalid_argument(reason, span, self._source))

    def parse(self) -> ParseResult[Directive]:
        cursor = self._open.advance(len(DIRECTIVE_OPEN)).skip_whitespace()
        if cursor.is_eof:
            raise self._unterminated()
        if cursor.current == DIRECTIVE_CLOSE:
            raise self._invalid("empty directive body", cursor)

        path: list[str] = []
        result = self._parse_identifier(cursor)
        path.append(result.value)
        cursor = result.cursor
        while not cursor.is_eof and cursor.current == ".":
            result = self._parse_identifier(cursor.advance())
            path.append(result.value)
            cursor = result.cursor

        cursor = cursor.skip_whitespace()
        arguments: tuple[ArgumentValue, ...] = ()
        if not cursor.is_eof and cursor.current == "(":
            args_result = self._parse_arguments(cursor.advance())
            arguments = args_result.value
            cursor = args_result.cursor.skip_whitespace()

        if cursor.is_eof:
            raise self._unterminated()
        if cursor.current != DIRECTIVE_CLOSE:
            raise self._invalid(f"unexpected character {cursor.current!r}", cursor)
        end = cursor.advance()
        directive = Directive(
            path=tuple(path),
            arguments=arguments,
            span=self._open.span_to(end.pos),
        )
        return ParseResult(directive, end)

    def _parse_identifier(self, cursor: Cursor) -> ParseResult[str]:
        if cursor.is_eof:
            raise self._unterminated()
        if not is_identifier_start(cursor.current):
            raise self._invalid(f"expected identifier, found {cursor.current!r}", cursor)
        start = cursor
        cursor = cursor.advance()
        while not cursor.is_eof and is_identifier_char(cursor.current):
            cursor = cursor.advance()
        return ParseResult(start.slice_to(cursor.pos), cursor)

    def _parse_arguments(self, cursor: Cursor) -> ParseResult[tuple[ArgumentValue, ...]]:
        """Parse an argument list; cursor is just past "("."""
        values: list[ArgumentValue] = []
        cursor = cursor.skip_whitespace()
        if cursor.is_eof:
            raise self._unterminated()
        if cursor.current == ")":
            return ParseResult((), cursor.advance())

        while True:
            result = self._parse_argument(cursor)
            values.append(result.value)
            cursor = result.cursor.skip_whitespace()
            if cursor.is_eof:
                raise self._unterminated()
            if cursor.current == ")":
                return ParseResult(tuple(values), cursor.advance())
            if cursor.current != ",":
                raise self._invalid_argument(
                    f"expected ',' or ')', found {cursor.current!r}", cursor
                )
            cursor = cursor.advance().skip_whitespace()

    def _parse_argument(self, cursor: Cursor) -> ParseResult[ArgumentValue]:
        if cursor.is_eof:
            raise self._unterminated()
        if cursor.current in ("'", '"'):
            string_result = self._parse_quoted(cursor)
            return ParseResult(string_result.value, string_result.cursor)

        start = cursor
        while not cursor.is_eof and cursor.current not in _BARE_WORD_STOP:
            cursor = cursor.advance()
        word = start.slice_to(cursor.pos)
        if not word:
            found = "end of input" if cursor.is_eof else repr(cursor.current)
            raise self._invalid_argument(f"missing argument before {found}", cursor)
        return ParseResult(_classify_bare_word(word), cursor)

    def _parse_quoted(self, cursor: Cursor) -> ParseResult[str]:
        quote = cursor.current
        start = cursor
        cursor = cursor.advance()
        chars: list[str] = []
        while True:
            if cursor.is_eof:
                raise self._invalid_argument("unterminated string", start)
            ch = cursor.current
            if ch == quote:
                return ParseResult("".join(chars), cursor.advance())
            if ch == "\\":
                cursor = cursor.advance()
                if cursor.is_eof:
                    raise self._invalid_argument("unterminated string", start)
                escaped = cursor.current
                # Unknown escapes keep the backslash, so regex text passes through.
                chars.append(_STRING_ESCAPES.get(escaped, "\\" + escaped))
            else:
                chars.append(ch)
            cursor = cursor.advance()


def _classify_bare_word(word: str) -> ArgumentValue:
    """Convert an unquoted argument to bool, int, float or str."""
    match word:
        case "true":
            return True
        case "false":
            return False
    if _INTEGER.fullmatch(word):
        return int(word)
    if _FLOAT.fullmatch(word):
        return float(word)
    return word


@lru_cache(maxsize=MAX_TEMPLATE_CACHE_SIZE)
def parse_template(source: str) -> Template:
    """Parse a template into text runs and directives.

    Args:
        source: Template text

    Returns:
        Immutable Template; a template without "#{" is one TextElement
        (or no elements at all when empty)

    Raises:
        FakerSyntaxError: If a directive is malformed

    Example:
        >>> t = parse_template("#{Name.first_name} #{Name.last_name}")
        >>> [d.reference for d in t.directives]
        ['Name.first_name', 'Name.last_name']
    """
    elements: list[TemplateElement] = []
    text: list[str] = []
    pos = 0
    while True:
        marker = source.find(DIRECTIVE_OPEN, pos)
        if marker < 0:
            text.append(source[pos:])
            break
        text.append(source[pos:marker])
        result = _DirectiveParser(source, Cursor(source, marker)).parse()
        if any(text):
            elements.append(TextElement("".join(text)))
        text.clear()
        elements.append(result.value)
        pos = result.cursor.pos

    if any(text):
        elements.append(TextElement("".join(text)))
    return Template(tuple(elements))


def clear_template_cache() -> None:
    """Clear the parsed-template cache."""
    parse_template.cache_clear()
