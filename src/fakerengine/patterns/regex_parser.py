"""Parser for the generation regex subset.

Turns a regular expression into a small node tree that regex_expand walks to
produce one matching string. Only constructs with a direct generative
reading are accepted:

    literals, escaped metacharacters, "."
    \\d \\D \\w \\W \\s \\S \\n \\t \\r \\f \\v \\xhh \\uhhhh
    [...] and [^...] classes with ranges and escapes
    (...) (?:...) (?P<name>...) (?<name>...)
    alternation with |
    * + ? {n} {n,} {n,m} {,m}, optionally followed by a lazy "?" or
    possessive "+" suffix (ignored)
    ^ and $ (ignored)

Backreferences, lookarounds, inline flags and boundary assertions raise
UnsupportedPatternConstructError. Malformed patterns raise FakerSyntaxError.

The universe for "." and negated classes is printable ASCII (U+0020 to
U+007E); "\\s" draws a space.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
import string
from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache

from fakerengine.constants import (
    MAX_DEPTH,
    MAX_PATTERN_CACHE_SIZE,
    MAX_QUANTIFIER_BOUND,
    PRINTABLE_ASCII_FIRST,
    PRINTABLE_ASCII_LAST,
)
from fakerengine.core.depth_guard import DepthGuard
from fakerengine.diagnostics import (
    Diagnostic,
    ErrorTemplate,
    FakerSyntaxError,
    SourceSpan,
    UnsupportedPatternConstructError,
)
from fakerengine.syntax.cursor import Cursor, ParseResult

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Nodes
    "Literal",
    "CharClass",
    "Sequence",
    "Alternation",
    "Repeat",
    "RegexNode",
    # Parsing
    "parse_pattern",
    "clear_pattern_cache",
    "UNIVERSE",
]

# ============================================================================
# NODES
# ============================================================================


@dataclass(frozen=True, slots=True)
class Literal:
    """Fixed text."""

    text: str


@dataclass(frozen=True, slots=True)
class CharClass:
    """One character drawn uniformly from chars (never empty)."""

    chars: str


@dataclass(frozen=True, slots=True)
class Sequence:
    """Items expanded one after another."""

    items: tuple[RegexNode, ...]


@dataclass(frozen=True, slots=True)
class Alternation:
    """One branch chosen uniformly."""

    branches: tuple[RegexNode, ...]


@dataclass(frozen=True, slots=True)
class Repeat:
    """Item repeated between minimum and maximum times.

    maximum is None for unbounded quantifiers; the expander caps those.
    """

    item: RegexNode
    minimum: int
    maximum: int | None


type RegexNode = Literal | CharClass | Sequence | Alternation | Repeat

# ============================================================================
# CHARACTER SETS
# ============================================================================

UNIVERSE: str = "".join(chr(c) for c in range(PRINTABLE_ASCII_FIRST, PRINTABLE_ASCII_LAST + 1))

_WORD = string.ascii_letters + string.digits + "_"
_SPACE = " "


def _complement(chars: str) -> str:
    excluded = set(chars)
    return "".join(c for c in UNIVERSE if c not in excluded)


_CLASS_ESCAPES: dict[str, str] = {
    "d": string.digits,
    "D": _complement(string.digits),
    "w": _WORD,
    "W": _complement(_WORD),
    "s": _SPACE,
    "S": _complement(_SPACE),
}

_CONTROL_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "f": "\f",
    "v": "\v",
    "0": "\0",
    "a": "\a",
}

_ASSERTIONS = frozenset("bBAZzG")
_QUANTIFIER_START = frozenset("*+?{")
_HEX_DIGITS = frozenset(string.hexdigits)
_BRACES = re.compile(r"\{(\d*)(,?)(\d*)\}")

# _parse_alternation -> _parse_sequence -> _parse_atom -> _parse_group per level.
_FRAMES_PER_GROUP = 4

# ============================================================================
# PARSER
# ============================================================================


@dataclass(frozen=True, slots=True)
class _Escape:
    """Result of reading one escape: a single char or a class of chars."""

    chars: str
    is_class: bool


class _PatternParser:
    """Recursive-descent parser over an immutable Cursor."""

    __slots__ = ("_guard", "_source")

    def __init__(self, source: str, max_depth: int) -> None:
        self._source = source
        self._guard = DepthGuard(max_depth=max_depth, frames_per_level=_FRAMES_PER_GROUP)

    def _syntax_error(
        self, factory: Callable[[SourceSpan, str], Diagnostic], cursor: Cursor, length: int = 1
    ) -> FakerSyntaxError:
        return FakerSyntaxError(factory(cursor.span_to(cursor.pos + length), self._source))

    def _unsupported(
        self, factory: Callable[[str, SourceSpan, str], Diagnostic], text: str, cursor: Cursor
    ) -> UnsupportedPatternConstructError:
        span = cursor.span_to(cursor.pos + len(text))
        return UnsupportedPatternConstructError(factory(text, span, self._source))

    def parse(self) -> RegexNode:
        result = self._parse_alternation(Cursor(self._source, 0))
        if not result.cursor.is_eof:
            # Only a stray ")" stops the top-level alternation early.
            raise self._syntax_error(ErrorTemplate.unbalanced_group, result.cursor)
        return result.value

    def _parse_alternation(self, cursor: Cursor) -> ParseResult[RegexNode]:
        branches: list[RegexNode] = []
        result = self._parse_sequence(cursor)
        branches.append(result.value)
        cursor = result.cursor
        while not cursor.is_eof and cursor.current == "|":
            result = self._parse_sequence(cursor.advance())
            branches.append(result.value)
            cursor = result.cursor
        if len(branches) == 1:
            return ParseResult(branches[0], cursor)
        return ParseResult(Alternation(tuple(branches)), cursor)

    def _parse_sequence(self, cursor: Cursor) -> ParseResult[RegexNode]:
        items: list[RegexNode] = []
        while not cursor.is_eof and cursor.current not in ("|", ")"):
            atom = self._parse_atom(cursor)
            cursor = atom.cursor
            quantified = self._parse_quantifier(cursor)
            if quantified is not None:
                if atom.value is None:
                    raise self._syntax_error(ErrorTemplate.nothing_to_repeat, cursor)
                (minimum, maximum), cursor = quantified.value, quantified.cursor
                if self._parse_quantifier(cursor) is not None:
                    raise self._syntax_error(ErrorTemplate.nothing_to_repeat, cursor)
                items.append(Repeat(atom.value, minimum, maximum))
            elif atom.value is not None:
                items.append(atom.value)
        return ParseResult(_merge_literals(items), cursor)

    def _parse_atom(self, cursor: Cursor) -> ParseResult[RegexNode | None]:
        """Parse one atom. Anchors yield None (nothing to emit)."""
        ch = cursor.current
        match ch:
            case "(":
                group = self._parse_group(cursor)
                return ParseResult(group.value, group.cursor)
            case "[":
                cls = self._parse_class(cursor)
                return ParseResult(cls.value, cls.cursor)
            case ".":
                return ParseResult(CharClass(UNIVERSE), cursor.advance())
            case "^" | "$":
                return ParseResult(None, cursor.advance())
            case "\\":
                escape = self._parse_escape(cursor, in_class=False)
                value = escape.value
                node: RegexNode = CharClass(value.chars) if value.is_class else Literal(value.chars)
                return ParseResult(node, escape.cursor)
            case "*" | "+" | "?":
                raise self._syntax_error(ErrorTemplate.nothing_to_repeat, cursor)
            case "{" if self._parse_braces(cursor) is not None:
                raise self._syntax_error(ErrorTemplate.nothing_to_repeat, cursor)
            case _:
                return ParseResult(Literal(ch), cursor.advance())

    def _parse_group(self, cursor: Cursor) -> ParseResult[RegexNode]:
        open_paren = cursor
        cursor = cursor.advance()
        if cursor.startswith("?"):
            cursor = self._parse_group_prefix(cursor)
        with self._guard:
            inner = self._parse_alternation(cursor)
        cursor = inner.cursor
        if cursor.is_eof:
            raise self._syntax_error(ErrorTemplate.unbalanced_group, open_paren)
        # _parse_alternation only stops at EOF or ")".
        return ParseResult(inner.value, cursor.advance())

    def _parse_group_prefix(self, cursor: Cursor) -> Cursor:
        """Consume a "(?" extension; cursor is at "?". Returns cursor at group body."""
        rest = cursor.advance()
        if rest.startswith(":"):
            return rest.advance()
        for lookaround in ("=", "!", "<=", "<!"):
            if rest.startswith(lookaround):
                raise self._unsupported(
                    ErrorTemplate.unsupported_lookaround, "(?" + lookaround, cursor
                )
        if rest.startswith("P="):
            raise self._unsupported(ErrorTemplate.unsupported_backreference, "(?P=", cursor)
        if rest.startswith("P<"):
            return self._skip_group_name(rest.advance(2), cursor)
        if rest.startswith("<"):
            return self._skip_group_name(rest.advance(), cursor)
        text = "(?" + (rest.current if not rest.is_eof else "")
        raise self._unsupported(ErrorTemplate.unsupported_group_flag, text, cursor)

    def _skip_group_name(self, cursor: Cursor, group_start: Cursor) -> Cursor:
        start = cursor
        while not cursor.is_eof and (cursor.current in _WORD):
            cursor = cursor.advance()
        if cursor.is_eof or cursor.current != ">" or cursor.pos == start.pos:
            raise self._syntax_error(
                ErrorTemplate.unbalanced_group, group_start, cursor.pos - group_start.pos
            )
        return cursor.advance()

    def _parse_escape(self, cursor: Cursor, *, in_class: bool) -> ParseResult[_Escape]:
        """Parse a backslash escape; cursor is at the backslash."""
        backslash = cursor
        cursor = cursor.advance()
        if cursor.is_eof:
            raise self._syntax_error(ErrorTemplate.dangling_escape, backslash)
        ch = cursor.current
        after = cursor.advance()

        if ch in _CLASS_ESCAPES:
            return ParseResult(_Escape(_CLASS_ESCAPES[ch], is_class=True), after)
        if in_class and ch == "b":
            return ParseResult(_Escape("\b", is_class=False), after)
        if ch in _CONTROL_ESCAPES:
            return ParseResult(_Escape(_CONTROL_ESCAPES[ch], is_class=False), after)
        if ch in ("x", "u"):
            width = 2 if ch == "x" else 4
            digits = after.slice_ahead(width)
            if len(digits) != width or not set(digits) <= _HEX_DIGITS:
                raise self._syntax_error(ErrorTemplate.dangling_escape, backslash, width + 2)
            return ParseResult(_Escape(chr(int(digits, 16)), is_class=False), after.advance(width))
        if not in_class:
            if ch in "123456789":
                raise self._unsupported(
                    ErrorTemplate.unsupported_backreference, "\\" + ch, backslash
                )
            if ch == "k" and after.startswith("<"):
                raise self._unsupported(ErrorTemplate.unsupported_backreference, "\\k<", backslash)
            if ch in _ASSERTIONS:
                raise self._unsupported(ErrorTemplate.unsupported_assertion, "\\" + ch, backslash)
        return ParseResult(_Escape(ch, is_class=False), after)

    def _parse_class(self, cursor: Cursor) -> ParseResult[RegexNode]:
        """Parse [...]; cursor is at "["."""
        open_bracket = cursor
        cursor = cursor.advance()
        negate = False
        if cursor.startswith("^"):
            negate = True
            cursor = cursor.advance()

        members: set[str] = set()
        first = True
        while True:
            if cursor.is_eof:
                raise self._syntax_error(ErrorTemplate.unterminated_class, open_bracket)
            if cursor.current == "]" and not first:
                cursor = cursor.advance()
                break
            first = False

            low_cursor = cursor
            low = self._parse_class_member(cursor)
            cursor = low.cursor
            if (
                not low.value.is_class
                and cursor.startswith("-")
                and cursor.peek(1) is not None
                and cursor.peek(1) != "]"
            ):
                high = self._parse_class_member(cursor.advance())
                if high.value.is_class or high.value.chars < low.value.chars:
                    raise FakerSyntaxError(
                        ErrorTemplate.invalid_range(
                            low.value.chars,
                            high.value.chars,
                            low_cursor.span_to(high.cursor.pos),
                            self._source,
                        )
                    )
                members.update(
                    chr(c) for c in range(ord(low.value.chars), ord(high.value.chars) + 1)
                )
                cursor = high.cursor
            else:
                members.update(low.value.chars)

        chars = _complement("".join(members)) if negate else "".join(sorted(members))
        if not chars:
            raise FakerSyntaxError(
                ErrorTemplate.empty_class(open_bracket.span_to(cursor.pos), self._source)
            )
        return ParseResult(CharClass(chars), cursor)

    def _parse_class_member(self, cursor: Cursor) -> ParseResult[_Escape]:
        if cursor.current == "\\":
            return self._parse_escape(cursor, in_class=True)
        return ParseResult(_Escape(cursor.current, is_class=False), cursor.advance())

    def _parse_quantifier(self, cursor: Cursor) -> ParseResult[tuple[int, int | None]] | None:
        """Parse a quantifier with optional lazy/possessive suffix, or return None."""
        if cursor.is_eof or cursor.current not in _QUANTIFIER_START:
            return None
        bounds: tuple[int, int | None]
        match cursor.current:
            case "*":
                bounds, cursor = (0, None), cursor.advance()
            case "+":
                bounds, cursor = (1, None), cursor.advance()
            case "?":
                bounds, cursor = (0, 1), cursor.advance()
            case _:
                braces = self._parse_braces(cursor)
                if braces is None:
                    return None
                bounds, cursor = braces.value, braces.cursor
        if not cursor.is_eof and cursor.current in ("?", "+"):
            cursor = cursor.advance()
        return ParseResult(bounds, cursor)

    def _parse_braces(self, cursor: Cursor) -> ParseResult[tuple[int, int | None]] | None:
        """Parse {n}, {n,}, {n,m} or {,m}; None when the text is a literal brace."""
        found = _BRACES.match(self._source, cursor.pos)
        if found is None:
            return None
        low_text, comma, high_text = found.groups()
        if not low_text and not comma:
            return None
        span_length = found.end() - cursor.pos

        minimum = int(low_text) if low_text else 0
        maximum: int | None
        if not comma:
            maximum = minimum
        elif high_text:
            maximum = int(high_text)
        else:
            maximum = None

        for bound in (minimum, maximum):
            if bound is not None and bound > MAX_QUANTIFIER_BOUND:
                raise FakerSyntaxError(
                    ErrorTemplate.quantifier_too_large(
                        bound,
                        MAX_QUANTIFIER_BOUND,
                        cursor.span_to(cursor.pos + span_length),
                        self._source,
                    )
                )
        if maximum is not None and minimum > maximum:
            raise FakerSyntaxError(
                ErrorTemplate.invalid_quantifier(
                    minimum, maximum, cursor.span_to(cursor.pos + span_length), self._source
                )
            )
        return ParseResult((minimum, maximum), cursor.advance(span_length))


def _merge_literals(items: list[RegexNode]) -> RegexNode:
    """Join adjacent Literal items; unwrap single-item sequences."""
    merged: list[RegexNode] = []
    for item in items:
        if isinstance(item, Literal) and merged and isinstance(merged[-1], Literal):
            merged[-1] = Literal(merged[-1].text + item.text)
        else:
            merged.append(item)
    if len(merged) == 1:
        return merged[0]
    return Sequence(tuple(merged))


@lru_cache(maxsize=MAX_PATTERN_CACHE_SIZE)
def parse_pattern(pattern: str, max_depth: int = MAX_DEPTH) -> RegexNode:
    """Parse a generation pattern into a node tree.

    Args:
        pattern: Regular expression in the supported subset
        max_depth: Maximum group nesting depth

    Returns:
        Immutable node tree (cached per pattern and depth)

    Raises:
        FakerSyntaxError: If the pattern is malformed
        UnsupportedPatternConstructError: If it uses an unsupported construct
        RecursionLimitExceededError: If groups nest deeper than max_depth

    Example:
        >>> parse_pattern("[0-9]{5}")
        Repeat(item=CharClass(chars='0123456789'), minimum=5, maximum=5)
    """
    return _PatternParser(pattern, max_depth).parse()


def clear_pattern_cache() -> None:
    """Clear the parsed-pattern cache."""
    parse_pattern.cache_clear()
