"""Generate strings that match a regex pattern.

Walks the node tree built by regex_parser, drawing every choice from the
session RandomSource so a fixed seed reproduces the output.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from fakerengine.constants import DEFAULT_MAX_UNBOUNDED_REPEAT, MAX_DEPTH
from fakerengine.patterns.regex_parser import (
    Alternation,
    CharClass,
    Literal,
    RegexNode,
    Repeat,
    Sequence,
    parse_pattern,
)
from fakerengine.runtime.random_source import RandomSource

__all__ = ["expand_node", "regexify"]


def expand_node(
    node: RegexNode,
    random_source: RandomSource,
    max_unbounded_repeat: int = DEFAULT_MAX_UNBOUNDED_REPEAT,
) -> str:
    """Produce one string from a parsed pattern."""
    output: list[str] = []
    _expand_into(node, random_source, max_unbounded_repeat, output)
    return "".join(output)


def _expand_into(
    node: RegexNode, random_source: RandomSource, cap: int, output: list[str]
) -> None:
    match node:
        case Literal(text=text):
            output.append(text)
        case CharClass(chars=chars):
            output.append(chars[random_source.next_int(len(chars))])
        case Sequence(items=items):
            for item in items:
                _expand_into(item, random_source, cap, output)
        case Alternation(branches=branches):
            _expand_into(random_source.choice(branches), random_source, cap, output)
        case Repeat(item=item, minimum=minimum, maximum=maximum):
            upper = minimum + cap if maximum is None else maximum
            for _ in range(random_source.next_int_between(minimum, upper)):
                _expand_into(item, random_source, cap, output)


def regexify(
    pattern: str,
    random_source: RandomSource,
    *,
    max_unbounded_repeat: int = DEFAULT_MAX_UNBOUNDED_REPEAT,
    max_depth: int = MAX_DEPTH,
) -> str:
    """Generate one string matching pattern.

    Args:
        pattern: Regular expression in the supported subset
        random_source: Session random source
        max_unbounded_repeat: Extra repetitions drawn for *, + and {n,}
            (keyword-only)
        max_depth: Maximum group nesting depth (keyword-only)

    Returns:
        A string s with re.fullmatch(pattern, s) succeeding (anchors and
        lazy/possessive suffixes carry no generative meaning)

    Raises:
        FakerSyntaxError: If the pattern is malformed
        UnsupportedPatternConstructError: If it uses an unsupported construct

    Example:
        >>> out = regexify("[0-9]{5}", RandomSource(3))
        >>> len(out), out.isdigit()
        (5, True)
    """
    if max_unbounded_repeat < 0:
        msg = "max_unbounded_repeat must be non-negative"
        raise ValueError(msg)
    node = parse_pattern(pattern, max_depth)
    return expand_node(node, random_source, max_unbounded_repeat)
