"""Serialize template AST back to template text.

Used by the evaluator to rewrite bare directives with their producing
category, and by property tests (roundtrip: parse -> serialize -> parse).

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from fakerengine.constants import DIRECTIVE_CLOSE, DIRECTIVE_OPEN

from .ast import ArgumentValue, Directive, Template, TextElement

__all__ = ["serialize", "serialize_argument", "serialize_directive"]

_QUOTE_ESCAPES = str.maketrans({"\\": "\\\\", '"': '\\"', "\n": "\\n", "\t": "\\t", "\r": "\\r"})


def serialize_argument(value: ArgumentValue) -> str:
    """Render one argument so that parsing it yields the same value.

    Example:
        >>> serialize_argument("a'b")
        '"a\\'b"'
        >>> serialize_argument(True)
        'true'
    """
    match value:
        case bool():
            return "true" if value else "false"
        case int():
            return str(value)
        case float():
            return repr(value)
        case _:
            return '"' + value.translate(_QUOTE_ESCAPES) + '"'


def serialize_directive(directive: Directive) -> str:
    """Render a directive as #{path(args)}."""
    text = DIRECTIVE_OPEN + directive.reference
    if directive.arguments:
        text += "(" + ", ".join(serialize_argument(a) for a in directive.arguments) + ")"
    return text + DIRECTIVE_CLOSE


def serialize(template: Template) -> str:
    """Render a Template back to template text.

    Args:
        template: Template to render

    Returns:
        Text that parses back to an equivalent Template (spans aside)
    """
    output: list[str] = []
    for element in template.elements:
        if TextElement.guard(element):
            output.append(element.value)
        else:
            output.append(serialize_directive(element))
    return "".join(output)
