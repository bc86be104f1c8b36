"""Template syntax: AST, cursor, parser and serializer.

Python 3.13+. Zero external dependencies.
"""

from .ast import ArgumentValue, Directive, Template, TemplateElement, TextElement
from .cursor import Cursor, ParseResult
from .parser import clear_template_cache, contains_directive, parse_template
from .serializer import serialize, serialize_argument, serialize_directive

__all__ = [
    "ArgumentValue",
    "Cursor",
    "Directive",
    "ParseResult",
    "Template",
    "TemplateElement",
    "TextElement",
    "clear_template_cache",
    "contains_directive",
    "parse_template",
    "serialize",
    "serialize_argument",
    "serialize_directive",
]
