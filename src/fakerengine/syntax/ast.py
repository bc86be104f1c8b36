"""Template AST node definitions.

A template is a flat sequence of literal text runs and directives. Directives
do not nest inside each other: nesting happens through data, when a
substituted value itself contains directives, and is handled by repeated
passes in the evaluator.

Includes type guards as static methods (eliminates isinstance chains at call
sites).

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeIs

from fakerengine.diagnostics import SourceSpan

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Elements
    "TextElement",
    "Directive",
    "Template",
    # Type aliases
    "ArgumentValue",
    "TemplateElement",
]

type ArgumentValue = str | int | float | bool


@dataclass(frozen=True, slots=True)
class TextElement:
    """Literal text between directives.

    Attributes:
        value: Text exactly as written (a "#" not followed by "{" included)
    """

    value: str

    @staticmethod
    def guard(node: object) -> TypeIs[TextElement]:
        """Type guard for TextElement."""
        return isinstance(node, TextElement)


@dataclass(frozen=True, slots=True)
class Directive:
    """One #{...} directive.

    Attributes:
        path: Reference identifiers as written, e.g. ("Address", "streetName")
        arguments: Positional literal arguments, in order
        span: Location in the template (None for constructed nodes)

    Example:
        Source: "#{Address.streetName}"
        Directive(path=("Address", "streetName"), arguments=())
    """

    path: tuple[str, ...]
    arguments: tuple[ArgumentValue, ...] = ()
    span: SourceSpan | None = None

    def __post_init__(self) -> None:
        """Validate that the reference is not empty."""
        if not self.path:
            msg = "Directive path must have at least one identifier"
            raise ValueError(msg)

    @property
    def is_bare(self) -> bool:
        """True for a single-identifier reference such as #{first_name}."""
        return len(self.path) == 1

    @property
    def category(self) -> str | None:
        """Leading identifier of a qualified reference, None when bare."""
        return None if self.is_bare else self.path[0]

    @property
    def reference(self) -> str:
        """Reference as dotted text, e.g. "Address.streetName"."""
        return ".".join(self.path)

    @staticmethod
    def guard(node: object) -> TypeIs[Directive]:
        """Type guard for Directive."""
        return isinstance(node, Directive)


type TemplateElement = TextElement | Directive


@dataclass(frozen=True, slots=True)
class Template:
    """Parsed template.

    Attributes:
        elements: Text runs and directives in source order. Adjacent text
            runs are merged by the parser.
    """

    elements: tuple[TemplateElement, ...]

    @property
    def directives(self) -> tuple[Directive, ...]:
        """Directives only, in source order."""
        return tuple(e for e in self.elements if Directive.guard(e))

    @property
    def has_directives(self) -> bool:
        """True if at least one directive remains."""
        return any(Directive.guard(e) for e in self.elements)

    def literal_text(self) -> str:
        """Concatenated text of a template without directives.

        Raises:
            ValueError: If the template still holds directives
        """
        if self.has_directives:
            msg = "Template still holds directives"
            raise ValueError(msg)
        return "".join(e.value for e in self.elements if TextElement.guard(e))
