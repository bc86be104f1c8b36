"""Rendering of diagnostics for terminals, logs and tools.

Three layouts are supported: a multi-line compiler-style report with a caret
under the offending part of the template or pattern, a one-line summary for
log files, and JSON for programs.

Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from .codes import Diagnostic

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]

# Control characters are shown escaped so a template cannot forge log lines.
_ESCAPES: dict[int, str] = {
    ord("\n"): "\\n",
    ord("\r"): "\\r",
    ord("\t"): "\\t",
    0x1B: "\\x1b",
}

_SEVERITY_COLORS = {"error": "\033[1;31m", "warning": "\033[1;33m"}
_RESET = "\033[0m"

type JsonValue = str | int | list[str]


class OutputFormat(StrEnum):
    """Layouts understood by DiagnosticFormatter."""

    RUST = "rust"  # Multi-line report (default)
    SIMPLE = "simple"  # CODE: message
    JSON = "json"  # One JSON object per diagnostic


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Turns Diagnostic objects into text.

    Attributes:
        output_format: Layout to produce
        sanitize: Cut message, hint and source excerpts to max_content_length
        color: Color the severity label with ANSI codes
        max_content_length: Cut-off used when sanitize is set

    Example:
        >>> diagnostic = ErrorTemplate.key_not_found("name.suffix", ("it", "en"))
        >>> print(DiagnosticFormatter().format(diagnostic))
        error[KEY_NOT_FOUND]: Key 'name.suffix' not found in locales it -> en
          --> key: name.suffix
          = chain: it -> en
          = help: Define the key in the locale data or in the default locale
        >>> print(DiagnosticFormatter(output_format=OutputFormat.SIMPLE).format(diagnostic))
        KEY_NOT_FOUND: Key 'name.suffix' not found in locales it -> en
    """

    output_format: OutputFormat = OutputFormat.RUST
    sanitize: bool = False
    color: bool = False
    max_content_length: int = 100

    def format(self, diagnostic: Diagnostic) -> str:
        """Render one diagnostic in the configured layout."""
        match self.output_format:
            case OutputFormat.RUST:
                return self._report(diagnostic)
            case OutputFormat.SIMPLE:
                return f"{diagnostic.code.name}: {self._text(diagnostic.message)}"
            case OutputFormat.JSON:
                return json.dumps(self._fields(diagnostic), ensure_ascii=False)

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Render several diagnostics separated by blank lines."""
        return "\n\n".join(self.format(d) for d in diagnostics)

    def _report(self, diagnostic: Diagnostic) -> str:
        """Multi-line layout.

        For a diagnostic with a span:
            error[UNTERMINATED_DIRECTIVE]: Directive is not closed with '}'
              --> line 1, column 5
              |   abc #{Address.city
              |       ^^
              = help: Add '}' after the directive body
        """
        label = diagnostic.severity
        if self.color:
            label = f"{_SEVERITY_COLORS[label]}{label}{_RESET}"
        lines = [f"{label}[{diagnostic.code.name}]: {self._text(diagnostic.message)}"]

        span = diagnostic.span
        if span is not None:
            lines.append(f"  --> line {span.line}, column {span.column}")
            if diagnostic.source is not None:
                excerpt = self._text(diagnostic.source)
                lines.append(f"  |   {excerpt}")
                # Offsets only line up when nothing was escaped or cut.
                if excerpt == diagnostic.source and span.start < len(excerpt):
                    width = max(1, min(span.end, len(excerpt)) - span.start)
                    lines.append(f"  |   {' ' * span.start}{'^' * width}")
        elif diagnostic.key_path:
            lines.append(f"  --> key: {diagnostic.key_path}")

        if diagnostic.locale_chain:
            lines.append(f"  = chain: {' -> '.join(diagnostic.locale_chain)}")
        if diagnostic.hint:
            lines.append(f"  = help: {self._text(diagnostic.hint)}")
        return "\n".join(lines)

    def _fields(self, diagnostic: Diagnostic) -> dict[str, JsonValue]:
        fields: dict[str, JsonValue] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "message": self._cut(diagnostic.message),
            "severity": diagnostic.severity,
        }
        if diagnostic.span is not None:
            fields |= {
                "line": diagnostic.span.line,
                "column": diagnostic.span.column,
                "start": diagnostic.span.start,
                "end": diagnostic.span.end,
            }
        if diagnostic.key_path:
            fields["key_path"] = diagnostic.key_path
        if diagnostic.locale_chain:
            fields["locale_chain"] = list(diagnostic.locale_chain)
        if diagnostic.hint:
            fields["hint"] = self._cut(diagnostic.hint)
        return fields

    def _text(self, text: str) -> str:
        return self._cut(text.translate(_ESCAPES))

    def _cut(self, text: str) -> str:
        if self.sanitize and len(text) > self.max_content_length:
            return f"{text[: self.max_content_length]}..."
        return text
