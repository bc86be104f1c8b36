"""Hypothesis strategies for fakerengine property-based testing.

This package provides reusable strategies for generating test data
across multiple test modules. Strategies are organized by domain:

- templates: Identifiers, directive arguments and template sources
- patterns: Regex patterns inside the generation subset
- locales: Locale codes in assorted casings and separators

Usage:
    from tests.strategies import identifiers, template_sources
    from tests.strategies.patterns import generation_patterns
    from tests.strategies.locales import locale_code_variants

Event-Emitting Strategies (HypoFuzz-Optimized):
    These strategies emit hypothesis.event() calls for coverage-guided fuzzing:
    - argument_values, template_sources
    - generation_patterns
    - locale_code_variants
"""

from .locales import CANONICAL_LOCALES, locale_code_variants
from .patterns import generation_patterns
from .templates import (
    argument_values,
    directives,
    identifiers,
    template_sources,
    text_runs,
)

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Templates
    "argument_values",
    "directives",
    "identifiers",
    "template_sources",
    "text_runs",
    # Patterns
    "generation_patterns",
    # Locales
    "CANONICAL_LOCALES",
    "locale_code_variants",
]
