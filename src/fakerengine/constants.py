"""Shared constants for fakerengine.

This module provides centralized configuration constants used across
syntax, runtime and pattern packages. Placing constants here avoids circular
imports and provides a single source of truth.

Constants are grouped by domain:
- Directive syntax: Markers and keys that templates depend on
- Depth limits: Recursion protection for parsing and evaluation
- Expansion limits: Bounds for recursive template expansion
- Pattern limits: Caps for unbounded regex quantifiers
- Cache limits: Memory bounds for caching subsystems

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Directive syntax
    "DIRECTIVE_OPEN",
    "DIRECTIVE_CLOSE",
    "DEFAULT_METHOD_KEY",
    "DEFAULT_LOCALE",
    # Depth limits
    "MAX_DEPTH",
    # Expansion limits
    "DEFAULT_MAX_EXPANSION_PASSES",
    "DEFAULT_MAX_EXPANSION_SIZE",
    # Pattern limits
    "DEFAULT_MAX_UNBOUNDED_REPEAT",
    "MAX_QUANTIFIER_BOUND",
    "PRINTABLE_ASCII_FIRST",
    "PRINTABLE_ASCII_LAST",
    "DIGIT_PLACEHOLDER",
    "LETTER_PLACEHOLDER",
    # Cache limits
    "MAX_LOCALE_CACHE_SIZE",
    "MAX_PATTERN_CACHE_SIZE",
    "MAX_TEMPLATE_CACHE_SIZE",
]

# ============================================================================
# DIRECTIVE SYNTAX
# ============================================================================

# A directive is written #{Category.method(args)}. Changing these markers
# breaks every existing locale data file.
DIRECTIVE_OPEN: str = "#{"
DIRECTIVE_CLOSE: str = "}"

# Key used when a directive names a category without a method: #{Name}
DEFAULT_METHOD_KEY: str = "default"

# Terminal locale of every fallback chain.
DEFAULT_LOCALE: str = "en"

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Maximum nesting depth for regex groups and for re-entrant evaluate() calls
# made by providers. 100 levels is well past anything locale data needs.
MAX_DEPTH: int = 100

# ============================================================================
# EXPANSION LIMITS
# ============================================================================

# Maximum scan-and-substitute passes for one evaluate() call.
# Real locale data nests three or four levels deep; a template still holding
# directives after 32 passes references itself.
DEFAULT_MAX_EXPANSION_PASSES: int = 32

# Maximum characters produced by one evaluate() call.
# Stops templates like a = "#{a} #{a}" that double per pass.
DEFAULT_MAX_EXPANSION_SIZE: int = 1_000_000

# ============================================================================
# PATTERN LIMITS
# ============================================================================

# Extra repetitions drawn for *, + and {n,}.
DEFAULT_MAX_UNBOUNDED_REPEAT: int = 10

# Largest explicit {n} or {n,m} bound accepted in a generation pattern.
MAX_QUANTIFIER_BOUND: int = 10_000

# Universe for "." and negated classes: printable ASCII, space to tilde.
PRINTABLE_ASCII_FIRST: int = 0x20
PRINTABLE_ASCII_LAST: int = 0x7E

DIGIT_PLACEHOLDER: str = "#"
LETTER_PLACEHOLDER: str = "?"

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Maximum cached fallback chains (one per distinct locale string).
MAX_LOCALE_CACHE_SIZE: int = 128

# Maximum cached parsed regex patterns.
MAX_PATTERN_CACHE_SIZE: int = 512

# Maximum cached parsed templates. Locale data reuses a small set of
# templates, so hits dominate after warm-up.
MAX_TEMPLATE_CACHE_SIZE: int = 1024
