"""fakerengine - locale-aware fake data from templated expressions.

Resolves #{Category.method} directives in template strings against
per-locale data trees with fallback chains, selects values with a seedable
random source, and fills digit, letter and regex patterns.

Public API:
    FakerSession - Single-locale generation session (evaluate, resolve, numerify, ...)
    SessionConfig - Limits and policies for a session
    LocaleTree - Immutable locale data tree
    PathLocaleLoader - YAML locale data loader
    ProviderRegistry - Python callables reachable from directives
    RandomSource - Seedable random source

Exceptions:
    FakerError - Base exception class
    FakerSyntaxError - Malformed directives and regex patterns
    FakerReferenceError - Keys missing from every locale in the chain
    FakerResolutionError - Runtime resolution errors
    EmptyCandidateListError - Value list with nothing to select
    RecursionLimitExceededError - Runaway or cyclic expansion
    UnsupportedPatternConstructError - Regex outside the generation subset

Submodules:
    fakerengine.syntax - Template AST, parser and serializer
    fakerengine.patterns - numerify, letterify, bothify and regexify
    fakerengine.localedata - Trees, fallback resolution and loading
    fakerengine.diagnostics - Error types, codes and formatting
"""

# Essential Public API - Minimal exports for clean namespace
from .diagnostics import (
    EmptyCandidateListError,
    FakerError,
    FakerReferenceError,
    FakerResolutionError,
    FakerSyntaxError,
    RecursionLimitExceededError,
    UnsupportedPatternConstructError,
)
from .enums import LetterCase
from .localedata import LocaleTree, PathLocaleLoader, ValueList, load_locale_trees
from .runtime import FakerSession, ProviderRegistry, RandomSource, SessionConfig

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError  # noqa: E402
from importlib.metadata import version as _get_version  # noqa: E402

try:
    __version__ = _get_version("fakerengine")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "EmptyCandidateListError",
    "FakerError",
    "FakerReferenceError",
    "FakerResolutionError",
    "FakerSession",
    "FakerSyntaxError",
    "LetterCase",
    "LocaleTree",
    "PathLocaleLoader",
    "ProviderRegistry",
    "RandomSource",
    "RecursionLimitExceededError",
    "SessionConfig",
    "UnsupportedPatternConstructError",
    "ValueList",
    "__version__",
    "load_locale_trees",
]
