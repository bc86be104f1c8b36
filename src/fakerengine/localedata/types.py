"""Type aliases for the locale data domain.

Provides semantic type aliases used throughout the localedata package
and by user code when annotating loader implementations.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping

__all__ = [
    "KeyPath",
    "LocaleCode",
    "RawLocaleData",
]

type LocaleCode = str
"""Locale code (e.g., 'en', 'pt_BR', 'zh-Hans-CN')."""

type KeyPath = tuple[str, ...]
"""Normalized key segments (e.g., ('address', 'streetname'))."""

type RawLocaleData = Mapping[str, object]
"""Parsed locale definition file contents before tree construction."""
