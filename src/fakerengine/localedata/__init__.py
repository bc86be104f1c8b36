"""Locale data trees, fallback resolution and loading.

Python 3.13+.
"""

from .loading import LocaleDataLoader, PathLocaleLoader, load_locale_trees
from .resolver import FallbackInfo, LocaleFallbackResolver, ResolvedLeaf
from .tree import LocaleTree, ValueList, normalize_key, split_key_path
from .types import KeyPath, LocaleCode, RawLocaleData

__all__ = [
    "FallbackInfo",
    "KeyPath",
    "LocaleCode",
    "LocaleDataLoader",
    "LocaleFallbackResolver",
    "LocaleTree",
    "PathLocaleLoader",
    "RawLocaleData",
    "ResolvedLeaf",
    "ValueList",
    "load_locale_trees",
    "normalize_key",
    "split_key_path",
]
