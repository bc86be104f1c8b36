"""Locale utilities: identifier normalization and fallback chains.

Centralizes locale format normalization used throughout the codebase.
Provides canonical locale handling to ensure consistent cache keys and lookups:
"pt-BR", "pt_br", "Pt_br" and "pT_Br" all become "pt_BR".

Python 3.13+. External dependency: Babel (locale identifier parsing).
"""

from __future__ import annotations

import functools
import os
import re
from collections.abc import Iterator
from dataclasses import dataclass

from babel.core import parse_locale

from fakerengine.constants import DEFAULT_LOCALE, MAX_LOCALE_CACHE_SIZE

__all__ = [
    "FallbackChain",
    "build_fallback_chain",
    "clear_locale_cache",
    "get_system_locale",
    "locale_segments",
    "normalize_locale",
]

_SEPARATORS = re.compile(r"[-_]")


@dataclass(frozen=True, slots=True)
class FallbackChain:
    """Ordered locales searched for a key, most specific first.

    Always ends with the default locale. Built by build_fallback_chain();
    equal inputs produce equal (and cached, identical) chains.

    Attributes:
        requested: Locale code as the caller passed it
        locales: Normalized locale codes in search order
    """

    requested: str
    locales: tuple[str, ...]

    def __post_init__(self) -> None:
        """Validate the chain is non-empty."""
        if not self.locales:
            msg = "FallbackChain requires at least one locale"
            raise ValueError(msg)

    @property
    def primary(self) -> str:
        """Most specific locale (head of the chain)."""
        return self.locales[0]

    @property
    def default(self) -> str:
        """Terminal default locale."""
        return self.locales[-1]

    def __iter__(self) -> Iterator[str]:
        return iter(self.locales)

    def __len__(self) -> int:
        return len(self.locales)

    def __contains__(self, locale: object) -> bool:
        return locale in self.locales


def locale_segments(locale_code: str) -> tuple[str, ...]:
    """Split a locale code into canonically cased segments.

    Babel classifies the longest prefix it understands (language, script,
    territory, variant). Trailing segments Babel rejects, such as the "x2"
    in "pt_BR_x2", are kept upper-cased as extra variants so that the
    fallback chain still reaches "pt_BR" and "pt".

    Args:
        locale_code: BCP-47 or POSIX locale code; an encoding suffix
            (".UTF-8") or modifier ("@euro") is ignored

    Returns:
        Canonical segments, e.g. ("zh", "Hans", "CN")

    Raises:
        ValueError: If the code is empty, has empty segments, contains
            characters other than letters, digits, "-" and "_", or does not
            start with an alphabetic language subtag
    """
    code = locale_code.strip().split(".", 1)[0].split("@", 1)[0]
    if not code:
        msg = "Locale code cannot be empty"
        raise ValueError(msg)

    raw = _SEPARATORS.split(code)
    if any(not part.isascii() or not part.isalnum() for part in raw):
        msg = f"Invalid locale code format: '{locale_code}'"
        raise ValueError(msg)

    for cut in range(len(raw), 0, -1):
        try:
            parsed = parse_locale("_".join(raw[:cut]))
        except ValueError:
            continue
        language, territory, script, variant = parsed[:4]
        head = [part for part in (language, script, territory, variant) if part]
        return (*head, *(part.upper() for part in raw[cut:]))

    msg = f"Invalid locale code format: '{locale_code}'"
    raise ValueError(msg)


def normalize_locale(locale_code: str) -> str:
    """Convert a locale code to its canonical POSIX form.

    This is the canonical normalization function. All locale handling
    normalizes at the system boundary (entry point) using this function, then
    uses the normalized form for cache keys and lookups.

    Args:
        locale_code: BCP-47 locale code (e.g., "en-US", "pt-br")

    Returns:
        POSIX-formatted locale code (e.g., "en_US", "pt_BR")

    Example:
        >>> normalize_locale("pt-br")
        'pt_BR'
        >>> normalize_locale("ZH-hans-cn")
        'zh_Hans_CN'
        >>> normalize_locale("en")
        'en'
    """
    return "_".join(locale_segments(locale_code))


@functools.lru_cache(maxsize=MAX_LOCALE_CACHE_SIZE)
def build_fallback_chain(
    locale_code: str, default_locale: str = DEFAULT_LOCALE
) -> FallbackChain:
    """Compute the ordered fallback chain for a locale.

    Every prefix of the normalized segments is searched, longest first,
    followed by the default locale. Duplicates are removed while keeping
    order, so a request for the default locale yields a one-element chain.

    Thread-safe via lru_cache internal locking.

    Args:
        locale_code: Requested locale code
        default_locale: Terminal locale of the chain

    Returns:
        FallbackChain for the request

    Raises:
        ValueError: If either locale code is malformed

    Example:
        >>> build_fallback_chain("pt-BR").locales
        ('pt_BR', 'pt', 'en')
        >>> build_fallback_chain("en").locales
        ('en',)
    """
    segments = locale_segments(locale_code)
    candidates = ["_".join(segments[:cut]) for cut in range(len(segments), 0, -1)]
    candidates.append(normalize_locale(default_locale))
    return FallbackChain(
        requested=locale_code,
        locales=tuple(dict.fromkeys(candidates)),
    )


def clear_locale_cache() -> None:
    """Clear the cached fallback chains."""
    build_fallback_chain.cache_clear()


def get_system_locale(*, raise_on_failure: bool = False) -> str:
    """Detect system locale from OS and environment variables.

    Detection order:
    1. Python locale.getlocale() (OS-level locale)
    2. LC_ALL environment variable (overrides all)
    3. LC_MESSAGES environment variable (for message catalogs)
    4. LANG environment variable (default locale)

    Filters out "C" and "POSIX" pseudo-locales and normalizes the result.

    Args:
        raise_on_failure: If True, raise RuntimeError when locale cannot be
            determined. If False (default), return DEFAULT_LOCALE.

    Returns:
        Detected locale code in canonical POSIX format.

    Raises:
        RuntimeError: If raise_on_failure is True and locale cannot be determined.
    """
    import locale as locale_module  # noqa: PLC0415

    try:
        system_locale, _ = locale_module.getlocale()
        if system_locale and system_locale not in ("C", "POSIX"):
            return normalize_locale(system_locale)
    except ValueError:
        pass

    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(var)
        if value and value not in ("C", "POSIX", ""):
            try:
                return normalize_locale(value)
            except ValueError:
                continue

    if raise_on_failure:
        msg = (
            "Could not determine system locale. "
            "Set LC_ALL, LC_MESSAGES, or LANG environment variable."
        )
        raise RuntimeError(msg)

    return DEFAULT_LOCALE
