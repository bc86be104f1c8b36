"""Locale fallback resolution.

Resolves a key path against the locale trees named by a fallback chain.
The first locale in the chain that defines the key *as a leaf* wins; nothing
is merged across locales (strict shadow semantics). Locales in the chain
without a loaded tree are skipped.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass

from fakerengine.constants import DEFAULT_LOCALE
from fakerengine.diagnostics import ErrorTemplate, FakerReferenceError
from fakerengine.locale_utils import FallbackChain, build_fallback_chain, normalize_locale
from fakerengine.localedata.tree import LocaleTree, ValueList, format_key_path
from fakerengine.localedata.types import KeyPath, LocaleCode

__all__ = ["FallbackInfo", "LocaleFallbackResolver", "ResolvedLeaf"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ResolvedLeaf:
    """A leaf found during resolution and the locale that supplied it.

    Attributes:
        locale: Locale whose tree defined the key
        values: The candidate list
    """

    locale: LocaleCode
    values: ValueList


@dataclass(frozen=True, slots=True)
class FallbackInfo:
    """Record of a key resolved from a fallback locale.

    Passed to the on_fallback callback of FakerSession when the primary
    locale of the chain lacked the key.

    Attributes:
        requested_locale: Head of the fallback chain
        resolved_locale: Locale that actually supplied the key
        key_path: Normalized dotted key path
    """

    requested_locale: LocaleCode
    resolved_locale: LocaleCode
    key_path: str


class LocaleFallbackResolver:
    """Looks up key paths across a fallback chain of locale trees.

    Thread Safety:
        Holds only immutable trees; safe to share across threads.

    Example:
        >>> resolver = LocaleFallbackResolver({"en": en_tree, "pt": pt_tree})
        >>> chain = resolver.chain_for("pt-BR")
        >>> chain.locales
        ('pt_BR', 'pt', 'en')
        >>> resolver.resolve(chain, ("address", "cityname"))
        ValueList(values=(...), weights=None)
    """

    __slots__ = ("_default_locale", "_trees")

    def __init__(
        self,
        trees: Mapping[LocaleCode, LocaleTree],
        *,
        default_locale: LocaleCode = DEFAULT_LOCALE,
    ) -> None:
        """Initialize resolver.

        Args:
            trees: Locale code to tree; codes are normalized
            default_locale: Terminal locale of every chain (keyword-only)

        Raises:
            ValueError: If two locale codes normalize to the same locale
        """
        normalized: dict[LocaleCode, LocaleTree] = {}
        for code, tree in trees.items():
            locale = normalize_locale(code)
            if locale in normalized:
                msg = f"Locale '{code}' given twice (normalized to '{locale}')"
                raise ValueError(msg)
            normalized[locale] = tree
        self._trees = normalized
        self._default_locale = normalize_locale(default_locale)

    @property
    def default_locale(self) -> LocaleCode:
        """Terminal locale of every chain built by this resolver."""
        return self._default_locale

    @property
    def locales(self) -> tuple[LocaleCode, ...]:
        """Locales with a loaded tree."""
        return tuple(self._trees)

    def tree(self, locale: LocaleCode) -> LocaleTree | None:
        """Return the tree loaded for a locale, if any."""
        return self._trees.get(normalize_locale(locale))

    def chain_for(self, locale: LocaleCode) -> FallbackChain:
        """Build (or fetch the cached) fallback chain for a locale."""
        return build_fallback_chain(locale, self._default_locale)

    def _trees_in(self, chain: FallbackChain) -> Iterator[tuple[LocaleCode, LocaleTree]]:
        for locale in chain:
            tree = self._trees.get(locale)
            if tree is not None:
                yield locale, tree

    def find(self, chain: FallbackChain, key_path: KeyPath) -> ResolvedLeaf | None:
        """Find the first leaf for key_path along the chain.

        Args:
            chain: Locales to search, most specific first
            key_path: Normalized key segments

        Returns:
            ResolvedLeaf, or None when no locale defines the key as a leaf
        """
        for locale, tree in self._trees_in(chain):
            values = tree.leaf(key_path)
            if values is not None:
                if locale != chain.primary:
                    logger.debug(
                        "Key '%s' resolved from fallback locale %s (requested %s)",
                        format_key_path(key_path),
                        locale,
                        chain.primary,
                    )
                return ResolvedLeaf(locale=locale, values=values)
        return None

    def resolve(self, chain: FallbackChain, key_path: KeyPath) -> ValueList | None:
        """Return the ValueList for key_path, or None if not found (NotFound)."""
        found = self.find(chain, key_path)
        return found.values if found is not None else None

    def has_subtree(self, chain: FallbackChain, key_path: KeyPath) -> bool:
        """True if some locale in the chain defines key_path as a nested group."""
        return any(
            isinstance(tree.lookup(key_path), LocaleTree)
            for _, tree in self._trees_in(chain)
        )

    def require(self, chain: FallbackChain, key_path: KeyPath) -> ResolvedLeaf:
        """Find a leaf or raise.

        Raises:
            FakerReferenceError: If no locale in the chain defines the key as
                a leaf
        """
        found = self.find(chain, key_path)
        if found is not None:
            return found
        dotted = format_key_path(key_path)
        if self.has_subtree(chain, key_path):
            raise FakerReferenceError(ErrorTemplate.key_is_not_leaf(dotted, chain.locales))
        raise FakerReferenceError(ErrorTemplate.key_not_found(dotted, chain.locales))

    def __repr__(self) -> str:
        return (
            f"LocaleFallbackResolver(locales={list(self._trees)}, "
            f"default_locale={self._default_locale!r})"
        )
