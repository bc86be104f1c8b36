"""Provider bridge between directives and Python callables.

A provider is a Python function that produces a directive's value in code
instead of reading it from locale data. Category logic that cannot be
expressed as a list of strings (check digits, computed dates, formatted
numbers) hooks in here.

Calling convention:
    func(session, *arguments) -> ProviderValue

    where session is the FakerSession evaluating the directive and
    arguments are the directive's literal arguments, in order and
    unconverted.

Providers are registered either globally (callable as #{name(...)}) or for
a (category, method) pair (callable as #{Category.method(...)}). Names are
matched with the same case-insensitive normalization as locale data keys.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from fakerengine.diagnostics import ErrorTemplate, FakerReferenceError, FakerResolutionError
from fakerengine.localedata.tree import normalize_key

if TYPE_CHECKING:
    from fakerengine.runtime.session import FakerSession
    from fakerengine.syntax.ast import ArgumentValue

__all__ = ["FakerProvider", "ProviderRegistry", "ProviderSignature", "ProviderValue"]

logger = logging.getLogger(__name__)

# Values a provider may return. Non-string results are converted to text
# before substitution; None becomes "".
type ProviderValue = str | int | float | bool | None


class FakerProvider(Protocol):
    """Protocol for provider callables."""

    def __call__(self, session: FakerSession, /, *args: ArgumentValue) -> ProviderValue:
        ...  # pragma: no cover  # Protocol stub - not executable


@dataclass(frozen=True, slots=True)
class ProviderSignature:
    """Registered provider.

    Attributes:
        name: Normalized lookup name ("numerify" or "address.zipcode")
        category: Normalized category, None for global providers
        method: Normalized method key path ("zipcode", "street.suffix")
        callable: The Python function
    """

    name: str
    category: str | None
    method: str
    callable: Callable[..., ProviderValue]

    @property
    def is_global(self) -> bool:
        """True for providers callable without a category."""
        return self.category is None


def _normalize_method(method: str) -> str:
    segments = method.split(".")
    if any(not s for s in segments):
        msg = f"Invalid provider method name: '{method}'"
        raise ValueError(msg)
    return ".".join(normalize_key(s) for s in segments)


def provider_text(value: ProviderValue) -> str:
    """Convert a provider result to substitution text.

    Raises:
        TypeError: If value is not a str, int, float, bool or None
    """
    match value:
        case None:
            return ""
        case bool():
            return "true" if value else "false"
        case str() | int() | float():
            return str(value)
        case _:
            msg = f"Provider returned unsupported type {type(value).__name__}"
            raise TypeError(msg)


class ProviderRegistry:
    """Manages provider registration and calling.

    Supports dict-like introspection:
        - __iter__: Iterate over provider names
        - __len__: Count registered providers
        - __contains__: Check if a provider exists (supports 'in' operator)

    Example:
        >>> registry = ProviderRegistry()
        >>> registry.register(lambda session: "90210", category="Address", method="zipCode")
        >>> "address.zipcode" in registry
        True
    """

    __slots__ = ("_providers",)

    def __init__(self) -> None:
        """Initialize empty provider registry."""
        self._providers: dict[str, ProviderSignature] = {}

    def register(
        self,
        func: Callable[..., ProviderValue],
        *,
        category: str | None = None,
        method: str | None = None,
    ) -> ProviderSignature:
        """Register a provider.

        Args:
            func: Provider callable, invoked as func(session, *args)
            category: Category the provider belongs to; None registers a
                global provider (keyword-only)
            method: Method key path (default: func.__name__) (keyword-only)

        Returns:
            The stored ProviderSignature. Registering the same name again
            replaces the earlier provider.

        Raises:
            ValueError: If no usable method name can be derived
        """
        raw_method = method if method is not None else getattr(func, "__name__", "")
        if not raw_method or raw_method == "<lambda>":
            msg = "Provider method name is required for unnamed callables"
            raise ValueError(msg)
        method_key = _normalize_method(raw_method)
        category_key = normalize_key(category) if category is not None else None
        if category_key == "":
            msg = "Provider category must not be empty"
            raise ValueError(msg)
        if category_key is None and "." in method_key:
            msg = f"Global provider name must be a single identifier: '{raw_method}'"
            raise ValueError(msg)

        name = method_key if category_key is None else f"{category_key}.{method_key}"
        provider = ProviderSignature(
            name=name, category=category_key, method=method_key, callable=func
        )
        self._providers[name] = provider
        logger.debug("Registered provider %s", name)
        return provider

    def global_provider(self, name: str) -> ProviderSignature | None:
        """Global provider registered under name, if any."""
        provider = self._providers.get(normalize_key(name))
        return provider if provider is not None and provider.is_global else None

    def lookup(self, category: str, method: Sequence[str]) -> ProviderSignature | None:
        """Provider registered for (category, method), if any.

        Args:
            category: Category identifier (normalized here)
            method: Method key segments (normalized here)
        """
        name = ".".join(normalize_key(s) for s in (category, *method))
        provider = self._providers.get(name)
        return provider if provider is not None and not provider.is_global else None

    def call(
        self,
        provider: ProviderSignature | str,
        session: FakerSession,
        arguments: Sequence[ArgumentValue] = (),
    ) -> str:
        """Invoke a provider and convert its result to text.

        Args:
            provider: ProviderSignature or registered name
            session: Session passed as the first argument
            arguments: Directive arguments, passed positionally

        Returns:
            Substitution text

        Raises:
            FakerReferenceError: If provider is a name with no registration
            FakerResolutionError: If the provider raises TypeError or
                ValueError, or returns an unsupported type
        """
        if isinstance(provider, str):
            found = self._providers.get(provider)
            if found is None:
                raise FakerReferenceError(ErrorTemplate.provider_not_found(provider))
            provider = found

        # Only TypeError and ValueError are treated as argument problems.
        # Anything else is a bug in the provider and propagates unchanged.
        try:
            return provider_text(provider.callable(session, *arguments))
        except (TypeError, ValueError) as e:
            raise FakerResolutionError(
                ErrorTemplate.provider_failed(provider.name, str(e))
            ) from e

    def __iter__(self) -> Iterator[str]:
        """Iterate over registered provider names."""
        return iter(self._providers)

    def __len__(self) -> int:
        """Count of registered providers."""
        return len(self._providers)

    def __contains__(self, name: str) -> bool:
        """Check if a provider name is registered ("numerify", "address.zipcode")."""
        return name in self._providers

    def __repr__(self) -> str:
        return f"ProviderRegistry(providers={len(self._providers)})"

    def copy(self) -> ProviderRegistry:
        """Create a shallow copy; later registrations do not affect the original."""
        new_registry = ProviderRegistry()
        new_registry._providers = self._providers.copy()
        return new_registry
