"""FakerSession - main API for fake data generation.

A session binds a locale (and its fallback chain), a set of locale trees, a
provider registry and one random source. Everything it produces draws from
that random source, so two sessions built from the same seed, data and
call sequence return the same values.

Python 3.13+. External dependency: Babel (via locale_utils).
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence

from fakerengine.diagnostics import EmptyCandidateListError, ErrorTemplate
from fakerengine.enums import LetterCase
from fakerengine.locale_utils import FallbackChain, get_system_locale
from fakerengine.localedata.loading import LocaleDataLoader, load_locale_trees
from fakerengine.localedata.resolver import FallbackInfo, LocaleFallbackResolver
from fakerengine.localedata.tree import LocaleTree, ValueList, split_key_path
from fakerengine.localedata.types import LocaleCode
from fakerengine.patterns.fill import bothify, letterify, numerify
from fakerengine.patterns.regex_expand import regexify
from fakerengine.runtime.builtins import create_default_registry
from fakerengine.runtime.config import SessionConfig
from fakerengine.runtime.evaluator import EvaluationResult, ExpressionEvaluator
from fakerengine.runtime.provider_bridge import ProviderRegistry, ProviderValue
from fakerengine.runtime.random_source import RandomSource

__all__ = ["FakerSession"]

logger = logging.getLogger(__name__)


class FakerSession:
    """Fake data session for one locale.

    Thread Safety:
        NOT thread-safe. The random source advances on every draw; create
        one session per thread. Locale trees are immutable and may be shared
        between sessions freely.

    Example:
        >>> trees = {"en": LocaleTree.from_mapping("en", {
        ...     "name": {"first_name": ["Ada", "Alan"], "last_name": ["Lovelace", "Turing"],
        ...              "name": ["#{first_name} #{last_name}"]}})}
        >>> session = FakerSession("en", trees, seed=42)
        >>> session.evaluate("#{Name.name}").split()[0] in {"Ada", "Alan"}
        True
    """

    __slots__ = (
        "_chain",
        "_config",
        "_evaluator",
        "_random",
        "_registry",
        "_resolver",
    )

    def __init__(
        self,
        locale: LocaleCode,
        trees: Mapping[LocaleCode, LocaleTree] | LocaleFallbackResolver,
        *,
        seed: int | None = None,
        config: SessionConfig | None = None,
        providers: ProviderRegistry | None = None,
        on_fallback: Callable[[FallbackInfo], None] | None = None,
    ) -> None:
        """Initialize session.

        Args:
            locale: Requested locale ("pt-BR", "en_US", ...)
            trees: Locale trees keyed by locale code, or a prepared resolver
            seed: Integer seed for reproducible output (default: OS entropy)
            config: Limits and policies (default: SessionConfig())
            providers: Provider registry (default: built-in global providers).
                The session registers into its own copy.
            on_fallback: Called with FallbackInfo whenever a key is served
                by a locale other than the requested one

        Raises:
            ValueError: If the locale code is invalid
            TypeError: If seed is not an int
        """
        self._config = config if config is not None else SessionConfig()
        if isinstance(trees, LocaleFallbackResolver):
            self._resolver = trees
        else:
            self._resolver = LocaleFallbackResolver(
                trees, default_locale=self._config.default_locale
            )
        self._chain = self._resolver.chain_for(locale)
        self._random = RandomSource(seed)
        self._registry = (
            providers.copy() if providers is not None else create_default_registry()
        )
        self._evaluator = ExpressionEvaluator(
            self._resolver,
            self._registry,
            self._random,
            self,
            config=self._config,
            on_fallback=on_fallback,
        )

        missing = [loc for loc in self._chain if self._resolver.tree(loc) is None]
        if missing:
            logger.debug("No locale data for %s in chain %s", missing, self._chain.locales)
        logger.info(
            "FakerSession initialized for locale %s (chain: %s, seeded: %s)",
            self._chain.primary,
            " -> ".join(self._chain.locales),
            seed is not None,
        )

    @classmethod
    def from_loader(
        cls,
        locale: LocaleCode,
        loader: LocaleDataLoader,
        *,
        seed: int | None = None,
        config: SessionConfig | None = None,
        providers: ProviderRegistry | None = None,
        on_fallback: Callable[[FallbackInfo], None] | None = None,
    ) -> FakerSession:
        """Create a session, loading every locale of the fallback chain.

        Locales the loader has no data for are skipped with a warning.

        Example:
            >>> loader = PathLocaleLoader("locales/{locale}.yml")
            >>> session = FakerSession.from_loader("pt-BR", loader, seed=1)
        """
        effective = config if config is not None else SessionConfig()
        probe = LocaleFallbackResolver({}, default_locale=effective.default_locale)
        trees = load_locale_trees(loader, probe.chain_for(locale))
        return cls(
            locale,
            trees,
            seed=seed,
            config=effective,
            providers=providers,
            on_fallback=on_fallback,
        )

    @classmethod
    def for_system_locale(
        cls,
        trees: Mapping[LocaleCode, LocaleTree] | LocaleFallbackResolver,
        *,
        seed: int | None = None,
        config: SessionConfig | None = None,
        providers: ProviderRegistry | None = None,
    ) -> FakerSession:
        """Create a session for the operating system locale.

        Detects the locale from locale.getlocale(), LC_ALL, LC_MESSAGES or
        LANG; falls back to the configured default locale when none is set.
        """
        effective = config if config is not None else SessionConfig()
        try:
            system_locale = get_system_locale(raise_on_failure=True)
        except RuntimeError:
            system_locale = effective.default_locale
        return cls(system_locale, trees, seed=seed, config=effective, providers=providers)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def locale(self) -> LocaleCode:
        """Normalized requested locale (head of the fallback chain)."""
        return self._chain.primary

    @property
    def chain(self) -> FallbackChain:
        """Fallback chain used for every lookup."""
        return self._chain

    @property
    def config(self) -> SessionConfig:
        """Session configuration."""
        return self._config

    @property
    def random_source(self) -> RandomSource:
        """The session's random source."""
        return self._random

    @property
    def seed(self) -> int | None:
        """Seed the session was created with."""
        return self._random.seed

    @property
    def providers(self) -> ProviderRegistry:
        """Provider registry owned by this session."""
        return self._registry

    @property
    def resolver(self) -> LocaleFallbackResolver:
        """Fallback resolver over the session's locale trees."""
        return self._resolver

    # ------------------------------------------------------------------
    # Expression evaluation
    # ------------------------------------------------------------------

    def evaluate(self, template: str, category: str | None = None) -> str:
        """Expand every #{...} directive in template.

        Args:
            template: Text with directives, e.g. "#{Address.streetName} #{Address.buildingNumber}"
            category: Category that bare directives (#{first_name}) refer to

        Returns:
            Fully expanded text

        Raises:
            FakerError: Any subclass; see ExpressionEvaluator.evaluate
        """
        return self._evaluator.evaluate(template, self._chain, category)

    def expand(self, template: str, category: str | None = None) -> EvaluationResult:
        """Like evaluate(), also reporting the number of expansion passes."""
        return self._evaluator.expand(template, self._chain, category)

    def values(self, key_path: str | Sequence[str]) -> ValueList:
        """Candidate list for a key, from the first locale in the chain defining it.

        Raises:
            FakerReferenceError: If no locale in the chain defines the key
        """
        return self._resolver.require(self._chain, split_key_path(key_path)).values

    def fetch(self, key_path: str | Sequence[str]) -> str:
        """Select one value for a key without expanding its directives.

        Raises:
            FakerReferenceError: If no locale in the chain defines the key
            EmptyCandidateListError: If the list has no entries
        """
        return self._evaluator.select_value(split_key_path(key_path), self._chain)

    def resolve(self, key_path: str | Sequence[str]) -> str:
        """Select one value for a key and expand it fully.

        Bare directives in the value refer to the key's category.

        Example:
            >>> session.resolve("Address.streetAddress")
            '4821 Maple Street'
        """
        return self._evaluator.expand_key(split_key_path(key_path), self._chain).value

    # ------------------------------------------------------------------
    # Pattern generators
    # ------------------------------------------------------------------

    def numerify(self, template: str) -> str:
        """Replace every "#" with a random digit."""
        return numerify(template, self._random)

    def letterify(self, template: str, letter_case: LetterCase | str | None = None) -> str:
        """Replace every "?" with a random letter (session case policy by default)."""
        case = letter_case if letter_case is not None else self._config.letter_case
        return letterify(template, self._random, case)

    def bothify(self, template: str, letter_case: LetterCase | str | None = None) -> str:
        """Replace "#" with digits and "?" with letters."""
        case = letter_case if letter_case is not None else self._config.letter_case
        return bothify(template, self._random, case)

    def regexify(self, pattern: str) -> str:
        """Generate a string matching pattern."""
        return regexify(
            pattern,
            self._random,
            max_unbounded_repeat=self._config.max_unbounded_repeat,
            max_depth=self._config.max_nesting_depth,
        )

    def options(self, *choices: str) -> str:
        """Pick one of choices uniformly.

        Raises:
            EmptyCandidateListError: If no choices are given
        """
        if not choices:
            raise EmptyCandidateListError(ErrorTemplate.empty_candidate_list(None))
        return self._random.choice(choices)

    # ------------------------------------------------------------------
    # Providers
    # ------------------------------------------------------------------

    def add_provider(
        self,
        func: Callable[..., ProviderValue],
        *,
        category: str | None = None,
        method: str | None = None,
    ) -> None:
        """Register a provider on this session only.

        Example:
            >>> session.add_provider(lambda s: s.numerify("#####"),
            ...                      category="Address", method="zipCode")
            >>> session.evaluate("#{Address.zipCode}")
            '90210'
        """
        self._registry.register(func, category=category, method=method)

    def __repr__(self) -> str:
        return f"FakerSession(locale={self.locale!r}, seed={self.seed!r})"
