"""Template evaluator: recursive directive expansion.

Evaluation runs in passes. Each pass parses the current text, replaces every
directive left to right, and joins the result. When the result still holds
directives (because a substituted value contained some), another pass runs.
A template without directives takes zero passes; one whose directives all
resolve to literal text takes exactly one.

Generated text is final. Output of global providers (numerify, regexify,
...) and of /regex/ data values is never scanned again, so a drawn "#{"
stays literal. Data values and category provider output are scanned.

Directive dispatch, for #{Category.method.sub(args)}:
    1. Identifiers are normalized like locale data keys.
    2. A bare #{token} is, in order: a global provider; the key
       token under the context category; the key token.default.
    3. A provider registered for (category, method) is called with the
       session and the arguments.
    4. Otherwise the key path is resolved along the fallback chain and one
       value is selected. Arguments are an error here.
    5. A selected value written /like this/ is expanded as a regex.
    6. Bare directives inside the produced value are qualified with the
       producing category before the next pass.

Bounds:
    - ExpansionContext limits passes and intermediate text size per call.
    - GlobalDepthGuard limits evaluate() calls nested through providers.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from fakerengine.constants import DEFAULT_METHOD_KEY
from fakerengine.diagnostics import ErrorTemplate, FakerResolutionError
from fakerengine.locale_utils import FallbackChain
from fakerengine.localedata.resolver import FallbackInfo, LocaleFallbackResolver
from fakerengine.localedata.tree import format_key_path, normalize_key
from fakerengine.patterns.regex_expand import regexify
from fakerengine.runtime.config import SessionConfig
from fakerengine.runtime.expansion_context import ExpansionContext, GlobalDepthGuard
from fakerengine.runtime.provider_bridge import ProviderRegistry
from fakerengine.runtime.random_source import RandomSource
from fakerengine.runtime.selector import select
from fakerengine.syntax.ast import Directive, Template, TemplateElement, TextElement
from fakerengine.syntax.parser import contains_directive, parse_template
from fakerengine.syntax.serializer import serialize

if TYPE_CHECKING:
    from fakerengine.localedata.types import KeyPath
    from fakerengine.runtime.session import FakerSession

__all__ = ["EvaluationResult", "ExpressionEvaluator", "is_slash_regex"]

logger = logging.getLogger(__name__)


def is_slash_regex(value: str) -> bool:
    """True for data values written as /pattern/.

    Example:
        >>> is_slash_regex("/[0-9]{5}/")
        True
        >>> is_slash_regex("/")
        False
    """
    return len(value) >= 2 and value.startswith("/") and value.endswith("/")


@dataclass(frozen=True, slots=True)
class EvaluationResult:
    """Output of one evaluate() call.

    Attributes:
        value: Fully expanded text
        passes: Scan-and-substitute passes it took
    """

    value: str
    passes: int


@dataclass(frozen=True, slots=True)
class _Piece:
    """Run of intermediate text.

    Final pieces came from a generator (a global provider or a /regex/
    value) and are never scanned for directives again.
    """

    text: str
    final: bool = False

    @property
    def pending(self) -> bool:
        return not self.final and contains_directive(self.text)


def _append(pieces: list[_Piece], piece: _Piece) -> None:
    # Neighbouring runs of the same kind are joined so that live text is
    # scanned as one string, as it would be without generator output.
    if not piece.text:
        return
    if pieces and pieces[-1].final == piece.final:
        pieces[-1] = _Piece(pieces[-1].text + piece.text, piece.final)
    else:
        pieces.append(piece)


class ExpressionEvaluator:
    """Expands templates against locale data, providers and a random source.

    One evaluator belongs to one FakerSession and shares its random source.

    Thread Safety:
        NOT thread-safe (draws from a mutable random source).
    """

    __slots__ = ("_config", "_on_fallback", "_random", "_registry", "_resolver", "_session")

    def __init__(
        self,
        resolver: LocaleFallbackResolver,
        registry: ProviderRegistry,
        random_source: RandomSource,
        session: FakerSession,
        *,
        config: SessionConfig | None = None,
        on_fallback: Callable[[FallbackInfo], None] | None = None,
    ) -> None:
        """Initialize evaluator.

        Args:
            resolver: Fallback resolver over the loaded locale trees
            registry: Providers callable from directives
            random_source: Source for every random draw
            session: Passed as first argument to providers
            config: Limits and policies (default: SessionConfig())
            on_fallback: Called when a key is served by a fallback locale
        """
        self._resolver = resolver
        self._registry = registry
        self._random = random_source
        self._session = session
        self._config = config if config is not None else SessionConfig()
        self._on_fallback = on_fallback

    def evaluate(self, template: str, chain: FallbackChain, category: str | None = None) -> str:
        """Expand every directive in template.

        Text produced by global providers and /regex/ values is literal:
        a "#{" it happens to contain is not expanded.

        Args:
            template: Text with #{...} directives
            chain: Fallback chain for data lookups
            category: Context category for bare directives

        Returns:
            Text with every directive expanded

        Raises:
            FakerSyntaxError: If a directive or a regex is malformed
            FakerReferenceError: If a key is not defined anywhere in the chain
            FakerResolutionError: On provider failures and argument misuse
            EmptyCandidateListError: If a resolved list has no entries
            RecursionLimitExceededError: If expansion does not terminate in bounds
            UnsupportedPatternConstructError: If a regex uses unsupported syntax
        """
        return self.expand(template, chain, category).value

    def expand(
        self, template: str, chain: FallbackChain, category: str | None = None
    ) -> EvaluationResult:
        """Like evaluate(), also reporting the number of passes."""
        return self._expand([_Piece(template)], template, chain, category)

    def expand_key(self, key_path: KeyPath, chain: FallbackChain) -> EvaluationResult:
        """Select a value for key_path and expand it under the key's category."""
        category = key_path[0]
        first = self._data_piece(key_path, chain, category)
        return self._expand([first], format_key_path(key_path), chain, category)

    def _expand(
        self,
        pieces: list[_Piece],
        source: str,
        chain: FallbackChain,
        category: str | None,
    ) -> EvaluationResult:
        with GlobalDepthGuard(self._config.max_nesting_depth):
            context = ExpansionContext(
                chain=chain,
                category=normalize_key(category) if category else None,
                max_passes=self._config.max_expansion_passes,
                max_expansion_size=self._config.max_expansion_size,
            )
            while any(piece.pending for piece in pieces):
                context.begin_pass(source)
                pieces = self._run_pass(pieces, context)
                text = "".join(piece.text for piece in pieces)
                context.track_expansion(text)
                logger.debug("Expansion pass %d produced %d characters", context.passes, len(text))
            return EvaluationResult(
                value="".join(piece.text for piece in pieces), passes=context.passes
            )

    def _run_pass(self, pieces: list[_Piece], context: ExpansionContext) -> list[_Piece]:
        output: list[_Piece] = []
        for piece in pieces:
            if not piece.pending:
                _append(output, piece)
                continue
            for element in parse_template(piece.text).elements:
                if TextElement.guard(element):
                    _append(output, _Piece(element.value))
                else:
                    _append(output, self._resolve_directive(element, context))
        return output

    def _resolve_directive(self, directive: Directive, context: ExpansionContext) -> _Piece:
        path: KeyPath = tuple(normalize_key(segment) for segment in directive.path)

        if directive.is_bare:
            provider = self._registry.global_provider(path[0])
            if provider is not None:
                value = self._registry.call(provider, self._session, directive.arguments)
                return _Piece(value, final=True)
            if context.category is not None:
                path = (context.category, path[0])
            else:
                path = (path[0], DEFAULT_METHOD_KEY)

        category = path[0]
        provider = self._registry.lookup(category, path[1:])
        if provider is not None:
            value = self._registry.call(provider, self._session, directive.arguments)
            return _Piece(self._qualify(value, category))

        if directive.arguments:
            raise FakerResolutionError(
                ErrorTemplate.arguments_without_provider(format_key_path(path))
            )
        return self._data_piece(path, context.chain, category)

    def _data_piece(self, key_path: KeyPath, chain: FallbackChain, category: str) -> _Piece:
        value = self._select(key_path, chain)
        if self._config.expand_slash_regex and is_slash_regex(value):
            return _Piece(self._regexify(value), final=True)
        return _Piece(self._qualify(value, category))

    def select_value(self, key_path: KeyPath, chain: FallbackChain) -> str:
        """Resolve key_path along chain and select one value.

        A value written /like this/ is expanded as a regex when the config
        allows it. Directives inside the value are left for the caller.

        Raises:
            FakerReferenceError: If no locale in the chain defines the key
            EmptyCandidateListError: If the list has no entries
        """
        value = self._select(key_path, chain)
        if self._config.expand_slash_regex and is_slash_regex(value):
            return self._regexify(value)
        return value

    def _select(self, key_path: KeyPath, chain: FallbackChain) -> str:
        found = self._resolver.require(chain, key_path)
        dotted = format_key_path(key_path)
        if self._on_fallback is not None and found.locale != chain.primary:
            self._on_fallback(
                FallbackInfo(
                    requested_locale=chain.primary,
                    resolved_locale=found.locale,
                    key_path=dotted,
                )
            )
        return select(found.values, self._random, key_path=dotted)

    def _regexify(self, value: str) -> str:
        return regexify(
            value[1:-1],
            self._random,
            max_unbounded_repeat=self._config.max_unbounded_repeat,
            max_depth=self._config.max_nesting_depth,
        )

    def qualify(self, value: str, category: str) -> str:
        """Prefix bare directives in value with category.

        Bare names of global providers stay bare.

        Example:
            "#{first_name} #{last_name}" under category "name" becomes
            "#{name.first_name} #{name.last_name}".
        """
        return self._qualify(value, normalize_key(category))

    def _qualify(self, value: str, category: str) -> str:
        if not contains_directive(value):
            return value
        template = parse_template(value)
        changed = False
        elements: list[TemplateElement] = []
        for element in template.elements:
            if (
                Directive.guard(element)
                and element.is_bare
                and self._registry.global_provider(element.path[0]) is None
            ):
                element = Directive(path=(category, *element.path), arguments=element.arguments)
                changed = True
            elements.append(element)
        return serialize(Template(tuple(elements))) if changed else value
