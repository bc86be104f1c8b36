"""Expansion context and global depth guard for template evaluation.

Provides the state carried through one top-level evaluate() call, and a
global depth guard that stops providers from recursing without bound by
calling back into the session.

Architecture:
    - GlobalDepthGuard: contextvars-based depth tracking across nested
      evaluate() calls
    - ExpansionContext: explicit per-call state (chain, category, passes,
      character budget)

Thread Safety:
    ExpansionContext is created per call for full isolation.
    GlobalDepthGuard uses contextvars for thread/async-safe state.

Python 3.13+.
"""

from __future__ import annotations

from contextvars import ContextVar, Token
from dataclasses import dataclass, field

from fakerengine.constants import (
    DEFAULT_MAX_EXPANSION_PASSES,
    DEFAULT_MAX_EXPANSION_SIZE,
    MAX_DEPTH,
)
from fakerengine.core.depth_guard import depth_clamp
from fakerengine.diagnostics import ErrorTemplate, RecursionLimitExceededError
from fakerengine.locale_utils import FallbackChain

__all__ = ["ExpansionContext", "GlobalDepthGuard", "current_evaluation_depth"]

# A provider receives the session and may call session.evaluate() itself,
# which builds a fresh ExpansionContext. The per-call pass limit cannot see
# that nesting, so depth is tracked across calls in a ContextVar. Each thread
# and async task keeps its own count.
_global_evaluation_depth: ContextVar[int] = ContextVar("faker_evaluation_depth", default=0)


def current_evaluation_depth() -> int:
    """Number of evaluate() calls active in the current context."""
    return _global_evaluation_depth.get()


class GlobalDepthGuard:
    """Context manager tracking evaluate() nesting across calls.

    Usage:
        with GlobalDepthGuard(max_depth=100):
            result = evaluator.evaluate(template, context)
    """

    __slots__ = ("_max_depth", "_token")

    def __init__(self, max_depth: int = MAX_DEPTH) -> None:
        """Initialize guard with maximum depth limit."""
        self._max_depth = depth_clamp(max_depth)
        self._token: Token[int] | None = None

    def __enter__(self) -> GlobalDepthGuard:
        """Enter guarded section, increment global depth.

        Raises:
            RecursionLimitExceededError: If the depth limit is already reached
        """
        current = _global_evaluation_depth.get()
        if current >= self._max_depth:
            raise RecursionLimitExceededError(
                ErrorTemplate.expression_depth_exceeded(self._max_depth)
            )
        self._token = _global_evaluation_depth.set(current + 1)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit guarded section, restore previous depth."""
        if self._token is not None:
            _global_evaluation_depth.reset(self._token)
            self._token = None


@dataclass(slots=True)
class ExpansionContext:
    """Explicit state for one top-level evaluate() call.

    Instance Lifecycle:
        Created by the evaluator at the start of evaluate() and discarded
        when it returns. Never shared between calls.

    Attributes:
        chain: Active fallback chain
        category: Category that unqualified directives resolve against
            (None at top level)
        max_passes: Scan-and-substitute passes allowed
        max_expansion_size: Characters allowed in any intermediate result
        passes: Passes completed so far
    """

    chain: FallbackChain
    category: str | None = None
    max_passes: int = DEFAULT_MAX_EXPANSION_PASSES
    max_expansion_size: int = DEFAULT_MAX_EXPANSION_SIZE
    passes: int = field(default=0, init=False)

    def begin_pass(self, template: str) -> None:
        """Count one more pass.

        Args:
            template: Text about to be scanned, for the error message

        Raises:
            RecursionLimitExceededError: If the pass limit is already used up
        """
        if self.passes >= self.max_passes:
            raise RecursionLimitExceededError(
                ErrorTemplate.max_passes_exceeded(self.max_passes, template)
            )
        self.passes += 1

    def track_expansion(self, text: str) -> None:
        """Check the size of an intermediate result against the budget.

        Stops templates such as a = "#{a} #{a}" whose output doubles every
        pass long before the pass limit is reached.

        Raises:
            RecursionLimitExceededError: If text is longer than the budget
        """
        if len(text) > self.max_expansion_size:
            raise RecursionLimitExceededError(
                ErrorTemplate.expansion_budget_exceeded(len(text), self.max_expansion_size)
            )
