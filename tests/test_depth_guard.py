"""Tests for core/depth_guard.py and the global evaluation depth guard.

Tests DepthGuard context manager, explicit check(), depth_clamp() and the
ContextVar-based GlobalDepthGuard.

Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from contextvars import copy_context

import pytest
from hypothesis import event, given
from hypothesis import strategies as st

from fakerengine.constants import MAX_DEPTH
from fakerengine.core.depth_guard import DepthGuard, depth_clamp
from fakerengine.diagnostics import DiagnosticCode, ErrorCategory, RecursionLimitExceededError
from fakerengine.patterns import parse_pattern
from fakerengine.runtime.expansion_context import GlobalDepthGuard, current_evaluation_depth

# ============================================================================
# Construction
# ============================================================================


class TestDepthGuardConstruction:
    """Test DepthGuard construction and defaults."""

    def test_default_construction(self) -> None:
        """DepthGuard uses MAX_DEPTH by default."""
        guard = DepthGuard()

        assert guard.max_depth == MAX_DEPTH
        assert guard.current_depth == 0

    def test_post_init_clamps_max_depth(self) -> None:
        """__post_init__ clamps max_depth below the recursion limit.

        Frames already on the stack count against the limit too.
        """
        limit = sys.getrecursionlimit()
        guard = DepthGuard(max_depth=limit + 1000)

        assert 0 < guard.max_depth < limit - 50

    def test_frames_per_level_divides_ceiling(self) -> None:
        """A level costing four frames allows a quarter of the depth."""
        limit = sys.getrecursionlimit()
        single = DepthGuard(max_depth=limit)
        quadruple = DepthGuard(max_depth=limit, frames_per_level=4)

        assert quadruple.max_depth <= single.max_depth // 4 + 1
        assert DepthGuard(max_depth=10, frames_per_level=4).max_depth == 10

    def test_frames_per_level_must_be_positive(self) -> None:
        """frames_per_level below 1 is rejected."""
        with pytest.raises(ValueError, match="frames_per_level must be positive"):
            DepthGuard(frames_per_level=0)


# ============================================================================
# Context Manager
# ============================================================================


class TestDepthGuardContextManager:
    """Test DepthGuard as context manager."""

    def test_enter_and_exit(self) -> None:
        """Entering increments depth; exiting restores it."""
        guard = DepthGuard()

        with guard:
            assert guard.current_depth == 1
            with guard:
                assert guard.current_depth == 2
                assert guard.remaining == guard.max_depth - 2
        assert guard.current_depth == 0
        assert guard.deepest == 2

    def test_exit_on_exception(self) -> None:
        """Depth is restored when the body raises."""
        guard = DepthGuard()

        with pytest.raises(KeyError), guard:
            raise KeyError

        assert guard.current_depth == 0

    def test_limit_raises_before_increment(self) -> None:
        """Entering at the limit raises without changing depth."""
        guard = DepthGuard(max_depth=2)

        with guard, guard:
            with pytest.raises(RecursionLimitExceededError) as exc_info, guard:
                pass  # pragma: no cover
            assert guard.current_depth == 2

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.MAX_DEPTH_EXCEEDED
        assert exc_info.value.category == ErrorCategory.RESOLUTION

    def test_is_exceeded(self) -> None:
        """is_exceeded() reports reaching the limit."""
        guard = DepthGuard(max_depth=1)

        assert not guard.is_exceeded()
        with guard:
            assert guard.is_exceeded()

    @given(max_depth=st.integers(min_value=1, max_value=60))
    def test_exactly_max_depth_levels_allowed(self, max_depth: int) -> None:
        """PROPERTY: max_depth nested entries succeed; one more raises."""
        event(f"max_depth_bucket={max_depth // 20}")
        guard = DepthGuard(max_depth=max_depth)

        for _ in range(max_depth):
            guard.__enter__()
        with pytest.raises(RecursionLimitExceededError):
            guard.check()
        for _ in range(max_depth):
            guard.__exit__(None, None, None)

        assert guard.current_depth == 0


# ============================================================================
# depth_clamp
# ============================================================================


class TestDepthClamp:
    """Test depth_clamp() against the interpreter recursion limit."""

    def test_within_limit_unchanged(self) -> None:
        """Small depths pass through."""
        assert depth_clamp(10) == 10

    def test_clamped_with_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        """Oversized depths are clamped and a warning is logged."""
        limit = sys.getrecursionlimit()

        with caplog.at_level(logging.WARNING, logger="fakerengine.core.depth_guard"):
            assert depth_clamp(limit * 2) == limit - 50

        assert "above the safe ceiling" in caplog.text

    def test_custom_reserve(self) -> None:
        """reserve_frames widens the margin."""
        limit = sys.getrecursionlimit()
        assert depth_clamp(limit, reserve_frames=200) == limit - 200

    def test_frames_per_level(self) -> None:
        """The ceiling is divided by the frames each level uses."""
        limit = sys.getrecursionlimit()
        assert depth_clamp(limit, frames_per_level=4) == (limit - 50) // 4
        assert depth_clamp(5, frames_per_level=4) == 5

    def test_deep_regex_groups_fail_cleanly(self) -> None:
        """Groups nested to the recursion limit raise the library error.

        The parser uses several frames per group, so an unclamped depth
        would end in a bare RecursionError.
        """
        limit = sys.getrecursionlimit()
        pattern = "(" * limit + "a" + ")" * limit

        with pytest.raises(RecursionLimitExceededError):
            parse_pattern(pattern, max_depth=limit)


# ============================================================================
# GlobalDepthGuard
# ============================================================================


class TestGlobalDepthGuard:
    """Test evaluate() nesting tracked through a ContextVar."""

    def test_depth_visible_inside(self) -> None:
        """current_evaluation_depth() counts active guards."""
        assert current_evaluation_depth() == 0

        with GlobalDepthGuard():
            assert current_evaluation_depth() == 1
            with GlobalDepthGuard():
                assert current_evaluation_depth() == 2

        assert current_evaluation_depth() == 0

    def test_limit(self) -> None:
        """Entering past max_depth raises RecursionLimitExceededError."""
        with GlobalDepthGuard(max_depth=1):
            with pytest.raises(RecursionLimitExceededError), GlobalDepthGuard(max_depth=1):
                pass  # pragma: no cover
            assert current_evaluation_depth() == 1

    def test_restored_after_exception(self) -> None:
        """Depth is reset when the guarded body raises."""
        with pytest.raises(ValueError, match="inner"), GlobalDepthGuard():
            msg = "inner"
            raise ValueError(msg)

        assert current_evaluation_depth() == 0

    def test_isolated_per_context(self) -> None:
        """A copied context starts from its own snapshot."""
        seen: list[int] = []

        with GlobalDepthGuard():
            copy_context().run(lambda: seen.append(current_evaluation_depth()))

        copy_context().run(lambda: seen.append(current_evaluation_depth()))
        assert seen == [1, 0]
