"""Nesting limits for recursive descent.

The regex parser recurses once per group, so "((((...))))" with enough
parentheses would exhaust the interpreter stack before any pattern error
surfaced. DepthGuard turns that into a RecursionLimitExceededError at a
configurable depth. depth_clamp keeps any configured depth below what the
interpreter recursion limit can hold.

Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

from fakerengine.constants import MAX_DEPTH
from fakerengine.diagnostics import ErrorTemplate, RecursionLimitExceededError

__all__ = ["DepthGuard", "depth_clamp"]

logger = logging.getLogger(__name__)

# Frames kept free for the calls between two guarded levels.
_RESERVED_FRAMES = 50


def _stack_depth() -> int:
    """Number of Python frames currently on the stack."""
    depth = 0
    frame = sys._getframe(1)  # noqa: SLF001 - no public equivalent
    while frame is not None:
        depth += 1
        frame = frame.f_back
    return depth


@dataclass(slots=True)
class DepthGuard:
    """Counts nested levels and refuses to go past max_depth.

    One guard is created per parse and entered once per nested group:

        guard = DepthGuard(max_depth=config.max_nesting_depth, frames_per_level=4)
        with guard:
            inner = parse_group_body(cursor)

    max_depth is clamped at construction so that max_depth levels of
    frames_per_level frames each fit above the frames already on the stack.

    Mutable on purpose: entering and leaving update current_depth in place.

    Attributes:
        max_depth: Deepest level allowed (clamped by depth_clamp)
        frames_per_level: Python frames one level of recursion uses
        current_depth: Levels currently entered
        deepest: Highest current_depth seen since construction
    """

    max_depth: int = MAX_DEPTH
    frames_per_level: int = 1
    current_depth: int = field(default=0, init=False)
    deepest: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        if self.frames_per_level < 1:
            msg = f"frames_per_level must be positive, got {self.frames_per_level}"
            raise ValueError(msg)
        self.max_depth = depth_clamp(
            self.max_depth,
            reserve_frames=_RESERVED_FRAMES + _stack_depth(),
            frames_per_level=self.frames_per_level,
        )

    def __enter__(self) -> DepthGuard:
        # check() runs before the increment; __exit__ never runs for a
        # failed __enter__, so the counter must not move on failure.
        self.check()
        self.current_depth += 1
        self.deepest = max(self.deepest, self.current_depth)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.current_depth -= 1

    @property
    def remaining(self) -> int:
        """Levels that may still be entered."""
        return self.max_depth - self.current_depth

    def is_exceeded(self) -> bool:
        """True when no further level may be entered."""
        return self.remaining <= 0

    def check(self) -> None:
        """Raise if no further level may be entered.

        Raises:
            RecursionLimitExceededError: With a MAX_DEPTH_EXCEEDED diagnostic
        """
        if self.is_exceeded():
            raise RecursionLimitExceededError(
                ErrorTemplate.expression_depth_exceeded(self.max_depth)
            )


def depth_clamp(
    requested_depth: int,
    reserve_frames: int = _RESERVED_FRAMES,
    frames_per_level: int = 1,
) -> int:
    """Limit a configured depth to what the interpreter stack can hold.

    Args:
        requested_depth: Depth from configuration
        reserve_frames: Frames kept free below sys.getrecursionlimit()
        frames_per_level: Frames one level of recursion uses

    Returns:
        requested_depth, or (recursion limit - reserve_frames) //
        frames_per_level when that is smaller (a warning is logged in that
        case). Never below 1.

    Example:
        >>> sys.setrecursionlimit(200)
        >>> depth_clamp(100)
        100
        >>> depth_clamp(500)
        150
        >>> depth_clamp(100, frames_per_level=4)
        37
    """
    limit = sys.getrecursionlimit()
    ceiling = max(1, (limit - reserve_frames) // frames_per_level)
    if requested_depth <= ceiling:
        return requested_depth
    logger.warning(
        "Nesting depth %d is above the safe ceiling %d (recursion limit %d); using %d",
        requested_depth,
        ceiling,
        limit,
        ceiling,
    )
    return ceiling
