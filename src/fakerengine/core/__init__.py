"""Core utilities shared by the syntax, pattern and runtime layers.

Python 3.13+.
"""

from .depth_guard import DepthGuard, depth_clamp

__all__ = ["DepthGuard", "depth_clamp"]
