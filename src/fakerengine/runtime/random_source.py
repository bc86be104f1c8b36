"""Deterministic random source.

Each FakerSession owns exactly one RandomSource. There is no module-level
generator: two sessions only share a sequence when they are built from the
same explicit seed, and then they produce identical output for identical
call sequences.

Thread Safety:
    NOT thread-safe. Every draw advances internal state; concurrent draws
    from several threads interleave unpredictably and break reproducibility.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import random
from collections.abc import Sequence

__all__ = ["RandomSource"]


class RandomSource:
    """Seedable uniform random generator.

    Wraps a private random.Random (Mersenne Twister) instance.

    Example:
        >>> a = RandomSource(42)
        >>> b = RandomSource(42)
        >>> [a.next_int(10) for _ in range(5)] == [b.next_int(10) for _ in range(5)]
        True
    """

    __slots__ = ("_random", "_seed")

    def __init__(self, seed: int | None = None) -> None:
        """Initialize random source.

        Args:
            seed: Explicit integer seed (any size, 64-bit values included).
                None draws entropy from the operating system.

        Raises:
            TypeError: If seed is not an int (bool is rejected too)
        """
        if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
            msg = f"seed must be an int or None, got {type(seed).__name__}"
            raise TypeError(msg)
        self._seed = seed
        self._random = random.Random(seed)  # noqa: S311 - fake data, not crypto

    @property
    def seed(self) -> int | None:
        """Seed given at construction (None when unseeded)."""
        return self._seed

    def next_int(self, bound: int) -> int:
        """Uniform integer in [0, bound).

        Raises:
            ValueError: If bound is not positive
        """
        if bound <= 0:
            msg = f"bound must be positive, got {bound}"
            raise ValueError(msg)
        return self._random.randrange(bound)

    def next_int_between(self, low: int, high: int) -> int:
        """Uniform integer in [low, high], both inclusive.

        Raises:
            ValueError: If high < low
        """
        if high < low:
            msg = f"high ({high}) must be >= low ({low})"
            raise ValueError(msg)
        return low + self.next_int(high - low + 1)

    def next_double(self) -> float:
        """Uniform float in [0.0, 1.0)."""
        return self._random.random()

    def choice[T](self, items: Sequence[T]) -> T:
        """Uniformly pick one element.

        Raises:
            ValueError: If items is empty
        """
        if not items:
            msg = "Cannot choose from an empty sequence"
            raise ValueError(msg)
        return items[self.next_int(len(items))]

    def __repr__(self) -> str:
        return f"RandomSource(seed={self._seed!r})"
