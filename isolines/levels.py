"""Level bucketing: which threshold levels lie between two samples."""

from __future__ import annotations

from bisect import bisect_right
from typing import Iterator, Sequence, Tuple


class LevelIndex:
    """Lookup over an ascending array of threshold levels.

    The array is taken as-is: levels must be ascending and distinct, which is
    not checked.  Level ``i`` is the ``i``-th entry of the array.
    """

    def __init__(self, levels: Sequence[float]) -> None:
        self._levels = tuple(float(v) for v in levels)

    @property
    def levels(self) -> Tuple[float, ...]:
        return self._levels

    def __len__(self) -> int:
        return len(self._levels)

    def __getitem__(self, i: int) -> float:
        return self._levels[i]

    def __iter__(self) -> Iterator[float]:
        return iter(self._levels)

    def locate(self, z: float) -> int:
        """Count of levels ``<= z``, i.e. the index of the first level above *z*."""
        return bisect_right(self._levels, z)

    def between(self, z1: float, z2: float) -> Tuple[int, int]:
        """Half-open index range ``(lo, hi)`` of the levels crossed going from *z1* to *z2*.

        A level ``L`` is crossed when ``min(z1, z2) < L <= max(z1, z2)``.  The
        range is empty (``lo == hi``) when ``z1 == z2``.

        >>> LevelIndex([0, 10, 20]).between(5, 15)
        (1, 2)
        """
        a = self.locate(z1)
        b = self.locate(z2)
        if a <= b:
            return a, b
        return b, a
