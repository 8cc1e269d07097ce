"""NodeID codec: grid cell corners packed into integer keys.

A corner is addressed from a sample point ``(x, y)`` and a selector ``n``::

    0 1
    2 3

so ``n = 0`` is the top-left corner of the sample and ``n = 3`` the
bottom-right one.  The corner lies at the half-integer point
``(cx - 0.5, cy - 0.5)`` where ``(cx, cy)`` are its packed coordinates.

A saddle corner carries two isoline strands, so it also has a *twin* id
(one flag bit above both coordinates) that decodes to the same point.
"""

from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np
import numpy.typing as npt

from .constants import DEFAULT_NODE_BITS, MAX_NODE_BITS
from .errors import GridBoundsError

_Array = npt.NDArray[np.floating]


class NodeCodec:
    """Fixed-width packing of corner coordinates into a NodeID.

    ``node = cy << bits | cx``.  Corner coordinates reach ``xmax`` and
    ``ymax``, so a grid is accepted only when both extents are at most
    :attr:`max_extent`; larger grids would alias ids and are rejected by
    :meth:`check_extent` instead.
    """

    def __init__(self, bits: int = DEFAULT_NODE_BITS) -> None:
        if not 1 <= bits <= MAX_NODE_BITS:
            raise ValueError(f"bits must be in [1, {MAX_NODE_BITS}], got {bits}")
        self.bits = bits
        self.mask = (1 << bits) - 1
        self._twin_flag = 1 << (2 * bits)

    def __repr__(self) -> str:
        return f"NodeCodec(bits={self.bits})"

    @property
    def max_extent(self) -> int:
        """Largest grid extent (samples per axis) that packs without aliasing."""
        return self.mask

    def check_extent(self, xmax: int, ymax: int) -> None:
        """Raise :class:`GridBoundsError` unless the grid fits the packing."""
        for name, extent in (("xmax", xmax), ("ymax", ymax)):
            if extent < 1:
                raise GridBoundsError(f"{name} must be positive, got {extent}")
            if extent > self.max_extent:
                raise GridBoundsError(
                    f"{name}={extent} exceeds the {self.bits}-bit node packing "
                    f"limit of {self.max_extent}"
                )

    def encode(self, x: int, y: int, n: int = 0) -> int:
        """NodeID of corner *n* of the sample at ``(x, y)``."""
        cx = x + (n & 1)
        cy = y + ((n >> 1) & 1)
        return (cy << self.bits) | cx

    def twin(self, node: int) -> int:
        """Second id of the corner *node*, used for the other strand at a saddle."""
        return node | self._twin_flag

    def decode(self, node: int) -> Tuple[float, float]:
        """Geometric position of *node* (a twin decodes like its corner)."""
        return (node & self.mask) - 0.5, ((node >> self.bits) & self.mask) - 0.5

    def decode_many(self, nodes: Iterable[int]) -> _Array:
        """Positions of *nodes* as a ``(N, 2)`` float array."""
        ids = np.fromiter(nodes, dtype=np.int64)
        xs = (ids & self.mask).astype(np.float64) - 0.5
        ys = ((ids >> self.bits) & self.mask).astype(np.float64) - 0.5
        return np.stack([xs, ys], axis=-1)
