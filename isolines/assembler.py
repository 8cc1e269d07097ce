"""Isoline assembly: grid scan, chain reconstruction and geometry.

Node chains run along cell corners (the dual grid).  Two steps turn them
into contour polylines:

1. **Corner mapping** — each NodeID becomes its half-integer corner point.
2. **Midpoint contraction** — each pair of consecutive corners is replaced
   by its midpoint, which lies on the sample boundary the dual edge crosses.

Quick start
-----------
>>> from isolines import get_isolines
>>> f = lambda x, y: float((x - 4) ** 2 + (y - 4) ** 2)
>>> result = get_isolines(f, [4.5, 9.5], 9, 9)
>>> [len(level.closed) for level in result]
[1, 1]
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import numpy as np
import numpy.typing as npt

from .chains import LevelStructure, sort_lines
from .config import IsolineOptions
from .errors import ChainInconsistencyError
from .fields import array_field
from .nodes import NodeCodec
from .scanner import Edge, TargetFunction, find_level_edges

logger = logging.getLogger(__name__)

_Array = npt.NDArray[np.floating]


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------

def contract_midpoints(points) -> _Array:
    """Midpoints of consecutive points: ``N`` points in, ``N - 1`` out."""
    p = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    if p.shape[0] < 2:
        return np.zeros((0, 2), dtype=np.float64)
    return 0.5 * (p[1:] + p[:-1])


def chain_to_polyline(chain: Sequence[int], codec: NodeCodec, closed: bool = False) -> _Array:
    """Convert a node chain to a ``(N, 2)`` polyline.

    A closed chain lists each node once; it is wrapped back to its first
    node before contraction and the first midpoint is repeated at the end,
    so the returned polyline satisfies ``line[0] == line[-1]``.
    """
    nodes = list(chain)
    if closed and nodes:
        nodes.append(nodes[0])
    line = contract_midpoints(codec.decode_many(nodes))
    if closed and line.shape[0]:
        line = np.concatenate([line, line[:1]], axis=0)
    return line


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

def assemble_levels(
    level_edges: Sequence[Sequence[Edge]],
    *,
    codec: Optional[NodeCodec] = None,
    on_error: str = "raise",
) -> List[LevelStructure[_Array]]:
    """Chain and convert precomputed per-level edge lists.

    Levels are independent: with ``on_error="skip"`` a level whose edges are
    inconsistent comes back empty with :attr:`LevelStructure.error` set,
    and the other levels are still assembled.
    """
    codec = codec or NodeCodec()
    results: List[LevelStructure[_Array]] = []
    for i, edges in enumerate(level_edges):
        try:
            chains = sort_lines(edges)
        except ChainInconsistencyError as exc:
            exc.level = i
            if on_error == "raise":
                raise
            logger.warning("skipping level %d: %s", i, exc)
            results.append(LevelStructure(error=exc))
            continue
        results.append(
            LevelStructure(
                opened=[chain_to_polyline(c, codec) for c in chains.opened],
                closed=[chain_to_polyline(c, codec, closed=True) for c in chains.closed],
            )
        )
    return results


def get_isolines(
    f: TargetFunction,
    levels: Sequence[float],
    xmax: int,
    ymax: int,
    *,
    options: Optional[IsolineOptions] = None,
) -> List[LevelStructure[_Array]]:
    """Compute the isolines of *f* for every level.

    Parameters
    ----------
    f:
        Target function ``f(x, y)`` for integer ``0 <= x < xmax``,
        ``0 <= y < ymax``.  Returns ``None`` (or NaN) outside its domain;
        such samples contribute no isoline segments.
    levels:
        Ascending, distinct threshold values.
    xmax, ymax:
        Exclusive grid bounds, at most ``2 ** options.node_bits - 1``.
    options:
        :class:`IsolineOptions`; defaults apply when omitted.

    Returns
    -------
    list of LevelStructure
        Same length and order as *levels*.  Each polyline is a ``(N, 2)``
        array of grid coordinates; closed ones repeat their first point.

    Raises
    ------
    GridBoundsError
        Before any sampling, if the grid is larger than the node packing.
    ChainInconsistencyError
        If ``options.on_error == "raise"`` and a level is not two-valent.
    """
    options = options or IsolineOptions()
    codec = NodeCodec(options.node_bits)
    level_edges = find_level_edges(f, levels, xmax, ymax, codec=codec)
    results = assemble_levels(level_edges, codec=codec, on_error=options.on_error)
    logger.debug(
        "extracted %d lines over %d levels", sum(len(r) for r in results), len(results)
    )
    return results


def get_array_isolines(
    values,
    levels: Sequence[float],
    *,
    options: Optional[IsolineOptions] = None,
) -> List[LevelStructure[_Array]]:
    """:func:`get_isolines` over a 2-D array indexed ``values[y, x]``; NaN is undefined."""
    values = np.asarray(values, dtype=np.float64)
    f = array_field(values)
    ymax, xmax = values.shape
    return get_isolines(f, levels, xmax, ymax, options=options)
