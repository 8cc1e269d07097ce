"""Grid scan: elementary isoline segments for every level in one pass.

The field is sampled at integer points.  Every pair of horizontally or
vertically adjacent samples shares a boundary; when the pair straddles a
level, the *dual* edge across that boundary (joining the two cell corners
on either side of it) becomes one segment of that level's isoline.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from .levels import LevelIndex
from .nodes import NodeCodec

logger = logging.getLogger(__name__)

Edge = Tuple[int, int]
TargetFunction = Callable[[int, int], Optional[float]]
Curve = Callable[[float], Tuple[float, float]]
_Levels = Union[LevelIndex, Sequence[float]]


def _as_index(levels: _Levels) -> LevelIndex:
    if isinstance(levels, LevelIndex):
        return levels
    return LevelIndex(levels)


def defined_value(value) -> Optional[float]:
    """*value* as a float, or ``None`` when it marks a point outside the domain.

    ``None`` is the undefined marker; NaN coming from numpy-backed fields is
    folded into it so it never reaches a comparison.
    """
    if value is None:
        return None
    value = float(value)
    if math.isnan(value):
        return None
    return value


def _saddle_levels(
    index: LevelIndex, nw: float, ne: float, sw: float, se: float
) -> Dict[int, bool]:
    """Levels for which the 2x2 block ``nw ne / sw se`` is a saddle.

    A level is a saddle of the block when all four boundaries straddle it,
    i.e. the diagonal samples lie on one side and the anti-diagonal ones on
    the other.  The block average decides how the four boundary crossings
    pair up: samples on the same side as the average are joined through the
    centre, and the two strands wrap around the other pair.  The value is
    ``True`` when the strands wrap around ``nw`` and ``se``.
    """
    spans = (
        index.between(nw, ne),
        index.between(sw, se),
        index.between(nw, sw),
        index.between(ne, se),
    )
    lo = max(span[0] for span in spans)
    hi = min(span[1] for span in spans)
    if lo >= hi:
        return {}
    centre = (nw + ne + sw + se) / 4.0
    return {i: (centre >= index[i]) != (nw >= index[i]) for i in range(lo, hi)}


def find_level_edges(
    f: TargetFunction,
    levels: _Levels,
    xmax: int,
    ymax: int,
    *,
    codec: Optional[NodeCodec] = None,
) -> List[List[Edge]]:
    """Bucket the dual edges of the sampling grid by level.

    Parameters
    ----------
    f:
        Target function ``f(x, y)`` for integer ``0 <= x < xmax`` and
        ``0 <= y < ymax``; returns ``None`` outside its domain.
    levels:
        Ascending threshold levels (or a prepared :class:`LevelIndex`).
    xmax, ymax:
        Exclusive grid bounds.
    codec:
        NodeID packing; the default :class:`NodeCodec` if omitted.

    Returns
    -------
    list
        One list of edges per level, in level order.  Each edge is a pair of
        NodeIDs; no edge is emitted twice and edges of a level are unordered.
        Every node touches at most two edges of a level: saddle corners are
        split with :meth:`NodeCodec.twin`.
    """
    codec = codec or NodeCodec()
    codec.check_extent(xmax, ymax)
    index = _as_index(levels)

    level_edges: List[List[Edge]] = [[] for _ in range(len(index))]

    # Each sample checks the boundary to its left and the one above it, so
    # every interior boundary is visited once.  The sample also completes the
    # 2x2 block around its top-left corner; at a saddle the corner is split
    # into its primary and twin ids, one per strand.
    prev_row: List[Optional[float]] = [None] * xmax
    n_saddles = 0
    for y in range(ymax):
        prev_value: Optional[float] = None
        diagonal: Optional[float] = None
        prev_top: Dict[int, int] = {}
        for x in range(xmax):
            value = defined_value(f(x, y))
            above = prev_row[x]
            top_at: Dict[int, int] = {}
            if value is not None:
                corner = codec.encode(x, y, 0)
                saddles: Dict[int, bool] = {}
                if diagonal is not None and above is not None and prev_value is not None:
                    saddles = _saddle_levels(index, diagonal, above, prev_value, value)
                    n_saddles += len(saddles)
                    for i, around_diagonal in saddles.items():
                        if not around_diagonal:
                            # the strand from the left continues downwards
                            pos = prev_top[i]
                            level_edges[i][pos] = (level_edges[i][pos][0], codec.twin(corner))
                if x > 0 and prev_value is not None:
                    lo, hi = index.between(value, prev_value)
                    for i in range(lo, hi):
                        start = codec.twin(corner) if i in saddles else corner
                        level_edges[i].append((start, codec.encode(x, y, 2)))
                if y > 0 and above is not None:
                    lo, hi = index.between(value, above)
                    for i in range(lo, hi):
                        start = codec.twin(corner) if saddles.get(i) else corner
                        top_at[i] = len(level_edges[i])
                        level_edges[i].append((start, codec.encode(x, y, 1)))
            prev_row[x] = value
            prev_value = value
            diagonal = above
            prev_top = top_at

    logger.debug(
        "scanned %dx%d grid, %d edges over %d levels, %d saddles split",
        xmax, ymax, sum(len(e) for e in level_edges), len(level_edges), n_saddles,
    )
    return level_edges


def find_curve_crossings(
    f: Callable[[float, float], Optional[float]],
    levels: _Levels,
    curve: Curve,
    tmax: int,
) -> List[List[float]]:
    """Parameters where the isolines are expected to cross a parametric curve.

    The field is sampled at ``curve(t)`` for integer ``t`` in ``[0, tmax]``.
    Whenever two consecutive defined samples straddle a level, the midpoint
    parameter ``t - 0.5`` is recorded for that level.

    Returns
    -------
    list
        One list of parameters per level, ascending within each level.
    """
    index = _as_index(levels)
    level_points: List[List[float]] = [[] for _ in range(len(index))]

    prev_value: Optional[float] = None
    for t in range(tmax + 1):
        value = defined_value(f(*curve(t)))
        if t > 0 and value is not None and prev_value is not None:
            lo, hi = index.between(value, prev_value)
            for i in range(lo, hi):
                level_points[i].append(t - 0.5)
        prev_value = value
    return level_points
