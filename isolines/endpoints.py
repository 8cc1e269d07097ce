"""Matching of seed points to the free ends of open polylines."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np
import numpy.typing as npt

from .constants import ENDPOINT_PROXIMITY

_Array = npt.NDArray[np.floating]

_END_NAMES = ("start", "end")


@dataclass(frozen=True)
class LineEnd:
    """One end of polyline number ``index``."""

    index: int
    end: str
    point: Tuple[float, float]


def _line_ends(lines: Sequence) -> List[LineEnd]:
    ends: List[LineEnd] = []
    for i, line in enumerate(lines):
        p = np.asarray(line, dtype=np.float64).reshape(-1, 2)
        if p.shape[0] == 0:
            continue
        ends.append(LineEnd(i, "start", (float(p[0, 0]), float(p[0, 1]))))
        ends.append(LineEnd(i, "end", (float(p[-1, 0]), float(p[-1, 1]))))
    return ends


def find_line_ends(
    points: Sequence,
    lines: Sequence,
    *,
    threshold: float = ENDPOINT_PROXIMITY,
) -> List[Tuple[Tuple[float, float], Optional[LineEnd]]]:
    """Nearest polyline end for each point.

    Only ends inside the square window ``|dx| < threshold`` and
    ``|dy| < threshold`` around a point are candidates.  Among them the
    Euclidean nearest wins; on a tie, the end listed first (lower line index,
    start before end) is kept.

    Returns
    -------
    list
        ``(point, end)`` pairs in the order of *points*; ``end`` is ``None``
        when no end is close enough.
    """
    ends = _line_ends(lines)
    coords = np.array([e.point for e in ends], dtype=np.float64).reshape(-1, 2)

    matches = []
    for point in points:
        q = (float(point[0]), float(point[1]))
        match = None
        if len(ends):
            delta = coords - np.array(q)
            near = np.all(np.abs(delta) < threshold, axis=1)
            if near.any():
                dist2 = np.where(near, np.sum(delta * delta, axis=1), np.inf)
                match = ends[int(np.argmin(dist2))]
        matches.append((q, match))
    return matches


def append_at_end(line, end: str, point: Sequence[float]) -> _Array:
    """Copy of *line* extended by *point* at its ``"start"`` or ``"end"``."""
    if end not in _END_NAMES:
        raise ValueError(f"end must be one of {_END_NAMES}, got {end!r}")
    p = np.asarray(line, dtype=np.float64).reshape(-1, 2)
    q = np.asarray(point, dtype=np.float64).reshape(1, 2)
    if end == "start":
        return np.concatenate([q, p], axis=0)
    return np.concatenate([p, q], axis=0)


def attach_points(
    points: Sequence,
    lines: Sequence,
    *,
    threshold: float = ENDPOINT_PROXIMITY,
) -> List[_Array]:
    """Extend each polyline with the seed points matched to its ends.

    Matching is done against the ends of the original *lines*; points
    matched to the same end are appended in the order given.
    """
    result = [np.asarray(line, dtype=np.float64).reshape(-1, 2) for line in lines]
    for point, end in find_line_ends(points, lines, threshold=threshold):
        if end is not None:
            result[end.index] = append_at_end(result[end.index], end.end, point)
    return result
