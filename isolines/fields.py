"""Target-function adapters for sampled and analytic fields.

The extraction pipeline calls ``f(x, y)`` at integer grid points.  These
helpers build such functions from a numpy array or from a vectorised
callable over physical coordinates, and map results back to physical space.
"""

from __future__ import annotations

from typing import Callable, Optional, Tuple

import numpy as np
import numpy.typing as npt

from .scanner import TargetFunction, defined_value

_Array = npt.NDArray[np.floating]
_Bounds2D = Tuple[Tuple[float, float], Tuple[float, float]]
_Resolution2D = Tuple[int, int]
_FieldFunc = Callable[[_Array], _Array]


def array_field(values) -> TargetFunction:
    """Target function reading ``values[y, x]``; NaN entries are undefined."""
    arr = np.asarray(values, dtype=np.float64)
    if arr.ndim != 2:
        raise ValueError(f"expected a 2-D array, got shape {arr.shape}")

    def f(x: int, y: int) -> Optional[float]:
        return defined_value(arr[y, x])

    return f


def sample_levelset(
    func: _FieldFunc,
    bounds: _Bounds2D,
    resolution: _Resolution2D,
) -> _Array:
    """Sample *func* on a uniform 2-D cell-centred grid.

    Parameters
    ----------
    func:
        Vectorised field accepting ``(..., 2)`` point arrays.
    bounds:
        ``((x0, x1), (y0, y1))`` physical extents of the domain.
    resolution:
        ``(nx, ny)`` number of cells along each axis.

    Returns
    -------
    numpy.ndarray
        Shape ``(ny, nx)`` array, row-major (y first).
    """
    (x0, x1), (y0, y1) = bounds
    nx, ny = resolution

    xs = np.linspace(x0, x1, nx, endpoint=False) + (x1 - x0) / (2.0 * nx)
    ys = np.linspace(y0, y1, ny, endpoint=False) + (y1 - y0) / (2.0 * ny)

    Y, X = np.meshgrid(ys, xs, indexing="ij")
    p = np.stack([X, Y], axis=-1)
    return np.asarray(func(p), dtype=np.float64)


def geometry_field(
    func: _FieldFunc,
    bounds: _Bounds2D,
    resolution: _Resolution2D,
) -> TargetFunction:
    """Target function for a vectorised field over a physical domain.

    Grid point ``(x, y)`` stands for the centre of cell ``(x, y)`` of the
    grid laid over *bounds*; see :func:`sample_levelset`.  The field is
    evaluated once, up front.
    """
    return array_field(sample_levelset(func, bounds, resolution))


def sample_grid(f: TargetFunction, xmax: int, ymax: int) -> _Array:
    """Evaluate *f* on the whole grid; undefined samples become NaN."""
    out = np.full((ymax, xmax), np.nan, dtype=np.float64)
    for y in range(ymax):
        for x in range(xmax):
            value = defined_value(f(x, y))
            if value is not None:
                out[y, x] = value
    return out


def grid_coordinates(
    polyline,
    bounds: _Bounds2D,
    resolution: _Resolution2D,
) -> _Array:
    """Map a grid-space polyline to the physical coordinates of *bounds*."""
    (x0, x1), (y0, y1) = bounds
    nx, ny = resolution
    p = np.asarray(polyline, dtype=np.float64).reshape(-1, 2)
    spacing = np.array([(x1 - x0) / nx, (y1 - y0) / ny])
    origin = np.array([x0, y0])
    return origin + (p + 0.5) * spacing
