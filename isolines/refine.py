"""Sub-pixel refinement of contracted isoline points.

Every point produced by :func:`isolines.get_isolines` is the midpoint of
two adjacent integer samples, so exactly one of its coordinates is an
integer (the fixed axis).  :func:`section_for_midpoint` recovers that pair
as a :class:`Section` parametrised by ``t`` in ``[0, 1]``, and a *finder*
strategy locates the parameter where the field equals the level.

Finders have the signature ``finder(fun, value) -> t`` where ``fun`` is the
field restricted to the section.  Bisection finders evaluate the field at
non-integer points, so they need a target function defined between grid
samples; :func:`linear_interpolation` only reads the two samples.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np
import numpy.typing as npt

from .chains import LevelStructure
from .constants import DEFAULT_STEP_TOLERANCE, DEFAULT_VALUE_TOLERANCE, MAX_BISECTION_STEPS
from .errors import RefinementError

logger = logging.getLogger(__name__)

_Array = npt.NDArray[np.floating]
Point = Tuple[float, float]
SectionFunction = Callable[[float], Optional[float]]
Finder = Callable[[SectionFunction, float], float]


@dataclass(frozen=True)
class Section:
    """Segment between two adjacent integer samples.

    ``axis`` names the coordinate held fixed along the segment: ``"x"`` for
    a vertical pair, ``"y"`` for a horizontal one.
    """

    axis: str
    start: Tuple[int, int]
    end: Tuple[int, int]

    def point(self, t: float) -> Point:
        """Coordinates at parameter *t*; ``0`` is :attr:`start`, ``1`` is :attr:`end`."""
        return (
            self.start[0] + t * (self.end[0] - self.start[0]),
            self.start[1] + t * (self.end[1] - self.start[1]),
        )


def section_for_midpoint(middle: Sequence[float]) -> Section:
    """Sample pair bracketing a contracted isoline point."""
    mx, my = float(middle[0]), float(middle[1])
    x_fixed = mx.is_integer()
    y_fixed = my.is_integer()
    if x_fixed == y_fixed:
        raise ValueError(f"point {(mx, my)} does not lie between two adjacent samples")
    if x_fixed:
        x, y = int(mx), math.floor(my)
        return Section("x", (x, y), (x, y + 1))
    x, y = math.floor(mx), int(my)
    return Section("y", (x, y), (x + 1, y))


def _evaluate(fun: SectionFunction, t: float) -> float:
    value = fun(t)
    if value is None or math.isnan(value):
        raise RefinementError(f"Function returned NaN at t={t}: {value}")
    return float(value)


# ===========================================================================
# Finders
# ===========================================================================

def bisect_to_step(eps: float = DEFAULT_STEP_TOLERANCE) -> Finder:
    """Bisection stopping once the bracket is narrower than *eps*."""

    def find(fun: SectionFunction, value: float) -> float:
        n, p = 0.0, 1.0
        sign = 1.0 if _evaluate(fun, 1.0) >= _evaluate(fun, 0.0) else -1.0
        while p - n > eps:
            m = (n + p) / 2
            d = (_evaluate(fun, m) - value) * sign
            if d > 0:
                p = m
            elif d < 0:
                n = m
            else:
                return m
        return (n + p) / 2

    return find


def bisect_to_value(
    eps: float = DEFAULT_VALUE_TOLERANCE,
    max_steps: int = MAX_BISECTION_STEPS,
) -> Finder:
    """Bisection stopping once the field is within *eps* of the target.

    Gives up after *max_steps* halvings and returns the bracket centre.
    """

    def find(fun: SectionFunction, value: float) -> float:
        n, p = 0.0, 1.0
        sign = 1.0 if _evaluate(fun, 1.0) >= _evaluate(fun, 0.0) else -1.0
        for _ in range(max_steps):
            m = (n + p) / 2
            mval = _evaluate(fun, m)
            if abs(mval - value) < eps:
                return m
            if (mval - value) * sign > 0:
                p = m
            else:
                n = m
        logger.debug("bisection hit %d steps without reaching eps=%g", max_steps, eps)
        return (n + p) / 2

    return find


def linear_interpolation(fun: SectionFunction, value: float) -> float:
    """Closed-form root of the line through ``fun(0)`` and ``fun(1)``."""
    f0 = _evaluate(fun, 0.0)
    k = _evaluate(fun, 1.0) - f0
    if k == 0:
        return 0.5
    return (value - f0) / k


# ===========================================================================
# Point and polyline refinement
# ===========================================================================

def refine_point(
    f: Callable[[float, float], Optional[float]],
    value: float,
    middle: Sequence[float],
    method: Finder = linear_interpolation,
) -> Point:
    """Move a coarse isoline point to where *f* equals *value* on its section."""
    section = section_for_midpoint(middle)
    t = method(lambda s: f(*section.point(s)), value)
    return section.point(t)


def refine_polyline(
    f: Callable[[float, float], Optional[float]],
    value: float,
    polyline,
    method: Finder = linear_interpolation,
) -> _Array:
    """Refine every point of *polyline*; the input array is left untouched."""
    points = np.asarray(polyline, dtype=np.float64).reshape(-1, 2)
    refined = [refine_point(f, value, point, method) for point in points]
    return np.array(refined, dtype=np.float64).reshape(-1, 2)


def refine_isolines(
    f: Callable[[float, float], Optional[float]],
    levels: Sequence[float],
    isolines: Sequence[LevelStructure[_Array]],
    method: Finder = linear_interpolation,
) -> List[LevelStructure[_Array]]:
    """Refine the output of :func:`isolines.get_isolines` level by level.

    Raises :class:`RefinementError` if the field is undefined or NaN on a
    section; the coarse structures passed in are not modified.
    """

    def refiner(value: float) -> Callable[[_Array], _Array]:
        return lambda line: refine_polyline(f, value, line, method)

    return [
        structure.map(refiner(float(value)))
        for value, structure in zip(levels, isolines)
    ]
