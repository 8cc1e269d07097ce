"""Tests for isolines.refine — sub-pixel refinement strategies."""

import math

import numpy as np
import numpy.testing as npt
import pytest

from isolines import (
    RefinementError,
    Section,
    bisect_to_step,
    bisect_to_value,
    get_isolines,
    linear_interpolation,
    refine_isolines,
    refine_point,
    refine_polyline,
    section_for_midpoint,
)


def _circle(x, y):
    return math.hypot(x - 8.0, y - 8.0)


# ===========================================================================
# Sections
# ===========================================================================

class TestSection:
    def test_horizontal_pair(self):
        s = section_for_midpoint((2.5, 3.0))
        assert s == Section("y", (2, 3), (3, 3))

    def test_vertical_pair(self):
        s = section_for_midpoint((4.0, 0.5))
        assert s == Section("x", (4, 0), (4, 1))

    def test_negative_half(self):
        s = section_for_midpoint((-0.5, 0.0))
        assert s.start == (-1, 0) and s.end == (0, 0)

    def test_point_parametrisation(self):
        s = Section("y", (2, 3), (3, 3))
        assert s.point(0.0) == (2.0, 3.0)
        assert s.point(1.0) == (3.0, 3.0)
        assert s.point(0.25) == (2.25, 3.0)

    @pytest.mark.parametrize("middle", [(1.0, 2.0), (1.5, 2.5)])
    def test_rejects_ambiguous(self, middle):
        with pytest.raises(ValueError):
            section_for_midpoint(middle)


# ===========================================================================
# Finders
# ===========================================================================

class TestFinders:
    @pytest.mark.parametrize("finder", [
        linear_interpolation,
        bisect_to_step(1e-6),
        bisect_to_value(1e-9),
    ])
    def test_linear_function(self, finder):
        t = finder(lambda s: 2.0 + 4.0 * s, 3.0)
        assert t == pytest.approx(0.25, abs=1e-5)

    @pytest.mark.parametrize("finder", [bisect_to_step(1e-6), bisect_to_value(1e-9)])
    def test_decreasing_function(self, finder):
        t = finder(lambda s: 1.0 - s ** 2, 0.75)
        assert t == pytest.approx(0.5, abs=1e-5)

    def test_step_tolerance_bounds_error(self):
        t = bisect_to_step(0.1)(lambda s: s ** 3, 0.125)
        assert abs(t - 0.5) <= 0.1

    def test_value_tolerance(self):
        fun = lambda s: math.sin(s)
        t = bisect_to_value(1e-8)(fun, 0.5)
        assert abs(fun(t) - 0.5) < 1e-8

    def test_value_bisection_runs_on_unit_bracket(self):
        calls = []

        def fun(s):
            calls.append(s)
            return s

        bisect_to_value(1e-6)(fun, 0.3)
        assert any(0.0 < s < 1.0 for s in calls)

    def test_value_bisection_step_cap(self):
        t = bisect_to_value(0.0, max_steps=5)(lambda s: s, 0.3)
        assert 0.0 <= t <= 1.0

    def test_linear_flat_bracket(self):
        assert linear_interpolation(lambda s: 1.0, 1.0) == 0.5

    @pytest.mark.parametrize("finder", [
        linear_interpolation,
        bisect_to_step(1e-3),
        bisect_to_value(1e-3),
    ])
    def test_nan_raises(self, finder):
        with pytest.raises(RefinementError):
            finder(lambda s: math.nan, 0.5)

    def test_undefined_raises(self):
        with pytest.raises(RefinementError):
            linear_interpolation(lambda s: None, 0.5)

    def test_refinement_error_is_arithmetic(self):
        with pytest.raises(ArithmeticError):
            bisect_to_step()(lambda s: math.nan if s > 0.4 else s, 0.3)


# ===========================================================================
# Points and polylines
# ===========================================================================

class TestRefinePoint:
    def test_linear_field_exact(self):
        f = lambda x, y: 2.0 * x + y
        px, py = refine_point(f, 5.5, (1.5, 2.0))
        assert (px, py) == pytest.approx((1.75, 2.0))

    def test_bisection_on_circle(self):
        px, py = refine_point(_circle, 3.3, (11.5, 8.0), bisect_to_step(1e-9))
        assert (px, py) == pytest.approx((11.3, 8.0), abs=1e-8)

    def test_polyline_keeps_input(self):
        line = np.array([[1.5, 2.0], [1.0, 2.5]])
        before = line.copy()
        refined = refine_polyline(lambda x, y: x + y, 3.2, line)
        npt.assert_array_equal(line, before)
        npt.assert_allclose(refined, [[1.2, 2.0], [1.0, 2.2]])


class TestRefineIsolines:
    def test_refined_points_on_circle(self):
        radius = 5.3
        coarse = get_isolines(_circle, [radius], 17, 17)
        refined = refine_isolines(_circle, [radius], coarse, bisect_to_step(1e-9))
        (loop,) = refined[0].closed
        dist = np.hypot(loop[:, 0] - 8.0, loop[:, 1] - 8.0)
        npt.assert_allclose(dist, radius, atol=1e-6)
        npt.assert_array_equal(loop[0], loop[-1])

    def test_linear_refinement_improves_coarse(self):
        radius = 5.3
        coarse = get_isolines(_circle, [radius], 17, 17)
        refined = refine_isolines(_circle, [radius], coarse)
        c = coarse[0].closed[0]
        r = refined[0].closed[0]
        err_c = np.abs(np.hypot(c[:, 0] - 8, c[:, 1] - 8) - radius).max()
        err_r = np.abs(np.hypot(r[:, 0] - 8, r[:, 1] - 8) - radius).max()
        assert err_r < err_c

    def test_failure_leaves_coarse_intact(self):
        coarse = get_isolines(_circle, [5.3], 17, 17)
        snapshot = coarse[0].closed[0].copy()
        with pytest.raises(RefinementError):
            refine_isolines(lambda x, y: math.nan, [5.3], coarse)
        npt.assert_array_equal(coarse[0].closed[0], snapshot)
