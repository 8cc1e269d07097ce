"""Tests for isolines.endpoints — seed point matching."""

import numpy as np
import numpy.testing as npt
import pytest

from isolines import LineEnd, append_at_end, attach_points, find_line_ends


LINES = [
    np.array([[0.0, 0.0], [1.0, 0.0], [2.0, 0.0]]),
    np.array([[10.0, 10.0], [10.0, 12.0]]),
]


class TestFindLineEnds:
    def test_nearest_end(self):
        ((point, end),) = find_line_ends([(2.5, 0.5)], LINES)
        assert point == (2.5, 0.5)
        assert end == LineEnd(0, "end", (2.0, 0.0))

    def test_start_end(self):
        ((_, end),) = find_line_ends([(10.2, 9.0)], LINES)
        assert end.index == 1 and end.end == "start"

    def test_no_match_outside_window(self):
        ((_, end),) = find_line_ends([(5.0, 5.0)], LINES)
        assert end is None

    def test_window_is_square(self):
        # Euclidean distance ~2.6 but both offsets inside the window
        ((_, end),) = find_line_ends([(3.9, -1.9)], LINES)
        assert end == LineEnd(0, "end", (2.0, 0.0))

    def test_window_edge_excluded(self):
        ((_, end),) = find_line_ends([(4.0, 0.0)], LINES)
        assert end is None

    def test_tie_keeps_first(self):
        lines = [np.array([[0.0, 0.0], [0.0, 5.0]]), np.array([[2.0, 0.0], [2.0, 5.0]])]
        ((_, end),) = find_line_ends([(1.0, 0.0)], lines)
        assert end.index == 0 and end.end == "start"

    def test_custom_threshold(self):
        ((_, end),) = find_line_ends([(2.5, 0.5)], LINES, threshold=0.4)
        assert end is None

    def test_no_lines(self):
        assert find_line_ends([(0.0, 0.0)], []) == [((0.0, 0.0), None)]

    def test_order_follows_points(self):
        result = find_line_ends([(10.0, 12.5), (-0.5, 0.0)], LINES)
        assert [e.index for _, e in result] == [1, 0]
        assert [e.end for _, e in result] == ["end", "start"]


class TestAppendAtEnd:
    def test_start(self):
        out = append_at_end(LINES[1], "start", (10.0, 9.0))
        npt.assert_array_equal(out, [[10.0, 9.0], [10.0, 10.0], [10.0, 12.0]])

    def test_end(self):
        out = append_at_end(LINES[1], "end", (10.0, 13.0))
        npt.assert_array_equal(out[-1], [10.0, 13.0])
        assert out.shape == (3, 2)

    def test_copy(self):
        append_at_end(LINES[1], "end", (0.0, 0.0))
        assert LINES[1].shape == (2, 2)

    def test_bad_end(self):
        with pytest.raises(ValueError):
            append_at_end(LINES[1], "middle", (0.0, 0.0))


class TestAttachPoints:
    def test_extends_matched_lines(self):
        out = attach_points([(2.5, 0.0), (10.0, 13.0), (50.0, 50.0)], LINES)
        assert out[0].shape == (4, 2)
        npt.assert_array_equal(out[0][-1], [2.5, 0.0])
        npt.assert_array_equal(out[1][-1], [10.0, 13.0])

    def test_originals_untouched(self):
        attach_points([(2.5, 0.0)], LINES)
        assert LINES[0].shape == (3, 2)
