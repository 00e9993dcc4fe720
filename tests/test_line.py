"""Test module for LineRasterizer class

The tests are run using pytest.
"""

import itertools
import math
import tracemalloc

import pytest

from pixcurve.common import Point
from pixcurve.framebuffer import PixelFramebuffer
from pixcurve.line import LineRasterizer, round_half_up

# Endpoint pairs covering all eight octants, axis-parallel lines, diagonals and single pixels
LINE_CASES = [
    ((0, 0), (0, 0)),
    ((0, 0), (10, 0)),
    ((0, 0), (0, 10)),
    ((10, 0), (0, 0)),
    ((0, 10), (0, 0)),
    ((0, 0), (7, 7)),
    ((7, 0), (0, 7)),
    ((2, 3), (17, 8)),
    ((2, 3), (8, 17)),
    ((17, 3), (2, 8)),
    ((8, 3), (2, 17)),
    ((17, 8), (2, 3)),
    ((8, 17), (2, 3)),
    ((2, 8), (17, 3)),
    ((2, 17), (8, 3)),
    ((0, 0), (2, 1)),
    ((1, 0), (0, 5)),
]


def _chebyshev(a, b):
    return max(abs(a[0] - b[0]), abs(a[1] - b[1]))


class TestLinePixels:
    """Tests for the pixel sequence of a line"""

    @pytest.mark.parametrize("start, end", LINE_CASES)
    def test_pixel_count(self, start, end):
        """Exactly max(dx, dy) + 1 pixels"""
        pixels = LineRasterizer.line_pixels(*start, *end)
        assert len(pixels) == max(abs(end[0] - start[0]), abs(end[1] - start[1])) + 1

    @pytest.mark.parametrize("start, end", LINE_CASES)
    def test_endpoints_included_in_order(self, start, end):
        """The sequence starts at the first and ends at the second endpoint"""
        pixels = LineRasterizer.line_pixels(*start, *end)
        assert pixels[0] == start
        assert pixels[-1] == end

    @pytest.mark.parametrize("start, end", LINE_CASES)
    def test_single_steps_without_duplicates(self, start, end):
        """Consecutive pixels are 8-connected neighbours and no pixel repeats"""
        pixels = LineRasterizer.line_pixels(*start, *end)
        assert len(set(pixels)) == len(pixels)
        for a, b in zip(pixels, pixels[1:]):
            assert _chebyshev(a, b) == 1

    @pytest.mark.parametrize("start, end", LINE_CASES)
    def test_direction_symmetry(self, start, end):
        """Drawing in the opposite direction yields the same pixel set"""
        forward = LineRasterizer.line_pixels(*start, *end)
        backward = LineRasterizer.line_pixels(*end, *start)
        assert set(forward) == set(backward)

    def test_symmetry_exhaustive_small_grid(self):
        """Symmetry and pixel count for every pair of endpoints in a 6x6 grid"""
        grid = list(itertools.product(range(6), range(6)))
        for start, end in itertools.product(grid, grid):
            forward = LineRasterizer.line_pixels(*start, *end)
            backward = LineRasterizer.line_pixels(*end, *start)
            assert set(forward) == set(backward)
            assert len(forward) == _chebyshev(start, end) + 1

    def test_shallow_line_pixels(self):
        """Known pixel sequence of a shallow line"""
        assert LineRasterizer.line_pixels(0, 0, 4, 2) == [(0, 0), (1, 0), (2, 1), (3, 1), (4, 2)]

    def test_endpoints_rounded(self):
        """Float endpoints are rounded half-up before rasterization"""
        pixels = LineRasterizer.line_pixels(0.4, 0.5, 2.5, -0.5)
        assert pixels[0] == (0, 1)
        assert pixels[-1] == (3, 0)

    def test_non_finite_endpoint(self):
        """Non-finite endpoints are rejected"""
        with pytest.raises(ValueError, match="finite"):
            LineRasterizer.line_pixels(0, 0, math.nan, 1)

    def test_iter_line_pixels_is_lazy(self):
        """The pixel iterator starts at the smaller endpoint and yields on demand"""
        pixels = LineRasterizer.iter_line_pixels(10**9, 5, 0, 5)
        assert next(pixels) == (0, 5)
        assert next(pixels) == (1, 5)


class TestDrawLine:
    """Tests for painting lines into a framebuffer"""

    @pytest.fixture
    def rasterizer(self):
        """A rasterizer on a 20x20 framebuffer"""
        return LineRasterizer(PixelFramebuffer(20, 20))

    @pytest.mark.parametrize("start, end", LINE_CASES)
    def test_painted_pixels_match(self, rasterizer, start, end):
        """The framebuffer receives exactly the line pixels"""
        rasterizer.draw_line(*start, *end, "white")
        assert rasterizer.framebuffer.painted_pixels() == set(LineRasterizer.line_pixels(*start, *end))
        assert rasterizer.framebuffer.painted_count == _chebyshev(start, end) + 1

    def test_line_clipped_at_border(self, rasterizer):
        """Only the in-grid part of an overshooting line is painted"""
        rasterizer.draw_line(-5, 10, 25, 10, "white")
        assert rasterizer.framebuffer.painted_pixels() == {(x, 10) for x in range(20)}

    @pytest.mark.parametrize(
        "start, end",
        [
            ((-30, 5), (50, 12)),
            ((50, 12), (-30, 5)),
            ((-7, 40), (30, -15)),
            ((30, -15), (-7, 40)),
            ((3, -100), (9, 100)),
            ((25, 19), (-5, -1)),
        ],
    )
    def test_crossing_lines_match_clipped_pixels(self, rasterizer, start, end):
        """Lines crossing the border paint exactly their in-grid pixels"""
        rasterizer.draw_line(*start, *end, "white")
        expected = {(x, y) for x, y in LineRasterizer.line_pixels(*start, *end) if 0 <= x < 20 and 0 <= y < 20}
        assert expected
        assert rasterizer.framebuffer.painted_pixels() == expected

    @pytest.mark.parametrize("start, end", [((-10, -10), (-1, 30)), ((20, 0), (40, 5)), ((0, 25), (19, 60))])
    def test_line_beside_grid(self, rasterizer, start, end):
        """Lines that never touch the grid paint nothing"""
        rasterizer.draw_line(*start, *end, "white")
        assert rasterizer.framebuffer.painted_count == 0

    def test_long_line_memory_bounded(self, rasterizer):
        """A line running far beyond the grid is not materialized"""
        tracemalloc.start()
        try:
            rasterizer.draw_line(0, 0, 3_000_000, 0, "white")
            rasterizer.draw_line(0, 19, 19, -3_000_000, "white")
            _, peak = tracemalloc.get_traced_memory()
        finally:
            tracemalloc.stop()
        assert peak < 1_000_000
        assert {(x, 0) for x in range(20)} <= rasterizer.framebuffer.painted_pixels()
        assert (0, 19) in rasterizer.framebuffer.painted_pixels()

    def test_non_finite_line_skipped(self, rasterizer):
        """Lines with non-finite endpoints are skipped silently"""
        rasterizer.draw_line(0, 0, math.inf, 5, "white")
        assert rasterizer.framebuffer.painted_count == 0

    def test_polyline(self, rasterizer):
        """A polyline joins consecutive points"""
        points = [Point(0, 0), Point(5, 0), Point(5, 5)]
        rasterizer.draw_polyline(points, "white")
        expected = {(x, 0) for x in range(6)} | {(5, y) for y in range(6)}
        assert rasterizer.framebuffer.painted_pixels() == expected

    def test_polyline_single_point(self, rasterizer):
        """A single point draws nothing"""
        rasterizer.draw_polyline([Point(3, 3)], "white")
        assert rasterizer.framebuffer.painted_count == 0


@pytest.mark.parametrize(
    "value, expected", [(0.5, 1), (1.49, 1), (-0.5, 0), (-0.51, -1), (2.5, 3), (-2.5, -2), (3.0, 3)]
)
def test_round_half_up(value, expected):
    """Halves are rounded towards positive infinity"""
    assert round_half_up(value) == expected
