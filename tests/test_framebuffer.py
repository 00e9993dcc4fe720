"""Test module for PixelFramebuffer class

This module tests:
- Pixel writes with truncation
- Silent clipping of out-of-grid and non-finite coordinates
- The X-shaped point marker
- Forwarding to a host surface
"""

import math

import pytest

from pixcurve.framebuffer import PixelFramebuffer
from pixcurve.surface import PixelSurface


class RecordingSurface(PixelSurface):
    """Host surface remembering every call"""

    def __init__(self):
        self.clears = 0
        self.pixels = []

    def clear(self):
        self.clears += 1

    def fill_pixel(self, x, y, color):
        self.pixels.append((x, y, color))


class TestPixelFramebuffer:
    """Test class for PixelFramebuffer functionality"""

    @pytest.fixture
    def framebuffer(self):
        """A 10x8 framebuffer without surface"""
        return PixelFramebuffer(10, 8)

    def test_initial_state(self, framebuffer):
        """A new framebuffer is empty"""
        assert framebuffer.width == 10
        assert framebuffer.height == 8
        assert framebuffer.grid.shape == (8, 10)
        assert framebuffer.painted_count == 0

    @pytest.mark.parametrize("width, height", [(0, 5), (5, 0), (-1, 3)])
    def test_invalid_dimensions(self, width, height):
        """Non-positive dimensions are rejected"""
        with pytest.raises(ValueError, match="positive"):
            PixelFramebuffer(width, height)

    def test_draw_pixel_truncates(self, framebuffer):
        """Coordinates are truncated, not rounded"""
        framebuffer.draw_pixel(3.9, 2.7, "red")
        assert framebuffer.pixel(3, 2) == "red"
        assert framebuffer.painted_pixels() == {(3, 2)}

    def test_draw_pixel_overwrites(self, framebuffer):
        """A later write replaces the colour"""
        framebuffer.draw_pixel(1, 1, "red")
        framebuffer.draw_pixel(1, 1, "blue")
        assert framebuffer.pixel(1, 1) == "blue"
        assert framebuffer.painted_count == 1

    @pytest.mark.parametrize(
        "x, y", [(-1, 0), (0, -1), (10, 0), (0, 8), (1e9, 1e9), (math.nan, 1), (1, math.inf), (-math.inf, 2)]
    )
    def test_out_of_grid_ignored(self, framebuffer, x, y):
        """Writes outside the grid are clipped without error"""
        framebuffer.draw_pixel(x, y, "red")
        assert framebuffer.painted_count == 0

    def test_small_negative_truncates_towards_zero(self, framebuffer):
        """-0.5 truncates to 0 and is therefore inside the grid"""
        framebuffer.draw_pixel(-0.5, -0.5, "red")
        assert framebuffer.painted_pixels() == {(0, 0)}

    def test_draw_point_marker(self, framebuffer):
        """The marker is the centre plus its four diagonal neighbours"""
        framebuffer.draw_point(4.6, 4.2, "green")
        assert framebuffer.painted_pixels() == {(4, 4), (3, 3), (5, 3), (5, 5), (3, 5)}

    def test_draw_point_marker_clipped_at_corner(self, framebuffer):
        """Marker pixels outside the grid are dropped"""
        framebuffer.draw_point(0, 0, "green")
        assert framebuffer.painted_pixels() == {(0, 0), (1, 1)}

    def test_clear(self, framebuffer):
        """clear() resets every pixel to background"""
        framebuffer.draw_point(5, 5, "green")
        framebuffer.clear()
        assert framebuffer.painted_count == 0
        assert framebuffer.pixel(5, 5) is None

    def test_grid_is_read_only(self, framebuffer):
        """The exposed grid cannot be written through"""
        with pytest.raises(ValueError):
            framebuffer.grid[0, 0] = "red"

    def test_pixel_outside_grid(self, framebuffer):
        """Querying outside the grid returns None"""
        assert framebuffer.pixel(-1, 100) is None


class TestSurfaceForwarding:
    """Tests for forwarding of pixel writes to the host surface"""

    def test_in_grid_pixels_forwarded(self):
        """Only clipped, truncated pixels reach the surface"""
        surface = RecordingSurface()
        framebuffer = PixelFramebuffer(4, 4, surface)
        framebuffer.draw_pixel(1.7, 2.2, "red")
        framebuffer.draw_pixel(10, 10, "red")
        assert surface.pixels == [(1, 2, "red")]
        assert framebuffer.surface is surface

    def test_clear_forwarded(self):
        """clear() also clears the surface"""
        surface = RecordingSurface()
        framebuffer = PixelFramebuffer(4, 4, surface)
        framebuffer.clear()
        assert surface.clears == 1
