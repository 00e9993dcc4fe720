"""Integer Bresenham line rasterization onto a pixel framebuffer."""

from __future__ import annotations

import logging
import math
from typing import Iterable, Iterator, List, Tuple

from pixcurve.common import ColorToken, Point
from pixcurve.framebuffer import PixelFramebuffer

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity."""
    return int(math.floor(value + 0.5))


class LineRasterizer:
    """Draws straight lines with the sign-based Bresenham algorithm.

    For rounded endpoints with ``dx = |x1 - x0|`` and ``dy = |y1 - y0|``
    exactly ``max(dx, dy) + 1`` pixels are painted, both endpoints included,
    each one a single 8-connected step away from its predecessor. The pixel
    set does not depend on the drawing direction.
    """

    def __init__(self, framebuffer: PixelFramebuffer):
        self._framebuffer = framebuffer

    @property
    def framebuffer(self) -> PixelFramebuffer:
        """The framebuffer painted into."""
        return self._framebuffer

    @staticmethod
    def _rounded_endpoints(x0: float, y0: float, x1: float, y1: float) -> Tuple[int, int, int, int]:
        if not all(math.isfinite(v) for v in (x0, y0, x1, y1)):
            raise ValueError(f"Line endpoints must be finite: ({x0}, {y0}) -> ({x1}, {y1})")
        return round_half_up(x0), round_half_up(y0), round_half_up(x1), round_half_up(y1)

    @staticmethod
    def _trace(x: int, y: int, x_end: int, y_end: int) -> Iterator[Tuple[int, int]]:
        dx = abs(x_end - x)
        dy = abs(y_end - y)
        sx = 1 if x < x_end else -1
        sy = 1 if y < y_end else -1
        err = dx - dy

        while True:
            yield x, y
            if x == x_end and y == y_end:
                return
            e2 = 2 * err
            if e2 > -dy:
                err -= dy
                x += sx
            if e2 < dx:
                err += dx
                y += sy

    @staticmethod
    def iter_line_pixels(x0: float, y0: float, x1: float, y1: float) -> Iterator[Tuple[int, int]]:
        """Yield the pixels of the line lazily, starting at the lexicographically smaller rounded endpoint.

        The error term breaks ties depending on the direction of travel, so
        lines are always traced in this canonical direction. Along it x never
        decreases and y moves monotonically.

        Raises:
            ValueError: If one of the coordinates is not finite
        """
        x, y, x_end, y_end = LineRasterizer._rounded_endpoints(x0, y0, x1, y1)
        if (x_end, y_end) < (x, y):
            x, y, x_end, y_end = x_end, y_end, x, y
        return LineRasterizer._trace(x, y, x_end, y_end)

    @staticmethod
    def line_pixels(x0: float, y0: float, x1: float, y1: float) -> List[Tuple[int, int]]:
        """Return the pixels of the line from (x0, y0) to (x1, y1) in drawing order.

        Raises:
            ValueError: If one of the coordinates is not finite
        """
        x, y, x_end, y_end = LineRasterizer._rounded_endpoints(x0, y0, x1, y1)
        pixels = list(LineRasterizer.iter_line_pixels(x, y, x_end, y_end))
        if (x_end, y_end) < (x, y):
            pixels.reverse()
        return pixels

    def draw_line(self, x0: float, y0: float, x1: float, y1: float, color: ColorToken) -> None:
        """Paint the line from (x0, y0) to (x1, y1); off-grid pixels are clipped."""
        if not all(math.isfinite(v) for v in (x0, y0, x1, y1)):
            logger.debug("Skipping line with non-finite endpoints (%s, %s) -> (%s, %s)", x0, y0, x1, y1)
            return
        x, y, x_end, y_end = self._rounded_endpoints(x0, y0, x1, y1)
        width, height = self._framebuffer.width, self._framebuffer.height
        if max(x, x_end) < 0 or min(x, x_end) >= width or max(y, y_end) < 0 or min(y, y_end) >= height:
            return

        start, end = sorted(((x, y), (x_end, y_end)))
        y_down = end[1] < start[1]
        for px, py in self.iter_line_pixels(x, y, x_end, y_end):
            # Once past the grid in the direction of travel no pixel can come back
            if px >= width or (py < 0 if y_down else py >= height):
                break
            self._framebuffer.draw_pixel(px, py, color)

    def draw_polyline(self, points: Iterable[Point], color: ColorToken) -> None:
        """Connect consecutive points by straight lines."""
        previous = None
        for point in points:
            if previous is not None:
                self.draw_line(previous.x, previous.y, point.x, point.y, color)
            previous = point
