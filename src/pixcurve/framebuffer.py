"""Logical pixel grid used as drawing target for lines and curves."""

from __future__ import annotations

import math
from typing import Optional, Set, Tuple

import numpy as np

from pixcurve.common import ColorToken
from pixcurve.consts import MARKER_OFFSETS
from pixcurve.surface import PixelSurface


class PixelFramebuffer:
    """A ``width x height`` grid of colour tokens.

    The grid is stored as a NumPy ``object`` array of shape (height, width),
    indexed ``[y, x]``, with ``None`` marking background pixels. Every
    in-grid write is forwarded to the optional host surface.

    Coordinates outside the grid (or non-finite ones) are silently ignored,
    since curves with extreme controls are expected to overshoot.
    """

    def __init__(self, width: int, height: int, surface: Optional[PixelSurface] = None):
        """Initialize an empty framebuffer.

        Args:
            width: Number of pixels in x-direction
            height: Number of pixels in y-direction
            surface: Optional host surface which physically paints the pixels
        """
        if width <= 0 or height <= 0:
            raise ValueError("Framebuffer dimensions must be positive integers")

        self._width = width
        self._height = height
        self._surface = surface
        self._grid = np.full((height, width), None, dtype=object)

    @property
    def width(self) -> int:
        """Number of pixels in x-direction."""
        return self._width

    @property
    def height(self) -> int:
        """Number of pixels in y-direction."""
        return self._height

    @property
    def surface(self) -> Optional[PixelSurface]:
        """The attached host surface, if any."""
        return self._surface

    @property
    def grid(self) -> np.ndarray:
        """Read-only view of the colour grid indexed [y, x]."""
        view = self._grid.view()
        view.flags.writeable = False
        return view

    @property
    def painted_count(self) -> int:
        """Number of non-background pixels."""
        return int(np.count_nonzero(self._grid != None))  # pylint: disable=singleton-comparison

    def clear(self) -> None:
        """Reset every pixel to background."""
        self._grid.fill(None)
        if self._surface is not None:
            self._surface.clear()

    def contains(self, x: int, y: int) -> bool:
        """True if the integer pixel (x, y) lies inside the grid."""
        return 0 <= x < self._width and 0 <= y < self._height

    def draw_pixel(self, x: float, y: float, color: ColorToken) -> None:
        """Paint the pixel at the truncated coordinates (x, y)."""
        if not (math.isfinite(x) and math.isfinite(y)):
            return
        self._set(math.trunc(x), math.trunc(y), color)

    def draw_point(self, x: float, y: float, color: ColorToken) -> None:
        """Paint an X-shaped 5 pixel marker centered at the truncated (x, y)."""
        if not (math.isfinite(x) and math.isfinite(y)):
            return
        cx = math.trunc(x)
        cy = math.trunc(y)
        for dx, dy in MARKER_OFFSETS:
            self._set(cx + dx, cy + dy, color)

    def _set(self, x: int, y: int, color: ColorToken) -> None:
        if not self.contains(x, y):
            return
        self._grid[y, x] = color
        if self._surface is not None:
            self._surface.fill_pixel(x, y, color)

    def pixel(self, x: int, y: int) -> Optional[ColorToken]:
        """Colour token at (x, y), or None for background and out-of-grid pixels."""
        if not self.contains(x, y):
            return None
        return self._grid[y, x]

    def painted_pixels(self) -> Set[Tuple[int, int]]:
        """Set of (x, y) coordinates of all non-background pixels."""
        ys, xs = np.nonzero(self._grid != None)  # pylint: disable=singleton-comparison
        return {(int(x), int(y)) for x, y in zip(xs, ys)}
