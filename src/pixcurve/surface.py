"""Host drawing surfaces that physically paint the logical pixels of a framebuffer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Tuple

import PIL.Image
import PIL.ImageColor
import PIL.ImageDraw

from pixcurve.common import ColorToken
from pixcurve.consts import SURFACE_BACKGROUND, SURFACE_GRID_COLOR


class PixelSurface(ABC):
    """Abstract host surface receiving the pixel writes of a framebuffer.

    Coordinates passed to ``fill_pixel`` are already truncated to integers and
    lie inside the logical grid.
    """

    @abstractmethod
    def clear(self) -> None:
        """Reset the whole surface to its background."""

    @abstractmethod
    def fill_pixel(self, x: int, y: int, color: ColorToken) -> None:
        """Paint the logical pixel (x, y) with the given colour token."""


class PilSurface(PixelSurface):
    """Pillow backed surface painting every logical pixel as a square block.

    Colour tokens are parsed with ``PIL.ImageColor.getrgb``, so CSS-like
    strings such as ``"rgb(255, 255, 255)"`` or ``"#ff0000"`` as well as RGB
    tuples are accepted.

    Coordinate System:
        - Origin (0, 0) is at the top-left corner
        - X increases from left to right
        - Y increases from top to bottom
    """

    def __init__(
        # pylint: disable=too-many-arguments,too-many-positional-arguments
        self,
        pixels_x: int,
        pixels_y: int,
        cell_size: int = 1,
        show_pixels: bool = False,
        background: ColorToken = SURFACE_BACKGROUND,
    ):
        """Initialize the surface with a blank RGB image.

        Args:
            pixels_x: Number of logical pixels in x-direction
            pixels_y: Number of logical pixels in y-direction
            cell_size: Edge length of one logical pixel in image pixels
            show_pixels: If True, a light grid outlining the logical pixels is drawn on clear
            background: Colour token of the background
        """
        if pixels_x <= 0 or pixels_y <= 0:
            raise ValueError("Surface dimensions must be positive integers")
        if cell_size <= 0:
            raise ValueError("cell_size must be a positive integer")

        self._pixels_x = pixels_x
        self._pixels_y = pixels_y
        self._cell_size = cell_size
        self._show_pixels = show_pixels
        self._colors: Dict[str, Tuple[int, int, int]] = {}
        self._background = self._rgb(background)
        self._image = PIL.Image.new("RGB", (pixels_x * cell_size, pixels_y * cell_size), self._background)
        self._draw = PIL.ImageDraw.Draw(self._image)
        self.clear()

    @property
    def image(self) -> PIL.Image.Image:
        """The painted Pillow image (shared, not a copy)."""
        return self._image

    @property
    def cell_size(self) -> int:
        """Edge length of one logical pixel in image pixels."""
        return self._cell_size

    def _rgb(self, color: ColorToken) -> Tuple[int, int, int]:
        if isinstance(color, tuple):
            return tuple(int(c) for c in color[:3])  # type: ignore[return-value]
        rgb = self._colors.get(color)
        if rgb is None:
            rgb = PIL.ImageColor.getrgb(color)[:3]
            self._colors[color] = rgb
        return rgb

    def clear(self) -> None:
        width, height = self._image.size
        self._draw.rectangle((0, 0, width - 1, height - 1), fill=self._background)

        if self._show_pixels and self._cell_size > 1:
            grid = self._rgb(SURFACE_GRID_COLOR)
            for y in range(0, height, self._cell_size):
                self._draw.line((0, y, width - 1, y), fill=grid)
            for x in range(0, width, self._cell_size):
                self._draw.line((x, 0, x, height - 1), fill=grid)

    def fill_pixel(self, x: int, y: int, color: ColorToken) -> None:
        size = self._cell_size
        if size == 1:
            self._image.putpixel((x, y), self._rgb(color))
            return
        left = x * size
        top = y * size
        self._draw.rectangle((left, top, left + size - 1, top + size - 1), fill=self._rgb(color))
