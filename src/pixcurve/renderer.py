"""Curve renderer combining evaluation, line rasterization and overlays on a pixel framebuffer."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Union

from pixcurve.basis import BasisCache
from pixcurve.common import (
    ColorToken,
    Controls,
    CurveType,
    CurveValidationError,
    HermiteControls,
    Point,
    SegmentCountError,
    coerce_controls,
)
from pixcurve.consts import (
    CONTROL_COLOR,
    DEFAULT_PIXELS_X,
    DEFAULT_PIXELS_Y,
    OVERLAY_COLOR,
    POINT_COLOR,
    TANGENT_SCALE,
)
from pixcurve.curves import CurveEvaluator
from pixcurve.framebuffer import PixelFramebuffer
from pixcurve.line import LineRasterizer
from pixcurve.surface import PixelSurface

logger = logging.getLogger(__name__)


@dataclass
class RenderConfig:
    """Configuration options shared across render calls."""

    width: int = DEFAULT_PIXELS_X
    height: int = DEFAULT_PIXELS_Y
    point_color: ColorToken = POINT_COLOR
    control_color: ColorToken = CONTROL_COLOR
    overlay_color: ColorToken = OVERLAY_COLOR
    tangent_scale: float = TANGENT_SCALE

    def validate(self) -> None:
        """Check the configuration values.

        Raises:
            ValueError: If the grid size or tangent scale is invalid
        """
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Grid dimensions must be positive integers")
        if self.tangent_scale <= 0:
            raise ValueError("tangent_scale must be positive")


class CurveRenderer:
    """Drawing API for a logical pixel grid.

    Offers ``clear``, ``draw_pixel``, ``draw_line`` and ``draw_curve``. The
    renderer owns its framebuffer, line rasterizer and basis cache, so the
    derived coefficient tables live exactly as long as the renderer.

    A malformed curve never raises out of ``draw_curve``: it is logged and
    skipped, leaving the other curves of the frame untouched.
    """

    Curve = CurveType

    def __init__(
        self,
        config: Optional[RenderConfig] = None,
        *,
        surface: Optional[PixelSurface] = None,
        cache: Optional[BasisCache] = None,
    ):
        """Initialize the renderer.

        Args:
            config: Grid size and overlay colours; defaults are used if omitted
            surface: Optional host surface which physically paints the pixels
            cache: Optional basis cache to share between renderers
        """
        self.config = config or RenderConfig()
        self.config.validate()
        self._framebuffer = PixelFramebuffer(self.config.width, self.config.height, surface)
        self._rasterizer = LineRasterizer(self._framebuffer)
        self._evaluator = CurveEvaluator(cache)

    @property
    def size_x(self) -> int:
        """Number of logical pixels in x-direction."""
        return self._framebuffer.width

    @property
    def size_y(self) -> int:
        """Number of logical pixels in y-direction."""
        return self._framebuffer.height

    @property
    def framebuffer(self) -> PixelFramebuffer:
        """The framebuffer painted into."""
        return self._framebuffer

    @property
    def evaluator(self) -> CurveEvaluator:
        """The curve evaluator (and through it the basis cache)."""
        return self._evaluator

    def clear(self) -> None:
        """Reset the whole grid to background."""
        self._framebuffer.clear()

    def draw_pixel(self, x: float, y: float, color: ColorToken) -> None:
        """Paint a single pixel at the truncated coordinates."""
        self._framebuffer.draw_pixel(x, y, color)

    def draw_line(self, x0: float, y0: float, x1: float, y1: float, color: ColorToken) -> None:
        """Paint a Bresenham line between the rounded endpoints."""
        self._rasterizer.draw_line(x0, y0, x1, y1, color)

    def draw_curve(
        # pylint: disable=too-many-arguments,too-many-positional-arguments
        self,
        curve_type: Union[CurveType, int],
        controls: Any,
        segments: int,
        show_points: bool,
        show_line: bool,
        show_controls: bool,
        color: ColorToken,
    ) -> List[Point]:
        """Evaluate a curve and paint the requested parts of it.

        Args:
            curve_type: CurveType member or its integer value (Hermite 0, Cardinal 1, Bezier 2)
            controls: Hermite [P0, T0, P1, T1], Cardinal {"points", "tension"} or Bezier points
            segments: Number of line segments (per point pair for Cardinal)
            show_points: Mark every evaluated point with the configured point colour
            show_line: Connect the evaluated points with lines in ``color``
            show_controls: Draw control markers, tangents (Hermite) or the control polygon
            color: Colour token of the curve line

        Returns:
            List[Point]: The evaluated points, or an empty list if the curve was rejected
        """
        try:
            controls = coerce_controls(curve_type, controls)
            points = self._evaluator.evaluate(curve_type, controls, segments)
        except SegmentCountError as err:
            logger.warning("Skipping curve: %s", err)
            return []
        except CurveValidationError as err:
            logger.error("Skipping invalid curve of type %r: %s", curve_type, err)
            return []

        try:
            if show_line:
                self._rasterizer.draw_polyline(points, color)
            if show_points:
                for point in points:
                    self._framebuffer.draw_point(point.x, point.y, self.config.point_color)
            if show_controls:
                self._draw_controls(controls)
        except (TypeError, ValueError) as err:
            # Raised by the host surface, e.g. for a colour token it cannot parse
            logger.error("Failed to paint %s curve: %s", CurveType(curve_type).name, err)
        return points

    def _draw_controls(self, controls: Controls) -> None:
        if isinstance(controls, HermiteControls):
            scale = self.config.tangent_scale
            for point, tangent in ((controls.p0, controls.t0), (controls.p1, controls.t1)):
                self._framebuffer.draw_point(point.x, point.y, self.config.control_color)
                self._rasterizer.draw_line(
                    point.x,
                    point.y,
                    point.x + scale * tangent.x,
                    point.y + scale * tangent.y,
                    self.config.control_color,
                )
            return

        self._rasterizer.draw_polyline(controls.points, self.config.overlay_color)
        for point in controls.points:
            self._framebuffer.draw_point(point.x, point.y, self.config.control_color)
