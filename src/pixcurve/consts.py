"""Central module containing constants and defaults"""

from __future__ import annotations

from typing import Tuple

# Logical grid size used by the demo scene
DEFAULT_PIXELS_X: int = 1000
DEFAULT_PIXELS_Y: int = 1000

# Colours of the overlays drawn by the curve renderer
POINT_COLOR: str = "rgb(255, 0, 0)"  # evaluated sample markers
CONTROL_COLOR: str = "rgb(0, 255, 0)"  # control point markers and tangent indicators
OVERLAY_COLOR: str = "rgb(100, 100, 255)"  # control polygon

# Tangents are drawn scaled down so the indicator stays on screen
TANGENT_SCALE: float = 0.25

# Offsets of the X-shaped point marker: centre plus the four diagonal neighbours
MARKER_OFFSETS: Tuple[Tuple[int, int], ...] = ((-1, -1), (1, -1), (0, 0), (1, 1), (-1, 1))

# Pillow surface defaults
SURFACE_BACKGROUND: str = "rgb(0, 0, 0)"
SURFACE_GRID_COLOR: str = "rgb(150, 150, 150)"
