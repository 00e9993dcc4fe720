"""Renders one frame of the demo scene: a Hermite curve, a Cardinal spline and Bezier curves.

The scene is drawn on a 200x200 logical grid and painted onto a Pillow image
with 4x4 image pixels per logical pixel. Call ``main(show=True)`` to open the
result in the default image viewer.
"""

import logging

from pixcurve.common import CurveType
from pixcurve.renderer import CurveRenderer, RenderConfig
from pixcurve.surface import PilSurface

PIXELS = 200
CELL_SIZE = 4
SEGMENTS = 20
LINE_COLOR = "rgb(255, 255, 255)"


def render_frame(renderer: CurveRenderer) -> int:
    """Draw all curves of the scene and return the number of evaluated points."""
    size_x, size_y = renderer.size_x, renderer.size_y
    renderer.clear()

    hermite_controls = [
        {"x": size_x / 10, "y": size_y / 2},
        {"x": 30, "y": 40},
        {"x": size_x * 9 / 10, "y": size_y / 2},
        {"x": -40, "y": 60},
    ]
    cardinal_controls = {
        "points": [
            {"x": size_x / 100, "y": size_y / 100},
            {"x": size_x / 4, "y": size_y / 20},
            {"x": size_x * 2 / 4, "y": size_y / 3},
            {"x": size_x * 2.5 / 4, "y": size_y / 20},
            {"x": size_x * 99 / 100, "y": size_y / 100},
        ],
        "tension": 0,
    }
    cubic_controls = [(20, 190), (60, 120), (140, 120), (180, 190)]
    quartic_controls = [(20, 150), (50, 100), (100, 170), (150, 100), (180, 150)]

    count = 0
    count += len(renderer.draw_curve(CurveType.HERMITE, hermite_controls, SEGMENTS, True, True, True, LINE_COLOR))
    count += len(renderer.draw_curve(CurveType.CARDINAL, cardinal_controls, SEGMENTS, True, True, True, LINE_COLOR))
    count += len(renderer.draw_curve(CurveType.BEZIER, cubic_controls, SEGMENTS, True, True, True, LINE_COLOR))
    count += len(renderer.draw_curve(CurveType.BEZIER, quartic_controls, SEGMENTS, False, True, True, LINE_COLOR))
    return count


def main(show: bool = False) -> None:
    """Render the scene once and report what was drawn."""
    logging.basicConfig(level=logging.INFO)

    surface = PilSurface(PIXELS, PIXELS, cell_size=CELL_SIZE, show_pixels=True)
    renderer = CurveRenderer(RenderConfig(width=PIXELS, height=PIXELS), surface=surface)

    count = render_frame(renderer)
    print(f"evaluated points: {count}")
    print(f"painted pixels:   {renderer.framebuffer.painted_count}")
    print(f"cached tables:    {renderer.evaluator.cache.cache_info()}")

    if show:
        surface.image.show()


if __name__ == "__main__":
    main(show=True)
