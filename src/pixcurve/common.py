"""Central module containing the value types, enums and exceptions for curve rasterization."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from numbers import Integral
from typing import Any, List, Sequence, Tuple, Union

###############################################################################
# Types
###############################################################################

# Opaque colour value, only meaningful to the host surface (e.g. "rgb(255, 255, 255)")
ColorToken = Any


###############################################################################
# Exceptions
###############################################################################


class CurveError(ValueError):
    """Base exception for curve evaluation errors."""


class CurveValidationError(CurveError):
    """Raised when the control data does not fit the requested curve type."""


class SegmentCountError(CurveError):
    """Raised when a non-positive segment count is requested."""


###############################################################################
# Enums
###############################################################################


class CurveType(Enum):
    """Enum to define the supported curve families.

    The values match the integer tags of the drawing API, so ``CurveType(1)``
    resolves to ``CurveType.CARDINAL``.
    """

    HERMITE = 0
    CARDINAL = 1
    BEZIER = 2


###############################################################################
# Point and control sets
###############################################################################


@dataclass
class Point:
    """A logical 2D coordinate, rounded or truncated only at rasterization time."""

    x: float
    y: float

    def copy(self) -> Point:
        """Return an independent copy of the point."""
        return Point(self.x, self.y)

    def as_tuple(self) -> Tuple[float, float]:
        """The point as Tuple (x, y)."""
        return (self.x, self.y)

    @classmethod
    def from_any(cls, value: Union[Point, Mapping, Sequence[float]]) -> Point:
        """Coerce a Point, a mapping with ``x``/``y`` keys or a 2-sequence into a new Point.

        Args:
            value: The value to convert

        Returns:
            Point: A new Point instance (never the passed object itself)

        Raises:
            CurveValidationError: If the value cannot be read as a 2D point
        """
        if isinstance(value, Point):
            return value.copy()
        try:
            if isinstance(value, Mapping):
                return cls(float(value["x"]), float(value["y"]))
            if isinstance(value, (str, bytes)) or len(value) != 2:
                raise CurveValidationError(f"Cannot interpret {value!r} as a point")
            return cls(float(value[0]), float(value[1]))
        except (KeyError, TypeError, ValueError) as err:
            raise CurveValidationError(f"Cannot interpret {value!r} as a point") from err


def _points_from_any(values: Any, what: str) -> List[Point]:
    if isinstance(values, (str, bytes, Mapping)):
        raise CurveValidationError(f"{what} must be a sequence of points")
    try:
        return [Point.from_any(value) for value in values]
    except TypeError as err:
        raise CurveValidationError(f"{what} must be a sequence of points") from err


@dataclass
class HermiteControls:
    """Endpoint, tangent, endpoint, tangent of a single Hermite segment."""

    p0: Point
    t0: Point
    p1: Point
    t1: Point

    def as_list(self) -> List[Point]:
        """The controls in drawing order [P0, T0, P1, T1]."""
        return [self.p0, self.t0, self.p1, self.t1]

    def copy(self) -> HermiteControls:
        """Return a deep, independent copy."""
        return HermiteControls(self.p0.copy(), self.t0.copy(), self.p1.copy(), self.t1.copy())

    @classmethod
    def from_any(cls, value: Any) -> HermiteControls:
        """Build Hermite controls from an existing instance or a sequence of exactly 4 points.

        Raises:
            CurveValidationError: If the count or shape of the controls is wrong
        """
        if isinstance(value, HermiteControls):
            return value.copy()
        points = _points_from_any(value, "Hermite controls")
        if len(points) != 4:
            raise CurveValidationError(f"Hermite curve requires exactly 4 controls, got {len(points)}")
        return cls(*points)


@dataclass
class CardinalControls:
    """Points of a Cardinal spline together with its tension in [-1, 1]."""

    points: List[Point] = field(default_factory=list)
    tension: float = 0.0

    @property
    def alpha(self) -> float:
        """Tangent scale factor ``(1 - tension) / 2``; 0.5 for Catmull-Rom."""
        return (1.0 - self.tension) / 2.0

    def copy(self) -> CardinalControls:
        """Return a deep, independent copy."""
        return CardinalControls([point.copy() for point in self.points], self.tension)

    @classmethod
    def from_any(cls, value: Any) -> CardinalControls:
        """Build Cardinal controls from an instance, a ``{"points", "tension"}`` mapping or a point sequence.

        Raises:
            CurveValidationError: If fewer than 2 points are given or the tension is out of range
        """
        if isinstance(value, CardinalControls):
            controls = value.copy()
        elif isinstance(value, Mapping):
            if "points" not in value:
                raise CurveValidationError("Cardinal controls require a 'points' entry")
            try:
                tension = float(value.get("tension", 0.0))
            except (TypeError, ValueError) as err:
                raise CurveValidationError(f"Invalid tension {value.get('tension')!r}") from err
            controls = cls(_points_from_any(value["points"], "Cardinal points"), tension)
        else:
            controls = cls(_points_from_any(value, "Cardinal points"))

        if len(controls.points) < 2:
            raise CurveValidationError(f"Cardinal spline requires at least 2 points, got {len(controls.points)}")
        if not -1.0 <= controls.tension <= 1.0:
            raise CurveValidationError(f"Cardinal tension must be within [-1, 1], got {controls.tension}")
        return controls


@dataclass
class BezierControls:
    """Control points of a Bezier curve of degree ``len(points) - 1``."""

    points: List[Point] = field(default_factory=list)

    @property
    def degree(self) -> int:
        """Degree of the curve."""
        return len(self.points) - 1

    def copy(self) -> BezierControls:
        """Return a deep, independent copy."""
        return BezierControls([point.copy() for point in self.points])

    @classmethod
    def from_any(cls, value: Any) -> BezierControls:
        """Build Bezier controls from an instance or a non-empty point sequence.

        Raises:
            CurveValidationError: If no control point is given
        """
        if isinstance(value, BezierControls):
            controls = value.copy()
        else:
            controls = cls(_points_from_any(value, "Bezier controls"))
        if not controls.points:
            raise CurveValidationError("Bezier curve requires at least 1 control point")
        return controls


# Any of the parsed control sets
Controls = Union[HermiteControls, CardinalControls, BezierControls]


###############################################################################
# Validation helpers
###############################################################################


def check_segments(segments: Any) -> int:
    """Validate a segment count and return it as int.

    Raises:
        CurveValidationError: If segments is not an integer
        SegmentCountError: If segments is not positive
    """
    if isinstance(segments, bool) or not isinstance(segments, Integral):
        raise CurveValidationError(f"segments must be an integer, got {segments!r}")
    if segments <= 0:
        raise SegmentCountError(f"segments must be positive, got {segments}")
    return int(segments)


def coerce_controls(curve_type: Union[CurveType, int], controls: Any) -> Controls:
    """Parse raw control data once into the value object of the given curve type.

    One-shot iterables such as generators are consumed exactly once here, so the
    returned object can be evaluated and drawn as often as needed.

    Raises:
        CurveValidationError: On unknown curve types or malformed controls
    """
    try:
        curve_type = CurveType(curve_type)
    except ValueError as err:
        raise CurveValidationError(f"Unknown curve type {curve_type!r}") from err

    if curve_type is CurveType.HERMITE:
        return HermiteControls.from_any(controls)
    if curve_type is CurveType.CARDINAL:
        return CardinalControls.from_any(controls)
    return BezierControls.from_any(controls)
