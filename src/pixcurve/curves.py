"""Evaluation of Hermite, Cardinal and Bezier curves into ordered point sequences.

All curve families are evaluated on the uniform parameter grid
``t = i / segments`` with ``i`` in ``[0, segments]`` by multiplying a cached
basis table with the geometry (control points and tangents) of the curve:

    points = basis @ geometry

The evaluator itself is stateless apart from the injected BasisCache, so two
evaluators sharing a cache share all derived tables.
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence, Union

import numpy as np
from numpy.typing import NDArray

from pixcurve.basis import BasisCache
from pixcurve.common import (
    BezierControls,
    CardinalControls,
    CurveType,
    HermiteControls,
    Point,
    check_segments,
    coerce_controls,
)


def _as_array(points: Sequence[Point]) -> NDArray[np.float64]:
    """Convert points into an array of shape (N, 2)."""
    return np.array([(point.x, point.y) for point in points], dtype=np.float64).reshape(-1, 2)


def _as_points(array: NDArray[np.float64]) -> List[Point]:
    return [Point(x, y) for x, y in array.tolist()]


class CurveEvaluator:
    """Computes the sample points of the supported curve families."""

    def __init__(self, cache: Optional[BasisCache] = None):
        """Initialize the evaluator.

        Args:
            cache: Basis table cache to use; a private one is created if omitted
        """
        self._cache = cache if cache is not None else BasisCache()

    @property
    def cache(self) -> BasisCache:
        """The basis table cache consulted by this evaluator."""
        return self._cache

    def evaluate(
        self, curve_type: Union[CurveType, int], controls: Any, segments: int
    ) -> List[Point]:
        """Dispatch to the evaluation of the given curve type.

        Args:
            curve_type: CurveType member or its integer value
            controls: Control data matching the curve type
            segments: Number of line segments per curve (per point pair for Cardinal)

        Returns:
            List[Point]: The evaluated points in order

        Raises:
            CurveValidationError: On unknown curve types or malformed controls
            SegmentCountError: If segments is not positive
        """
        controls = coerce_controls(curve_type, controls)
        if isinstance(controls, HermiteControls):
            return self.hermite(controls, segments)
        if isinstance(controls, CardinalControls):
            return self.cardinal(controls, segments)
        return self.bezier(controls, segments)

    ###########################################################################
    # Hermite
    ###########################################################################

    def hermite(self, controls: Union[HermiteControls, Sequence[Any]], segments: int) -> List[Point]:
        """Evaluate a Hermite segment given as [P0, T0, P1, T1].

        point = h0 * P0 + h1 * P1 + h2 * T0 + h3 * T1

        Returns:
            segments+1 points, the first equal to P0 and the last equal to P1
        """
        controls = HermiteControls.from_any(controls)
        segments = check_segments(segments)
        geometry = _as_array([controls.p0, controls.p1, controls.t0, controls.t1])
        return _as_points(self._cache.hermite_basis(segments) @ geometry)

    ###########################################################################
    # Cardinal
    ###########################################################################

    def cardinal(self, controls: Any, segments: int) -> List[Point]:
        """Evaluate a Cardinal spline through all of its points.

        Every consecutive pair of points becomes a Hermite segment with the
        tangents ``alpha * (p2 - p0)`` and ``alpha * (p3 - p1)``, where the
        missing neighbours at both ends are clamped to the first and last point.
        Joins between segments are emitted once, so the result holds
        ``pairs * segments + 1`` points.
        """
        controls = CardinalControls.from_any(controls)
        segments = check_segments(segments)

        points = _as_array(controls.points)
        last = len(points) - 1

        # Neighbour indices for each pair (i, i+1), clamped at both ends
        pair = np.arange(last)
        p0 = points[np.maximum(pair - 1, 0)]
        p1 = points[pair]
        p2 = points[pair + 1]
        p3 = points[np.minimum(pair + 2, last)]

        alpha = controls.alpha
        # geometry has shape (pairs, 4, 2) in the row order of the Hermite basis columns
        geometry = np.stack((p1, p2, alpha * (p2 - p0), alpha * (p3 - p1)), axis=1)
        samples = np.einsum("sj,pjc->psc", self._cache.hermite_basis(segments), geometry)

        # Drop the last sample of every segment (it repeats the next segment's first one)
        # and append the final end point once.
        stitched = np.concatenate((samples[:, :-1, :].reshape(-1, 2), samples[-1, -1:, :]))
        return _as_points(stitched)

    ###########################################################################
    # Bezier
    ###########################################################################

    def bezier(self, controls: Any, segments: int) -> List[Point]:
        """Evaluate a Bezier curve of degree ``len(controls) - 1``.

        Cubic curves take the closed form through the power basis and the
        cubic Bezier matrix, all other degrees the Bernstein blending table.
        """
        controls = BezierControls.from_any(controls)
        segments = check_segments(segments)
        if controls.degree == 3:
            return self._bezier_cubic(controls, segments)
        return self._bezier_bernstein(controls, segments)

    def bezier_general(self, controls: Any, segments: int) -> List[Point]:
        """Evaluate a Bezier curve of any degree through the Bernstein blending table only."""
        controls = BezierControls.from_any(controls)
        segments = check_segments(segments)
        return self._bezier_bernstein(controls, segments)

    def _bezier_cubic(self, controls: BezierControls, segments: int) -> List[Point]:
        # (t^3, t^2, t, 1) @ M gives the blend coefficients c0..c3 of the four controls
        coefficients = self._cache.power_basis(segments) @ self._cache.cubic_bezier_matrix()
        return _as_points(coefficients @ _as_array(controls.points))

    def _bezier_bernstein(self, controls: BezierControls, segments: int) -> List[Point]:
        weights = self._cache.bernstein_blending(controls.degree, segments)
        return _as_points(weights @ _as_array(controls.points))
