"""Memoized coefficient tables for Hermite, cubic Bezier and Bernstein curve evaluation."""

from __future__ import annotations

import threading
from typing import Dict, List, Tuple

import numpy as np
from numpy.typing import NDArray

from pixcurve.common import check_segments

# Standard cubic Bezier basis matrix, rows multiply (t^3, t^2, t, 1)
_CUBIC_BEZIER_MATRIX = (
    (-1.0, 3.0, -3.0, 1.0),
    (3.0, -6.0, 3.0, 0.0),
    (-3.0, 3.0, 0.0, 0.0),
    (1.0, 0.0, 0.0, 0.0),
)

# Highest degree evaluated by the closed form C(d, k) * t^k * (1-t)^(d-k). C(d, k) overflows
# a float near degree 1030, so higher degrees use the de Casteljau recurrence instead.
_MAX_DIRECT_DEGREE = 64


def _read_only(array: NDArray[np.float64]) -> NDArray[np.float64]:
    array.flags.writeable = False
    return array


class BasisCache:
    """Process-lifetime cache of derived coefficient tables.

    Every table is created lazily on the first request for its key and then
    returned as the very same read-only NumPy array on every later request.
    Nothing is ever evicted: keys are segment counts and degrees, which are
    few in practice.

    Tables:
        - Hermite basis ``(segments+1, 4)`` with columns ``(h0, h1, h2, h3)``
        - Power basis ``(segments+1, 4)`` with columns ``(t^3, t^2, t, 1)``
        - Cubic Bezier matrix ``(4, 4)``
        - Bernstein blending ``(segments+1, degree+1)``
        - Binomial coefficients as Pascal's triangle rows
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._hermite: Dict[int, NDArray[np.float64]] = {}
        self._power: Dict[int, NDArray[np.float64]] = {}
        self._bernstein: Dict[Tuple[int, int], NDArray[np.float64]] = {}
        self._bezier_matrix: NDArray[np.float64] | None = None
        self._pascal_rows: List[List[int]] = [[1]]

    @staticmethod
    def parameter_grid(segments: int) -> NDArray[np.float64]:
        """Return ``t = i / segments`` for ``i`` in ``[0, segments]``.

        The values are computed by division so that the last entry is exactly 1.0.
        """
        check_segments(segments)
        return np.arange(segments + 1, dtype=np.float64) / float(segments)

    def hermite_basis(self, segments: int) -> NDArray[np.float64]:
        """Hermite basis functions sampled on the parameter grid.

        h0 = 2t^3 - 3t^2 + 1, h1 = -2t^3 + 3t^2, h2 = t^3 - 2t^2 + t, h3 = t^3 - t^2

        Args:
            segments: Number of line segments (positive)

        Returns:
            Read-only array of shape (segments+1, 4)
        """
        check_segments(segments)
        with self._lock:
            table = self._hermite.get(segments)
            if table is None:
                t = self.parameter_grid(segments)
                t2 = t * t
                t3 = t2 * t
                table = np.empty((segments + 1, 4), dtype=np.float64)
                table[:, 0] = 2.0 * t3 - 3.0 * t2 + 1.0
                table[:, 1] = -2.0 * t3 + 3.0 * t2
                table[:, 2] = t3 - 2.0 * t2 + t
                table[:, 3] = t3 - t2
                self._hermite[segments] = table = _read_only(table)
            return table

    def cubic_bezier_matrix(self) -> NDArray[np.float64]:
        """The constant 4x4 cubic Bezier basis matrix (read-only)."""
        with self._lock:
            if self._bezier_matrix is None:
                self._bezier_matrix = _read_only(np.array(_CUBIC_BEZIER_MATRIX, dtype=np.float64))
            return self._bezier_matrix

    def power_basis(self, segments: int) -> NDArray[np.float64]:
        """Power basis ``(t^3, t^2, t, 1)`` sampled on the same grid as the Hermite basis.

        Returns:
            Read-only array of shape (segments+1, 4)
        """
        check_segments(segments)
        with self._lock:
            table = self._power.get(segments)
            if table is None:
                t = self.parameter_grid(segments)
                table = np.empty((segments + 1, 4), dtype=np.float64)
                table[:, 0] = t * t * t
                table[:, 1] = t * t
                table[:, 2] = t
                table[:, 3] = 1.0
                self._power[segments] = table = _read_only(table)
            return table

    def binomial(self, n: int, k: int) -> int:
        """Binomial coefficient C(n, k) taken from Pascal's triangle.

        Rows are appended iteratively up to ``n`` and kept for later calls.

        Raises:
            ValueError: If ``n < 0`` or ``k`` is outside ``[0, n]``
        """
        if n < 0:
            raise ValueError(f"n must be non-negative, got {n}")
        if not 0 <= k <= n:
            raise ValueError(f"k must be within [0, {n}], got {k}")
        with self._lock:
            rows = self._pascal_rows
            while len(rows) <= n:
                last = rows[-1]
                rows.append([1] + [last[j - 1] + last[j] for j in range(1, len(last))] + [1])
            return rows[n][k]

    def bernstein_blending(self, degree: int, segments: int) -> NDArray[np.float64]:
        """Bernstein weights ``C(d, k) * t^k * (1-t)^(d-k)`` for every sample and control point.

        Args:
            degree: Bezier degree ``d`` (non-negative)
            segments: Number of line segments (positive)

        Returns:
            Read-only array of shape (segments+1, degree+1)
        """
        if degree < 0:
            raise ValueError(f"degree must be non-negative, got {degree}")
        check_segments(segments)
        key = (degree, segments)
        with self._lock:
            table = self._bernstein.get(key)
            if table is None:
                t = self.parameter_grid(segments)
                if degree <= _MAX_DIRECT_DEGREE:
                    k = np.arange(degree + 1)
                    coefficients = np.array([self.binomial(degree, j) for j in range(degree + 1)], dtype=np.float64)
                    # numpy evaluates 0.0 ** 0 as 1.0, which keeps the endpoints exact
                    t = t[:, np.newaxis]
                    table = coefficients * np.power(t, k) * np.power(1.0 - t, degree - k)
                else:
                    table = self._bernstein_by_recurrence(degree, t)
                self._bernstein[key] = table = _read_only(np.ascontiguousarray(table, dtype=np.float64))
            return table

    @staticmethod
    def _bernstein_by_recurrence(degree: int, t: NDArray[np.float64]) -> NDArray[np.float64]:
        """Bernstein table from B(d, k) = (1-t) * B(d-1, k) + t * B(d-1, k-1).

        Every intermediate weight stays within [0, 1], so no degree overflows.
        """
        s = (1.0 - t)[:, np.newaxis]
        u = t[:, np.newaxis]
        table = np.zeros((t.shape[0], degree + 1), dtype=np.float64)
        table[:, 0] = 1.0
        for d in range(1, degree + 1):
            table[:, 1 : d + 1] = s * table[:, 1 : d + 1] + u * table[:, :d]
            table[:, 0] *= s[:, 0]
        return table

    def cache_info(self) -> Dict[str, int]:
        """Number of cached entries per table kind."""
        with self._lock:
            return {
                "hermite": len(self._hermite),
                "power": len(self._power),
                "bernstein": len(self._bernstein),
                "bezier_matrix": 0 if self._bezier_matrix is None else 1,
                "pascal_rows": len(self._pascal_rows),
            }
