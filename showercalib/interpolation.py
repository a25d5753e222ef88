"""One-dimensional interpolation of calibration curves."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from bisect import bisect_right
from collections.abc import Sequence
from itertools import pairwise

_Coefficients = tuple[float, float, float]


class Interpolator(ABC):
    """Piecewise cubic interpolation through a set of strictly increasing points.

    Each interval holds a polynomial ``y_i + b dx + c dx^2 + d dx^3``.
    Evaluation outside the range of the points yields NaN.
    """

    min_points = 2

    def __init__(self, x: Sequence[float], y: Sequence[float]) -> None:
        xs = tuple(float(value) for value in x)
        ys = tuple(float(value) for value in y)
        if len(xs) != len(ys):
            raise ValueError(
                f"abscissa and ordinate sizes differ ({len(xs)} vs. {len(ys)})"
            )
        if len(xs) < self.min_points:
            raise ValueError(
                f"{type(self).__name__} needs at least {self.min_points} points,"
                f" got {len(xs)}"
            )
        if any(right <= left for left, right in pairwise(xs)):
            raise ValueError("x values must be strictly increasing")
        self._x = xs
        self._y = ys
        self._coefficients_by_interval = self._coefficients()

    @property
    def x(self) -> tuple[float, ...]:
        """The abscissae of the interpolated points."""
        return self._x

    @property
    def y(self) -> tuple[float, ...]:
        """The ordinates of the interpolated points."""
        return self._y

    def _slopes(self) -> list[float]:
        return [
            (y1 - y0) / (x1 - x0)
            for (x0, x1), (y0, y1) in zip(pairwise(self._x), pairwise(self._y))
        ]

    def _widths(self) -> list[float]:
        return [x1 - x0 for x0, x1 in pairwise(self._x)]

    @abstractmethod
    def _coefficients(self) -> list[_Coefficients]:
        """Return the (b, c, d) polynomial coefficients of each interval."""

    def __call__(self, x: float) -> float:
        x = float(x)
        if not self._x[0] <= x <= self._x[-1]:
            return math.nan
        index = min(bisect_right(self._x, x) - 1, len(self._x) - 2)
        b, c, d = self._coefficients_by_interval[index]
        dx = x - self._x[index]
        return self._y[index] + dx * (b + dx * (c + dx * d))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(n={len(self._x)})"


class LinearInterpolator(Interpolator):
    """Straight segments between consecutive points."""

    min_points = 2

    def _coefficients(self) -> list[_Coefficients]:
        return [(slope, 0.0, 0.0) for slope in self._slopes()]


class CubicSplineInterpolator(Interpolator):
    """Natural cubic spline (zero second derivative at both ends)."""

    min_points = 3

    def _coefficients(self) -> list[_Coefficients]:
        widths = self._widths()
        slopes = self._slopes()
        n = len(self._x)

        # tridiagonal system for the interior quadratic coefficients
        rows = [
            (h_left, 2.0 * (h_left + h_right), h_right, 3.0 * (s_right - s_left))
            for (h_left, h_right), (s_left, s_right) in zip(
                pairwise(widths), pairwise(slopes)
            )
        ]
        reduced_upper: list[float] = []
        reduced_rhs: list[float] = []
        prev_upper = prev_rhs = 0.0
        for lower, diagonal, upper, rhs in rows:
            denominator = diagonal - lower * prev_upper
            prev_upper = upper / denominator
            prev_rhs = (rhs - lower * prev_rhs) / denominator
            reduced_upper.append(prev_upper)
            reduced_rhs.append(prev_rhs)

        interior: list[float] = []
        following = 0.0
        for upper, rhs in zip(reversed(reduced_upper), reversed(reduced_rhs)):
            following = rhs - upper * following
            interior.append(following)
        interior.reverse()

        c = [0.0, *interior, 0.0]
        assert len(c) == n
        return [
            (
                slope - h * (c_next + 2.0 * c_here) / 3.0,
                c_here,
                (c_next - c_here) / (3.0 * h),
            )
            for h, slope, (c_here, c_next) in zip(widths, slopes, pairwise(c))
        ]


class AkimaInterpolator(Interpolator):
    """Akima spline, robust against outliers (little over- or undershoot)."""

    min_points = 5

    def _coefficients(self) -> list[_Coefficients]:
        slopes = self._slopes()
        widths = self._widths()
        first, second = slopes[0], slopes[1]
        last, before_last = slopes[-1], slopes[-2]
        # extended slopes: two extrapolated values on each side
        m = [
            3.0 * first - 2.0 * second,
            2.0 * first - second,
            *slopes,
            2.0 * last - before_last,
            3.0 * last - 2.0 * before_last,
        ]

        coefficients: list[_Coefficients] = []
        for offset, h in enumerate(widths):
            m_m2, m_m1, m_0, m_p1, m_p2 = m[offset : offset + 5]
            weight = abs(m_p1 - m_0) + abs(m_m1 - m_m2)
            if weight == 0.0:
                coefficients.append((m_0, 0.0, 0.0))
                continue
            weight_next = abs(m_p2 - m_p1) + abs(m_0 - m_m1)
            alpha = abs(m_m1 - m_m2) / weight
            if weight_next == 0.0:
                tangent_next = m_0
            else:
                alpha_next = abs(m_0 - m_m1) / weight_next
                tangent_next = (1.0 - alpha_next) * m_0 + alpha_next * m_p1
            b = (1.0 - alpha) * m_m1 + alpha * m_0
            c = (3.0 * m_0 - 2.0 * b - tangent_next) / h
            d = (b + tangent_next - 2.0 * m_0) / (h * h)
            coefficients.append((b, c, d))
        return coefficients


def create_interpolator(x: Sequence[float], y: Sequence[float]) -> Interpolator:
    """Create an interpolator suited to the number of points.

    Five or more points use an Akima spline, three or four a natural cubic
    spline, two a linear interpolation. A single point is extended to a flat
    segment one unit long.
    """
    xs = list(x)
    ys = list(y)
    if len(xs) != len(ys):
        raise ValueError(f"abscissa and ordinate sizes differ ({len(xs)} vs. {len(ys)})")
    if not xs:
        raise ValueError("cannot interpolate without points")
    if len(xs) >= 5:
        return AkimaInterpolator(xs, ys)
    if len(xs) >= 3:
        return CubicSplineInterpolator(xs, ys)
    if len(xs) == 1:
        (x0,), (y0,) = xs, ys
        return LinearInterpolator([x0, x0 + 1.0], [y0, y0])
    return LinearInterpolator(xs, ys)