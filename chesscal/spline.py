"""Interpolating splines with configurable boundary conditions."""

from __future__ import annotations

import enum
import sys
from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np

_SEPARATION = sys.float_info.epsilon * 10


class BoundaryCondition(enum.Enum):
    """Boundary condition applied at one end of a spline."""

    FIXED_1ST_DERIV = "fixed_1st_deriv"
    FIXED_2ND_DERIV = "fixed_2nd_deriv"
    PARABOLIC_RUNOUT = "parabolic_runout"


class SplineType(enum.Enum):
    """Interpolation scheme used between knots."""

    LINEAR = "linear"
    CUBIC = "cubic"


@dataclass(frozen=True)
class _Segment:
    x: float
    a: float
    b: float
    c: float
    d: float

    def __call__(self, xval: float) -> float:
        lx = xval - self.x
        return ((self.a * lx + self.b) * lx + self.c) * lx + self.d


class Spline:
    """A 1-D spline through a set of (x, y) points.

    The coefficients are computed lazily on the first evaluation after the
    points or settings change.
    """

    def __init__(self) -> None:
        self._points: list[tuple[float, float]] = []
        self._segments: list[_Segment] = []
        self._ddy = np.zeros(0)
        self._valid = False
        self._low_bc = BoundaryCondition.FIXED_2ND_DERIV
        self._high_bc = BoundaryCondition.FIXED_2ND_DERIV
        self._low_value = 0.0
        self._high_value = 0.0
        self._type = SplineType.CUBIC

    def add_point(self, x: float, y: float) -> None:
        """Add a knot; coefficients are recomputed on next evaluation."""
        self._valid = False
        self._points.append((float(x), float(y)))

    def set_low_bc(self, bc: BoundaryCondition, value: float = 0.0) -> None:
        self._low_bc = bc
        self._low_value = float(value)
        self._valid = False

    def set_high_bc(self, bc: BoundaryCondition, value: float = 0.0) -> None:
        self._high_bc = bc
        self._high_value = float(value)
        self._valid = False

    def set_type(self, spline_type: SplineType) -> None:
        self._type = spline_type
        self._valid = False

    def clear(self) -> None:
        self._valid = False
        self._points.clear()
        self._segments.clear()

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[tuple[float, float]]:
        return iter(list(self._points))

    def __call__(self, x: float) -> float:
        if not self._valid:
            self._generate()

        if x <= self._points[0][0]:
            return self._low_calc(x)
        if x >= self._points[-1][0]:
            return self._high_calc(x)

        for segment, following in zip(self._segments, self._segments[1:]):
            if segment.x <= x <= following.x:
                return segment(x)
        return self._segments[-1](x)

    def _first_derivative_low(self) -> float:
        (x0, y0), (x1, y1) = self._points[0], self._points[1]
        h0 = x1 - x0
        b0 = self._ddy[0] / 2
        b1 = self._ddy[1] / 2
        return (y1 - y0) / h0 - 2 * h0 * (b0 + 2 * b1) / 6

    def _first_derivative_high(self) -> float:
        (xa, ya), (xb, yb) = self._points[-2], self._points[-1]
        h = xb - xa
        return 2 * h * (self._ddy[-2] + 2 * self._ddy[-1]) / 6 + (yb - ya) / h

    def _low_calc(self, x: float) -> float:
        x0, y0 = self._points[0]
        lx = x - x0
        if self._type is SplineType.LINEAR:
            return lx * self._high_value + y0

        first_deriv = self._first_derivative_low()
        if self._low_bc is BoundaryCondition.FIXED_1ST_DERIV:
            return lx * self._low_value + y0
        if self._low_bc is BoundaryCondition.FIXED_2ND_DERIV:
            return lx * lx * self._low_value + first_deriv * lx + y0
        if self._low_bc is BoundaryCondition.PARABOLIC_RUNOUT:
            return float(lx * lx * self._ddy[0] + lx * first_deriv + y0)
        raise ValueError(f"unknown boundary condition: {self._low_bc!r}")

    def _high_calc(self, x: float) -> float:
        xn, yn = self._points[-1]
        lx = x - xn
        if self._type is SplineType.LINEAR:
            return lx * self._high_value + yn

        first_deriv = self._first_derivative_high()
        if self._high_bc is BoundaryCondition.FIXED_1ST_DERIV:
            return lx * self._high_value + yn
        if self._high_bc is BoundaryCondition.FIXED_2ND_DERIV:
            return lx * lx * self._high_value + first_deriv * lx + yn
        if self._high_bc is BoundaryCondition.PARABOLIC_RUNOUT:
            return float(lx * lx * self._ddy[-1] + lx * first_deriv + yn)
        raise ValueError(f"unknown boundary condition: {self._high_bc!r}")

    def _separate_duplicates(self) -> None:
        points = self._points
        while True:
            points.sort()
            duplicate = next(
                (
                    index
                    for index, (a, b) in enumerate(zip(points, points[1:]))
                    if a[0] == b[0]
                ),
                None,
            )
            if duplicate is None:
                return
            x, y = points[duplicate + 1]
            new_x = x + x * _SEPARATION if x != 0 else _SEPARATION
            points[duplicate + 1] = (new_x, y)

    def _generate(self) -> None:
        if len(self._points) < 2:
            raise ValueError("Spline requires at least 2 points")

        self._separate_duplicates()

        xs = [p[0] for p in self._points]
        ys = [p[1] for p in self._points]

        if self._type is SplineType.LINEAR:
            self._segments = [
                _Segment(x0, 0.0, 0.0, (y1 - y0) / (x1 - x0), y0)
                for x0, x1, y0, y1 in zip(xs, xs[1:], ys, ys[1:])
            ]
        else:
            self._generate_cubic(xs, ys)
        self._valid = True

    def _generate_cubic(self, xs: list[float], ys: list[float]) -> None:
        n = len(xs)
        e = n - 1
        h = [x1 - x0 for x0, x1 in zip(xs, xs[1:])]

        # One equation per row; unknowns are the second derivatives at knots.
        system = np.zeros((n, n))
        rhs = np.zeros(n)
        for i in range(1, e):
            system[i, i - 1] = h[i - 1]
            system[i, i] = 2 * (h[i - 1] + h[i])
            system[i, i + 1] = h[i]
            rhs[i] = 6 * ((ys[i + 1] - ys[i]) / h[i] - (ys[i] - ys[i - 1]) / h[i - 1])

        if self._low_bc is BoundaryCondition.FIXED_1ST_DERIV:
            rhs[0] = 6 * ((ys[1] - ys[0]) / h[0] - self._low_value)
            system[0, 0] = 2 * h[0]
            system[0, 1] = h[0]
        elif self._low_bc is BoundaryCondition.FIXED_2ND_DERIV:
            rhs[0] = self._low_value
            system[0, 0] = 1
        elif self._low_bc is BoundaryCondition.PARABOLIC_RUNOUT:
            rhs[0] = 0
            system[0, 0] = 1
            system[0, 1] = -1

        if self._high_bc is BoundaryCondition.FIXED_1ST_DERIV:
            rhs[e] = 6 * (self._high_value - (ys[e] - ys[e - 1]) / h[e - 1])
            system[e, e] = 2 * h[e - 1]
            system[e, e - 1] = h[e - 1]
        elif self._high_bc is BoundaryCondition.FIXED_2ND_DERIV:
            rhs[e] = self._high_value
            system[e, e] = 1
        elif self._high_bc is BoundaryCondition.PARABOLIC_RUNOUT:
            rhs[e] = 0
            system[e, e] = 1
            system[e, e - 1] = -1

        ddy = np.linalg.solve(system, rhs)
        self._ddy = ddy
        self._segments = [
            _Segment(
                x=x0,
                a=float((d1 - d0) / (6 * hi)),
                b=float(d0 / 2),
                c=float((y1 - y0) / hi - d1 * hi / 6 - d0 * hi / 3),
                d=y0,
            )
            for x0, y0, y1, hi, d0, d1 in zip(xs, ys, ys[1:], h, ddy, ddy[1:])
        ]