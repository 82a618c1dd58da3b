"""Small numeric, geometric and timing helpers."""

from __future__ import annotations

import math
import time
from collections.abc import Iterable

_LONG_MAX = 2**63 - 1
_LONG_MIN = -(2**63)


def hypot3(x: float, y: float, z: float) -> float:
    """Euclidean length of a 3-D vector."""
    return math.sqrt(x * x + y * y + z * z)


def d2r(deg: float) -> float:
    """Degrees to radians."""
    return deg / 180.0 * math.pi


def r2d(rad: float) -> float:
    """Radians to degrees."""
    return rad / math.pi * 180.0


def sinc(theta: float) -> float:
    """Unnormalised sinc, ``sin(theta) / theta``."""
    return math.sin(theta) / theta


def time_in_microseconds() -> int:
    """Wall-clock time in whole microseconds since the epoch."""
    return time.time_ns() // 1000


def time_in_seconds() -> float:
    """Wall-clock time in seconds since the epoch."""
    return time.time_ns() / 1e9


def bres_line(x0: int, y0: int, x1: int, y1: int) -> list[tuple[int, int]]:
    """Grid cells crossed by the line from ``(x0, y0)`` to ``(x1, y1)``."""
    cells = []
    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx - dy

    while True:
        cells.append((x0, y0))
        if x0 == x1 and y0 == y1:
            return cells
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x0 += sx
        if e2 < dx:
            err += dx
            y0 += sy


def bres_circle(x0: int, y0: int, r: int) -> list[tuple[int, int]]:
    """Grid cells covered by the filled circle of radius ``r`` at ``(x0, y0)``.

    Cells are returned sorted by x, then y.
    """
    if r < 0:
        raise ValueError("radius must be non-negative")

    cells: set[tuple[int, int]] = set()
    cells.update(bres_line(x0, y0 - r, x0, y0 + r))
    cells.update(bres_line(x0 - r, y0, x0 + r, y0))

    f = 1 - r
    ddf_x = 1
    ddf_y = -2 * r
    x = 0
    y = r
    while x < y:
        if f >= 0:
            y -= 1
            ddf_y += 2
            f += ddf_y
        x += 1
        ddf_x += 2
        f += ddf_x

        cells.update(bres_line(x0 - x, y0 + y, x0 + x, y0 + y))
        cells.update(bres_line(x0 - x, y0 - y, x0 + x, y0 - y))
        cells.update(bres_line(x0 - y, y0 + x, x0 + y, y0 + x))
        cells.update(bres_line(x0 - y, y0 - x, x0 + y, y0 - x))

    return sorted(cells)


def fit_circle(points: Iterable[tuple[float, float]]) -> tuple[float, float, float]:
    """Fit a circle by modified least squares; returns ``(cx, cy, radius)``."""
    pts = [(float(x), float(y)) for x, y in points]
    n = len(pts)
    if n == 0:
        raise ValueError("cannot fit a circle to no points")

    sum_x = sum(x for x, _ in pts)
    sum_y = sum(y for _, y in pts)
    sum_xx = sum(x * x for x, _ in pts)
    sum_xy = sum(x * y for x, y in pts)
    sum_yy = sum(y * y for _, y in pts)
    sum_xxx = sum(x * x * x for x, _ in pts)
    sum_xxy = sum(x * x * y for x, y in pts)
    sum_xyy = sum(x * y * y for x, y in pts)
    sum_yyy = sum(y * y * y for _, y in pts)

    a = n * sum_xx - sum_x**2
    b = n * sum_xy - sum_x * sum_y
    c = n * sum_yy - sum_y**2
    d = 0.5 * (n * sum_xyy - sum_x * sum_yy + n * sum_xxx - sum_x * sum_xx)
    e = 0.5 * (n * sum_xxy - sum_y * sum_xx + n * sum_yyy - sum_y * sum_yy)

    denominator = a * c - b**2
    if denominator == 0:
        raise ValueError("points are degenerate; no unique circle")

    center_x = (d * c - b * e) / denominator
    center_y = (a * e - b * d) / denominator
    radius = sum(math.hypot(x - center_x, y - center_y) for x, y in pts) / n
    return center_x, center_y, radius


def intersect_circles(
    x1: float, y1: float, r1: float, x2: float, y2: float, r2: float
) -> list[tuple[float, float]]:
    """Intersection points of two circles: none, one (touching) or two."""
    d = math.hypot(x1 - x2, y1 - y2)
    if d > r1 + r2:
        return []
    if d < abs(r1 - r2):
        return []
    if d == 0:
        raise ValueError("coincident circles have no discrete intersection")

    a = (r1**2 - r2**2 + d**2) / (2.0 * d)
    h = math.sqrt(max(r1**2 - a**2, 0.0))

    x3 = x1 + a * (x2 - x1) / d
    y3 = y1 + a * (y2 - y1) / d

    if h < 1e-10:
        return [(x3, y3)]

    return [
        (x3 + h * (y2 - y1) / d, y3 - h * (x2 - x1) / d),
        (x3 - h * (y2 - y1) / d, y3 + h * (x2 - x1) / d),
    ]


def timestamp_diff(t1: int, t2: int) -> int:
    """Signed difference ``t2 - t1`` of unsigned timestamps, saturated to 64 bits."""
    if t2 > t1:
        return min(t2 - t1, _LONG_MAX)
    d = t1 - t2
    if d > _LONG_MAX:
        return _LONG_MIN
    return -d