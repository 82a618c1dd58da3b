"""Plausibility checks on detected chessboard corners and quad hypotheses."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from chesscal.chessboard.quads import ChessboardCorner
from chesscal.spline import BoundaryCondition, Spline

_THRESH_FACTOR = 0.2
_SIZE_REL_DEV = np.float32(1.0) + np.float32(0.4)
_CLASS_FRACTION = 0.75

Point = tuple[float, float]


def _make_spline(points: Sequence[Point]) -> Spline:
    spline = Spline()
    spline.set_low_bc(BoundaryCondition.PARABOLIC_RUNOUT)
    spline.set_high_bc(BoundaryCondition.PARABOLIC_RUNOUT)
    for x, y in points:
        spline.add_point(x, y)
    return spline


def _distance(a: Point, b: Point) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def _line_is_smooth(line: Sequence[Point], neighbours: Sequence[Sequence[Point]]) -> bool:
    """Whether the inner points of ``line`` lie near the spline through its ends and middle.

    ``neighbours[k]`` holds the points adjacent to ``line[k]`` across the board.
    """
    n = len(line)
    knots = (line[0], line[n // 2], line[n - 1])
    spline_xy = _make_spline(knots)
    spline_yx = _make_spline([(y, x) for x, y in knots])

    for k in range(1, n - 1):
        p = line[k]
        adjacent = [line[k - 1], line[k + 1], *neighbours[k]]
        thresh = min(_distance(q, p) for q in adjacent) * _THRESH_FACTOR
        deviation = min(abs(spline_xy(p[0]) - p[1]), abs(spline_yx(p[1]) - p[0]))
        if deviation > thresh:
            return False
    return True


def check_board_monotony(
    corners: Sequence[ChessboardCorner], pattern_size: tuple[int, int]
) -> bool:
    """Whether every row and column of corners follows a smooth curve.

    ``corners`` are in board order, row by row, for a ``(width, height)``
    pattern. Each inner corner must lie within a fifth of its distance to the
    nearest adjacent corner from the spline through its line's first, middle
    and last corners.
    """
    width, height = pattern_size
    if width < 1 or height < 1:
        raise ValueError("pattern size must be positive")
    if len(corners) != width * height:
        raise ValueError(
            f"expected {width * height} corners, got {len(corners)}"
        )

    grid = [[corners[i * width + j].pt for j in range(width)] for i in range(height)]

    for i, row in enumerate(grid):
        neighbours = [
            [grid[r][j] for r in (i - 1, i + 1) if 0 <= r < height]
            for j in range(width)
        ]
        if not _line_is_smooth(row, neighbours):
            return False

    for j in range(width):
        column = [grid[i][j] for i in range(height)]
        neighbours = [
            [grid[i][c] for c in (j - 1, j + 1) if 0 <= c < width]
            for i in range(height)
        ]
        if not _line_is_smooth(column, neighbours):
            return False

    return True


def count_classes(pairs: Sequence[tuple[float, int]]) -> list[int]:
    """Counts of class 0 (black) and class 1 (white) among ``(size, class)`` pairs."""
    counts = [0, 0]
    for _, class_id in pairs:
        if class_id not in (0, 1):
            raise ValueError(f"unknown class id: {class_id}")
        counts[class_id] += 1
    return counts


def has_consistent_hypotheses(
    hypotheses: Sequence[tuple[float, int]], pattern_size: tuple[int, int]
) -> bool:
    """Whether enough square hypotheses of similar size exist for the pattern.

    ``hypotheses`` are ``(box_size, class_id)`` pairs, class 0 for black and
    1 for white squares. A run of sizes within 40 % of its smallest must hold
    at least half the pattern's corner count, with at least three quarters of
    the expected black and white squares.
    """
    width, height = pattern_size
    min_quads_count = width * height // 2
    ordered = sorted(hypotheses, key=lambda pair: pair[0])

    black_expected = round(math.ceil(width / 2.0) * math.ceil(height / 2.0))
    white_expected = round(math.floor(width / 2.0) * math.floor(height / 2.0))

    for i, (base_size, _) in enumerate(ordered):
        base = np.float32(base_size)
        j = i + 1
        while j < len(ordered) and np.float32(ordered[j][0]) / base <= _SIZE_REL_DEV:
            j += 1

        if j + 1 > min_quads_count + i:
            black, white = count_classes(ordered[i:j])
            if (
                black < black_expected * _CLASS_FRACTION
                or white < white_expected * _CLASS_FRACTION
            ):
                continue
            return True
    return False