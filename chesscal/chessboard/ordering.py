"""Extraction of the ordered inner corners from a labelled quad group."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional

from chesscal.chessboard.quads import ChessboardCorner, ChessboardQuad

_LABEL_LIMIT = 127
_BORDER = 5.0
_LINKED_BORDER_FRACTION = 0.75


def _label_bounds(quads: Sequence[ChessboardQuad]) -> tuple[int, int, int, int]:
    corners = [c for q in quads for c in q.corners]
    min_row = min([_LABEL_LIMIT, *(c.row for c in corners)])
    max_row = max([-_LABEL_LIMIT, *(c.row for c in corners)])
    min_col = min([_LABEL_LIMIT, *(c.column for c in corners)])
    max_col = max([-_LABEL_LIMIT, *(c.column for c in corners)])
    return min_row, max_row, min_col, max_col


def _board_extent(
    quads: Sequence[ChessboardQuad],
    pattern_size: tuple[int, int],
    bounds: tuple[int, int, int, int],
) -> tuple[int, int]:
    """Width and height (in corners) the group is expected to span."""
    pattern_width, pattern_height = pattern_size
    min_row, max_row, min_col, max_col = bounds

    flag_column = False
    flag_row = False
    for quad in quads:
        for c in quad.corners:
            if (
                c.column == max_col
                and c.row not in (min_row, max_row)
                and not c.needs_neighbor
            ):
                flag_column = True
            if (
                c.row == max_row
                and c.column not in (min_col, max_col)
                and not c.needs_neighbor
            ):
                flag_row = True

    if flag_column:
        if max_col - min_col == pattern_width + 1:
            return pattern_width, pattern_height
        return pattern_height, pattern_width
    if flag_row:
        if max_row - min_row == pattern_width + 1:
            return pattern_height, pattern_width
        return pattern_width, pattern_height
    # The extent is unknown in both directions; allow for the worst case.
    side = max(pattern_width, pattern_height)
    return side, side


def _cross(a: tuple[float, float], b: tuple[float, float]) -> float:
    return a[0] * b[1] - a[1] * b[0]


def _sub(p: tuple[float, float], q: tuple[float, float]) -> tuple[float, float]:
    return (p[0] - q[0], p[1] - q[1])


def check_quad_group(
    quads: Sequence[ChessboardQuad],
    pattern_size: tuple[int, int],
    image_size: tuple[int, int],
) -> Optional[list[ChessboardCorner]]:
    """Collect the inner corners of a labelled quad group in board order.

    ``pattern_size`` is ``(width, height)`` in inner corners and
    ``image_size`` is ``(cols, rows)`` of the image. Returns the corners row
    by row, left to right and top to bottom, or ``None`` when the group does
    not form a consistent board.
    """
    pattern_width, pattern_height = pattern_size
    bounds = _label_bounds(quads)
    width, height = _board_extent(quads, pattern_size, bounds)

    min_row = bounds[0] + 1
    min_col = bounds[2] + 1
    max_row = min_row + height - 1
    max_col = min_col + width - 1

    corners: list[ChessboardCorner] = []
    linked_border_corners = 0

    for i in range(min_row, max_row + 1):
        for j in range(min_col, max_col + 1):
            occurrence = 1
            for quad in quads:
                for c in quad.corners:
                    if c.row != i or c.column != j:
                        continue
                    board_edge = i in (min_row, max_row) or j in (min_col, max_col)
                    if (occurrence == 1 and board_edge) or (
                        occurrence == 2 and not board_edge
                    ):
                        corners.append(c)
                    if occurrence == 2 and board_edge:
                        linked_border_corners += 1
                    if occurrence > 2:
                        # More than two corners share a label: bad linking.
                        return None
                    occurrence += 1

    required_linked = (
        pattern_width * 2 + pattern_height * 2 - 2
    ) * _LINKED_BORDER_FRACTION
    if (
        len(corners) != pattern_width * pattern_height
        or linked_border_corners < required_linked
    ):
        return None

    cols, rows = image_size
    for c in corners:
        x, y = c.pt
        if x < _BORDER or x > cols - _BORDER or y < _BORDER or y > rows - _BORDER:
            return None

    if width != pattern_width:
        width, height = height, width
        corners = [corners[j * height + i] for i in range(height) for j in range(width)]

    p0 = corners[0].pt
    p1 = corners[width - 1].pt
    p2 = corners[width].pt
    if _cross(_sub(p1, p0), _sub(p2, p0)) < 0.0:
        corners = [
            c
            for row_start in range(0, height * width, width)
            for c in reversed(corners[row_start : row_start + width])
        ]

    p0 = corners[0].pt
    p2 = corners[width].pt
    if p2[1] < p0[1]:
        corners = corners[::-1]

    return corners