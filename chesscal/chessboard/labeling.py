"""Row and column labelling of connected chessboard quads."""

from __future__ import annotations

from collections.abc import Sequence

from chesscal.chessboard.quads import ChessboardCorner, ChessboardQuad

_SEED_LABELS = ((0, 0), (0, 1), (1, 1), (1, 0))
_LABEL_LIMIT = 127


def _seed(quad_group: Sequence[ChessboardQuad]) -> None:
    """Label the first quad with the most neighbours as the board origin."""
    best = None
    max_count = 0
    for quad in quad_group:
        if quad.count > max_count:
            best = quad
            max_count = quad.count
            if max_count == 4:
                break
    if best is None:
        raise ValueError("no linked quad to start labelling from")

    best.labeled = True
    for corner, (row, column) in zip(best.corners, _SEED_LABELS):
        corner.row = row
        corner.column = column


def _propagate(quad_group: Sequence[ChessboardQuad]) -> None:
    """Spread labels from labelled quads to their unlabelled neighbours."""
    changed = True
    while changed:
        changed = False
        for quad in reversed(quad_group):
            if quad.labeled:
                continue
            for j, neighbor in enumerate(quad.neighbors):
                if neighbor is None or not neighbor.labeled:
                    continue
                k = next(
                    (k for k, n in enumerate(neighbor.neighbors) if n is quad), None
                )
                if k is None:
                    continue

                con, cw1, cw2, cw3 = (neighbor.corners[(k + m) % 4] for m in range(4))
                c = quad.corners
                c[j].row = con.row
                c[j].column = con.column
                c[(j + 1) % 4].row = con.row - cw2.row + cw3.row
                c[(j + 1) % 4].column = con.column - cw2.column + cw3.column
                c[(j + 2) % 4].row = con.row + con.row - cw2.row
                c[(j + 2) % 4].column = con.column + con.column - cw2.column
                c[(j + 3) % 4].row = con.row - cw2.row + cw1.row
                c[(j + 3) % 4].column = con.column - cw2.column + cw1.column

                quad.labeled = True
                changed = True
                break


def _corners_by_label(
    quad_group: Sequence[ChessboardQuad],
) -> dict[tuple[int, int], list[ChessboardCorner]]:
    """Corner occurrences grouped by ``(row, column)``, in quad/corner order."""
    groups: dict[tuple[int, int], list[ChessboardCorner]] = {}
    for quad in quad_group:
        for corner in quad.corners:
            groups.setdefault((corner.row, corner.column), []).append(corner)
    return groups


def _release(
    quad_group: Sequence[ChessboardQuad], attribute: str, low: int, high: int
) -> None:
    """Mark corners on the given border lines as needing no neighbour."""
    for quad in quad_group:
        for corner in quad.corners:
            if getattr(corner, attribute) in (low, high):
                corner.needs_neighbor = False


def label_quad_group(
    quad_group: Sequence[ChessboardQuad],
    pattern_size: tuple[int, int],
    first_run: bool,
) -> None:
    """Assign board rows and columns to every corner of a connected quad group.

    On the first run the best-connected quad is taken as the origin. Corners
    sharing a label are merged to their midpoint, and ``needs_neighbor`` is
    set on corners that still lack a partner unless the pattern's extent
    ``(width, height)`` has been reached in that direction.
    """
    if first_run:
        _seed(quad_group)

    _propagate(quad_group)

    corners = [corner for quad in quad_group for corner in quad.corners]
    min_row = min([_LABEL_LIMIT, *(c.row for c in corners)])
    max_row = max([-_LABEL_LIMIT, *(c.row for c in corners)])
    min_column = min([_LABEL_LIMIT, *(c.column for c in corners)])
    max_column = max([-_LABEL_LIMIT, *(c.column for c in corners)])

    groups = _corners_by_label(quad_group)

    # A label seen once is a border corner; seen more often, it is linked.
    for same_label in groups.values():
        linked = len(same_label) > 1
        for corner in same_label:
            corner.needs_neighbor = not linked

    # Merge the first two corners carrying the same label.
    for same_label in groups.values():
        if len(same_label) < 2:
            continue
        first, second = same_label[0], same_label[1]
        dx = second.pt[0] - first.pt[0]
        dy = second.pt[1] - first.pt[1]
        if dx != 0.0 or dy != 0.0:
            second.pt = (second.pt[0] - dx * 0.5, second.pt[1] - dy * 0.5)
            first.pt = (first.pt[0] + dx * 0.5, first.pt[1] + dy * 0.5)

    width, height = pattern_size
    larger = max(width, height)
    smaller = min(width, height)
    column_span = max_column - min_column
    row_span = max_row - min_row

    column_reached = larger + 1 == column_span
    if column_reached:
        _release(quad_group, "column", min_column, max_column)

    row_reached = larger + 1 == row_span
    if row_reached:
        _release(quad_group, "row", min_row, max_row)

    if not column_reached and row_reached:
        if smaller + 1 == column_span:
            _release(quad_group, "column", min_column, max_column)

    if column_reached and not row_reached:
        if smaller + 1 == row_span:
            _release(quad_group, "row", min_row, max_row)

    if not column_reached and not row_reached and smaller + 1 < column_span:
        if smaller + 1 == row_span:
            _release(quad_group, "row", min_row, max_row)

    if not column_reached and not row_reached and smaller + 1 < row_span:
        if smaller + 1 == column_span:
            _release(quad_group, "column", min_column, max_column)