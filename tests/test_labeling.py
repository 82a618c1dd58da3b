import pytest

from chesscal.chessboard.labeling import label_quad_group
from chesscal.chessboard.quads import ChessboardQuad


def square(x, y):
    return ChessboardQuad.from_points([(x, y), (x + 1, y), (x + 1, y + 1), (x, y + 1)])


def link(q1, i, q2, j, share=True):
    if share:
        q2.corners[j] = q1.corners[i]
    q1.neighbors[i] = q2
    q2.neighbors[j] = q1
    q1.count += 1
    q2.count += 1


def diagonal_pair():
    a = square(0.0, 0.0)
    b = square(1.0, 1.0)
    link(a, 2, b, 0)
    return [a, b]


def chain():
    a = square(0.0, 0.0)
    b = square(1.0, 1.0)
    c = square(2.0, 0.0)
    link(a, 2, b, 0)
    link(b, 1, c, 3)
    return [a, b, c]


def all_corners(group):
    return [corner for quad in group for corner in quad.corners]


def test_seed_quad_gets_origin_labels():
    group = diagonal_pair()
    label_quad_group(group, (5, 5), True)
    a = group[0]
    assert [(c.row, c.column) for c in a.corners] == [(0, 0), (0, 1), (1, 1), (1, 0)]


def test_labels_follow_geometry():
    group = chain()
    label_quad_group(group, (5, 5), True)
    assert all(q.labeled for q in group)
    origin = group[1].corners[0]
    for corner in all_corners(group):
        assert corner.column - origin.column == round(corner.pt[0] - origin.pt[0])
        assert corner.row - origin.row == round(corner.pt[1] - origin.pt[1])


def test_best_connected_quad_is_seed():
    group = chain()
    label_quad_group(group, (5, 5), True)
    b = group[1]
    assert (b.corners[0].row, b.corners[0].column) == (0, 0)
    assert (b.corners[2].row, b.corners[2].column) == (1, 1)


def test_needs_neighbor_for_unshared_corners():
    group = diagonal_pair()
    label_quad_group(group, (5, 5), True)
    a, b = group
    shared = a.corners[2]
    assert shared is b.corners[0]
    assert shared.needs_neighbor is False
    others = [c for c in all_corners(group) if c is not shared]
    assert all(c.needs_neighbor for c in others)


def test_full_extent_releases_border_corners():
    group = diagonal_pair()
    label_quad_group(group, (1, 1), True)
    assert not any(c.needs_neighbor for c in all_corners(group))


def test_column_extent_with_matching_rows_releases_rows():
    group = chain()
    label_quad_group(group, (2, 1), True)
    assert not any(c.needs_neighbor for c in all_corners(group))


def test_column_extent_without_matching_rows_keeps_rows():
    group = chain()
    label_quad_group(group, (2, 5), True)
    a = group[0]
    # Top-row corner in an interior column keeps needing a neighbour.
    assert a.corners[1].needs_neighbor is True
    # Corners on the outer columns are released.
    assert a.corners[0].needs_neighbor is False
    assert group[2].corners[1].needs_neighbor is False


def test_distinct_corners_with_same_label_are_merged():
    a = square(0.0, 0.0)
    b = ChessboardQuad.from_points([(1.2, 1.4), (2.0, 1.0), (2.0, 2.0), (1.0, 2.0)])
    link(a, 2, b, 0, share=False)
    label_quad_group([a, b], (5, 5), True)
    first, second = a.corners[2], b.corners[0]
    assert first is not second
    assert (first.row, first.column) == (second.row, second.column)
    assert first.pt == pytest.approx(second.pt)
    assert first.pt == pytest.approx((1.1, 1.2))
    assert first.needs_neighbor is False
    assert second.needs_neighbor is False


def test_existing_labels_are_extended_without_seeding():
    group = diagonal_pair()
    a, b = group
    a.labeled = True
    for corner, (row, column) in zip(a.corners, [(5, 7), (5, 8), (6, 8), (6, 7)]):
        corner.row = row
        corner.column = column
    label_quad_group(group, (5, 5), False)
    assert b.labeled
    assert (b.corners[0].row, b.corners[0].column) == (6, 8)
    assert b.corners[2].row == a.corners[0].row + 2
    assert b.corners[2].column == a.corners[0].column + 2


def test_first_run_without_linked_quads_raises():
    with pytest.raises(ValueError):
        label_quad_group([square(0.0, 0.0)], (3, 3), True)


def test_first_run_on_empty_group_raises():
    with pytest.raises(ValueError):
        label_quad_group([], (3, 3), True)