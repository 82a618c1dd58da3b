import pytest

from chesscal.spline import BoundaryCondition, Spline, SplineType


def make_spline(points, spline_type=SplineType.CUBIC):
    spline = Spline()
    spline.set_type(spline_type)
    for x, y in points:
        spline.add_point(x, y)
    return spline


def test_cubic_passes_through_knots():
    points = [(0.0, 1.0), (1.0, 3.0), (2.5, -1.0), (4.0, 2.0)]
    spline = make_spline(points)
    for x, y in points:
        assert spline(x) == pytest.approx(y)


def test_natural_cubic_reproduces_straight_line():
    spline = make_spline([(0.0, 0.0), (1.0, 1.0), (2.0, 2.0), (3.0, 3.0)])
    for x in (0.25, 0.5, 1.7, 2.9):
        assert spline(x) == pytest.approx(x)


def test_parabolic_runout_reproduces_parabola():
    spline = make_spline([(0.0, 0.0), (1.0, 1.0), (2.0, 4.0)])
    spline.set_low_bc(BoundaryCondition.PARABOLIC_RUNOUT)
    spline.set_high_bc(BoundaryCondition.PARABOLIC_RUNOUT)
    for x in (0.3, 0.5, 1.2, 1.9):
        assert spline(x) == pytest.approx(x * x)


def test_linear_interpolation_between_knots():
    spline = make_spline([(0.0, 0.0), (1.0, 10.0), (2.0, 0.0)], SplineType.LINEAR)
    assert spline(0.5) == pytest.approx((0.0 + 10.0) / 2)
    assert spline(1.5) == pytest.approx((10.0 + 0.0) / 2)


def test_requires_two_points():
    spline = make_spline([(1.0, 1.0)])
    with pytest.raises(ValueError):
        spline(0.5)


def test_empty_spline_raises():
    with pytest.raises(ValueError):
        Spline()(0.0)


def test_fixed_first_derivative_low_extrapolation():
    spline = make_spline([(0.0, 5.0), (1.0, 6.0), (2.0, 9.0)])
    spline.set_low_bc(BoundaryCondition.FIXED_1ST_DERIV, 0.0)
    assert spline(-3.0) == pytest.approx(5.0)


def test_fixed_first_derivative_high_extrapolation():
    spline = make_spline([(0.0, 5.0), (1.0, 6.0), (2.0, 9.0)])
    spline.set_high_bc(BoundaryCondition.FIXED_1ST_DERIV, 0.0)
    assert spline(7.0) == pytest.approx(9.0)


def test_duplicate_x_values_are_separated():
    spline = make_spline([(1.0, 2.0), (1.0, 3.0), (0.0, 0.0)])
    spline(0.5)
    xs = [x for x, _ in spline]
    assert len(xs) == 3
    assert all(a < b for a, b in zip(xs, xs[1:]))


def test_points_sorted_after_evaluation():
    spline = make_spline([(3.0, 1.0), (1.0, 2.0), (2.0, 0.0)])
    spline(1.5)
    assert [x for x, _ in spline] == [1.0, 2.0, 3.0]


def test_clear_empties_spline():
    spline = make_spline([(0.0, 0.0), (1.0, 1.0)])
    spline(0.5)
    spline.clear()
    assert len(spline) == 0
    with pytest.raises(ValueError):
        spline(0.5)


def test_set_type_invalidates_cache():
    spline = make_spline([(0.0, 0.0), (1.0, 1.0), (2.0, 0.0)])
    cubic_value = spline(0.5)
    spline.set_type(SplineType.LINEAR)
    linear_value = spline(0.5)
    assert linear_value == pytest.approx(0.5)
    assert cubic_value != pytest.approx(linear_value)


def test_continuity_at_interior_knot():
    spline = make_spline([(0.0, 0.0), (1.0, 2.0), (2.0, -1.0), (3.0, 0.5)])
    left = spline(1.0 - 1e-9)
    right = spline(1.0 + 1e-9)
    assert left == pytest.approx(right, abs=1e-6)


def test_len_counts_points():
    spline = make_spline([(0.0, 0.0), (1.0, 1.0), (2.0, 4.0)])
    assert len(spline) == 3