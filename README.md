# chesscal

Building blocks for calibrating cameras with a chessboard pattern: the
graph-based part of a chessboard corner detector, plus the numeric helpers
that go with it.

## Modules

### `chesscal.spline`

`Spline` is a one-dimensional interpolating spline through `(x, y)` points.

- `add_point(x, y)` adds a knot.
- `set_low_bc(bc, value=0.0)` and `set_high_bc(bc, value=0.0)` choose the
  end conditions from `BoundaryCondition`: `FIXED_1ST_DERIV`,
  `FIXED_2ND_DERIV` (the default) or `PARABOLIC_RUNOUT`.
- `set_type(spline_type)` chooses `SplineType.LINEAR` or `SplineType.CUBIC`
  (the default).
- `clear()`, `len(spline)` and iteration over the `(x, y)` points are also
  available.

Calling `spline(x)` evaluates the spline and extrapolates beyond the end
knots. Coefficients are recomputed lazily after any change. Knots with equal
x are nudged apart. Fewer than two points raise `ValueError`.

### `chesscal.rotation`

Quaternions are `(x, y, z, w)` arrays.

- `quaternion_product(q1, q2)` is the Hamilton product.
- `quaternion_plus(x, delta)` applies a three-component tangent increment.
  `quaternion_plus_jacobian(x)` gives its 4x3 Jacobian at zero.
- `quaternion_rotate_point(q, point)` normalises `q` before rotating.
- `quaternion_to_matrix(q)` and `matrix_to_quaternion(matrix)` convert
  between quaternions and rotation matrices.

`Transform(rotation, translation)` is a rigid transform. Build one from a
4x4 homogeneous matrix with `Transform.from_matrix` and convert it back with
`to_matrix()`.

### `chesscal.mathutil`

- `hypot3`, `d2r`, `r2d` and `sinc` are small numeric helpers.
- `time_in_microseconds()` and `time_in_seconds()` return wall-clock time.
- `bres_line(x0, y0, x1, y1)` lists the grid cells on a line.
  `bres_circle(x0, y0, r)` lists the cells of a filled circle, sorted.
- `fit_circle(points)` fits a circle by modified least squares and returns
  `(cx, cy, radius)`.
- `intersect_circles(x1, y1, r1, x2, y2, r2)` returns zero, one or two
  intersection points.
- `timestamp_diff(t1, t2)` returns the signed `t2 - t1`, saturated to the
  64-bit range.

### `chesscal.geodesy`

Conversions on the WGS84 ellipsoid:

- `ll_to_utm(latitude, longitude)` returns `(northing, easting, zone)`.
- `utm_to_ll(northing, easting, zone)` returns `(latitude, longitude)`.
- `utm_letter_designator(latitude)` returns the latitude band letter, or
  `"Z"` outside 80S..84N.

### `chesscal.colormaps`

- `colormap(name, idx)` returns the RGB entry `idx` (0..127) of the
  `"jet"` or `"autumn"` table.
- `color_depth_image(depth, min_range, max_range)` false-colours a 2-D depth
  array into an `H x W x 3` uint8 BGR image. Zero depths stay black and
  nearer pixels are warmer.

### `chesscal.equidistant`

The equidistant (Kannala–Brandt) fisheye projection:

- `EquidistantParameters` holds the camera name, image size and
  `k2..k5, mu, mv, u0, v0`.
- `radial_distortion(k2, k3, k4, k5, theta)` is the odd polynomial in
  `theta`.
- `project_point(params, q, t, point)` projects a world point into the image.

### `chesscal.chessboard`

This sub-package works on quads that have already been extracted from an
image.

- `quads` defines `ChessboardCorner` and `ChessboardQuad`
  (`ChessboardQuad.from_points`). It also provides `match_corners`,
  `find_quad_neighbors`, `find_connected_quads`,
  `clean_found_connected_quads` and `augment_best_run`.
- `labeling` provides `label_quad_group(quad_group, pattern_size, first_run)`.
  It assigns a row and column to every corner, merges corners that share a
  label, and sets `needs_neighbor`.
- `ordering` provides `check_quad_group(quads, pattern_size, image_size)`.
  It returns the inner corners row by row, or `None` when the group does not
  form a consistent board.
- `monotony` provides `check_board_monotony(corners, pattern_size)`. It also
  provides `count_classes(pairs)` and
  `has_consistent_hypotheses(hypotheses, pattern_size)` for screening square
  hypotheses by size and colour.

Pattern sizes are `(width, height)` in inner corners. Image sizes are
`(cols, rows)`.

## What it does not do

The package performs no image processing. It does not read images,
threshold, dilate, find contours or refine corners to sub-pixel accuracy.
Quads must be supplied as point lists. There is no calibration command, no
intrinsic estimation or optimisation, and no reading or writing of camera
parameter files. The equidistant model only projects points forward; it
does not lift image points back to rays.

## Installation

Install the package with pip from the project directory. The `test` extra
adds pytest for running the test suite.

## Examples

```python
from chesscal.spline import Spline, BoundaryCondition

spline = Spline()
spline.set_low_bc(BoundaryCondition.PARABOLIC_RUNOUT)
spline.set_high_bc(BoundaryCondition.PARABOLIC_RUNOUT)
for x, y in [(0.0, 0.0), (1.0, 1.0), (2.0, 4.0)]:
    spline.add_point(x, y)
print(spline(1.5))
```

```python
from chesscal.geodesy import ll_to_utm, utm_to_ll

northing, easting, zone = ll_to_utm(47.37, 8.54)
latitude, longitude = utm_to_ll(northing, easting, zone)
```

```python
from chesscal.chessboard.quads import ChessboardCorner
from chesscal.chessboard.monotony import check_board_monotony

corners = [ChessboardCorner(pt=(10.0 * j, 10.0 * i)) for i in range(3) for j in range(3)]
print(check_board_monotony(corners, (3, 3)))  # True for a regular grid
```