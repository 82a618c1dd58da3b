import math

import numpy as np
import pytest

from chesscal.rotation import (
    Transform,
    matrix_to_quaternion,
    quaternion_plus,
    quaternion_plus_jacobian,
    quaternion_product,
    quaternion_rotate_point,
    quaternion_to_matrix,
)

IDENTITY = np.array([0.0, 0.0, 0.0, 1.0])


def random_unit_quaternions(count, seed=0):
    rng = np.random.default_rng(seed)
    qs = rng.normal(size=(count, 4))
    return qs / np.linalg.norm(qs, axis=1, keepdims=True)


def test_product_with_identity():
    q = random_unit_quaternions(1)[0]
    assert np.allclose(quaternion_product(IDENTITY, q), q)
    assert np.allclose(quaternion_product(q, IDENTITY), q)


def test_product_matches_matrix_composition():
    q1, q2 = random_unit_quaternions(2, seed=1)
    composed = quaternion_to_matrix(quaternion_product(q1, q2))
    assert np.allclose(composed, quaternion_to_matrix(q1) @ quaternion_to_matrix(q2))


def test_plus_zero_delta_returns_input():
    q = random_unit_quaternions(1, seed=2)[0]
    assert np.allclose(quaternion_plus(q, [0.0, 0.0, 0.0]), q)


def test_plus_preserves_unit_norm():
    q = random_unit_quaternions(1, seed=3)[0]
    result = quaternion_plus(q, [0.3, -0.2, 0.7])
    assert np.linalg.norm(result) == pytest.approx(1.0)


def test_jacobian_matches_finite_difference():
    q = random_unit_quaternions(1, seed=4)[0]
    jac = quaternion_plus_jacobian(q)
    eps = 1e-6
    numeric = np.column_stack(
        [
            (quaternion_plus(q, eps * e) - quaternion_plus(q, -eps * e)) / (2 * eps)
            for e in np.eye(3)
        ]
    )
    assert jac.shape == (4, 3)
    assert np.allclose(jac, numeric, atol=1e-6)


def test_rotate_quarter_turn_about_z():
    half = math.pi / 4
    q = [0.0, 0.0, math.sin(half), math.cos(half)]
    assert np.allclose(quaternion_rotate_point(q, [1.0, 0.0, 0.0]), [0.0, 1.0, 0.0])


def test_rotate_normalizes_quaternion():
    q = random_unit_quaternions(1, seed=5)[0]
    point = np.array([1.0, -2.0, 0.5])
    assert np.allclose(
        quaternion_rotate_point(3.0 * q, point), quaternion_rotate_point(q, point)
    )
    assert np.linalg.norm(quaternion_rotate_point(q, point)) == pytest.approx(
        np.linalg.norm(point)
    )


def test_rotate_zero_quaternion_raises():
    with pytest.raises(ValueError):
        quaternion_rotate_point([0.0, 0.0, 0.0, 0.0], [1.0, 0.0, 0.0])


@pytest.mark.parametrize("seed", range(5))
def test_matrix_quaternion_round_trip(seed):
    for q in random_unit_quaternions(20, seed=seed):
        recovered = matrix_to_quaternion(quaternion_to_matrix(q))
        assert np.allclose(recovered, q) or np.allclose(recovered, -q)


def test_matrix_is_orthonormal():
    q = random_unit_quaternions(1, seed=6)[0]
    r = quaternion_to_matrix(q)
    assert np.allclose(r @ r.T, np.eye(3))
    assert np.linalg.det(r) == pytest.approx(1.0)


def test_matrix_to_quaternion_rejects_wrong_shape():
    with pytest.raises(ValueError):
        matrix_to_quaternion(np.eye(4))


def test_default_transform_is_identity():
    assert np.allclose(Transform().to_matrix(), np.eye(4))


def test_transform_matrix_round_trip():
    q = random_unit_quaternions(1, seed=7)[0]
    h = np.eye(4)
    h[:3, :3] = quaternion_to_matrix(q)
    h[:3, 3] = [1.0, -2.0, 3.5]
    transform = Transform.from_matrix(h)
    assert np.allclose(transform.to_matrix(), h)
    assert np.allclose(transform.translation, [1.0, -2.0, 3.5])


def test_transform_rejects_bad_shapes():
    with pytest.raises(ValueError):
        Transform(rotation=[0.0, 0.0, 1.0])
    with pytest.raises(ValueError):
        Transform.from_matrix(np.eye(3))