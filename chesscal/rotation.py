"""Quaternion helpers and rigid transforms.

Quaternions are stored as ``(x, y, z, w)`` arrays.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np


def quaternion_product(q1, q2) -> np.ndarray:
    """Hamilton product ``q1 * q2`` of two ``(x, y, z, w)`` quaternions."""
    x1, y1, z1, w1 = (float(v) for v in q1)
    x2, y2, z2, w2 = (float(v) for v in q2)
    return np.array(
        [
            w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
            w1 * y2 + y1 * w2 + z1 * x2 - x1 * z2,
            w1 * z2 + z1 * w2 + x1 * y2 - y1 * x2,
            w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
        ]
    )


def quaternion_plus(x, delta) -> np.ndarray:
    """Apply a tangent-space increment ``delta`` (3 values) to quaternion ``x``."""
    delta = np.asarray(delta, dtype=float)
    norm_delta = float(np.linalg.norm(delta))
    if norm_delta > 0.0:
        scale = math.sin(norm_delta) / norm_delta
        q_delta = np.append(scale * delta, math.cos(norm_delta))
        return quaternion_product(q_delta, x)
    return np.asarray(x, dtype=float).copy()


def quaternion_plus_jacobian(x) -> np.ndarray:
    """Jacobian (4x3) of :func:`quaternion_plus` with respect to ``delta`` at zero."""
    qx, qy, qz, qw = (float(v) for v in x)
    return np.array(
        [
            [qw, qz, -qy],
            [-qz, qw, qx],
            [qy, -qx, qw],
            [-qx, -qy, -qz],
        ]
    )


def quaternion_to_matrix(q) -> np.ndarray:
    """Rotation matrix of a ``(x, y, z, w)`` quaternion."""
    x, y, z, w = (float(v) for v in q)
    tx, ty, tz = 2 * x, 2 * y, 2 * z
    twx, twy, twz = tx * w, ty * w, tz * w
    txx, txy, txz = tx * x, ty * x, tz * x
    tyy, tyz, tzz = ty * y, tz * y, tz * z
    return np.array(
        [
            [1 - (tyy + tzz), txy - twz, txz + twy],
            [txy + twz, 1 - (txx + tzz), tyz - twx],
            [txz - twy, tyz + twx, 1 - (txx + tyy)],
        ]
    )


def matrix_to_quaternion(matrix) -> np.ndarray:
    """Quaternion ``(x, y, z, w)`` of a 3x3 rotation matrix."""
    m = np.asarray(matrix, dtype=float)
    if m.shape != (3, 3):
        raise ValueError("rotation matrix must be 3x3")
    diag_sum = float(m[0, 0] + m[1, 1] + m[2, 2])
    q = np.zeros(4)
    if diag_sum > 0:
        t = math.sqrt(diag_sum + 1.0)
        q[3] = 0.5 * t
        t = 0.5 / t
        q[0] = (m[2, 1] - m[1, 2]) * t
        q[1] = (m[0, 2] - m[2, 0]) * t
        q[2] = (m[1, 0] - m[0, 1]) * t
        return q
    i = 0
    if m[1, 1] > m[0, 0]:
        i = 1
    if m[2, 2] > m[i, i]:
        i = 2
    j = (i + 1) % 3
    k = (j + 1) % 3
    t = math.sqrt(m[i, i] - m[j, j] - m[k, k] + 1.0)
    q[i] = 0.5 * t
    t = 0.5 / t
    q[3] = (m[k, j] - m[j, k]) * t
    q[j] = (m[j, i] + m[i, j]) * t
    q[k] = (m[k, i] + m[i, k]) * t
    return q


def quaternion_rotate_point(q, point) -> np.ndarray:
    """Rotate a 3-D point by a (not necessarily unit) ``(x, y, z, w)`` quaternion."""
    q = np.asarray(q, dtype=float)
    norm = float(np.linalg.norm(q))
    if norm == 0.0:
        raise ValueError("cannot rotate by a zero quaternion")
    return quaternion_to_matrix(q / norm) @ np.asarray(point, dtype=float)


def _identity_quaternion() -> np.ndarray:
    return np.array([0.0, 0.0, 0.0, 1.0])


@dataclass
class Transform:
    """A rigid transform: rotation quaternion ``(x, y, z, w)`` and translation."""

    rotation: np.ndarray = field(default_factory=_identity_quaternion)
    translation: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def __post_init__(self) -> None:
        self.rotation = np.asarray(self.rotation, dtype=float).reshape(-1)
        self.translation = np.asarray(self.translation, dtype=float).reshape(-1)
        if self.rotation.shape != (4,):
            raise ValueError("rotation must have 4 components")
        if self.translation.shape != (3,):
            raise ValueError("translation must have 3 components")

    @classmethod
    def from_matrix(cls, matrix) -> Transform:
        """Build from a 4x4 homogeneous matrix."""
        h = np.asarray(matrix, dtype=float)
        if h.shape != (4, 4):
            raise ValueError("homogeneous matrix must be 4x4")
        return cls(matrix_to_quaternion(h[:3, :3]), h[:3, 3].copy())

    def to_matrix(self) -> np.ndarray:
        """The 4x4 homogeneous matrix of this transform."""
        h = np.eye(4)
        h[:3, :3] = quaternion_to_matrix(self.rotation)
        h[:3, 3] = self.translation
        return h