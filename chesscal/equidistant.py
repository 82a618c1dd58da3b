"""Equidistant (Kannala-Brandt) fisheye projection model."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from chesscal.rotation import quaternion_rotate_point


@dataclass
class EquidistantParameters:
    """Intrinsics of an equidistant fisheye camera."""

    camera_name: str = ""
    image_width: int = 0
    image_height: int = 0
    k2: float = 0.0
    k3: float = 0.0
    k4: float = 0.0
    k5: float = 0.0
    mu: float = 0.0
    mv: float = 0.0
    u0: float = 0.0
    v0: float = 0.0

    @property
    def intrinsics(self) -> tuple[float, ...]:
        """The projection parameters as ``(k2, k3, k4, k5, mu, mv, u0, v0)``."""
        return (self.k2, self.k3, self.k4, self.k5, self.mu, self.mv, self.u0, self.v0)


def radial_distortion(k2: float, k3: float, k4: float, k5: float, theta: float) -> float:
    """Distorted radius ``theta + k2 theta^3 + k3 theta^5 + k4 theta^7 + k5 theta^9``."""
    return theta + k2 * theta**3 + k3 * theta**5 + k4 * theta**7 + k5 * theta**9


def project_point(
    params: EquidistantParameters | Sequence[float], q, t, point
) -> np.ndarray:
    """Project a world point into the image.

    ``params`` is either :class:`EquidistantParameters` or the 8 values
    ``(k2, k3, k4, k5, mu, mv, u0, v0)``; ``q`` is the ``(x, y, z, w)`` camera
    rotation and ``t`` the camera translation.
    """
    values = params.intrinsics if isinstance(params, EquidistantParameters) else tuple(params)
    if len(values) != 8:
        raise ValueError("expected 8 projection parameters")
    k2, k3, k4, k5, mu, mv, u0, v0 = (float(v) for v in values)

    p_c = quaternion_rotate_point(q, point) + np.asarray(t, dtype=float)

    length = float(np.linalg.norm(p_c))
    if length == 0.0:
        raise ValueError("point coincides with the camera centre")
    theta = math.acos(max(-1.0, min(1.0, p_c[2] / length)))
    phi = math.atan2(p_c[1], p_c[0])

    r = radial_distortion(k2, k3, k4, k5, theta)
    return np.array([mu * r * math.cos(phi) + u0, mv * r * math.sin(phi) + v0])