"""Colour lookup tables and depth-image colouring."""

from __future__ import annotations

import numpy as np

_SIZE = 128


def _autumn_entry(i: int) -> tuple[float, float, float]:
    return (1.0, float(f"{i / (_SIZE - 1):.5g}"), 0.0)


def _jet_entry(i: int) -> tuple[float, float, float]:
    step = 1.0 / 32.0
    if i < 16:
        return (0.0, 0.0, (17 + i) * step)
    if i < 48:
        return (0.0, (i - 15) * step, 1.0)
    if i < 80:
        return ((i - 47) * step, 1.0, 1.0 - (i - 47) * step)
    if i < 112:
        return (1.0, 1.0 - (i - 79) * step, 0.0)
    return (1.0 - (i - 111) * step, 0.0, 0.0)


_COLORMAPS = {
    "jet": np.array([_jet_entry(i) for i in range(_SIZE)], dtype=np.float32),
    "autumn": np.array([_autumn_entry(i) for i in range(_SIZE)], dtype=np.float32),
}


def colormap(name: str, idx: int) -> tuple[float, float, float]:
    """RGB components in ``[0, 1]`` of entry ``idx`` (0..127) of a named colormap.

    Known names are ``"jet"`` and ``"autumn"``.
    """
    table = _COLORMAPS.get(name)
    if table is None:
        raise ValueError(f"unknown colormap: {name!r}")
    if not 0 <= idx < _SIZE:
        raise ValueError(f"colormap index out of range: {idx}")
    r, g, b = table[idx]
    return float(r), float(g), float(b)


def color_depth_image(depth, min_range: float, max_range: float) -> np.ndarray:
    """Colour a depth image with the jet colormap.

    Returns an ``H x W x 3`` uint8 array in BGR order. Pixels whose depth is
    zero stay black; nearer pixels are warmer.
    """
    if max_range <= min_range:
        raise ValueError("max_range must be greater than min_range")

    depth = np.asarray(depth, dtype=np.float32)
    if depth.ndim != 2:
        raise ValueError("depth image must be two-dimensional")

    lo = np.float32(min_range)
    span = np.float32(max_range) - lo
    scaled = np.minimum(depth - lo, span) / span * np.float32(127.0)
    idx = 127 - np.trunc(scaled).astype(np.int64)
    # Depths below min_range would fall outside the table.
    idx = np.clip(idx, 0, _SIZE - 1)

    bgr = _COLORMAPS["jet"][:, ::-1] * np.float32(255.0)
    colored = np.trunc(bgr[idx]).astype(np.uint8)
    colored[depth == 0] = 0
    return colored