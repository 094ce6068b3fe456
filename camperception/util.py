"""Small numeric and file helpers for camera perception."""

from __future__ import annotations

import math
from pathlib import Path
from typing import Iterable, Sequence

import numpy as np


def equal(x: float, target: float, eps: float = 1e-6) -> bool:
    """Whether ``x`` lies strictly within ``eps`` of ``target``."""
    return abs(x - target) < eps


def contain(array: Iterable, element) -> bool:
    """Whether ``element`` occurs in ``array``."""
    return any(item == element for item in array)


def load_anchors(path) -> list[float]:
    """Read anchors as a flat list ``[w0, h0, w1, h1, ...]``.

    The file holds the anchor count followed by two numbers per anchor.
    """
    tokens = Path(path).read_text().split()
    if not tokens:
        raise ValueError("failed to get number of anchors")
    try:
        count = int(tokens[0])
    except ValueError:
        raise ValueError("failed to get number of anchors") from None
    if count < 0:
        raise ValueError(f"invalid number of anchors: {count}")
    values = tokens[1:]
    anchors: list[float] = []
    for i in range(count):
        pair = values[2 * i:2 * i + 2]
        try:
            if len(pair) != 2:
                raise ValueError
            anchors.extend(float(v) for v in pair)
        except ValueError:
            raise ValueError(f"failed to load the {i}-th anchor") from None
    return anchors


def load_expand(path) -> list[float]:
    """Read whitespace-separated floats, stopping at the first that does not parse."""
    expands: list[float] = []
    for token in Path(path).read_text().split():
        try:
            expands.append(float(token))
        except ValueError:
            break
    return expands


def resize_cpu(src, height: int, width: int, stepwidth: int) -> np.ndarray:
    """Bilinearly resize an NHWC (or HWC) uint8 image to ``height`` x ``width``.

    ``stepwidth`` is the row stride of ``src`` in pixels. The result is a
    float32 array of shape ``(1, height, width, channels)`` clipped to [0, 255].
    """
    src = np.asarray(src)
    if src.ndim == 3:
        src = src[np.newaxis]
    if src.ndim != 4:
        raise ValueError("source must have 3 or 4 dimensions")
    if height <= 0 or width <= 0:
        raise ValueError("target size must be positive")
    _, origin_height, origin_width, channel = src.shape
    flat = src.reshape(-1)
    f32 = np.float32
    fx = f32(origin_width) / f32(width)
    fy = f32(origin_height) / f32(height)
    src_x = (np.arange(width, dtype=f32) + f32(0.5)) * fx - f32(0.5)
    src_y = (np.arange(height, dtype=f32) + f32(0.5)) * fy - f32(0.5)
    x1 = (src_x.astype(np.float64) + 0.5).astype(np.int64)
    y1 = (src_y.astype(np.float64) + 0.5).astype(np.int64)
    x2 = x1 + 1
    y2 = y1 + 1
    x1_read = np.maximum(x1, 0)
    y1_read = np.maximum(y1, 0)
    x2_read = np.minimum(x2, width - 1)
    y2_read = np.minimum(y2, height - 1)
    channels = np.arange(channel)

    def pixels(ys, xs):
        idx = ((ys[:, None] * stepwidth + xs[None, :]) * channel)[..., None]
        return flat[idx + channels].astype(f32)

    wx2 = (x2.astype(f32) - src_x)[None, :, None]
    wx1 = (src_x - x1.astype(f32))[None, :, None]
    wy2 = (y2.astype(f32) - src_y)[:, None, None]
    wy1 = (src_y - y1.astype(f32))[:, None, None]
    out = (wx2 * wy2 * pixels(y1_read, x1_read)
           + pixels(y1_read, x2_read) * wx1 * wy2
           + pixels(y2_read, x1_read) * wx2 * wy1
           + pixels(y2_read, x2_read) * wx1 * wy1)
    return np.clip(out, 0, 255).astype(f32)[np.newaxis]


def polygon_from_bbox3d(size: Sequence[float], direction: Sequence[float],
                        center: Sequence[float]) -> list[tuple[float, float, float]]:
    """Ground-plane corners of a 3D box of given size, heading and center."""
    length, width = float(size[0]), float(size[1])
    norm = math.hypot(direction[0], direction[1])
    if norm == 0:
        raise ValueError("direction must not be zero")
    cos_theta = direction[0] / norm
    sin_theta = -direction[1] / norm
    x1 = length / 2
    x2 = -x1
    y1 = width / 2
    y2 = -y1

    def corner(px, py):
        return (px * cos_theta + py * sin_theta + center[0],
                py * cos_theta - px * sin_theta + center[1],
                0.0)

    return [corner(x1, y1), corner(x1, y2), corner(x2, y2), corner(x2, y1)]


def calculate_mean_and_variance(data: Sequence[float]) -> tuple[float, float]:
    """Mean and population variance of ``data``; ``(0, 0)`` when empty."""
    if not data:
        return 0, 0
    mean = sum(data) / len(data)
    variance = sum((x - mean) ** 2 for x in data) / len(data)
    return mean, variance