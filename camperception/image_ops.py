"""Pixel-level operations on 8-bit images held as numpy arrays.

Single-channel images are ``(height, width)`` or ``(height, width, 1)``
arrays; three-channel images are ``(height, width, 3)`` arrays with the
channels packed per pixel.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Sequence

import numpy as np


class Color(Enum):
    """Colour layout of an image."""

    NONE = 0
    GRAY = 1
    RGB = 2
    BGR = 3

    @property
    def channels(self) -> int:
        """Number of channels an image in this layout has."""
        return {Color.NONE: 0, Color.GRAY: 1, Color.RGB: 3, Color.BGR: 3}[self]


def _channels(image: np.ndarray) -> int:
    if image.ndim == 2:
        return 1
    if image.ndim == 3:
        return image.shape[2]
    raise ValueError(f"image must have 2 or 3 dimensions, got {image.ndim}")


def _as_hwc(image) -> np.ndarray:
    """View ``image`` as a uint8 ``(height, width, channels)`` array."""
    array = np.asarray(image, dtype=np.uint8)
    channels = _channels(array)
    if channels not in (1, 3):
        raise ValueError(
            f"invalid number of channels: {channels}; only 1 and 3 are supported")
    if array.ndim == 2:
        array = array[:, :, np.newaxis]
    return array


def image_to_blob(image) -> np.ndarray:
    """Copy an image into an NHWC blob of shape ``(1, rows, cols, channels)``."""
    hwc = _as_hwc(image)
    return np.ascontiguousarray(hwc[np.newaxis]).copy()


def image_to_gray(src, coeffs: Sequence[float]) -> np.ndarray:
    """Weighted sum of the three channels of ``src`` as a single-channel image."""
    array = np.asarray(src, dtype=np.uint8)
    if array.ndim != 3 or array.shape[2] != 3:
        raise ValueError("source image must have 3 channels")
    weights = np.asarray(coeffs, dtype=np.float32)
    if weights.shape != (3,):
        raise ValueError("exactly three coefficients are required")
    gray = array.astype(np.float32) @ weights
    return np.clip(np.rint(gray), 0, 255).astype(np.uint8)


def swap_image_channels(src, order: Sequence[int]) -> np.ndarray:
    """Reorder channels: channel ``i`` of the result is channel ``order[i]``."""
    array = np.asarray(src, dtype=np.uint8)
    if array.ndim != 3 or array.shape[2] != 3:
        raise ValueError("source image must have 3 channels")
    order = [int(i) for i in order]
    if sorted(order) != [0, 1, 2]:
        raise ValueError(f"order must be a permutation of 0, 1, 2: {order}")
    return np.ascontiguousarray(array[:, :, order])


def dup_image_channels(src) -> np.ndarray:
    """Copy a single-channel image into all three channels of a new image."""
    array = np.asarray(src, dtype=np.uint8)
    if array.ndim == 3 and array.shape[2] == 1:
        array = array[:, :, 0]
    if array.ndim != 2:
        raise ValueError("source image must have a single channel")
    return np.repeat(array[:, :, np.newaxis], 3, axis=2)


def image_remap(src, map_x, map_y, dst: Optional[np.ndarray] = None) -> np.ndarray:
    """Bilinear remap: ``dst[j, i]`` samples ``src`` at ``(map_x[j, i], map_y[j, i])``.

    Destination pixels whose source position falls outside the image are
    left as they are in ``dst``. ``dst`` is written in place and returned;
    when omitted, a zeroed image of the same shape as ``src`` is used.
    """
    source = np.asarray(src, dtype=np.uint8)
    hwc = _as_hwc(source)
    height, width = hwc.shape[:2]
    mx = np.asarray(map_x, dtype=np.float32)
    my = np.asarray(map_y, dtype=np.float32)
    if mx.shape != (height, width) or my.shape != (height, width):
        raise ValueError("maps must have the same height and width as the image")

    if dst is None:
        dst = np.zeros_like(source)
    elif dst.shape != source.shape:
        raise ValueError("destination must have the same shape as the source")

    with np.errstate(invalid="ignore"):
        tx = np.trunc(mx)
        ty = np.trunc(my)
        valid = (np.isfinite(tx) & np.isfinite(ty)
                 & (tx >= 0) & (tx < width) & (ty >= 0) & (ty < height))
    xs = np.where(valid, tx, 0).astype(np.int64)
    ys = np.where(valid, ty, 0).astype(np.int64)
    x_frac = np.where(valid, mx - tx, 0).astype(np.float32)[:, :, np.newaxis]
    y_frac = np.where(valid, my - ty, 0).astype(np.float32)[:, :, np.newaxis]
    xs1 = np.where(xs < width - 1, xs + 1, xs)
    ys1 = np.where(ys < height - 1, ys + 1, ys)

    pixels = hwc.astype(np.float32)
    p00 = pixels[ys, xs]
    p01 = pixels[ys, xs1]
    p10 = pixels[ys1, xs]
    p11 = pixels[ys1, xs1]
    one = np.float32(1)
    value = ((p00 * (one - x_frac) + p01 * x_frac) * (one - y_frac)
             + (p10 * (one - x_frac) + p11 * x_frac) * y_frac)
    result = np.clip(value, 0, 255).astype(np.uint8)

    target = dst if dst.ndim == 3 else dst[:, :, np.newaxis]
    target[valid] = result[valid]
    return dst