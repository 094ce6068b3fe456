"""Lens undistortion through precomputed rectification maps."""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from camperception.image_ops import image_remap

_DISTORTION_PARAMS = 8


def init_undistort_rectify_map(camera_model, distortion: Sequence[float], r,
                               new_camera_model, width: int,
                               height: int) -> tuple[np.ndarray, np.ndarray]:
    """Build the ``(map_x, map_y)`` remap tables for a distorted camera.

    ``distortion`` holds the rational model coefficients
    ``k1, k2, p1, p2, k3, k4, k5, k6``. Each map is a float32 array of shape
    ``(height, width)`` giving, for every undistorted pixel, the position to
    sample in the distorted image.
    """
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be positive")
    k = np.asarray(camera_model, dtype=np.float32)
    nk = np.asarray(new_camera_model, dtype=np.float32)
    rot = np.asarray(r, dtype=np.float32)
    if k.shape != (3, 3) or nk.shape != (3, 3) or rot.shape != (3, 3):
        raise ValueError("camera models and rotation must be 3x3 matrices")
    dist = np.asarray(distortion, dtype=np.float32).reshape(-1)
    if dist.shape != (_DISTORTION_PARAMS,):
        raise ValueError(
            f"expected {_DISTORTION_PARAMS} distortion coefficients, "
            f"got {dist.size}")

    fx, fy, cx, cy = (float(k[0, 0]), float(k[1, 1]),
                      float(k[0, 2]), float(k[1, 2]))
    nfx, nfy, ncx, ncy = nk[0, 0], nk[1, 1], nk[0, 2], nk[1, 2]
    k1, k2, p1, p2, k3, k4, k5, k6 = (float(v) for v in dist)

    rinv = np.linalg.inv(rot).astype(np.float32)

    us = (np.arange(width, dtype=np.float32) - ncx) / nfx
    vs = (np.arange(height, dtype=np.float32) - ncy) / nfy
    grid_u, grid_v = np.meshgrid(us, vs)
    xy1 = np.stack([grid_u, grid_v, np.ones_like(grid_u)], axis=-1)
    xyw = (xy1 @ rinv.T).astype(np.float32)

    nx = xyw[..., 0].astype(np.float64) / xyw[..., 2].astype(np.float64)
    ny = xyw[..., 1].astype(np.float64) / xyw[..., 2].astype(np.float64)
    r_square = nx * nx + ny * ny
    r_quad = r_square * r_square
    r_sextic = r_quad * r_square
    scale = ((1 + r_square * k1 + r_quad * k2 + r_sextic * k3)
             / (1 + r_square * k4 + r_quad * k5 + r_sextic * k6))
    nnx = nx * scale + 2 * p1 * nx * ny + p2 * (r_square + 2 * nx * nx)
    nny = ny * scale + p1 * (r_square + 2 * ny * ny) + 2 * p2 * nx * ny
    map_x = (nnx * fx + cx).astype(np.float32)
    map_y = (nny * fy + cy).astype(np.float32)
    return map_x, map_y


class UndistortionHandler:
    """Undistorts images of one camera using maps built at construction."""

    def __init__(self, intrinsic, distortion: Sequence[float], width: int,
                 height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.map_x, self.map_y = init_undistort_rectify_map(
            intrinsic, distortion, np.eye(3, dtype=np.float32), intrinsic,
            self.width, self.height)
        self.inited = True

    def handle(self, src, dst: Optional[np.ndarray] = None) -> np.ndarray:
        """Undistort ``src`` into ``dst`` (or a new image) and return it."""
        if not self.inited:
            raise RuntimeError("undistortion handler is not initialised")
        return image_remap(src, self.map_x, self.map_y, dst)

    def release(self) -> None:
        """Mark the handler unusable until rebuilt."""
        self.inited = False