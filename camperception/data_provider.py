"""Holds one camera frame and converts it between colour layouts on demand."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from camperception.boxes import Rect
from camperception.image_ops import (Color, dup_image_channels, image_to_blob,
                                     image_to_gray, swap_image_channels)
from camperception.undistortion import UndistortionHandler

_BGR_TO_GRAY = (0.114, 0.587, 0.299)
_RGB_TO_GRAY = (0.299, 0.587, 0.114)
_SWAP_ORDER = (2, 1, 0)

_ENCODINGS = {
    "rgb8": Color.RGB,
    "bgr8": Color.BGR,
    "gray": Color.GRAY,
    "y": Color.GRAY,
}


@dataclass
class InitOptions:
    """Frame size and optional undistortion for a data provider."""

    image_height: int = 0
    image_width: int = 0
    device_id: int = -1
    do_undistortion: bool = False
    sensor_name: str = ""
    undistortion_handler: Optional[UndistortionHandler] = None


@dataclass
class ImageOptions:
    """Which colour layout to produce and whether to crop."""

    target_color: Color = Color.NONE
    do_crop: bool = False
    crop_roi: Rect = field(default_factory=Rect)

    def __str__(self) -> str:
        text = f" {self.target_color.value} {int(self.do_crop)}"
        if self.do_crop:
            roi = self.crop_roi
            text += f" {roi.x} {roi.y} {roi.width} {roi.height}"
        return text


class DataProvider:
    """Keeps gray, RGB and BGR versions of a frame, converting lazily."""

    def __init__(self) -> None:
        self.sensor_name = ""
        self.src_height = 0
        self.src_width = 0
        self.device_id = -1
        self._images: dict[Color, np.ndarray] = {}
        self._ready: set[Color] = set()
        self._handler: Optional[UndistortionHandler] = None

    def init(self, options: Optional[InitOptions] = None) -> None:
        """Allocate buffers for frames of the configured size."""
        options = options or InitOptions()
        if options.image_height < 0 or options.image_width < 0:
            raise ValueError("image size must not be negative")
        self.src_height = options.image_height
        self.src_width = options.image_width
        self.sensor_name = options.sensor_name
        self.device_id = options.device_id

        self._handler = None
        if options.do_undistortion:
            if options.undistortion_handler is None:
                raise ValueError(
                    f"undistortion requested for sensor '{options.sensor_name}' "
                    "but no handler was given")
            self._handler = options.undistortion_handler

        h, w = self.src_height, self.src_width
        self._images = {
            Color.GRAY: np.zeros((h, w), dtype=np.uint8),
            Color.RGB: np.zeros((h, w, 3), dtype=np.uint8),
            Color.BGR: np.zeros((h, w, 3), dtype=np.uint8),
        }
        self._ready = set()

    def fill_image_data(self, rows: int, cols: int, data,
                        encoding: str) -> None:
        """Load a raw frame in ``encoding`` (rgb8, bgr8, gray or y).

        The frame is read at the provider's configured size.
        """
        self._ready.clear()
        color = _ENCODINGS.get(encoding)
        if color is None:
            raise ValueError(f"unrecognized image encoding: {encoding}")
        if not self._images:
            raise RuntimeError("data provider is not initialised")

        target = self._images[color]
        if isinstance(data, (bytes, bytearray, memoryview)):
            raw = np.frombuffer(data, dtype=np.uint8)
        else:
            raw = np.asarray(data, dtype=np.uint8).reshape(-1)
        if raw.size < target.size:
            raise ValueError(
                f"image data too short: {raw.size} bytes, need {target.size}")
        frame = raw[:target.size].reshape(target.shape)

        if self._handler is not None:
            self._handler.handle(frame, target)
        else:
            target[...] = frame
        self._ready.add(color)

    def get_image_blob(self, options: ImageOptions) -> np.ndarray:
        """The requested image as an NHWC blob."""
        return image_to_blob(self.get_image(options))

    def get_image(self, options: ImageOptions) -> np.ndarray:
        """A copy of the frame in the requested layout, cropped if asked."""
        converters = {
            Color.RGB: self.to_rgb_image,
            Color.BGR: self.to_bgr_image,
            Color.GRAY: self.to_gray_image,
        }
        convert = converters.get(options.target_color)
        if convert is None:
            raise ValueError(f"unsupported color: {options.target_color}")
        if not convert():
            raise RuntimeError("no image data filled yet")
        image = self._images[options.target_color]
        if options.do_crop:
            roi = options.crop_roi
            image = image[roi.y:roi.y + roi.height, roi.x:roi.x + roi.width]
        return image.copy()

    def to_gray_image(self) -> bool:
        """Make the gray image available; False if there is no frame."""
        if Color.GRAY in self._ready:
            return True
        if Color.BGR in self._ready:
            source, coeffs = self._images[Color.BGR], _BGR_TO_GRAY
        elif Color.RGB in self._ready:
            source, coeffs = self._images[Color.RGB], _RGB_TO_GRAY
        else:
            return False
        self._images[Color.GRAY][...] = image_to_gray(source, coeffs)
        self._ready.add(Color.GRAY)
        return True

    def to_rgb_image(self) -> bool:
        """Make the RGB image available; False if there is no frame."""
        return self._to_color(Color.RGB, Color.BGR)

    def to_bgr_image(self) -> bool:
        """Make the BGR image available; False if there is no frame."""
        return self._to_color(Color.BGR, Color.RGB)

    def _to_color(self, color: Color, swapped: Color) -> bool:
        if color in self._ready:
            return True
        if swapped in self._ready:
            converted = swap_image_channels(self._images[swapped], _SWAP_ORDER)
        elif Color.GRAY in self._ready:
            converted = dup_image_channels(self._images[Color.GRAY])
        else:
            return False
        self._images[color][...] = converted
        self._ready.add(color)
        return True