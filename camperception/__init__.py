"""Camera perception building blocks: box geometry, image conversion, undistortion, inference interfaces and calibration batch streams."""

__version__ = "0.1.0"

__all__ = [
    "batch_stream",
    "boxes",
    "data_provider",
    "dims",
    "frame",
    "image_ops",
    "inference",
    "model_util",
    "undistortion",
    "util",
]