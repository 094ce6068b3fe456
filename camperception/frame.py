"""Per-frame state passed between camera detection stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

import numpy as np

from camperception.data_provider import DataProvider


def _identity3() -> np.ndarray:
    return np.eye(3, dtype=np.float32)


def _identity4() -> np.ndarray:
    return np.eye(4, dtype=np.float64)


@dataclass
class CameraFrame:
    """One camera image together with its detections and pose.

    ``camera_k_matrix`` is the 3x3 intrinsic matrix and
    ``camera2world_pose`` the 4x4 homogeneous camera-to-world transform.
    """

    frame_id: int = 0
    timestamp: float = 0.0
    data_provider: Optional[DataProvider] = None
    detected_objects: list[Any] = field(default_factory=list)
    feature_blob: Optional[np.ndarray] = None
    camera_k_matrix: np.ndarray = field(default_factory=_identity3)
    camera2world_pose: np.ndarray = field(default_factory=_identity4)