"""Helpers over model blob descriptions (objects with ``name`` and ``shape``)."""

from __future__ import annotations

from typing import Iterable, MutableMapping


def get_blob_names(model_blobs: Iterable) -> list[str]:
    """Names of the blobs, in order."""
    return [blob.name for blob in model_blobs]


def add_shape(shape_map: MutableMapping[str, list[int]],
              model_blobs: Iterable) -> None:
    """Record each blob's shape in ``shape_map``; existing entries are kept."""
    for blob in model_blobs:
        shape_map.setdefault(blob.name, [int(v) for v in blob.shape])