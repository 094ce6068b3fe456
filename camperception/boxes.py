"""Axis-aligned 2D boxes and the coverage and clipping helpers built on them."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Union

Number = Union[int, float]


@dataclass(frozen=True)
class Rect:
    """A rectangle given by its top-left corner and its size."""

    x: Number = 0
    y: Number = 0
    width: Number = 0
    height: Number = 0

    def area(self) -> Number:
        return self.width * self.height

    def __and__(self, other: "Rect") -> "Rect":
        """Intersection of two rectangles; empty overlaps have zero size."""
        x = max(self.x, other.x)
        y = max(self.y, other.y)
        right = min(self.x + self.width, other.x + other.width)
        bottom = min(self.y + self.height, other.y + other.height)
        return Rect(x, y, max(right - x, 0), max(bottom - y, 0))

    def to_bbox(self) -> "BBox2D":
        return BBox2D(self.x, self.y, self.x + self.width, self.y + self.height)


@dataclass(frozen=True)
class BBox2D:
    """A box given by its minimum and maximum corners."""

    xmin: Number = 0
    ymin: Number = 0
    xmax: Number = 0
    ymax: Number = 0

    def to_rect(self) -> Rect:
        return Rect(self.xmin, self.ymin, self.xmax - self.xmin,
                    self.ymax - self.ymin)


Box = Union[Rect, BBox2D]


def is_covered(rect1: Rect, rect2: Rect, thresh: float) -> bool:
    """Whether the share of ``rect1`` covered by ``rect2`` exceeds ``thresh``."""
    area = rect1.area()
    if area == 0:
        return False
    return (rect1 & rect2).area() / area > thresh


def is_covered_horizon(rect1: Rect, rect2: Rect, thresh: float) -> bool:
    """Whether the overlap spans more than ``thresh`` of ``rect1``'s width."""
    inter = rect1 & rect2
    if inter.area() > 0:
        return inter.width / rect1.width > thresh
    return False


def is_covered_vertical(rect1: Rect, rect2: Rect, thresh: float) -> bool:
    """Whether the overlap spans more than ``thresh`` of ``rect1``'s height."""
    inter = rect1 & rect2
    if inter.area() > 0:
        return inter.height / rect1.height > thresh
    return False


def out_of_valid_region(box: Box, width: Number, height: Number,
                        border_size: Number = 0) -> bool:
    """Whether ``box`` reaches into the border of a ``width`` x ``height`` image."""
    bbox = box.to_bbox() if isinstance(box, Rect) else box
    if bbox.xmin < border_size or bbox.ymin < border_size:
        return True
    return bbox.xmax + border_size > width or bbox.ymax + border_size > height


def _refine_rect(rect: Rect, width: Number, height: Number) -> Rect:
    x, y, w, h = rect.x, rect.y, rect.width, rect.height
    if x < 0:
        w += x
        x = 0
    if y < 0:
        h += y
        y = 0
    if x >= width:
        x = 0
        w = 0
    if y >= height:
        y = 0
        h = 0
    if x + w > width:
        w = width - x
    if y + h > height:
        h = height - y
    return replace(rect, x=x, y=y, width=max(w, 0), height=max(h, 0))


def refine_box(box: Box, width: Number, height: Number) -> Box:
    """Clip ``box`` to the image; the result has the same type as ``box``."""
    if isinstance(box, BBox2D):
        return _refine_rect(box.to_rect(), width, height).to_bbox()
    return _refine_rect(box, width, height)