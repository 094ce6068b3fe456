"""Tensor dimension records in NCHW and CHW layouts."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class DimsNCHW:
    """Four dimensions: batch, channels, height, width."""

    n: int = 0
    c: int = 0
    h: int = 0
    w: int = 0

    nb_dims = 4

    @property
    def d(self) -> tuple[int, int, int, int]:
        return (self.n, self.c, self.h, self.w)


@dataclass
class DimsCHW:
    """Three dimensions: channels, height, width."""

    c: int = 0
    h: int = 0
    w: int = 0

    nb_dims = 3

    @property
    def d(self) -> tuple[int, int, int]:
        return (self.c, self.h, self.w)