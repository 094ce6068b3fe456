"""Reads calibration batches from numbered files on disk.

Each file ``<prefix>Batch<k>`` starts with four native int32 values giving
the NCHW dimensions, followed by ``n * c * h * w`` native float32 values.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, Optional

import numpy as np

from camperception.dims import DimsNCHW

_HEADER_COUNT = 4


def _read_header(handle) -> tuple[int, int, int, int]:
    raw = handle.read(_HEADER_COUNT * 4)
    if len(raw) != _HEADER_COUNT * 4:
        raise ValueError("batch file header is truncated")
    values = np.frombuffer(raw, dtype=np.int32)
    return tuple(int(v) for v in values)  # type: ignore[return-value]


class BatchStream:
    """Serves fixed-size batches assembled from a sequence of batch files."""

    def __init__(self, batch_size: int = 0, max_batches: int = 0,
                 data_path: str = "") -> None:
        self.batch_size = int(batch_size)
        self.max_batches = int(max_batches)
        self.path = str(data_path)
        self._batch_count = 0
        self._file_count = 0
        self._file_batch_pos = 0
        self._image_size = 0
        self.dims: Optional[DimsNCHW] = None
        self.batch = np.zeros(0, dtype=np.float32)
        self._file_batch = np.zeros(0, dtype=np.float32)

        if not self.path:
            return
        first = Path(self.path + "Batch0")
        if not first.is_file():
            return
        with first.open("rb") as handle:
            n, c, h, w = _read_header(handle)
        if min(n, c, h, w) <= 0:
            raise ValueError(f"invalid batch dimensions: {(n, c, h, w)}")
        self.dims = DimsNCHW(n, c, h, w)
        self._image_size = c * h * w
        self.batch = np.zeros(self.batch_size * self._image_size,
                              dtype=np.float32)
        self._file_batch = np.zeros(n * self._image_size, dtype=np.float32)
        self.reset(0)

    @property
    def batches_read(self) -> int:
        """Number of batches produced since the last reset."""
        return self._batch_count

    def reset(self, first_batch: int) -> None:
        """Start over, skipping the first ``first_batch`` batches."""
        if not self.path or self.dims is None:
            return
        self._batch_count = 0
        self._file_count = 0
        self._file_batch_pos = self.dims.n
        self.skip(first_batch)

    def next(self) -> bool:
        """Fill ``batch`` with the next batch; False when none is left."""
        if self._batch_count == self.max_batches:
            return False
        if self.dims is None:
            raise RuntimeError("no batch data loaded")
        n = self.dims.n
        size = self._image_size
        batch_pos = 0
        while batch_pos < self.batch_size:
            if not 0 < self._file_batch_pos <= n:
                raise RuntimeError(
                    f"file batch position out of range: {self._file_batch_pos}")
            if self._file_batch_pos == n and not self._update():
                return False
            csize = min(self.batch_size - batch_pos, n - self._file_batch_pos)
            start = self._file_batch_pos * size
            self.batch[batch_pos * size:(batch_pos + csize) * size] = \
                self._file_batch[start:start + csize * size]
            batch_pos += csize
            self._file_batch_pos += csize
        self._batch_count += 1
        return True

    def skip(self, skip_count: int) -> None:
        """Advance past ``skip_count`` batches without counting them as read."""
        if self.dims is None:
            return
        n = self.dims.n
        if (self.batch_size >= n and self.batch_size % n == 0
                and self._file_batch_pos == n):
            self._file_count += skip_count * self.batch_size // n
            return
        count = self._batch_count
        for _ in range(skip_count):
            self.next()
        self._batch_count = count

    def __iter__(self) -> Iterator[np.ndarray]:
        """Yield a copy of each remaining batch."""
        while self.next():
            yield self.batch.copy()

    def _update(self) -> bool:
        name = Path(f"{self.path}Batch{self._file_count}")
        self._file_count += 1
        if not name.is_file():
            return False
        assert self.dims is not None
        with name.open("rb") as handle:
            header = _read_header(handle)
            if header != self.dims.d:
                raise ValueError(
                    f"batch file {name} has dimensions {header}, "
                    f"expected {self.dims.d}")
            expected = self.dims.n * self._image_size
            data = np.frombuffer(handle.read(expected * 4), dtype=np.float32)
        if data.size != expected:
            raise ValueError(
                f"batch file {name} holds {data.size} values, need {expected}")
        self._file_batch[:] = data
        self._file_batch_pos = 0
        return True