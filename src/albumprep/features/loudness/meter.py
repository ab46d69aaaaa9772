"""
Summary: Per-channel loudness meter accumulating K-weighted power in 100 ms windows.
Why: Window timelines from both channels are reduced and gated together afterwards.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .filters import KWeightingFilter

WINDOW_MS = 100


class ChannelLoudnessMeter:
    """Meter for a single channel.

    Samples may be pushed in runs of any length; a window closes every
    ``sample_rate // 10`` samples and a trailing partial window is never
    reported.
    """

    def __init__(self, sample_rate: int) -> None:
        self.sample_rate = sample_rate
        self.window_samples = sample_rate * WINDOW_MS // 1000
        if self.window_samples <= 0:
            raise ValueError(f"Sample rate {sample_rate} is too low for {WINDOW_MS} ms windows")
        self._filter = KWeightingFilter(sample_rate)
        self._chunks: list[NDArray[np.float64]] = []
        self._partial_sum = 0.0
        self._partial_count = 0

    def push(self, samples: ArrayLike) -> None:
        """Feed normalized samples in ``[-1.0, 1.0)``."""

        squares = np.square(self._filter.apply(np.asarray(samples, dtype=np.float64)))
        size = self.window_samples
        position = 0

        if self._partial_count:
            take = min(size - self._partial_count, len(squares))
            self._partial_sum += float(squares[:take].sum())
            self._partial_count += take
            position = take
            if self._partial_count < size:
                return
            self._chunks.append(np.array([self._partial_sum / size]))
            self._partial_sum = 0.0
            self._partial_count = 0

        remaining = squares[position:]
        full = len(remaining) // size
        if full:
            self._chunks.append(remaining[: full * size].reshape(full, size).mean(axis=1))

        tail = remaining[full * size :]
        self._partial_sum = float(tail.sum())
        self._partial_count = len(tail)

    def as_100ms_windows(self) -> NDArray[np.float64]:
        """Mean-square power of every completed window, in order."""

        if not self._chunks:
            return np.zeros(0, dtype=np.float64)
        if len(self._chunks) > 1:
            self._chunks = [np.concatenate(self._chunks)]
        return self._chunks[0].copy()

    def __len__(self) -> int:
        return sum(len(chunk) for chunk in self._chunks)


__all__ = ["ChannelLoudnessMeter", "WINDOW_MS"]
