"""Channel reduction and two-stage gating.

Where: src/albumprep/features/loudness/gating.py
What: Combine per-channel window timelines and compute the BS.1770 gated mean power.
Why: Track and album figures share one gating routine over concatenated timelines.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray
from numpy.lib.stride_tricks import sliding_window_view

from .power import ABSOLUTE_GATE_LKFS, RELATIVE_GATE_LU, Power

# A 400 ms gating block spans four 100 ms windows and advances one window (75% overlap).
WINDOWS_PER_GATING_BLOCK = 4

# Equal weighting for a left/right pair.
STEREO_WEIGHTS: tuple[float, float] = (0.5, 0.5)


def reduce_channels(timelines: Sequence[ArrayLike], weights: Sequence[float]) -> NDArray[np.float64]:
    """Weighted sum of aligned channel timelines."""

    if len(timelines) != len(weights):
        raise ValueError(f"Got {len(timelines)} timelines but {len(weights)} weights")
    if not timelines:
        return np.zeros(0, dtype=np.float64)

    arrays = [np.asarray(timeline, dtype=np.float64) for timeline in timelines]
    length = len(arrays[0])
    for array in arrays[1:]:
        if len(array) != length:
            raise ValueError("Channel timelines must have the same number of windows")

    combined = np.zeros(length, dtype=np.float64)
    for weight, array in zip(weights, arrays, strict=True):
        combined += weight * array
    return combined


def reduce_stereo(left: ArrayLike, right: ArrayLike) -> NDArray[np.float64]:
    """Combine a stereo pair with equal weights.

    Identical channels read the same as one channel, so every figure sits
    3.01 dB below a BS.1770 channel sum such as bs1770gain reports.
    """
    return reduce_channels([left, right], STEREO_WEIGHTS)


def gating_block_powers(windows: ArrayLike) -> NDArray[np.float64]:
    """Mean power of every 400 ms gating block in a window timeline."""

    timeline = np.asarray(windows, dtype=np.float64)
    if len(timeline) < WINDOWS_PER_GATING_BLOCK:
        return np.zeros(0, dtype=np.float64)
    return sliding_window_view(timeline, WINDOWS_PER_GATING_BLOCK).mean(axis=1)


def gated_mean(windows: ArrayLike) -> Power | None:
    """Gated mean power of a window timeline, or ``None`` when no block passes.

    Blocks at or below -70 LKFS are dropped first; of the rest, blocks at or
    below 10 LU under their mean are dropped; the survivors are averaged.
    """

    blocks = gating_block_powers(windows)

    absolute_threshold = Power.from_lkfs(ABSOLUTE_GATE_LKFS).value
    blocks = blocks[blocks > absolute_threshold]
    if len(blocks) == 0:
        return None

    absolute_gated = Power(float(blocks.mean()))
    relative_threshold = Power.from_lkfs(absolute_gated.loudness_lkfs() + RELATIVE_GATE_LU).value
    blocks = blocks[blocks > relative_threshold]
    if len(blocks) == 0:
        return None

    return Power(float(blocks.mean()))


__all__ = [
    "STEREO_WEIGHTS",
    "WINDOWS_PER_GATING_BLOCK",
    "gated_mean",
    "gating_block_powers",
    "reduce_channels",
    "reduce_stereo",
]
