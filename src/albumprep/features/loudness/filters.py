"""K-weighting filter.

Where: src/albumprep/features/loudness/filters.py
What: Design the two BS.1770 pre-filter biquads for a sample rate and run them statefully.
Why: Channel meters push audio in blocks, so filter memory must carry over between blocks.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray
from scipy import signal

# Stage 1: high shelf modelling the acoustic effect of the head.
SHELF_F0: float = 1681.974450955533
SHELF_GAIN_DB: float = 3.999843853973347
SHELF_Q: float = 0.7071752369554196
SHELF_VB_EXPONENT: float = 0.4996667741545416

# Stage 2: RLB high pass.
HIGH_PASS_F0: float = 38.13547087602444
HIGH_PASS_Q: float = 0.5003270373238773

Coefficients = tuple[NDArray[np.float64], NDArray[np.float64]]


def high_shelf_coefficients(sample_rate: int) -> Coefficients:
    """Stage 1 ``(b, a)`` coefficients for ``sample_rate``."""

    k = math.tan(math.pi * SHELF_F0 / sample_rate)
    vh = 10.0 ** (SHELF_GAIN_DB / 20.0)
    vb = vh**SHELF_VB_EXPONENT
    a0 = 1.0 + k / SHELF_Q + k * k
    b = np.array(
        [
            (vh + vb * k / SHELF_Q + k * k) / a0,
            2.0 * (k * k - vh) / a0,
            (vh - vb * k / SHELF_Q + k * k) / a0,
        ]
    )
    a = np.array([1.0, 2.0 * (k * k - 1.0) / a0, (1.0 - k / SHELF_Q + k * k) / a0])
    return b, a


def high_pass_coefficients(sample_rate: int) -> Coefficients:
    """Stage 2 ``(b, a)`` coefficients for ``sample_rate``."""

    k = math.tan(math.pi * HIGH_PASS_F0 / sample_rate)
    a0 = 1.0 + k / HIGH_PASS_Q + k * k
    b = np.array([1.0, -2.0, 1.0])
    a = np.array([1.0, 2.0 * (k * k - 1.0) / a0, (1.0 - k / HIGH_PASS_Q + k * k) / a0])
    return b, a


class KWeightingFilter:
    """Cascade of both K-weighting stages with persistent state."""

    def __init__(self, sample_rate: int) -> None:
        if sample_rate <= 0:
            raise ValueError(f"Sample rate must be positive, got {sample_rate}")
        self.sample_rate = sample_rate
        self._stages = [high_shelf_coefficients(sample_rate), high_pass_coefficients(sample_rate)]
        self._state = [np.zeros(2) for _ in self._stages]

    def apply(self, samples: NDArray[np.float64]) -> NDArray[np.float64]:
        """Filter the next run of samples."""

        output = np.asarray(samples, dtype=np.float64)
        for position, (b, a) in enumerate(self._stages):
            output, self._state[position] = signal.lfilter(b, a, output, zi=self._state[position])
        return output

    def reset(self) -> None:
        self._state = [np.zeros(2) for _ in self._stages]


__all__ = [
    "KWeightingFilter",
    "high_pass_coefficients",
    "high_shelf_coefficients",
]
