"""
Summary: Power and loudness value types for ITU-R BS.1770 measurements.
Why: Carry the mean-square power alongside the LKFS figure so album aggregates can reuse it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar

# Offset of the BS.1770 loudness formula, -0.691 + 10 * log10(power).
LKFS_OFFSET: float = -0.691

ABSOLUTE_GATE_LKFS: float = -70.0
RELATIVE_GATE_LU: float = -10.0


@dataclass(frozen=True, slots=True, order=True)
class Power:
    """Mean-square power of K-weighted samples."""

    value: float

    def __post_init__(self) -> None:
        if self.value < 0 or math.isnan(self.value):
            raise ValueError(f"Power must be non-negative, got {self.value}")

    @classmethod
    def from_lkfs(cls, lkfs: float) -> Power:
        return cls(10.0 ** ((lkfs - LKFS_OFFSET) / 10.0))

    def loudness_lkfs(self) -> float:
        if self.value == 0.0:
            return -math.inf
        return LKFS_OFFSET + 10.0 * math.log10(self.value)


@dataclass(frozen=True, slots=True)
class Loudness:
    """Integrated loudness together with the gated power it came from."""

    power: Power

    FLOOR: ClassVar[Loudness]

    @property
    def lkfs(self) -> float:
        return self.power.loudness_lkfs()

    @property
    def is_floor(self) -> bool:
        return self.power.value == 0.0

    def __str__(self) -> str:
        return f"{self.lkfs:.3f} LUFS"


Loudness.FLOOR = Loudness(Power(0.0))


__all__ = [
    "ABSOLUTE_GATE_LKFS",
    "LKFS_OFFSET",
    "Loudness",
    "Power",
    "RELATIVE_GATE_LU",
]
