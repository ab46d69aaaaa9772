"""
Summary: Stereo FLAC decoding into normalized floating-point sample blocks.
Why: Feed the channel meters incrementally instead of holding a whole album in memory.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from types import TracebackType
from typing import Final

import numpy as np
import soundfile as sf
from numpy.typing import ArrayLike, NDArray

from albumprep.config.config import DECODE_BLOCK_FRAMES_DEFAULT
from albumprep.shared.errors import UnsupportedChannelLayoutError

REQUIRED_CHANNELS: Final[int] = 2

# soundfile subtypes of integer PCM and their sample width.
_SUBTYPE_BITS: Final[dict[str, int]] = {
    "PCM_S8": 8,
    "PCM_U8": 8,
    "PCM_16": 16,
    "PCM_24": 24,
    "PCM_32": 32,
}

# soundfile returns int32 samples left-aligned to 32 bits.
_CONTAINER_BITS: Final[int] = 32


def normalize_samples(samples: ArrayLike, bits_per_sample: int) -> NDArray[np.float64]:
    """Scale integer samples to ``[-1.0, 1.0)``; one bit is the sign bit."""

    if not 1 <= bits_per_sample <= _CONTAINER_BITS:
        raise ValueError(f"Unsupported bits per sample: {bits_per_sample}")
    return np.asarray(samples, dtype=np.float64) / float(1 << (bits_per_sample - 1))


@dataclass(frozen=True, slots=True)
class StreamInfo:
    """Format of a decoded stream."""

    sample_rate: int
    channels: int
    bits_per_sample: int
    frames: int


class StereoStream:
    """An open FLAC file yielding normalized ``(frames, 2)`` blocks.

    Use as a context manager; the underlying file is closed on exit.
    """

    def __init__(self, path: Path, block_frames: int = DECODE_BLOCK_FRAMES_DEFAULT) -> None:
        self.path = path
        self.block_frames = block_frames
        self._file = sf.SoundFile(str(path))
        try:
            if self._file.channels != REQUIRED_CHANNELS:
                raise UnsupportedChannelLayoutError(path, self._file.channels)
            bits = _SUBTYPE_BITS.get(self._file.subtype)
            if bits is None:
                raise ValueError(f"Unsupported sample format {self._file.subtype} in {path}")
        except Exception:
            self._file.close()
            raise
        self.info = StreamInfo(
            sample_rate=self._file.samplerate,
            channels=self._file.channels,
            bits_per_sample=bits,
            frames=self._file.frames,
        )

    def blocks(self) -> Iterator[NDArray[np.float64]]:
        """Yield normalized sample blocks until the end of the stream."""

        shift = _CONTAINER_BITS - self.info.bits_per_sample
        for block in self._file.blocks(blocksize=self.block_frames, dtype="int32", always_2d=True):
            yield normalize_samples(block >> shift, self.info.bits_per_sample)

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> StereoStream:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def open_stereo_stream(path: Path, block_frames: int = DECODE_BLOCK_FRAMES_DEFAULT) -> StereoStream:
    """Open ``path`` for decoding; raise if it is not a stereo stream."""
    return StereoStream(path, block_frames)


__all__ = [
    "REQUIRED_CHANNELS",
    "StereoStream",
    "StreamInfo",
    "normalize_samples",
    "open_stereo_stream",
]
