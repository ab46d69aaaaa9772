"""Album loudness engine.

Where: src/albumprep/features/loudness/engine.py
What: Measure per-track gated loudness while accumulating the album's window timeline.
Why: Album loudness gates over every track's windows at once, not an average of track figures.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

import numpy as np
from numpy.typing import ArrayLike, NDArray

from albumprep.config.config import DECODE_BLOCK_FRAMES_DEFAULT
from albumprep.platform.logging import log_event
from albumprep.shared.events import PipelineEvent
from albumprep.shared.track import Track

from .decoder import REQUIRED_CHANNELS, open_stereo_stream
from .gating import gated_mean, reduce_stereo
from .meter import ChannelLoudnessMeter
from .power import Loudness


class EngineState(StrEnum):
    """Lifecycle of a :class:`LoudnessEngine`."""

    ACCUMULATING = "accumulating"
    FINALIZED = "finalized"


def loudness_of(windows: ArrayLike) -> Loudness:
    """Gated loudness of a combined window timeline; the floor when nothing passes."""

    power = gated_mean(windows)
    if power is None:
        return Loudness.FLOOR
    return Loudness(power)


class LoudnessEngine:
    """Measures tracks one by one and keeps the album timeline in track order."""

    def __init__(self, block_frames: int = DECODE_BLOCK_FRAMES_DEFAULT) -> None:
        self.block_frames = block_frames
        self.state = EngineState.ACCUMULATING
        self._timeline: list[NDArray[np.float64]] = []

    def reset(self) -> None:
        """Discard all accumulated windows."""

        self._timeline = []
        self.state = EngineState.ACCUMULATING

    @property
    def window_count(self) -> int:
        return sum(len(part) for part in self._timeline)

    def album_windows(self) -> NDArray[np.float64]:
        if not self._timeline:
            return np.zeros(0, dtype=np.float64)
        return np.concatenate(self._timeline)

    def _ensure_accumulating(self) -> None:
        if self.state is not EngineState.ACCUMULATING:
            raise RuntimeError("Loudness engine is finalized; call reset() before measuring again")

    def measure_channels(self, channels: Sequence[ArrayLike], sample_rate: int) -> Loudness:
        """Measure already normalized stereo samples given as two channel arrays."""

        self._ensure_accumulating()
        if len(channels) != REQUIRED_CHANNELS:
            raise ValueError(f"Expected {REQUIRED_CHANNELS} channels, got {len(channels)}")
        meters = [ChannelLoudnessMeter(sample_rate) for _ in range(REQUIRED_CHANNELS)]
        for meter, samples in zip(meters, channels, strict=True):
            meter.push(samples)
        return self._record(meters)

    def measure_blocks(self, blocks: Iterable[NDArray[np.float64]], sample_rate: int) -> Loudness:
        """Measure a stream of ``(frames, 2)`` normalized sample blocks."""

        self._ensure_accumulating()
        meters = [ChannelLoudnessMeter(sample_rate) for _ in range(REQUIRED_CHANNELS)]
        for block in blocks:
            for channel, meter in enumerate(meters):
                meter.push(block[:, channel])
        return self._record(meters)

    def measure_file(self, path: Path) -> Loudness:
        """Decode ``path`` and measure it."""

        self._ensure_accumulating()
        with open_stereo_stream(path, self.block_frames) as stream:
            return self.measure_blocks(stream.blocks(), stream.info.sample_rate)

    def measure(self, track: Track) -> Loudness:
        """Measure one track and append its windows to the album timeline."""
        return self.measure_file(track.path)

    def _record(self, meters: Sequence[ChannelLoudnessMeter]) -> Loudness:
        left, right = (meter.as_100ms_windows() for meter in meters)
        combined = reduce_stereo(left, right)
        self._timeline.append(combined)
        return loudness_of(combined)

    def finalize(self) -> Loudness:
        """Album loudness over every measured track. Safe to call repeatedly."""

        self.state = EngineState.FINALIZED
        return loudness_of(self.album_windows())


@dataclass(frozen=True, slots=True)
class ScannedTrack:
    track: Track
    loudness: Loudness


@dataclass(frozen=True, slots=True)
class AnalysisOutput:
    scanned_tracks: list[ScannedTrack]
    album_loudness: Loudness


def analyze_tracks(tracks: Sequence[Track], engine: LoudnessEngine | None = None) -> AnalysisOutput:
    """Measure every track in order, then the album as a whole."""

    engine = engine or LoudnessEngine()
    engine.reset()

    scanned: list[ScannedTrack] = []
    total = len(tracks)
    for sequence, track in enumerate(tracks, start=1):
        loudness = engine.measure(track)
        log_event(
            logging.INFO,
            PipelineEvent.LOUDNESS_TRACK,
            "Track loudness %s",
            loudness,
            sequence=sequence,
            total=total,
            source_path=track.path,
            source_base_path=track.path.parent,
        )
        scanned.append(ScannedTrack(track=track, loudness=loudness))

    album_loudness = engine.finalize()
    log_event(logging.INFO, PipelineEvent.LOUDNESS_ALBUM, "Album loudness %s", album_loudness)
    return AnalysisOutput(scanned_tracks=scanned, album_loudness=album_loudness)


__all__ = [
    "AnalysisOutput",
    "EngineState",
    "LoudnessEngine",
    "ScannedTrack",
    "analyze_tracks",
    "loudness_of",
]
