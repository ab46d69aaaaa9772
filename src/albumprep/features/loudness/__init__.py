# Where: albumprep.features.loudness.__init__
# What: Expose the BS.1770 loudness engine and its building blocks.
# Why: Provide a cohesive import surface for the application service and tests.

from .decoder import StereoStream, StreamInfo, normalize_samples, open_stereo_stream
from .engine import (
    AnalysisOutput,
    EngineState,
    LoudnessEngine,
    ScannedTrack,
    analyze_tracks,
    loudness_of,
)
from .filters import KWeightingFilter
from .gating import gated_mean, gating_block_powers, reduce_channels, reduce_stereo
from .meter import ChannelLoudnessMeter
from .power import Loudness, Power

__all__ = [
    "AnalysisOutput",
    "ChannelLoudnessMeter",
    "EngineState",
    "KWeightingFilter",
    "Loudness",
    "LoudnessEngine",
    "Power",
    "ScannedTrack",
    "StereoStream",
    "StreamInfo",
    "analyze_tracks",
    "gated_mean",
    "gating_block_powers",
    "loudness_of",
    "normalize_samples",
    "open_stereo_stream",
    "reduce_channels",
    "reduce_stereo",
]
