# Where: albumprep.shared.__init__
# What: Provide a concise import surface for the metadata model, track handle and errors.
# Why: Encourage consistent reuse of shared types across features.

"""Shared cross-cutting types exposed at the package level."""

from .errors import (
    AlbumPrepError,
    AmbiguousFieldError,
    CountMismatchError,
    ExternalToolError,
    InvalidTrackNumberError,
    SchemaError,
    TrackNumberMismatchError,
    UnsupportedChannelLayoutError,
)
from .meta import Many, MetaBlock, MetaBlockList, Metadata, MetaValue, One
from .track import Track

__all__ = [
    "AlbumPrepError",
    "AmbiguousFieldError",
    "CountMismatchError",
    "ExternalToolError",
    "InvalidTrackNumberError",
    "Many",
    "MetaBlock",
    "MetaBlockList",
    "MetaValue",
    "Metadata",
    "One",
    "SchemaError",
    "Track",
    "TrackNumberMismatchError",
    "UnsupportedChannelLayoutError",
]
