# Where: albumprep.features.discovery.__init__
# What: Expose track discovery and the existing-tag capture helpers.
# Why: Provide a cohesive import surface for the application service.

from .capture import emit_source_tags, snapshot_block, wait_for_enter
from .collect import discover_tracks, list_audio_files, parse_track_number, validate_track_numbers

__all__ = [
    "discover_tracks",
    "emit_source_tags",
    "list_audio_files",
    "parse_track_number",
    "snapshot_block",
    "validate_track_numbers",
    "wait_for_enter",
]
