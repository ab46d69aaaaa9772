# Where: albumprep.features.finalization.__init__
# What: Expose staging helpers and the album finalization use case.
# Why: Provide a cohesive import surface for the application service.

from .finalize import STAGING_PREFIX, finalize_album
from .staging import (
    display_artist,
    display_title,
    move_file,
    stage_tracks,
    staged_file_name,
    staged_file_names,
    strip_path_separators,
)

__all__ = [
    "STAGING_PREFIX",
    "display_artist",
    "display_title",
    "finalize_album",
    "move_file",
    "stage_tracks",
    "staged_file_name",
    "staged_file_names",
    "strip_path_separators",
]
