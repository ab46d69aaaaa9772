"""Where: src/albumprep/config/settings.py
What: Fixed runtime constants shared by the pipeline features.
Why: Expose file naming and format constants to feature layers without file I/O.
Assumptions: - Only FLAC input is supported.
"""

from __future__ import annotations

# Input discovery ------------------------------------------------------------

# Extension (lowercase, with dot) of the only supported audio container.
SUPPORTED_EXTENSION: str = ".flac"

# Tag carrying the authoritative track index.
TRACK_NUMBER_KEY: str = "tracknumber"
TOTAL_TRACKS_KEY: str = "totaltracks"


# Metadata files --------------------------------------------------------------

# Default album/track block file names looked up in the source directory and
# written alongside the output.
ALBUM_BLOCK_FILE_NAME: str = "album.json"
TRACK_BLOCKS_FILE_NAME: str = "track.json"

JSON_INDENT: int = 4


# Console ---------------------------------------------------------------------

RULE_LINE: str = "-" * 64
PAUSE_PROMPT: str = "Press <Enter> to continue..."


__all__ = [
    "ALBUM_BLOCK_FILE_NAME",
    "JSON_INDENT",
    "PAUSE_PROMPT",
    "RULE_LINE",
    "SUPPORTED_EXTENSION",
    "TOTAL_TRACKS_KEY",
    "TRACK_BLOCKS_FILE_NAME",
    "TRACK_NUMBER_KEY",
]
