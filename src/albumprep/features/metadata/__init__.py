# Where: albumprep.features.metadata.__init__
# What: Expose metadata block file loaders and writers.
# Why: Provide a cohesive import surface for the application service.

from .block_files import (
    dump_json,
    load_album_block,
    load_metadata,
    load_track_blocks,
    write_block_files,
    write_json,
)

__all__ = [
    "dump_json",
    "load_album_block",
    "load_metadata",
    "load_track_blocks",
    "write_block_files",
    "write_json",
]
