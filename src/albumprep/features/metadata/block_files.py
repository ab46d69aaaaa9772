"""Metadata block file I/O.

Where: src/albumprep/features/metadata/block_files.py
What: Load and save album, track and unified metadata documents as JSON.
Why: Keep the wire format (string or list of strings per key) in one place.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from albumprep.config.settings import (
    ALBUM_BLOCK_FILE_NAME,
    JSON_INDENT,
    TRACK_BLOCKS_FILE_NAME,
)
from albumprep.platform.logging import log_event
from albumprep.shared.errors import SchemaError
from albumprep.shared.events import PipelineEvent
from albumprep.shared.meta import (
    MetaBlock,
    MetaBlockList,
    Metadata,
    block_from_json,
    block_list_from_json,
    block_list_to_json,
    block_to_json,
)

__all__ = [
    "dump_json",
    "load_album_block",
    "load_metadata",
    "load_track_blocks",
    "write_block_files",
    "write_json",
]


def _read_json(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)
    except json.JSONDecodeError as exc:
        raise SchemaError(str(path), f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc


def dump_json(document: Any) -> str:
    """Pretty-print a JSON document the way block files are stored."""
    return json.dumps(document, indent=JSON_INDENT, ensure_ascii=False)


def write_json(path: Path, document: Any) -> None:
    """Write ``document`` as pretty JSON followed by a newline."""

    path.parent.mkdir(parents=True, exist_ok=True)
    _ = path.write_text(dump_json(document) + "\n", encoding="utf-8")


def load_album_block(path: Path) -> MetaBlock:
    """Load the album-wide block from ``path``."""

    log_event(logging.INFO, PipelineEvent.METADATA_LOAD, "Loading album file", source_path=path)
    return block_from_json(_read_json(path), context="album")


def load_track_blocks(path: Path) -> MetaBlockList:
    """Load the per-track block list from ``path``."""

    log_event(logging.INFO, PipelineEvent.METADATA_LOAD, "Loading track file", source_path=path)
    return block_list_from_json(_read_json(path), context="tracks")


def load_metadata(path: Path) -> Metadata:
    """Load a unified ``{"album": ..., "tracks": [...]}`` document."""

    log_event(logging.INFO, PipelineEvent.METADATA_LOAD, "Loading metadata file", source_path=path)
    return Metadata.from_json(_read_json(path))


def write_block_files(output_dir: Path, album_block: MetaBlock, track_blocks: MetaBlockList) -> tuple[Path, Path]:
    """Write the album and track blocks used for a run into ``output_dir``.

    Returns:
        The album file path and the track file path.
    """

    album_path = output_dir / ALBUM_BLOCK_FILE_NAME
    track_path = output_dir / TRACK_BLOCKS_FILE_NAME

    write_json(album_path, block_to_json(album_block))
    log_event(logging.DEBUG, PipelineEvent.METADATA_WRITE, "Wrote album file", target_path=album_path)

    write_json(track_path, block_list_to_json(track_blocks))
    log_event(logging.DEBUG, PipelineEvent.METADATA_WRITE, "Wrote track file", target_path=track_path)

    return album_path, track_path
