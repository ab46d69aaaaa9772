"""
Summary: Staged file naming and moves into the private staging directory.
Why: The normalizer reads a flat directory of consistently named, retagged tracks.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Mapping, Sequence
from pathlib import Path

from albumprep.platform.logging import log_event
from albumprep.shared.errors import AmbiguousFieldError
from albumprep.shared.events import PipelineEvent
from albumprep.shared.meta import DISPLAY_SEPARATOR, MetaBlockList, MetaValue, expect_one
from albumprep.shared.track import Track

ARTIST_KEY = "artist"
TITLE_KEY = "title"

# Characters that would split a generated name into several path segments.
_PATH_SEPARATORS = ("/", "\\")


def strip_path_separators(name: str) -> str:
    for separator in _PATH_SEPARATORS:
        name = name.replace(separator, "")
    return name


def display_artist(block: Mapping[str, MetaValue], path: Path | None = None) -> str:
    """All artist values joined for display."""

    value = block.get(ARTIST_KEY)
    if value is None:
        raise AmbiguousFieldError(ARTIST_KEY, (), path)
    return DISPLAY_SEPARATOR.join(value.as_sequence())


def display_title(block: Mapping[str, MetaValue], path: Path | None = None) -> str:
    """The single title value."""

    value = block.get(TITLE_KEY)
    return expect_one(TITLE_KEY, value.as_sequence() if value is not None else (), path)


def staged_file_name(track: Track, block: Mapping[str, MetaValue], total: int) -> str:
    """``"<index>. <artist> - <title><ext>"`` with the index zero-padded to the width of ``total``."""

    width = len(str(total))
    artist = display_artist(block, track.path)
    title = display_title(block, track.path)
    name = f"{track.index:0{width}d}. {artist} - {title}{track.extension}"
    return strip_path_separators(name)


def staged_file_names(tracks: Sequence[Track], blocks: Sequence[Mapping[str, MetaValue]]) -> list[str]:
    """Staged names for a whole album, in track order.

    Raises:
        AmbiguousFieldError: Some track lacks an artist or a single title.
    """

    if len(tracks) != len(blocks):
        raise ValueError(f"Got {len(tracks)} tracks but {len(blocks)} tag blocks")

    total = len(tracks)
    return [staged_file_name(track, block, total) for track, block in zip(tracks, blocks, strict=True)]


def move_file(src_path: Path, dest_path: Path, *, sequence: int | None = None, total: int | None = None) -> None:
    """Move a file from the source path to the target path."""

    log_event(
        logging.INFO,
        PipelineEvent.STAGE_MOVE,
        "Moving file to staging",
        sequence=sequence,
        total=total,
        source_path=src_path,
        source_base_path=src_path.parent,
        target_path=dest_path,
        target_base_path=dest_path.parent,
    )
    _ = shutil.move(str(src_path), str(dest_path))


def stage_tracks(tracks: Sequence[Track], blocks: MetaBlockList, staging_dir: Path) -> list[Path]:
    """Move every track into ``staging_dir`` under its staged name.

    All names are built and checked before the first move, so a
    naming failure leaves every source file in place.

    Returns:
        The staged paths, in track order.
    """

    destinations = [staging_dir / name for name in staged_file_names(tracks, blocks)]
    for destination in destinations:
        if destination.exists():
            raise FileExistsError(f"Staged file already exists: {destination}")

    total = len(tracks)
    staged: list[Path] = []
    for sequence, (track, destination) in enumerate(zip(tracks, destinations, strict=True), start=1):
        move_file(track.path, destination, sequence=sequence, total=total)
        track.relocate(destination)
        staged.append(destination)
    return staged


__all__ = [
    "display_artist",
    "display_title",
    "move_file",
    "stage_tracks",
    "staged_file_name",
    "staged_file_names",
    "strip_path_separators",
]
