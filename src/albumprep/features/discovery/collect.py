"""Track discovery.

Where: src/albumprep/features/discovery/collect.py
What: Scan a source directory, read each file's track number and validate the set.
Why: Every later stage relies on an ordered, gap-free, duplicate-free track list.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from pathlib import Path

from rich.console import Console

from albumprep.config.settings import SUPPORTED_EXTENSION, TRACK_NUMBER_KEY
from albumprep.features.tagging import DEFAULT_MERGE_POLICY, MergePolicy
from albumprep.platform.logging import log_event
from albumprep.platform.tagstore import TagStoreOpener, open_tag_store
from albumprep.shared.errors import InvalidTrackNumberError, TrackNumberMismatchError
from albumprep.shared.events import PipelineEvent
from albumprep.shared.meta import MetaBlockList, expect_one
from albumprep.shared.track import Track

from .capture import PauseCallback, emit_source_tags, snapshot_block

_TRACK_NUMBER_PATTERN = re.compile(r"[0-9]+")


def list_audio_files(source_dir: Path) -> list[Path]:
    """Files in ``source_dir`` with the supported extension, sorted by name."""

    if not source_dir.is_dir():
        raise NotADirectoryError(f"Not a directory: {source_dir}")
    return sorted(
        path
        for path in source_dir.iterdir()
        if path.is_file() and path.suffix.lower() == SUPPORTED_EXTENSION
    )


def parse_track_number(raw: str, path: Path | None = None) -> int:
    """Parse a ``tracknumber`` value as a positive integer."""

    candidate = raw.strip()
    if not _TRACK_NUMBER_PATTERN.fullmatch(candidate):
        raise InvalidTrackNumberError(raw, path)
    number = int(candidate)
    if number < 1:
        raise InvalidTrackNumberError(raw, path)
    return number


def validate_track_numbers(numbers: list[int]) -> None:
    """Require ``numbers`` to be exactly ``1..len(numbers)``."""

    total = len(numbers)
    counts = Counter(numbers)
    expected = set(range(1, total + 1))

    duplicates = [number for number, count in counts.items() if count > 1]
    unexpected = [number for number in counts if number not in expected]
    missing = expected - counts.keys()

    if duplicates or unexpected or missing:
        raise TrackNumberMismatchError(
            expected_total=total,
            duplicates=duplicates,
            unexpected=unexpected,
            missing=missing,
        )


def discover_tracks(
    source_dir: Path,
    *,
    capture_existing: bool = False,
    capture_to: Path | None = None,
    policy: MergePolicy = DEFAULT_MERGE_POLICY,
    open_store: TagStoreOpener = open_tag_store,
    console: Console | None = None,
    pause: PauseCallback | None = None,
) -> list[Track]:
    """Discover the album's tracks in ``source_dir``.

    Args:
        source_dir: Directory holding the input FLAC files.
        capture_existing: Print the existing tags before continuing.
        capture_to: Also write the existing tags as JSON to this file.
        policy: Merge policy whose skipped keys are left out of the capture.
        open_store: Tag store factory.
        console: Console used for the capture dump and pause prompt.
        pause: Replacement for the interactive pause prompt.

    Returns:
        Tracks sorted by ascending index.

    Raises:
        AmbiguousFieldError: A file has no, an empty, or several track numbers.
        InvalidTrackNumberError: A track number is not a positive integer.
        TrackNumberMismatchError: Track numbers are not exactly 1..N.
    """

    files = list_audio_files(source_dir)
    capture = capture_existing or capture_to is not None

    tracks: list[Track] = []
    snapshots: list[tuple[int, list[tuple[str, list[str]]]]] = []

    for sequence, path in enumerate(files, start=1):
        store = open_store(path)
        raw_number = expect_one(TRACK_NUMBER_KEY, store.get(TRACK_NUMBER_KEY), path)
        index = parse_track_number(raw_number, path)
        log_event(
            logging.INFO,
            PipelineEvent.DISCOVERY_FILE,
            "Found input file (track %d)",
            index,
            sequence=sequence,
            total=len(files),
            source_path=path,
            source_base_path=source_dir,
        )
        tracks.append(Track(path=path, index=index))
        if capture:
            snapshots.append((index, store.items()))

    validate_track_numbers([track.index for track in tracks])
    tracks.sort(key=lambda track: track.index)
    log_event(
        logging.INFO,
        PipelineEvent.DISCOVERY_COMPLETE,
        "Discovered %d track(s)",
        len(tracks),
        source_path=source_dir,
    )

    if capture:
        snapshots.sort(key=lambda item: item[0])
        blocks: MetaBlockList = [snapshot_block(items, policy) for _, items in snapshots]
        _ = emit_source_tags(
            blocks,
            emit_stdout=capture_existing,
            emit_to=capture_to,
            console=console,
            pause=pause,
        )

    return tracks


__all__ = [
    "discover_tracks",
    "list_audio_files",
    "parse_track_number",
    "validate_track_numbers",
]
