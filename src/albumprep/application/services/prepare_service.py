"""Application service for preparing an album.

This layer centralizes orchestration of discovery, tag rewriting, loudness
measurement and finalization so that the CLI stays a thin shell.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, final

from rich.console import Console

from albumprep.config.settings import ALBUM_BLOCK_FILE_NAME, TRACK_BLOCKS_FILE_NAME
from albumprep.features.discovery import discover_tracks
from albumprep.features.finalization import finalize_album, staged_file_names
from albumprep.features.loudness import AnalysisOutput, LoudnessEngine, analyze_tracks
from albumprep.features.metadata import (
    load_album_block,
    load_metadata,
    load_track_blocks,
    write_block_files,
)
from albumprep.features.tagging import DEFAULT_MERGE_POLICY, MergePolicy, build_tag_block, rewrite_tracks
from albumprep.platform.normalizer import Normalizer
from albumprep.platform.tagstore import TagStoreOpener, open_tag_store
from albumprep.shared.errors import CountMismatchError
from albumprep.shared.meta import MetaBlock, MetaBlockList
from albumprep.shared.track import Track


@dataclass(frozen=True)
class PrepareRequest:
    """Input parameters for one album preparation run.

    Attributes:
        source_dir: Directory holding the input FLAC files.
        output_dir: Final destination; defaults to ``source_dir``.
        album_file: Album block file; defaults to ``<source_dir>/album.json``.
        track_file: Track block file; defaults to ``<source_dir>/track.json``.
        metadata_file: Unified album/tracks file; replaces the two files above.
        capture_existing: Print existing tags before they are overwritten.
        capture_to: Also write existing tags to this file.
        skip_loudness: Do not measure loudness before finalizing.
    """

    source_dir: Path
    output_dir: Path | None = None
    album_file: Path | None = None
    track_file: Path | None = None
    metadata_file: Path | None = None
    capture_existing: bool = False
    capture_to: Path | None = None
    skip_loudness: bool = False

    @property
    def resolved_output_dir(self) -> Path:
        return self.output_dir if self.output_dir is not None else self.source_dir

    @property
    def resolved_album_file(self) -> Path:
        return self.album_file if self.album_file is not None else self.source_dir / ALBUM_BLOCK_FILE_NAME

    @property
    def resolved_track_file(self) -> Path:
        return self.track_file if self.track_file is not None else self.source_dir / TRACK_BLOCKS_FILE_NAME


@dataclass
class PrepareResult:
    """Outcome of a successful run."""

    tracks: list[Track]
    output_dir: Path
    staged_names: list[str] = field(default_factory=list)
    analysis: AnalysisOutput | None = None


@final
class PrepareAlbumService:
    """Runs discovery → tag rewrite → loudness → finalization for one album."""

    def __init__(
        self,
        *,
        normalizer: Normalizer,
        policy: MergePolicy = DEFAULT_MERGE_POLICY,
        open_store: TagStoreOpener = open_tag_store,
        engine_factory: Callable[[], LoudnessEngine] | None = None,
        console: Console | None = None,
        pause: Callable[[], object] | None = None,
    ) -> None:
        self._normalizer = normalizer
        self._policy = policy
        self._open_store = open_store
        self._engine_factory: Callable[[], LoudnessEngine] = engine_factory or LoudnessEngine
        self._console = console
        self._pause = pause

    def load_blocks(self, request: PrepareRequest) -> tuple[MetaBlock, MetaBlockList]:
        """Load the album block and track blocks named by ``request``."""

        if request.metadata_file is not None:
            metadata = load_metadata(request.metadata_file)
            return metadata.album, metadata.tracks
        return (
            load_album_block(request.resolved_album_file),
            load_track_blocks(request.resolved_track_file),
        )

    def run(self, request: PrepareRequest) -> PrepareResult:
        """Prepare the album described by ``request``.

        Raises:
            AlbumPrepError: Any pipeline failure; the run stops immediately.
        """

        tracks = discover_tracks(
            request.source_dir,
            capture_existing=request.capture_existing,
            capture_to=request.capture_to,
            policy=self._policy,
            open_store=self._open_store,
            console=self._console,
            pause=self._pause,
        )

        album_block, track_blocks = self.load_blocks(request)
        if len(tracks) != len(track_blocks):
            raise CountMismatchError(len(tracks), len(track_blocks))

        # Staged names need an artist and one title per track; fail before any file changes.
        total = len(tracks)
        planned = [
            build_tag_block(album_block, track_block, track.index, total, self._policy)
            for track, track_block in zip(tracks, track_blocks, strict=True)
        ]
        _ = staged_file_names(tracks, planned)

        output_dir = request.resolved_output_dir
        output_dir.mkdir(parents=True, exist_ok=True)
        _ = write_block_files(output_dir, album_block, track_blocks)

        written = rewrite_tracks(
            tracks,
            album_block,
            track_blocks,
            policy=self._policy,
            open_store=self._open_store,
        )

        analysis: AnalysisOutput | None = None
        if not request.skip_loudness:
            analysis = analyze_tracks(tracks, self._engine_factory())

        staged_names = finalize_album(tracks, written, output_dir, self._normalizer)

        return PrepareResult(
            tracks=tracks,
            output_dir=output_dir,
            staged_names=staged_names,
            analysis=analysis,
        )


__all__ = ["PrepareAlbumService", "PrepareRequest", "PrepareResult"]
