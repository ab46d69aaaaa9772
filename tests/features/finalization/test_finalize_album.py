"""Tests for album finalization with a stand-in normalizer."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from albumprep.features.finalization import STAGING_PREFIX, finalize_album
from albumprep.shared.errors import AmbiguousFieldError, ExternalToolError
from albumprep.shared.meta import One
from albumprep.shared.track import Track


class CopyingNormalizer:
    """Copies the staging directory into the output, like a successful tool run."""

    def __init__(self) -> None:
        self.staging_dirs: list[Path] = []
        self.seen: list[str] = []

    def normalize(self, staging_dir: Path, output_dir: Path) -> None:
        self.staging_dirs.append(staging_dir)
        self.seen = sorted(path.name for path in staging_dir.iterdir())
        for path in staging_dir.iterdir():
            _ = shutil.copy2(path, output_dir / path.name)


class FailingNormalizer:
    def __init__(self) -> None:
        self.staging_dir: Path | None = None

    def normalize(self, staging_dir: Path, output_dir: Path) -> None:
        self.staging_dir = staging_dir
        raise ExternalToolError(["bs1770gain"], 1)


def _tracks(tmp_path: Path, count: int) -> tuple[list[Track], list[dict[str, One]]]:
    source = tmp_path / "source"
    source.mkdir()
    tracks: list[Track] = []
    blocks: list[dict[str, One]] = []
    for index in range(1, count + 1):
        path = source / f"{index}.flac"
        _ = path.write_bytes(b"fLaC")
        tracks.append(Track(path=path, index=index))
        blocks.append({"artist": One("A"), "title": One(f"T{index}")})
    return tracks, blocks


def test_staging_directory_is_removed_after_success(tmp_path: Path) -> None:
    tracks, blocks = _tracks(tmp_path, 3)
    normalizer = CopyingNormalizer()
    output = tmp_path / "out"

    names = finalize_album(tracks, blocks, output, normalizer)

    assert names == ["1. A - T1.flac", "2. A - T2.flac", "3. A - T3.flac"]
    assert normalizer.seen == names
    assert sorted(path.name for path in output.iterdir()) == names
    staging = normalizer.staging_dirs[0]
    assert staging.name.startswith(STAGING_PREFIX)
    assert not staging.exists()


def test_staging_directory_is_removed_after_failure(tmp_path: Path) -> None:
    tracks, blocks = _tracks(tmp_path, 2)
    normalizer = FailingNormalizer()

    with pytest.raises(ExternalToolError):
        _ = finalize_album(tracks, blocks, tmp_path / "out", normalizer)

    assert normalizer.staging_dir is not None
    assert not normalizer.staging_dir.exists()


def test_naming_failure_never_reaches_normalizer(tmp_path: Path) -> None:
    tracks, blocks = _tracks(tmp_path, 1)
    del blocks[0]["title"]
    normalizer = CopyingNormalizer()

    with pytest.raises(AmbiguousFieldError):
        _ = finalize_album(tracks, blocks, tmp_path / "out", normalizer)

    assert normalizer.staging_dirs == []


def test_later_naming_failure_keeps_every_source_file(tmp_path: Path) -> None:
    tracks, blocks = _tracks(tmp_path, 2)
    del blocks[1]["title"]
    normalizer = CopyingNormalizer()

    with pytest.raises(AmbiguousFieldError) as excinfo:
        _ = finalize_album(tracks, blocks, tmp_path / "out", normalizer)

    assert excinfo.value.key == "title"
    assert (tmp_path / "source" / "1.flac").exists()
    assert (tmp_path / "source" / "2.flac").exists()
    assert tracks[0].path == tmp_path / "source" / "1.flac"
    assert normalizer.staging_dirs == []
