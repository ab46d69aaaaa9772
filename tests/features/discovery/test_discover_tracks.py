"""Tests for track discovery against real FLAC files."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest
from rich.console import Console

from albumprep.features.discovery import (
    discover_tracks,
    list_audio_files,
    parse_track_number,
    validate_track_numbers,
)
from albumprep.shared.errors import (
    AmbiguousFieldError,
    InvalidTrackNumberError,
    TrackNumberMismatchError,
)

FlacFactory = Callable[..., Path]


def _no_pause() -> None:
    return None


def test_tracks_are_sorted_by_tag_not_file_name(make_flac: FlacFactory) -> None:
    _ = make_flac("a.flac", {"tracknumber": "3"}, seconds=0.1)
    _ = make_flac("b.flac", {"tracknumber": "1"}, seconds=0.1)
    source = make_flac("c.flac", {"tracknumber": "2"}, seconds=0.1).parent

    tracks = discover_tracks(source)

    assert [track.index for track in tracks] == [1, 2, 3]
    assert [track.path.name for track in tracks] == ["b.flac", "c.flac", "a.flac"]


def test_only_flac_files_are_considered(make_flac: FlacFactory) -> None:
    source = make_flac("01.flac", {"tracknumber": "1"}, seconds=0.1).parent
    _ = (source / "cover.jpg").write_bytes(b"jpeg")
    _ = (source / "notes.txt").write_text("hello")

    assert [path.name for path in list_audio_files(source)] == ["01.flac"]


def test_missing_directory_raises(tmp_path: Path) -> None:
    with pytest.raises(NotADirectoryError):
        _ = list_audio_files(tmp_path / "missing")


@pytest.mark.parametrize(
    ("numbers", "field", "expected"),
    [
        (["1", "2", "4"], "unexpected", (4,)),
        (["1", "2", "2"], "duplicates", (2,)),
    ],
)
def test_track_numbers_must_form_the_full_range(
    make_flac: FlacFactory,
    numbers: list[str],
    field: str,
    expected: tuple[int, ...],
) -> None:
    source: Path | None = None
    for position, number in enumerate(numbers):
        source = make_flac(f"{position}.flac", {"tracknumber": number}, seconds=0.1).parent
    assert source is not None

    with pytest.raises(TrackNumberMismatchError) as excinfo:
        _ = discover_tracks(source)

    assert getattr(excinfo.value, field) == expected
    assert excinfo.value.missing == (3,)


def test_missing_track_number_is_ambiguous(make_flac: FlacFactory) -> None:
    source = make_flac("01.flac", {"title": "T"}, seconds=0.1).parent
    with pytest.raises(AmbiguousFieldError) as excinfo:
        _ = discover_tracks(source)
    assert excinfo.value.key == "tracknumber"


def test_multiple_track_numbers_are_ambiguous(make_flac: FlacFactory) -> None:
    source = make_flac("01.flac", {"tracknumber": ["1", "2"]}, seconds=0.1).parent
    with pytest.raises(AmbiguousFieldError):
        _ = discover_tracks(source)


@pytest.mark.parametrize("raw", ["0", "-1", "one", "1/10", "", "2.0"])
def test_invalid_track_numbers(raw: str) -> None:
    with pytest.raises(InvalidTrackNumberError):
        _ = parse_track_number(raw)


def test_track_number_tolerates_surrounding_whitespace() -> None:
    assert parse_track_number(" 07 ") == 7


def test_validate_accepts_permutation() -> None:
    validate_track_numbers([3, 1, 2])


def test_empty_directory_yields_no_tracks(tmp_path: Path) -> None:
    assert discover_tracks(tmp_path) == []


def test_capture_writes_skipped_filtered_snapshot(make_flac: FlacFactory, tmp_path: Path) -> None:
    _ = make_flac(
        "b.flac",
        {"tracknumber": "2", "title": "Second", "artist": ["A", "B"], "genre": "Rock"},
        seconds=0.1,
    )
    source = make_flac(
        "a.flac",
        {"tracknumber": "1", "title": "First", "replaygain_track_gain": "-3 dB", "album": "X"},
        seconds=0.1,
    ).parent
    capture = tmp_path / "existing.json"
    pauses: list[bool] = []

    _ = discover_tracks(
        source,
        capture_to=capture,
        pause=lambda: pauses.append(True),
    )

    assert json.loads(capture.read_text(encoding="utf-8")) == [
        {"title": "First"},
        {"artist": ["A", "B"], "title": "Second"},
    ]
    assert pauses == [True]


def test_capture_to_stdout_prints_between_rule_lines(make_flac: FlacFactory) -> None:
    source = make_flac("a.flac", {"tracknumber": "1", "title": "Only"}, seconds=0.1).parent
    console = Console(record=True, width=200)

    _ = discover_tracks(source, capture_existing=True, console=console, pause=_no_pause)

    output = console.export_text()
    assert "Emitting existing tags for 1 input file(s)" in output
    assert output.count("-" * 64) == 2
    assert '"title": "Only"' in output
