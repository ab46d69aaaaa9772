"""Tests for the mutagen-backed FLAC tag store."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from mutagen import MutagenError
from mutagen.flac import FLAC
from pytest_mock import MockerFixture

from albumprep.platform.tagstore import FlacTagStore, TagStore, open_tag_store

FlacFactory = Callable[..., Path]


def test_items_are_lowercase_and_sorted(make_flac: FlacFactory) -> None:
    path = make_flac("01.flac", {"TITLE": "T", "Artist": ["A", "B"]}, seconds=0.1)
    store = open_tag_store(path)
    assert isinstance(store, TagStore)
    assert store.items() == [("artist", ["A", "B"]), ("title", ["T"])]
    assert store.get("ARTIST") == ["A", "B"]
    assert store.get("missing") == []


def test_clear_and_set_persist_after_save(make_flac: FlacFactory) -> None:
    path = make_flac("01.flac", {"comment": "old"}, seconds=0.1, with_picture=True)
    store = FlacTagStore(path)

    store.clear_comments()
    store.clear_pictures()
    store.set("Title", ["New"])
    store.save()

    audio = FLAC(path)
    assert audio.pictures == []
    assert audio.tags is not None
    assert audio.tags.as_dict() == {"title": ["New"]}


def test_missing_file_raises_file_not_found(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        _ = FlacTagStore(tmp_path / "missing.flac")


def test_wrapped_file_not_found_is_unwrapped(tmp_path: Path, mocker: MockerFixture) -> None:
    _ = mocker.patch("albumprep.platform.tagstore.FLAC", side_effect=MutagenError(FileNotFoundError(2, "gone")))
    with pytest.raises(FileNotFoundError):
        _ = FlacTagStore(tmp_path / "gone.flac")


def test_other_mutagen_errors_propagate_unchanged(tmp_path: Path, mocker: MockerFixture) -> None:
    _ = mocker.patch("albumprep.platform.tagstore.FLAC", side_effect=MutagenError("No such file in this message"))
    with pytest.raises(MutagenError):
        _ = FlacTagStore(tmp_path / "x.flac")


def test_non_flac_file_is_a_mutagen_error(tmp_path: Path) -> None:
    path = tmp_path / "noise.flac"
    _ = path.write_bytes(b"not a flac stream at all")
    with pytest.raises(MutagenError):
        _ = FlacTagStore(path)
