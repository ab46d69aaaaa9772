"""Tests for the destructive tag rewrite."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from mutagen.flac import FLAC

from albumprep.features.tagging import rewrite_tracks
from albumprep.shared.errors import CountMismatchError
from albumprep.shared.meta import Many, One
from albumprep.shared.track import Track

FlacFactory = Callable[..., Path]


def test_rewrite_clears_old_tags_and_pictures(make_flac: FlacFactory) -> None:
    path = make_flac(
        "01.flac",
        {"tracknumber": "1", "comment": "old", "replaygain_track_gain": "-1 dB"},
        seconds=0.1,
        with_picture=True,
    )
    tracks = [Track(path=path, index=1)]

    written = rewrite_tracks(
        tracks,
        {"album": One("X"), "artist": One("A")},
        [{"title": One("T1"), "artist": Many(("A", "B"))}],
    )

    audio = FLAC(path)
    assert audio.pictures == []
    assert sorted(audio.keys()) == ["album", "artist", "title", "totaltracks", "tracknumber"]
    assert audio["artist"] == ["A", "B"]
    assert audio["tracknumber"] == ["1"]
    assert audio["totaltracks"] == ["1"]
    assert written[0]["title"] == One("T1")


def test_rewrite_sets_every_field_then_saves(fake_tags: Any) -> None:
    tracks = [Track(path=Path("/a/1.flac"), index=1), Track(path=Path("/a/2.flac"), index=2)]

    _ = rewrite_tracks(
        tracks,
        {"album": One("X")},
        [{"title": One("T1")}, {"title": One("T2")}],
        open_store=fake_tags,
    )

    store = fake_tags.stores["2.flac"]
    assert store.calls[:2] == ["clear_comments", "clear_pictures"]
    assert store.calls[-1] == "save"
    assert store.tags == {
        "album": ["X"],
        "title": ["T2"],
        "totaltracks": ["2"],
        "tracknumber": ["2"],
    }


def test_count_mismatch_touches_nothing(fake_tags: Any) -> None:
    tracks = [Track(path=Path(f"/a/{n}.flac"), index=n) for n in (1, 2, 3)]

    with pytest.raises(CountMismatchError):
        _ = rewrite_tracks(tracks, {}, [{"title": One("T1")}, {"title": One("T2")}], open_store=fake_tags)

    assert fake_tags.stores == {}
