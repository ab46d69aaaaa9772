"""Shared pytest fixtures: FLAC fixture files and an in-memory tag store."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Sequence
from pathlib import Path

import numpy as np
import pytest
import soundfile as sf
from mutagen.flac import FLAC, Picture

from albumprep.config.config import Config

SAMPLE_RATE = 48000

FlacFactory = Callable[..., Path]


def write_flac(
    path: Path,
    tags: Mapping[str, str | Sequence[str]] | None = None,
    *,
    seconds: float = 1.0,
    amplitude: float = 0.1,
    frequency: float = 1000.0,
    channels: int = 2,
    sample_rate: int = SAMPLE_RATE,
    with_picture: bool = False,
) -> Path:
    """Write a 16-bit FLAC sine tone and tag it with mutagen."""

    frames = int(seconds * sample_rate)
    t = np.arange(frames) / sample_rate
    tone = amplitude * np.sin(2 * np.pi * frequency * t)
    data = np.column_stack([tone] * channels) if channels > 1 else tone
    sf.write(str(path), data, sample_rate, format="FLAC", subtype="PCM_16")

    audio = FLAC(path)
    if audio.tags is None:
        audio.add_tags()
    for key, value in (tags or {}).items():
        audio[key] = [value] if isinstance(value, str) else list(value)
    if with_picture:
        picture = Picture()
        picture.type = 3
        picture.mime = "image/png"
        picture.data = b"\x89PNG\r\n\x1a\n"
        audio.add_picture(picture)
    audio.save()
    return path


@pytest.fixture
def make_flac(tmp_path: Path) -> FlacFactory:
    """Factory writing FLAC files below ``tmp_path``."""

    def _make(name: str, tags: Mapping[str, str | Sequence[str]] | None = None, **kwargs: object) -> Path:
        directory = tmp_path / "source"
        directory.mkdir(exist_ok=True)
        return write_flac(directory / name, tags, **kwargs)  # pyright: ignore[reportArgumentType]

    return _make


class FakeTagStore:
    """In-memory tag store recording every call."""

    def __init__(self, path: Path, tags: dict[str, list[str]] | None = None) -> None:
        self.path = path
        self.tags: dict[str, list[str]] = dict(tags or {})
        self.pictures = 1
        self.saved = False
        self.calls: list[str] = []

    def items(self) -> list[tuple[str, list[str]]]:
        return sorted(self.tags.items())

    def get(self, key: str) -> list[str]:
        return list(self.tags.get(key.lower(), []))

    def set(self, key: str, values: Sequence[str]) -> None:
        self.calls.append(f"set:{key}")
        self.tags[key.lower()] = list(values)

    def clear_comments(self) -> None:
        self.calls.append("clear_comments")
        self.tags.clear()

    def clear_pictures(self) -> None:
        self.calls.append("clear_pictures")
        self.pictures = 0

    def save(self) -> None:
        self.calls.append("save")
        self.saved = True


class FakeTagLibrary:
    """Opener handing out one persistent ``FakeTagStore`` per path."""

    def __init__(self, tags_by_name: Mapping[str, dict[str, list[str]]] | None = None) -> None:
        self.stores: dict[str, FakeTagStore] = {}
        self._initial = dict(tags_by_name or {})

    def __call__(self, path: Path) -> FakeTagStore:
        store = self.stores.get(path.name)
        if store is None:
            store = FakeTagStore(path, self._initial.get(path.name))
            self.stores[path.name] = store
        return store


@pytest.fixture
def fake_tags() -> FakeTagLibrary:
    return FakeTagLibrary()


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point the configuration at a temporary file and reset the singleton."""

    config_path = tmp_path / "config" / "config.toml"
    config_path.parent.mkdir(parents=True, exist_ok=True)
    _ = config_path.write_text(f'log_file = "{(tmp_path / "logs" / "albumprep.log").as_posix()}"\n')
    monkeypatch.setenv("ALBUMPREP_CONFIG", str(config_path))
    Config.reset()
    try:
        yield config_path
    finally:
        Config.reset()
