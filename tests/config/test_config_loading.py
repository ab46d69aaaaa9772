"""Test configuration loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from albumprep.config.config import (
    DECODE_BLOCK_FRAMES_DEFAULT,
    NORMALIZER_EXECUTABLE_DEFAULT,
    Config,
    ConfigError,
)


@pytest.fixture(autouse=True)
def _reset_config() -> None:
    Config.reset()


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    config = Config.load(tmp_path / "absent.toml")
    assert config.log_file is None
    assert config.normalizer_executable == NORMALIZER_EXECUTABLE_DEFAULT
    assert config.normalizer_flags == ["--replaygain", "-irt"]
    assert config.decode_block_frames == DECODE_BLOCK_FRAMES_DEFAULT
    assert not (tmp_path / "absent.toml").exists()


def test_values_are_read_from_toml(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    _ = path.write_text(
        'log_file = "~/albumprep.log"\n'
        'normalizer_executable = "/opt/bin/bs1770gain"\n'
        'normalizer_flags = ["--replaygain", "--ebu"]\n'
        "decode_block_frames = 4096\n",
        encoding="utf-8",
    )

    config = Config.load(path)

    assert config.log_file == Path("~/albumprep.log").expanduser()
    assert config.normalizer_executable == "/opt/bin/bs1770gain"
    assert config.normalizer_flags == ["--replaygain", "--ebu"]
    assert config.decode_block_frames == 4096


def test_load_is_cached_per_path(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    assert Config.load(path) is Config.load(path)
    assert Config.load(tmp_path / "other.toml") is not Config.load(path)


def test_environment_variable_selects_file(isolated_config: Path) -> None:
    config = Config.load()
    assert config.log_file is not None
    assert config.log_file.name == "albumprep.log"
    _ = isolated_config


@pytest.mark.parametrize(
    "document",
    [
        "normalizer_executable = ''\n",
        "normalizer_flags = '--replaygain'\n",
        "normalizer_flags = [1, 2]\n",
        "decode_block_frames = 0\n",
        "decode_block_frames = true\n",
        "log_file = 3\n",
        "not toml at all = = =\n",
    ],
)
def test_invalid_documents_raise(tmp_path: Path, document: str) -> None:
    path = tmp_path / "config.toml"
    _ = path.write_text(document, encoding="utf-8")
    with pytest.raises(ConfigError):
        _ = Config.load(path)


def test_unknown_keys_are_ignored_with_warning(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "config.toml"
    _ = path.write_text("base_path = '/music'\n", encoding="utf-8")

    config = Config.load(path)

    assert config.normalizer_executable == NORMALIZER_EXECUTABLE_DEFAULT
    assert "base_path" in caplog.text
