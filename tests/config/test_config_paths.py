"""Tests for portable config and log path resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

import albumprep.config.paths as paths


@pytest.fixture
def repo_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    def _fake_detect_repo_root(_start: Path | None = None) -> Path:
        return tmp_path

    monkeypatch.setattr(paths, "_detect_repo_root", _fake_detect_repo_root, raising=True)
    return tmp_path


def test_default_config_path_is_under_repo_root(repo_root: Path) -> None:
    assert paths.default_config_path(env={}) == (repo_root / "config" / "config.toml").resolve()


def test_environment_override_wins(repo_root: Path, tmp_path: Path) -> None:
    custom = tmp_path / "elsewhere.toml"
    assert paths.default_config_path(env={"ALBUMPREP_CONFIG": str(custom)}) == custom.resolve()
    _ = repo_root


def test_blank_environment_value_is_ignored(repo_root: Path) -> None:
    assert paths.default_config_path(env={"ALBUMPREP_CONFIG": "  "}) == (
        repo_root / "config" / "config.toml"
    ).resolve()


def test_default_log_file(repo_root: Path) -> None:
    assert paths.default_log_file() == (repo_root / "logs" / "albumprep.log").resolve()


def test_repo_root_detection_finds_marker(tmp_path: Path) -> None:
    _ = (tmp_path / "pyproject.toml").write_text("[project]\nname='tmp'\n")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    assert paths._detect_repo_root(nested / "file.py") == tmp_path  # pyright: ignore[reportPrivateUsage]
