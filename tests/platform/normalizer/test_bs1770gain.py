"""Tests for the bs1770gain process boundary."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from albumprep.platform.normalizer import Bs1770GainNormalizer, Normalizer
from albumprep.shared.errors import ExternalToolError


def test_command_line_places_output_before_staging_dir() -> None:
    normalizer = Bs1770GainNormalizer()
    assert isinstance(normalizer, Normalizer)
    assert normalizer.build_command(Path("/tmp/stage"), Path("/music/out")) == [
        "bs1770gain",
        "--replaygain",
        "-irt",
        "--output",
        "/music/out",
        "/tmp/stage",
    ]


def test_success_runs_once(mocker: MockerFixture, tmp_path: Path) -> None:
    run = mocker.patch(
        "albumprep.platform.normalizer.subprocess.run",
        return_value=subprocess.CompletedProcess(args=[], returncode=0),
    )
    Bs1770GainNormalizer("tool", ["-x"]).normalize(tmp_path / "stage", tmp_path / "out")
    run.assert_called_once_with(
        ["tool", "-x", "--output", str(tmp_path / "out"), str(tmp_path / "stage")],
        check=False,
    )


def test_nonzero_exit_raises(mocker: MockerFixture, tmp_path: Path) -> None:
    _ = mocker.patch(
        "albumprep.platform.normalizer.subprocess.run",
        return_value=subprocess.CompletedProcess(args=[], returncode=3),
    )
    with pytest.raises(ExternalToolError) as excinfo:
        Bs1770GainNormalizer().normalize(tmp_path, tmp_path / "out")
    assert excinfo.value.returncode == 3


def test_missing_executable_raises(mocker: MockerFixture, tmp_path: Path) -> None:
    _ = mocker.patch("albumprep.platform.normalizer.subprocess.run", side_effect=FileNotFoundError)
    with pytest.raises(ExternalToolError) as excinfo:
        Bs1770GainNormalizer("no-such-tool").normalize(tmp_path, tmp_path / "out")
    assert excinfo.value.returncode is None
    assert "executable not found" in str(excinfo.value)
