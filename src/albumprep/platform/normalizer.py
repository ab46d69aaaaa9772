"""
Summary: Process boundary for the external bs1770gain loudness normalizer.
Why: Keep the tool's argument syntax out of the finalization logic.
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, final, runtime_checkable

from albumprep.config.config import NORMALIZER_EXECUTABLE_DEFAULT, NORMALIZER_FLAGS_DEFAULT
from albumprep.platform.logging import logger
from albumprep.shared.errors import ExternalToolError


@runtime_checkable
class Normalizer(Protocol):
    """Applies album loudness normalization from a staging directory into an output directory."""

    def normalize(self, staging_dir: Path, output_dir: Path) -> None:
        """Run normalization; raise ``ExternalToolError`` on failure."""
        ...


@final
class Bs1770GainNormalizer:
    """Invoke ``bs1770gain`` once over a whole staging directory."""

    def __init__(
        self,
        executable: str = NORMALIZER_EXECUTABLE_DEFAULT,
        flags: Sequence[str] = NORMALIZER_FLAGS_DEFAULT,
    ) -> None:
        self.executable = executable
        self.flags = tuple(flags)

    def build_command(self, staging_dir: Path, output_dir: Path) -> list[str]:
        return [
            self.executable,
            *self.flags,
            "--output",
            str(output_dir),
            str(staging_dir),
        ]

    def normalize(self, staging_dir: Path, output_dir: Path) -> None:
        command = self.build_command(staging_dir, output_dir)
        logger.debug("Running %s", " ".join(command))
        try:
            completed = subprocess.run(command, check=False)
        except FileNotFoundError as exc:
            raise ExternalToolError(command, None, f"executable not found: {self.executable}") from exc
        except PermissionError as exc:
            raise ExternalToolError(command, None, f"executable not runnable: {self.executable}") from exc

        if completed.returncode != 0:
            raise ExternalToolError(command, completed.returncode)


__all__ = ["Bs1770GainNormalizer", "Normalizer"]
