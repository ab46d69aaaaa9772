"""Command line argument options."""

from dataclasses import dataclass
from pathlib import Path
from typing import final


@final
@dataclass(slots=True)
class PrepareArgs:
    """Command line arguments for preparing one album directory."""

    source_dir: Path
    output_dir: Path | None
    album_file: Path | None
    track_file: Path | None
    metadata_file: Path | None
    emit_existing: bool
    emit_existing_to: Path | None
    skip_loudness: bool
    verbose: bool
    quiet: bool


__all__ = ["PrepareArgs"]
