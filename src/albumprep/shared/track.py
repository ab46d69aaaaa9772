# Where: albumprep.shared.track
# What: Track handle pairing an input file with its authoritative 1-based index.
# Why: Discovery, tagging, loudness and finalization all pass the same handle around.

from dataclasses import dataclass
from pathlib import Path


@dataclass(slots=True)
class Track:
    """One input file and its position in the album."""

    path: Path
    index: int

    def relocate(self, new_path: Path) -> None:
        """Record the file's new location after it has been moved."""
        self.path = new_path

    @property
    def extension(self) -> str:
        return self.path.suffix


__all__ = ["Track"]
