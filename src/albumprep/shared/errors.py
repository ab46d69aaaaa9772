"""
Summary: Exception taxonomy raised by the album preparation pipeline.
Why: Give every fatal condition a named type so the CLI can report it plainly.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path


class AlbumPrepError(Exception):
    """Base exception for all pipeline failures."""


class SchemaError(AlbumPrepError):
    """Raised when a metadata value is neither a string nor a list of strings."""

    def __init__(self, key: str, detail: str | None = None) -> None:
        self.key = key
        message = f"Malformed metadata value for key '{key}'"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class AmbiguousFieldError(AlbumPrepError):
    """Raised when a field must hold exactly one value but does not."""

    def __init__(self, key: str, values: Sequence[str], path: Path | None = None) -> None:
        self.key = key
        self.values = tuple(values)
        self.path = path
        if not self.values:
            found = "no value"
        else:
            found = f"{len(self.values)} values ({', '.join(repr(v) for v in self.values)})"
        location = f" in {path}" if path is not None else ""
        super().__init__(f"Expected exactly one '{key}' value{location}, found {found}")


class InvalidTrackNumberError(AlbumPrepError):
    """Raised when a track number is not a positive integer."""

    def __init__(self, value: str, path: Path | None = None) -> None:
        self.value = value
        self.path = path
        location = f" in {path}" if path is not None else ""
        super().__init__(f"Invalid track number {value!r}{location}")


class TrackNumberMismatchError(AlbumPrepError):
    """Raised when discovered track numbers are not exactly 1..N."""

    def __init__(
        self,
        *,
        expected_total: int,
        duplicates: Iterable[int] = (),
        unexpected: Iterable[int] = (),
        missing: Iterable[int] = (),
    ) -> None:
        self.expected_total = expected_total
        self.duplicates = tuple(sorted(set(duplicates)))
        self.unexpected = tuple(sorted(set(unexpected)))
        self.missing = tuple(sorted(set(missing)))

        problems: list[str] = []
        if self.duplicates:
            problems.append(f"duplicate={list(self.duplicates)}")
        if self.unexpected:
            problems.append(f"unexpected={list(self.unexpected)}")
        if self.missing:
            problems.append(f"missing={list(self.missing)}")
        super().__init__(
            f"Track numbers do not form the range 1..{expected_total} ({', '.join(problems)})"
        )


class CountMismatchError(AlbumPrepError):
    """Raised when the number of tracks differs from the number of track blocks."""

    def __init__(self, tracks: int, blocks: int) -> None:
        self.tracks = tracks
        self.blocks = blocks
        super().__init__(f"Found {tracks} track file(s) but {blocks} track metadata block(s)")


class UnsupportedChannelLayoutError(AlbumPrepError):
    """Raised when a decoded stream is not a stereo pair."""

    def __init__(self, path: Path, channels: int) -> None:
        self.path = path
        self.channels = channels
        super().__init__(f"Expected 2 audio channels in {path}, found {channels}")


class ExternalToolError(AlbumPrepError):
    """Raised when the external normalization tool fails."""

    def __init__(self, command: Sequence[str], returncode: int | None, detail: str | None = None) -> None:
        self.command = tuple(command)
        self.returncode = returncode
        message = f"Command {self.command[0] if self.command else '?'!r} failed"
        if returncode is not None:
            message = f"{message} with exit code {returncode}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


__all__ = [
    "AlbumPrepError",
    "AmbiguousFieldError",
    "CountMismatchError",
    "ExternalToolError",
    "InvalidTrackNumberError",
    "SchemaError",
    "TrackNumberMismatchError",
    "UnsupportedChannelLayoutError",
]
