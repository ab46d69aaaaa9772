"""FLAC Vorbis comment tag store.

Where: src/albumprep/platform/tagstore.py
What: Wrap mutagen's FLAC tag access behind the small tag store contract the pipeline needs.
Why: Keep mutagen details out of discovery and tagging so tests can swap in fakes.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Protocol, final, runtime_checkable

from mutagen import MutagenError
from mutagen.flac import FLAC

from albumprep.platform.logging import logger

__all__ = [
    "FlacTagStore",
    "TagStore",
    "TagStoreOpener",
    "open_tag_store",
]


@runtime_checkable
class TagStore(Protocol):
    """Per-file comment tag container."""

    path: Path

    def items(self) -> list[tuple[str, list[str]]]:
        """All comment fields as lowercase key and ordered values."""
        ...

    def get(self, key: str) -> list[str]:
        """All values stored under ``key``; empty when absent."""
        ...

    def set(self, key: str, values: Sequence[str]) -> None:
        """Replace every value stored under ``key``."""
        ...

    def clear_comments(self) -> None:
        """Remove all comment fields."""
        ...

    def clear_pictures(self) -> None:
        """Remove all embedded images."""
        ...

    def save(self) -> None:
        """Persist changes to the underlying file."""
        ...


TagStoreOpener = Callable[[Path], TagStore]


def _is_missing_file(exc: MutagenError) -> bool:
    """Whether mutagen wrapped a ``FileNotFoundError`` from opening the file."""

    candidates = (exc.__cause__, exc.__context__, *exc.args)
    return any(isinstance(candidate, FileNotFoundError) for candidate in candidates)


@final
class FlacTagStore:
    """Tag store backed by a mutagen ``FLAC`` object."""

    def __init__(self, path: Path) -> None:
        self.path = path
        try:
            self._flac = FLAC(path)
        except MutagenError as exc:
            logger.error("Failed to open FLAC tags in %s: %s", path, exc)
            if _is_missing_file(exc):
                raise FileNotFoundError(str(exc)) from exc
            raise

    def items(self) -> list[tuple[str, list[str]]]:
        tags = self._flac.tags
        if tags is None:
            return []
        return [(key.lower(), list(tags[key])) for key in sorted({k.lower() for k in tags.keys()})]

    def get(self, key: str) -> list[str]:
        tags = self._flac.tags
        if tags is None:
            return []
        try:
            return list(tags[key.lower()])
        except KeyError:
            return []

    def set(self, key: str, values: Sequence[str]) -> None:
        if self._flac.tags is None:
            self._flac.add_tags()
        self._flac.tags[key.lower()] = list(values)

    def clear_comments(self) -> None:
        if self._flac.tags is None:
            self._flac.add_tags()
            return
        self._flac.tags.clear()

    def clear_pictures(self) -> None:
        self._flac.clear_pictures()

    def save(self) -> None:
        self._flac.save()
        logger.debug("Saved tags for %s", self.path)


def open_tag_store(path: Path) -> TagStore:
    """Open the FLAC tag store for ``path``."""
    return FlacTagStore(path)
