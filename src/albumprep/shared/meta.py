"""
Summary: Metadata value model shared by discovery, tagging and file I/O.
Why: Keep the scalar/list collapse rule in one place so every reader and writer agrees on it.
"""

from __future__ import annotations

import abc
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, final, override

from .errors import AmbiguousFieldError, SchemaError

MetaJson = str | list[str]

DISPLAY_SEPARATOR = ", "


class MetaValue(abc.ABC):
    """A tag field value: either a single string or two or more strings.

    Build values with :meth:`from_values` or :meth:`from_json`; both collapse a
    single value to :class:`One`, so a one-element list never survives a
    round trip.
    """

    __slots__ = ()

    @staticmethod
    def from_values(values: Iterable[str], key: str = "<value>") -> MetaValue:
        """Normalize a sequence of strings into ``One`` or ``Many``."""

        collected = tuple(values)
        if not collected:
            raise SchemaError(key, "at least one value is required")
        for item in collected:
            if not isinstance(item, str):
                raise SchemaError(key, f"expected a string, got {type(item).__name__}")
        if len(collected) == 1:
            return One(collected[0])
        return Many(collected)

    @staticmethod
    def from_json(key: str, raw: Any) -> MetaValue:
        """Decode a JSON value (bare string or array of strings) for ``key``."""

        if isinstance(raw, str):
            return One(raw)
        if isinstance(raw, list):
            return MetaValue.from_values(raw, key=key)
        raise SchemaError(key, f"expected a string or a list of strings, got {type(raw).__name__}")

    @abc.abstractmethod
    def to_json(self) -> MetaJson:
        """Encode back to the wire form, a bare string for single values."""
        raise NotImplementedError

    @abc.abstractmethod
    def as_sequence(self) -> tuple[str, ...]:
        """Read-only ordered view of the values."""
        raise NotImplementedError

    def into_sequence(self) -> list[str]:
        """Owned list of the values, always at least one element."""
        return list(self.as_sequence())

    def __len__(self) -> int:
        return len(self.as_sequence())


@final
@dataclass(frozen=True, slots=True)
class One(MetaValue):
    """A single-valued field."""

    value: str

    @override
    def to_json(self) -> MetaJson:
        return self.value

    @override
    def as_sequence(self) -> tuple[str, ...]:
        return (self.value,)

    @override
    def __str__(self) -> str:
        return self.value


@final
@dataclass(frozen=True, slots=True)
class Many(MetaValue):
    """A multi-valued field holding two or more strings in order."""

    values: tuple[str, ...]

    def __post_init__(self) -> None:
        if len(self.values) < 2:
            raise ValueError("Many requires at least two values; use One for a single value")

    @override
    def to_json(self) -> MetaJson:
        return list(self.values)

    @override
    def as_sequence(self) -> tuple[str, ...]:
        return self.values

    @override
    def __str__(self) -> str:
        return DISPLAY_SEPARATOR.join(self.values)


MetaBlock = dict[str, MetaValue]
MetaBlockList = list[MetaBlock]


def normalize_key(key: str) -> str:
    """Tag keys are compared and stored in lowercase."""
    return key.lower()


def sorted_block(items: Iterable[tuple[str, MetaValue]]) -> MetaBlock:
    """Build a block whose iteration order is by key.

    Raises:
        SchemaError: Two keys are equal once lowercased.
    """

    block: MetaBlock = {}
    for key, value in items:
        normalized = normalize_key(key)
        if normalized in block:
            raise SchemaError(key, "duplicate key (keys are case-insensitive)")
        block[normalized] = value
    return dict(sorted(block.items()))


def block_from_json(raw: Any, *, context: str = "block") -> MetaBlock:
    """Decode one JSON object into a :data:`MetaBlock`."""

    if not isinstance(raw, Mapping):
        raise SchemaError(context, f"expected an object, got {type(raw).__name__}")
    items: list[tuple[str, MetaValue]] = []
    for key, value in raw.items():
        if not isinstance(key, str):
            raise SchemaError(str(key), "keys must be strings")
        items.append((key, MetaValue.from_json(key, value)))
    return sorted_block(items)


def block_to_json(block: Mapping[str, MetaValue]) -> dict[str, MetaJson]:
    """Encode a block to a JSON-ready dict with sorted keys."""
    return {key: block[key].to_json() for key in sorted(block)}


def block_list_from_json(raw: Any, *, context: str = "tracks") -> MetaBlockList:
    """Decode a JSON array of objects into a :data:`MetaBlockList`."""

    if not isinstance(raw, list):
        raise SchemaError(context, f"expected an array, got {type(raw).__name__}")
    return [block_from_json(item, context=f"{context}[{index}]") for index, item in enumerate(raw)]


def block_list_to_json(blocks: Sequence[Mapping[str, MetaValue]]) -> list[dict[str, MetaJson]]:
    return [block_to_json(block) for block in blocks]


@dataclass(frozen=True, slots=True)
class Metadata:
    """Album metadata and per-track metadata combined in one document."""

    album: MetaBlock
    tracks: MetaBlockList

    @classmethod
    def from_json(cls, raw: Any) -> Metadata:
        """Decode the unified ``{"album": {...}, "tracks": [...]}`` form."""

        if not isinstance(raw, Mapping):
            raise SchemaError("metadata", f"expected an object, got {type(raw).__name__}")
        for section in ("album", "tracks"):
            if section not in raw:
                raise SchemaError(section, "section is missing")
        return cls(
            album=block_from_json(raw["album"], context="album"),
            tracks=block_list_from_json(raw["tracks"], context="tracks"),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "album": block_to_json(self.album),
            "tracks": block_list_to_json(self.tracks),
        }


def expect_one(key: str, values: Iterable[str] | None, path: Path | None = None) -> str:
    """Return the only value of ``key``; fail when there are zero or several."""

    collected = list(values or ())
    if len(collected) != 1 or not collected[0]:
        raise AmbiguousFieldError(key, collected, path)
    return collected[0]


__all__ = [
    "DISPLAY_SEPARATOR",
    "Many",
    "MetaBlock",
    "MetaBlockList",
    "MetaJson",
    "MetaValue",
    "Metadata",
    "One",
    "block_from_json",
    "block_list_from_json",
    "block_list_to_json",
    "block_to_json",
    "expect_one",
    "normalize_key",
    "sorted_block",
]
