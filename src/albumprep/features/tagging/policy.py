"""
Summary: Merge policy and pure block-merging functions for tag rewriting.
Why: Keep the skipped-key list and collision rule in one swappable structure.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum

from albumprep.config.settings import TOTAL_TRACKS_KEY, TRACK_NUMBER_KEY
from albumprep.shared.meta import MetaBlock, MetaValue, One, sorted_block

REPLAYGAIN_PREFIX = "replaygain_"

DEFAULT_SKIPPED_KEYS: frozenset[str] = frozenset(
    {
        # positional
        "tracknumber",
        "totaltracks",
        "tracktotal",
        # album-wide or written by tools
        "album",
        "albumartist",
        "comment",
        "copyright",
        "date",
        "description",
        "discnumber",
        "disctotal",
        "encoder",
        "genre",
        "year",
    }
)


class CollisionPolicy(StrEnum):
    """Which block wins when album and track blocks share a key."""

    TRACK_WINS = "track_wins"
    ALBUM_WINS = "album_wins"


@dataclass(frozen=True, slots=True)
class MergePolicy:
    """Keys dropped from captured tags, and how album/track collisions resolve."""

    skipped_keys: frozenset[str] = field(default=DEFAULT_SKIPPED_KEYS)
    collision_policy: CollisionPolicy = CollisionPolicy.TRACK_WINS
    skip_replaygain: bool = True

    def is_skipped(self, key: str) -> bool:
        lowered = key.lower()
        if lowered in self.skipped_keys:
            return True
        return self.skip_replaygain and lowered.startswith(REPLAYGAIN_PREFIX)


DEFAULT_MERGE_POLICY = MergePolicy()


def merge_blocks(
    album_block: Mapping[str, MetaValue],
    track_block: Mapping[str, MetaValue],
    policy: MergePolicy = DEFAULT_MERGE_POLICY,
) -> MetaBlock:
    """Combine album and track fields; the losing side of a collision is dropped."""

    if policy.collision_policy is CollisionPolicy.TRACK_WINS:
        ordered = (album_block, track_block)
    else:
        ordered = (track_block, album_block)

    merged: MetaBlock = {}
    for block in ordered:
        for key, value in block.items():
            merged[key.lower()] = value
    return sorted_block(merged.items())


def positional_fields(index: int, total: int) -> MetaBlock:
    """The computed ``tracknumber``/``totaltracks`` fields for one track."""

    return {
        TOTAL_TRACKS_KEY: One(str(total)),
        TRACK_NUMBER_KEY: One(str(index)),
    }


def build_tag_block(
    album_block: Mapping[str, MetaValue],
    track_block: Mapping[str, MetaValue],
    index: int,
    total: int,
    policy: MergePolicy = DEFAULT_MERGE_POLICY,
) -> MetaBlock:
    """Final tag block for one track; positional fields always override the inputs."""

    merged = merge_blocks(album_block, track_block, policy)
    merged.update(positional_fields(index, total))
    return sorted_block(merged.items())


__all__ = [
    "CollisionPolicy",
    "DEFAULT_MERGE_POLICY",
    "DEFAULT_SKIPPED_KEYS",
    "MergePolicy",
    "build_tag_block",
    "merge_blocks",
    "positional_fields",
]
