"""
Summary: Destructive in-place tag rewrite for every discovered track.
Why: Replace whatever tags the source files carried with the merged album/track metadata.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from albumprep.platform.logging import log_event
from albumprep.platform.tagstore import TagStoreOpener, open_tag_store
from albumprep.shared.errors import CountMismatchError
from albumprep.shared.events import PipelineEvent
from albumprep.shared.meta import MetaBlock, MetaBlockList
from albumprep.shared.track import Track

from .policy import DEFAULT_MERGE_POLICY, MergePolicy, build_tag_block


def rewrite_track(
    track: Track,
    block: MetaBlock,
    *,
    open_store: TagStoreOpener = open_tag_store,
) -> None:
    """Drop all existing comments and pictures from ``track`` and write ``block``."""

    store = open_store(track.path)
    store.clear_comments()
    store.clear_pictures()
    for key, value in block.items():
        store.set(key, value.into_sequence())
    store.save()


def rewrite_tracks(
    tracks: Sequence[Track],
    album_block: MetaBlock,
    track_blocks: MetaBlockList,
    *,
    policy: MergePolicy = DEFAULT_MERGE_POLICY,
    open_store: TagStoreOpener = open_tag_store,
) -> MetaBlockList:
    """Rewrite the tags of every track in index order.

    Nothing is touched when the number of track blocks differs from the
    number of tracks. A failure part way through leaves already written files
    as they are.

    Returns:
        The tag block written to each track, in the same order.
    """

    if len(tracks) != len(track_blocks):
        raise CountMismatchError(len(tracks), len(track_blocks))

    total = len(tracks)
    written: MetaBlockList = []
    for sequence, (track, track_block) in enumerate(zip(tracks, track_blocks, strict=True), start=1):
        block = build_tag_block(album_block, track_block, track.index, total, policy)
        log_event(
            logging.INFO,
            PipelineEvent.TAG_REWRITE,
            "Rewriting tags",
            sequence=sequence,
            total=total,
            source_path=track.path,
            source_base_path=track.path.parent,
        )
        rewrite_track(track, block, open_store=open_store)
        written.append(block)
    return written


__all__ = ["rewrite_track", "rewrite_tracks"]
