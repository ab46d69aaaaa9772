# Where: albumprep.features.tagging.__init__
# What: Expose the merge policy and tag rewrite use cases.
# Why: Provide a cohesive import surface for discovery and the application service.

from .policy import (
    DEFAULT_MERGE_POLICY,
    DEFAULT_SKIPPED_KEYS,
    CollisionPolicy,
    MergePolicy,
    build_tag_block,
    merge_blocks,
    positional_fields,
)
from .rewrite import rewrite_track, rewrite_tracks

__all__ = [
    "CollisionPolicy",
    "DEFAULT_MERGE_POLICY",
    "DEFAULT_SKIPPED_KEYS",
    "MergePolicy",
    "build_tag_block",
    "merge_blocks",
    "positional_fields",
    "rewrite_track",
    "rewrite_tracks",
]
