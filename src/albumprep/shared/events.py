"""Where: src/albumprep/shared/events.py
What: Structured event identifiers attached to pipeline log records.
Why: Let the console handler style each pipeline step without parsing messages.
"""

from __future__ import annotations

from enum import StrEnum


class PipelineEvent(StrEnum):
    """Structured event identifiers for album preparation logs."""

    DISCOVERY_FILE = "pipeline.discovery.file"
    DISCOVERY_COMPLETE = "pipeline.discovery.complete"
    METADATA_LOAD = "pipeline.metadata.load"
    METADATA_WRITE = "pipeline.metadata.write"
    TAG_REWRITE = "pipeline.tags.rewrite"
    LOUDNESS_TRACK = "pipeline.loudness.track"
    LOUDNESS_ALBUM = "pipeline.loudness.album"
    STAGE_CREATE = "pipeline.stage.create"
    STAGE_MOVE = "pipeline.stage.move"
    NORMALIZE_START = "pipeline.normalize.start"
    NORMALIZE_COMPLETE = "pipeline.normalize.complete"
    RUN_ERROR = "pipeline.run.error"


__all__ = ["PipelineEvent"]
