"""Album finalization.

Where: src/albumprep/features/finalization/finalize.py
What: Stage retagged tracks in a fresh temporary directory and hand it to the normalizer.
Why: The staging directory belongs to one run and must be removed whatever the outcome.
"""

from __future__ import annotations

import logging
import tempfile
from collections.abc import Sequence
from pathlib import Path

from albumprep.platform.logging import log_event
from albumprep.platform.normalizer import Normalizer
from albumprep.shared.events import PipelineEvent
from albumprep.shared.meta import MetaBlockList
from albumprep.shared.track import Track

from .staging import stage_tracks

STAGING_PREFIX = "albumprep-"


def finalize_album(
    tracks: Sequence[Track],
    blocks: MetaBlockList,
    output_dir: Path,
    normalizer: Normalizer,
) -> list[str]:
    """Stage ``tracks`` and run ``normalizer`` once over the staging directory.

    The tracks' paths point into the staging directory afterwards; it is gone
    once this returns or raises, so the normalizer's output in ``output_dir``
    is the only remaining copy.

    Returns:
        The file names the tracks were staged under, in track order.

    Raises:
        ExternalToolError: The normalizer failed. ``output_dir`` may hold partial output.
    """

    output_dir.mkdir(parents=True, exist_ok=True)
    with tempfile.TemporaryDirectory(prefix=STAGING_PREFIX) as staging:
        staging_dir = Path(staging)
        log_event(logging.INFO, PipelineEvent.STAGE_CREATE, "Created staging directory", source_path=staging_dir)

        staged = stage_tracks(tracks, blocks, staging_dir)

        log_event(
            logging.INFO,
            PipelineEvent.NORMALIZE_START,
            "Running loudness normalizer",
            source_path=staging_dir,
            target_path=output_dir,
        )
        normalizer.normalize(staging_dir, output_dir)
        log_event(
            logging.INFO,
            PipelineEvent.NORMALIZE_COMPLETE,
            "Normalized %d track(s)",
            len(staged),
            target_path=output_dir,
        )
    return [path.name for path in staged]


__all__ = ["STAGING_PREFIX", "finalize_album"]
