# Where: albumprep.application.services.__init__
# What: Expose the album preparation service and its request/result types.
# Why: Give UIs one import path for running the pipeline.

from .prepare_service import PrepareAlbumService, PrepareRequest, PrepareResult

__all__ = ["PrepareAlbumService", "PrepareRequest", "PrepareResult"]
