"""Logging facade exports.

Where: platform/logging/__init__.py
What: Re-export configured logger, setup helpers, and the Rich pipeline handler.
Why: Provide a single canonical import path for every feature.
"""

from __future__ import annotations

from .config import DEFAULT_LOG_FILE, LOGGER_NAME, log_event, logger, setup_logger
from .handlers import PipelineRichHandler

__all__ = [
    "DEFAULT_LOG_FILE",
    "LOGGER_NAME",
    "PipelineRichHandler",
    "log_event",
    "logger",
    "setup_logger",
]
