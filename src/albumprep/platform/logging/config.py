"""Application logger setup.

Where: platform/logging/config.py
What: Build the console and rotating file handlers and expose the shared ``albumprep`` logger.
Why: The CLI reconfigures verbosity and the log file once arguments are parsed.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final

from rich.console import Console

from albumprep.config.paths import default_log_file
from albumprep.shared.events import PipelineEvent

from .handlers import PipelineRichHandler

LOGGER_NAME: Final[str] = "albumprep"
DEFAULT_LOG_FILE: Final[Path] = default_log_file()

FILE_LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_ROTATE_BYTES: Final[int] = 10 * 1024 * 1024
LOG_BACKUP_COUNT: Final[int] = 5


def _console_handler(level: int, console: Console | None) -> logging.Handler:
    handler = PipelineRichHandler(console=console or Console(stderr=True, soft_wrap=True))
    handler.setLevel(level)
    return handler


def _file_handler(log_file: Path, level: int) -> logging.Handler:
    target = log_file.expanduser().resolve()
    target.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        target,
        maxBytes=LOG_ROTATE_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
    return handler


def setup_logger(
    log_file: Path | None = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    console: Console | None = None,
) -> logging.Logger:
    """(Re)configure the ``albumprep`` logger.

    Existing handlers are closed and replaced, so calling this again only
    changes levels and destinations.

    Args:
        log_file: Rotating log file; console only when ``None``.
        console_level: Threshold for console output.
        file_level: Threshold for the log file.
        console: Rich console to render to; stderr when omitted.

    Returns:
        logging.Logger: The configured logger.
    """

    configured = logging.getLogger(LOGGER_NAME)
    configured.setLevel(logging.DEBUG)

    for handler in list(configured.handlers):
        configured.removeHandler(handler)
        handler.close()

    configured.addHandler(_console_handler(console_level, console))
    if log_file is not None:
        configured.addHandler(_file_handler(Path(log_file), file_level))
    return configured


def log_event(
    level: int,
    event: PipelineEvent,
    message: str,
    *message_args: object,
    **context: object,
) -> None:
    """Emit ``message`` tagged with a pipeline event and structured extras."""

    extra: dict[str, object] = {"pipeline_event": event.value}
    extra.update({key: value for key, value in context.items() if value is not None})
    logger.log(level, message, *message_args, extra=extra)


# Console only until the CLI attaches the configured log file.
logger: Final[logging.Logger] = setup_logger()


__all__ = ["DEFAULT_LOG_FILE", "LOGGER_NAME", "log_event", "logger", "setup_logger"]
