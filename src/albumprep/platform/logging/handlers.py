"""Rich console handler for pipeline log records.

Where: platform/logging/handlers.py
What: Render structured pipeline events with icons, colours and compact paths.
Why: Keep console formatting apart from logger setup.
"""

from __future__ import annotations

import logging
from pathlib import PurePath, PurePosixPath, PureWindowsPath
from typing import Any, ClassVar, override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text


class PipelineRichHandler(RichHandler):
    """Rich handler that decorates pipeline events and shortens paths."""

    _EVENT_STYLES: ClassVar[dict[str, tuple[str, str]]] = {
        "pipeline.discovery.file": ("🔎", "cyan"),
        "pipeline.discovery.complete": ("✅", "green"),
        "pipeline.metadata.load": ("📄", "blue"),
        "pipeline.metadata.write": ("💾", "blue"),
        "pipeline.tags.rewrite": ("🏷️", "magenta"),
        "pipeline.loudness.track": ("🎧", "yellow"),
        "pipeline.loudness.album": ("💿", "yellow"),
        "pipeline.stage.create": ("📁", "cyan"),
        "pipeline.stage.move": ("📦", "magenta"),
        "pipeline.normalize.start": ("🚀", "cyan"),
        "pipeline.normalize.complete": ("🎉", "green"),
        "pipeline.run.error": ("❌", "red"),
    }
    _PATH_SEGMENT_LIMIT: ClassVar[int] = 3

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        """Initialize the handler with compact console settings."""

        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["show_level"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = False
        kwargs["omit_repeated_times"] = False
        super().__init__(*args, **kwargs)

    @staticmethod
    def _to_pure_path(raw_path: str) -> PurePath:
        if "\\" in raw_path:
            return PureWindowsPath(raw_path)
        return PurePosixPath(raw_path)

    def format_path(self, path: str, base: str | None = None) -> Text:
        """Render ``path`` relative to ``base`` when possible, keeping the last segments."""

        pure_path = self._to_pure_path(path)
        if base:
            base_path = self._to_pure_path(base)
            try:
                relative = pure_path.relative_to(base_path)
            except ValueError:
                relative = None
            if relative is not None and str(relative) not in {"", "."}:
                pure_path = relative

        separator = "\\" if isinstance(pure_path, PureWindowsPath) else "/"
        parts = [part for part in pure_path.parts if part and part != pure_path.anchor]
        prefix = pure_path.anchor
        if len(parts) > self._PATH_SEGMENT_LIMIT:
            parts = parts[-self._PATH_SEGMENT_LIMIT:]
            prefix = "…" + separator

        rendered = prefix + separator.join(parts) if parts or prefix else "."
        text = Text()
        for char in rendered:
            if char in {separator, "…"}:
                _ = text.append(char, style=Style(color="magenta"))
            else:
                _ = text.append(char, style=Style(color="white"))
        return text

    def _render_pipeline_message(self, record: logging.LogRecord, message: str) -> Text | None:
        """Render structured pipeline events with dedicated styling."""

        event = getattr(record, "pipeline_event", None)
        if not isinstance(event, str):
            return None

        icon, color = self._EVENT_STYLES.get(event, ("ℹ️", "blue"))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))

        sequence = getattr(record, "sequence", None)
        total = getattr(record, "total", None)
        if isinstance(sequence, int) and sequence > 0:
            counter = f"[{sequence}/{total}] " if isinstance(total, int) and total > 0 else f"[{sequence}] "
            _ = text.append(counter, style=Style(color=color))

        _ = text.append(message, style=Style(color=color))

        source_path = getattr(record, "source_path", None)
        if source_path:
            _ = text.append(" @ ")
            _ = text.append_text(
                self.format_path(str(source_path), base=getattr(record, "source_base_path", None))
            )
        target_path = getattr(record, "target_path", None)
        if target_path:
            _ = text.append(" → ")
            _ = text.append_text(
                self.format_path(str(target_path), base=getattr(record, "target_base_path", None))
            )
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        """Render message with custom styling for pipeline events."""

        pipeline_text = self._render_pipeline_message(record, message)
        if pipeline_text is not None:
            return pipeline_text
        return super().render_message(record, message)


__all__ = ["PipelineRichHandler"]
