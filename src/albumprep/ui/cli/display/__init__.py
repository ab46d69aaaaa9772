"""Display management for CLI interface."""

from albumprep.ui.cli.display.result import ResultDisplay

__all__ = ["ResultDisplay"]
