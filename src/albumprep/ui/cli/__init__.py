# Where: albumprep.ui.cli.__init__
# What: Expose the CLI entry point used by the console script and ``python -m albumprep``.
# Why: Keep the packaging target stable while the CLI internals move.

from albumprep.ui.cli.cli import CommandProcessor, main

__all__ = ["CommandProcessor", "main"]
