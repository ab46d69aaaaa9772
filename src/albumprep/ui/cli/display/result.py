"""src/albumprep/ui/cli/display/result.py
What: Render the per-track and album loudness summary after a run.
Why: Keep console output formatting out of the command processor.
"""

from __future__ import annotations

from typing import final

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from albumprep.application.services import PrepareResult

STEREO_MEAN_NOTE = "Left and right are averaged; a BS.1770 channel sum (bs1770gain) reads 3.01 dB higher."


@final
class ResultDisplay:
    """Handles result display in CLI."""

    console: Console

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def build_loudness_table(self, result: PrepareResult) -> Table | None:
        """Table of staged names and measured loudness, or ``None`` when not measured."""

        analysis = result.analysis
        if analysis is None:
            return None

        table = Table(
            title="Loudness",
            caption=STEREO_MEAN_NOTE,
            show_header=True,
            header_style="bold",
        )
        table.add_column("#", justify="right")
        table.add_column("Track")
        table.add_column("Integrated (L/R mean)", justify="right")

        names = result.staged_names or [scanned.track.path.name for scanned in analysis.scanned_tracks]
        for scanned, name in zip(analysis.scanned_tracks, names, strict=False):
            table.add_row(str(scanned.track.index), escape(name), str(scanned.loudness))
        table.add_section()
        table.add_row("", "[bold]Album[/bold]", f"[bold]{analysis.album_loudness}[/bold]")
        return table

    def show_results(self, result: PrepareResult, quiet: bool = False) -> None:
        """Display the outcome of a run.

        Args:
            result: Outcome returned by the prepare service.
            quiet: Whether to suppress non-error output.
        """
        if quiet:
            return

        table = self.build_loudness_table(result)
        if table is not None:
            self.console.print(table)
        self.console.print(
            f"[green]Prepared {len(result.tracks)} track(s) into {result.output_dir}[/green]"
        )
