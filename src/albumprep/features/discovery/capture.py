"""
Summary: Capture and emit the tags a source directory carried before rewriting.
Why: Offer a dry-run dump the user can turn into track metadata before it is overwritten.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path

from rich.console import Console
from rich.prompt import Prompt

from albumprep.config.settings import PAUSE_PROMPT, RULE_LINE
from albumprep.features.metadata import dump_json, write_json
from albumprep.features.tagging import DEFAULT_MERGE_POLICY, MergePolicy
from albumprep.platform.logging import logger
from albumprep.shared.meta import MetaBlock, MetaBlockList, MetaValue, block_list_to_json, sorted_block

PauseCallback = Callable[[], object]


def wait_for_enter(console: Console | None = None) -> None:
    """Block until the user presses Enter."""

    _ = Prompt.ask(PAUSE_PROMPT, default="", show_default=False, console=console)


def snapshot_block(
    items: Iterable[tuple[str, list[str]]],
    policy: MergePolicy = DEFAULT_MERGE_POLICY,
) -> MetaBlock:
    """Turn raw tag pairs into a block, dropping skipped and empty fields."""

    kept: list[tuple[str, MetaValue]] = []
    for key, values in items:
        key = key.lower()
        if policy.is_skipped(key) or not values:
            continue
        kept.append((key, MetaValue.from_values(values, key=key)))
    return sorted_block(kept)


def emit_source_tags(
    blocks: MetaBlockList,
    *,
    emit_stdout: bool,
    emit_to: Path | None,
    console: Console | None = None,
    pause: PauseCallback | None = None,
) -> str:
    """Print and/or write the captured blocks, then wait for the user.

    Returns:
        The JSON text that was emitted.
    """

    json_str = dump_json(block_list_to_json(blocks))

    if emit_stdout:
        out = console or Console(soft_wrap=True)
        out.print(
            f"Emitting existing tags for {len(blocks)} input file(s) below this line...",
            markup=False,
            highlight=False,
        )
        out.print(RULE_LINE, markup=False, highlight=False)
        out.print(json_str, markup=False, highlight=False)
        out.print(RULE_LINE, markup=False, highlight=False)

    if emit_to is not None:
        write_json(emit_to, block_list_to_json(blocks))
        logger.info("Wrote existing tags to %s", emit_to)

    if pause is None:
        wait_for_enter(console)
    else:
        _ = pause()
    return json_str


__all__ = ["PauseCallback", "emit_source_tags", "snapshot_block", "wait_for_enter"]
