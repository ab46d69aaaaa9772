"""Command line argument parser."""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import final

from albumprep.config.config import Config
from albumprep.platform.logging import DEFAULT_LOG_FILE, logger, setup_logger
from albumprep.ui.cli.args.options import PrepareArgs


def _optional_path(value: str | None) -> Path | None:
    return Path(value) if value else None


@final
class ArgumentParser:
    """Command line argument parser."""

    @staticmethod
    def create_parser() -> argparse.ArgumentParser:
        """Create argument parser.

        Returns:
            argparse.ArgumentParser: Configured argument parser.
        """
        parser = argparse.ArgumentParser(
            prog="albumprep",
            description=(
                "albumprep - Retag an album of FLAC files from JSON metadata, "
                "measure its loudness and hand it to bs1770gain."
            ),
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        _ = parser.add_argument(
            "source_dir",
            type=str,
            help="Directory holding the album's FLAC files",
            metavar="SOURCE_DIR",
        )
        _ = parser.add_argument(
            "--album-block-file",
            type=str,
            help="JSON object with album-wide tags (defaults to SOURCE_DIR/album.json)",
            metavar="PATH",
        )
        _ = parser.add_argument(
            "--track-blocks-file",
            type=str,
            help="JSON array with one tag object per track (defaults to SOURCE_DIR/track.json)",
            metavar="PATH",
        )
        _ = parser.add_argument(
            "--metadata-file",
            type=str,
            help="Single JSON file with 'album' and 'tracks' keys; replaces the two files above",
            metavar="PATH",
        )
        _ = parser.add_argument(
            "--emit-existing",
            action="store_true",
            help="Print the tags the files carry before they are rewritten and wait for Enter",
        )
        _ = parser.add_argument(
            "--emit-existing-to",
            type=str,
            help="Also write the existing tags to this file",
            metavar="PATH",
        )
        _ = parser.add_argument(
            "--output-dir",
            type=str,
            help="Directory receiving the normalized files (defaults to SOURCE_DIR)",
            metavar="PATH",
        )
        _ = parser.add_argument(
            "--skip-loudness",
            action="store_true",
            help="Do not measure loudness before running the normalizer",
        )
        verbosity = parser.add_mutually_exclusive_group()
        _ = verbosity.add_argument(
            "--verbose",
            action="store_true",
            help="Show detailed processing information",
        )
        _ = verbosity.add_argument(
            "--quiet",
            action="store_true",
            help="Suppress all output except errors",
        )
        return parser

    @staticmethod
    def process_args(args_list: Sequence[str] | None = None) -> PrepareArgs:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            PrepareArgs: Processed command line arguments.

        Raises:
            SystemExit: If the source directory doesn't exist or other validation fails.
        """
        parser = ArgumentParser.create_parser()
        parsed_args = parser.parse_args(args_list)

        # Set log level based on verbosity flags
        if parsed_args.quiet:
            log_level = logging.ERROR
        elif parsed_args.verbose:
            log_level = logging.DEBUG
        else:
            log_level = logging.INFO

        configuration = Config.load()
        log_file_path = configuration.log_file or DEFAULT_LOG_FILE
        _ = setup_logger(log_file=log_file_path, console_level=log_level)

        source_dir = Path(parsed_args.source_dir)
        if not source_dir.is_dir():
            logger.error("Source directory does not exist: %s", source_dir)
            sys.exit(1)

        metadata_file = _optional_path(parsed_args.metadata_file)
        if metadata_file is not None and (parsed_args.album_block_file or parsed_args.track_blocks_file):
            logger.error("--metadata-file cannot be combined with --album-block-file or --track-blocks-file")
            sys.exit(1)

        return PrepareArgs(
            source_dir=source_dir,
            output_dir=_optional_path(parsed_args.output_dir),
            album_file=_optional_path(parsed_args.album_block_file),
            track_file=_optional_path(parsed_args.track_blocks_file),
            metadata_file=metadata_file,
            emit_existing=parsed_args.emit_existing,
            emit_existing_to=_optional_path(parsed_args.emit_existing_to),
            skip_loudness=parsed_args.skip_loudness,
            verbose=parsed_args.verbose,
            quiet=parsed_args.quiet,
        )
