"""Command line interface for albumprep."""

import logging
import sys
from typing import final

from albumprep.application.services import PrepareAlbumService, PrepareRequest, PrepareResult
from albumprep.config.config import Config
from albumprep.features.loudness import LoudnessEngine
from albumprep.platform.logging import log_event, logger
from albumprep.platform.normalizer import Bs1770GainNormalizer
from albumprep.shared.events import PipelineEvent
from albumprep.ui.cli.args import ArgumentParser, PrepareArgs
from albumprep.ui.cli.display import ResultDisplay


@final
class CommandProcessor:
    """Command line interface processor."""

    @staticmethod
    def build_service(configuration: Config) -> PrepareAlbumService:
        """Wire the service with the configured normalizer and decode block size."""

        normalizer = Bs1770GainNormalizer(
            configuration.normalizer_executable,
            configuration.normalizer_flags,
        )
        return PrepareAlbumService(
            normalizer=normalizer,
            engine_factory=lambda: LoudnessEngine(configuration.decode_block_frames),
        )

    @staticmethod
    def run(args: PrepareArgs) -> PrepareResult:
        request = PrepareRequest(
            source_dir=args.source_dir,
            output_dir=args.output_dir,
            album_file=args.album_file,
            track_file=args.track_file,
            metadata_file=args.metadata_file,
            capture_existing=args.emit_existing,
            capture_to=args.emit_existing_to,
            skip_loudness=args.skip_loudness,
        )
        service = CommandProcessor.build_service(Config.load())
        return service.run(request)

    @staticmethod
    def process_command(args_list: list[str] | None = None) -> None:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).
        """
        try:
            args = ArgumentParser.process_args(args_list)
            result = CommandProcessor.run(args)
            ResultDisplay().show_results(result, quiet=args.quiet)

        except KeyboardInterrupt:
            logger.info("\nOperation cancelled by user")
            sys.exit(130)
        except Exception as e:
            log_event(logging.ERROR, PipelineEvent.RUN_ERROR, "%s", str(e))
            logger.debug("Run failed", exc_info=True)
            sys.exit(1)


def main() -> int:
    """Main entry point.

    Returns:
        int: Process exit code (0 on success). Failures exit through
        ``sys.exit(...)`` inside :meth:`CommandProcessor.process_command`,
        so this return is only reached when the run succeeds.
    """
    CommandProcessor.process_command()
    return 0
