"""Main CLI interface for transcode dispatch."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from ..config.constants import VERBOSE_LOGGING_THRESHOLD
from ..config.settings import DispatchConfig, get_config
from ..core import (
    CompletionTracker,
    DispatchError,
    FFmpegCommandBuilder,
    ProcessExecutor,
    SubprocessExecutor,
    WorkerPool,
    build_jobs,
    build_profile_table,
    format_elapsed,
    get_available_parallelism,
    select_profile,
)

LOG = logging.getLogger(__name__)


class TranscodeDispatchCLI:
    """Command-line front end: pick a profile, enumerate, run the pool."""

    def __init__(self, executor: ProcessExecutor | None = None) -> None:
        self.executor = executor if executor is not None else SubprocessExecutor()

    @staticmethod
    def setup_logging(verbosity: int, default_level: str = "WARNING") -> None:
        """Setup logging based on verbosity level."""
        level_map = {
            1: logging.INFO,
            2: logging.DEBUG,
        }

        if verbosity <= 0:
            level = logging.getLevelName(default_level)
            if not isinstance(level, int):
                level = logging.WARNING
        else:
            level = level_map.get(verbosity, logging.DEBUG)

        log_format = (
            "%(levelname)s: %(name)s: %(message)s"
            if verbosity >= VERBOSE_LOGGING_THRESHOLD
            else "%(levelname)s: %(message)s"
        )

        logging.basicConfig(level=level, format=log_format, handlers=[logging.StreamHandler(sys.stderr)])

    def build_parser(self) -> argparse.ArgumentParser:
        """Build the argument parser."""
        parser = argparse.ArgumentParser(
            prog="transcode-dispatch",
            description="Transcode every file in ./input in parallel, one ffmpeg process per CPU",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Profiles:
  320     MP3 at 320 kbps (default)
  16bit   FLAC downsampled to 16-bit
  v0      MP3 VBR V0

Unrecognized profiles fall back to the default.

Examples:
  transcode-dispatch
  transcode-dispatch v0
            """,
        )

        parser.add_argument("profile", nargs="?", default=None, help="Output profile selector")
        parser.add_argument(
            "-v",
            "--verbose",
            action="count",
            default=0,
            help="Increase verbosity (-v for info, -vv for debug)",
        )
        parser.add_argument("--config", type=Path, help="Path to configuration file")

        return parser

    def run(self, args: list[str] | None = None, cwd: Path | None = None) -> int:
        """Run the CLI with given arguments."""
        parser = self.build_parser()
        parsed_args = parser.parse_args(args)

        config = self.load_config(parsed_args.config, cwd)
        self.setup_logging(parsed_args.verbose, config.global_.log_level)

        cwd = cwd if cwd is not None else Path.cwd()

        try:
            return self._dispatch(parsed_args.profile, config, cwd)
        except KeyboardInterrupt:
            LOG.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT

    @staticmethod
    def load_config(config_path: Path | None, cwd: Path | None) -> DispatchConfig:
        """Explicit --config first, then config.yaml in the run directory."""
        if config_path:
            return DispatchConfig.load_from_file(config_path)
        if cwd is None:
            return get_config()

        default_path = cwd / "config.yaml"
        return DispatchConfig.load_from_file(default_path) if default_path.exists() else DispatchConfig()

    def _dispatch(self, selector: str | None, config: DispatchConfig, cwd: Path) -> int:
        profiles = build_profile_table(config)
        profile = select_profile(selector, profiles)
        if selector is not None and profile.mode_banner:
            print(profile.mode_banner)
        LOG.info("Using profile '%s': %s", profile.key, profile.description)

        resolver = FFmpegCommandBuilder(config.global_.ffmpeg_binary)
        parallelism = get_available_parallelism(config.global_.max_workers)

        try:
            jobs, worker_count = build_jobs(
                input_dir=config.resolve_input_dir(cwd),
                profile=profile,
                output_dir=config.resolve_output_dir(cwd),
                parallelism=parallelism,
                resolver=resolver,
            )
        except DispatchError:
            LOG.exception("Failed to build the job list, nothing was started")
            return 1

        tracker = CompletionTracker(total=len(jobs))
        summary = WorkerPool(jobs, worker_count, self.executor, tracker).run()

        if summary.failed_work_ids:
            LOG.info("%d jobs did not exit cleanly", len(summary.failed_work_ids))

        print(format_elapsed(summary.elapsed))
        return 0


def main() -> int:
    """Entry point for the CLI."""
    cli = TranscodeDispatchCLI()
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
