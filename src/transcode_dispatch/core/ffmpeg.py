"""FFmpeg invocation building and process execution."""

from __future__ import annotations

import logging
import subprocess
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from ..config.constants import DEFAULT_FFMPEG_BINARY
from .base import ExecutionResult, ExecutionStatus, ResolverError

if TYPE_CHECKING:
    from pathlib import Path

    from .profiles import Profile

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class InvocationSpec:
    """Executable plus arguments for one external process."""

    executable: str
    arguments: tuple[str, ...]

    @property
    def command(self) -> list[str]:
        return [self.executable, *self.arguments]

    def __str__(self) -> str:
        return " ".join(self.command)


class FFmpegCommandBuilder:
    """Builds ffmpeg invocations for a profile and a source file."""

    def __init__(self, binary: str = DEFAULT_FFMPEG_BINARY) -> None:
        self.binary = binary

    def output_path(self, profile: Profile, source_file: Path, output_dir: Path) -> Path:
        """Output file for ``source_file``: same stem, profile extension."""
        if not profile.extension:
            msg = f"Profile '{profile.key}' has no output extension"
            raise ResolverError(msg, file_path=source_file)
        if not source_file.stem:
            msg = f"Cannot derive an output name from {source_file}"
            raise ResolverError(msg, file_path=source_file)
        return output_dir / f"{source_file.stem}.{profile.extension}"

    def resolve(self, profile: Profile, source_file: Path, output_dir: Path) -> InvocationSpec:
        """Build the invocation transcoding ``source_file`` with ``profile``."""
        output_file = self.output_path(profile, source_file, output_dir)
        arguments = ("-y", "-i", str(source_file), *profile.output_arguments, str(output_file))
        return InvocationSpec(executable=self.binary, arguments=arguments)


class ProcessExecutor(Protocol):
    """Runs one invocation to completion."""

    def run(self, spec: InvocationSpec) -> ExecutionResult: ...


class SubprocessExecutor:
    """
    Spawns the invocation with ``subprocess`` and waits for it to exit.

    No timeout is applied. Nonzero exits and spawn failures are reported
    in the returned result, never raised.
    """

    def run(self, spec: InvocationSpec) -> ExecutionResult:
        LOG.debug("Running command: %s", spec)
        start_time = time.perf_counter()

        try:
            completed = subprocess.run(  # noqa: S603
                spec.command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                check=False,
            )
        except OSError as e:
            LOG.warning("Failed to start %s: %s", spec.executable, e)
            return ExecutionResult(
                status=ExecutionStatus.SPAWN_FAILURE,
                reason=str(e),
                duration=time.perf_counter() - start_time,
            )

        duration = time.perf_counter() - start_time
        if completed.returncode != 0:
            LOG.debug("Command exited with return code %d after %.2fs", completed.returncode, duration)
            return ExecutionResult(
                status=ExecutionStatus.EXIT_CODE,
                return_code=completed.returncode,
                reason=f"exited with return code {completed.returncode}",
                duration=duration,
            )

        LOG.debug("Command completed in %.2fs", duration)
        return ExecutionResult(status=ExecutionStatus.SUCCESS, return_code=0, duration=duration)
