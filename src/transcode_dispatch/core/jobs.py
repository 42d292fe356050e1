"""Job descriptors and enumeration of the input directory."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .base import DispatchError
from .parallelism import compute_worker_count

if TYPE_CHECKING:
    from pathlib import Path

    from .ffmpeg import FFmpegCommandBuilder, InvocationSpec
    from .profiles import Profile

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class JobDescriptor:
    """One unit of work, pre-assigned to a worker bucket."""

    work_id: int
    bucket_id: int
    display_name: str
    source_file: Path
    invocation: InvocationSpec


def discover_files(input_dir: Path) -> list[Path]:
    """Regular files directly inside ``input_dir``, in lexicographic order."""
    if not input_dir.is_dir():
        msg = f"Input directory does not exist: {input_dir}"
        raise DispatchError(msg, file_path=input_dir)

    files = sorted((f for f in input_dir.iterdir() if f.is_file()), key=lambda f: f.name)
    LOG.info("Found %d files in %s", len(files), input_dir)
    return files


def enumerate_jobs(
    files: list[Path],
    profile: Profile,
    worker_count: int,
    output_dir: Path,
    resolver: FFmpegCommandBuilder,
) -> list[JobDescriptor]:
    """
    Build one descriptor per file, assigning buckets round-robin.

    Work ids follow the order of ``files``. Any resolver error propagates,
    so either every file gets a descriptor or none is returned.

    Args:
        files: Source files in enumeration order
        profile: Output profile used to resolve each invocation
        worker_count: Number of buckets
        output_dir: Destination directory, created once if missing
        resolver: Builds the invocation for each file

    Returns:
        Descriptors ordered by work id

    """
    output_dir.mkdir(parents=True, exist_ok=True)

    if not files:
        return []
    if worker_count <= 0:
        msg = f"Cannot distribute {len(files)} files across {worker_count} workers"
        raise DispatchError(msg)

    jobs: list[JobDescriptor] = []
    next_bucket = 0
    for work_id, source_file in enumerate(files):
        invocation = resolver.resolve(profile, source_file, output_dir)
        jobs.append(
            JobDescriptor(
                work_id=work_id,
                bucket_id=next_bucket,
                display_name=source_file.stem,
                source_file=source_file,
                invocation=invocation,
            )
        )
        LOG.debug("Job %d -> bucket %d: %s", work_id, next_bucket, invocation)
        next_bucket = (next_bucket + 1) % worker_count

    return jobs


def build_jobs(
    input_dir: Path,
    profile: Profile,
    output_dir: Path,
    parallelism: int,
    resolver: FFmpegCommandBuilder,
) -> tuple[list[JobDescriptor], int]:
    """Discover input files and enumerate them; returns the jobs and worker count."""
    files = discover_files(input_dir)
    worker_count = compute_worker_count(parallelism, len(files))
    return enumerate_jobs(files, profile, worker_count, output_dir, resolver), worker_count
