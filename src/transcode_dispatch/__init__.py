"""Transcode Dispatch - parallel bulk audio transcoding."""

from __future__ import annotations

__version__ = "0.1.0"
__description__ = "Parallel bulk audio transcoding with a fixed ffmpeg worker pool"

# Public API exports
from .config import DispatchConfig, get_config
from .core import (
    CompletionTracker,
    DispatchError,
    ExecutionResult,
    ExecutionStatus,
    FFmpegCommandBuilder,
    InvocationSpec,
    JobDescriptor,
    PoolSummary,
    Profile,
    ResolverError,
    SubprocessExecutor,
    UnknownProfileError,
    WorkerPool,
    build_jobs,
    enumerate_jobs,
    select_profile,
)

__all__ = [
    # Configuration
    "DispatchConfig",
    "get_config",
    # Enumeration and scheduling
    "FFmpegCommandBuilder",
    "SubprocessExecutor",
    "WorkerPool",
    "CompletionTracker",
    "build_jobs",
    "enumerate_jobs",
    "select_profile",
    # Data classes
    "ExecutionResult",
    "ExecutionStatus",
    "InvocationSpec",
    "JobDescriptor",
    "PoolSummary",
    "Profile",
    # Exceptions
    "DispatchError",
    "ResolverError",
    "UnknownProfileError",
]
