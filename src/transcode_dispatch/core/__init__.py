"""Core job enumeration, scheduling and execution."""

from .base import DispatchError, ExecutionResult, ExecutionStatus, ResolverError, UnknownProfileError
from .ffmpeg import FFmpegCommandBuilder, InvocationSpec, ProcessExecutor, SubprocessExecutor
from .jobs import JobDescriptor, build_jobs, discover_files, enumerate_jobs
from .parallelism import compute_worker_count, get_available_parallelism
from .profiles import BUILTIN_PROFILES, Profile, build_profile_table, get_profile, select_profile
from .scheduler import PoolSummary, Worker, WorkerPool
from .tracker import CompletionTracker, Stopwatch, format_elapsed

__all__ = [
    "BUILTIN_PROFILES",
    "CompletionTracker",
    "DispatchError",
    "ExecutionResult",
    "ExecutionStatus",
    "FFmpegCommandBuilder",
    "InvocationSpec",
    "JobDescriptor",
    "PoolSummary",
    "ProcessExecutor",
    "Profile",
    "ResolverError",
    "Stopwatch",
    "SubprocessExecutor",
    "UnknownProfileError",
    "Worker",
    "WorkerPool",
    "build_jobs",
    "build_profile_table",
    "compute_worker_count",
    "discover_files",
    "enumerate_jobs",
    "format_elapsed",
    "get_available_parallelism",
    "get_profile",
    "select_profile",
]
