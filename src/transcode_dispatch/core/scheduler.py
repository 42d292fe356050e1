"""Fixed worker pool draining statically assigned job buckets."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .base import ExecutionResult, ExecutionStatus
from .tracker import CompletionTracker, Stopwatch

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .ffmpeg import ProcessExecutor
    from .jobs import JobDescriptor

LOG = logging.getLogger(__name__)


@dataclass
class PoolSummary:
    """Aggregate outcome of a pool run."""

    total: int
    completed: int
    worker_count: int
    elapsed: float
    results: dict[int, ExecutionResult] = field(default_factory=dict)

    @property
    def failed_work_ids(self) -> list[int]:
        return sorted(work_id for work_id, result in self.results.items() if not result.succeeded)


class Worker:
    """Drains one bucket of the shared job list, in work id order."""

    def __init__(
        self,
        bucket_id: int,
        jobs: Sequence[JobDescriptor],
        executor: ProcessExecutor,
        tracker: CompletionTracker,
    ) -> None:
        self.bucket_id = bucket_id
        self.jobs = jobs
        self.executor = executor
        self.tracker = tracker
        self.done: set[int] = set()
        self.results: dict[int, ExecutionResult] = {}

    def next_job(self) -> JobDescriptor | None:
        """First job in this bucket that has not run yet."""
        if not self.jobs:
            return None
        return next(
            (job for job in self.jobs if job.bucket_id == self.bucket_id and job.work_id not in self.done),
            None,
        )

    def run(self) -> None:
        while (job := self.next_job()) is not None:
            self.tracker.write(f"Thread {self.bucket_id} picked up '{job.display_name}'")
            self.results[job.work_id] = self._execute(job)
            self.done.add(job.work_id)
            self.tracker.record_completion(self.bucket_id, job.display_name)

        self.tracker.write(f"Thread {self.bucket_id} exhausted work pool")

    def _execute(self, job: JobDescriptor) -> ExecutionResult:
        try:
            result = self.executor.run(job.invocation)
        except Exception as e:
            LOG.exception("Executor raised for '%s'", job.display_name)
            return ExecutionResult(status=ExecutionStatus.SPAWN_FAILURE, reason=str(e))

        LOG.debug("Job %d ('%s') ended with %s", job.work_id, job.display_name, result.status.value)
        return result


class WorkerPool:
    """
    Runs one thread per bucket until every bucket is exhausted.

    Buckets partition the job list, so no job is claimed twice and no
    locking is needed to claim work. The worker count is fixed for the
    whole run.
    """

    def __init__(
        self,
        jobs: Sequence[JobDescriptor],
        worker_count: int,
        executor: ProcessExecutor,
        tracker: CompletionTracker | None = None,
    ) -> None:
        self.jobs = tuple(jobs)
        self.worker_count = worker_count
        self.executor = executor
        self.tracker = tracker if tracker is not None else CompletionTracker(total=len(self.jobs))
        self.workers = [Worker(bucket_id, self.jobs, executor, self.tracker) for bucket_id in range(worker_count)]

    def run(self) -> PoolSummary:
        """Start every worker, wait for all of them and summarize the run."""
        self.tracker.write(f"Starting {self.worker_count} threads")

        threads = [
            threading.Thread(target=worker.run, name=f"transcode-worker-{worker.bucket_id}")
            for worker in self.workers
        ]

        stopwatch = Stopwatch()
        stopwatch.start()
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        elapsed = stopwatch.stop()

        results: dict[int, ExecutionResult] = {}
        for worker in self.workers:
            results.update(worker.results)

        summary = PoolSummary(
            total=len(self.jobs),
            completed=self.tracker.completed,
            worker_count=self.worker_count,
            elapsed=elapsed,
            results=results,
        )
        LOG.info(
            "Pool finished: %d/%d jobs completed by %d workers in %.2fs",
            summary.completed,
            summary.total,
            summary.worker_count,
            summary.elapsed,
        )
        return summary
