"""Completion counting, status output and run timing."""

from __future__ import annotations

import sys
import threading
import time
from typing import TextIO

from ..config.constants import ELAPSED_MINUTES_THRESHOLD


class CompletionTracker:
    """
    Shared completion counter and status line writer.

    One lock guards both the counter and the output stream, so progress
    lines come out in counter order and never repeat a count.
    """

    def __init__(self, total: int, stream: TextIO | None = None) -> None:
        self.total = total
        self.stream = stream if stream is not None else sys.stdout
        self._completed = 0
        self._lock = threading.Lock()

    @property
    def completed(self) -> int:
        with self._lock:
            return self._completed

    def write(self, line: str) -> None:
        """Write a status line without interleaving with other workers."""
        with self._lock:
            self._emit(line)

    def record_completion(self, worker_id: int, display_name: str) -> int:
        """Count a finished job and report it; returns the new count."""
        with self._lock:
            self._completed += 1
            self._emit(f"Thread {worker_id} finished '{display_name}' ({self._completed}/{self.total})")
            return self._completed

    def _emit(self, line: str) -> None:
        self.stream.write(line + "\n")
        self.stream.flush()


class Stopwatch:
    """Monotonic elapsed-time measurement."""

    def __init__(self) -> None:
        self._start: float | None = None
        self._end: float | None = None

    def start(self) -> None:
        self._start = time.perf_counter()
        self._end = None

    def stop(self) -> float:
        if self._start is None:
            msg = "Stopwatch was never started"
            raise RuntimeError(msg)
        self._end = time.perf_counter()
        return self.elapsed

    @property
    def elapsed(self) -> float:
        if self._start is None:
            return 0.0
        end = self._end if self._end is not None else time.perf_counter()
        return end - self._start


def format_elapsed(seconds: float) -> str:
    """Final report line: minutes and seconds from one minute up, else seconds."""
    if seconds >= ELAPSED_MINUTES_THRESHOLD:
        minutes, remainder = divmod(seconds, 60)
        return f"Complete! Took {int(minutes)}m:{remainder:.2f}s."
    return f"Complete! Took {seconds:.3f} seconds."
