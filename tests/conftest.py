"""Shared fixtures for transcode dispatch tests."""

from __future__ import annotations

import threading
from pathlib import Path

import pytest

from transcode_dispatch.config.settings import _ConfigSingleton
from transcode_dispatch.core import ExecutionResult, ExecutionStatus, InvocationSpec


class RecordingExecutor:
    """Executor double that records which thread ran which source file."""

    def __init__(self, return_code: int = 0) -> None:
        self.return_code = return_code
        self.calls: list[tuple[str, str]] = []
        self._lock = threading.Lock()

    def run(self, spec: InvocationSpec) -> ExecutionResult:
        source = Path(spec.arguments[spec.arguments.index("-i") + 1]).stem
        with self._lock:
            self.calls.append((threading.current_thread().name, source))
        if self.return_code == 0:
            return ExecutionResult(status=ExecutionStatus.SUCCESS, return_code=0)
        return ExecutionResult(status=ExecutionStatus.EXIT_CODE, return_code=self.return_code)

    def sources_for(self, thread_name: str) -> list[str]:
        return [source for name, source in self.calls if name == thread_name]


@pytest.fixture
def recording_executor() -> RecordingExecutor:
    return RecordingExecutor()


@pytest.fixture
def make_input_dir(tmp_path):
    """Create ``tmp_path/input`` holding one dummy .flac per name."""

    def _make(names: list[str]) -> Path:
        input_dir = tmp_path / "input"
        input_dir.mkdir(exist_ok=True)
        for name in names:
            (input_dir / f"{name}.flac").write_bytes(b"dummy audio content")
        return input_dir

    return _make


@pytest.fixture(autouse=True)
def _reset_config_singleton():
    _ConfigSingleton.reset()
    yield
    _ConfigSingleton.reset()


@pytest.fixture
def failing_executor() -> RecordingExecutor:
    return RecordingExecutor(return_code=1)
