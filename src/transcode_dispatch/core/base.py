"""Base types and errors shared by the dispatcher."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class ExecutionStatus(Enum):
    """Outcome of running one external process."""

    SUCCESS = "success"
    EXIT_CODE = "exit_code"
    SPAWN_FAILURE = "spawn_failure"


@dataclass(frozen=True)
class ExecutionResult:
    """Result of a single process execution."""

    status: ExecutionStatus
    return_code: int | None = None
    reason: str = ""
    duration: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.status is ExecutionStatus.SUCCESS


class DispatchError(Exception):
    """Base exception for dispatch errors."""

    def __init__(
        self,
        message: str,
        file_path: Path | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.file_path = file_path
        self.cause = cause


class UnknownProfileError(DispatchError):
    """Raised when a profile key has no entry in the profile table."""

    def __init__(self, key: str, available: list[str] | None = None) -> None:
        msg = f"Unknown profile '{key}'"
        if available:
            msg += f". Available: {', '.join(available)}"
        super().__init__(msg)
        self.key = key


class ResolverError(DispatchError):
    """Raised when an invocation cannot be built for a file."""
