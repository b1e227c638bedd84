"""Job models."""

from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from orchestrator.queue.cancellation import CancellationToken
from orchestrator.queue.types import JobStatus, NotificationConfig, ProgressUpdate


def _now() -> datetime:
    return datetime.now(UTC)


class Job(BaseModel):
    """A scheduled, retryable unit of asynchronous work."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    type: str
    payload: Any = None
    status: JobStatus = JobStatus.QUEUED
    attempts: int = Field(default=0, ge=0)
    max_attempts: int = Field(default=3, ge=1)
    progress: int = Field(default=0, ge=0, le=100)
    logs: list[str] = Field(default_factory=list)
    result: Any = None
    error: str | None = None
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)
    notify: NotificationConfig | None = None

    model_config = ConfigDict(validate_assignment=True)

    @property
    def is_terminal(self) -> bool:
        """Whether the job reached a final status."""
        return self.status.is_terminal

    def touch(self) -> None:
        """Refresh the update timestamp."""
        self.updated_at = _now()

    def log(self, message: str) -> None:
        """Append a timestamped log line."""
        now = _now()
        self.logs.append(f"[{now.isoformat()}] {message}")
        self.updated_at = now


ProgressCallback = Callable[[ProgressUpdate | dict[str, Any]], None]
JobHandler = Callable[[Job, ProgressCallback, CancellationToken], Awaitable[Any]]
