"""Shared queue types and models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class JobType(str, Enum):
    """Kinds of work the application schedules."""

    CODEGEN = "codegen"
    DOCS = "docs"
    DB = "db"
    INFRA = "infra"
    BUNDLE = "bundle"
    BUGFIX = "bugfix"
    PERF = "perf"
    STYLE = "style"


class JobStatus(str, Enum):
    """Job status enum."""

    QUEUED = "queued"
    RUNNING = "running"
    RETRYING = "retrying"
    FAILED = "failed"
    COMPLETED = "completed"
    CANCELED = "canceled"

    @property
    def is_terminal(self) -> bool:
        """Whether no further transition is possible."""
        return self in (JobStatus.FAILED, JobStatus.COMPLETED, JobStatus.CANCELED)


class RetryPolicy(BaseModel):
    """Constant-backoff retry policy."""

    max_attempts: int = Field(default=3, ge=1)
    backoff_seconds: float = Field(default=1.0, ge=0)


class RetryOverride(BaseModel):
    """Per-job overrides of the queue-wide retry policy."""

    max_attempts: int | None = Field(default=None, ge=1)
    backoff_seconds: float | None = Field(default=None, ge=0)

    def apply(self, policy: RetryPolicy) -> RetryPolicy:
        """Merge this override over a base policy."""
        return RetryPolicy(
            max_attempts=(
                self.max_attempts if self.max_attempts is not None else policy.max_attempts
            ),
            backoff_seconds=(
                self.backoff_seconds
                if self.backoff_seconds is not None
                else policy.backoff_seconds
            ),
        )


class NotificationConfig(BaseModel):
    """Notification preferences consumed by the surrounding application."""

    in_app: bool | None = None
    email: list[str] | None = None
    webhook_url: str | None = None


class ProgressUpdate(BaseModel):
    """Intermediate state reported by a running handler."""

    progress: int | None = Field(default=None, ge=0, le=100)
    message: str | None = None
    data: dict[str, Any] | None = None
