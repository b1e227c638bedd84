"""In-process job queue with retries, progress and cancellation."""

from orchestrator.queue.cancellation import CancellationToken
from orchestrator.queue.job import Job, JobHandler, ProgressCallback
from orchestrator.queue.scheduler import JobQueue
from orchestrator.queue.types import (
    JobStatus,
    JobType,
    NotificationConfig,
    ProgressUpdate,
    RetryPolicy,
)

__all__ = [
    "CancellationToken",
    "Job",
    "JobHandler",
    "JobQueue",
    "JobStatus",
    "JobType",
    "NotificationConfig",
    "ProgressCallback",
    "ProgressUpdate",
    "RetryPolicy",
]
