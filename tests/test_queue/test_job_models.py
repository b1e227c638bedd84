"""Tests for job models and cancellation tokens."""

import asyncio

import pytest
from pydantic import ValidationError

from orchestrator.core.errors import JobCancelledError
from orchestrator.queue.cancellation import CancellationToken
from orchestrator.queue.job import Job
from orchestrator.queue.types import (
    JobStatus,
    ProgressUpdate,
    RetryOverride,
    RetryPolicy,
)


class TestJob:
    """Test the job model."""

    def test_defaults(self) -> None:
        """New jobs start queued with no attempts."""
        job = Job(type="codegen")

        assert job.status == JobStatus.QUEUED
        assert job.attempts == 0
        assert job.progress == 0
        assert job.logs == []
        assert job.result is None
        assert job.error is None
        assert len(job.id) == 32
        assert job.created_at.tzinfo is not None

    def test_ids_are_unique(self) -> None:
        """Every job gets its own id."""
        assert len({Job(type="docs").id for _ in range(50)}) == 50

    def test_progress_is_bounded(self) -> None:
        """Progress must stay within 0..100."""
        job = Job(type="docs")
        with pytest.raises(ValidationError):
            job.progress = 101

    def test_log_lines_are_timestamped(self) -> None:
        """Log lines carry an ISO timestamp prefix."""
        job = Job(type="docs")

        job.log("hello")

        assert job.logs[0].startswith("[")
        assert job.logs[0].endswith("] hello")
        assert job.updated_at >= job.created_at

    @pytest.mark.parametrize(
        "status,terminal",
        [
            (JobStatus.QUEUED, False),
            (JobStatus.RUNNING, False),
            (JobStatus.RETRYING, False),
            (JobStatus.FAILED, True),
            (JobStatus.COMPLETED, True),
            (JobStatus.CANCELED, True),
        ],
    )
    def test_terminal_statuses(self, status: JobStatus, terminal: bool) -> None:
        """Only failed, completed and canceled are terminal."""
        assert Job(type="docs", status=status).is_terminal is terminal


class TestRetryPolicy:
    """Test retry policy merging."""

    def test_override_replaces_only_given_fields(self) -> None:
        """Unset override fields keep the base policy values."""
        base = RetryPolicy(max_attempts=3, backoff_seconds=2)

        merged = RetryOverride(max_attempts=5).apply(base)

        assert merged == RetryPolicy(max_attempts=5, backoff_seconds=2)

    def test_policy_requires_an_attempt(self) -> None:
        """At least one attempt is required."""
        with pytest.raises(ValidationError):
            RetryPolicy(max_attempts=0)


def test_progress_update_bounds() -> None:
    """Progress updates are validated."""
    with pytest.raises(ValidationError):
        ProgressUpdate(progress=-5)


class TestCancellationToken:
    """Test cooperative cancellation tokens."""

    def test_raise_if_cancelled(self) -> None:
        """The token raises only after cancel()."""
        token = CancellationToken("job-1")
        token.raise_if_cancelled()

        token.cancel()

        assert token.cancelled
        with pytest.raises(JobCancelledError):
            token.raise_if_cancelled()

    @pytest.mark.asyncio
    async def test_wait_times_out(self) -> None:
        """wait() returns False when nobody cancels."""
        token = CancellationToken("job-1")

        assert await token.wait(0.01) is False

    @pytest.mark.asyncio
    async def test_wait_wakes_on_cancel(self) -> None:
        """wait() returns True as soon as the token is canceled."""
        token = CancellationToken("job-1")
        asyncio.get_running_loop().call_soon(token.cancel)

        assert await token.wait(1) is True
