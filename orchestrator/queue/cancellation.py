"""Cooperative cancellation for running jobs."""

import asyncio

from orchestrator.core.errors import JobCancelledError


class CancellationToken:
    """
    Token for cooperative cancellation in long-running handlers.

    Usage:
        async def handler(job, update, token):
            for stage in stages:
                token.raise_if_cancelled()
                await stage()
    """

    def __init__(self, job_id: str) -> None:
        self.job_id = job_id
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        """Whether cancellation was requested."""
        return self._event.is_set()

    def cancel(self) -> None:
        """Request cancellation."""
        self._event.set()

    def raise_if_cancelled(self) -> None:
        """Raise JobCancelledError if cancellation was requested."""
        if self._event.is_set():
            raise JobCancelledError(self.job_id)

    async def wait(self, timeout: float | None = None) -> bool:
        """Wait for cancellation, returning whether it was requested."""
        try:
            await asyncio.wait_for(self._event.wait(), timeout=timeout)
        except asyncio.TimeoutError:
            return False
        return True
