"""In-process job scheduler."""

import asyncio
from typing import Any

from orchestrator.core.config import settings
from orchestrator.core.errors import (
    HandlerNotFoundError,
    JobCancelledError,
    JobNotFoundError,
)
from orchestrator.core.logging import get_job_logger, get_logger
from orchestrator.core.metrics import JOB_ATTEMPTS, JOBS_ENQUEUED, JOBS_FINISHED, QUEUE_SIZE
from orchestrator.queue.cancellation import CancellationToken
from orchestrator.queue.job import Job, JobHandler, ProgressCallback
from orchestrator.queue.types import (
    JobStatus,
    JobType,
    NotificationConfig,
    ProgressUpdate,
    RetryOverride,
    RetryPolicy,
)

logger = get_logger().bind(module="job_queue")

QueueItem = tuple[Job, JobHandler]


def _type_key(job_type: JobType | str) -> str:
    return job_type.value if isinstance(job_type, JobType) else str(job_type)


def _worker_cancelling() -> bool:
    """Whether the current worker task itself is being cancelled."""
    task = asyncio.current_task()
    return task is not None and task.cancelling() > 0


class JobQueue:
    """FIFO job queue processed by a fixed number of asyncio workers.

    With the default single worker, jobs run strictly one at a time in
    enqueue order. Each job is dequeued by exactly one worker, so a handler
    never runs twice concurrently for the same job.
    """

    def __init__(
        self,
        retry_policy: RetryPolicy | None = None,
        worker_count: int | None = None,
    ) -> None:
        """Initialize queue.

        Args:
            retry_policy: Queue-wide retry policy, defaults from settings
            worker_count: Number of concurrent workers, defaults from settings
        """
        self.retry_policy = retry_policy or RetryPolicy(
            max_attempts=settings.JOB_MAX_ATTEMPTS,
            backoff_seconds=settings.JOB_BACKOFF_SECONDS,
        )
        self.worker_count = (
            settings.JOB_WORKER_COUNT if worker_count is None else worker_count
        )
        if self.worker_count < 1:
            raise ValueError("Worker count must be positive")

        self._handlers: dict[str, JobHandler] = {}
        self._jobs: dict[str, Job] = {}
        self._policies: dict[str, RetryPolicy] = {}
        self._tokens: dict[str, CancellationToken] = {}
        self._queue: asyncio.Queue[QueueItem] = asyncio.Queue()
        self._workers: list[asyncio.Task[None]] = []
        self._loop: asyncio.AbstractEventLoop | None = None

    def register(self, job_type: JobType | str, handler: JobHandler) -> None:
        """Associate a job type with its handler.

        Args:
            job_type: Job type to handle
            handler: Async callable ``(job, update, token) -> result``
        """
        self._handlers[_type_key(job_type)] = handler

    def enqueue(
        self,
        job_type: JobType | str,
        payload: Any = None,
        notify: NotificationConfig | dict[str, Any] | None = None,
        retry: RetryOverride | dict[str, Any] | None = None,
    ) -> Job:
        """Create a queued job and schedule it for processing.

        Returns immediately; the job runs on the next free worker.

        Args:
            job_type: Registered job type
            payload: Type-specific input
            notify: Optional notification preferences
            retry: Optional per-job retry overrides

        Returns:
            The queued job

        Raises:
            HandlerNotFoundError: If no handler is registered for the type
        """
        key = _type_key(job_type)
        handler = self._handlers.get(key)
        if handler is None:
            raise HandlerNotFoundError(key)

        policy = self.retry_policy
        if retry is not None:
            override = (
                retry if isinstance(retry, RetryOverride) else RetryOverride(**retry)
            )
            policy = override.apply(policy)
        if isinstance(notify, dict):
            notify = NotificationConfig(**notify)

        job = Job(
            type=key,
            payload=payload,
            max_attempts=policy.max_attempts,
            notify=notify,
        )
        self._jobs[job.id] = job
        self._policies[job.id] = policy
        self._tokens[job.id] = CancellationToken(job.id)
        self._queue.put_nowait((job, handler))

        JOBS_ENQUEUED.labels(job_type=key).inc()
        QUEUE_SIZE.set(self._queue.qsize())
        get_job_logger(job.id, key).info("Job enqueued", max_attempts=job.max_attempts)

        self._ensure_workers()
        return job

    def get(self, job_id: str) -> Job | None:
        """Get a job by ID."""
        return self._jobs.get(job_id)

    def list(self) -> list[Job]:
        """List all jobs in enqueue order."""
        return list(self._jobs.values())

    def cancel(self, job_id: str) -> Job:
        """Cancel a job.

        A queued job is marked canceled and never executed. A running job
        gets its cancellation token set; the handler observes it at its next
        progress checkpoint. Terminal jobs are returned unchanged.

        Raises:
            JobNotFoundError: If the job ID is unknown
        """
        job = self._jobs.get(job_id)
        if job is None:
            raise JobNotFoundError(job_id)
        if job.is_terminal:
            return job

        self._tokens[job_id].cancel()
        if job.status == JobStatus.QUEUED:
            self._finish_canceled(job)
        else:
            job.log("Cancellation requested")
            get_job_logger(job.id, job.type).info("Cancellation requested")
        return job

    def start(self) -> None:
        """Start worker tasks on the running event loop.

        Starting on a different loop than before moves pending jobs onto a
        fresh internal queue bound to the new loop.
        """
        loop = asyncio.get_running_loop()
        if self._loop is not loop:
            self._rebind(loop)
        self._workers = [task for task in self._workers if not task.done()]
        while len(self._workers) < self.worker_count:
            self._workers.append(asyncio.create_task(self._work()))

    async def join(self) -> None:
        """Wait until every enqueued job has been processed."""
        self.start()
        await self._queue.join()

    async def close(self) -> None:
        """Stop worker tasks.

        A job interrupted mid-attempt or mid-backoff ends as canceled. Jobs
        still waiting in the queue stay queued.
        """
        workers, self._workers = self._workers, []
        for task in workers:
            task.cancel()
        await asyncio.gather(*workers, return_exceptions=True)

    def _rebind(self, loop: asyncio.AbstractEventLoop) -> None:
        pending: asyncio.Queue[QueueItem] = asyncio.Queue()
        while not self._queue.empty():
            pending.put_nowait(self._queue.get_nowait())
        self._queue = pending
        # Workers of a previous loop cannot be resumed here
        self._workers = []
        self._loop = loop

    def _ensure_workers(self) -> None:
        try:
            self.start()
        except RuntimeError:
            # No running loop; processing begins on start() or join()
            logger.debug("No running event loop, deferring job processing")

    async def _work(self) -> None:
        while True:
            job, handler = await self._queue.get()
            QUEUE_SIZE.set(self._queue.qsize())
            try:
                if job.status == JobStatus.QUEUED:
                    await self._process(job, handler)
            except Exception:
                logger.exception("Queue processing error", job_id=job.id)
            finally:
                self._policies.pop(job.id, None)
                self._queue.task_done()

    def _progress_callback(self, job: Job, token: CancellationToken) -> ProgressCallback:
        def update(p: ProgressUpdate | dict[str, Any]) -> None:
            token.raise_if_cancelled()
            if isinstance(p, dict):
                p = ProgressUpdate(**p)
            if p.progress is not None:
                job.progress = p.progress
            if p.message:
                job.log(p.message)
            else:
                job.touch()

        return update

    async def _process(self, job: Job, handler: JobHandler) -> None:
        policy = self._policies.get(job.id, self.retry_policy)
        token = self._tokens[job.id]
        update = self._progress_callback(job, token)
        log = get_job_logger(job.id, job.type)

        while job.attempts < job.max_attempts:
            if token.cancelled:
                self._finish_canceled(job)
                return

            job.status = JobStatus.RUNNING
            job.attempts += 1
            job.log(f"Attempt {job.attempts}")
            JOB_ATTEMPTS.labels(job_type=job.type).inc()
            log.info("Job attempt started", attempt=job.attempts)

            try:
                result = await handler(job, update, token)
            except JobCancelledError:
                self._finish_canceled(job)
                return
            except (Exception, asyncio.CancelledError) as e:
                if isinstance(e, asyncio.CancelledError) and _worker_cancelling():
                    self._finish_canceled(job)
                    raise
                if token.cancelled:
                    self._finish_canceled(job)
                    return

                job.error = str(e) or e.__class__.__name__
                job.log(f"Failed: {job.error}")
                if job.attempts >= job.max_attempts:
                    job.status = JobStatus.FAILED
                    JOBS_FINISHED.labels(job_type=job.type, status=job.status.value).inc()
                    log.error("Job failed", attempts=job.attempts, error=job.error)
                    return

                job.status = JobStatus.RETRYING
                log.warning(
                    "Job attempt failed, retrying",
                    attempt=job.attempts,
                    max_attempts=job.max_attempts,
                    backoff_seconds=policy.backoff_seconds,
                    error=job.error,
                )
                try:
                    cancelled = token.cancelled or await token.wait(
                        policy.backoff_seconds
                    )
                except asyncio.CancelledError:
                    self._finish_canceled(job)
                    raise
                if cancelled:
                    self._finish_canceled(job)
                    return
                continue

            if token.cancelled:
                self._finish_canceled(job)
                return

            job.result = result
            job.error = None
            job.status = JobStatus.COMPLETED
            job.progress = 100
            job.log("Completed")
            JOBS_FINISHED.labels(job_type=job.type, status=job.status.value).inc()
            log.info("Job completed", attempts=job.attempts)
            return

    def _finish_canceled(self, job: Job) -> None:
        job.status = JobStatus.CANCELED
        job.log("Canceled")
        JOBS_FINISHED.labels(job_type=job.type, status=job.status.value).inc()
        get_job_logger(job.id, job.type).info("Job canceled", attempts=job.attempts)
