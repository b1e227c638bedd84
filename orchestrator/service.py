"""Orchestrator composing the job queue, prompt service and provider router."""

from orchestrator.core.config import Settings
from orchestrator.core.config import settings as default_settings
from orchestrator.handlers import register_default_handlers
from orchestrator.llm.router import ProviderRouter
from orchestrator.prompts.service import PromptService, RandomSource
from orchestrator.queue.scheduler import JobQueue
from orchestrator.queue.types import RetryPolicy


class Orchestrator:
    """One explicit instance of the orchestration core.

    The hosting application owns the instance; nothing is shared between
    instances, so several configurations can coexist.
    """

    def __init__(
        self,
        queue: JobQueue,
        prompts: PromptService,
        router: ProviderRouter,
    ) -> None:
        self.queue = queue
        self.prompts = prompts
        self.router = router

    @classmethod
    def create(
        cls,
        settings: Settings | None = None,
        rng: RandomSource | None = None,
        seed: bool = True,
    ) -> "Orchestrator":
        """Build an orchestrator from settings.

        Args:
            settings: Settings to use, defaults to the environment settings
            rng: Random source for prompt variant selection
            seed: Whether to register default templates and handlers

        Returns:
            Configured orchestrator
        """
        settings = settings or default_settings
        queue = JobQueue(
            retry_policy=RetryPolicy(
                max_attempts=settings.JOB_MAX_ATTEMPTS,
                backoff_seconds=settings.JOB_BACKOFF_SECONDS,
            ),
            worker_count=settings.JOB_WORKER_COUNT,
        )
        prompts = PromptService(rng=rng)
        router = ProviderRouter(default_provider=settings.DEFAULT_PROVIDER)

        orchestrator = cls(queue, prompts, router)
        if seed:
            prompts.seed_defaults()
            register_default_handlers(queue, prompts, router)
        return orchestrator

    async def close(self) -> None:
        """Stop queue workers."""
        await self.queue.close()
