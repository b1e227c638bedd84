"""Generation orchestration core: job queue, prompt rendering and provider routing."""

from orchestrator.llm.router import ProviderRouter
from orchestrator.prompts.service import PromptService
from orchestrator.queue.scheduler import JobQueue
from orchestrator.service import Orchestrator

__all__ = [
    "JobQueue",
    "Orchestrator",
    "PromptService",
    "ProviderRouter",
]
