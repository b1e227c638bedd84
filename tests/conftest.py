"""Test configuration."""

import random
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from pytest import Config

from orchestrator.core.logging import configure_logging
from orchestrator.llm.router import ProviderRouter
from orchestrator.prompts.service import PromptService
from orchestrator.queue.scheduler import JobQueue
from orchestrator.queue.types import RetryPolicy


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source."""
    return random.Random(1234)


@pytest.fixture
def prompt_service(rng: random.Random) -> PromptService:
    """Prompt service with a seeded random source."""
    return PromptService(rng=rng)


@pytest.fixture
def router() -> ProviderRouter:
    """Router with the default stub providers."""
    return ProviderRouter(default_provider="local")


@pytest_asyncio.fixture
async def queue() -> AsyncGenerator[JobQueue, None]:
    """Single-worker queue without retry backoff."""
    job_queue = JobQueue(
        retry_policy=RetryPolicy(max_attempts=3, backoff_seconds=0),
        worker_count=1,
    )
    yield job_queue
    await job_queue.close()


def pytest_configure(config: Config) -> None:
    """Configure pytest.

    Args:
        config: Pytest configuration object
    """
    # Configure logging for test environment
    configure_logging(testing=True)
