"""Default job handlers wiring prompt rendering and provider routing."""

from collections.abc import Mapping
from typing import Any

from orchestrator.core.config import settings
from orchestrator.llm.providers.types import LLMRequest
from orchestrator.llm.router import ProviderRouter
from orchestrator.prompts.service import PromptService
from orchestrator.queue.cancellation import CancellationToken
from orchestrator.queue.job import Job, JobHandler, ProgressCallback
from orchestrator.queue.scheduler import JobQueue
from orchestrator.queue.types import JobType

# Template rendered by each default handler
TEMPLATES: dict[JobType, str] = {
    JobType.CODEGEN: "codegen.app",
    JobType.DOCS: "docs.readme",
    JobType.BUGFIX: "agents.bugfix",
}


def _placeholders(payload: Any) -> dict[str, str]:
    if not isinstance(payload, Mapping):
        return {}
    return {
        str(key): str(value)
        for key, value in payload.items()
        if isinstance(value, str | int | float)
    }


def make_generation_handler(
    job_type: JobType,
    prompts: PromptService,
    router: ProviderRouter,
    stages: tuple[str, str, str],
) -> JobHandler:
    """Build a handler that renders the job's template and dispatches it.

    Args:
        job_type: Job type, also used as the routing feature
        prompts: Prompt service rendering the template
        router: Router dispatching the rendered prompt
        stages: Progress messages for validate, generate and finalize

    Returns:
        Job handler
    """
    template_name = TEMPLATES[job_type]
    validate_msg, generate_msg, finalize_msg = stages

    async def handler(
        job: Job,
        update: ProgressCallback,
        token: CancellationToken,
    ) -> dict[str, Any]:
        payload = job.payload if isinstance(job.payload, Mapping) else {}
        env = str(payload.get("env", settings.DEFAULT_ENVIRONMENT))
        model = str(payload.get("model", "default"))

        update({"progress": 10, "message": validate_msg})
        rendered = prompts.render(template_name, env, _placeholders(payload))

        update({"progress": 30, "message": generate_msg})
        response = await router.generate(
            job_type.value,
            env,
            model,
            LLMRequest(prompt=rendered.content, metadata={"job_id": job.id}),
        )

        update({"progress": 90, "message": finalize_msg})
        return {
            "prompt": rendered.model_dump(),
            "response": response.model_dump(),
        }

    return handler


def register_default_handlers(
    queue: JobQueue,
    prompts: PromptService,
    router: ProviderRouter,
) -> None:
    """Register the codegen, docs and bugfix handlers on a queue."""
    queue.register(
        JobType.CODEGEN,
        make_generation_handler(
            JobType.CODEGEN,
            prompts,
            router,
            ("Validating input", "Generating code artifacts", "Packaging artifacts"),
        ),
    )
    queue.register(
        JobType.DOCS,
        make_generation_handler(
            JobType.DOCS,
            prompts,
            router,
            ("Validating input", "Generating docs", "Finalizing"),
        ),
    )
    queue.register(
        JobType.BUGFIX,
        make_generation_handler(
            JobType.BUGFIX,
            prompts,
            router,
            ("Validating input", "Applying bugfix agent", "Finalizing"),
        ),
    )
