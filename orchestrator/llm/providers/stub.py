"""Deterministic stub providers."""

import base64

from orchestrator.llm.providers.base import BaseLLMProvider
from orchestrator.llm.providers.types import LLMRequest, LLMResponse, TokenUsage

# Provider ids and default models registered on every router
DEFAULT_PROVIDERS: dict[str, str] = {
    "openai": "gpt-4o-mini",
    "anthropic": "claude-3-haiku",
    "local": "local-llm",
}

COMPLETION_TOKENS = 64
STUB_LATENCY_MS = 10.0


class StubProvider(BaseLLMProvider):
    """Provider returning deterministic placeholder output.

    The content only depends on the prompt and temperature, so the same
    request always yields the same response.
    """

    async def generate(
        self,
        request: LLMRequest,
        model: str | None = None,
    ) -> LLMResponse:
        """Return a placeholder generation for the request."""
        model_name = model or self.model_name
        seed = len(request.prompt) + (request.temperature or 0)
        if float(seed).is_integer():
            seed = int(seed)
        encoded = base64.b64encode(
            f"{seed}|{request.prompt[:64]}".encode()
        ).decode("ascii")
        prompt_tokens = len(request.prompt) // 4
        return LLMResponse(
            provider=self.id,
            model=model_name,
            content=f"STUB({self.id}:{model_name})::{encoded}",
            usage=TokenUsage(
                prompt_tokens=prompt_tokens,
                completion_tokens=COMPLETION_TOKENS,
                total_tokens=prompt_tokens + COMPLETION_TOKENS,
            ),
            latency_ms=STUB_LATENCY_MS,
        )


class FailingProvider(BaseLLMProvider):
    """Provider that always raises, for exercising error paths."""

    async def generate(
        self,
        request: LLMRequest,
        model: str | None = None,
    ) -> LLMResponse:
        """Raise an error for every request."""
        raise RuntimeError(f"Provider {self.id} unavailable")
