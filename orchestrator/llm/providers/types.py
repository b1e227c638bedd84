"""Type definitions for LLM providers."""

from typing import Any

from pydantic import BaseModel, Field, field_validator


class LLMRequest(BaseModel):
    """Generation request handed to a provider."""

    prompt: str = Field(description="Prompt text")
    max_tokens: int | None = Field(default=None, description="Token ceiling")
    temperature: float | None = Field(default=None, description="Sampling temperature")
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("max_tokens")
    @classmethod
    def validate_max_tokens(cls, v: int | None) -> int | None:
        """Validate max tokens."""
        if v is not None and v <= 0:
            raise ValueError("Max tokens must be positive")
        return v

    @field_validator("temperature")
    @classmethod
    def validate_temperature(cls, v: float | None) -> float | None:
        """Validate temperature."""
        if v is not None and not 0 <= v <= 2:
            raise ValueError("Temperature must be between 0 and 2")
        return v


class TokenUsage(BaseModel):
    """Token usage statistics."""

    prompt_tokens: int | None = None
    completion_tokens: int | None = None
    total_tokens: int | None = None


class LLMResponse(BaseModel):
    """Standard response format for provider generations."""

    provider: str = Field(description="Identifier of the provider that answered")
    model: str = Field(description="Concrete model used by the provider")
    content: str = Field(description="Generated text content")
    usage: TokenUsage | None = Field(default=None, description="Token usage statistics")
    latency_ms: float | None = Field(default=None, description="Provider latency")

    @field_validator("model")
    @classmethod
    def validate_model(cls, v: str) -> str:
        """Validate model field."""
        if not v or v.isspace():
            raise ValueError("Model name cannot be empty")
        return v
