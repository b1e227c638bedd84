"""Prompt templates with versions, A/B variants and environment overrides."""

from orchestrator.prompts.models import (
    EnvironmentOverride,
    PromptTemplate,
    PromptVariant,
    PromptVersion,
    RenderedPrompt,
)
from orchestrator.prompts.service import PromptService, RandomSource

__all__ = [
    "EnvironmentOverride",
    "PromptService",
    "PromptTemplate",
    "PromptVariant",
    "PromptVersion",
    "RandomSource",
    "RenderedPrompt",
]
