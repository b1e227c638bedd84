"""LLM provider routing for generation requests"""

from orchestrator.llm.providers.base import BaseLLMProvider
from orchestrator.llm.providers.stub import StubProvider
from orchestrator.llm.providers.types import LLMRequest, LLMResponse, TokenUsage
from orchestrator.llm.router import ProviderRouter
from orchestrator.llm.rules import ProviderRouteRule, RouteCondition, RouteTarget

__all__ = [
    "BaseLLMProvider",
    "LLMRequest",
    "LLMResponse",
    "ProviderRouteRule",
    "ProviderRouter",
    "RouteCondition",
    "RouteTarget",
    "StubProvider",
    "TokenUsage",
]
