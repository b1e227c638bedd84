"""Base class for LLM providers."""

from abc import ABC, abstractmethod

from orchestrator.llm.providers.types import LLMRequest, LLMResponse


class BaseLLMProvider(ABC):
    """Base class for LLM providers.

    All providers registered with the router should inherit from this class
    and implement its abstract methods.
    """

    def __init__(self, provider_id: str, model_name: str) -> None:
        """Initialize the LLM provider.

        Args:
            provider_id: Identifier the router uses to look the provider up
            model_name: Default concrete model served by this provider
        """
        self.id = provider_id
        self.model_name = model_name

    @abstractmethod
    async def generate(
        self,
        request: LLMRequest,
        model: str | None = None,
    ) -> LLMResponse:
        """Generate a response from the model.

        Args:
            request: The generation request
            model: Optional concrete model overriding the provider default

        Returns:
            Generated response
        """
        raise NotImplementedError

    def __repr__(self) -> str:
        """String representation of the provider."""
        return f"{self.__class__.__name__}(id='{self.id}', model_name='{self.model_name}')"
