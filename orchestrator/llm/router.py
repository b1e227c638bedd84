"""Provider router dispatching generation requests by rule."""

from orchestrator.core.config import settings
from orchestrator.core.errors import ProviderNotRegisteredError
from orchestrator.core.logging import get_logger
from orchestrator.core.metrics import DISPATCHES
from orchestrator.llm.providers.base import BaseLLMProvider
from orchestrator.llm.providers.stub import DEFAULT_PROVIDERS, StubProvider
from orchestrator.llm.providers.types import LLMRequest, LLMResponse
from orchestrator.llm.rules import ProviderRouteRule, RouteTarget

logger = get_logger().bind(module="provider_router")


class ProviderRouter:
    """Route generation requests to registered providers.

    Rules are evaluated in insertion order and the first match wins. When no
    rule matches, the request goes to the default provider.
    """

    def __init__(
        self,
        default_provider: str | None = None,
        register_defaults: bool = True,
    ) -> None:
        """Initialize router.

        Args:
            default_provider: Provider id used when no rule matches
            register_defaults: Whether to register the stub providers
        """
        self.default_provider = default_provider or settings.DEFAULT_PROVIDER
        self._rules: list[ProviderRouteRule] = []
        self._providers: dict[str, BaseLLMProvider] = {}

        if register_defaults:
            for provider_id, model_name in DEFAULT_PROVIDERS.items():
                self.register_provider(StubProvider(provider_id, model_name))

    def register_rule(self, rule: ProviderRouteRule) -> None:
        """Append a rule; duplicate ids are kept in position."""
        self._rules.append(rule)

    def get_rules(self) -> list[ProviderRouteRule]:
        """Return rules in insertion order."""
        return list(self._rules)

    def register_provider(self, provider: BaseLLMProvider) -> None:
        """Register a provider, replacing any provider with the same id."""
        self._providers[provider.id] = provider

    def get_provider(self, provider_id: str) -> BaseLLMProvider | None:
        """Look up a provider by id."""
        return self._providers.get(provider_id)

    def match(self, feature: str, env: str, model: str) -> ProviderRouteRule | None:
        """Return the first rule whose condition matches the request."""
        for rule in self._rules:
            if rule.when.matches(feature, env, model):
                return rule
        return None

    def resolve(self, feature: str, env: str, model: str) -> RouteTarget | None:
        """Return the target of the matching rule, or None for the default."""
        rule = self.match(feature, env, model)
        return rule.to if rule else None

    async def generate(
        self,
        feature: str,
        env: str,
        logical_model: str,
        request: LLMRequest,
    ) -> LLMResponse:
        """Dispatch a request to the provider selected by the rules.

        Args:
            feature: Feature kind issuing the request (codegen, docs, ...)
            env: Deployment environment
            logical_model: Logical model name requested by the caller
            request: The generation request

        Returns:
            Provider response

        Raises:
            ProviderNotRegisteredError: If the resolved provider is unknown
        """
        target = self.resolve(feature, env, logical_model)
        provider_id = target.provider if target else self.default_provider
        provider = self._providers.get(provider_id)
        if provider is None:
            raise ProviderNotRegisteredError(provider_id)

        logger.debug(
            "Dispatching generation request",
            feature=feature,
            env=env,
            logical_model=logical_model,
            provider=provider_id,
        )
        DISPATCHES.labels(provider=provider_id).inc()
        return await provider.generate(request, model=target.model if target else None)
