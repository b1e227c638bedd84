"""Tests for rule-based provider routing."""

import pytest

from orchestrator.core.errors import ProviderNotRegisteredError
from orchestrator.llm.providers.stub import FailingProvider, StubProvider
from orchestrator.llm.providers.types import LLMRequest
from orchestrator.llm.router import ProviderRouter
from orchestrator.llm.rules import ProviderRouteRule, RouteCondition, RouteTarget


def rule(
    rule_id: str,
    provider: str,
    target_model: str = "m",
    **when: list[str],
) -> ProviderRouteRule:
    """Build a routing rule."""
    return ProviderRouteRule(
        id=rule_id,
        when=RouteCondition(**when),
        to=RouteTarget(provider=provider, model=target_model),
    )


@pytest.fixture
def request_() -> LLMRequest:
    """Simple generation request."""
    return LLMRequest(prompt="Generate a todo app")


class TestRules:
    """Test rule registration and matching."""

    def test_get_rules_returns_insertion_order_copy(self, router: ProviderRouter) -> None:
        """Rules keep insertion order and callers get a copy."""
        first = rule("r1", "openai")
        second = rule("r1", "anthropic")
        router.register_rule(first)
        router.register_rule(second)

        rules = router.get_rules()
        rules.clear()

        assert router.get_rules() == [first, second]

    def test_absent_lists_match_anything(self) -> None:
        """A condition without lists matches every request."""
        assert RouteCondition().matches("codegen", "dev", "default")

    def test_every_present_list_must_match(self) -> None:
        """All present lists constrain the request."""
        condition = RouteCondition(env=["prod"], feature=["codegen", "docs"])

        assert condition.matches("docs", "prod", "anything")
        assert not condition.matches("docs", "dev", "anything")
        assert not condition.matches("bugfix", "prod", "anything")

    def test_first_matching_rule_wins(self, router: ProviderRouter) -> None:
        """The earlier-registered rule is used when several match."""
        router.register_rule(rule("broad", "openai", "gpt-4o-mini", env=["prod"]))
        router.register_rule(
            rule("narrow", "anthropic", "claude-3-haiku", env=["prod"], feature=["docs"])
        )

        target = router.resolve("docs", "prod", "default")

        assert target == RouteTarget(provider="openai", model="gpt-4o-mini")

    def test_resolve_without_match(self, router: ProviderRouter) -> None:
        """No match resolves to None (the default provider)."""
        router.register_rule(rule("prod-only", "openai", env=["prod"]))

        assert router.resolve("codegen", "dev", "default") is None

    def test_rule_weight_is_stored(self) -> None:
        """Rule weights are accepted and validated."""
        weighted = ProviderRouteRule(
            id="w", to=RouteTarget(provider="openai", model="m"), weight=2
        )
        assert weighted.weight == 2

        with pytest.raises(ValueError):
            ProviderRouteRule(
                id="w", to=RouteTarget(provider="openai", model="m"), weight=-1
            )


class TestGenerate:
    """Test request dispatch."""

    @pytest.mark.asyncio
    async def test_zero_rules_uses_default_provider(
        self, router: ProviderRouter, request_: LLMRequest
    ) -> None:
        """Without rules, requests go to the local provider."""
        response = await router.generate("codegen", "dev", "default", request_)

        assert response.provider == "local"
        assert response.model == "local-llm"

    @pytest.mark.asyncio
    async def test_matching_rule_dispatches_to_target(
        self, router: ProviderRouter, request_: LLMRequest
    ) -> None:
        """The matched rule's provider and concrete model are used."""
        router.register_rule(
            rule("smart", "anthropic", "claude-3-5-sonnet", model=["smart"])
        )

        response = await router.generate("codegen", "dev", "smart", request_)

        assert response.provider == "anthropic"
        assert response.model == "claude-3-5-sonnet"
        assert response.content.startswith("STUB(anthropic:claude-3-5-sonnet)::")

    @pytest.mark.asyncio
    async def test_positional_precedence_on_generate(
        self, router: ProviderRouter, request_: LLMRequest
    ) -> None:
        """Two matching rules: the first one's target answers."""
        router.register_rule(rule("a", "openai", "gpt-4o-mini", feature=["codegen"]))
        router.register_rule(rule("b", "anthropic", "claude-3-haiku", feature=["codegen"]))

        response = await router.generate("codegen", "prod", "default", request_)

        assert response.provider == "openai"

    @pytest.mark.asyncio
    async def test_unregistered_provider_fails(
        self, router: ProviderRouter, request_: LLMRequest
    ) -> None:
        """Routing to an unknown provider id raises."""
        router.register_rule(rule("azure", "azure-openai", "gpt-4o"))

        with pytest.raises(ProviderNotRegisteredError) as exc_info:
            await router.generate("codegen", "dev", "default", request_)

        assert exc_info.value.provider_id == "azure-openai"

    @pytest.mark.asyncio
    async def test_unregistered_default_provider_fails(
        self, request_: LLMRequest
    ) -> None:
        """A router without providers cannot fall back."""
        router = ProviderRouter(register_defaults=False)

        with pytest.raises(ProviderNotRegisteredError):
            await router.generate("codegen", "dev", "default", request_)

    @pytest.mark.asyncio
    async def test_register_provider_overwrites(
        self, router: ProviderRouter, request_: LLMRequest
    ) -> None:
        """Re-registering an id replaces the provider."""
        router.register_provider(StubProvider("local", "bigger-llm"))

        response = await router.generate("docs", "dev", "default", request_)

        assert response.model == "bigger-llm"
        assert router.get_provider("local") is not None

    @pytest.mark.asyncio
    async def test_provider_errors_propagate(
        self, router: ProviderRouter, request_: LLMRequest
    ) -> None:
        """The router does not retry or swallow provider failures."""
        router.register_provider(FailingProvider("local", "local-llm"))

        with pytest.raises(RuntimeError, match="Provider local unavailable"):
            await router.generate("docs", "dev", "default", request_)
