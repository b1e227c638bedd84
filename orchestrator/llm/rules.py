"""Declarative routing rules."""

from pydantic import BaseModel, Field, field_validator


class RouteCondition(BaseModel):
    """Predicate of a routing rule.

    Every list that is present must contain the candidate value; an absent
    list matches anything.
    """

    env: list[str] | None = None
    feature: list[str] | None = None
    model: list[str] | None = None

    def matches(self, feature: str, env: str, model: str) -> bool:
        """Check whether a request satisfies this condition."""
        return (
            (self.env is None or env in self.env)
            and (self.feature is None or feature in self.feature)
            and (self.model is None or model in self.model)
        )


class RouteTarget(BaseModel):
    """Provider and concrete model a rule dispatches to."""

    provider: str
    model: str


class ProviderRouteRule(BaseModel):
    """Routing rule mapping a condition to a provider target."""

    id: str
    when: RouteCondition = Field(default_factory=RouteCondition)
    to: RouteTarget
    # Stored for weighted selection, not consumed by first-match routing
    weight: float | None = None

    @field_validator("weight")
    @classmethod
    def validate_weight(cls, v: float | None) -> float | None:
        """Validate rule weight."""
        if v is not None and v < 0:
            raise ValueError("Rule weight cannot be negative")
        return v
