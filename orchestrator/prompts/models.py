"""Prompt template models."""

from datetime import UTC, datetime

from pydantic import BaseModel, Field, field_validator


class PromptVariant(BaseModel):
    """One weighted alternative content within a version."""

    id: str
    weight: float = Field(default=1.0, ge=0)
    content: str


class PromptVersion(BaseModel):
    """A labelled set of variants."""

    version: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    variants: list[PromptVariant] = Field(default_factory=list)

    @field_validator("variants")
    @classmethod
    def validate_unique_ids(cls, v: list[PromptVariant]) -> list[PromptVariant]:
        """Variant ids must be unique within a version."""
        ids = [variant.id for variant in v]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"Duplicate variant ids: {', '.join(duplicates)}")
        return v


class EnvironmentOverride(BaseModel):
    """Per-environment full replacement or placeholder merge."""

    env: str
    content: str | None = None
    merge: dict[str, str] | None = None


class PromptTemplate(BaseModel):
    """Named, versioned prompt definition."""

    name: str
    description: str | None = None
    tags: list[str] = Field(default_factory=list)
    versions: list[PromptVersion] = Field(default_factory=list)
    environment_overrides: list[EnvironmentOverride] = Field(default_factory=list)

    @property
    def current_version(self) -> PromptVersion | None:
        """The most recently added version."""
        return self.versions[-1] if self.versions else None

    def find_version(self, label: str) -> PromptVersion | None:
        """Find a version by label; the last one wins on duplicates."""
        for version in reversed(self.versions):
            if version.version == label:
                return version
        return None

    def find_override(self, env: str) -> EnvironmentOverride | None:
        """Find the first override for an environment."""
        for override in self.environment_overrides:
            if override.env == env:
                return override
        return None


class RenderedPrompt(BaseModel):
    """Final prompt content and how it was resolved."""

    name: str
    version: str
    variant: str
    env: str
    content: str
