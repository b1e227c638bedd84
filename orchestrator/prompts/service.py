"""Prompt template storage and rendering."""

import random
from collections.abc import Mapping, Sequence
from typing import Protocol

from orchestrator.core.errors import TemplateNotFoundError, TemplateVersionNotFoundError
from orchestrator.core.logging import get_logger
from orchestrator.core.metrics import PROMPT_RENDERS
from orchestrator.prompts.defaults import DEFAULT_TEMPLATES
from orchestrator.prompts.models import PromptTemplate, PromptVariant, RenderedPrompt

logger = get_logger().bind(module="prompt_service")


class RandomSource(Protocol):
    """Source of uniform floats in [0, 1); ``random.Random`` satisfies it."""

    def random(self) -> float: ...


def pick_weighted(variants: Sequence[PromptVariant], rng: RandomSource) -> PromptVariant:
    """Pick a variant with probability proportional to its weight.

    Draws ``r`` in ``[0, total)`` and walks the list subtracting weights until
    the remainder drops to zero or below. Falls back to the first variant.
    """
    total = sum(variant.weight for variant in variants)
    remainder = rng.random() * total
    for variant in variants:
        remainder -= variant.weight
        if remainder <= 0:
            return variant
    return variants[0]


def substitute(content: str, values: Mapping[str, str]) -> str:
    """Replace every ``{{key}}`` token named in values."""
    for key, value in values.items():
        content = content.replace("{{" + key + "}}", value)
    return content


class PromptService:
    """In-memory prompt template registry and renderer."""

    def __init__(self, rng: RandomSource | None = None) -> None:
        """Initialize service.

        Args:
            rng: Random source for variant selection, seeded in tests
        """
        self._rng: RandomSource = rng or random.Random()
        self._templates: dict[str, PromptTemplate] = {}

    def upsert_template(self, template: PromptTemplate) -> None:
        """Store a template, replacing any template with the same name."""
        self._templates[template.name] = template
        logger.debug("Upserted prompt template", template=template.name)

    def get_template(self, name: str) -> PromptTemplate | None:
        """Get a template by name."""
        return self._templates.get(name)

    def list_templates(self) -> list[PromptTemplate]:
        """List all templates in registration order."""
        return list(self._templates.values())

    def render(
        self,
        name: str,
        env: str,
        placeholders: Mapping[str, str] | None = None,
        version: str | None = None,
    ) -> RenderedPrompt:
        """Render a template for an environment.

        Args:
            name: Template name
            env: Environment whose override applies
            placeholders: Values substituted after the override merge; a
                key also named by the merge map takes the caller's value
            version: Optional version label, defaults to the last version

        Returns:
            Rendered prompt

        Raises:
            TemplateNotFoundError: If the template is unknown or has nothing
                to render
            TemplateVersionNotFoundError: If the version label is unknown
        """
        template = self._templates.get(name)
        if template is None:
            raise TemplateNotFoundError(name)

        if version is None:
            selected = template.current_version
            if selected is None:
                raise TemplateNotFoundError(name, "no versions")
        else:
            selected = template.find_version(version)
            if selected is None:
                raise TemplateVersionNotFoundError(name, version)

        if not selected.variants:
            raise TemplateNotFoundError(name, f"version {selected.version} has no variants")

        variant = pick_weighted(selected.variants, self._rng)
        content = variant.content

        override = template.find_override(env)
        if override is not None:
            if override.content:
                content = override.content
            if override.merge:
                # Keys the caller re-specifies are left for the caller's value
                merge = {
                    key: value
                    for key, value in override.merge.items()
                    if not placeholders or key not in placeholders
                }
                content = substitute(content, merge)

        if placeholders:
            content = substitute(content, placeholders)

        PROMPT_RENDERS.labels(template=name, variant=variant.id).inc()
        return RenderedPrompt(
            name=template.name,
            version=selected.version,
            variant=variant.id,
            env=env,
            content=content,
        )

    def seed_defaults(self) -> None:
        """Register the built-in templates."""
        for template in DEFAULT_TEMPLATES:
            self.upsert_template(template.model_copy(deep=True))
