"""Built-in prompt templates."""

from orchestrator.prompts.models import (
    EnvironmentOverride,
    PromptTemplate,
    PromptVariant,
    PromptVersion,
)

CODEGEN_APP = PromptTemplate(
    name="codegen.app",
    description="Frontend+Backend code generation",
    tags=["codegen", "app"],
    versions=[
        PromptVersion(
            version="1.0.0",
            variants=[
                PromptVariant(
                    id="A",
                    content="Generate app: name={{name}} desc={{description}}",
                ),
                PromptVariant(
                    id="B",
                    weight=0.5,
                    content="Build full stack app for: {{description}}",
                ),
            ],
        )
    ],
    environment_overrides=[EnvironmentOverride(env="dev", merge={"name": "DevApp"})],
)

DOCS_README = PromptTemplate(
    name="docs.readme",
    description="Project README generation",
    tags=["docs"],
    versions=[
        PromptVersion(
            version="1.0.0",
            variants=[
                PromptVariant(
                    id="A",
                    content="Write a README for {{name}}: {{description}}",
                ),
            ],
        )
    ],
)

AGENT_BUGFIX = PromptTemplate(
    name="agents.bugfix",
    description="Bugfix agent pass over generated artifacts",
    tags=["agents", "bugfix"],
    versions=[
        PromptVersion(
            version="1.0.0",
            variants=[
                PromptVariant(
                    id="A",
                    content="Fix the following issue in the {{target}} artifacts: {{issue}}",
                ),
            ],
        )
    ],
)

DEFAULT_TEMPLATES: list[PromptTemplate] = [CODEGEN_APP, DOCS_README, AGENT_BUGFIX]
