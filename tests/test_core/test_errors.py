"""Tests for the exception taxonomy."""

import pytest

from orchestrator.core.errors import (
    HandlerNotFoundError,
    JobCancelledError,
    JobNotFoundError,
    OrchestratorError,
    ProviderNotRegisteredError,
    TemplateNotFoundError,
    TemplateVersionNotFoundError,
)


@pytest.mark.parametrize(
    "error,message",
    [
        (HandlerNotFoundError("ghost"), "No handler registered for type ghost"),
        (JobNotFoundError("j1"), "Job not found: j1"),
        (JobCancelledError("j1"), "Job canceled: j1"),
        (TemplateNotFoundError("t"), "Prompt template not found: t"),
        (
            TemplateVersionNotFoundError("t", "2"),
            "Prompt template not found: t (no version 2)",
        ),
        (ProviderNotRegisteredError("p"), "Provider not registered: p"),
    ],
)
def test_error_messages(error: OrchestratorError, message: str) -> None:
    """Each error renders its key and derives from OrchestratorError."""
    assert isinstance(error, OrchestratorError)
    assert str(error) == message


def test_version_error_is_template_error() -> None:
    """Unknown versions can be caught as missing templates."""
    with pytest.raises(TemplateNotFoundError):
        raise TemplateVersionNotFoundError("t", "9")
