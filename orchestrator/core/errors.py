"""Exception taxonomy for the orchestration core."""


class OrchestratorError(Exception):
    """Base class for orchestration errors."""


class HandlerNotFoundError(OrchestratorError):
    """Raised when a job type has no registered handler."""

    def __init__(self, job_type: str) -> None:
        self.job_type = job_type
        super().__init__(f"No handler registered for type {job_type}")


class JobNotFoundError(OrchestratorError):
    """Raised when a job id is unknown to the queue."""

    def __init__(self, job_id: str) -> None:
        self.job_id = job_id
        super().__init__(f"Job not found: {job_id}")


class JobCancelledError(OrchestratorError):
    """Raised inside a handler once its job has been canceled."""

    def __init__(self, job_id: str) -> None:
        self.job_id = job_id
        super().__init__(f"Job canceled: {job_id}")


class TemplateNotFoundError(OrchestratorError):
    """Raised when a prompt template cannot be rendered."""

    def __init__(self, name: str, reason: str | None = None) -> None:
        self.name = name
        message = f"Prompt template not found: {name}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class TemplateVersionNotFoundError(TemplateNotFoundError):
    """Raised when a requested template version label does not exist."""

    def __init__(self, name: str, version: str) -> None:
        self.version = version
        super().__init__(name, f"no version {version}")


class ProviderNotRegisteredError(OrchestratorError):
    """Raised when dispatch resolves to an unknown provider id."""

    def __init__(self, provider_id: str) -> None:
        self.provider_id = provider_id
        super().__init__(f"Provider not registered: {provider_id}")
