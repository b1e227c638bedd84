"""Application configuration."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Orchestrator settings.

    Environment variables will be loaded and validated using Pydantic.
    """

    APP_NAME: str = "Generation Orchestrator"
    VERSION: str = "0.1.0"

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    JSON_LOGS: bool = True

    # Job Queue Settings
    JOB_MAX_ATTEMPTS: int = Field(default=3, ge=1)
    JOB_BACKOFF_SECONDS: float = Field(default=1.0, ge=0)
    JOB_WORKER_COUNT: int = Field(default=1, ge=1)

    # Routing Settings
    DEFAULT_PROVIDER: str = "local"
    DEFAULT_ENVIRONMENT: str = "dev"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


# Create settings instance
settings = Settings()
