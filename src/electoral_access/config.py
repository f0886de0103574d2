"""Package configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from electoral_access.core.constants import DEFAULT_PROBLEM_BASE_URL, LOG_LEVELS


class Settings(BaseSettings):
    """Settings loaded from ``ELECTORAL_ACCESS_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ELECTORAL_ACCESS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = "development"  # development, staging, production

    # Observability
    log_level: str = "INFO"
    log_json: bool | None = None
    log_access_attempts: bool = True

    # Problem details rendering
    problem_base_url: str = DEFAULT_PROBLEM_BASE_URL

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize the log level and reject unknown names.

        Raises:
            ValueError: If the level is not a standard logging level
        """
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(
                f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {v!r}"
            )
        return level

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def render_json(self) -> bool:
        """Whether logs are rendered as JSON.

        Defaults to JSON in production and console output elsewhere.
        """
        if self.log_json is None:
            return self.is_production
        return self.log_json


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
