"""Application configuration via pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """A required configuration value is missing or malformed."""


class Settings(BaseSettings):
    """Application settings loaded from SLACK2NOTION_* environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_prefix="SLACK2NOTION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # SSM parameter holding {"notion": {"token": ..., "database_id": ...}}
    parameter_store_id: str = ""

    # App
    environment: str = "development"
    log_level: str = "INFO"
    port: int = 8080

    def require_parameter_store_id(self) -> str:
        """Return the parameter store id, raising ConfigurationError if unset."""
        if not self.parameter_store_id:
            raise ConfigurationError(
                "SLACK2NOTION_PARAMETER_STORE_ID is not configured in environment"
            )
        return self.parameter_store_id


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings. Lazy initialization to avoid import-time errors."""
    return Settings()
