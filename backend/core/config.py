"""
Application configuration.

Values come from environment variables (or a local ``.env`` file) so that
deployments can override database location, logging and booking defaults
without code changes.
"""

from functools import lru_cache
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False
    )

    # Database Configuration
    database_url: str = "sqlite:///./dinebook.db"
    log_sql_queries: bool = False

    # Environment Settings
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # API
    cors_origins: List[str] = ["http://localhost:8081"]

    # Booking engine
    booking_commit_attempts: int = 3  # re-validation passes after a lost CAS
    confirmation_code_length: int = 6

    # Defaults applied when staff save a config without these fields
    default_capacity_per_slot: int = 20
    default_advance_booking_days: int = 30
    default_table_turning_time: int = 90  # minutes

    # Localization
    default_language: str = "en"

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("booking_commit_attempts", "confirmation_code_length")
    @classmethod
    def validate_positive(cls, v):
        if v < 1:
            raise ValueError("must be at least 1")
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "development"


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Returns:
        Settings instance with environment variables loaded
    """
    return Settings()


# Export settings instance for easy import
settings = get_settings()


def validate_production_config():
    """Validate configuration for production deployment."""
    if settings.is_production:
        issues = []

        if settings.debug:
            issues.append("DEBUG is enabled in production")

        if settings.database_url.startswith("sqlite"):
            issues.append("SQLite database configured in production")

        if issues:
            raise ValueError(
                f"Production configuration issues detected: {', '.join(issues)}"
            )


# Validate on import if in production
if settings.is_production:
    validate_production_config()
