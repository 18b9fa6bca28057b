from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "Gestion Humana Portal"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"
    log_level: str = "INFO"
    database_url: str = "postgresql+asyncpg://hr_portal:hr_portal@db:5432/hr_portal"
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:8000"]

    # Python weekday numbers (Monday=0 ... Sunday=6) excluded from vacation day counts.
    rest_weekdays: list[int] = [6]

    # Longest range, in calendar days, accepted for a vacation request, preview or window.
    max_request_days: int = 366

    # Comma-separated addresses that receive new-request e-mails.
    notification_recipients: str = ""


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return cached settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
