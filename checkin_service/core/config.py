"""Application configuration via environment variables."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or .env file."""
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Application
    app_name: str = "Event Check-in"
    debug: bool = False
    log_file: str | None = None  # Log to stderr when unset

    # Server
    host: str = "0.0.0.0"
    port: int = 5044
    allowed_origins: str = "*"  # Comma-separated origins, or "*" for all

    # Shared secret for the bearer-token guard; auth is disabled when unset
    token: str | None = None

    # Attendee pagination
    default_page_limit: int = 20
    max_page_limit: int | None = None  # No cap when unset

    # JSON file with events to load instead of the built-in seed
    seed_path: Path | None = None


settings = Settings()
