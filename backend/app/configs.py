"""Application settings loaded from environment variables.

Defines all environment-driven configuration used by the app.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed configuration model for the application."""

    # Database configuration
    DATABASE_URL: str = "sqlite:///./salescrm.db"

    # Logging
    LOG_LEVEL: str = "INFO"

    # Local calendar used for "today" windows and daily stats keys
    TIMEZONE: str = "Europe/Berlin"
    SHOW_UP_WINDOW_DAYS: int = 7

    # API parameters
    ROOT_PATH_BACKEND: str = ""
    ALLOWED_ORIGINS: list[str] = ["*"]
    SEED_MOCK_DATA: bool = True

    # Daily stats refresher
    BACKEND_HOST: str = "localhost:3001"
    STATS_REFRESH_SECONDS: int = 300

    # Later files take priority; the repository root .env is read first.
    model_config = SettingsConfigDict(env_file=("../../.env", ".env"), extra="ignore")


settings = Settings()
