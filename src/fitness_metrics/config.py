"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    import_max_rows: int = 5000
    import_max_workers: int = 4
    import_retry_attempts: int = 1
    import_retry_delay_seconds: float = 0.3
    default_steps_goal: int = 10000
    default_weekly_workout_goal: int = 4
    streak_lookback_days: int = 365
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
