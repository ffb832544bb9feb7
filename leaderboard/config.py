"""
Runtime settings, read from ``LEADERBOARD_*`` environment variables.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Storage location, listen address and the ambient knobs."""

    model_config = SettingsConfigDict(env_prefix="LEADERBOARD_", env_file=".env", extra="ignore")

    database_url: str = "sqlite:///./database.db"
    host: str = "127.0.0.1"
    port: int = 3000
    log_level: str = "INFO"

    # CORS — allow the Vite dev server
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:5174",
        "http://127.0.0.1:5174",
    ]

    rate_limit_enabled: bool = True
    submit_rate_limit: str = "30/minute"
    read_rate_limit: str = "120/minute"


@lru_cache
def get_settings() -> Settings:
    return Settings()
