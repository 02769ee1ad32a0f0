"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - config_path points at the provisioned event document; the service never creates it

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all settings: works out-of-the-box against data/event.json
"""

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Storage
    config_path: Path = Path("data/event.json")

    @field_validator("config_path", mode="before")
    @classmethod
    def expand_user(cls, v: object) -> object:
        """Allow ~ in CONFIG_PATH."""
        if isinstance(v, str):
            return Path(v).expanduser()
        return v

    # API
    cors_origins: list[str] = [
        "http://localhost:5173", "http://127.0.0.1:5173",
    ]
    service_name: str = "event-countdown-api"
    service_version: str = "1.0.0"

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
