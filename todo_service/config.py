"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - Core classes never read settings; the lifespan passes values in

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for every setting: works out-of-the-box on a developer machine
    - Poll interval configurable: leveled coalescing semantics hold for any interval > 0
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from todo_service.core.domain_types import DEFAULT_POLL_INTERVAL_SECONDS


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Watch
    watch_poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS

    @field_validator("watch_poll_interval_seconds")
    @classmethod
    def check_positive_interval(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("watch_poll_interval_seconds must be > 0")
        return v

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
