"""Application Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - Data and key locations come from settings, never hardcoded in modules
    - get_settings() is cached (lru_cache) - single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Relative defaults (data/, secrets/) resolve against the process working directory
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    environment: str = "development"
    port: int = 3000

    # Persistence - one JSON file per collection
    data_dir: Path = Path("data")

    # RSA key pair for the payload endpoints
    secrets_dir: Path = Path("secrets")

    # API
    cors_origins: list[str] = ["*"]
    docs_url: str = "/api-docs"

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
