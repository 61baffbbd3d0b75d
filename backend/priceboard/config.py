"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - catalog_timeout_seconds=None means no timeout is enforced on catalog calls

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for every setting: works out-of-the-box against the public catalog
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Card catalog
    catalog_base_url: str = "https://api.scryfall.com"
    catalog_timeout_seconds: float | None = None
    catalog_user_agent: str = "priceboard/1.0"

    @field_validator("catalog_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    # Aggregation
    min_price_eur: str = "0.01"
    excluded_set_types: list[str] = ["alchemy", "token", "memorabilia"]

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
