"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache): single instance per process
    - tier_one_size >= end_candidates and tier_two_size >= 1 (a default fill must serve initGame)

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Tier view thresholds are settings (500 / 200 by default), not constants
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database (article cache)
    database_url: str = "sqlite+aiosqlite:///./wikitrains.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Wikipedia (article source)
    wikipedia_api_url: str = "https://en.wikipedia.org/w/api.php"
    wikipedia_user_agent: str = "WikiTrains/1.0 (trivia game server)"
    wikipedia_timeout_seconds: float = 10.0
    random_batch_size: int = 500
    links_limit: int = 500
    pageview_days: int = 5

    # Article pool (fill-cache defaults; games draw from what is stored)
    tier_one_size: int = 100
    tier_two_size: int = 10
    tier_one_min_views: int = 500
    tier_two_min_views: int = 200
    max_candidate_batches: int = 50
    max_link_candidates: int = 60

    # Gameplay
    end_candidates: int = 8
    choices_per_move: int = 3
    choice_min_views: int = 0

    # API
    cors_origins: list[str] = ["http://localhost:8080"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @model_validator(mode="after")
    def check_pool_sizes(self) -> "Settings":
        if self.tier_one_size < self.end_candidates:
            raise ValueError(
                f"tier_one_size must be at least {self.end_candidates}",
            )
        if self.tier_two_size < 1:
            raise ValueError("tier_two_size must be at least 1")
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
