"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from bildval.domain.game import GameRules

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    catalog_dir: Path = Path("data/catalog")
    environment: str = _ENVIRONMENT
    log_level: str = "INFO"
    max_rounds: int = 10
    max_passes: int = 3
    max_multiplier: int = 5
    base_points: int = 10
    word_sample_distinct: bool = False
    random_seed: int | None = None
    session_ttl_seconds: int = 1800

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def game_rules(self) -> GameRules:
        """Build the session rules from settings."""
        return GameRules(
            max_rounds=self.max_rounds,
            max_passes=self.max_passes,
            max_multiplier=self.max_multiplier,
            base_points=self.base_points,
        )
