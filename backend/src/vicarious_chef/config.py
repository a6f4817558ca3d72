"""Application configuration via pydantic-settings."""

from functools import lru_cache
from typing import Optional

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API Settings
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS - comma-separated origins (env var: CORS_ORIGINS)
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    @computed_field
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # Challenge catalog override (JSON file); empty uses the built-in catalog
    challenge_catalog_path: str = ""

    # Lobby defaults
    default_room_id: str = "KITCHEN-101"
    team_a_name: str = "Team Basil"
    team_b_name: str = "Team Thyme"

    # Countdown scheduling (host-owned, the engine only reacts to ticks)
    tick_interval_seconds: float = 1.0
    auto_countdown: bool = True

    # Roster capacity per team; None means unlimited
    max_team_size: Optional[int] = None

    # Diagnostics
    match_diagnostics: bool = False
    diagnostics_dir: str = "logs/matches"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
