"""Lightweight configuration for hex-tactics."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from hextactics.domain.enums import Side


class Settings(BaseSettings):
    """Minimal application settings."""

    model_config = SettingsConfigDict(
        env_prefix="HEXTACTICS_", env_file=".env", env_file_encoding="utf-8"
    )

    board_cols: int = Field(default=100, description="Board width in hexes", ge=1)
    board_rows: int = Field(default=80, description="Board height in hexes", ge=1)
    hex_size: float = Field(default=35.0, description="Hex radius in pixels", gt=0.0)
    structure_sight_range: int = Field(
        default=3, description="Sight radius projected by every structure", ge=0
    )
    ai_action_delay_seconds: float = Field(
        default=0.6,
        description="Pause before each hostile unit acts",
        ge=0.0,
    )
    ai_followup_delay_seconds: float = Field(
        default=0.3,
        description="Pause between a hostile unit's move and its follow-up attack",
        ge=0.0,
    )
    vision_side: Side = Field(
        default=Side.FRIENDLY, description="Side whose fog of war is tracked on the tiles"
    )
    log_level: str = Field(default="INFO", description="Logging level for the entrypoint")


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()
