from __future__ import annotations

from functools import lru_cache

from pydantic import NonNegativeInt, PositiveInt
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the demo host loop.

    Values are loaded from ``FRAME_EVENTS_*`` environment variables by default
    and may be overridden via CLI flags by the application entrypoint. The
    dispatcher itself takes no configuration.
    """

    # Frame loop
    # 0 disables pacing: frames run back to back.
    frame_rate_hz: NonNegativeInt = 60
    max_frames: PositiveInt | None = 120

    # Logging; falls back to LOG_LEVEL when unset.
    log_level: str | None = None

    # Demo scenario
    demo_health: PositiveInt = 30
    demo_damage: PositiveInt = 10

    # pydantic-settings v2 configuration
    model_config = SettingsConfigDict(
        env_prefix="FRAME_EVENTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
