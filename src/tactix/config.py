"""Configuration management using Pydantic settings."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runner settings loaded from ``TACTIX_*`` environment variables.

    Per-scenario simulation parameters (seed, tick rate, movement step) live
    in the scenario file, not here.
    """

    model_config = SettingsConfigDict(
        env_prefix="TACTIX_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = "INFO"

    # Runner
    scenario_path: str = ""             # used when no scenario argument is given
    max_ticks: int = 1000               # safety stop for battles that never end
    tick_sleep: Optional[float] = None  # seconds between ticks; None = 1 / tick_rate
