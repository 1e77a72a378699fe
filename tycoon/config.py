"""
Game configuration settings.

`GameConfig` carries the numeric rule constants the engine reads. The values
can be overridden from the environment through `EngineSettings`
(prefix: TYCOON_), e.g. TYCOON_STARTING_FUNDS=2000.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True)
class GameConfig:
    """Configuration for a game."""

    starting_funds: int = 1500
    pass_start_bonus: int = 200
    jail_fine: int = 50
    max_jail_turns: int = 3
    max_upgrade_level: int = 5
    max_consecutive_doubles: int = 3
    max_logs: int = 6
    mortgage_interest_rate: float = 0.10
    default_tax: int = 100

    seed: Optional[int] = None

    @classmethod
    def from_settings(cls, settings: Optional["EngineSettings"] = None) -> "GameConfig":
        """Build a config from environment-backed settings."""
        settings = settings or get_engine_settings()
        return cls(
            starting_funds=settings.starting_funds,
            pass_start_bonus=settings.pass_start_bonus,
            jail_fine=settings.jail_fine,
            max_jail_turns=settings.max_jail_turns,
            max_logs=settings.max_logs,
            mortgage_interest_rate=settings.mortgage_interest_rate,
            seed=settings.seed,
        )


class EngineSettings(BaseSettings):
    """
    Environment overrides for the rule constants.

    Environment variables (prefix: TYCOON_):
        TYCOON_STARTING_FUNDS          - Funds each player starts with (default: 1500)
        TYCOON_PASS_START_BONUS        - Bonus for passing the start tile (default: 200)
        TYCOON_JAIL_FINE               - Fine paid to leave jail (default: 50)
        TYCOON_MAX_JAIL_TURNS          - Failed attempts before the fine is forced (default: 3)
        TYCOON_MAX_LOGS                - Size of the rolling log (default: 6)
        TYCOON_MORTGAGE_INTEREST_RATE  - Interest added when redeeming (default: 0.10)
        TYCOON_SEED                    - Optional dice seed
        TYCOON_LOG_LEVEL               - Python logging level for the engine (default: WARNING)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="TYCOON_",
    )

    starting_funds: int = Field(default=1500, ge=0, description="Funds each player starts with.")
    pass_start_bonus: int = Field(default=200, ge=0, description="Bonus for passing the start tile.")
    jail_fine: int = Field(default=50, ge=0, description="Fine paid to leave jail.")
    max_jail_turns: int = Field(default=3, ge=1, description="Failed attempts before the fine is forced.")
    max_logs: int = Field(default=6, ge=1, description="Number of log lines kept in the game state.")
    mortgage_interest_rate: float = Field(
        default=0.10,
        ge=0,
        description="Interest added on top of the mortgage value when redeeming.",
    )
    seed: Optional[int] = Field(default=None, description="Dice seed for reproducible games.")
    log_level: str = Field(default="WARNING", description="Logging level for the tycoon package.")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: Optional[str]) -> str:
        """Upper-case the level name and fall back to WARNING when empty."""
        if not value:
            return "WARNING"
        value = str(value).upper()
        if value not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return value


@lru_cache
def get_engine_settings() -> EngineSettings:
    """Return cached engine settings instance."""
    return EngineSettings()


def configure_logging(settings: Optional[EngineSettings] = None) -> None:
    """Apply the configured level to the package logger."""
    settings = settings or get_engine_settings()
    logging.getLogger("tycoon").setLevel(settings.log_level)
