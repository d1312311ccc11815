"""Configuration management for Binary Dungeon.

This module provides centralized configuration using pydantic-settings,
supporting environment variables and .env files. Game rules themselves are
fixed constants (see binary_dungeon.core.constants); settings only cover
runtime concerns such as logging and optional RNG seeding.

Example:
    >>> from binary_dungeon.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.app_name)
    'Binary Dungeon'

Environment Variables:
    BINARY_DUNGEON_DEBUG: Enable debug mode
    BINARY_DUNGEON_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    BINARY_DUNGEON_LOG_JSON: Emit JSON log lines
    BINARY_DUNGEON_GAME_RNG_SEED: Seed dungeon and spawn randomness
    BINARY_DUNGEON_GAME_LOG_CAPACITY: Number of in-game messages kept
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from binary_dungeon.core.constants import LOG_CAPACITY
from binary_dungeon.core.exceptions import ConfigurationError


class GameSettings(BaseSettings):
    """Configuration for game engine behavior.

    Attributes:
        rng_seed: Seed for the generation context. None draws fresh entropy
            for every run, which is the normal way to play.
        log_capacity: Maximum number of in-game log messages kept.
    """

    model_config = SettingsConfigDict(
        env_prefix="BINARY_DUNGEON_GAME_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    rng_seed: int | None = Field(
        default=None,
        description="Optional seed for reproducible dungeons",
    )
    log_capacity: int = Field(
        default=LOG_CAPACITY,
        ge=10,
        le=1000,
        description="In-game log capacity",
    )


class Settings(BaseSettings):
    """Main application settings.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        log_json: Render diagnostic logs as JSON.
        game: Game engine settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="BINARY_DUNGEON_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="Binary Dungeon",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Emit JSON log lines",
    )

    game: GameSettings = Field(default_factory=GameSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode.

        Returns:
            True if not in debug mode.
        """
        return not self.debug


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is invalid.
    """
    try:
        return Settings()
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "GameSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
