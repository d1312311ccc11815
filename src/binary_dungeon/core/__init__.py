"""Core module providing configuration, logging, constants, and exceptions.

Exports:
    Exceptions:
        BinaryDungeonError: Base exception for all application errors.
        ConfigurationError: Configuration-related errors.
        DungeonGenerationError: Grid too small to generate a dungeon.
        SaveDataError: Malformed persisted snapshot.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from binary_dungeon.core.config import (
    GameSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from binary_dungeon.core.exceptions import (
    BinaryDungeonError,
    ConfigurationError,
    DungeonGenerationError,
    GameEngineError,
    InvalidGameStateError,
    PersistenceError,
    SaveDataError,
    ValidationError,
)
from binary_dungeon.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


__all__ = [
    # Exceptions
    "BinaryDungeonError",
    "ConfigurationError",
    "ValidationError",
    "GameEngineError",
    "DungeonGenerationError",
    "InvalidGameStateError",
    "PersistenceError",
    "SaveDataError",
    # Configuration
    "Settings",
    "GameSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
