"""Custom exception hierarchy for Binary Dungeon.

Gameplay never raises: invalid moves and unaffordable actions are logged
rejections. The exceptions here cover structural problems only, such as
broken configuration, malformed save snapshots, or a dungeon that cannot be
generated at the requested size. All of them inherit from
BinaryDungeonError so callers can handle them at one boundary.

Example:
    >>> from binary_dungeon.core.exceptions import SaveDataError
    >>> raise SaveDataError("Invalid tech stack level", field_name="tech_stacks.go")
"""

from __future__ import annotations

from typing import Any


class BinaryDungeonError(Exception):
    """Base exception for all Binary Dungeon errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Game Engine Domain Exceptions
# =============================================================================


class GameEngineError(BinaryDungeonError):
    """Base exception for all game engine errors.

    Raised for structural engine failures, never for rejected player input.
    """


class DungeonGenerationError(GameEngineError):
    """Raised when a dungeon cannot be generated.

    This happens when the requested grid is too small to hold even a
    single room inside its outer wall.
    """

    def __init__(
        self,
        message: str,
        *,
        width: int | None = None,
        height: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize generation error with grid size context.

        Args:
            message: Human-readable error description.
            width: Requested grid width.
            height: Requested grid height.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if width is not None:
            combined_details["width"] = width
        if height is not None:
            combined_details["height"] = height
        super().__init__(message, details=combined_details)


class InvalidGameStateError(GameEngineError):
    """Raised when a game state is used in a phase that cannot support it.

    The turn loop itself treats phase mismatches as no-ops; this error is
    for helpers that require a specific phase to be meaningful.
    """

    def __init__(
        self,
        message: str,
        *,
        current_state: str | None = None,
        expected_states: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize invalid game state error with state context.

        Args:
            message: Human-readable error description.
            current_state: The current phase identifier.
            expected_states: List of phases that were expected.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if current_state:
            combined_details["current_state"] = current_state
        if expected_states:
            combined_details["expected_states"] = expected_states
        super().__init__(message, details=combined_details)


# =============================================================================
# Persistence Domain Exceptions
# =============================================================================


class PersistenceError(BinaryDungeonError):
    """Base exception for save snapshot errors."""


class SaveDataError(PersistenceError):
    """Raised when a persisted snapshot cannot be interpreted."""

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize save data error with field context.

        Args:
            message: Human-readable error description.
            field_name: Snapshot field that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        super().__init__(message, details=combined_details)


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(BinaryDungeonError):
    """Raised when application configuration is invalid.

    This includes invalid environment values or incompatible settings.
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(BinaryDungeonError):
    """Raised when data validation fails outside of pydantic models."""

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


__all__ = [
    # Base exception
    "BinaryDungeonError",
    # Game engine exceptions
    "GameEngineError",
    "DungeonGenerationError",
    "InvalidGameStateError",
    # Persistence exceptions
    "PersistenceError",
    "SaveDataError",
    # Configuration exceptions
    "ConfigurationError",
    "ValidationError",
]
