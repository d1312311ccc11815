"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the Binary Dungeon test suite.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import pytest

from binary_dungeon.models import (
    DungeonMap,
    Enemy,
    EnemyVariant,
    GamePhase,
    GameState,
    GenerationContext,
    Position,
    TileType,
    create_enemy,
    create_player,
)


if TYPE_CHECKING:
    from collections.abc import Generator


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from binary_dungeon.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "BINARY_DUNGEON_DEBUG": "true",
        "BINARY_DUNGEON_LOG_LEVEL": "DEBUG",
        "BINARY_DUNGEON_GAME_RNG_SEED": "42",
        "BINARY_DUNGEON_GAME_LOG_CAPACITY": "50",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def ctx() -> GenerationContext:
    """Seeded generation context for reproducible tests."""
    return GenerationContext(seed=1234)


@pytest.fixture
def dungeon_factory() -> Callable[..., DungeonMap]:
    """Build a single open room: a wall border around floor.

    Returns:
        Factory taking ``width`` and ``height``.
    """

    def _build(width: int = 20, height: int = 10) -> DungeonMap:
        dungeon = DungeonMap.filled(width, height, TileType.WALL)
        for x, y, tile in dungeon.iter_tiles():
            if 0 < x < width - 1 and 0 < y < height - 1:
                tile.type = TileType.FLOOR
        return dungeon

    return _build


@pytest.fixture
def open_dungeon(dungeon_factory: Callable[..., DungeonMap]) -> DungeonMap:
    """A 20x10 open room."""
    return dungeon_factory()


@pytest.fixture
def exploring_state(open_dungeon: DungeonMap, ctx: GenerationContext) -> GameState:
    """An exploring state with the player at (5, 5), no enemies and no items.

    Returns:
        GameState ready for process_turn.
    """
    state = GameState(
        phase=GamePhase.EXPLORING,
        player=create_player(Position(x=5, y=5)),
        dungeon=open_dungeon,
    )
    state.attach_context(ctx)
    return state


@pytest.fixture
def enemy_factory(ctx: GenerationContext) -> Callable[..., Enemy]:
    """Create unscaled enemies at a given cell.

    Returns:
        Factory taking ``x``, ``y`` and optionally ``variant``.
    """

    def _build(x: int, y: int, variant: EnemyVariant = EnemyVariant.NULL_REF) -> Enemy:
        return create_enemy(ctx, variant, Position(x=x, y=y))

    return _build
