"""Pydantic V2 schemas for Binary Dungeon.

This module provides the data model layer: grid geometry, the dungeon map,
entities, input and render events, and the GameState aggregate root.

Submodules:
    enums: Closed vocabularies (TileType, EnemyVariant, GamePhase, etc.)
    geometry: Position, Direction, Manhattan distance
    dungeon: Tile, Rect, DungeonMap
    entities: Player, Enemy, Item, ActiveBuff, GenerationContext
    events: GameEvent and TurnEvent tagged unions
    game_state: Milestone, TechStacks, GameState

Example:
    >>> from binary_dungeon.models import GenerationContext, create_initial_game_state
    >>> state = create_initial_game_state(ctx=GenerationContext(seed=42))
    >>> state.phase
    <GamePhase.TITLE: 'title'>
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from binary_dungeon.models.enums import (
    ActionType,
    BuffType,
    EnemyVariant,
    GamePhase,
    ItemVariant,
    TechStackType,
    TileType,
    Visibility,
)

# =============================================================================
# Geometry & Dungeon
# =============================================================================
from binary_dungeon.models.geometry import Direction, Position
from binary_dungeon.models.dungeon import DungeonMap, Rect, Tile

# =============================================================================
# Entities
# =============================================================================
from binary_dungeon.models.entities import (
    ActiveBuff,
    Enemy,
    Entity,
    GenerationContext,
    Item,
    Player,
    create_enemy,
    create_item,
    create_player,
    enemy_attack_damage,
    random_enemy_variant,
    random_item_variant,
)

# =============================================================================
# Events
# =============================================================================
from binary_dungeon.models.events import (
    Action,
    FinishInvest,
    GameEvent,
    InvestXp,
    Move,
    NewGame,
    StartGame,
    TurnEvent,
    Wait,
    parse_game_event,
)

# =============================================================================
# Game State
# =============================================================================
from binary_dungeon.models.game_state import (
    GameState,
    Milestone,
    MilestoneRule,
    TechStacks,
    create_initial_game_state,
    milestone_rule,
)


__all__ = [
    # Enums
    "TileType",
    "Visibility",
    "EnemyVariant",
    "ItemVariant",
    "BuffType",
    "ActionType",
    "TechStackType",
    "GamePhase",
    # Geometry & Dungeon
    "Position",
    "Direction",
    "Tile",
    "Rect",
    "DungeonMap",
    # Entities
    "GenerationContext",
    "Entity",
    "Player",
    "Enemy",
    "Item",
    "ActiveBuff",
    "create_player",
    "create_enemy",
    "random_enemy_variant",
    "enemy_attack_damage",
    "create_item",
    "random_item_variant",
    # Events
    "GameEvent",
    "TurnEvent",
    "StartGame",
    "Move",
    "Action",
    "Wait",
    "InvestXp",
    "FinishInvest",
    "NewGame",
    "parse_game_event",
    # Game State
    "Milestone",
    "MilestoneRule",
    "milestone_rule",
    "TechStacks",
    "GameState",
    "create_initial_game_state",
]
