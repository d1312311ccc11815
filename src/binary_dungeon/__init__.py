"""Binary Dungeon - a turn-based roguelike about surviving a software release.

The player navigates procedurally generated floors, fights bugs, and
juggles two draining resources: Mental Health and Deadline. XP earned in a
run is invested into persistent tech stacks between runs.

The package is a deterministic turn-processing engine. Rendering, keyboard
input, save-file I/O and replays are left to the front end, which builds
GameEvents and calls process_turn.

Example:
    >>> from binary_dungeon import (
    ...     Direction, Move, StartGame, create_initial_game_state, process_turn
    ... )
    >>>
    >>> state = create_initial_game_state()
    >>> process_turn(state, StartGame())
    >>> process_turn(state, Move(direction=Direction.NORTH))
    >>> print(state.log[-1])

Modules:
    core: Configuration, logging, constants and exceptions.
    models: Pydantic V2 schemas for the dungeon, entities, events and state.
    engine: Generation, field of view, combat, enemy AI and the turn loop.
    progression: Tech-stack upgrades, XP accounting and titles.
    persistence: Save snapshot conversion.
"""

from __future__ import annotations

# Core
from binary_dungeon.core.config import Settings, get_settings
from binary_dungeon.core.exceptions import BinaryDungeonError
from binary_dungeon.core.logging import configure_logging, get_logger

# Models
from binary_dungeon.models import (
    Action,
    ActionType,
    Direction,
    FinishInvest,
    GameEvent,
    GamePhase,
    GameState,
    GenerationContext,
    InvestXp,
    Move,
    NewGame,
    StartGame,
    TechStackType,
    Wait,
    create_initial_game_state,
    parse_game_event,
)

# Engine
from binary_dungeon.engine import process_turn

# Persistence
from binary_dungeon.persistence import (
    SaveData,
    apply_save_data,
    extract_save_data,
    load_save_data_or_default,
    parse_save_data,
)


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "BinaryDungeonError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "ActionType",
    "Direction",
    "GamePhase",
    "TechStackType",
    "GenerationContext",
    "GameState",
    "create_initial_game_state",
    "GameEvent",
    "StartGame",
    "Move",
    "Action",
    "Wait",
    "InvestXp",
    "FinishInvest",
    "NewGame",
    "parse_game_event",
    # Engine
    "process_turn",
    # Persistence
    "SaveData",
    "extract_save_data",
    "parse_save_data",
    "load_save_data_or_default",
    "apply_save_data",
]
