"""Game rule constants for Binary Dungeon.

Every fixed number the engine relies on lives here, so balance changes
touch one file. Values keyed by variant name use the string values of the
enums in binary_dungeon.models.enums.
"""

from __future__ import annotations

GAME_TITLE = "BINARY DUNGEON"

# =============================================================================
# Dungeon
# =============================================================================

DUNGEON_WIDTH = 50
"""Dungeon grid width in tiles."""

DUNGEON_HEIGHT = 20
"""Dungeon grid height in tiles."""

BSP_MIN_ROOM_SIZE = 4
"""Minimum room edge; also drives the BSP split legality threshold."""

BSP_MAX_ROOM_WIDTH = 10
"""Upper clamp for room width."""

BSP_MAX_ROOM_HEIGHT = 8
"""Upper clamp for room height."""

BSP_SPLIT_DEPTH = 5
"""Recursion depth of the binary space partition."""

# =============================================================================
# Visibility & Detection
# =============================================================================

FOV_RADIUS = 8
"""Shadow-casting radius around the player."""

ENEMY_DETECTION_RADIUS = 10
"""Manhattan distance beyond which enemies idle."""

GOOGLE_IT_RADIUS = 15
"""Manhattan radius revealed by Google It."""

SPAWN_MIN_DISTANCE = 5
"""Minimum Manhattan distance between the player start and an enemy spawn."""

# =============================================================================
# Player Resources
# =============================================================================

INITIAL_MH = 80
"""Starting and maximum Mental Health."""

INITIAL_DL = 50
"""Starting and maximum Deadline."""

DL_DECAY_PER_TURN = 1
"""Deadline lost at the end of every turn."""

BURNOUT_DAMAGE_PER_TURN = 2
"""Mental Health lost per turn while in burnout."""

BURNOUT_ENEMY_MULTIPLIER = 1.5
"""Enemy attack multiplier while in burnout."""

PLAYER_NAME = "Dev_User"

# =============================================================================
# Actions
# =============================================================================

ACTION_COSTS = {
    "debug": {"mh": 5, "dl": 0},
    "hotfix": {"mh": 15, "dl": 0},
    "google_it": {"mh": 0, "dl": 5},
    "refactor": {"mh": 0, "dl": 3},
}

DEBUG_DAMAGE = 10
HOTFIX_DAMAGE = 30
REFACTOR_DEFENSE = 0.5
REFACTOR_HEAL = 5

# =============================================================================
# Enemies
# =============================================================================

ENEMY_BASE_STATS = {
    "Segfault": {"hp": 15, "attack": 8, "xp": 10},
    "NullRef": {"hp": 10, "attack": 5, "xp": 7},
    "OffByOne": {"hp": 8, "attack": 3, "xp": 5},
    "RaceCondition": {"hp": 20, "attack": 10, "xp": 15},
    "MemoryLeak": {"hp": 25, "attack": 6, "xp": 12},
    "InfiniteLoop": {"hp": 12, "attack": 7, "xp": 8},
}

DEFAULT_ENEMY_COUNT = 3
DEFAULT_ENEMY_MULTIPLIER = 1.0
DEFAULT_DL_BONUS = 10

# =============================================================================
# Milestones
# =============================================================================

MILESTONE_TABLE = [
    {"enemy_count": 3, "hp_mult": 1.0, "atk_mult": 1.0, "dl_bonus": 0},
    {"enemy_count": 4, "hp_mult": 1.2, "atk_mult": 1.1, "dl_bonus": 5},
    {"enemy_count": 5, "hp_mult": 1.4, "atk_mult": 1.2, "dl_bonus": 10},
    {"enemy_count": 6, "hp_mult": 1.7, "atk_mult": 1.3, "dl_bonus": 10},
    {"enemy_count": 7, "hp_mult": 2.0, "atk_mult": 1.5, "dl_bonus": 15},
    {"enemy_count": 8, "hp_mult": 2.3, "atk_mult": 1.7, "dl_bonus": 15},
    {"enemy_count": 10, "hp_mult": 2.8, "atk_mult": 2.0, "dl_bonus": 20},
]
"""Per-floor spawn rules, indexed by floor - 1. Later floors use the defaults."""

MILESTONE_DL_RESTORE = 50
"""Deadline restored on a milestone clear, before the floor bonus."""

FLOORS_PER_MAJOR = 3
"""Floors per major version number."""

# =============================================================================
# Items
# =============================================================================

ITEM_WEIGHTS = {
    "coffee": 30,
    "pizza": 15,
    "red_bull": 10,
    "mech_keyboard": 15,
    "nc_headphones": 15,
    "sudo": 5,
}

ITEM_SPAWN_COUNTS = [2, 2, 3, 3, 4, 4, 5]
"""Items placed per floor, indexed by floor - 1; the last value repeats."""

ITEM_EFFECTS = {
    "coffee": {"heal": 15},
    "pizza": {"heal": 35},
    "red_bull": {"heal": 20, "buff": "attack_up", "duration": 5, "multiplier": 1.5, "crash_damage": 10},
    "mech_keyboard": {"buff": "attack_up", "duration": 6, "multiplier": 1.4},
    "nc_headphones": {"buff": "defense_up", "duration": 6, "multiplier": 0.4},
    "sudo": {"buff": "sudo", "duration": 999, "multiplier": 3.0},
}
"""Heal amount and optional buff granted by each item."""

# =============================================================================
# Progression
# =============================================================================

TECH_STACK_EFFECTS = {
    "python": 0.1,
    "cpp": 0.15,
    "rust": 0.1,
    "go": 0.1,
}
"""Per-level effect fraction for each stack."""

MAX_STACK_LEVEL = 10
UPGRADE_COST_STEP = 30
"""Upgrading from level n to n + 1 costs (n + 1) * UPGRADE_COST_STEP XP."""

TITLES = ["Junior", "Mid-level", "Senior", "Lead", "Architect"]
TITLE_THRESHOLDS = [0, 4, 10, 20, 30]
"""Minimum summed stack level for each entry of TITLES."""

TAMPERED_TITLE = "Script Kiddie"

# =============================================================================
# Message Log
# =============================================================================

LOG_CAPACITY = 100
"""Default number of in-game messages kept before the oldest is dropped."""


__all__ = [
    "GAME_TITLE",
    # Dungeon
    "DUNGEON_WIDTH",
    "DUNGEON_HEIGHT",
    "BSP_MIN_ROOM_SIZE",
    "BSP_MAX_ROOM_WIDTH",
    "BSP_MAX_ROOM_HEIGHT",
    "BSP_SPLIT_DEPTH",
    # Visibility
    "FOV_RADIUS",
    "ENEMY_DETECTION_RADIUS",
    "GOOGLE_IT_RADIUS",
    "SPAWN_MIN_DISTANCE",
    # Player
    "INITIAL_MH",
    "INITIAL_DL",
    "DL_DECAY_PER_TURN",
    "BURNOUT_DAMAGE_PER_TURN",
    "BURNOUT_ENEMY_MULTIPLIER",
    "PLAYER_NAME",
    # Actions
    "ACTION_COSTS",
    "DEBUG_DAMAGE",
    "HOTFIX_DAMAGE",
    "REFACTOR_DEFENSE",
    "REFACTOR_HEAL",
    # Enemies
    "ENEMY_BASE_STATS",
    "DEFAULT_ENEMY_COUNT",
    "DEFAULT_ENEMY_MULTIPLIER",
    "DEFAULT_DL_BONUS",
    # Milestones
    "MILESTONE_TABLE",
    "MILESTONE_DL_RESTORE",
    "FLOORS_PER_MAJOR",
    # Items
    "ITEM_WEIGHTS",
    "ITEM_SPAWN_COUNTS",
    "ITEM_EFFECTS",
    # Progression
    "TECH_STACK_EFFECTS",
    "MAX_STACK_LEVEL",
    "UPGRADE_COST_STEP",
    "TITLES",
    "TITLE_THRESHOLDS",
    "TAMPERED_TITLE",
    # Log
    "LOG_CAPACITY",
]
