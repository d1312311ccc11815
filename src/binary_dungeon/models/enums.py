"""Enumeration types for Binary Dungeon.

These enums are the closed vocabularies of the game: tile kinds, visibility
states, enemy and item variants, player actions, tech stacks, and phases.
Their string values double as keys into binary_dungeon.core.constants and
as the wire values of events and save snapshots.
"""

from __future__ import annotations

from enum import StrEnum


class TileType(StrEnum):
    """Kinds of dungeon tile."""

    FLOOR = "floor"
    WALL = "wall"
    STAIRS = "stairs"
    VOID = "void"

    @property
    def is_opaque(self) -> bool:
        """Whether the tile blocks line of sight."""
        return self in (TileType.WALL, TileType.VOID)

    @property
    def is_walkable(self) -> bool:
        """Whether an entity may stand on the tile."""
        return not self.is_opaque


class Visibility(StrEnum):
    """Fog-of-war state of a tile."""

    HIDDEN = "hidden"
    """Never seen."""

    EXPLORED = "explored"
    """Seen before but not currently in view."""

    VISIBLE = "visible"
    """In view this turn."""


class EnemyVariant(StrEnum):
    """The six kinds of bug the player fights."""

    SEGFAULT = "Segfault"
    NULL_REF = "NullRef"
    OFF_BY_ONE = "OffByOne"
    RACE_CONDITION = "RaceCondition"
    MEMORY_LEAK = "MemoryLeak"
    INFINITE_LOOP = "InfiniteLoop"


class ItemVariant(StrEnum):
    """Pickups scattered across a floor."""

    COFFEE = "coffee"
    PIZZA = "pizza"
    RED_BULL = "red_bull"
    MECH_KEYBOARD = "mech_keyboard"
    NC_HEADPHONES = "nc_headphones"
    SUDO = "sudo"

    @property
    def display_name(self) -> str:
        """Human-readable item name used in log messages."""
        return _ITEM_NAMES[self]


_ITEM_NAMES = {
    ItemVariant.COFFEE: "Coffee",
    ItemVariant.PIZZA: "Pizza",
    ItemVariant.RED_BULL: "Red Bull",
    ItemVariant.MECH_KEYBOARD: "Mech Keyboard",
    ItemVariant.NC_HEADPHONES: "NC Headphones",
    ItemVariant.SUDO: "sudo",
}


class BuffType(StrEnum):
    """Temporary effects granted by items."""

    ATTACK_UP = "attack_up"
    DEFENSE_UP = "defense_up"
    SUDO = "sudo"


class ActionType(StrEnum):
    """Player combat and utility actions."""

    DEBUG = "debug"
    HOTFIX = "hotfix"
    GOOGLE_IT = "google_it"
    REFACTOR = "refactor"


class TechStackType(StrEnum):
    """Persistent upgrade tracks."""

    PYTHON = "python"
    CPP = "cpp"
    RUST = "rust"
    GO = "go"


class GamePhase(StrEnum):
    """Phases of the turn state machine.

    There is no separate combat phase; actions are events processed while
    exploring.
    """

    TITLE = "title"
    EXPLORING = "exploring"
    GAME_OVER = "game_over"
    XP_INVEST = "xp_invest"


__all__ = [
    "TileType",
    "Visibility",
    "EnemyVariant",
    "ItemVariant",
    "BuffType",
    "ActionType",
    "TechStackType",
    "GamePhase",
]
