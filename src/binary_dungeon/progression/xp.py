"""XP accounting and career titles."""

from __future__ import annotations

from binary_dungeon.core.constants import TAMPERED_TITLE, TITLE_THRESHOLDS, TITLES
from binary_dungeon.models.game_state import GameState


def spent_xp(state: GameState) -> int:
    return state.tech_stacks.spent_xp


def available_xp(state: GameState) -> int:
    """Lifetime XP minus what has been invested."""
    return state.total_xp - spent_xp(state)


def title_for_levels(total_level: int) -> str:
    """Highest title whose threshold the summed stack level reaches.

    Example:
        >>> title_for_levels(4)
        'Mid-level'
    """
    title = TITLES[0]
    for threshold, name in zip(TITLE_THRESHOLDS, TITLES):
        if total_level >= threshold:
            title = name
    return title


def update_title(state: GameState) -> str:
    """Recompute the title; a tampered save pins it to the penalty title."""
    if state.script_kiddie:
        state.title = TAMPERED_TITLE
    else:
        state.title = title_for_levels(state.tech_stacks.total_level)
    return state.title


__all__ = [
    "spent_xp",
    "available_xp",
    "title_for_levels",
    "update_title",
]
