"""Action catalogue and effective cost/power calculations.

Costs and powers start from the base values in core.constants and are
scaled by tech-stack levels. Player damage is further scaled by any active
attack buffs.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict

from binary_dungeon.core.constants import (
    ACTION_COSTS,
    DEBUG_DAMAGE,
    HOTFIX_DAMAGE,
    REFACTOR_DEFENSE,
    REFACTOR_HEAL,
    TECH_STACK_EFFECTS,
)
from binary_dungeon.models.enums import ActionType, BuffType, TechStackType
from binary_dungeon.models.game_state import GameState


class ActionInfo(BaseModel):
    """Display metadata for an action."""

    model_config = ConfigDict(frozen=True)

    name: str
    key: str
    description: str
    cost_type: str
    base_cost: int


ACTION_INFO: dict[ActionType, ActionInfo] = {
    ActionType.DEBUG: ActionInfo(
        name="Debug",
        key="d",
        description="Single target attack (MH cost: low)",
        cost_type="mh",
        base_cost=ACTION_COSTS["debug"]["mh"],
    ),
    ActionType.HOTFIX: ActionInfo(
        name="Hotfix",
        key="h",
        description="High damage, stunned next turn (MH cost: mid)",
        cost_type="mh",
        base_cost=ACTION_COSTS["hotfix"]["mh"],
    ),
    ActionType.GOOGLE_IT: ActionInfo(
        name="Google It",
        key="g",
        description="Reveal surroundings, show enemy info (DL cost)",
        cost_type="dl",
        base_cost=ACTION_COSTS["google_it"]["dl"],
    ),
    ActionType.REFACTOR: ActionInfo(
        name="Refactor",
        key="r",
        description="Defend + small MH heal (DL cost)",
        cost_type="dl",
        base_cost=ACTION_COSTS["refactor"]["dl"],
    ),
}


def _stack_bonus(state: GameState, stack: TechStackType) -> float:
    return state.tech_stacks.level(stack) * TECH_STACK_EFFECTS[stack.value]


def effective_mh_cost(state: GameState, action: ActionType) -> int:
    """MH cost after tech-stack reductions.

    Only Debug is discounted (by Python); the result never drops below 1.
    """
    base = ACTION_COSTS[action.value]["mh"]
    if action == ActionType.DEBUG:
        return max(1, math.floor(base * (1 - _stack_bonus(state, TechStackType.PYTHON))))
    return base


def effective_dl_cost(state: GameState, action: ActionType) -> int:
    """DL cost after tech-stack reductions.

    Only Google It is discounted (by Go); the result never drops below 1.
    """
    base = ACTION_COSTS[action.value]["dl"]
    if action == ActionType.GOOGLE_IT:
        return max(1, math.floor(base * (1 - _stack_bonus(state, TechStackType.GO))))
    return base


def attack_multiplier(state: GameState) -> float:
    """Product of all active attack-scaling buffs (attack_up and sudo)."""
    multiplier = 1.0
    for buff in state.active_buffs:
        if buff.type in (BuffType.ATTACK_UP, BuffType.SUDO):
            multiplier *= buff.multiplier
    return multiplier


def _buffed(state: GameState, damage: int) -> int:
    multiplier = attack_multiplier(state)
    if multiplier == 1.0:
        return damage
    return math.floor(damage * multiplier)


def debug_damage(state: GameState) -> int:
    return _buffed(state, DEBUG_DAMAGE)


def hotfix_damage(state: GameState) -> int:
    """Hotfix damage boosted by C++ levels, then by attack buffs."""
    base = math.floor(HOTFIX_DAMAGE * (1 + _stack_bonus(state, TechStackType.CPP)))
    return _buffed(state, base)


def refactor_defense(state: GameState) -> float:
    """Incoming damage factor while defending; Rust levels lower it."""
    return REFACTOR_DEFENSE * (1 - _stack_bonus(state, TechStackType.RUST))


def refactor_heal() -> int:
    return REFACTOR_HEAL


__all__ = [
    "ActionInfo",
    "ACTION_INFO",
    "effective_mh_cost",
    "effective_dl_cost",
    "attack_multiplier",
    "debug_damage",
    "hotfix_damage",
    "refactor_defense",
    "refactor_heal",
]
