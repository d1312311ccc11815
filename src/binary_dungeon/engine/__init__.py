"""Game engine module for Binary Dungeon.

This module provides the deterministic turn-processing core: dungeon
generation, field of view, action resolution, enemy AI, items, and the turn
state machine that sequences them.

Submodules:
    dungeon_gen: BSP room and corridor generation
    fov: Recursive shadow-casting field of view
    actions: Action catalogue, effective costs and damage
    resolver: Action legality and effects
    enemy_ai: Enemy attack-or-chase decisions
    items: Item spawning, pickup and buff ticking
    loop: The process_turn state machine

Example:
    >>> from binary_dungeon.engine import process_turn
    >>> from binary_dungeon.models import StartGame, create_initial_game_state
    >>>
    >>> state = create_initial_game_state()
    >>> process_turn(state, StartGame())
    >>> state.phase
    <GamePhase.EXPLORING: 'exploring'>
"""

from __future__ import annotations

# =============================================================================
# Dungeon & Visibility
# =============================================================================
from binary_dungeon.engine.dungeon_gen import (
    BSPNode,
    GeneratedDungeon,
    carve_corridor,
    generate_dungeon,
)
from binary_dungeon.engine.fov import compute_fov

# =============================================================================
# Actions & Combat
# =============================================================================
from binary_dungeon.engine.actions import (
    ACTION_INFO,
    ActionInfo,
    attack_multiplier,
    debug_damage,
    effective_dl_cost,
    effective_mh_cost,
    hotfix_damage,
    refactor_defense,
    refactor_heal,
)
from binary_dungeon.engine.resolver import damage_enemy, find_target, resolve_action
from binary_dungeon.engine.enemy_ai import can_move_to, move_toward, process_enemy_turns

# =============================================================================
# Items
# =============================================================================
from binary_dungeon.engine.items import (
    ITEM_EFFECT_TABLE,
    ItemEffect,
    defense_buff_multiplier,
    pick_up_item,
    spawn_items,
    tick_buffs,
)

# =============================================================================
# Turn Loop
# =============================================================================
from binary_dungeon.engine.loop import (
    advance_milestone,
    end_of_turn,
    handle_milestone_clear,
    handle_move,
    handle_xp_invest,
    process_turn,
    spawn_enemies,
    start_new_run,
)


__all__ = [
    # Dungeon & Visibility
    "BSPNode",
    "GeneratedDungeon",
    "carve_corridor",
    "generate_dungeon",
    "compute_fov",
    # Actions & Combat
    "ActionInfo",
    "ACTION_INFO",
    "effective_mh_cost",
    "effective_dl_cost",
    "attack_multiplier",
    "debug_damage",
    "hotfix_damage",
    "refactor_defense",
    "refactor_heal",
    "find_target",
    "damage_enemy",
    "resolve_action",
    "can_move_to",
    "move_toward",
    "process_enemy_turns",
    # Items
    "ItemEffect",
    "ITEM_EFFECT_TABLE",
    "spawn_items",
    "pick_up_item",
    "tick_buffs",
    "defense_buff_multiplier",
    # Turn Loop
    "process_turn",
    "handle_move",
    "advance_milestone",
    "handle_milestone_clear",
    "spawn_enemies",
    "end_of_turn",
    "handle_xp_invest",
    "start_new_run",
]
