"""Enemy turn processing.

Each living enemy either recovers from a stun, idles out of detection range,
attacks when adjacent, or takes one greedy step toward the player.
"""

from __future__ import annotations

import math

from binary_dungeon.core.constants import ENEMY_DETECTION_RADIUS
from binary_dungeon.core.logging import get_logger
from binary_dungeon.engine.items import defense_buff_multiplier
from binary_dungeon.models.entities import Enemy, enemy_attack_damage
from binary_dungeon.models.events import DamageTaken
from binary_dungeon.models.game_state import GameState
from binary_dungeon.models.geometry import Position


logger = get_logger(__name__)


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def can_move_to(state: GameState, x: int, y: int, mover_id: str) -> bool:
    """Whether an enemy may step onto (x, y).

    Off-grid cells, walls, void, the player's cell and cells held by another
    living enemy are all blocked.
    """
    if not state.dungeon.is_walkable(x, y):
        return False
    player_pos = state.player.position
    if player_pos.x == x and player_pos.y == y:
        return False
    return not any(
        other.id != mover_id and other.is_alive and other.position.x == x and other.position.y == y
        for other in state.enemies
    )


def move_toward(state: GameState, enemy: Enemy, target: Position) -> bool:
    """Take one step toward ``target`` along the dominant axis first.

    Returns:
        True if the enemy moved.
    """
    dx = target.x - enemy.position.x
    dy = target.y - enemy.position.y

    x_step = (_sign(dx), 0)
    y_step = (0, _sign(dy))
    steps = [x_step, y_step] if abs(dx) >= abs(dy) else [y_step, x_step]

    for step_x, step_y in steps:
        if step_x == 0 and step_y == 0:
            continue
        new_x = enemy.position.x + step_x
        new_y = enemy.position.y + step_y
        if can_move_to(state, new_x, new_y, enemy.id):
            enemy.position = Position(x=new_x, y=new_y)
            return True
    return False


def _attack(state: GameState, enemy: Enemy) -> int:
    raw = enemy_attack_damage(enemy, state.burnout_mode)
    defense = defense_buff_multiplier(state)
    if defense != 1.0:
        raw = math.floor(raw * defense)
    dealt = state.player.take_damage(raw)
    state.add_log(f"{enemy.variant.value} attacks! -{dealt} MH")
    state.turn_events.append(DamageTaken(source=enemy.id, amount=dealt))
    return dealt


def process_enemy_turns(state: GameState) -> None:
    """Run one turn for every living enemy, in list order."""
    player_pos = state.player.position
    for enemy in state.enemies:
        if not enemy.is_alive:
            continue
        if enemy.stunned:
            enemy.stunned = False
            continue

        if enemy.position.distance_to(player_pos) > ENEMY_DETECTION_RADIUS:
            continue

        if enemy.position.is_adjacent(player_pos):
            dealt = _attack(state, enemy)
            logger.debug("Enemy attacked", enemy_id=enemy.id, damage=dealt, mh=state.player.mh)
        else:
            move_toward(state, enemy, player_pos)


__all__ = [
    "can_move_to",
    "move_toward",
    "process_enemy_turns",
]
