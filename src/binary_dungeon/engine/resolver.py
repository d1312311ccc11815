"""Combat and utility action resolution.

Every resolver checks legality first and returns False without touching
anything but the message log when the action is refused. On success it pays
the cost, applies the effect, records turn events and returns True, which
tells the turn loop to end the turn.
"""

from __future__ import annotations

from binary_dungeon.core.constants import GOOGLE_IT_RADIUS
from binary_dungeon.core.logging import get_logger
from binary_dungeon.engine.actions import (
    ACTION_INFO,
    debug_damage,
    effective_dl_cost,
    effective_mh_cost,
    hotfix_damage,
    refactor_defense,
    refactor_heal,
)
from binary_dungeon.models.entities import Enemy
from binary_dungeon.models.enums import ActionType, TileType, Visibility
from binary_dungeon.models.events import ActionPerformed, DamageDealt, Healed
from binary_dungeon.models.game_state import GameState


logger = get_logger(__name__)


def find_target(state: GameState) -> Enemy | None:
    """Pick the enemy an attack is aimed at.

    The first adjacent living enemy wins; otherwise the living enemy with the
    smallest Manhattan distance, earliest in list order on ties.
    """
    living = state.living_enemies
    if not living:
        return None

    player_pos = state.player.position
    for enemy in living:
        if enemy.position.is_adjacent(player_pos):
            return enemy

    return min(living, key=lambda enemy: enemy.position.distance_to(player_pos))


def damage_enemy(state: GameState, enemy: Enemy, damage: int) -> None:
    """Apply damage to an enemy and credit XP on a kill."""
    enemy.hp = max(0, enemy.hp - damage)
    state.add_log(f"Hit {enemy.variant.value} for {damage} damage!")

    killed = not enemy.is_alive
    if killed:
        state.add_log(f"{enemy.variant.value} destroyed! +{enemy.xp_reward} XP")
        state.player.xp += enemy.xp_reward
        state.total_xp += enemy.xp_reward

    state.turn_events.append(DamageDealt(target=enemy.id, amount=damage, killed=killed))
    logger.debug(
        "Enemy damaged",
        enemy_id=enemy.id,
        variant=enemy.variant.value,
        damage=damage,
        hp=enemy.hp,
        killed=killed,
    )


def _adjacent_target(state: GameState) -> Enemy | None:
    target = find_target(state)
    if target is None or not target.position.is_adjacent(state.player.position):
        return None
    return target


def _record(state: GameState, action: ActionType) -> None:
    state.turn_events.append(ActionPerformed(label=ACTION_INFO[action].name))


def resolve_debug(state: GameState) -> bool:
    target = _adjacent_target(state)
    if target is None:
        state.add_log("No adjacent bug to debug.")
        return False

    cost = effective_mh_cost(state, ActionType.DEBUG)
    if not state.player.consume_mh(cost):
        state.add_log("Not enough Mental Health to Debug.")
        return False

    _record(state, ActionType.DEBUG)
    damage_enemy(state, target, debug_damage(state))
    return True


def resolve_hotfix(state: GameState) -> bool:
    """Heavy hit that leaves the player stunned for their next turn."""
    target = _adjacent_target(state)
    if target is None:
        state.add_log("No adjacent bug to hotfix.")
        return False

    cost = effective_mh_cost(state, ActionType.HOTFIX)
    if not state.player.consume_mh(cost):
        state.add_log("Not enough Mental Health for Hotfix.")
        return False

    _record(state, ActionType.HOTFIX)
    damage_enemy(state, target, hotfix_damage(state))
    state.player.stunned = True
    state.add_log("Hotfix deployed! Cooldown next turn.")
    return True


def resolve_google_it(state: GameState) -> bool:
    """Reveal walkable tiles and scout living enemies within GOOGLE_IT_RADIUS."""
    cost = effective_dl_cost(state, ActionType.GOOGLE_IT)
    if not state.player.consume_dl(cost):
        state.add_log("Not enough Deadline for Google It.")
        return False

    _record(state, ActionType.GOOGLE_IT)
    origin = state.player.position
    revealed = 0
    for x, y, tile in state.dungeon.iter_tiles():
        if tile.type in (TileType.WALL, TileType.VOID):
            continue
        if abs(x - origin.x) + abs(y - origin.y) > GOOGLE_IT_RADIUS:
            continue
        if tile.visibility == Visibility.HIDDEN:
            revealed += 1
        tile.visibility = Visibility.VISIBLE

    for enemy in state.living_enemies:
        if enemy.position.distance_to(origin) <= GOOGLE_IT_RADIUS:
            state.add_log(
                f"[{enemy.variant.value}] HP: {enemy.hp}/{enemy.max_hp} ATK: {enemy.attack}"
            )

    state.add_log(f"Google It: Revealed {revealed} tiles.")
    return True


def resolve_refactor(state: GameState) -> bool:
    """Raise defense until the end of the turn and recover a little MH."""
    cost = effective_dl_cost(state, ActionType.REFACTOR)
    if not state.player.consume_dl(cost):
        state.add_log("Not enough Deadline for Refactor.")
        return False

    _record(state, ActionType.REFACTOR)
    state.player.defending = True
    state.player.defense_multiplier = refactor_defense(state)
    healed = state.player.heal_mh(refactor_heal())
    state.turn_events.append(Healed(amount=healed))
    state.add_log(f"Refactor: Defense up! Healed {healed} MH.")
    return True


_RESOLVERS = {
    ActionType.DEBUG: resolve_debug,
    ActionType.HOTFIX: resolve_hotfix,
    ActionType.GOOGLE_IT: resolve_google_it,
    ActionType.REFACTOR: resolve_refactor,
}


def resolve_action(state: GameState, action: ActionType) -> bool:
    """Resolve a player action.

    Args:
        state: Game state to mutate.
        action: The action to perform.

    Returns:
        True if the action happened and the turn should end.
    """
    succeeded = _RESOLVERS[action](state)
    logger.debug("Action resolved", action=action.value, succeeded=succeeded)
    return succeeded


__all__ = [
    "find_target",
    "damage_enemy",
    "resolve_debug",
    "resolve_hotfix",
    "resolve_google_it",
    "resolve_refactor",
    "resolve_action",
]
