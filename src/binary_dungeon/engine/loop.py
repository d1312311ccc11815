"""The turn state machine.

``process_turn`` is the single entry point the input adapter calls. It
dispatches on the current phase and the event type, and when the player's
input completes a turn it runs the enemies, recomputes the field of view and
does end-of-turn bookkeeping in a fixed order.

Phases:
    title -> exploring -> game_over -> xp_invest -> exploring

Example:
    >>> state = create_initial_game_state()
    >>> process_turn(state, StartGame())
    >>> process_turn(state, Move(direction=Direction.EAST))
    >>> state.turn_count
    1
"""

from __future__ import annotations

from binary_dungeon.core.constants import (
    BURNOUT_DAMAGE_PER_TURN,
    DL_DECAY_PER_TURN,
    MILESTONE_DL_RESTORE,
    SPAWN_MIN_DISTANCE,
)
from binary_dungeon.core.logging import bind_context, clear_context, get_logger
from binary_dungeon.engine.dungeon_gen import generate_dungeon
from binary_dungeon.engine.enemy_ai import process_enemy_turns
from binary_dungeon.engine.fov import compute_fov
from binary_dungeon.engine.items import pick_up_item, spawn_items, tick_buffs
from binary_dungeon.engine.resolver import resolve_action
from binary_dungeon.models.entities import create_enemy, create_player, random_enemy_variant
from binary_dungeon.models.enums import GamePhase, TechStackType, TileType
from binary_dungeon.models.events import (
    Action,
    BurnoutTick,
    FinishInvest,
    GameEvent,
    InvestXp,
    Move,
    Moved,
    NewGame,
    StartGame,
    StunnedSkip,
    Wait,
    Waited,
)
from binary_dungeon.models.game_state import GameState, Milestone, milestone_rule
from binary_dungeon.models.geometry import Direction
from binary_dungeon.progression.tech_stack import can_upgrade, upgrade_cost, upgrade_stack
from binary_dungeon.progression.xp import available_xp, update_title


logger = get_logger(__name__)


# =============================================================================
# Entry Point
# =============================================================================


def process_turn(state: GameState, event: GameEvent) -> None:
    """Advance the game by one input event.

    Gameplay never raises: events that make no sense in the current phase
    are ignored, and refused moves or actions only add a log message.

    Args:
        state: Game state to mutate in place.
        event: The player's input.
    """
    state.turn_events.clear()

    if state.phase == GamePhase.TITLE:
        if isinstance(event, StartGame):
            _start_first_run(state)
        return

    if state.phase == GamePhase.GAME_OVER:
        if isinstance(event, StartGame):
            state.phase = GamePhase.XP_INVEST
            state.add_log("Invest your XP in Tech Stacks!")
            logger.info("Phase changed", phase=state.phase.value)
        elif isinstance(event, NewGame):
            start_new_run(state)
        return

    if state.phase == GamePhase.XP_INVEST:
        if isinstance(event, InvestXp):
            handle_xp_invest(state, event.stack)
        elif isinstance(event, (FinishInvest, NewGame)):
            start_new_run(state)
        return

    _process_exploring(state, event)


def _start_first_run(state: GameState) -> None:
    state.phase = GamePhase.EXPLORING
    state.add_log(f"Starting Milestone {state.milestone.version}...")
    bind_context(milestone=state.milestone.version)
    spawn_enemies(state)
    spawn_items(state)
    compute_fov(state.dungeon, state.player.position)
    logger.info("Run started", floor=state.milestone.floor, enemies=len(state.enemies))


def _process_exploring(state: GameState, event: GameEvent) -> None:
    if state.player.stunned:
        state.player.stunned = False
        state.turn_events.append(StunnedSkip())
        state.add_log("You recover from the Hotfix cooldown.")
        process_enemy_turns(state)
        end_of_turn(state)
        return

    if isinstance(event, Move):
        acted = handle_move(state, event.direction)
    elif isinstance(event, Action):
        acted = resolve_action(state, event.action)
    elif isinstance(event, Wait):
        state.turn_events.append(Waited())
        state.add_log("You wait...")
        acted = True
    else:
        acted = False

    if acted:
        process_enemy_turns(state)
        compute_fov(state.dungeon, state.player.position)
        end_of_turn(state)


# =============================================================================
# Movement & Milestones
# =============================================================================


def handle_move(state: GameState, direction: Direction) -> bool:
    """Move the player one tile.

    Returns:
        True if the move completed a turn. Refused moves and stepping onto
        the stairs while bugs remain return False.
    """
    destination = state.player.position.step(direction)
    dungeon = state.dungeon

    if not dungeon.in_bounds(destination.x, destination.y):
        state.add_log("You can't leave the dungeon.")
        return False
    if not dungeon.is_walkable(destination.x, destination.y):
        state.add_log("A wall blocks your way.")
        return False
    for enemy in state.living_enemies:
        if enemy.position == destination:
            state.add_log(f"A {enemy.variant.value} blocks your way.")
            return False

    state.player.position = destination
    state.turn_events.append(Moved(direction=direction))
    pick_up_item(state, destination)

    tile = dungeon.tile_at(destination.x, destination.y)
    if tile is not None and tile.type == TileType.STAIRS:
        living = len(state.living_enemies)
        if living:
            state.add_log(f"{living} bug(s) remain! Clear them first.")
            return False
        handle_milestone_clear(state)
    return True


def advance_milestone(state: GameState) -> None:
    """Move to the next floor and clear burnout."""
    state.milestone.floor += 1
    state.highest_milestone = max(state.highest_milestone, state.milestone.floor)
    state.burnout_mode = False
    state.add_log(f"New milestone: {state.milestone.version}")


def handle_milestone_clear(state: GameState) -> None:
    """Generate the next floor and reward the player with Deadline."""
    cleared = state.milestone.version
    state.add_log(f"Milestone {cleared} cleared!")
    advance_milestone(state)
    bind_context(milestone=state.milestone.version)

    generated = generate_dungeon(state.context, state.dungeon.width, state.dungeon.height)
    state.dungeon = generated.dungeon
    state.player.position = generated.player_start

    rule = milestone_rule(state.milestone.floor)
    state.player.restore_dl(MILESTONE_DL_RESTORE + rule.dl_bonus)
    state.burnout_mode = False

    spawn_enemies(state)
    spawn_items(state)
    state.add_log("Deadline extended! DL restored.")
    compute_fov(state.dungeon, state.player.position)

    logger.info(
        "Milestone cleared",
        cleared=cleared,
        floor=state.milestone.floor,
        version=state.milestone.version,
        dl=state.player.dl,
    )


def spawn_enemies(state: GameState) -> None:
    """Replace the floor's enemies using the current milestone's rule.

    Enemies go on floor tiles at least SPAWN_MIN_DISTANCE from the player;
    fewer candidates than the rule asks for means fewer enemies.
    """
    ctx = state.context
    rule = milestone_rule(state.milestone.floor)
    player_pos = state.player.position

    candidates = [
        pos
        for pos in state.dungeon.positions_of(TileType.FLOOR)
        if pos.distance_to(player_pos) >= SPAWN_MIN_DISTANCE
    ]
    ctx.rng.shuffle(candidates)

    state.enemies = [
        create_enemy(ctx, random_enemy_variant(ctx), pos, rule.hp_mult, rule.atk_mult)
        for pos in candidates[: rule.enemy_count]
    ]
    logger.debug(
        "Enemies spawned",
        floor=state.milestone.floor,
        requested=rule.enemy_count,
        spawned=len(state.enemies),
    )


# =============================================================================
# Bookkeeping
# =============================================================================


def end_of_turn(state: GameState) -> None:
    """Close out a completed turn.

    Order matters: the turn counter, Deadline decay, burnout onset, burnout
    damage, buff ticks, defense reset and finally the game-over check.
    """
    player = state.player
    state.turn_count += 1
    player.dl = max(0, player.dl - DL_DECAY_PER_TURN)

    if player.dl <= 0 and not state.burnout_mode:
        state.burnout_mode = True
        state.add_log("BURNOUT MODE! Deadline exceeded! Enemies are empowered!")
        logger.info("Burnout started", turn=state.turn_count)

    if state.burnout_mode:
        player.lose_mh(BURNOUT_DAMAGE_PER_TURN)
        state.turn_events.append(BurnoutTick(amount=BURNOUT_DAMAGE_PER_TURN))
        state.add_log(f"Burnout! You take {BURNOUT_DAMAGE_PER_TURN} stress damage.")

    tick_buffs(state)
    player.reset_defense()

    if player.mh <= 0:
        state.phase = GamePhase.GAME_OVER
        state.add_log("Mental Health depleted... You burned out.")
        logger.info(
            "Game over",
            turn=state.turn_count,
            floor=state.milestone.floor,
            run_xp=player.xp,
        )


# =============================================================================
# Between Runs
# =============================================================================


def handle_xp_invest(state: GameState, stack: TechStackType) -> bool:
    """Spend lifetime XP on one level of a tech stack.

    Returns:
        True if the stack was upgraded.
    """
    if not can_upgrade(state.tech_stacks, stack):
        state.add_log(f"{stack.value} is already at max level!")
        return False

    cost = upgrade_cost(state.tech_stacks.level(stack))
    available = available_xp(state)
    if available < cost:
        state.add_log(f"Not enough XP! Need {cost}, have {available}.")
        return False

    upgrade_stack(state.tech_stacks, stack)
    update_title(state)
    level = state.tech_stacks.level(stack)
    state.add_log(f"Upgraded {stack.value} to level {level}!")
    logger.info("Tech stack upgraded", stack=stack.value, level=level, cost=cost)
    return True


def start_new_run(state: GameState) -> None:
    """Reset the run while keeping persistent progression.

    Tech stacks, lifetime XP, title, the tamper flag and the deepest floor
    reached survive; the player, floor, enemies, items, buffs, counters and
    log start over.
    """
    generated = generate_dungeon(state.context, state.dungeon.width, state.dungeon.height)

    state.dungeon = generated.dungeon
    state.player = create_player(generated.player_start)
    state.enemies = []
    state.items = []
    state.active_buffs = []
    state.milestone = Milestone()
    state.turn_count = 0
    state.burnout_mode = False
    state.log = []
    state.add_log("New run started! Good luck, developer.")
    state.phase = GamePhase.EXPLORING
    clear_context()
    bind_context(milestone=state.milestone.version)

    spawn_enemies(state)
    spawn_items(state)
    compute_fov(state.dungeon, state.player.position)
    logger.info("New run started", total_xp=state.total_xp, title=state.title)


__all__ = [
    "process_turn",
    "handle_move",
    "advance_milestone",
    "handle_milestone_clear",
    "spawn_enemies",
    "end_of_turn",
    "handle_xp_invest",
    "start_new_run",
]
