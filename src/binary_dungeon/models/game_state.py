"""Game state models for Binary Dungeon.

This module defines the aggregate root the engine mutates turn by turn,
together with the milestone and tech-stack value models it carries.

Models:
    Milestone: Current floor and its semantic version.
    MilestoneRule: Spawn and reward rules for one floor.
    TechStacks: Persistent upgrade levels.
    GameState: Everything the engine and renderer need for one session.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, computed_field

from binary_dungeon.core.constants import (
    DEFAULT_DL_BONUS,
    DEFAULT_ENEMY_COUNT,
    DEFAULT_ENEMY_MULTIPLIER,
    DUNGEON_HEIGHT,
    DUNGEON_WIDTH,
    FLOORS_PER_MAJOR,
    GAME_TITLE,
    LOG_CAPACITY,
    MAX_STACK_LEVEL,
    MILESTONE_TABLE,
    TITLES,
    UPGRADE_COST_STEP,
)
from binary_dungeon.core.logging import get_logger
from binary_dungeon.models.dungeon import DungeonMap
from binary_dungeon.models.entities import (
    ActiveBuff,
    Enemy,
    GenerationContext,
    Item,
    Player,
    create_player,
)
from binary_dungeon.models.enums import GamePhase, TechStackType
from binary_dungeon.models.events import TurnEvent


if TYPE_CHECKING:
    from binary_dungeon.core.config import Settings


logger = get_logger(__name__)

StackLevel = Annotated[int, Field(ge=0, le=MAX_STACK_LEVEL)]


# =============================================================================
# Milestones
# =============================================================================


class Milestone(BaseModel):
    """A dungeon floor and its release version.

    Example:
        >>> Milestone(floor=4).version
        'v2.0.0'
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    floor: int = Field(default=1, ge=1, description="1-based floor number")

    @computed_field(description="Semantic version shown for the floor")
    @property
    def version(self) -> str:
        major = (self.floor - 1) // FLOORS_PER_MAJOR + 1
        minor = (self.floor - 1) % FLOORS_PER_MAJOR
        return f"v{major}.{minor}.0"


class MilestoneRule(BaseModel):
    """Spawn scaling and Deadline reward for one floor."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    enemy_count: int = Field(ge=0)
    hp_mult: float = Field(gt=0)
    atk_mult: float = Field(gt=0)
    dl_bonus: int = Field(ge=0)


DEFAULT_MILESTONE_RULE = MilestoneRule(
    enemy_count=DEFAULT_ENEMY_COUNT,
    hp_mult=DEFAULT_ENEMY_MULTIPLIER,
    atk_mult=DEFAULT_ENEMY_MULTIPLIER,
    dl_bonus=DEFAULT_DL_BONUS,
)

_MILESTONE_RULES = [MilestoneRule(**row) for row in MILESTONE_TABLE]


def milestone_rule(floor: int) -> MilestoneRule:
    """Look up the rule for a floor, falling back to the defaults past the table."""
    if 1 <= floor <= len(_MILESTONE_RULES):
        return _MILESTONE_RULES[floor - 1]
    return DEFAULT_MILESTONE_RULE


# =============================================================================
# Tech Stacks
# =============================================================================


class TechStacks(BaseModel):
    """Persistent upgrade levels, each in ``[0, MAX_STACK_LEVEL]``."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    python: StackLevel = 0
    cpp: StackLevel = 0
    rust: StackLevel = 0
    go: StackLevel = 0

    def level(self, stack: TechStackType) -> int:
        return getattr(self, stack.value)

    def set_level(self, stack: TechStackType, level: int) -> None:
        setattr(self, stack.value, level)

    @property
    def total_level(self) -> int:
        """Sum of all stack levels; drives the title tier."""
        return self.python + self.cpp + self.rust + self.go

    @property
    def spent_xp(self) -> int:
        """XP paid so far. Level n cost ``n * UPGRADE_COST_STEP`` to reach."""
        return sum(
            UPGRADE_COST_STEP * level * (level + 1) // 2
            for level in (self.python, self.cpp, self.rust, self.go)
        )


# =============================================================================
# Game State
# =============================================================================


class GameState(BaseModel):
    """Aggregate root for one play session.

    The engine mutates this object in place. Fields that survive between runs
    are ``tech_stacks``, ``total_xp``, ``title``, ``script_kiddie`` and
    ``highest_milestone``;
    everything else is reset when a new run starts.

    Attributes:
        phase: Current phase of the turn state machine.
        player: The player entity.
        enemies: Enemies on the current floor, dead ones included.
        items: Items on the current floor.
        active_buffs: Buffs currently affecting the player.
        dungeon: The live dungeon grid.
        milestone: Current floor and version.
        highest_milestone: Deepest floor reached in any run.
        turn_count: Completed turns this run.
        burnout_mode: Set when Deadline hits zero, cleared on milestone clear.
        log: In-game message log, oldest first.
        log_capacity: Messages kept before the oldest is dropped.
        tech_stacks: Persistent upgrade levels.
        total_xp: Lifetime XP earned.
        title: Career title derived from stack levels.
        script_kiddie: Set permanently when a save fails verification.
        turn_events: What happened during the latest process_turn call.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    phase: GamePhase = GamePhase.TITLE
    player: Player
    enemies: list[Enemy] = Field(default_factory=list)
    items: list[Item] = Field(default_factory=list)
    active_buffs: list[ActiveBuff] = Field(default_factory=list)
    dungeon: DungeonMap
    milestone: Milestone = Field(default_factory=Milestone)
    highest_milestone: int = Field(default=1, ge=1)
    turn_count: int = Field(default=0, ge=0)
    burnout_mode: bool = False
    log: list[str] = Field(default_factory=list)
    log_capacity: int = Field(default=LOG_CAPACITY, ge=1)
    tech_stacks: TechStacks = Field(default_factory=TechStacks)
    total_xp: int = Field(default=0, ge=0)
    title: str = TITLES[0]
    script_kiddie: bool = False
    turn_events: list[TurnEvent] = Field(default_factory=list)

    _context: GenerationContext = PrivateAttr(default_factory=GenerationContext)

    @property
    def context(self) -> GenerationContext:
        """Random source and id counters used for this session."""
        return self._context

    def attach_context(self, ctx: GenerationContext) -> None:
        self._context = ctx

    @computed_field(description="XP already invested in tech stacks")
    @property
    def spent_xp(self) -> int:
        return self.tech_stacks.spent_xp

    @computed_field(description="XP available for investment")
    @property
    def available_xp(self) -> int:
        return self.total_xp - self.spent_xp

    @property
    def living_enemies(self) -> list[Enemy]:
        return [enemy for enemy in self.enemies if enemy.is_alive]

    def add_log(self, message: str) -> None:
        """Append a message, dropping the oldest past capacity."""
        self.log.append(message)
        overflow = len(self.log) - self.log_capacity
        if overflow > 0:
            del self.log[:overflow]


def create_initial_game_state(
    settings: Settings | None = None,
    ctx: GenerationContext | None = None,
) -> GameState:
    """Create a session on the title screen.

    Generates the first floor, places the player at its start and computes
    the initial field of view. Enemies and items are spawned when the game
    is started.

    Args:
        settings: Settings to read the seed and log capacity from. Defaults to
            the application settings.
        ctx: Generation context to use. Defaults to a new context seeded from
            settings.

    Returns:
        A GameState in the title phase.

    Raises:
        DungeonGenerationError: If the configured grid cannot hold a room.
    """
    from binary_dungeon.core.config import get_settings
    from binary_dungeon.engine.dungeon_gen import generate_dungeon
    from binary_dungeon.engine.fov import compute_fov

    if settings is None:
        settings = get_settings()
    if ctx is None:
        ctx = GenerationContext(seed=settings.game.rng_seed)

    generated = generate_dungeon(ctx, DUNGEON_WIDTH, DUNGEON_HEIGHT)
    player = create_player(generated.player_start)
    compute_fov(generated.dungeon, player.position)

    state = GameState(
        player=player,
        dungeon=generated.dungeon,
        log_capacity=settings.game.log_capacity,
    )
    state.attach_context(ctx)
    state.add_log(f"Welcome to {GAME_TITLE}.")
    state.add_log("Press ENTER to start.")

    logger.info(
        "Game state created",
        seed=ctx.seed,
        rooms=len(generated.rooms),
        player_start=(player.position.x, player.position.y),
    )
    return state


__all__ = [
    "Milestone",
    "MilestoneRule",
    "DEFAULT_MILESTONE_RULE",
    "milestone_rule",
    "TechStacks",
    "GameState",
    "create_initial_game_state",
]
