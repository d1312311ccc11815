"""Entity models and factories.

This module defines the player, enemies, floor items, and active buffs,
plus the GenerationContext that owns the random source and the id counters
used when spawning entities. Passing the context explicitly keeps id
sequences reproducible per context and free of cross-test leakage.

Example:
    >>> ctx = GenerationContext(seed=7)
    >>> bug = create_enemy(ctx, EnemyVariant.NULL_REF, Position(x=3, y=4), hp_mult=1.2)
    >>> bug.id, bug.hp
    ('enemy_0', 12)
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from binary_dungeon.core.constants import (
    BURNOUT_ENEMY_MULTIPLIER,
    ENEMY_BASE_STATS,
    INITIAL_DL,
    INITIAL_MH,
    ITEM_WEIGHTS,
    PLAYER_NAME,
)
from binary_dungeon.models.enums import BuffType, EnemyVariant, ItemVariant
from binary_dungeon.models.geometry import Position


# =============================================================================
# Generation Context
# =============================================================================


@dataclass
class GenerationContext:
    """Random source and id counters for one game state.

    Attributes:
        seed: Seed the random source was created with (None for entropy).
        rng: The random source used for layout, spawns, and variants.
        next_enemy_id: Counter for enemy ids.
        next_item_id: Counter for item ids.
    """

    seed: int | None = None
    rng: random.Random = field(init=False, repr=False)
    next_enemy_id: int = 0
    next_item_id: int = 0

    def __post_init__(self) -> None:
        self.rng = random.Random(self.seed)

    def new_enemy_id(self) -> str:
        enemy_id = f"enemy_{self.next_enemy_id}"
        self.next_enemy_id += 1
        return enemy_id

    def new_item_id(self) -> str:
        item_id = f"item_{self.next_item_id}"
        self.next_item_id += 1
        return item_id

    def rand_int(self, low: int, high: int) -> int:
        """Uniform integer in [low, high]; collapses to ``low`` when high < low."""
        if high <= low:
            return low
        return self.rng.randint(low, high)


# =============================================================================
# Entities
# =============================================================================


class Entity(BaseModel):
    """Base class for anything that occupies a grid position."""

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
    )

    id: str
    name: str
    position: Position


class Player(Entity):
    """The developer.

    Mental Health (MH) is the life resource; Deadline (DL) decays every turn
    and triggers burnout at zero. Both are clamped to ``[0, max]``.
    """

    id: str = "player"
    name: str = PLAYER_NAME
    mh: int = Field(default=INITIAL_MH, ge=0, description="Current Mental Health")
    max_mh: int = Field(default=INITIAL_MH, ge=1, description="Maximum Mental Health")
    dl: int = Field(default=INITIAL_DL, ge=0, description="Current Deadline")
    max_dl: int = Field(default=INITIAL_DL, ge=1, description="Maximum Deadline")
    xp: int = Field(default=0, ge=0, description="XP earned this run")
    stunned: bool = Field(default=False, description="Skips the next action")
    defending: bool = Field(default=False, description="Refactor defense active")
    defense_multiplier: float = Field(
        default=1.0,
        ge=0,
        le=1.0,
        description="Incoming damage factor while defending",
    )

    @model_validator(mode="after")
    def check_resource_bounds(self) -> Player:
        if self.mh > self.max_mh:
            raise ValueError(f"mh {self.mh} exceeds max_mh {self.max_mh}")
        if self.dl > self.max_dl:
            raise ValueError(f"dl {self.dl} exceeds max_dl {self.max_dl}")
        return self

    def heal_mh(self, amount: int) -> int:
        """Restore MH up to the maximum.

        Returns:
            MH actually restored.
        """
        before = self.mh
        self.mh = min(self.max_mh, self.mh + max(0, amount))
        return self.mh - before

    def take_damage(self, amount: int) -> int:
        """Apply incoming damage scaled by the current defense multiplier.

        Returns:
            The scaled damage amount. MH itself never drops below zero.
        """
        effective = math.floor(amount * self.defense_multiplier)
        self.mh = max(0, self.mh - effective)
        return effective

    def lose_mh(self, amount: int) -> int:
        """Unmitigated MH loss (burnout ticks, buff crashes).

        Returns:
            MH actually lost.
        """
        before = self.mh
        self.mh = max(0, self.mh - amount)
        return before - self.mh

    def consume_mh(self, amount: int) -> bool:
        """Spend MH on an action. Spending down to exactly zero is refused."""
        if self.mh <= amount:
            return False
        self.mh -= amount
        return True

    def consume_dl(self, amount: int) -> bool:
        """Spend DL on an action. Spending down to exactly zero is allowed."""
        if self.dl < amount:
            return False
        self.dl -= amount
        return True

    def restore_dl(self, amount: int) -> int:
        before = self.dl
        self.dl = min(self.max_dl, self.dl + amount)
        return self.dl - before

    def reset_defense(self) -> None:
        self.defending = False
        self.defense_multiplier = 1.0


class Enemy(Entity):
    """A bug. Dead enemies stay in the floor list with ``hp == 0``."""

    variant: EnemyVariant
    hp: int = Field(ge=0)
    max_hp: int = Field(ge=1)
    attack: int = Field(ge=0)
    xp_reward: int = Field(ge=0)
    stunned: bool = False

    @model_validator(mode="after")
    def check_hp_bounds(self) -> Enemy:
        if self.hp > self.max_hp:
            raise ValueError(f"hp {self.hp} exceeds max_hp {self.max_hp}")
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_alive(self) -> bool:
        return self.hp > 0


class Item(BaseModel):
    """A pickup lying on a floor tile."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    id: str
    variant: ItemVariant
    position: Position
    picked_up: bool = False


class ActiveBuff(BaseModel):
    """A temporary multiplier granted by an item.

    Attributes:
        type: Which stat the buff scales.
        source: Item that granted it.
        turns_remaining: End-of-turn ticks left before expiry.
        multiplier: Factor applied to player damage (attack_up, sudo) or to
            incoming damage (defense_up).
        crash_damage: MH lost when the buff expires.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    type: BuffType
    source: ItemVariant
    turns_remaining: int = Field(ge=0)
    multiplier: float = Field(gt=0)
    crash_damage: int = Field(default=0, ge=0)


# =============================================================================
# Factory Functions
# =============================================================================


def create_player(position: Position) -> Player:
    """Create a fresh player at full MH and DL."""
    return Player(position=position)


def create_enemy(
    ctx: GenerationContext,
    variant: EnemyVariant,
    position: Position,
    hp_mult: float = 1.0,
    atk_mult: float = 1.0,
) -> Enemy:
    """Create an enemy with milestone scaling applied.

    HP and attack are scaled and floored; the XP reward is never scaled.
    """
    base = ENEMY_BASE_STATS[variant.value]
    hp = max(1, math.floor(base["hp"] * hp_mult))
    return Enemy(
        id=ctx.new_enemy_id(),
        name=variant.value,
        position=position,
        variant=variant,
        hp=hp,
        max_hp=hp,
        attack=math.floor(base["attack"] * atk_mult),
        xp_reward=base["xp"],
    )


def random_enemy_variant(ctx: GenerationContext) -> EnemyVariant:
    return ctx.rng.choice(list(EnemyVariant))


def enemy_attack_damage(enemy: Enemy, burnout_mode: bool) -> int:
    """Raw attack damage before any player mitigation."""
    if burnout_mode:
        return math.floor(enemy.attack * BURNOUT_ENEMY_MULTIPLIER)
    return enemy.attack


def create_item(ctx: GenerationContext, variant: ItemVariant, position: Position) -> Item:
    return Item(id=ctx.new_item_id(), variant=variant, position=position)


def random_item_variant(ctx: GenerationContext) -> ItemVariant:
    """Weighted item choice using ITEM_WEIGHTS."""
    variants = list(ItemVariant)
    weights = [ITEM_WEIGHTS[v.value] for v in variants]
    return ctx.rng.choices(variants, weights=weights, k=1)[0]


__all__ = [
    "GenerationContext",
    "Entity",
    "Player",
    "Enemy",
    "Item",
    "ActiveBuff",
    "create_player",
    "create_enemy",
    "random_enemy_variant",
    "enemy_attack_damage",
    "create_item",
    "random_item_variant",
]
