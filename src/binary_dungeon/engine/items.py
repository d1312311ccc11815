"""Floor items and the buffs they grant.

Items are scattered on each new floor and picked up by walking onto them.
Healing applies at once; buffs are kept on the game state and tick down at
the end of every turn.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from binary_dungeon.core.constants import ITEM_EFFECTS, ITEM_SPAWN_COUNTS
from binary_dungeon.core.logging import get_logger
from binary_dungeon.models.entities import ActiveBuff, Item, create_item, random_item_variant
from binary_dungeon.models.enums import BuffType, ItemVariant, TileType
from binary_dungeon.models.events import BuffExpired, ItemPickup
from binary_dungeon.models.game_state import GameState
from binary_dungeon.models.geometry import Position


logger = get_logger(__name__)


class ItemEffect(BaseModel):
    """What an item does when picked up."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    heal: int = Field(default=0, ge=0)
    buff: BuffType | None = None
    duration: int = Field(default=0, ge=0)
    multiplier: float = Field(default=1.0, gt=0)
    crash_damage: int = Field(default=0, ge=0)

    def describe(self) -> str:
        """Short effect summary for the log and turn events."""
        parts = []
        if self.heal:
            parts.append(f"+{self.heal} MH")
        if self.buff == BuffType.DEFENSE_UP:
            parts.append(f"DMG taken x{self.multiplier} ({self.duration} turns)")
        elif self.buff is not None:
            parts.append(f"ATK x{self.multiplier} ({self.duration} turns)")
        return ", ".join(parts)


ITEM_EFFECT_TABLE: dict[ItemVariant, ItemEffect] = {
    variant: ItemEffect(**ITEM_EFFECTS[variant.value]) for variant in ItemVariant
}


def item_spawn_count(floor: int) -> int:
    index = min(max(floor, 1), len(ITEM_SPAWN_COUNTS)) - 1
    return ITEM_SPAWN_COUNTS[index]


def spawn_items(state: GameState) -> list[Item]:
    """Replace the floor's items with a fresh weighted scatter.

    Items go on plain floor tiles that hold neither the player nor an enemy;
    the stairs tile is never a candidate.

    Returns:
        The newly placed items.
    """
    ctx = state.context
    occupied = {enemy.position for enemy in state.enemies}
    occupied.add(state.player.position)
    candidates = [
        pos for pos in state.dungeon.positions_of(TileType.FLOOR) if pos not in occupied
    ]
    ctx.rng.shuffle(candidates)

    count = min(item_spawn_count(state.milestone.floor), len(candidates))
    state.items = [
        create_item(ctx, random_item_variant(ctx), candidates[i]) for i in range(count)
    ]
    logger.debug("Items spawned", floor=state.milestone.floor, count=count)
    return state.items


def item_at(state: GameState, position: Position) -> Item | None:
    for item in state.items:
        if not item.picked_up and item.position == position:
            return item
    return None


def apply_item_effect(state: GameState, variant: ItemVariant) -> ItemEffect:
    """Heal and/or grant a buff. A new buff replaces one of the same type."""
    effect = ITEM_EFFECT_TABLE[variant]
    if effect.heal:
        state.player.heal_mh(effect.heal)
    if effect.buff is not None:
        state.active_buffs = [buff for buff in state.active_buffs if buff.type != effect.buff]
        state.active_buffs.append(
            ActiveBuff(
                type=effect.buff,
                source=variant,
                turns_remaining=effect.duration,
                multiplier=effect.multiplier,
                crash_damage=effect.crash_damage,
            )
        )
    return effect


def pick_up_item(state: GameState, position: Position) -> Item | None:
    """Pick up the item lying at ``position``, if any.

    Returns:
        The item picked up, or None when the tile is empty.
    """
    item = item_at(state, position)
    if item is None:
        return None

    item.picked_up = True
    effect = apply_item_effect(state, item.variant)
    summary = effect.describe()
    state.turn_events.append(ItemPickup(item=item.variant, effect=summary))
    state.add_log(f"Picked up {item.variant.display_name}! {summary}")
    logger.debug("Item picked up", item_id=item.id, variant=item.variant.value)
    return item


def tick_buffs(state: GameState) -> None:
    """Count down active buffs and expire the ones that run out.

    Expiring buffs with crash damage cost unmitigated MH.
    """
    remaining: list[ActiveBuff] = []
    for buff in state.active_buffs:
        buff.turns_remaining -= 1
        if buff.turns_remaining > 0:
            remaining.append(buff)
            continue

        crash = state.player.lose_mh(buff.crash_damage) if buff.crash_damage else 0
        state.turn_events.append(BuffExpired(buff=buff.type, source=buff.source, crash=crash))
        if crash:
            state.add_log(f"{buff.source.display_name} wore off. Crash! -{crash} MH")
        else:
            state.add_log(f"{buff.source.display_name} wore off.")
    state.active_buffs = remaining


def defense_buff_multiplier(state: GameState) -> float:
    """Product of all active defense_up multipliers applied to incoming damage."""
    multiplier = 1.0
    for buff in state.active_buffs:
        if buff.type == BuffType.DEFENSE_UP:
            multiplier *= buff.multiplier
    return multiplier


__all__ = [
    "ItemEffect",
    "ITEM_EFFECT_TABLE",
    "item_spawn_count",
    "spawn_items",
    "item_at",
    "apply_item_effect",
    "pick_up_item",
    "tick_buffs",
    "defense_buff_multiplier",
]
