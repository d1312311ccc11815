"""Input events and per-turn render events.

Both are closed tagged unions discriminated on a literal field, so an input
adapter can build them from plain dicts with ``parse_game_event`` and the
turn loop can dispatch on the concrete class.

GameEvent:
    What the player asked for (start, move, act, wait, invest, finish,
    new game).
TurnEvent:
    What happened during the most recent ``process_turn`` call, for the
    renderer. Cleared at the start of every call.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from binary_dungeon.core.exceptions import ValidationError
from binary_dungeon.models.enums import ActionType, BuffType, ItemVariant, TechStackType
from binary_dungeon.models.geometry import Direction


# =============================================================================
# Input Events
# =============================================================================


class _Event(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class StartGame(_Event):
    """Leave the title screen, or acknowledge game over."""

    type: Literal["start_game"] = "start_game"


class Move(_Event):
    """Step one tile in a cardinal direction."""

    type: Literal["move"] = "move"
    direction: Direction


class Action(_Event):
    """Perform a combat or utility action."""

    type: Literal["action"] = "action"
    action: ActionType


class Wait(_Event):
    """Pass the turn."""

    type: Literal["wait"] = "wait"


class InvestXp(_Event):
    """Buy one level of a tech stack."""

    type: Literal["invest_xp"] = "invest_xp"
    stack: TechStackType


class FinishInvest(_Event):
    """Leave the investment screen and start a new run."""

    type: Literal["finish_invest"] = "finish_invest"


class NewGame(_Event):
    """Start a new run straight away from game over or investment."""

    type: Literal["new_game"] = "new_game"


GameEvent = Annotated[
    Union[StartGame, Move, Action, Wait, InvestXp, FinishInvest, NewGame],
    Field(discriminator="type"),
]

_game_event_adapter: TypeAdapter[Any] = TypeAdapter(GameEvent)


def parse_game_event(data: Any) -> GameEvent:
    """Build a GameEvent from a plain mapping.

    Example:
        >>> parse_game_event({"type": "move", "direction": "north"})
        Move(type='move', direction=<Direction.NORTH: 'north'>)

    Raises:
        ValidationError: If the input is not a mapping describing a known event.
    """
    try:
        return _game_event_adapter.validate_python(data)
    except PydanticValidationError as exc:
        errors = exc.errors()
        field_name = ".".join(str(part) for part in errors[0]["loc"]) if errors else None
        raise ValidationError(
            f"Invalid game event: {exc.error_count()} error(s)",
            field_name=field_name,
            invalid_value=data.get("type") if isinstance(data, dict) else None,
        ) from exc


# =============================================================================
# Turn Events
# =============================================================================


class ActionPerformed(_Event):
    kind: Literal["action"] = "action"
    label: str


class DamageDealt(_Event):
    kind: Literal["damage_dealt"] = "damage_dealt"
    target: str
    amount: int
    killed: bool


class DamageTaken(_Event):
    kind: Literal["damage_taken"] = "damage_taken"
    source: str
    amount: int


class Healed(_Event):
    kind: Literal["heal"] = "heal"
    amount: int


class Moved(_Event):
    kind: Literal["move"] = "move"
    direction: Direction


class Waited(_Event):
    kind: Literal["wait"] = "wait"


class StunnedSkip(_Event):
    kind: Literal["stunned"] = "stunned"


class BurnoutTick(_Event):
    kind: Literal["burnout_tick"] = "burnout_tick"
    amount: int


class ItemPickup(_Event):
    kind: Literal["item_pickup"] = "item_pickup"
    item: ItemVariant
    effect: str


class BuffExpired(_Event):
    kind: Literal["buff_expired"] = "buff_expired"
    buff: BuffType
    source: ItemVariant
    crash: int = 0


TurnEvent = Annotated[
    Union[
        ActionPerformed,
        DamageDealt,
        DamageTaken,
        Healed,
        Moved,
        Waited,
        StunnedSkip,
        BurnoutTick,
        ItemPickup,
        BuffExpired,
    ],
    Field(discriminator="kind"),
]


__all__ = [
    # Input events
    "StartGame",
    "Move",
    "Action",
    "Wait",
    "InvestXp",
    "FinishInvest",
    "NewGame",
    "GameEvent",
    "parse_game_event",
    # Turn events
    "ActionPerformed",
    "DamageDealt",
    "DamageTaken",
    "Healed",
    "Moved",
    "Waited",
    "StunnedSkip",
    "BurnoutTick",
    "ItemPickup",
    "BuffExpired",
    "TurnEvent",
]
