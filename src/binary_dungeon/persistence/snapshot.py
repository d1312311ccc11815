"""Persistent save snapshot.

Only progression survives between sessions: tech stacks, lifetime XP, title,
the tamper flag and the highest milestone reached. Reading and writing the
file and verifying its signature happen outside the engine; this module
only converts between GameState and the validated SaveData model.

Example:
    >>> data = extract_save_data(state)
    >>> raw = data.model_dump(mode="json")
    >>> apply_save_data(fresh_state, parse_save_data(raw), tampered=False)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from binary_dungeon.core.constants import TAMPERED_TITLE, TITLES
from binary_dungeon.core.exceptions import InvalidGameStateError, SaveDataError
from binary_dungeon.core.logging import get_logger
from binary_dungeon.models.enums import GamePhase
from binary_dungeon.models.game_state import GameState, TechStacks


logger = get_logger(__name__)


class SaveData(BaseModel):
    """Validated progression snapshot.

    Attributes:
        tech_stacks: Persistent upgrade levels.
        total_xp: Lifetime XP earned.
        title: Career title at save time.
        script_kiddie: Tamper flag carried over from earlier sessions.
        highest_milestone: Deepest floor reached across all runs.
    """

    model_config = ConfigDict(extra="forbid")

    tech_stacks: TechStacks = Field(default_factory=TechStacks)
    total_xp: int = Field(default=0, ge=0)
    title: str = TITLES[0]
    script_kiddie: bool = False
    highest_milestone: int = Field(default=1, ge=1)


def extract_save_data(state: GameState) -> SaveData:
    """Take a snapshot of the state's persistent progression."""
    return SaveData(
        tech_stacks=state.tech_stacks.model_copy(),
        total_xp=state.total_xp,
        title=state.title,
        script_kiddie=state.script_kiddie,
        highest_milestone=state.highest_milestone,
    )


def parse_save_data(raw: Mapping[str, Any]) -> SaveData:
    """Validate a raw mapping read from storage.

    Raises:
        SaveDataError: If the mapping does not describe a valid snapshot.
    """
    try:
        return SaveData.model_validate(dict(raw))
    except PydanticValidationError as exc:
        errors = exc.errors()
        field_name = ".".join(str(part) for part in errors[0]["loc"]) if errors else None
        raise SaveDataError(
            f"Invalid save data: {exc.error_count()} error(s)",
            field_name=field_name,
            details={"errors": [error["msg"] for error in errors]},
        ) from exc


def load_save_data_or_default(raw: Mapping[str, Any] | None) -> SaveData:
    """Parse a snapshot, falling back to a fresh one when absent or invalid."""
    if raw is None:
        return SaveData()
    try:
        return parse_save_data(raw)
    except SaveDataError as exc:
        logger.warning("Discarding invalid save data", error=exc.message, **exc.details)
        return SaveData()


def apply_save_data(state: GameState, data: SaveData, *, tampered: bool) -> None:
    """Load persistent progression into a state on the title screen.

    A snapshot that failed verification still restores progression, but it
    sets the tamper flag for good and pins the title.

    Raises:
        InvalidGameStateError: If the state has already left the title screen.
    """
    if state.phase != GamePhase.TITLE:
        raise InvalidGameStateError(
            "Save data can only be applied on the title screen",
            current_state=state.phase.value,
            expected_states=[GamePhase.TITLE.value],
        )

    state.tech_stacks = data.tech_stacks.model_copy()
    state.total_xp = data.total_xp
    state.highest_milestone = max(state.highest_milestone, data.highest_milestone)
    state.title = data.title

    if tampered:
        state.script_kiddie = True
        state.title = TAMPERED_TITLE
        state.add_log("WARNING: Save data tampering detected!")
        state.add_log(f"Your title is now permanently '{TAMPERED_TITLE}'.")
        logger.warning("Tampered save applied", total_xp=data.total_xp)
    else:
        state.script_kiddie = data.script_kiddie
        if data.script_kiddie:
            state.title = TAMPERED_TITLE
        logger.info("Save applied", total_xp=data.total_xp, title=state.title)


__all__ = [
    "SaveData",
    "extract_save_data",
    "parse_save_data",
    "load_save_data_or_default",
    "apply_save_data",
]
