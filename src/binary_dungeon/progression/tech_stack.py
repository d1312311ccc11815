"""Tech-stack upgrade rules.

Stacks are persistent upgrade tracks bought with lifetime XP between runs.
Reaching level n + 1 from level n costs ``(n + 1) * UPGRADE_COST_STEP`` XP.
"""

from __future__ import annotations

from dataclasses import dataclass

from binary_dungeon.core.constants import MAX_STACK_LEVEL, TECH_STACK_EFFECTS, UPGRADE_COST_STEP
from binary_dungeon.models.enums import TechStackType
from binary_dungeon.models.game_state import TechStacks


@dataclass(frozen=True)
class TechStackInfo:
    """Display metadata for a tech stack."""

    type: TechStackType
    name: str
    description: str
    effect_description: str


def _percent(stack: TechStackType) -> str:
    return f"{TECH_STACK_EFFECTS[stack.value] * 100:.0f}%"


TECH_STACK_INFO: list[TechStackInfo] = [
    TechStackInfo(
        type=TechStackType.PYTHON,
        name="Python",
        description="Debug MH efficiency",
        effect_description=f"-{_percent(TechStackType.PYTHON)} MH cost per level",
    ),
    TechStackInfo(
        type=TechStackType.CPP,
        name="C++",
        description="Hotfix power",
        effect_description=f"+{_percent(TechStackType.CPP)} damage per level",
    ),
    TechStackInfo(
        type=TechStackType.RUST,
        name="Rust",
        description="Refactor defense",
        effect_description=f"+{_percent(TechStackType.RUST)} defense per level",
    ),
    TechStackInfo(
        type=TechStackType.GO,
        name="Go",
        description="Google It efficiency",
        effect_description=f"-{_percent(TechStackType.GO)} DL cost per level",
    ),
]


def can_upgrade(stacks: TechStacks, stack: TechStackType) -> bool:
    return stacks.level(stack) < MAX_STACK_LEVEL


def upgrade_cost(level: int) -> int:
    """XP needed to go from ``level`` to ``level + 1``."""
    return (level + 1) * UPGRADE_COST_STEP


def upgrade_stack(stacks: TechStacks, stack: TechStackType) -> int:
    """Raise a stack by one level.

    Callers check ``can_upgrade`` and the XP balance first.

    Returns:
        The XP cost of the level just bought.
    """
    level = stacks.level(stack)
    stacks.set_level(stack, level + 1)
    return upgrade_cost(level)


__all__ = [
    "TechStackInfo",
    "TECH_STACK_INFO",
    "can_upgrade",
    "upgrade_cost",
    "upgrade_stack",
]
