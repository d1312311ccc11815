"""Persistent progression: tech-stack upgrades, XP accounting and titles."""

from __future__ import annotations

from binary_dungeon.progression.tech_stack import (
    TECH_STACK_INFO,
    TechStackInfo,
    can_upgrade,
    upgrade_cost,
    upgrade_stack,
)
from binary_dungeon.progression.xp import (
    available_xp,
    spent_xp,
    title_for_levels,
    update_title,
)


__all__ = [
    "TechStackInfo",
    "TECH_STACK_INFO",
    "can_upgrade",
    "upgrade_cost",
    "upgrade_stack",
    "spent_xp",
    "available_xp",
    "title_for_levels",
    "update_title",
]
