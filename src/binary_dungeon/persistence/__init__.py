"""Persistent progression snapshot (no file I/O)."""

from __future__ import annotations

from binary_dungeon.persistence.snapshot import (
    SaveData,
    apply_save_data,
    extract_save_data,
    load_save_data_or_default,
    parse_save_data,
)


__all__ = [
    "SaveData",
    "extract_save_data",
    "parse_save_data",
    "load_save_data_or_default",
    "apply_save_data",
]
