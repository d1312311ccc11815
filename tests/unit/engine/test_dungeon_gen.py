"""Tests for BSP dungeon generation."""

from __future__ import annotations

from collections import deque

import pytest

from binary_dungeon.core.exceptions import DungeonGenerationError
from binary_dungeon.engine.dungeon_gen import (
    BSPNode,
    GeneratedDungeon,
    carve_corridor,
    generate_dungeon,
)
from binary_dungeon.models.dungeon import DungeonMap, Rect
from binary_dungeon.models.entities import GenerationContext
from binary_dungeon.models.enums import TileType, Visibility
from binary_dungeon.models.geometry import Position


SEEDS = range(40)


def _reachable(dungeon: DungeonMap, start: Position) -> set[Position]:
    seen = {start}
    queue = deque([start])
    while queue:
        pos = queue.popleft()
        for dx, dy in ((0, 1), (0, -1), (1, 0), (-1, 0)):
            nxt = pos.offset(dx, dy)
            if nxt not in seen and dungeon.is_walkable(nxt.x, nxt.y):
                seen.add(nxt)
                queue.append(nxt)
    return seen


def _walkable(dungeon: DungeonMap) -> set[Position]:
    return {
        Position(x=x, y=y) for x, y, tile in dungeon.iter_tiles() if tile.type.is_walkable
    }


class TestGenerateDungeon:
    """Tests for generate_dungeon across many seeds."""

    @pytest.mark.parametrize("seed", SEEDS)
    def test_all_walkable_tiles_connected(self, seed: int) -> None:
        """Test every floor and stairs tile is reachable from the start."""
        generated = generate_dungeon(GenerationContext(seed=seed))
        reachable = _reachable(generated.dungeon, generated.player_start)
        assert reachable == _walkable(generated.dungeon)

    @pytest.mark.parametrize("seed", SEEDS)
    def test_rooms_inside_border(self, seed: int) -> None:
        """Test rooms never touch the outer edge and the border stays wall."""
        generated = generate_dungeon(GenerationContext(seed=seed))
        dungeon = generated.dungeon
        for room in generated.rooms:
            assert room.x >= 1 and room.y >= 1
            assert room.x + room.w <= dungeon.width - 1
            assert room.y + room.h <= dungeon.height - 1
        for x, y, tile in dungeon.iter_tiles():
            if x in (0, dungeon.width - 1) or y in (0, dungeon.height - 1):
                assert tile.type == TileType.WALL

    @pytest.mark.parametrize("seed", SEEDS)
    def test_start_and_stairs(self, seed: int) -> None:
        """Test the start is a room center and exactly one stairs tile exists."""
        generated = generate_dungeon(GenerationContext(seed=seed))
        dungeon = generated.dungeon

        assert generated.rooms
        assert generated.player_start == generated.rooms[0].center
        assert generated.stairs_position == generated.rooms[-1].center
        assert dungeon.positions_of(TileType.STAIRS) == [generated.stairs_position]
        assert dungeon.is_walkable(generated.player_start.x, generated.player_start.y)

    def test_room_sizes(self) -> None:
        """Test room edges respect the size clamps."""
        for seed in SEEDS:
            for room in generate_dungeon(GenerationContext(seed=seed)).rooms:
                assert 1 <= room.w <= 10
                assert 1 <= room.h <= 8

    def test_everything_hidden(self) -> None:
        """Test a new floor starts unexplored."""
        generated = generate_dungeon(GenerationContext(seed=0))
        assert generated.dungeon.count_visibility(Visibility.HIDDEN) == 50 * 20

    def test_deterministic_for_seed(self) -> None:
        """Test equal seeds give identical floors."""
        a = generate_dungeon(GenerationContext(seed=9))
        b = generate_dungeon(GenerationContext(seed=9))
        assert a.dungeon == b.dungeon
        assert a.rooms == b.rooms

    def test_custom_size(self) -> None:
        """Test generation honours the requested dimensions."""
        generated = generate_dungeon(GenerationContext(seed=2), 20, 10)
        assert isinstance(generated, GeneratedDungeon)
        assert (generated.dungeon.width, generated.dungeon.height) == (20, 10)

    def test_tiny_grid_single_room(self) -> None:
        """Test a grid too small to split still gets one room."""
        generated = generate_dungeon(GenerationContext(seed=1), 3, 3)
        assert generated.rooms == [Rect(x=1, y=1, w=1, h=1)]
        assert generated.player_start == Position(x=1, y=1)

    def test_too_small_raises(self) -> None:
        """Test a grid that cannot hold a room is rejected."""
        with pytest.raises(DungeonGenerationError) as exc_info:
            generate_dungeon(GenerationContext(seed=1), 2, 2)
        assert exc_info.value.details == {"width": 2, "height": 2}


class TestBSPHelpers:
    """Tests for the BSP tree and corridor helpers."""

    def test_first_room_pre_order(self) -> None:
        """Test the first room is found left-first."""
        left_room = Rect(x=1, y=1, w=2, h=2)
        right_room = Rect(x=10, y=1, w=2, h=2)
        root = BSPNode(
            rect=Rect(x=0, y=0, w=20, h=10),
            left=BSPNode(rect=Rect(x=0, y=0, w=10, h=10), room=left_room),
            right=BSPNode(rect=Rect(x=10, y=0, w=10, h=10), room=right_room),
        )
        assert not root.is_leaf
        assert root.first_room() == left_room
        assert list(root.rooms()) == [left_room, right_room]

    def test_corridor_is_l_shaped(self) -> None:
        """Test corridors run along X first, then Y."""
        dungeon = DungeonMap.filled(10, 10)
        carve_corridor(dungeon, Position(x=1, y=1), Position(x=4, y=3))

        carved = set(dungeon.positions_of(TileType.FLOOR))
        assert carved == {
            Position(x=1, y=1),
            Position(x=2, y=1),
            Position(x=3, y=1),
            Position(x=4, y=1),
            Position(x=4, y=2),
        }
