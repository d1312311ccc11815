"""Tests for dungeon grid models."""

from __future__ import annotations

import pytest

from binary_dungeon.models.dungeon import DungeonMap, Rect, Tile
from binary_dungeon.models.enums import TileType, Visibility
from binary_dungeon.models.geometry import Position


class TestTileType:
    """Tests for tile type properties."""

    @pytest.mark.parametrize(
        ("tile_type", "opaque"),
        [
            (TileType.WALL, True),
            (TileType.VOID, True),
            (TileType.FLOOR, False),
            (TileType.STAIRS, False),
        ],
    )
    def test_opacity(self, tile_type: TileType, opaque: bool) -> None:
        """Test walls and void block sight and movement."""
        assert tile_type.is_opaque is opaque
        assert tile_type.is_walkable is not opaque


class TestRect:
    """Tests for Rect."""

    def test_center_rounds_down(self) -> None:
        """Test the center uses integer division."""
        assert Rect(x=2, y=3, w=5, h=4).center == Position(x=4, y=5)

    def test_cells(self) -> None:
        """Test every covered cell is yielded."""
        cells = list(Rect(x=1, y=1, w=2, h=3).cells())
        assert len(cells) == 6
        assert Position(x=2, y=3) in cells


class TestDungeonMap:
    """Tests for DungeonMap queries."""

    def test_filled(self) -> None:
        """Test a filled map is uniform and hidden."""
        dungeon = DungeonMap.filled(4, 3)
        assert all(
            tile.type == TileType.WALL and tile.visibility == Visibility.HIDDEN
            for _, _, tile in dungeon.iter_tiles()
        )

    def test_dimension_mismatch_rejected(self) -> None:
        """Test the grid must match the declared size."""
        with pytest.raises(ValueError):
            DungeonMap(width=2, height=2, tiles=[[Tile(), Tile()]])

    def test_out_of_bounds_queries(self, open_dungeon: DungeonMap) -> None:
        """Test out-of-bounds cells are opaque, unwalkable and tileless."""
        assert open_dungeon.tile_at(-1, 0) is None
        assert open_dungeon.is_opaque(100, 100)
        assert not open_dungeon.is_walkable(-1, 5)

    def test_walkable_floor(self, open_dungeon: DungeonMap) -> None:
        """Test interior floor is walkable and the border is not."""
        assert open_dungeon.is_walkable(1, 1)
        assert not open_dungeon.is_walkable(0, 0)

    def test_set_visible_ignores_out_of_bounds(self, open_dungeon: DungeonMap) -> None:
        """Test setting visibility off-grid is a no-op."""
        open_dungeon.set_visible(-5, -5)
        assert open_dungeon.count_visibility(Visibility.VISIBLE) == 0

    def test_positions_of(self, open_dungeon: DungeonMap) -> None:
        """Test positions_of counts interior floor."""
        assert len(open_dungeon.positions_of(TileType.FLOOR)) == 18 * 8
