"""Dungeon grid models.

A DungeonMap is a fixed-size, row-major grid of Tiles (``tiles[y][x]``).
Tile types are written only by the generator; visibility is written only by
the visibility engine and by the Google It reveal.
"""

from __future__ import annotations

from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict, Field, model_validator

from binary_dungeon.models.enums import TileType, Visibility
from binary_dungeon.models.geometry import Position


class Tile(BaseModel):
    """A single grid cell.

    Assignment is not validated: FOV rewrites visibility on every turn and
    the values written always come from the Visibility enum.
    """

    model_config = ConfigDict(extra="forbid")

    type: TileType = TileType.WALL
    visibility: Visibility = Visibility.HIDDEN


class Rect(BaseModel):
    """Axis-aligned rectangle used for BSP partitions and rooms."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    x: int
    y: int
    w: int = Field(ge=0)
    h: int = Field(ge=0)

    @property
    def center(self) -> Position:
        """Integer center, rounded toward the top-left."""
        return Position(x=self.x + self.w // 2, y=self.y + self.h // 2)

    def cells(self) -> Iterator[Position]:
        """Iterate every cell covered by the rectangle."""
        for y in range(self.y, self.y + self.h):
            for x in range(self.x, self.x + self.w):
                yield Position(x=x, y=y)


class DungeonMap(BaseModel):
    """The tile grid of one milestone floor."""

    model_config = ConfigDict(extra="forbid")

    width: int = Field(ge=1)
    height: int = Field(ge=1)
    tiles: list[list[Tile]]

    @model_validator(mode="after")
    def check_dimensions(self) -> DungeonMap:
        """Ensure the grid matches the declared size."""
        if len(self.tiles) != self.height or any(len(row) != self.width for row in self.tiles):
            raise ValueError(
                f"tile grid does not match {self.width}x{self.height}"
            )
        return self

    @classmethod
    def filled(
        cls,
        width: int,
        height: int,
        tile_type: TileType = TileType.WALL,
    ) -> DungeonMap:
        """Create a grid where every tile has the same type and is hidden."""
        tiles = [[Tile(type=tile_type) for _ in range(width)] for _ in range(height)]
        return cls(width=width, height=height, tiles=tiles)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def tile_at(self, x: int, y: int) -> Tile | None:
        """Get the tile at (x, y), or None when out of bounds."""
        if not self.in_bounds(x, y):
            return None
        return self.tiles[y][x]

    def is_opaque(self, x: int, y: int) -> bool:
        """Whether (x, y) blocks sight. Out-of-bounds cells are opaque."""
        tile = self.tile_at(x, y)
        return tile is None or tile.type.is_opaque

    def is_walkable(self, x: int, y: int) -> bool:
        """Whether (x, y) is in bounds and not a wall or void."""
        tile = self.tile_at(x, y)
        return tile is not None and tile.type.is_walkable

    def set_visible(self, x: int, y: int) -> None:
        """Mark a tile visible; out-of-bounds coordinates are ignored."""
        tile = self.tile_at(x, y)
        if tile is not None:
            tile.visibility = Visibility.VISIBLE

    def iter_tiles(self) -> Iterator[tuple[int, int, Tile]]:
        """Iterate ``(x, y, tile)`` in row-major order."""
        for y, row in enumerate(self.tiles):
            for x, tile in enumerate(row):
                yield x, y, tile

    def positions_of(self, tile_type: TileType) -> list[Position]:
        """All positions holding the given tile type, row-major."""
        return [Position(x=x, y=y) for x, y, tile in self.iter_tiles() if tile.type == tile_type]

    def count_visibility(self, visibility: Visibility) -> int:
        return sum(1 for _, _, tile in self.iter_tiles() if tile.visibility == visibility)


__all__ = [
    "Tile",
    "Rect",
    "DungeonMap",
]
