"""Grid geometry primitives.

Positions are immutable integer grid coordinates. All distances in the game
are Manhattan distances and adjacency means exactly one orthogonal step.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class Position(BaseModel):
    """Integer grid coordinate.

    Frozen and hashable, so positions can be used in sets and as dict keys.
    Moving an entity means assigning it a new Position.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    x: int
    y: int

    def offset(self, dx: int, dy: int) -> Position:
        """Return the position shifted by (dx, dy)."""
        return Position(x=self.x + dx, y=self.y + dy)

    def step(self, direction: Direction) -> Position:
        """Return the neighbouring position in a cardinal direction."""
        return self.offset(direction.dx, direction.dy)

    def distance_to(self, other: Position) -> int:
        """Manhattan distance to another position."""
        return abs(self.x - other.x) + abs(self.y - other.y)

    def is_adjacent(self, other: Position) -> bool:
        """Whether the other position is one orthogonal step away."""
        return self.distance_to(other) == 1


class Direction(StrEnum):
    """The four cardinal unit moves."""

    NORTH = "north"
    SOUTH = "south"
    WEST = "west"
    EAST = "east"

    @property
    def dx(self) -> int:
        return _VECTORS[self][0]

    @property
    def dy(self) -> int:
        return _VECTORS[self][1]

    @classmethod
    def from_vector(cls, dx: int, dy: int) -> Direction:
        """Look up the direction for a unit vector.

        Raises:
            ValueError: If (dx, dy) is not a cardinal unit vector.
        """
        for direction, vector in _VECTORS.items():
            if vector == (dx, dy):
                return direction
        raise ValueError(f"Not a cardinal unit vector: ({dx}, {dy})")


_VECTORS = {
    Direction.NORTH: (0, -1),
    Direction.SOUTH: (0, 1),
    Direction.WEST: (-1, 0),
    Direction.EAST: (1, 0),
}


__all__ = [
    "Position",
    "Direction",
]
