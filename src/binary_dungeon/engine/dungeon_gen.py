"""Procedural dungeon generation by binary space partitioning.

The full grid is split recursively into partitions, each leaf gets one room,
and sibling subtrees are joined by L-shaped corridors. Because every internal
node links one room of its left subtree to one room of its right subtree,
all rooms end up connected.

Example:
    >>> ctx = GenerationContext(seed=1)
    >>> generated = generate_dungeon(ctx)
    >>> generated.dungeon.tile_at(generated.stairs_position.x, generated.stairs_position.y).type
    <TileType.STAIRS: 'stairs'>
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from binary_dungeon.core.constants import (
    BSP_MAX_ROOM_HEIGHT,
    BSP_MAX_ROOM_WIDTH,
    BSP_MIN_ROOM_SIZE,
    BSP_SPLIT_DEPTH,
    DUNGEON_HEIGHT,
    DUNGEON_WIDTH,
)
from binary_dungeon.core.exceptions import DungeonGenerationError
from binary_dungeon.core.logging import get_logger
from binary_dungeon.models.dungeon import DungeonMap, Rect
from binary_dungeon.models.entities import GenerationContext
from binary_dungeon.models.enums import TileType
from binary_dungeon.models.geometry import Position


logger = get_logger(__name__)


# =============================================================================
# BSP Tree
# =============================================================================


@dataclass
class BSPNode:
    """A partition of the grid.

    Each node owns its two children outright; leaves carry a room.
    """

    rect: Rect
    left: BSPNode | None = None
    right: BSPNode | None = None
    room: Rect | None = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None or self.right is None

    def first_room(self) -> Rect | None:
        """First room found in pre-order."""
        if self.room is not None:
            return self.room
        for child in (self.left, self.right):
            if child is not None:
                room = child.first_room()
                if room is not None:
                    return room
        return None

    def rooms(self) -> Iterator[Rect]:
        """Yield every room in pre-order."""
        if self.room is not None:
            yield self.room
        if self.left is not None:
            yield from self.left.rooms()
        if self.right is not None:
            yield from self.right.rooms()


@dataclass
class GeneratedDungeon:
    """Result of a generation pass."""

    dungeon: DungeonMap
    player_start: Position
    stairs_position: Position
    rooms: list[Rect]


def _split(node: BSPNode, depth: int, ctx: GenerationContext) -> None:
    if depth <= 0:
        return

    rect = node.rect
    threshold = BSP_MIN_ROOM_SIZE * 2 + 2
    can_split_h = rect.h >= threshold
    can_split_v = rect.w >= threshold
    if not can_split_h and not can_split_v:
        return

    if can_split_h and can_split_v:
        if rect.h > rect.w:
            horizontal = True
        elif rect.w > rect.h:
            horizontal = False
        else:
            horizontal = ctx.rng.random() > 0.5
    else:
        horizontal = can_split_h

    if horizontal:
        low = rect.y + BSP_MIN_ROOM_SIZE + 1
        high = rect.y + rect.h - BSP_MIN_ROOM_SIZE - 1
        if low >= high:
            return
        split = ctx.rand_int(low, high)
        node.left = BSPNode(rect=Rect(x=rect.x, y=rect.y, w=rect.w, h=split - rect.y))
        node.right = BSPNode(rect=Rect(x=rect.x, y=split, w=rect.w, h=rect.y + rect.h - split))
    else:
        low = rect.x + BSP_MIN_ROOM_SIZE + 1
        high = rect.x + rect.w - BSP_MIN_ROOM_SIZE - 1
        if low >= high:
            return
        split = ctx.rand_int(low, high)
        node.left = BSPNode(rect=Rect(x=rect.x, y=rect.y, w=split - rect.x, h=rect.h))
        node.right = BSPNode(rect=Rect(x=split, y=rect.y, w=rect.x + rect.w - split, h=rect.h))

    _split(node.left, depth - 1, ctx)
    _split(node.right, depth - 1, ctx)


def _place_rooms(node: BSPNode, ctx: GenerationContext) -> None:
    if node.left is not None and node.right is not None:
        _place_rooms(node.left, ctx)
        _place_rooms(node.right, ctx)
        return

    rect = node.rect
    room_w = ctx.rand_int(min(BSP_MIN_ROOM_SIZE, rect.w - 2), min(rect.w - 2, BSP_MAX_ROOM_WIDTH))
    room_h = ctx.rand_int(min(BSP_MIN_ROOM_SIZE, rect.h - 2), min(rect.h - 2, BSP_MAX_ROOM_HEIGHT))
    room_x = ctx.rand_int(rect.x + 1, rect.x + rect.w - room_w - 1)
    room_y = ctx.rand_int(rect.y + 1, rect.y + rect.h - room_h - 1)
    node.room = Rect(x=room_x, y=room_y, w=room_w, h=room_h)


# =============================================================================
# Carving
# =============================================================================


def _carve(dungeon: DungeonMap, x: int, y: int, tile_type: TileType = TileType.FLOOR) -> None:
    tile = dungeon.tile_at(x, y)
    if tile is not None:
        tile.type = tile_type


def carve_corridor(dungeon: DungeonMap, start: Position, end: Position) -> None:
    """Carve an L-shaped corridor, horizontal leg first.

    The end cell itself is not carved; it is always a room center, which the
    room pass carves.
    """
    x, y = start.x, start.y
    while x != end.x:
        _carve(dungeon, x, y)
        x += 1 if x < end.x else -1
    while y != end.y:
        _carve(dungeon, x, y)
        y += 1 if y < end.y else -1


def _connect(node: BSPNode, dungeon: DungeonMap) -> None:
    if node.left is None or node.right is None:
        return

    _connect(node.left, dungeon)
    _connect(node.right, dungeon)

    left_room = node.left.first_room()
    right_room = node.right.first_room()
    if left_room is not None and right_room is not None:
        carve_corridor(dungeon, left_room.center, right_room.center)


def generate_dungeon(
    ctx: GenerationContext,
    width: int = DUNGEON_WIDTH,
    height: int = DUNGEON_HEIGHT,
) -> GeneratedDungeon:
    """Generate a fresh floor.

    The player starts at the center of the first room and the stairs sit at
    the center of the last room, both in pre-order.

    Args:
        ctx: Random source for splits and room placement.
        width: Grid width in tiles.
        height: Grid height in tiles.

    Returns:
        The carved map with start, stairs and room metadata.

    Raises:
        DungeonGenerationError: If the grid cannot hold a single room.
    """
    if width < 3 or height < 3:
        raise DungeonGenerationError(
            f"Grid {width}x{height} is too small to hold a room",
            width=width,
            height=height,
        )

    dungeon = DungeonMap.filled(width, height, TileType.WALL)
    root = BSPNode(rect=Rect(x=0, y=0, w=width, h=height))

    _split(root, BSP_SPLIT_DEPTH, ctx)
    _place_rooms(root, ctx)
    _connect(root, dungeon)

    rooms = list(root.rooms())
    for room in rooms:
        for cell in room.cells():
            _carve(dungeon, cell.x, cell.y)

    if rooms:
        player_start = rooms[0].center
        stairs_position = rooms[-1].center
    else:
        player_start = Position(x=1, y=1)
        stairs_position = Position(x=width - 2, y=height - 2)
    _carve(dungeon, stairs_position.x, stairs_position.y, TileType.STAIRS)

    logger.debug(
        "Dungeon generated",
        width=width,
        height=height,
        rooms=len(rooms),
        player_start=(player_start.x, player_start.y),
        stairs=(stairs_position.x, stairs_position.y),
    )
    return GeneratedDungeon(
        dungeon=dungeon,
        player_start=player_start,
        stairs_position=stairs_position,
        rooms=rooms,
    )


__all__ = [
    "BSPNode",
    "GeneratedDungeon",
    "carve_corridor",
    "generate_dungeon",
]
