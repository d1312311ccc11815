"""Field of view by recursive shadow casting.

Each of the eight octants around the origin is scanned row by row, outward
to the radius. Opaque cells (walls, void and anything off the grid) narrow
the visible slope window for the rows behind them.

Example:
    >>> compute_fov(state.dungeon, state.player.position)
    >>> state.dungeon.tile_at(state.player.position.x, state.player.position.y).visibility
    <Visibility.VISIBLE: 'visible'>
"""

from __future__ import annotations

from binary_dungeon.core.constants import FOV_RADIUS
from binary_dungeon.models.dungeon import DungeonMap
from binary_dungeon.models.enums import Visibility
from binary_dungeon.models.geometry import Position


# (xx, xy, yx, yy) multipliers mapping octant-local (dx, dy) to grid offsets.
OCTANT_TRANSFORMS: tuple[tuple[int, int, int, int], ...] = (
    (1, 0, 0, 1),
    (0, 1, 1, 0),
    (0, -1, 1, 0),
    (-1, 0, 0, 1),
    (-1, 0, 0, -1),
    (0, -1, -1, 0),
    (0, 1, -1, 0),
    (1, 0, 0, -1),
)


def _cast_light(
    dungeon: DungeonMap,
    origin: Position,
    transform: tuple[int, int, int, int],
    row: int,
    start_slope: float,
    end_slope: float,
    radius: int,
) -> None:
    if start_slope < end_slope:
        return

    xx, xy, yx, yy = transform
    radius_sq = radius * radius
    next_start = start_slope

    for distance in range(row, radius + 1):
        blocked = False
        dy = -distance
        for dx in range(-distance, 1):
            map_x = origin.x + dx * xx + dy * xy
            map_y = origin.y + dx * yx + dy * yy
            left_slope = (dx - 0.5) / (dy + 0.5)
            right_slope = (dx + 0.5) / (dy - 0.5)

            if next_start < right_slope:
                continue
            if end_slope > left_slope:
                break

            if dx * dx + dy * dy <= radius_sq:
                dungeon.set_visible(map_x, map_y)

            opaque = dungeon.is_opaque(map_x, map_y)
            if blocked:
                if opaque:
                    next_start = right_slope
                    continue
                blocked = False
            elif opaque and distance < radius:
                blocked = True
                _cast_light(
                    dungeon,
                    origin,
                    transform,
                    distance + 1,
                    next_start,
                    left_slope,
                    radius,
                )
                next_start = right_slope

        if blocked:
            break


def compute_fov(dungeon: DungeonMap, origin: Position, radius: int = FOV_RADIUS) -> None:
    """Recompute visibility around ``origin`` in place.

    Tiles that were visible become explored, the origin becomes visible, and
    every tile reached by the shadow cast becomes visible. Hidden tiles are
    never written except to make them visible, so explored state only grows.

    Args:
        dungeon: Map whose tile visibility is updated.
        origin: Viewer position.
        radius: Euclidean sight radius in tiles.
    """
    for _, _, tile in dungeon.iter_tiles():
        if tile.visibility == Visibility.VISIBLE:
            tile.visibility = Visibility.EXPLORED

    dungeon.set_visible(origin.x, origin.y)

    for transform in OCTANT_TRANSFORMS:
        _cast_light(dungeon, origin, transform, 1, 1.0, 0.0, radius)


__all__ = [
    "OCTANT_TRANSFORMS",
    "compute_fov",
]
