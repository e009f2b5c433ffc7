"""Data container for dungeon layout state."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Tuple

from dungeon_geometry import Rect, TilePos
from dungeon_models import GridCell, Room, TileKind


class DungeonLayout:
    """Stores the mutable tile grid and rooms while a dungeon is being generated.

    The grid is stored row-major as ``grid[z][x]``. Only the generation
    pipeline writes to it; consumers receive the tuple snapshot from
    :meth:`freeze`.
    """

    def __init__(self, width: int, length: int) -> None:
        if width <= 0 or length <= 0:
            raise ValueError("DungeonLayout width and length must be positive")
        self.width = width
        self.length = length
        self.rooms: Dict[GridCell, Room] = {}
        self.grid: List[List[TileKind]] = [
            [TileKind.EMPTY for _ in range(width)] for _ in range(length)
        ]

    def is_in_bounds(self, tile: TilePos) -> bool:
        return 0 <= tile.x < self.width and 0 <= tile.z < self.length

    def _check_bounds(self, tile: TilePos) -> None:
        if not self.is_in_bounds(tile):
            raise IndexError(
                f"Tile {tile.to_tuple()} out of range for {self.width}x{self.length} layout"
            )

    def tile_at(self, x: int, z: int) -> TileKind:
        self._check_bounds(TilePos(x, z))
        return self.grid[z][x]

    def mark_floor(self, tile: TilePos) -> bool:
        """Mark ``tile`` as floor; return True if it was not floor already."""
        self._check_bounds(tile)
        row = self.grid[tile.z]
        if row[tile.x] is TileKind.FLOOR:
            return False
        row[tile.x] = TileKind.FLOOR
        return True

    def mark_rect(self, rect: Rect) -> int:
        """Rasterize a rectangle as floor and return the number of newly marked tiles."""
        return sum(1 for tile in rect.tiles() if self.mark_floor(tile))

    def mark_path(self, path: Iterable[TilePos]) -> int:
        """Rasterize a corridor path as floor and return the number of newly marked tiles."""
        return sum(1 for tile in path if self.mark_floor(tile))

    def register_room(self, room: Room) -> None:
        if room.cell in self.rooms:
            raise ValueError(f"Grid cell {room.cell} already holds a room")
        bounds = room.get_bounds()
        if not (self.is_in_bounds(TilePos(bounds.x, bounds.z))
                and self.is_in_bounds(TilePos(bounds.max_x - 1, bounds.max_z - 1))):
            raise IndexError(f"Room {bounds.to_tuple()} does not fit inside the layout")
        self.rooms[room.cell] = room
        self.mark_rect(bounds)

    def floor_tiles(self) -> Iterator[TilePos]:
        for z, row in enumerate(self.grid):
            for x, kind in enumerate(row):
                if kind is TileKind.FLOOR:
                    yield TilePos(x, z)

    def count(self, kind: TileKind) -> int:
        return sum(1 for row in self.grid for tile in row if tile is kind)

    def freeze(self) -> Tuple[Tuple[TileKind, ...], ...]:
        """Return an immutable copy of the grid for hand-off to consumers."""
        return tuple(tuple(row) for row in self.grid)
