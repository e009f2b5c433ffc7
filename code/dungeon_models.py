"""Core dataclasses used by the dungeon generator."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Mapping, Optional, Tuple

from dungeon_geometry import Rect, TilePos

if TYPE_CHECKING:
    from room_graph import RoomGraph


class TileKind(Enum):
    """Classification of a single tile in the dungeon layout grid."""
    EMPTY = 0
    FLOOR = 1


class ConnectionAxis(Enum):
    """Which neighbouring grid cell a corridor links to."""
    NORTH_SOUTH = "north_south"
    EAST_WEST = "east_west"


@dataclass(frozen=True, order=True)
class GridCell:
    """One slot of the level partition; holds exactly one room."""

    x: int
    z: int

    def origin(self, cell_size: int) -> TilePos:
        return TilePos(self.x * cell_size, self.z * cell_size)

    def bounds(self, cell_size: int) -> Rect:
        origin = self.origin(cell_size)
        return Rect(origin.x, origin.z, cell_size, cell_size)


@dataclass(frozen=True)
class Room:
    """A rectangular room placed inside its owning grid cell."""

    cell: GridCell
    x: int
    z: int
    width: int
    length: int

    def get_bounds(self) -> Rect:
        return Rect(self.x, self.z, self.width, self.length)

    @property
    def mid_x(self) -> int:
        return self.x + self.width // 2

    @property
    def mid_z(self) -> int:
        return self.z + self.length // 2

    def north_edge_mid(self) -> TilePos:
        """Middle tile of the room's northernmost row."""
        return TilePos(self.mid_x, self.z + self.length - 1)

    def south_edge_mid(self) -> TilePos:
        return TilePos(self.mid_x, self.z)

    def east_edge_mid(self) -> TilePos:
        return TilePos(self.x + self.width - 1, self.mid_z)

    def west_edge_mid(self) -> TilePos:
        return TilePos(self.x, self.mid_z)


@dataclass(frozen=True)
class RoomConnection:
    """A corridor found between the rooms of two adjacent grid cells."""

    cell_a: GridCell
    cell_b: GridCell
    axis: ConnectionAxis
    path: Tuple[TilePos, ...]

    @property
    def start(self) -> TilePos:
        return self.path[0]

    @property
    def goal(self) -> TilePos:
        return self.path[-1]


@dataclass
class ConnectionReport:
    """Outcome of connecting every pair of grid-adjacent rooms."""

    connections: List[RoomConnection] = field(default_factory=list)
    unconnected: List[Tuple[GridCell, GridCell]] = field(default_factory=list)
    searches_attempted: int = 0

    @property
    def fully_connected(self) -> bool:
        return not self.unconnected

    def connected_pairs(self) -> List[Tuple[GridCell, GridCell]]:
        return [(connection.cell_a, connection.cell_b) for connection in self.connections]


@dataclass(frozen=True)
class FloorPlan:
    """Finished, read-only result of a generation run."""

    rooms: Mapping[GridCell, Room]
    room_graph: RoomGraph
    tiles: Tuple[Tuple[TileKind, ...], ...]  # Indexed as tiles[z][x].
    width: int
    length: int
    cell_size: int
    connections: Tuple[RoomConnection, ...]
    unconnected: Tuple[Tuple[GridCell, GridCell], ...] = ()
    seed: Optional[int] = None

    def tile_at(self, x: int, z: int) -> TileKind:
        if not (0 <= x < self.width and 0 <= z < self.length):
            raise IndexError(f"Tile {(x, z)} out of range")
        return self.tiles[z][x]


@dataclass(frozen=True)
class FloorPlanMsg:
    """Hand-off message delivered once to the presentation layer."""

    floor_plan: FloorPlan

    @property
    def width(self) -> int:
        return self.floor_plan.width

    @property
    def length(self) -> int:
        return self.floor_plan.length
