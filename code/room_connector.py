"""Corridor carving between rooms of grid-adjacent cells using A* search."""

from __future__ import annotations

import logging
from typing import Iterator, Mapping, Optional, Sequence, Tuple

from dungeon_geometry import TilePos
from dungeon_layout import DungeonLayout
from dungeon_models import ConnectionAxis, ConnectionReport, GridCell, Room, RoomConnection
from path_finder import HeuristicFn, PathFinder, manhattan_distance
from weighted_grid import DungeonGrid, WeightedGraph

logger = logging.getLogger(__name__)


class DisconnectedDungeonError(RuntimeError):
    """Raised when adjacent rooms must all be connected but some corridors could not be found."""

    def __init__(self, unconnected: Sequence[Tuple[GridCell, GridCell]]) -> None:
        self.unconnected = tuple(unconnected)
        pairs = ", ".join(f"({a.x},{a.z})-({b.x},{b.z})" for a, b in self.unconnected)
        super().__init__(f"No corridor found between {len(self.unconnected)} room pair(s): {pairs}")


def corridor_endpoints(
    room_a: Room, room_b: Room, axis: ConnectionAxis
) -> Tuple[TilePos, TilePos]:
    """Return the near-edge midpoints used as corridor start and goal.

    For north-south pairs ``room_a`` is the southern room; for east-west pairs
    it is the western room.
    """
    if axis is ConnectionAxis.NORTH_SOUTH:
        return room_a.north_edge_mid(), room_b.south_edge_mid()
    return room_a.east_edge_mid(), room_b.west_edge_mid()


class RoomConnector:
    """Connects every pair of grid-adjacent rooms with a corridor.

    The search runs over a grid spanning the whole dungeon, so corridors may
    pass through other rooms. Found paths are rasterized into the shared
    layout as floor; pairs without a path are recorded as unconnected.
    """

    def __init__(
        self,
        layout: DungeonLayout,
        level_dimensions_x: int,
        level_dimensions_z: int,
        *,
        graph: Optional[WeightedGraph[TilePos]] = None,
        heuristic_fn: HeuristicFn = manhattan_distance,
    ) -> None:
        self.layout = layout
        self.level_dimensions_x = level_dimensions_x
        self.level_dimensions_z = level_dimensions_z
        self.graph = graph if graph is not None else DungeonGrid(layout.width, layout.length)
        self.finder = PathFinder(self.graph, heuristic_fn=heuristic_fn)

    def adjacent_pairs(self) -> Iterator[Tuple[GridCell, GridCell, ConnectionAxis]]:
        """Yield all north-south pairs, then all east-west pairs, in cell-index order."""
        for cell_z in range(self.level_dimensions_z - 1):
            for cell_x in range(self.level_dimensions_x):
                yield GridCell(cell_x, cell_z), GridCell(cell_x, cell_z + 1), ConnectionAxis.NORTH_SOUTH

        for cell_z in range(self.level_dimensions_z):
            for cell_x in range(self.level_dimensions_x - 1):
                yield GridCell(cell_x, cell_z), GridCell(cell_x + 1, cell_z), ConnectionAxis.EAST_WEST

    def connect_pair(
        self, room_a: Room, room_b: Room, axis: ConnectionAxis
    ) -> Optional[RoomConnection]:
        start, goal = corridor_endpoints(room_a, room_b, axis)
        path = self.finder.get_path(start, goal)
        if path is None:
            return None
        self.layout.mark_path(path)
        return RoomConnection(room_a.cell, room_b.cell, axis, tuple(path))

    def connect(self, rooms: Mapping[GridCell, Room]) -> ConnectionReport:
        report = ConnectionReport()
        for cell_a, cell_b, axis in self.adjacent_pairs():
            report.searches_attempted += 1
            connection = self.connect_pair(rooms[cell_a], rooms[cell_b], axis)
            if connection is None:
                logger.warning(
                    "No corridor between cells (%d, %d) and (%d, %d)",
                    cell_a.x, cell_a.z, cell_b.x, cell_b.z,
                )
                report.unconnected.append((cell_a, cell_b))
                continue
            logger.debug(
                "Corridor %s -> %s: %d tiles, %d nodes expanded",
                connection.start, connection.goal, len(connection.path), self.finder.expanded_nodes,
            )
            report.connections.append(connection)

        logger.info(
            "Connected %d of %d adjacent room pairs",
            len(report.connections), report.searches_attempted,
        )
        return report
