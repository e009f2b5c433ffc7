"""Undirected room connectivity graph backed by networkx."""

from __future__ import annotations

from typing import List, Mapping, Optional, Set, Tuple

import networkx as nx

from dungeon_models import ConnectionReport, GridCell, Room, RoomConnection


class RoomGraph:
    """Vertices are rooms; an edge means a corridor joins the two rooms."""

    def __init__(self) -> None:
        self._graph = nx.Graph()
        self._frozen = False

    @classmethod
    def from_connections(
        cls, rooms: Mapping[GridCell, Room], report: ConnectionReport
    ) -> RoomGraph:
        """Add every room, then one edge per corridor that was actually found."""
        graph = cls()
        for cell in sorted(rooms):
            graph.add_room(rooms[cell])
        for connection in report.connections:
            graph.add_connection(rooms[connection.cell_a], rooms[connection.cell_b], connection)
        return graph

    @property
    def graph(self) -> nx.Graph:
        return self._graph

    def _ensure_mutable(self) -> None:
        if self._frozen:
            raise RuntimeError("RoomGraph is frozen and can no longer be modified")

    def add_room(self, room: Room) -> None:
        self._ensure_mutable()
        self._graph.add_node(room, cell=room.cell)

    def add_connection(
        self,
        room_a: Room,
        room_b: Room,
        connection: Optional[RoomConnection] = None,
    ) -> None:
        self._ensure_mutable()
        if room_a == room_b:
            raise ValueError("A room cannot be connected to itself")
        for room in (room_a, room_b):
            if room not in self._graph:
                raise KeyError(f"Room in cell {room.cell} is not part of the graph")
        attrs = {}
        if connection is not None:
            attrs = {"axis": connection.axis, "corridor_length": len(connection.path)}
        self._graph.add_edge(room_a, room_b, **attrs)

    @property
    def rooms(self) -> List[Room]:
        return list(self._graph.nodes)

    @property
    def connections(self) -> List[Tuple[Room, Room]]:
        return list(self._graph.edges)

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def __contains__(self, room: object) -> bool:
        return room in self._graph

    def has_connection(self, room_a: Room, room_b: Room) -> bool:
        return self._graph.has_edge(room_a, room_b)

    def neighbors(self, room: Room) -> List[Room]:
        return list(self._graph.neighbors(room))

    def degree(self, room: Room) -> int:
        return self._graph.degree(room)

    def isolated_rooms(self) -> List[Room]:
        return list(nx.isolates(self._graph))

    def is_connected(self) -> bool:
        if self._graph.number_of_nodes() == 0:
            return True
        return nx.is_connected(self._graph)

    def connected_components(self) -> List[Set[Room]]:
        return [set(component) for component in nx.connected_components(self._graph)]

    def freeze(self) -> RoomGraph:
        """Make the graph read-only; returns self for chaining."""
        nx.freeze(self._graph)
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen
