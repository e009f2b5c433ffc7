import pytest

from dungeon_geometry import TilePos
from dungeon_models import ConnectionAxis, ConnectionReport, GridCell, Room, RoomConnection
from room_graph import RoomGraph

ROOM_A = Room(GridCell(0, 0), 1, 1, 3, 3)
ROOM_B = Room(GridCell(1, 0), 8, 1, 3, 3)
ROOM_C = Room(GridCell(0, 1), 1, 8, 3, 3)
ROOMS = {room.cell: room for room in (ROOM_A, ROOM_B, ROOM_C)}


def _connection(cell_a, cell_b, axis=ConnectionAxis.EAST_WEST):
    return RoomConnection(cell_a, cell_b, axis, (TilePos(0, 0), TilePos(1, 0), TilePos(2, 0)))


def test_from_connections_adds_edge_per_successful_corridor():
    report = ConnectionReport(
        connections=[_connection(ROOM_A.cell, ROOM_B.cell)],
        unconnected=[(ROOM_A.cell, ROOM_C.cell)],
        searches_attempted=2,
    )

    graph = RoomGraph.from_connections(ROOMS, report)

    assert len(graph) == 3
    assert graph.has_connection(ROOM_A, ROOM_B)
    assert graph.has_connection(ROOM_B, ROOM_A)
    assert not graph.has_connection(ROOM_A, ROOM_C)
    assert graph.isolated_rooms() == [ROOM_C]
    assert not graph.is_connected()
    assert graph.graph.edges[ROOM_A, ROOM_B]["corridor_length"] == 3


def test_degree_and_neighbors():
    graph = RoomGraph()
    for room in ROOMS.values():
        graph.add_room(room)
    graph.add_connection(ROOM_A, ROOM_B)
    graph.add_connection(ROOM_A, ROOM_C, _connection(ROOM_A.cell, ROOM_C.cell, ConnectionAxis.NORTH_SOUTH))

    assert graph.degree(ROOM_A) == 2
    assert set(graph.neighbors(ROOM_A)) == {ROOM_B, ROOM_C}
    assert graph.is_connected()
    assert graph.connected_components() == [{ROOM_A, ROOM_B, ROOM_C}]
    assert len(graph.connections) == 2


def test_empty_graph_counts_as_connected():
    assert RoomGraph().is_connected()


def test_self_connection_rejected():
    graph = RoomGraph()
    graph.add_room(ROOM_A)

    with pytest.raises(ValueError):
        graph.add_connection(ROOM_A, ROOM_A)


def test_connection_requires_known_rooms():
    graph = RoomGraph()
    graph.add_room(ROOM_A)

    with pytest.raises(KeyError):
        graph.add_connection(ROOM_A, ROOM_B)


def test_frozen_graph_rejects_mutation():
    graph = RoomGraph()
    graph.add_room(ROOM_A)
    graph.add_room(ROOM_B)

    assert graph.freeze() is graph
    assert graph.frozen
    with pytest.raises(RuntimeError):
        graph.add_room(ROOM_C)
    with pytest.raises(RuntimeError):
        graph.add_connection(ROOM_A, ROOM_B)
    assert ROOM_A in graph
