"""DungeonGenerator orchestrates the three steps of the grid-cell algorithm."""

from __future__ import annotations

import logging
import random
from time import perf_counter
from types import MappingProxyType
from typing import Callable, Dict, Optional, TypeVar

from dungeon_config import DungeonConfig
from dungeon_layout import DungeonLayout
from dungeon_models import ConnectionReport, FloorPlan, FloorPlanMsg, GridCell, Room, TileKind
from metrics import GenerationMetrics
from room_connector import DisconnectedDungeonError, RoomConnector
from room_graph import RoomGraph
from room_placement import RoomLayoutGenerator

logger = logging.getLogger(__name__)

T = TypeVar("T")

FloorPlanConsumer = Callable[[FloorPlanMsg], None]


class DungeonGenerator:
    """Manages the overall process of generating a dungeon floor layout.

    One generator produces one floor plan. The layout buffer is written only
    while :meth:`generate` runs and is handed to consumers as a frozen copy.
    """

    def __init__(self, config: DungeonConfig, rng: Optional[random.Random] = None) -> None:
        self.config = config
        self.rng = rng if rng is not None else random.Random(config.random_seed)
        self.layout = DungeonLayout(config.width, config.length)
        self.metrics = GenerationMetrics() if config.collect_metrics else None
        self.floor_plan: Optional[FloorPlan] = None
        self._started = False

    def _run_step(self, name: str, func: Callable[..., T], *args, **kwargs) -> T:
        if self.metrics is None:
            return func(*args, **kwargs)

        rooms_before = len(self.layout.rooms)
        floor_before = self.layout.count(TileKind.FLOOR)
        start = perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            duration = perf_counter() - start
            self.metrics.record_step_run(
                name,
                duration,
                len(self.layout.rooms) - rooms_before,
                self.layout.count(TileKind.FLOOR) - floor_before,
            )

    def generate(self, consumer: Optional[FloorPlanConsumer] = None) -> FloorPlan:
        """Generates the dungeon and optionally publishes it to ``consumer``."""
        if self._started:
            raise RuntimeError("DungeonGenerator.generate may only be called once")
        self._started = True

        logger.info(
            "Generating %dx%d dungeon (%dx%d cells of size %d)",
            self.config.width, self.config.length,
            self.config.level_dimensions_x, self.config.level_dimensions_z,
            self.config.cell_size,
        )

        # Step 1: Place one room per grid cell.
        placer = RoomLayoutGenerator(self.config, self.layout, self.rng)
        rooms = self._run_step("room_layout", placer.place_rooms)

        # Step 2: Carve corridors between rooms of adjacent cells.
        connector = RoomConnector(
            self.layout, self.config.level_dimensions_x, self.config.level_dimensions_z
        )
        report = self._run_step("room_connections", connector.connect, rooms)
        if self.metrics is not None:
            self.metrics.record_searches(report.searches_attempted, len(report.unconnected))
        if report.unconnected and self.config.require_connected:
            raise DisconnectedDungeonError(report.unconnected)

        # Step 3: Record the connections that were actually made.
        room_graph = self._run_step("room_graph", RoomGraph.from_connections, rooms, report)

        self.floor_plan = self._build_floor_plan(rooms, room_graph, report)
        logger.info(
            "Generated dungeon: %d rooms, %d corridors, %d unconnected pairs",
            len(rooms), len(report.connections), len(report.unconnected),
        )

        if consumer is not None:
            consumer(FloorPlanMsg(self.floor_plan))
        return self.floor_plan

    def _build_floor_plan(
        self,
        rooms: Dict[GridCell, Room],
        room_graph: RoomGraph,
        report: ConnectionReport,
    ) -> FloorPlan:
        return FloorPlan(
            rooms=MappingProxyType(dict(rooms)),
            room_graph=room_graph.freeze(),
            tiles=self.layout.freeze(),
            width=self.layout.width,
            length=self.layout.length,
            cell_size=self.config.cell_size,
            connections=tuple(report.connections),
            unconnected=tuple(report.unconnected),
            seed=self.config.random_seed,
        )
