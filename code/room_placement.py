"""Room placement: one randomly sized and positioned room per grid cell."""

from __future__ import annotations

import logging
import random
from typing import Dict, Iterator

from dungeon_config import DungeonConfig, DungeonConfigError
from dungeon_layout import DungeonLayout
from dungeon_models import GridCell, Room

logger = logging.getLogger(__name__)


class RoomLayoutGenerator:
    """Partitions the level into a grid of cells and places one room in each.

    Rooms are clipped to their own cell, and cells are disjoint, so rooms can
    never overlap. Each room is rasterized into the layout as floor.
    """

    def __init__(self, config: DungeonConfig, layout: DungeonLayout, rng: random.Random) -> None:
        self.config = config
        self.layout = layout
        self.rng = rng

    def iter_cells(self) -> Iterator[GridCell]:
        """Yield grid cells x-major, matching the placement order."""
        for cell_x in range(self.config.level_dimensions_x):
            for cell_z in range(self.config.level_dimensions_z):
                yield GridCell(cell_x, cell_z)

    def _sample_room_size(self) -> int:
        return self.rng.randrange(self.config.min_room_size, self.config.max_room_size)

    def _sample_offset(self, room_size: int) -> int:
        # Offsets are drawn from [0, cell_size - room_size), so every room ends
        # at least one tile before its cell's far edge.
        free_space = self.config.cell_size - room_size
        if free_space <= 0:
            raise DungeonConfigError(
                f"Room size {room_size} leaves no free space in a cell of size {self.config.cell_size}"
            )
        return self.rng.randrange(0, free_space)

    def build_room(self, cell: GridCell) -> Room:
        """Sample a room that fits entirely inside ``cell``."""
        width = self._sample_room_size()
        length = self._sample_room_size()
        origin = cell.origin(self.config.cell_size)
        return Room(
            cell=cell,
            x=origin.x + self._sample_offset(width),
            z=origin.z + self._sample_offset(length),
            width=width,
            length=length,
        )

    def place_rooms(self) -> Dict[GridCell, Room]:
        """Place and rasterize one room per grid cell."""
        for cell in self.iter_cells():
            room = self.build_room(cell)
            self.layout.register_room(room)
            logger.debug(
                "Placed %dx%d room at (%d, %d) in cell (%d, %d)",
                room.width, room.length, room.x, room.z, cell.x, cell.z,
            )
        logger.info("Placed %d rooms on a %dx%d layout", len(self.layout.rooms),
                    self.layout.width, self.layout.length)
        return dict(self.layout.rooms)
