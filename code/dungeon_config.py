"""Configuration container for the dungeon generation prototype."""

from __future__ import annotations

from dataclasses import dataclass

from dungeon_constants import (
    DEFAULT_LEVEL_DIMENSIONS_X,
    DEFAULT_LEVEL_DIMENSIONS_Z,
    DEFAULT_MAX_ROOM_SIZE,
    DEFAULT_MIN_ROOM_SIZE,
    DEFAULT_ROOM_SPREAD,
    RANDOM_SEED,
)


class DungeonConfigError(ValueError):
    """Raised when generation parameters cannot produce a valid layout."""


@dataclass
class DungeonConfig:
    """Aggregates all tunable parameters for dungeon generation."""

    # Room width and length are sampled from [min_room_size, max_room_size).
    min_room_size: int = DEFAULT_MIN_ROOM_SIZE
    max_room_size: int = DEFAULT_MAX_ROOM_SIZE
    # Extra tiles per grid cell beyond max_room_size, shared by placement jitter and corridors.
    room_spread: int = DEFAULT_ROOM_SPREAD
    # Number of grid cells (and so rooms) along each axis.
    level_dimensions_x: int = DEFAULT_LEVEL_DIMENSIONS_X
    level_dimensions_z: int = DEFAULT_LEVEL_DIMENSIONS_Z

    random_seed: int | None = RANDOM_SEED
    collect_metrics: bool = False
    # Raise instead of warning when some adjacent rooms could not be joined by a corridor.
    require_connected: bool = False

    def __post_init__(self) -> None:
        if self.min_room_size < 1:
            raise DungeonConfigError(
                f"DungeonConfig min_room_size must be at least 1, got {self.min_room_size}"
            )
        if self.max_room_size <= self.min_room_size:
            raise DungeonConfigError(
                "DungeonConfig max_room_size must be greater than min_room_size "
                f"(got min={self.min_room_size}, max={self.max_room_size})"
            )
        if self.room_spread < 0:
            raise DungeonConfigError(
                f"DungeonConfig room_spread cannot be negative, got {self.room_spread}"
            )
        if self.level_dimensions_x < 1 or self.level_dimensions_z < 1:
            raise DungeonConfigError(
                "DungeonConfig level dimensions must be positive "
                f"(got {self.level_dimensions_x}x{self.level_dimensions_z})"
            )

    @property
    def cell_size(self) -> int:
        """Side length of one grid cell; always larger than the biggest room."""
        return self.max_room_size + self.room_spread

    @property
    def width(self) -> int:
        return self.level_dimensions_x * self.cell_size

    @property
    def length(self) -> int:
        return self.level_dimensions_z * self.cell_size
