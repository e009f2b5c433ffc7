"""Geometry helpers for working with tile coordinates, directions, and rectangles."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Tuple


class Direction(Enum):
    """Cardinal directions with unit vectors on the tile grid.

    The z axis grows northward, so a room "above" another has a larger z.
    """

    NORTH = (0, 1)
    EAST = (1, 0)
    SOUTH = (0, -1)
    WEST = (-1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dz(self) -> int:
        return self.value[1]

    @property
    def vector(self) -> Tuple[int, int]:
        return self.value

    def opposite(self) -> Direction:
        return Direction.from_tuple((-self.dx, -self.dz))

    @classmethod
    def from_tuple(cls, value: Tuple[int, int]) -> Direction:
        try:
            return cls(value)
        except ValueError as exc:
            raise ValueError(f"Unsupported direction {value}") from exc


CARDINAL_DIRECTIONS = tuple(Direction)


@dataclass(frozen=True, order=True)
class TilePos:
    """Integer tile coordinate; hashable and ordered so it can key search state."""

    x: int
    z: int

    def __iter__(self):
        yield self.x
        yield self.z

    def __getitem__(self, index: int) -> int:
        if index == 0:
            return self.x
        if index == 1:
            return self.z
        raise IndexError("TilePos only supports two coordinates")

    def step(self, direction: Direction) -> TilePos:
        return TilePos(self.x + direction.dx, self.z + direction.dz)

    def manhattan(self, other: TilePos) -> int:
        return abs(self.x - other.x) + abs(self.z - other.z)

    def to_tuple(self) -> Tuple[int, int]:
        return self.x, self.z

    @classmethod
    def from_tuple(cls, value: Tuple[int, int]) -> TilePos:
        return cls(*value)


@dataclass(frozen=True)
class Rect:
    """Immutable axis-aligned rectangle using integer tile coordinates."""

    x: int
    z: int
    width: int
    length: int

    @property
    def max_x(self) -> int:
        """East edge (exclusive)."""
        return self.x + self.width

    @property
    def max_z(self) -> int:
        """North edge (exclusive)."""
        return self.z + self.length

    def overlaps(self, other: Rect) -> bool:
        """Return True when the interior of this rect intersects another rect."""
        if self.max_x <= other.x or other.max_x <= self.x:
            return False
        if self.max_z <= other.z or other.max_z <= self.z:
            return False
        return True

    def contains(self, point: TilePos) -> bool:
        """Return True if the provided tile lies inside this rect."""
        return self.x <= point.x < self.max_x and self.z <= point.z < self.max_z

    def contains_rect(self, other: Rect) -> bool:
        """Return True if ``other`` lies entirely inside this rect."""
        return (
            self.x <= other.x
            and self.z <= other.z
            and other.max_x <= self.max_x
            and other.max_z <= self.max_z
        )

    def tiles(self) -> Iterator[TilePos]:
        """Yield every tile covered by the rect, row by row."""
        for tz in range(self.z, self.max_z):
            for tx in range(self.x, self.max_x):
                yield TilePos(tx, tz)

    def to_tuple(self) -> Tuple[int, int, int, int]:
        """Return the rect as an ``(x, z, width, length)`` tuple."""
        return self.x, self.z, self.width, self.length
