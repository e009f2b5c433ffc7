"""Shared constants for the dungeon generation prototype."""

from __future__ import annotations

DEFAULT_MIN_ROOM_SIZE = 3
DEFAULT_MAX_ROOM_SIZE = 15  # Exclusive upper bound for room width and length.
DEFAULT_ROOM_SPREAD = 3  # Extra slack per grid cell beyond the largest room.
DEFAULT_LEVEL_DIMENSIONS_X = 5
DEFAULT_LEVEL_DIMENSIONS_Z = 5

RANDOM_SEED = None  # Set to a number for reproducible behavior (for debugging); set to None to produce different dungeon on every run.

UNIFORM_TILE_COST = 1

# ASCII glyphs used by the debug renderer.
EMPTY_GLYPH = " "
FLOOR_GLYPH = "."
WALL_GLYPH = "#"
