"""Render a finished floor plan to an ASCII grid."""

from __future__ import annotations

from typing import List, Sequence, Set

from dungeon_constants import EMPTY_GLYPH, FLOOR_GLYPH, WALL_GLYPH
from dungeon_geometry import TilePos
from dungeon_models import FloorPlan, TileKind

GLYPHS = {
    TileKind.EMPTY: EMPTY_GLYPH,
    TileKind.FLOOR: FLOOR_GLYPH,
}


def derive_wall_tiles(tiles: Sequence[Sequence[TileKind]]) -> Set[TilePos]:
    """Return empty tiles touching floor in any of the eight directions."""
    length = len(tiles)
    width = len(tiles[0]) if length else 0
    walls: Set[TilePos] = set()
    for z in range(length):
        for x in range(width):
            if tiles[z][x] is not TileKind.FLOOR:
                continue
            for dz in (-1, 0, 1):
                for dx in (-1, 0, 1):
                    tx, tz = x + dx, z + dz
                    if 0 <= tx < width and 0 <= tz < length and tiles[tz][tx] is TileKind.EMPTY:
                        walls.add(TilePos(tx, tz))
    return walls


def render_floor_plan(plan: FloorPlan, walls: bool = True) -> List[str]:
    """Return one string per row, northernmost row first."""
    wall_tiles = derive_wall_tiles(plan.tiles) if walls else set()
    lines = []
    for z in reversed(range(plan.length)):
        row = plan.tiles[z]
        chars = []
        for x, kind in enumerate(row):
            if kind is TileKind.EMPTY and TilePos(x, z) in wall_tiles:
                chars.append(WALL_GLYPH)
            else:
                chars.append(GLYPHS[kind])
        lines.append("".join(chars))
    return lines


def print_grid(plan: FloorPlan, walls: bool = True, horizontal_sep: str = "") -> None:
    """Prints the ASCII grid to the console."""
    for line in render_floor_plan(plan, walls=walls):
        print(horizontal_sep.join(line))
