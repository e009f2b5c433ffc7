"""Weighted graph views over a rectangular tile space, used by the path finder."""

from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Protocol, TypeVar

from dungeon_constants import UNIFORM_TILE_COST
from dungeon_geometry import CARDINAL_DIRECTIONS, TilePos
from dungeon_layout import DungeonLayout
from dungeon_models import TileKind

N = TypeVar("N")


class WeightedGraph(Protocol[N]):
    """Anything the path finder can search: adjacency plus per-node entry cost."""

    def neighbors(self, node: N) -> List[N]:
        ...

    def cost(self, node: N) -> Optional[float]:
        ...


class DungeonGrid:
    """4-connected grid graph over ``width`` x ``length`` tiles.

    Every in-bounds tile costs ``default_cost`` to enter unless ``weights``
    overrides it. Tiles listed in ``blocked``, and tiles whose cost resolves
    to ``None``, are impassable and never returned by :meth:`neighbors`.
    """

    def __init__(
        self,
        width: int,
        length: int,
        *,
        blocked: Iterable[TilePos] = (),
        weights: Optional[Mapping[TilePos, float]] = None,
        default_cost: Optional[float] = UNIFORM_TILE_COST,
    ) -> None:
        if width <= 0 or length <= 0:
            raise ValueError("DungeonGrid width and length must be positive")
        self.width = width
        self.length = length
        self.blocked: FrozenSet[TilePos] = frozenset(blocked)
        self.weights: Dict[TilePos, float] = dict(weights) if weights else {}
        self.default_cost = default_cost

    @classmethod
    def from_layout(
        cls,
        layout: DungeonLayout,
        costs: Mapping[TileKind, float],
    ) -> DungeonGrid:
        """Weight each tile by its current kind; kinds missing from ``costs`` are impassable."""
        weights: Dict[TilePos, float] = {}
        for z, row in enumerate(layout.grid):
            for x, kind in enumerate(row):
                cost = costs.get(kind)
                if cost is not None:
                    weights[TilePos(x, z)] = cost
        return cls(layout.width, layout.length, weights=weights, default_cost=None)

    def in_bounds(self, tile: TilePos) -> bool:
        return 0 <= tile.x < self.width and 0 <= tile.z < self.length

    def cost(self, tile: TilePos) -> Optional[float]:
        """Cost of entering ``tile``, or None when it cannot be entered."""
        if not self.in_bounds(tile) or tile in self.blocked:
            return None
        return self.weights.get(tile, self.default_cost)

    def passable(self, tile: TilePos) -> bool:
        return self.cost(tile) is not None

    def neighbors(self, tile: TilePos) -> List[TilePos]:
        result = []
        for direction in CARDINAL_DIRECTIONS:
            candidate = tile.step(direction)
            if self.passable(candidate):
                result.append(candidate)
        return result
