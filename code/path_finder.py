"""A* shortest-path search over any weighted graph."""

from __future__ import annotations

import heapq
import itertools
import logging
from typing import Callable, Dict, Generic, Hashable, List, Optional, Sequence, Tuple, TypeVar

from dungeon_geometry import TilePos
from weighted_grid import WeightedGraph

logger = logging.getLogger(__name__)

N = TypeVar("N", bound=Hashable)

CostFn = Callable[[N], Optional[float]]
HeuristicFn = Callable[[N, N], float]


def manhattan_distance(a: TilePos, b: TilePos) -> int:
    """Admissible heuristic for 4-connected grids whose tile costs are at least 1."""
    return abs(a.x - b.x) + abs(a.z - b.z)


def inflated_heuristic(heuristic: HeuristicFn, factor: float) -> HeuristicFn:
    """Scale a heuristic by ``factor``; values above 1 trade optimality for fewer expansions."""
    if factor < 0:
        raise ValueError("Heuristic inflation factor must be non-negative")

    def _inflated(node, goal) -> float:
        return heuristic(node, goal) * factor

    return _inflated


class PathFinder(Generic[N]):
    """Reusable A* searcher bound to one graph, cost function and heuristic.

    The came-from and cost-so-far maps live on the instance and are cleared
    at the start of every :meth:`get_path` call, so one finder can serve many
    sequential searches but must not be shared by overlapping calls.
    """

    def __init__(
        self,
        graph: WeightedGraph[N],
        cost_fn: Optional[CostFn] = None,
        heuristic_fn: HeuristicFn = manhattan_distance,
    ) -> None:
        self.graph = graph
        self.cost_fn: CostFn = cost_fn if cost_fn is not None else graph.cost
        self.heuristic_fn = heuristic_fn
        self._came_from: Dict[N, N] = {}
        self._cost_so_far: Dict[N, float] = {}
        self.expanded_nodes = 0

    def _clear(self) -> None:
        self._came_from.clear()
        self._cost_so_far.clear()
        self.expanded_nodes = 0

    def get_path(self, start: N, goal: N) -> Optional[List[N]]:
        """Return the cheapest path from ``start`` to ``goal`` inclusive, or None if unreachable."""
        self._clear()

        # Endpoints must be vertices of the graph; off-grid or blocked ends have no path.
        if self.cost_fn(start) is None or self.cost_fn(goal) is None:
            logger.debug("No path from %s to %s: endpoint is impassable", start, goal)
            return None

        # Entries are (priority, insertion order, node) so equal priorities pop first-in first-out.
        counter = itertools.count()
        frontier: List[Tuple[float, int, N]] = [(0, next(counter), start)]
        self._came_from[start] = start
        self._cost_so_far[start] = 0

        reached = False
        while frontier:
            _, _, current = heapq.heappop(frontier)
            self.expanded_nodes += 1

            if current == goal:
                reached = True
                break

            current_cost = self._cost_so_far[current]
            for neighbor in self.graph.neighbors(current):
                step_cost = self.cost_fn(neighbor)
                if step_cost is None:
                    continue
                if step_cost < 0:
                    raise ValueError(f"Negative traversal cost {step_cost} for {neighbor}")
                new_cost = current_cost + step_cost
                known_cost = self._cost_so_far.get(neighbor)
                if known_cost is None or new_cost < known_cost:
                    self._cost_so_far[neighbor] = new_cost
                    priority = new_cost + self.heuristic_fn(neighbor, goal)
                    heapq.heappush(frontier, (priority, next(counter), neighbor))
                    self._came_from[neighbor] = current

        if not reached:
            logger.debug("No path from %s to %s after %d expansions", start, goal, self.expanded_nodes)
            return None
        return self._reconstruct_path(start, goal)

    def _reconstruct_path(self, start: N, goal: N) -> List[N]:
        path = [goal]
        current = goal
        while current != start:
            current = self._came_from[current]
            path.append(current)
        path.reverse()
        return path

    def cost_of(self, node: N) -> Optional[float]:
        """Best known cost from the last search's start to ``node``."""
        return self._cost_so_far.get(node)


def find_path(
    graph: WeightedGraph[N],
    cost_fn: Optional[CostFn],
    heuristic_fn: HeuristicFn,
    start: N,
    goal: N,
) -> Optional[List[N]]:
    """One-shot A* search; see :class:`PathFinder`."""
    return PathFinder(graph, cost_fn, heuristic_fn).get_path(start, goal)


def path_cost(path: Sequence[N], cost_fn: CostFn) -> float:
    """Total cost of walking ``path``; the start node is free, every later node costs its entry."""
    total = 0.0
    for node in path[1:]:
        step_cost = cost_fn(node)
        if step_cost is None:
            raise ValueError(f"Path enters impassable node {node}")
        total += step_cost
    return total
