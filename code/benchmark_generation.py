#!/usr/bin/env python3

# This file performs multiple runs of dungeon generation, collecting and reporting metrics.
# Used for testing both performance of the algorithm and quality of resulting dungeons.

from __future__ import annotations

import argparse
import datetime
from dataclasses import asdict, dataclass
import json
import math
import random
import time
from typing import Any, Dict, List

import networkx as nx

from dungeon_config import DungeonConfig
from dungeon_generator import DungeonGenerator
from dungeon_models import FloorPlan, TileKind

# Default dungeon configuration mirrors the defaults used by main.py.
DEFAULT_CONFIG_KWARGS = dict(
    min_room_size=3,
    max_room_size=15,
    room_spread=3,
    level_dimensions_x=5,
    level_dimensions_z=5,
    collect_metrics=True,
)

PERCENTILES = [1.0, 5.0, 25.0, 50.0, 75.0, 95.0, 99.0]


def build_config(seed: int, **overrides: Any) -> DungeonConfig:
    kwargs = dict(DEFAULT_CONFIG_KWARGS)
    kwargs.update(overrides)
    return DungeonConfig(random_seed=seed, **kwargs)  # type: ignore


@dataclass
class GenerationRunResult:
    seed: int
    duration: float
    total_rooms: int
    total_corridors: int
    unconnected_pairs: int
    floor_fraction: float
    largest_component_fraction: float
    graph_diameter: int
    cycle_count: int
    step_metrics: Dict[str, Dict[str, float | int]]


def percentile(values: List[float], pct: float) -> float:
    if not values:
        return float("nan")
    if pct <= 0:
        return min(values)
    if pct >= 100:
        return max(values)
    ordered = sorted(values)
    rank = (len(ordered) - 1) * (pct / 100.0)
    lower = math.floor(rank)
    upper = math.ceil(rank)
    if lower == upper:
        return ordered[int(rank)]
    fraction = rank - lower
    return ordered[lower] + (ordered[upper] - ordered[lower]) * fraction


def format_seconds(value: float) -> str:
    if value >= 1.0:
        return f"{value:.3f}s"
    return f"{value * 1000:.1f}ms"


def graph_statistics(plan: FloorPlan) -> Dict[str, float | int]:
    """Largest component coverage, diameter of that component, and independent cycle count."""
    graph: nx.Graph = plan.room_graph.graph
    total_rooms = graph.number_of_nodes()
    largest_fraction = 0.0
    diameter = 0
    if total_rooms > 0:
        largest = max(nx.connected_components(graph), key=len)
        largest_fraction = len(largest) / total_rooms
        if len(largest) >= 2:
            diameter = int(nx.diameter(graph.subgraph(largest)))
    return {
        "largest_component_fraction": largest_fraction,
        "graph_diameter": diameter,
        "cycle_count": len(nx.cycle_basis(graph)),
    }


def floor_fraction(plan: FloorPlan) -> float:
    floor = sum(1 for row in plan.tiles for tile in row if tile is TileKind.FLOOR)
    return floor / (plan.width * plan.length)


def run_single_generation(seed: int, **overrides: Any) -> GenerationRunResult:
    """Run one dungeon generation with the provided seed and collect metrics."""
    config = build_config(seed, **overrides)
    generator = DungeonGenerator(config)

    start = time.perf_counter()
    plan = generator.generate()
    end = time.perf_counter()

    stats = graph_statistics(plan)
    return GenerationRunResult(
        seed=seed,
        duration=end - start,
        total_rooms=len(plan.rooms),
        total_corridors=len(plan.connections),
        unconnected_pairs=len(plan.unconnected),
        floor_fraction=floor_fraction(plan),
        largest_component_fraction=float(stats["largest_component_fraction"]),
        graph_diameter=int(stats["graph_diameter"]),
        cycle_count=int(stats["cycle_count"]),
        step_metrics=generator.metrics.snapshot() if generator.metrics else {},
    )


def run_benchmark(num_runs: int, seed: int | None, **overrides: Any) -> List[GenerationRunResult]:
    """Run the generator multiple times and collect run-level metrics."""
    rng = random.Random(seed)
    return [
        run_single_generation(rng.randint(0, 1_000_000), **overrides)
        for _ in range(num_runs)
    ]


def summarize(results: List[GenerationRunResult]) -> Dict[str, Any]:
    durations = [result.duration for result in results]
    worst_index = durations.index(max(durations))
    return {
        "runs": len(results),
        "duration_percentiles": {
            f"p{pct:g}": percentile(durations, pct) for pct in PERCENTILES
        },
        "worst_case_run": {
            "duration_seconds": durations[worst_index],
            "seed": results[worst_index].seed,
        },
        "mean_floor_fraction": sum(r.floor_fraction for r in results) / len(results),
        "runs_with_unconnected_pairs": sum(1 for r in results if r.unconnected_pairs),
        "mean_largest_component_fraction": (
            sum(r.largest_component_fraction for r in results) / len(results)
        ),
        "mean_graph_diameter": sum(r.graph_diameter for r in results) / len(results),
        "mean_cycle_count": sum(r.cycle_count for r in results) / len(results),
    }


def main() -> None:
    parser = argparse.ArgumentParser(
        description=(
            "Run the dungeon generator multiple times and report timing and quality statistics."
        )
    )
    parser.add_argument(
        "-n",
        "--runs",
        type=int,
        default=20,
        help="Number of dungeon generations to execute (default: 20)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help=(
            "Optional seed for the benchmark harness RNG; keeps run seeds reproducible"
        ),
    )
    parser.add_argument("--cells-x", type=int, default=DEFAULT_CONFIG_KWARGS["level_dimensions_x"])
    parser.add_argument("--cells-z", type=int, default=DEFAULT_CONFIG_KWARGS["level_dimensions_z"])
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Optional path for a JSON report of every run plus the summary",
    )
    args = parser.parse_args()

    if args.runs <= 0:
        raise SystemExit("Number of runs must be a positive integer")

    results = run_benchmark(
        args.runs, args.seed, level_dimensions_x=args.cells_x, level_dimensions_z=args.cells_z
    )

    for idx, result in enumerate(results, start=1):
        print(
            "Run {idx:02d}: {time} (seed {seed}) | rooms {rooms} | corridors {corridors}"
            " | unconnected {unconnected} | floor {floor:.1%} | cycles {cycles}".format(
                idx=idx,
                time=format_seconds(result.duration),
                seed=result.seed,
                rooms=result.total_rooms,
                corridors=result.total_corridors,
                unconnected=result.unconnected_pairs,
                floor=result.floor_fraction,
                cycles=result.cycle_count,
            )
        )

    summary = summarize(results)
    print()
    print(f"Config runs: {args.runs}")
    worst = summary["worst_case_run"]
    print(
        f"Worst-case generation time: {format_seconds(worst['duration_seconds'])} (seed {worst['seed']})"
    )
    for name, value in summary["duration_percentiles"].items():
        print(f"  {name}: {format_seconds(value)}")
    print(f"Mean floor coverage: {summary['mean_floor_fraction']:.1%}")
    print(f"Runs with unconnected pairs: {summary['runs_with_unconnected_pairs']}")
    print(f"Mean largest component coverage: {summary['mean_largest_component_fraction']:.1%}")
    print(f"Mean graph diameter: {summary['mean_graph_diameter']:.1f}")
    print(f"Mean cycle count: {summary['mean_cycle_count']:.1f}")

    if args.output:
        timestamp = datetime.datetime.now(datetime.timezone.utc).replace(microsecond=0)
        benchmark_data = {
            "timestamp": timestamp.isoformat(),
            "parameters": {"seed": args.seed, "cells_x": args.cells_x, "cells_z": args.cells_z},
            "summary": summary,
            "results": [asdict(result) for result in results],
        }
        with open(args.output, "w", encoding="utf-8") as handle:
            json.dump(benchmark_data, handle, indent=2, sort_keys=True)
            handle.write("\n")
        print(f"\nSaved benchmark results to {args.output}")


if __name__ == "__main__":
    main()
