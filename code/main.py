#!/usr/bin/env python3

from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from typing import List, Optional

from dungeon_config import DungeonConfig, DungeonConfigError
from dungeon_constants import (
    DEFAULT_LEVEL_DIMENSIONS_X,
    DEFAULT_LEVEL_DIMENSIONS_Z,
    DEFAULT_MAX_ROOM_SIZE,
    DEFAULT_MIN_ROOM_SIZE,
    DEFAULT_ROOM_SPREAD,
)
from dungeon_generator import DungeonGenerator
from grid_renderer import print_grid
from room_connector import DisconnectedDungeonError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a grid-cell dungeon floor plan and print it as ASCII."
    )
    parser.add_argument("--min-room-size", type=int, default=DEFAULT_MIN_ROOM_SIZE,
                        help=f"Minimum room width and length (default: {DEFAULT_MIN_ROOM_SIZE})")
    parser.add_argument("--max-room-size", type=int, default=DEFAULT_MAX_ROOM_SIZE,
                        help=f"Exclusive maximum room width and length (default: {DEFAULT_MAX_ROOM_SIZE})")
    parser.add_argument("--room-spread", type=int, default=DEFAULT_ROOM_SPREAD,
                        help=f"Extra tiles per grid cell (default: {DEFAULT_ROOM_SPREAD})")
    parser.add_argument("--cells-x", type=int, default=DEFAULT_LEVEL_DIMENSIONS_X,
                        help=f"Number of rooms in the x-direction (default: {DEFAULT_LEVEL_DIMENSIONS_X})")
    parser.add_argument("--cells-z", type=int, default=DEFAULT_LEVEL_DIMENSIONS_Z,
                        help=f"Number of rooms in the z-direction (default: {DEFAULT_LEVEL_DIMENSIONS_Z})")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed; a random one is picked and printed when omitted")
    parser.add_argument("--require-connected", action="store_true",
                        help="Fail when any pair of adjacent rooms could not be connected")
    parser.add_argument("--no-walls", action="store_true",
                        help="Do not draw derived wall tiles around floor")
    parser.add_argument("--metrics", action="store_true",
                        help="Collect and print per-step timing metrics")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    seed = args.seed
    if seed is None:
        # Pick a random seed randomly and print it, so we can reproduce bugs by passing it back with --seed.
        seed = random.randint(0, 1000000)
    print(f"Using random seed {seed}")

    try:
        config = DungeonConfig(
            min_room_size=args.min_room_size,
            max_room_size=args.max_room_size,
            room_spread=args.room_spread,
            level_dimensions_x=args.cells_x,
            level_dimensions_z=args.cells_z,
            random_seed=seed,
            collect_metrics=args.metrics,
            require_connected=args.require_connected,
        )
    except DungeonConfigError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2

    generator = DungeonGenerator(config)
    try:
        plan = generator.generate()
    except DisconnectedDungeonError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    print_grid(plan, walls=not args.no_walls)
    print(f"{plan.width}x{plan.length} tiles, {len(plan.rooms)} rooms, "
          f"{len(plan.connections)} corridors, {len(plan.unconnected)} unconnected pairs")

    if generator.metrics is not None:
        print(json.dumps(generator.metrics.snapshot(), indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    sys.exit(main())
