import random
import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
CODE_DIR = ROOT_DIR / "code"
if str(CODE_DIR) not in sys.path:
    sys.path.insert(0, str(CODE_DIR))

from dungeon_config import DungeonConfig
from dungeon_layout import DungeonLayout
from weighted_grid import DungeonGrid


@pytest.fixture
def small_config() -> DungeonConfig:
    return DungeonConfig(
        min_room_size=3,
        max_room_size=5,
        room_spread=2,
        level_dimensions_x=2,
        level_dimensions_z=2,
        random_seed=1234,
    )


@pytest.fixture
def dungeon_layout(small_config: DungeonConfig) -> DungeonLayout:
    return DungeonLayout(small_config.width, small_config.length)


@pytest.fixture
def open_grid() -> DungeonGrid:
    return DungeonGrid(10, 10)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(42)
