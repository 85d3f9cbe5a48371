from __future__ import annotations

import random

import pytest

from bsp_dungeon.generators.bsp import DungeonLayout, DungeonSettings, generate
from tests.helpers import FirstChoiceRandom, StackedTree, build_stacked_tree


@pytest.fixture
def first_choice_rng() -> random.Random:
    return FirstChoiceRandom()


@pytest.fixture
def stacked_tree() -> StackedTree:
    """Tree where the randomly preferred anchor room is too narrow to connect."""
    return build_stacked_tree((11, 1, 19, 8))


@pytest.fixture
def settings() -> DungeonSettings:
    return DungeonSettings(
        dungeon_width=40,
        dungeon_length=40,
        max_iterations=5,
        room_width_min=5,
        room_length_min=5,
        room_bottom_corner_modifier=0.1,
        room_top_corner_modifier=0.9,
        room_offset=1,
        corridor_width=2,
        seed=42,
    )


@pytest.fixture
def layout(settings: DungeonSettings) -> DungeonLayout:
    return generate(settings)
