from __future__ import annotations

import random

import pytest

from salvo.core import rules
from salvo.core.models import Orientation
from salvo.core.rules import MatchState

# Bow of each default-fleet ship, horizontal, on even rows.
PLAYER_LAYOUT: tuple[tuple[int, int], ...] = ((0, 0), (2, 0), (4, 0), (6, 0), (8, 0))


def place_player_layout(state: MatchState) -> MatchState:
    for row, col in PLAYER_LAYOUT:
        state = rules.place_player_ship(state, row, col, Orientation.HORIZONTAL).state
    return state


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1337)


@pytest.fixture
def setup_complete_state() -> MatchState:
    return place_player_layout(rules.new_match())


@pytest.fixture
def playing_state(setup_complete_state: MatchState, seeded_rng: random.Random) -> MatchState:
    return rules.start_battle(setup_complete_state, seeded_rng).state
