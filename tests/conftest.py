from __future__ import annotations

import pytest

from royale.config import MatchConfig
from royale.models import Enemy, Resource, MaterialType, Vec3
from royale.state import MatchState, new_match


@pytest.fixture()
def state() -> MatchState:
    """A running match with one enemy and one wood node at known spots."""

    match = new_match(MatchConfig(seed=7))
    match.enemies = {
        "e1": Enemy(id="e1", position=Vec3(10.0, 0.0, 0.0), max_health=100, health=100),
    }
    match.resources = {
        "wood_1": Resource(id="wood_1", position=Vec3(2.0, 0.5, 0.0), type=MaterialType.WOOD),
    }
    return match
