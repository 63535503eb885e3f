"""Automatic resource pickup."""
from __future__ import annotations

from royale import config
from royale.collector import collect_nearby
from royale.models import MaterialType, Resource, Vec3
from royale.state import MatchState


def test_wood_pickup_is_credited_once(state: MatchState) -> None:
    position = Vec3(0.5, 0.0, 0.0)

    assert collect_nearby(state, position) == ["wood_1"]
    assert state.resources["wood_1"].collected
    assert state.counters.materials[MaterialType.WOOD] == config.RESOURCE_YIELD

    assert collect_nearby(state, position) == []
    assert state.resources["wood_1"].collected
    assert state.counters.materials[MaterialType.WOOD] == config.RESOURCE_YIELD


def test_resources_outside_radius_stay(state: MatchState) -> None:
    assert collect_nearby(state, Vec3(-5.0, 0.0, 0.0)) == []
    assert not state.resources["wood_1"].collected
    assert state.counters.materials[MaterialType.WOOD] == 0


def test_radius_boundary_is_exclusive(state: MatchState) -> None:
    assert collect_nearby(state, Vec3(2.0 - state.config.pickup_radius, 0.0, 0.0)) == []
    assert collect_nearby(state, Vec3(2.0 - state.config.pickup_radius + 0.01, 0.0, 0.0)) == ["wood_1"]


def test_height_is_ignored(state: MatchState) -> None:
    assert collect_nearby(state, Vec3(2.0, 40.0, 0.0)) == ["wood_1"]


def test_each_material_goes_to_its_own_counter(state: MatchState) -> None:
    state.resources["metal_1"] = Resource(id="metal_1", position=Vec3(0.0, 0.5, 1.0), type=MaterialType.METAL)
    state.resources["stone_1"] = Resource(id="stone_1", position=Vec3(0.0, 0.5, -1.0), type=MaterialType.STONE)

    collected = collect_nearby(state, Vec3(0.0, 0.0, 0.0))

    assert sorted(collected) == ["metal_1", "stone_1", "wood_1"]
    assert state.counters.materials == {
        MaterialType.WOOD: 50,
        MaterialType.STONE: 50,
        MaterialType.METAL: 50,
    }
