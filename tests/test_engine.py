"""Regression tests for the simulation loop and intent handling."""
from __future__ import annotations

import asyncio
import dataclasses

import pytest

from royale import config
from royale.config import MatchConfig
from royale.engine import SimulationLoop, apply_intent
from royale.intents import Attack, EndMatch, Move, Reload, SelectSlot, StartMatch, UseHeal
from royale.models import Enemy, MaterialType, Resource, Vec3
from royale.state import MatchPhase, MatchState


@pytest.fixture()
def loop() -> SimulationLoop:
    simulation = SimulationLoop(MatchConfig(seed=42))
    simulation.apply_intent(StartMatch())
    state = simulation.state
    state.enemies = {"e1": Enemy(id="e1", position=Vec3(5.0, 0.0, 5.0), max_health=100, health=35)}
    state.resources = {
        "wood_1": Resource(id="wood_1", position=Vec3(0.0, 0.5, -1.0), type=MaterialType.WOOD),
    }
    return simulation


def test_intents_before_start_are_discarded() -> None:
    simulation = SimulationLoop(MatchConfig(seed=1))
    assert simulation.phase is MatchPhase.LOBBY
    assert simulation.apply_intent(Reload()) == []
    simulation.submit(Move(direction=(1.0, 0.0)))
    snapshot = simulation.step()
    assert snapshot.phase == "lobby"
    assert snapshot.tick == 0


def test_start_match_spawns_round() -> None:
    simulation = SimulationLoop(MatchConfig(seed=1))
    events = simulation.apply_intent(StartMatch())
    assert events == [{"type": "match_started"}]
    assert simulation.phase is MatchPhase.RUNNING
    assert len(simulation.state.enemies) == config.ENEMY_COUNT
    assert len(simulation.state.resources) == config.RESOURCES_PER_TYPE * 3
    # A second start does not respawn the round.
    assert simulation.apply_intent(StartMatch()) == []


def test_attack_uses_selected_slot(loop: SimulationLoop) -> None:
    events = loop.apply_intent(Attack(enemy_id="e1"))
    assert events[0]["type"] == "kill"
    snapshot = loop.snapshot()
    enemy = snapshot.enemies[0]
    assert (enemy.health, enemy.alive) == (0, False)
    assert snapshot.counters.kills == 1
    assert snapshot.counters.players_left == config.PLAYERS_LEFT - 1
    assert snapshot.inventory[0].ammo == 29


def test_rejected_intents_emit_nothing(loop: SimulationLoop) -> None:
    before = loop.snapshot()
    assert loop.apply_intent(SelectSlot(9)) == []
    assert loop.apply_intent(UseHeal()) == []
    assert loop.apply_intent(Attack(enemy_id="ghost")) == []
    assert loop.apply_intent(Move(direction=(0.0, 0.0))) == []
    assert loop.snapshot() == before


def test_intents_apply_in_arrival_order(loop: SimulationLoop) -> None:
    loop.state.player.health = 30
    loop.submit(SelectSlot(2))
    loop.submit(UseHeal())
    loop.submit(Attack(enemy_id="e1"))
    snapshot = loop.step()
    # Heal consumed slot 2, selection fell back to the shotgun, which then fired.
    assert snapshot.player.health == 80
    assert [slot.name for slot in snapshot.inventory] == ["Assault Rifle", "Pump Shotgun"]
    assert snapshot.selected_slot == 1
    assert snapshot.inventory[1].ammo == 7
    assert snapshot.counters.kills == 1


def test_reverse_order_gives_different_result(loop: SimulationLoop) -> None:
    loop.submit(Attack(enemy_id="e1"))
    loop.submit(SelectSlot(1))
    snapshot = loop.step()
    assert snapshot.inventory[0].ammo == 29
    assert snapshot.inventory[1].ammo == 8


def test_reload_intent(loop: SimulationLoop) -> None:
    loop.state.inventory[0].ammo = 3
    assert loop.apply_intent(Reload()) == [{"type": "reloaded", "slot": 0}]
    assert loop.state.inventory[0].ammo == 30


def test_move_steps_and_clamps(loop: SimulationLoop) -> None:
    loop.apply_intent(Move(direction=(3.0, 4.0)))
    position = loop.state.player.position
    assert position.x == pytest.approx(0.18)
    assert position.z == pytest.approx(0.24)

    loop.apply_intent(Move(target=Vec3(100.0, 9.0, -100.0)))
    position = loop.state.player.position
    assert (position.x, position.y, position.z) == (config.ARENA_HALF_SIZE, 0.0, -config.ARENA_HALF_SIZE)


def test_step_collects_at_current_position(loop: SimulationLoop) -> None:
    loop.submit(Move(target=Vec3(20.0, 0.0, 20.0)))
    snapshot = loop.step()
    assert snapshot.counters.wood == 0

    loop.submit(Move(target=Vec3(0.0, 0.0, 0.0)))
    snapshot = loop.step()
    assert snapshot.counters.wood == 50
    assert snapshot.resources[0].collected

    snapshot = loop.step()
    assert snapshot.counters.wood == 50
    assert {"type": "collected", "resource": "wood_1"} in loop.drain_events()


def test_advance_ticks_storm_until_zero(loop: SimulationLoop) -> None:
    loop.state.clock.storm_timer = 1
    assert loop.advance() == 0
    assert loop.advance() == 0
    assert loop.snapshot().storm_timer == 0


def test_end_match_stops_clock_and_intake(loop: SimulationLoop) -> None:
    loop.submit(EndMatch())
    loop.submit(Attack(enemy_id="e1"))
    snapshot = loop.step()
    assert snapshot.phase == "ended"
    assert snapshot.enemies[0].alive

    timer = snapshot.storm_timer
    assert loop.advance() == timer
    loop.submit(StartMatch())
    assert len(loop.intent_queue) == 0
    assert apply_intent(loop.state, Reload()) == []


def test_snapshot_is_a_frozen_copy(loop: SimulationLoop) -> None:
    snapshot = loop.snapshot()
    with pytest.raises(dataclasses.FrozenInstanceError):
        snapshot.storm_timer = 3  # type: ignore[misc]
    loop.apply_intent(Attack(enemy_id="e1"))
    assert snapshot.enemies[0].health == 35
    assert snapshot.inventory[0].ammo == 30


def test_serialised_snapshot_omits_ammo_for_heal_items(loop: SimulationLoop) -> None:
    payload = loop.snapshot().serialise()
    heal = payload["inventory"][2]
    assert heal["type"] == "heal"
    assert "ammo" not in heal and "max_ammo" not in heal
    assert payload["inventory"][0]["ammo"] == 30
    assert payload["counters"]["materials"] == {"wood": 0, "stone": 0, "metal": 0}


def test_transition_function_works_on_bare_state() -> None:
    state = MatchState(config=MatchConfig(seed=9))
    apply_intent(state, StartMatch())
    apply_intent(state, SelectSlot(1))
    assert state.selected_slot == 1


def test_async_runner_publishes_snapshots() -> None:
    async def scenario() -> None:
        simulation = SimulationLoop(MatchConfig(seed=2))
        queue = simulation.subscribe()
        simulation.submit(StartMatch())
        await simulation.start()
        snapshot = await asyncio.wait_for(queue.get(), timeout=2.0)
        while snapshot.phase != "running":
            snapshot = await asyncio.wait_for(queue.get(), timeout=2.0)
        simulation.submit(EndMatch())
        await asyncio.wait_for(simulation.wait_until_finished(), timeout=2.0)
        assert simulation.phase is MatchPhase.ENDED
        await simulation.stop()
        simulation.unsubscribe(queue)

    asyncio.run(scenario())


def test_lobby_snapshot_reflects_config() -> None:
    simulation = SimulationLoop(MatchConfig(storm_timer=60, players_left=10))
    snapshot = simulation.snapshot()
    assert (snapshot.storm_timer, snapshot.counters.players_left) == (60, 10)


def test_select_slot_ignores_non_integer_index(loop: SimulationLoop) -> None:
    assert loop.apply_intent(SelectSlot(1.0)) == []  # type: ignore[arg-type]
    assert loop.apply_intent(SelectSlot(True)) == []
    assert loop.state.selected_slot == 0
    assert loop.state.selected() is loop.state.inventory[0]
