"""Ammo, reload, heal and selection transitions."""
from __future__ import annotations

from royale import inventory
from royale.models import AmmoWeapon, HealItem, Rarity, WeaponType
from royale.state import MatchState


def test_starting_loadout(state: MatchState) -> None:
    names = [slot.name for slot in state.inventory]
    assert names == ["Assault Rifle", "Pump Shotgun", "Med Kit"]
    assert isinstance(state.inventory[2], HealItem)
    assert state.selected_slot == 0


def test_fire_drains_to_empty_then_stops(state: MatchState) -> None:
    shotgun = state.inventory[1]
    assert isinstance(shotgun, AmmoWeapon)
    for _ in range(shotgun.max_ammo):
        assert inventory.fire(shotgun)
    assert shotgun.ammo == 0
    assert not inventory.fire(shotgun)
    assert shotgun.ammo == 0


def test_reload_always_refills(state: MatchState) -> None:
    rifle = state.inventory[0]
    rifle.ammo = 0
    assert inventory.reload(state)
    assert rifle.ammo == rifle.max_ammo
    rifle.ammo = 12
    assert inventory.reload(state)
    assert rifle.ammo == rifle.max_ammo


def test_reload_ignores_heal_items(state: MatchState) -> None:
    state.selected_slot = 2
    assert not inventory.reload(state)
    assert isinstance(state.inventory[2], HealItem)


def test_heal_removes_slot_and_clamps_selection(state: MatchState) -> None:
    state.player.health = 40
    state.selected_slot = 2

    assert inventory.use_heal(state)

    assert state.player.health == 90
    assert len(state.inventory) == 2
    assert all(not isinstance(slot, HealItem) for slot in state.inventory)
    assert state.selected_slot == 1


def test_heal_caps_at_max_health(state: MatchState) -> None:
    state.player.health = 80
    state.selected_slot = 2
    inventory.use_heal(state)
    assert state.player.health == 100


def test_heal_requires_selected_heal_item(state: MatchState) -> None:
    state.player.health = 40
    state.selected_slot = 0
    assert not inventory.use_heal(state)
    assert state.player.health == 40
    assert len(state.inventory) == 3


def test_heal_in_first_slot_keeps_selection_at_zero(state: MatchState) -> None:
    state.inventory = [HealItem(id="h", name="Bandage", rarity=Rarity.COMMON)]
    state.selected_slot = 0
    state.player.health = 10

    assert inventory.use_heal(state)

    assert state.inventory == []
    assert state.selected_slot == 0
    assert state.selected() is None


def test_out_of_range_selection_is_ignored(state: MatchState) -> None:
    state.selected_slot = 1
    assert not inventory.select_slot(state, 3)
    assert not inventory.select_slot(state, -1)
    assert state.selected_slot == 1
    assert inventory.select_slot(state, 2)
    assert state.selected_slot == 2


def test_has_ammo_only_for_loaded_weapons(state: MatchState) -> None:
    rifle = state.inventory[0]
    assert inventory.has_ammo(rifle)
    assert not inventory.has_ammo(state.inventory[2])
    assert not inventory.has_ammo(None)
    assert rifle.weapon_type is WeaponType.ASSAULT
