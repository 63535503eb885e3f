"""Authoritative state of a single Cyber Royale round."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from . import config
from .clock import MatchClock
from .config import MatchConfig
from .models import (
    AmmoWeapon,
    Enemy,
    HealItem,
    InventorySlot,
    MatchCounters,
    MaterialType,
    Player,
    Rarity,
    Resource,
    Vec3,
    WeaponType,
)


class MatchPhase(Enum):
    LOBBY = "lobby"
    RUNNING = "running"
    ENDED = "ended"


@dataclass
class MatchState:
    """Everything a round knows about itself.

    The state is a plain container: the transition functions in
    :mod:`royale.combat`, :mod:`royale.inventory` and :mod:`royale.collector`
    receive it explicitly and mutate it in place.
    """

    config: MatchConfig = field(default_factory=MatchConfig)
    phase: MatchPhase = MatchPhase.LOBBY
    tick: int = 0
    player: Player = field(default_factory=Player)
    enemies: Dict[str, Enemy] = field(default_factory=dict)
    resources: Dict[str, Resource] = field(default_factory=dict)
    inventory: List[InventorySlot] = field(default_factory=list)
    selected_slot: int = 0
    counters: MatchCounters = field(default_factory=MatchCounters)
    clock: MatchClock = field(default_factory=MatchClock)

    @property
    def running(self) -> bool:
        return self.phase is MatchPhase.RUNNING

    def selected(self) -> Optional[InventorySlot]:
        if 0 <= self.selected_slot < len(self.inventory):
            return self.inventory[self.selected_slot]
        return None

    def slot_at(self, index: int) -> Optional[InventorySlot]:
        if 0 <= index < len(self.inventory):
            return self.inventory[index]
        return None


def lobby_state(match_config: Optional[MatchConfig] = None) -> MatchState:
    """Build the empty pre-match state, with counters and storm taken from ``match_config``."""

    match_config = match_config or MatchConfig()
    match_config.validate()
    return MatchState(
        config=match_config,
        counters=_initial_counters(match_config),
        clock=MatchClock(storm_timer=match_config.storm_timer),
    )


def new_match(match_config: Optional[MatchConfig] = None) -> MatchState:
    """Build a freshly spawned round in the ``RUNNING`` phase."""

    match_config = match_config or MatchConfig()
    match_config.validate()
    rng = random.Random(match_config.seed)
    return MatchState(
        config=match_config,
        phase=MatchPhase.RUNNING,
        player=Player(),
        enemies=_spawn_enemies(rng, match_config),
        resources=_spawn_resources(rng, match_config),
        inventory=starting_inventory(),
        selected_slot=0,
        counters=_initial_counters(match_config),
        clock=MatchClock(storm_timer=match_config.storm_timer),
    )


def _initial_counters(match_config: MatchConfig) -> MatchCounters:
    return MatchCounters(
        players_left=match_config.players_left,
        materials={
            MaterialType(name): amount
            for name, amount in match_config.starting_materials.items()
        },
    )


def starting_inventory() -> List[InventorySlot]:
    slots: List[InventorySlot] = []
    for slot_id, name, weapon_type, ammo, damage, rarity in config.STARTING_LOADOUT:
        if ammo is None:
            slots.append(HealItem(id=slot_id, name=name, rarity=Rarity(rarity)))
        else:
            slots.append(
                AmmoWeapon(
                    id=slot_id,
                    name=name,
                    weapon_type=WeaponType(weapon_type),
                    ammo=ammo,
                    max_ammo=ammo,
                    damage=damage,
                    rarity=Rarity(rarity),
                )
            )
    return slots


def _random_position(rng: random.Random, height: float = 0.0) -> Vec3:
    # Keep spawns off the arena edge and away from the drop point at the origin.
    margin = config.ARENA_HALF_SIZE - 2.0
    while True:
        x = rng.uniform(-margin, margin)
        z = rng.uniform(-margin, margin)
        if abs(x) > 5.0 or abs(z) > 5.0:
            return Vec3(round(x, 2), height, round(z, 2))


def _spawn_enemies(rng: random.Random, match_config: MatchConfig) -> Dict[str, Enemy]:
    enemies: Dict[str, Enemy] = {}
    for index in range(match_config.enemy_count):
        enemy_id = f"enemy_{index + 1}"
        enemies[enemy_id] = Enemy(
            id=enemy_id,
            position=_random_position(rng),
            max_health=match_config.enemy_max_health,
            health=match_config.enemy_max_health,
        )
    return enemies


def _spawn_resources(rng: random.Random, match_config: MatchConfig) -> Dict[str, Resource]:
    resources: Dict[str, Resource] = {}
    for material in MaterialType:
        for index in range(match_config.resources_per_type):
            resource_id = f"{material.value}_{index + 1}"
            resources[resource_id] = Resource(
                id=resource_id,
                position=_random_position(rng, height=0.5),
                type=material,
            )
    return resources


__all__ = ["MatchPhase", "MatchState", "lobby_state", "new_match", "starting_inventory"]
