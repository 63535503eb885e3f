"""Read-only views of the match handed to renderers once per step."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .models import AmmoWeapon, MaterialType, Vec3
from .state import MatchState


@dataclass(frozen=True)
class PlayerView:
    position: Vec3
    health: int
    shield: int


@dataclass(frozen=True)
class EnemyView:
    id: str
    position: Vec3
    health: int
    max_health: int
    alive: bool


@dataclass(frozen=True)
class ResourceView:
    id: str
    position: Vec3
    type: str
    collected: bool


@dataclass(frozen=True)
class SlotView:
    id: str
    name: str
    type: str
    damage: int
    rarity: str
    ammo: Optional[int] = None
    max_ammo: Optional[int] = None


@dataclass(frozen=True)
class CountersView:
    kills: int
    players_left: int
    wood: int
    stone: int
    metal: int

    @property
    def materials(self) -> Dict[str, int]:
        return {"wood": self.wood, "stone": self.stone, "metal": self.metal}


@dataclass(frozen=True)
class Snapshot:
    """Immutable copy of the complete match state."""

    phase: str
    tick: int
    player: PlayerView
    enemies: Tuple[EnemyView, ...]
    resources: Tuple[ResourceView, ...]
    inventory: Tuple[SlotView, ...]
    selected_slot: int
    counters: CountersView
    storm_timer: int

    def serialise(self) -> Dict[str, object]:
        return {
            "phase": self.phase,
            "tick": self.tick,
            "player": {
                "position": self.player.position.to_tuple(),
                "health": self.player.health,
                "shield": self.player.shield,
            },
            "enemies": [
                {
                    "id": enemy.id,
                    "position": enemy.position.to_tuple(),
                    "health": enemy.health,
                    "max_health": enemy.max_health,
                    "alive": enemy.alive,
                }
                for enemy in self.enemies
            ],
            "resources": [
                {
                    "id": resource.id,
                    "position": resource.position.to_tuple(),
                    "type": resource.type,
                    "collected": resource.collected,
                }
                for resource in self.resources
            ],
            "inventory": [_serialise_slot(slot) for slot in self.inventory],
            "selected_slot": self.selected_slot,
            "counters": {
                "kills": self.counters.kills,
                "players_left": self.counters.players_left,
                "materials": self.counters.materials,
            },
            "storm_timer": self.storm_timer,
        }


def _serialise_slot(slot: SlotView) -> Dict[str, object]:
    data: Dict[str, object] = {
        "id": slot.id,
        "name": slot.name,
        "type": slot.type,
        "damage": slot.damage,
        "rarity": slot.rarity,
    }
    # Heal items carry no ammo fields at all.
    if slot.ammo is not None:
        data["ammo"] = slot.ammo
        data["max_ammo"] = slot.max_ammo
    return data


def take_snapshot(state: MatchState) -> Snapshot:
    inventory = []
    for slot in state.inventory:
        if isinstance(slot, AmmoWeapon):
            ammo, max_ammo = slot.ammo, slot.max_ammo
        else:
            ammo = max_ammo = None
        inventory.append(
            SlotView(
                id=slot.id,
                name=slot.name,
                type=slot.weapon_type.value,
                damage=slot.damage,
                rarity=slot.rarity.value,
                ammo=ammo,
                max_ammo=max_ammo,
            )
        )
    materials = state.counters.materials
    return Snapshot(
        phase=state.phase.value,
        tick=state.tick,
        player=PlayerView(
            position=state.player.position,
            health=state.player.health,
            shield=state.player.shield,
        ),
        enemies=tuple(
            EnemyView(
                id=enemy.id,
                position=enemy.position,
                health=enemy.health,
                max_health=enemy.max_health,
                alive=enemy.alive,
            )
            for enemy in state.enemies.values()
        ),
        resources=tuple(
            ResourceView(
                id=resource.id,
                position=resource.position,
                type=resource.type.value,
                collected=resource.collected,
            )
            for resource in state.resources.values()
        ),
        inventory=tuple(inventory),
        selected_slot=state.selected_slot,
        counters=CountersView(
            kills=state.counters.kills,
            players_left=state.counters.players_left,
            wood=materials[MaterialType.WOOD],
            stone=materials[MaterialType.STONE],
            metal=materials[MaterialType.METAL],
        ),
        storm_timer=state.clock.storm_timer,
    )


__all__ = [
    "CountersView",
    "EnemyView",
    "PlayerView",
    "ResourceView",
    "SlotView",
    "Snapshot",
    "take_snapshot",
]
