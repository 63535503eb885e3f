"""Data models for the Cyber Royale match simulation.

Every entity of a round lives in one of the dataclasses below.  They are
owned by :class:`royale.state.MatchState` and are only ever mutated by the
transition functions of the engine; renderers receive frozen copies from
:mod:`royale.snapshot`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Union

from . import config


@dataclass(frozen=True)
class Vec3:
    """Immutable position in the arena. ``y`` is the vertical axis."""

    x: float
    y: float
    z: float

    def planar_distance(self, other: "Vec3") -> float:
        """Distance on the ground plane, ignoring height."""

        return math.hypot(self.x - other.x, self.z - other.z)

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


class MaterialType(str, Enum):
    """Building materials dropped by resource nodes."""

    WOOD = "wood"
    STONE = "stone"
    METAL = "metal"


class WeaponType(str, Enum):
    ASSAULT = "assault"
    SNIPER = "sniper"
    SHOTGUN = "shotgun"
    SMG = "smg"
    HEAL = "heal"


class Rarity(str, Enum):
    """Cosmetic tier of an inventory item. Not used by any gameplay rule."""

    COMMON = "common"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


@dataclass
class Player:
    """The local player. Never destroyed, reset when a match starts."""

    position: Vec3 = field(default_factory=lambda: Vec3(0.0, 0.0, 0.0))
    health: int = config.MAX_HEALTH
    shield: int = config.STARTING_SHIELD


@dataclass
class Enemy:
    """An opponent that can be shot down. Inert once ``alive`` is false."""

    id: str
    position: Vec3
    max_health: int
    health: int
    alive: bool = True

    def take_damage(self, amount: int) -> bool:
        """Apply ``amount`` damage and return ``True`` if this hit was lethal."""

        if not self.alive:
            return False
        self.health = max(0, self.health - max(0, amount))
        if self.health == 0:
            self.alive = False
            return True
        return False


@dataclass
class Resource:
    """A material node. ``collected`` only ever flips from false to true."""

    id: str
    position: Vec3
    type: MaterialType
    collected: bool = False


@dataclass
class AmmoWeapon:
    """A firearm slot that consumes one round per shot."""

    id: str
    name: str
    weapon_type: WeaponType
    ammo: int
    max_ammo: int
    damage: int
    rarity: Rarity

    def __post_init__(self) -> None:
        if self.damage < 0:
            raise ValueError("Weapon damage cannot be negative")
        if self.max_ammo < 0:
            raise ValueError("Magazine size cannot be negative")
        if not 0 <= self.ammo <= self.max_ammo:
            raise ValueError("Ammo must lie between 0 and the magazine size")

    @property
    def is_empty(self) -> bool:
        return self.ammo <= 0


@dataclass
class HealItem:
    """A single use consumable. Removed from the inventory when used."""

    id: str
    name: str
    rarity: Rarity
    heal_amount: int = config.HEAL_AMOUNT
    weapon_type: WeaponType = WeaponType.HEAL
    damage: int = 0


InventorySlot = Union[AmmoWeapon, HealItem]


@dataclass
class MatchCounters:
    """Kill tally, remaining players and gathered materials."""

    kills: int = 0
    players_left: int = config.PLAYERS_LEFT
    materials: Dict[MaterialType, int] = field(
        default_factory=lambda: {material: 0 for material in MaterialType}
    )

    def record_kill(self) -> None:
        self.kills += 1
        self.players_left = max(1, self.players_left - 1)


__all__ = [
    "AmmoWeapon",
    "Enemy",
    "HealItem",
    "InventorySlot",
    "MatchCounters",
    "MaterialType",
    "Player",
    "Rarity",
    "Resource",
    "Vec3",
    "WeaponType",
]
