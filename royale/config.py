"""Configuration for the Cyber Royale match engine.

Module level constants hold the tuning values of a round.  ``MatchConfig``
bundles the values that vary between matches so a caller can start a
deterministic round (for example in tests) without touching the globals.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple

GAME_NAME = "Cyber Royale"

FRAME_RATE = 30  # Simulation steps per second.
CLOCK_INTERVAL = 1.0  # Seconds between storm timer ticks.

ARENA_HALF_SIZE = 30.0  # The arena spans [-30, 30] on both planar axes.
MOVE_SPEED = 0.3  # Units per movement step.

PICKUP_RADIUS = 3.0
HIT_RADIUS = 8.0  # Radius around a clicked point that counts as a hit.
RESOURCE_YIELD = 50

MAX_HEALTH = 100
MAX_SHIELD = 100
STARTING_SHIELD = 75
HEAL_AMOUNT = 50

STORM_TIMER_SECONDS = 180
PLAYERS_LEFT = 47

ENEMY_COUNT = 10
ENEMY_MAX_HEALTH = 100
RESOURCES_PER_TYPE = 5
INVENTORY_CAPACITY = 5

MATERIAL_TYPES: Tuple[str, ...] = ("wood", "stone", "metal")

# (id, name, weapon type, ammo, damage, rarity). A ``None`` ammo marks a heal item.
STARTING_LOADOUT: Tuple[Tuple[str, str, str, int | None, int, str], ...] = (
    ("1", "Assault Rifle", "assault", 30, 35, "epic"),
    ("2", "Pump Shotgun", "shotgun", 8, 80, "legendary"),
    ("3", "Med Kit", "heal", None, 0, "rare"),
)


@dataclass(frozen=True)
class MatchConfig:
    """Static configuration describing how a round is created.

    Attributes
    ----------
    seed:
        Seed for the spawn generator.  ``None`` draws fresh positions on
        every match.
    enemy_count:
        Number of enemies spawned at match start.
    enemy_max_health:
        Health every enemy starts with.
    resources_per_type:
        Number of wood, stone and metal nodes scattered over the arena.
    storm_timer:
        Seconds on the storm clock when the match starts.
    players_left:
        Value of the "alive" counter at match start.  It never drops
        below one.
    pickup_radius:
        Planar distance below which a resource is collected automatically.
    hit_radius:
        Planar distance from a clicked point within which an enemy is hit.
    starting_materials:
        Materials the player drops in with.
    """

    seed: int | None = None
    enemy_count: int = ENEMY_COUNT
    enemy_max_health: int = ENEMY_MAX_HEALTH
    resources_per_type: int = RESOURCES_PER_TYPE
    storm_timer: int = STORM_TIMER_SECONDS
    players_left: int = PLAYERS_LEFT
    pickup_radius: float = PICKUP_RADIUS
    hit_radius: float = HIT_RADIUS
    starting_materials: Dict[str, int] = field(
        default_factory=lambda: {material: 0 for material in MATERIAL_TYPES}
    )

    def validate(self) -> None:
        if self.enemy_count < 0 or self.resources_per_type < 0:
            raise ValueError("Spawn counts cannot be negative")
        if self.enemy_max_health <= 0:
            raise ValueError("Enemy health must be positive")
        if self.storm_timer < 0:
            raise ValueError("Storm timer cannot be negative")
        if self.players_left < 1:
            raise ValueError("At least one player must be alive")
        if self.pickup_radius <= 0 or self.hit_radius <= 0:
            raise ValueError("Radii must be positive")
        if set(self.starting_materials) != set(MATERIAL_TYPES):
            raise ValueError("Starting materials must list wood, stone and metal")
        if any(amount < 0 for amount in self.starting_materials.values()):
            raise ValueError("Starting materials cannot be negative")
