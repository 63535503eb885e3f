"""Combat resolution for attack intents."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from . import inventory
from .models import AmmoWeapon, Enemy, Vec3
from .state import MatchState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttackOutcome:
    """Result of a single attack attempt.

    ``applied`` is false when a precondition failed; ``reason`` then names
    the failed check and the match state is unchanged.
    """

    applied: bool
    target_id: Optional[str] = None
    damage: int = 0
    remaining_health: Optional[int] = None
    killed: bool = False
    reason: Optional[str] = None

    def as_event(self) -> dict[str, object]:
        if not self.applied:
            return {"type": "attack_rejected", "target": self.target_id, "reason": self.reason}
        return {
            "type": "kill" if self.killed else "hit",
            "target": self.target_id,
            "damage": self.damage,
            "remaining_health": self.remaining_health,
        }


def _rejected(target_id: Optional[str], reason: str) -> AttackOutcome:
    logger.debug("Attack on %s rejected: %s", target_id, reason)
    return AttackOutcome(applied=False, target_id=target_id, reason=reason)


def resolve_attack(state: MatchState, target_enemy_id: str, slot_index: int) -> AttackOutcome:
    """Fire the weapon in ``slot_index`` at ``target_enemy_id``.

    Every precondition is checked before anything is mutated, so a failed
    attack never spends ammo or touches the target.
    """

    slot = state.slot_at(slot_index)
    if slot is None:
        return _rejected(target_enemy_id, "no such slot")
    if not isinstance(slot, AmmoWeapon):
        return _rejected(target_enemy_id, "slot is not a weapon")
    if not inventory.has_ammo(slot):
        return _rejected(target_enemy_id, "out of ammo")
    enemy = state.enemies.get(target_enemy_id)
    if enemy is None:
        return _rejected(target_enemy_id, "unknown target")
    if not enemy.alive:
        return _rejected(target_enemy_id, "target already eliminated")

    inventory.fire(slot)
    killed = enemy.take_damage(slot.damage)
    if killed:
        state.counters.record_kill()
        logger.info(
            "%s eliminated with %s (%d kills, %d players left)",
            enemy.id,
            slot.name,
            state.counters.kills,
            state.counters.players_left,
        )
    return AttackOutcome(
        applied=True,
        target_id=enemy.id,
        damage=slot.damage,
        remaining_health=enemy.health,
        killed=killed,
    )


def resolve_attack_at(state: MatchState, point: Vec3, slot_index: int) -> AttackOutcome:
    """Attack the living enemy closest to ``point`` within the hit radius."""

    target = closest_enemy(state, point, state.config.hit_radius)
    if target is None:
        return _rejected(None, "no enemy near the aimed point")
    return resolve_attack(state, target.id, slot_index)


def closest_enemy(state: MatchState, point: Vec3, radius: float) -> Optional[Enemy]:
    best: Optional[Enemy] = None
    best_distance = math.inf
    for enemy in state.enemies.values():
        if not enemy.alive:
            continue
        distance = point.planar_distance(enemy.position)
        if distance < radius and distance < best_distance:
            best = enemy
            best_distance = distance
    return best


__all__ = ["AttackOutcome", "closest_enemy", "resolve_attack", "resolve_attack_at"]
