"""Semantic user intents accepted by the simulation.

Intents are produced by an input adapter (keyboard map, websocket client)
and are independent of the device that produced them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Union

from .models import Vec3


class IntentError(ValueError):
    """Raised when a wire message cannot be turned into an intent."""


@dataclass(frozen=True)
class Move:
    """Either a planar step ``direction`` (dx, dz) or an absolute ``target``."""

    direction: Optional[Tuple[float, float]] = None
    target: Optional[Vec3] = None


@dataclass(frozen=True)
class Attack:
    """Attack an enemy by id, or whatever stands closest to ``point``."""

    enemy_id: Optional[str] = None
    point: Optional[Vec3] = None


@dataclass(frozen=True)
class SelectSlot:
    index: int


@dataclass(frozen=True)
class Reload:
    pass


@dataclass(frozen=True)
class UseHeal:
    pass


@dataclass(frozen=True)
class StartMatch:
    pass


@dataclass(frozen=True)
class EndMatch:
    pass


Intent = Union[Move, Attack, SelectSlot, Reload, UseHeal, StartMatch, EndMatch]


def parse_intent(message: Dict[str, object]) -> Intent:
    """Build an intent from a JSON message such as ``{"type": "reload"}``."""

    if not isinstance(message, dict):
        raise IntentError("Intent message must be an object")
    intent_type = str(message.get("type", "")).lower()
    payload = message.get("payload") or {}
    if not isinstance(payload, dict):
        raise IntentError("Intent payload must be an object")

    if intent_type == "move":
        if "target" in payload:
            return Move(target=_parse_position(payload["target"]))
        direction = payload.get("direction")
        if not isinstance(direction, (list, tuple)) or len(direction) != 2:
            raise IntentError("Move needs a target or a two element direction")
        try:
            return Move(direction=(float(direction[0]), float(direction[1])))
        except (TypeError, ValueError) as exc:
            raise IntentError(f"Invalid direction: {direction!r}") from exc
    if intent_type == "attack":
        if "point" in payload:
            return Attack(point=_parse_position(payload["point"]))
        enemy_id = payload.get("enemy_id")
        if not enemy_id:
            raise IntentError("Attack needs an enemy_id or a point")
        return Attack(enemy_id=str(enemy_id))
    if intent_type in ("select_slot", "select"):
        index = payload.get("index")
        if isinstance(index, bool) or not isinstance(index, int):
            raise IntentError(f"Slot index must be an integer, got {index!r}")
        return SelectSlot(index=index)
    if intent_type == "reload":
        return Reload()
    if intent_type in ("use_heal", "heal"):
        return UseHeal()
    if intent_type == "start_match":
        return StartMatch()
    if intent_type == "end_match":
        return EndMatch()
    raise IntentError(f"Unknown intent {intent_type!r}")


def _parse_position(value: object) -> Vec3:
    if isinstance(value, dict):
        try:
            return Vec3(float(value.get("x", 0.0)), float(value.get("y", 0.0)), float(value.get("z", 0.0)))
        except (TypeError, ValueError) as exc:
            raise IntentError(f"Invalid position: {value!r}") from exc
    if isinstance(value, (list, tuple)) and len(value) == 3:
        try:
            return Vec3(float(value[0]), float(value[1]), float(value[2]))
        except (TypeError, ValueError) as exc:
            raise IntentError(f"Invalid position: {value!r}") from exc
    raise IntentError(f"Invalid position: {value!r}")


__all__ = [
    "Attack",
    "EndMatch",
    "Intent",
    "IntentError",
    "Move",
    "Reload",
    "SelectSlot",
    "StartMatch",
    "UseHeal",
    "parse_intent",
]
