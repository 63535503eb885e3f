"""Key to intent lookup for local clients.

This is a thin adapter: a stateless table from key names to intents with no
game logic.  Key names follow ``pygame.key.name`` (``"w"``, ``"1"``,
``"return"``); the Cyrillic entries cover the same physical keys on a
Russian layout, where a client reports the typed character instead.
"""

from __future__ import annotations

import math
from typing import Dict, Iterable, Optional, Tuple

from .intents import EndMatch, Intent, Move, Reload, SelectSlot, StartMatch, UseHeal

# Planar (dx, dz) per key. Forward is -z, away from the camera.
MOVEMENT_KEYS: Dict[str, Tuple[float, float]] = {
    "w": (0.0, -1.0),
    "ц": (0.0, -1.0),
    "s": (0.0, 1.0),
    "ы": (0.0, 1.0),
    "a": (-1.0, 0.0),
    "ф": (-1.0, 0.0),
    "d": (1.0, 0.0),
    "в": (1.0, 0.0),
}

ACTION_KEYS: Dict[str, Intent] = {
    "1": SelectSlot(0),
    "2": SelectSlot(1),
    "3": SelectSlot(2),
    "4": SelectSlot(3),
    "5": SelectSlot(4),
    "r": Reload(),
    "к": Reload(),
    "e": UseHeal(),
    "у": UseHeal(),
    "return": StartMatch(),
    "escape": EndMatch(),
}


def intent_for_key(key: str) -> Optional[Intent]:
    """Intent bound to a single key press, if any."""

    return ACTION_KEYS.get(key.lower())


def direction_from_keys(pressed: Iterable[str]) -> Optional[Tuple[float, float]]:
    """Sum the movement keys currently held. ``None`` when they cancel out."""

    dx = dz = 0.0
    for key in set(name.lower() for name in pressed):
        step = MOVEMENT_KEYS.get(key)
        if step:
            dx += step[0]
            dz += step[1]
    # W and its Cyrillic twin are the same physical key; count it once.
    dx = max(-1.0, min(1.0, dx))
    dz = max(-1.0, min(1.0, dz))
    if math.hypot(dx, dz) == 0:
        return None
    return (dx, dz)


def movement_intent(pressed: Iterable[str]) -> Optional[Move]:
    direction = direction_from_keys(pressed)
    if direction is None:
        return None
    return Move(direction=direction)


__all__ = [
    "ACTION_KEYS",
    "MOVEMENT_KEYS",
    "direction_from_keys",
    "intent_for_key",
    "movement_intent",
]
