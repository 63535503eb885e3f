"""Inventory transitions: firing, reloading, healing and slot selection.

Ammo weapons behave as a two state machine, ``Loaded`` (ammo > 0) and
``Empty`` (ammo == 0).  ``fire`` moves one round out of a loaded weapon and
``reload`` refills it to ``max_ammo``.  Heal items are one-shot consumables
that disappear from the inventory when used.

Every function either applies its transition completely and returns
``True`` or leaves the state untouched and returns ``False``.
"""

from __future__ import annotations

import logging
from typing import Optional

from . import config
from .models import AmmoWeapon, HealItem, InventorySlot
from .state import MatchState

logger = logging.getLogger(__name__)


def has_ammo(slot: Optional[InventorySlot]) -> bool:
    return isinstance(slot, AmmoWeapon) and slot.ammo > 0


def fire(slot: InventorySlot) -> bool:
    """Spend one round from ``slot``."""

    if not has_ammo(slot):
        logger.debug("Cannot fire %s: no ammo", getattr(slot, "name", slot))
        return False
    slot.ammo -= 1
    return True


def reload(state: MatchState) -> bool:
    """Refill the selected weapon to its magazine size."""

    slot = state.selected()
    if not isinstance(slot, AmmoWeapon):
        logger.debug("Reload ignored: selected slot is not an ammo weapon")
        return False
    slot.ammo = slot.max_ammo
    return True


def use_heal(state: MatchState) -> bool:
    """Consume the selected heal item and restore player health."""

    slot = state.selected()
    if not isinstance(slot, HealItem):
        logger.debug("Heal ignored: selected slot is not a heal item")
        return False
    player = state.player
    player.health = min(config.MAX_HEALTH, player.health + slot.heal_amount)
    del state.inventory[state.selected_slot]
    state.selected_slot = max(0, state.selected_slot - 1)
    return True


def select_slot(state: MatchState, index: int) -> bool:
    if not isinstance(index, int) or isinstance(index, bool):
        logger.debug("Slot index %r is not an integer", index)
        return False
    if not 0 <= index < len(state.inventory):
        logger.debug("Slot %s out of range (inventory holds %d)", index, len(state.inventory))
        return False
    state.selected_slot = index
    return True


__all__ = ["fire", "has_ammo", "reload", "select_slot", "use_heal"]
