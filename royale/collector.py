"""Automatic resource pickup around the player."""

from __future__ import annotations

import logging
from typing import List

from . import config
from .models import Vec3
from .state import MatchState

logger = logging.getLogger(__name__)


def collect_nearby(state: MatchState, player_position: Vec3) -> List[str]:
    """Collect every uncollected resource within the pickup radius.

    Returns the ids collected by this call.  Collected resources are skipped
    on later scans, so calling this again from the same spot credits nothing.
    """

    collected: List[str] = []
    radius = state.config.pickup_radius
    for resource in state.resources.values():
        if resource.collected:
            continue
        if player_position.planar_distance(resource.position) >= radius:
            continue
        resource.collected = True
        state.counters.materials[resource.type] += config.RESOURCE_YIELD
        collected.append(resource.id)
        logger.debug("Collected %s (+%d %s)", resource.id, config.RESOURCE_YIELD, resource.type.value)
    return collected


__all__ = ["collect_nearby"]
