"""Cyber Royale match engine.

The package holds the authoritative simulation of one battle-royale round.
Renderers (the pygame canvas, the FastAPI websocket adapter) only read
snapshots and submit intents.
"""

from .config import MatchConfig
from .engine import SimulationLoop, apply_intent
from .snapshot import Snapshot
from .state import MatchPhase, MatchState, new_match

__all__ = [
    "MatchConfig",
    "MatchPhase",
    "MatchState",
    "SimulationLoop",
    "Snapshot",
    "apply_intent",
    "new_match",
]
