"""Simulation loop for a Cyber Royale round.

The loop keeps the authoritative :class:`~royale.state.MatchState`, applies
intents strictly in arrival order, advances the storm clock and hands
immutable snapshots to whichever renderer is attached.  All mutation happens
synchronously on one thread of control; the optional asyncio runner only
schedules ``step`` and ``advance`` calls.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import math
import time
from collections import deque
from dataclasses import dataclass, field, fields
from typing import Callable, Deque, Dict, List, Optional

from . import collector, combat, config, inventory
from .config import MatchConfig
from .intents import Attack, EndMatch, Intent, Move, Reload, SelectSlot, StartMatch, UseHeal
from .models import Vec3
from .snapshot import Snapshot, take_snapshot
from .state import MatchPhase, MatchState, lobby_state, new_match

logger = logging.getLogger(__name__)

Event = Dict[str, object]


@dataclass(slots=True)
class IntentQueue:
    """FIFO of intents waiting for the next simulation step."""

    _queue: Deque[Intent] = field(default_factory=deque)

    def push(self, intent: Intent) -> None:
        self._queue.append(intent)

    def drain(self) -> List[Intent]:
        intents = list(self._queue)
        self._queue.clear()
        return intents

    def __len__(self) -> int:
        return len(self._queue)


# ----------------------------------------------------------------------
# Transition functions
# ----------------------------------------------------------------------
def apply_intent(state: MatchState, intent: Intent) -> List[Event]:
    """Apply a single intent to ``state`` and return the resulting events.

    An intent that fails any precondition leaves ``state`` untouched and
    yields no events.  No exception escapes for a well-typed intent.
    """

    if state.phase is MatchPhase.ENDED:
        logger.debug("Discarding %r: match has ended", intent)
        return []
    if isinstance(intent, StartMatch):
        return _handle_start(state)
    if state.phase is MatchPhase.LOBBY:
        logger.debug("Discarding %r: match has not started", intent)
        return []
    handler = _HANDLERS.get(type(intent))
    if handler is None:
        logger.debug("Discarding unknown intent %r", intent)
        return []
    return handler(state, intent)


def _handle_start(state: MatchState) -> List[Event]:
    if state.phase is not MatchPhase.LOBBY:
        return []
    fresh = new_match(state.config)
    for match_field in fields(MatchState):
        setattr(state, match_field.name, getattr(fresh, match_field.name))
    logger.info(
        "Match started: %d enemies, %d resources, storm in %ss",
        len(state.enemies),
        len(state.resources),
        state.clock.storm_timer,
    )
    return [{"type": "match_started"}]


def _handle_end(state: MatchState, intent: EndMatch) -> List[Event]:
    state.phase = MatchPhase.ENDED
    logger.info("Match ended with %d kills", state.counters.kills)
    return [{"type": "match_ended", "kills": state.counters.kills}]


def _handle_move(state: MatchState, intent: Move) -> List[Event]:
    current = state.player.position
    if intent.target is not None:
        x, z = intent.target.x, intent.target.z
    elif intent.direction is not None:
        dx, dz = intent.direction
        length = math.hypot(dx, dz)
        if length == 0 or not math.isfinite(length):
            return []
        x = current.x + dx / length * config.MOVE_SPEED
        z = current.z + dz / length * config.MOVE_SPEED
    else:
        return []
    if not (math.isfinite(x) and math.isfinite(z)):
        return []
    destination = Vec3(_clamp_to_arena(x), current.y, _clamp_to_arena(z))
    state.player.position = destination
    return [{"type": "moved", "position": destination.to_tuple()}]


def _handle_attack(state: MatchState, intent: Attack) -> List[Event]:
    if intent.enemy_id is not None:
        outcome = combat.resolve_attack(state, intent.enemy_id, state.selected_slot)
    elif intent.point is not None:
        outcome = combat.resolve_attack_at(state, intent.point, state.selected_slot)
    else:
        return []
    return [outcome.as_event()] if outcome.applied else []


def _handle_select_slot(state: MatchState, intent: SelectSlot) -> List[Event]:
    if not inventory.select_slot(state, intent.index):
        return []
    return [{"type": "slot_selected", "index": intent.index}]


def _handle_reload(state: MatchState, intent: Reload) -> List[Event]:
    if not inventory.reload(state):
        return []
    return [{"type": "reloaded", "slot": state.selected_slot}]


def _handle_use_heal(state: MatchState, intent: UseHeal) -> List[Event]:
    if not inventory.use_heal(state):
        return []
    return [{"type": "healed", "health": state.player.health}]


_HANDLERS: Dict[type, Callable[[MatchState, Intent], List[Event]]] = {
    Move: _handle_move,
    Attack: _handle_attack,
    SelectSlot: _handle_select_slot,
    Reload: _handle_reload,
    UseHeal: _handle_use_heal,
    EndMatch: _handle_end,
}


def _clamp_to_arena(value: float) -> float:
    return max(-config.ARENA_HALF_SIZE, min(config.ARENA_HALF_SIZE, value))


# ----------------------------------------------------------------------
# Loop
# ----------------------------------------------------------------------
class SimulationLoop:
    """Owns one match and drives it step by step."""

    def __init__(self, match_config: Optional[MatchConfig] = None) -> None:
        self.state = lobby_state(match_config)
        self.intent_queue = IntentQueue()
        self.events: Deque[Event] = deque(maxlen=100)
        self._frame_interval = 1.0 / config.FRAME_RATE
        self._task: Optional[asyncio.Task[None]] = None
        self._subscribers: List[asyncio.Queue[Snapshot]] = []

    @property
    def phase(self) -> MatchPhase:
        return self.state.phase

    # ------------------------------------------------------------------
    # Intent intake
    # ------------------------------------------------------------------
    def submit(self, intent: Intent) -> None:
        """Queue ``intent`` for the next :meth:`step`."""

        if self.state.phase is MatchPhase.ENDED:
            logger.debug("Dropping %r submitted after match end", intent)
            return
        self.intent_queue.push(intent)

    def apply_intent(self, intent: Intent) -> List[Event]:
        events = apply_intent(self.state, intent)
        self.events.extend(events)
        return events

    # ------------------------------------------------------------------
    # Ticking
    # ------------------------------------------------------------------
    def step(self) -> Snapshot:
        """Apply queued intents in arrival order, collect pickups, snapshot."""

        for intent in self.intent_queue.drain():
            self.apply_intent(intent)
        if self.state.running:
            self.state.tick += 1
            for resource_id in collector.collect_nearby(self.state, self.state.player.position):
                self.events.append({"type": "collected", "resource": resource_id})
        return self.snapshot()

    def advance(self) -> int:
        """Tick the storm clock. Does nothing unless the match is running."""

        if self.state.running:
            self.state.clock.tick()
        return self.state.clock.storm_timer

    def snapshot(self) -> Snapshot:
        return take_snapshot(self.state)

    def drain_events(self) -> List[Event]:
        events = list(self.events)
        self.events.clear()
        return events

    # ------------------------------------------------------------------
    # Asynchronous runner
    # ------------------------------------------------------------------
    async def start(self) -> None:
        if self._task is None:
            self._task = asyncio.create_task(self._run_loop())

    async def wait_until_finished(self) -> None:
        if self._task is not None:
            await self._task

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None

    async def _run_loop(self) -> None:
        last_frame = time.perf_counter()
        clock_elapsed = 0.0
        while self.state.phase is not MatchPhase.ENDED:
            now = time.perf_counter()
            dt = now - last_frame
            if dt < self._frame_interval:
                await asyncio.sleep(self._frame_interval - dt)
                continue
            last_frame = now
            snapshot = self.step()
            if self.state.running:
                clock_elapsed += dt
                while clock_elapsed >= config.CLOCK_INTERVAL:
                    clock_elapsed -= config.CLOCK_INTERVAL
                    self.advance()
                    snapshot = self.snapshot()
            await self._publish(snapshot)
        await self._publish(self.snapshot())

    async def _publish(self, snapshot: Snapshot) -> None:
        for queue in list(self._subscribers):
            if queue.full():
                with contextlib.suppress(asyncio.QueueEmpty):
                    queue.get_nowait()
            await queue.put(snapshot)

    def subscribe(self) -> asyncio.Queue[Snapshot]:
        """Create a queue that always holds the latest snapshot."""

        queue: asyncio.Queue[Snapshot] = asyncio.Queue(maxsize=1)
        self._subscribers.append(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue[Snapshot]) -> None:
        with contextlib.suppress(ValueError):
            self._subscribers.remove(queue)


__all__ = ["IntentQueue", "SimulationLoop", "apply_intent"]
