"""FastAPI adapter exposing a local match to a browser renderer.

The browser receives a ``state`` frame for every simulation step, preceded by
one ``event`` frame per kill, pickup or other change since the previous
frame.  It sends intent messages such as
``{"type": "attack", "payload": {"enemy_id": "enemy_3"}}``.  Text that is not
JSON, or JSON that is not a known intent, is answered with an ``error`` frame.
The server hosts exactly one authoritative match.
"""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from typing import AsyncIterator, Optional

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.responses import JSONResponse

from . import config
from .config import MatchConfig
from .engine import SimulationLoop
from .intents import IntentError, parse_intent

logger = logging.getLogger(__name__)


def create_app(match_config: Optional[MatchConfig] = None) -> FastAPI:
    """Create the application around a fresh simulation loop."""

    loop = SimulationLoop(match_config)

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await loop.start()
        logger.info("Simulation loop running at %d steps per second", config.FRAME_RATE)
        try:
            yield
        finally:
            await loop.stop()

    app = FastAPI(title=config.GAME_NAME, version="0.1.0", lifespan=lifespan)
    app.state.loop = loop

    @app.get("/health")
    async def healthcheck() -> JSONResponse:
        return JSONResponse({"status": "ok", "phase": loop.phase.value})

    @app.get("/snapshot")
    async def snapshot() -> JSONResponse:
        return JSONResponse(loop.snapshot().serialise())

    @app.websocket("/ws")
    async def websocket_endpoint(websocket: WebSocket) -> None:
        await websocket.accept()
        await websocket.send_json({"type": "init", "payload": loop.snapshot().serialise()})
        queue = loop.subscribe()
        sender = asyncio.create_task(_dispatch_updates(websocket, queue, loop))
        try:
            while True:
                message = await websocket.receive_text()
                try:
                    intent = parse_intent(json.loads(message))
                except (json.JSONDecodeError, IntentError) as exc:
                    logger.debug("Rejected client message %r: %s", message, exc)
                    await websocket.send_json({"type": "error", "message": str(exc)})
                    continue
                loop.submit(intent)
        except WebSocketDisconnect:
            logger.info("Renderer disconnected")
        finally:
            sender.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await sender
            loop.unsubscribe(queue)

    return app


async def _dispatch_updates(
    websocket: WebSocket, queue: asyncio.Queue, loop: SimulationLoop
) -> None:
    try:
        while True:
            snapshot = await queue.get()
            for event in loop.drain_events():
                await websocket.send_json({"type": "event", "payload": event})
            await websocket.send_json({"type": "state", "payload": snapshot.serialise()})
    except (RuntimeError, WebSocketDisconnect):
        logger.debug("Stopped streaming snapshots to a closed socket")


__all__ = ["create_app"]
