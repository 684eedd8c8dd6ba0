"""WebSocket handler for real-time play."""

from __future__ import annotations

import asyncio
import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState

from pocket_arcade.commands import parse_command
from pocket_arcade.server.models import SessionStatus
from pocket_arcade.server.session_manager import (
    ClientQueue,
    Session,
    SessionManager,
)

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


@ws_router.websocket("/sessions/{session_id}/play")
async def play(websocket: WebSocket, session_id: str) -> None:
    """Player socket: send commands, receive events and state."""
    manager = _get_manager(websocket)
    session = manager.get_session(session_id)
    if session is None or session.status != SessionStatus.ACTIVE:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await websocket.accept()
    queue = manager.connect(session)
    logger.info("Client connected to session %s.", session_id)

    # Send initial state snapshot so the client can render immediately.
    await websocket.send_text(json.dumps(
        {"type": "state", "state": session.engine.get_state()},
        separators=(",", ":"),
    ))

    receiver = asyncio.create_task(_receive_commands(websocket, manager, session))
    sender = asyncio.create_task(_pump(websocket, queue))
    try:
        done, pending = await asyncio.wait(
            {receiver, sender}, return_when=asyncio.FIRST_COMPLETED,
        )
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        for task in done:
            exc = task.exception()
            if exc is not None:
                logger.warning(
                    "Socket task failed in session %s: %r", session_id, exc,
                )
        if websocket.client_state == WebSocketState.CONNECTED:
            await websocket.close(code=1000, reason="Session closed.")
    finally:
        manager.disconnect(session, queue)
        logger.info("Client left session %s.", session_id)


async def _receive_commands(
    websocket: WebSocket, manager: SessionManager, session: Session,
) -> None:
    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue

            command = parse_command(msg)
            if command is None:
                continue
            try:
                manager.apply(session.session_id, command)
            except TypeError:
                logger.debug(
                    "Session %s ignored %s.", session.session_id, command,
                )
            except (KeyError, ValueError):
                return
    except WebSocketDisconnect:
        logger.info("Client disconnected from session %s.", session.session_id)


async def _pump(websocket: WebSocket, queue: ClientQueue) -> None:
    """Forward queued payloads until the session closes."""
    while True:
        payload = await queue.get()
        if payload is None:
            return
        await websocket.send_text(payload)
