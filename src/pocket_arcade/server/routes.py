"""REST API route handlers for session lifecycle and commands."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from pocket_arcade.commands import StartGame, parse_command
from pocket_arcade.server.models import (
    CommandRequest,
    CreateSessionRequest,
    ErrorResponse,
    SessionSummary,
)
from pocket_arcade.server.session_manager import SessionManager

router = APIRouter(
    prefix="/sessions",
    tags=["sessions"],
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)


def _get_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


@router.post("", status_code=201)
async def create_session(
    body: CreateSessionRequest, request: Request,
) -> SessionSummary:
    """Create a new game session."""
    manager = _get_manager(request)
    try:
        session = manager.create_session(
            **body.model_dump(exclude_none=True),
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return session.summary()


@router.get("")
async def list_sessions(request: Request) -> list[SessionSummary]:
    """List open sessions."""
    return _get_manager(request).list_sessions()


@router.get("/{session_id}")
async def get_session(session_id: str, request: Request) -> dict:
    """Get session metadata and the current engine state."""
    session = _get_manager(request).get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found.")
    result = session.summary().model_dump(mode="json")
    result["state"] = session.engine.get_state()
    return result


def _apply(request: Request, session_id: str, command) -> dict:
    manager = _get_manager(request)
    try:
        return manager.apply(session_id, command)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except TypeError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.post("/{session_id}/start", status_code=200)
async def start_session(session_id: str, request: Request) -> dict:
    """Start (or restart) the session's game."""
    state = _apply(request, session_id, StartGame())
    return {"status": "started", "session_id": session_id, "state": state}


@router.post("/{session_id}/commands", status_code=200)
async def send_command(
    session_id: str, body: CommandRequest, request: Request,
) -> dict:
    """Apply one input command; wrong-phase commands are accepted as no-ops."""
    command = parse_command(body.model_dump(exclude_none=True))
    if command is None:
        raise HTTPException(status_code=422, detail="Malformed command.")
    return {"session_id": session_id, "state": _apply(request, session_id, command)}


@router.delete("/{session_id}", status_code=200)
async def close_session(session_id: str, request: Request) -> dict:
    """Tear down a session and cancel its timers."""
    try:
        _get_manager(request).close_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return {"status": "closed", "session_id": session_id}
