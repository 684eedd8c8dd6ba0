"""Pydantic models for API request/response schemas."""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field


class GameKind(str, enum.Enum):
    """Which engine a session runs."""

    SEQUENCE = "sequence"
    SNAKE = "snake"


class SessionStatus(str, enum.Enum):
    """Lifecycle states for a session."""

    ACTIVE = "active"
    CLOSED = "closed"


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions.

    Unset overrides fall back to the engine defaults.
    """

    game: GameKind
    seed: int | None = None

    # Sequence game
    alphabet_size: int | None = Field(default=None, ge=1, le=16)
    lead_in_ms: int | None = Field(default=None, ge=0, le=10_000)
    lit_ms: int | None = Field(default=None, ge=0, le=10_000)
    gap_ms: int | None = Field(default=None, ge=0, le=10_000)
    success_delay_ms: int | None = Field(default=None, ge=0, le=10_000)
    failure_delay_ms: int | None = Field(default=None, ge=0, le=10_000)

    # Snake game
    grid_size: int | None = Field(default=None, ge=4, le=100)
    initial_tick_ms: int | None = Field(default=None, ge=10, le=2000)
    tick_decrement_ms: int | None = Field(default=None, ge=0, le=500)
    min_tick_ms: int | None = Field(default=None, ge=10, le=2000)


class CommandRequest(BaseModel):
    """Request body for POST /sessions/{session_id}/commands."""

    command: str
    symbol: int | None = None
    direction: str | None = None


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    game: GameKind
    status: SessionStatus
    phase: str
    score: int
    high_score: int
    clients: int


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    detail: str
