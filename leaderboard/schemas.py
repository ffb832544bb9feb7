"""
Pydantic schemas for request parsing and response serialization.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


# ── Request Schemas ──────────────────────────────────────────────

class ScoreSubmission(BaseModel):
    """
    Request body for submitting a score.

    Fields stay untyped: the service owns the validation order and the
    error messages, so a bad ``score`` must reach it rather than be
    rejected here with a 422.
    """

    gameId: Any = None
    name: Any = None
    score: Any = None


# ── Response Schemas ─────────────────────────────────────────────

class RankingRecord(BaseModel):
    """A persisted score submission."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    game_id: str
    name: str
    score: int
    created_at: datetime


class SubmitResponse(BaseModel):
    """Response after successfully submitting a score."""

    message: str
    data: RankingRecord


class MessageResponse(BaseModel):
    """Standard error response."""

    message: str


class HealthResponse(BaseModel):
    """Liveness probe response."""

    ok: bool = True
