"""
Leaderboard API routes.

Endpoints:
  POST /api/score        — Submit a score for a player in a game
  GET  /api/rankings     — Top scores of a game (score desc, earliest first on ties)
  GET  /rankings/latest  — Most recent submissions of a game
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from slowapi import Limiter

from leaderboard.config import Settings
from leaderboard.schemas import (
    MessageResponse,
    RankingRecord,
    ScoreSubmission,
    SubmitResponse,
)
from leaderboard.service import RankingService

_ERRORS = {400: {"model": MessageResponse}, 500: {"model": MessageResponse}}


# ── Dependency ───────────────────────────────────────────────────

def get_service(request: Request) -> RankingService:
    """The service built by ``create_app`` for this application."""
    return request.app.state.service


def build_router(limiter: Limiter, settings: Settings) -> APIRouter:
    """Routes of one application, rate limited by that application's limiter."""
    router = APIRouter(tags=["Leaderboard"])

    # ── 1. Submit Score ──────────────────────────────────────────

    @router.post("/api/score", response_model=SubmitResponse, status_code=201, responses=_ERRORS)
    @limiter.limit(settings.submit_rate_limit)
    def submit_score(
        request: Request,
        payload: Optional[ScoreSubmission] = None,
        service: RankingService = Depends(get_service),
    ):
        """
        Register a score.

        ``gameId`` is trimmed and capped at 50 characters, ``name`` at 30;
        ``score`` must be a non-negative integer.
        """
        payload = payload or ScoreSubmission()
        record = service.submit(payload.gameId, payload.name, payload.score)
        return SubmitResponse(message="score registered", data=record)

    # ── 2. Top Ranking ───────────────────────────────────────────

    @router.get("/api/rankings", response_model=list[RankingRecord], responses=_ERRORS)
    @limiter.limit(settings.read_rate_limit)
    def get_rankings(
        request: Request,
        gameId: Optional[str] = Query(None),
        limit: Optional[str] = Query(None),
        service: RankingService = Depends(get_service),
    ):
        """Up to ``limit`` (default 50, clamped to 1..200) best scores of a game."""
        return service.get_top_ranking(gameId, limit)

    # ── 3. Latest Submissions ────────────────────────────────────

    @router.get("/rankings/latest", response_model=list[RankingRecord], responses=_ERRORS)
    @limiter.limit(settings.read_rate_limit)
    def get_latest_rankings(
        request: Request,
        gameId: Optional[str] = Query(None),
        limit: Optional[str] = Query(None),
        service: RankingService = Depends(get_service),
    ):
        """Up to ``limit`` (default 20, clamped to 1..200) newest submissions of a game."""
        return service.get_latest(gameId, limit)

    return router
