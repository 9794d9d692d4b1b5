"""Leaderboard endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Query, Request

from bildval.api.models import ScoresResponse

if TYPE_CHECKING:
    from bildval.containers import AppContainer

router = APIRouter(prefix="/scores", tags=["scores"])


@router.get("/{game}/{mode}")
async def list_scores(
    game: str,
    mode: str,
    request: Request,
    limit: int = Query(default=10, ge=1, le=100),
) -> ScoresResponse:
    """Return the best scores for a game mode."""
    container: AppContainer = request.app.state.container
    scores = container.score_service.query(game, mode, limit=limit)
    return ScoresResponse(game=game, mode=mode, scores=scores)
