"""Random word endpoint."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Query, Request, status

from bildval.api.models import WordsResponse
from bildval.domain.errors import InsufficientCatalogError
from bildval.services.words import parse_count, parse_max_length

if TYPE_CHECKING:
    from bildval.containers import AppContainer

router = APIRouter(prefix="/api", tags=["words"])


@router.get("/scrabble")
async def random_words(
    request: Request,
    length: str | None = Query(default=None),
    count: str | None = Query(default=None),
) -> WordsResponse:
    """Return random words with their catalog entries.

    Bad ``length`` or ``count`` values fall back to the defaults.
    """
    container: AppContainer = request.app.state.container
    try:
        pick = container.word_sampler.pick(
            parse_max_length(length), parse_count(count), container.random_factory()
        )
    except InsufficientCatalogError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
        ) from exc
    return WordsResponse.from_pick(pick)
