"""Bildval session endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, HTTPException, Request, status

from bildval.api.models import (
    AnswerRequest,
    RejectionModel,
    SessionStateModel,
    StartSessionRequest,
)
from bildval.domain.game import Rejected

if TYPE_CHECKING:
    from bildval.containers import AppContainer
    from bildval.services.sessions import SessionResult

router = APIRouter(prefix="/bildval/sessions", tags=["bildval"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def start_session(
    body: StartSessionRequest, request: Request
) -> SessionStateModel:
    """Start a new session at the requested difficulty."""
    container: AppContainer = request.app.state.container
    session_id, state = container.session_service.start(body.difficulty)
    return SessionStateModel.from_state(
        session_id, state, container.session_service.rules
    )


@router.get("/{session_id}")
async def get_session(session_id: UUID, request: Request) -> SessionStateModel:
    """Return the current session state."""
    container: AppContainer = request.app.state.container
    state = container.session_service.get(session_id)
    return SessionStateModel.from_state(
        session_id, state, container.session_service.rules
    )


@router.post("/{session_id}/pass")
async def pass_round(session_id: UUID, request: Request) -> SessionStateModel:
    """Skip the current round."""
    container: AppContainer = request.app.state.container
    result = container.session_service.pass_round(session_id)
    return _respond(container, session_id, result)


@router.post("/{session_id}/answer")
async def answer_round(
    session_id: UUID, body: AnswerRequest, request: Request
) -> SessionStateModel:
    """Answer the current round."""
    container: AppContainer = request.app.state.container
    result = container.session_service.answer(session_id, body.name)
    return _respond(container, session_id, result)


@router.post("/{session_id}/advance")
async def advance_round(session_id: UUID, request: Request) -> SessionStateModel:
    """Go to the next round or finish the game."""
    container: AppContainer = request.app.state.container
    result = container.session_service.advance(session_id)
    return _respond(container, session_id, result)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def leave_session(session_id: UUID, request: Request) -> None:
    """Drop a session when the player leaves."""
    container: AppContainer = request.app.state.container
    container.session_service.discard(session_id)


def _respond(
    container: AppContainer, session_id: UUID, result: SessionResult
) -> SessionStateModel:
    rules = container.session_service.rules
    if isinstance(result, Rejected):
        rejection = RejectionModel.from_rejected(session_id, result, rules)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=rejection.model_dump(mode="json"),
        )
    return SessionStateModel.from_state(session_id, result, rules)
