"""Session state machine for Bildval play-throughs."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID, uuid4

from bildval.domain.catalog import CatalogEntry
from bildval.domain.errors import (
    InvalidModeError,
    InvalidSelectionError,
    SessionNotFoundError,
)
from bildval.domain.game import (
    GAME_NAME,
    Difficulty,
    GameRules,
    Phase,
    Rejected,
    RejectionReason,
    SaveOutcome,
    SessionState,
)
from bildval.services.randomness import RandomFactory, RandomSource
from bildval.services.rounds import RoundGenerator

logger = logging.getLogger(__name__)

DEFAULT_SESSION_TTL = timedelta(minutes=30)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


class ScoreStore(Protocol):
    """Receives the final score of a finished session."""

    def save(self, score: int, game: str, mode: str) -> SaveOutcome:
        """Persist a score and report whether it was recorded."""


SessionResult = SessionState | Rejected


@dataclass
class GameSession:
    """State machine for one play-through.

    ``AWAITING_ANSWER`` -> ``answer`` -> ``REVEALED`` -> ``advance`` ->
    ``AWAITING_ANSWER`` on the next round, or ``FINISHED`` after the last
    one. ``pass_round`` swaps the current round while awaiting an answer.
    Operations that are not allowed return ``Rejected`` and leave the state
    untouched.
    """

    round_generator: RoundGenerator
    score_store: ScoreStore
    rng: RandomSource
    rules: GameRules = field(default_factory=GameRules)
    _state: SessionState | None = field(default=None, init=False, repr=False)

    @property
    def state(self) -> SessionState:
        """Current snapshot."""
        if self._state is None:
            raise RuntimeError("Session has not been started.")
        return self._state

    def start(self, difficulty: Difficulty) -> SessionState:
        """Reset to round one and deal the first round."""
        self._state = SessionState(
            difficulty=difficulty,
            round_index=1,
            score=0,
            multiplier=1,
            passes_used=0,
            phase=Phase.AWAITING_ANSWER,
            seen_solutions=frozenset(),
        )
        return self._request_round(self._state)

    def pass_round(self) -> SessionResult:
        """Skip the current round, spending one pass."""
        state = self.state
        rejection = _check_phase(state, Phase.AWAITING_ANSWER)
        if rejection:
            return rejection
        if state.passes_used >= self.rules.max_passes:
            return Rejected(RejectionReason.BUDGET_EXHAUSTED, state)
        passed = replace(state, passes_used=state.passes_used + 1)
        return self._request_round(passed)

    def answer(self, selection: CatalogEntry) -> SessionResult:
        """Score the player's choice and reveal the solution."""
        state = self.state
        rejection = _check_phase(state, Phase.AWAITING_ANSWER)
        if rejection:
            return rejection
        if state.round is None:
            raise RuntimeError("No active round to answer.")

        correct = selection.name == state.round.solution.name
        if correct:
            multiplier = min(state.multiplier + 1, self.rules.max_multiplier)
            score = state.score + self.rules.base_points * multiplier
        else:
            multiplier = 1
            score = state.score
        self._state = replace(
            state,
            score=score,
            multiplier=multiplier,
            phase=Phase.REVEALED,
            last_answer=selection.name,
            last_answer_correct=correct,
        )
        return self._state

    def advance(self) -> SessionResult:
        """Move to the next round, or finish after the last one."""
        state = self.state
        rejection = _check_phase(state, Phase.REVEALED)
        if rejection:
            return rejection
        if state.round_index < self.rules.max_rounds:
            following = replace(state, round_index=state.round_index + 1)
            return self._request_round(following)

        self._state = replace(state, phase=Phase.FINISHED)
        outcome = self.score_store.save(
            state.score, game=GAME_NAME, mode=state.difficulty.value
        )
        self._state = replace(self._state, save_outcome=outcome)
        logger.info(
            "Session finished",
            extra={
                "difficulty": state.difficulty.value,
                "score": state.score,
                "save_outcome": outcome.value,
            },
        )
        return self._state

    def _request_round(self, base: SessionState) -> SessionState:
        round_ = self.round_generator.generate(
            base.difficulty, base.seen_solutions, self.rng
        )
        self._state = replace(
            base,
            round=round_,
            seen_solutions=base.seen_solutions | {round_.solution.name},
            phase=Phase.AWAITING_ANSWER,
            last_answer=None,
            last_answer_correct=None,
        )
        return self._state


def _check_phase(state: SessionState, expected: Phase) -> Rejected | None:
    if state.phase is Phase.FINISHED:
        return Rejected(RejectionReason.SESSION_FINISHED, state)
    if state.phase is not expected:
        return Rejected(RejectionReason.WRONG_PHASE, state)
    return None


@dataclass
class SessionService:
    """Keeps the live sessions of this process, keyed by id.

    Sessions untouched for ``session_ttl`` are dropped, finished or not.
    """

    round_generator: RoundGenerator
    score_store: ScoreStore
    random_factory: RandomFactory
    rules: GameRules = field(default_factory=GameRules)
    session_ttl: timedelta = DEFAULT_SESSION_TTL
    clock: Callable[[], datetime] = _utc_now
    sessions: dict[UUID, GameSession] = field(default_factory=dict)
    last_seen: dict[UUID, datetime] = field(default_factory=dict)

    def start(self, mode: str) -> tuple[UUID, SessionState]:
        """Start a session for a mode name like ``easy``."""
        difficulty = parse_difficulty(mode)
        session = GameSession(
            round_generator=self.round_generator,
            score_store=self.score_store,
            rng=self.random_factory(),
            rules=self.rules,
        )
        state = session.start(difficulty)
        self.expire()
        session_id = uuid4()
        self.sessions[session_id] = session
        self.last_seen[session_id] = self.clock()
        return session_id, state

    def get(self, session_id: UUID) -> SessionState:
        """Return the current state of a session."""
        return self._session(session_id).state

    def pass_round(self, session_id: UUID) -> SessionResult:
        """Pass the current round of a session."""
        return self._session(session_id).pass_round()

    def answer(self, session_id: UUID, name: str) -> SessionResult:
        """Answer with the guess called ``name``."""
        session = self._session(session_id)
        rejection = _check_phase(session.state, Phase.AWAITING_ANSWER)
        if rejection:
            return rejection
        selection = _find_guess(session.state, name)
        if selection is None:
            raise InvalidSelectionError(f"{name!r} is not an option this round.")
        return session.answer(selection)

    def advance(self, session_id: UUID) -> SessionResult:
        """Advance a session past a revealed round."""
        return self._session(session_id).advance()

    def discard(self, session_id: UUID) -> None:
        """Forget a session when the player leaves."""
        self.last_seen.pop(session_id, None)
        if self.sessions.pop(session_id, None) is None:
            raise SessionNotFoundError(str(session_id))

    def expire(self) -> int:
        """Drop idle sessions and return how many were removed."""
        cutoff = self.clock() - self.session_ttl
        stale = [sid for sid, seen in self.last_seen.items() if seen <= cutoff]
        for session_id in stale:
            self.sessions.pop(session_id, None)
            del self.last_seen[session_id]
        if stale:
            logger.info("Expired idle sessions", extra={"count": len(stale)})
        return len(stale)

    def clear(self) -> None:
        """Forget every session."""
        self.sessions.clear()
        self.last_seen.clear()

    def _session(self, session_id: UUID) -> GameSession:
        self.expire()
        session = self.sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(str(session_id))
        self.last_seen[session_id] = self.clock()
        return session


def parse_difficulty(mode: str) -> Difficulty:
    """Map a mode name to a difficulty."""
    try:
        return Difficulty(mode.strip().lower())
    except ValueError as exc:
        raise InvalidModeError(f"Invalid mode: {mode}") from exc


def _find_guess(state: SessionState, name: str) -> CatalogEntry | None:
    if state.round is None:
        return None
    for guess in state.round.guesses:
        if guess.name == name:
            return guess
    return None
