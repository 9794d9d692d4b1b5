"""Pydantic request and response models for the HTTP API."""

from uuid import UUID

from pydantic import BaseModel

from bildval.domain.catalog import CatalogEntry
from bildval.domain.game import GameRules, Phase, Rejected, Round, SessionState
from bildval.services.words import WordPick


class CatalogEntryModel(BaseModel):
    """Product as sent to the browser."""

    id: str
    name: str
    image: str

    @classmethod
    def from_entry(cls, entry: CatalogEntry) -> "CatalogEntryModel":
        return cls(id=entry.id, name=entry.name, image=entry.image_ref)


class WordsResponse(BaseModel):
    """Payload of the word endpoint."""

    words: list[str]
    data: dict[str, CatalogEntryModel | None]

    @classmethod
    def from_pick(cls, pick: WordPick) -> "WordsResponse":
        return cls(
            words=pick.words,
            data={
                word: CatalogEntryModel.from_entry(entry) if entry else None
                for word, entry in pick.data.items()
            },
        )


class StartSessionRequest(BaseModel):
    """Body for starting a session."""

    difficulty: str = "easy"


class AnswerRequest(BaseModel):
    """Body for answering a round by guess name."""

    name: str


class RoundModel(BaseModel):
    """A round; the solution is only filled in once it has been revealed."""

    prompt: str
    guesses: list[CatalogEntryModel]
    solution: CatalogEntryModel | None = None

    @classmethod
    def from_round(cls, round_: Round, revealed: bool) -> "RoundModel":
        return cls(
            prompt=round_.solution.name,
            guesses=[CatalogEntryModel.from_entry(guess) for guess in round_.guesses],
            solution=(
                CatalogEntryModel.from_entry(round_.solution) if revealed else None
            ),
        )


class SessionStateModel(BaseModel):
    """Full session snapshot for re-rendering the game screen."""

    session_id: UUID
    difficulty: str
    round_index: int
    max_rounds: int
    score: int
    multiplier: int
    max_multiplier: int
    passes_used: int
    passes_remaining: int
    phase: Phase
    seen_solutions: list[str]
    round: RoundModel | None
    last_answer: str | None
    last_answer_correct: bool | None
    save_outcome: str | None

    @classmethod
    def from_state(
        cls, session_id: UUID, state: SessionState, rules: GameRules
    ) -> "SessionStateModel":
        revealed = state.phase is not Phase.AWAITING_ANSWER
        seen = state.seen_solutions
        if state.round and not revealed:
            seen = seen - {state.round.solution.name}
        return cls(
            session_id=session_id,
            difficulty=state.difficulty.value,
            round_index=state.round_index,
            max_rounds=rules.max_rounds,
            score=state.score,
            multiplier=state.multiplier,
            max_multiplier=rules.max_multiplier,
            passes_used=state.passes_used,
            passes_remaining=max(rules.max_passes - state.passes_used, 0),
            phase=state.phase,
            seen_solutions=sorted(seen),
            round=RoundModel.from_round(state.round, revealed) if state.round else None,
            last_answer=state.last_answer,
            last_answer_correct=state.last_answer_correct,
            save_outcome=state.save_outcome.value if state.save_outcome else None,
        )


class RejectionModel(BaseModel):
    """Body of a 409 response for a refused operation."""

    reason: str
    state: SessionStateModel

    @classmethod
    def from_rejected(
        cls, session_id: UUID, rejected: Rejected, rules: GameRules
    ) -> "RejectionModel":
        return cls(
            reason=rejected.reason.value,
            state=SessionStateModel.from_state(session_id, rejected.state, rules),
        )


class ScoresResponse(BaseModel):
    """Leaderboard for one game mode."""

    game: str
    mode: str
    scores: list[int]
