"""Domain models for Bildval game sessions."""

from dataclasses import dataclass
from enum import Enum

from bildval.domain.catalog import CatalogEntry

GAME_NAME = "bildval"


class Difficulty(Enum):
    """Game modes, easiest first."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    INSANE = "insane"


class Phase(Enum):
    """Session phases."""

    AWAITING_ANSWER = "AWAITING_ANSWER"
    REVEALED = "REVEALED"
    FINISHED = "FINISHED"


class RejectionReason(Enum):
    """Why a session operation was refused."""

    BUDGET_EXHAUSTED = "BUDGET_EXHAUSTED"
    WRONG_PHASE = "WRONG_PHASE"
    SESSION_FINISHED = "SESSION_FINISHED"


class SaveOutcome(Enum):
    """Result of handing a final score to the score store."""

    RECORDED = "RECORDED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class GameRules:
    """Tunable constants for a session."""

    max_rounds: int = 10
    max_passes: int = 3
    max_multiplier: int = 5
    base_points: int = 10

    def __post_init__(self) -> None:
        if self.max_rounds < 1:
            raise ValueError("max_rounds must be at least 1.")
        if self.max_passes < 0:
            raise ValueError("max_passes must not be negative.")
        if self.max_multiplier < 1:
            raise ValueError("max_multiplier must be at least 1.")
        if self.base_points < 0:
            raise ValueError("base_points must not be negative.")


@dataclass(frozen=True)
class Round:
    """One question: the solution and the options shown to the player."""

    solution: CatalogEntry
    guesses: tuple[CatalogEntry, ...]


@dataclass(frozen=True)
class SessionState:
    """Immutable snapshot of a session after a transition."""

    difficulty: Difficulty
    round_index: int
    score: int
    multiplier: int
    passes_used: int
    phase: Phase
    seen_solutions: frozenset[str]
    round: Round | None = None
    last_answer: str | None = None
    last_answer_correct: bool | None = None
    save_outcome: SaveOutcome | None = None


@dataclass(frozen=True)
class Rejected:
    """Returned instead of a state when an operation is not allowed."""

    reason: RejectionReason
    state: SessionState
