"""Leaderboard score persistence."""

import logging
from dataclasses import dataclass
from typing import Protocol

from bildval.domain.game import SaveOutcome

logger = logging.getLogger(__name__)


class ScoreRepository(Protocol):
    """Persistence interface for leaderboard scores."""

    def create_score(self, game: str, mode: str, score: int) -> None:
        """Insert a final score."""

    def list_scores(self, game: str, mode: str, limit: int) -> list[int]:
        """Return the best scores for a game mode, highest first."""


@dataclass
class ScoreService:
    """Application service in front of the score repository."""

    repository: ScoreRepository

    def save(self, score: int, game: str, mode: str) -> SaveOutcome:
        """Persist a final score, reporting failure instead of raising."""
        try:
            self.repository.create_score(game=game, mode=mode, score=score)
        except Exception:
            logger.exception(
                "Failed to save score",
                extra={"game": game, "mode": mode, "score": score},
            )
            return SaveOutcome.FAILED
        return SaveOutcome.RECORDED

    def query(self, game: str, mode: str, limit: int = 10) -> list[int]:
        """Return the leaderboard for a game mode."""
        return self.repository.list_scores(game=game, mode=mode, limit=limit)
