"""Round generation for Bildval."""

import logging
from collections.abc import Collection, Mapping, Sequence
from dataclasses import dataclass, field
from difflib import SequenceMatcher
from typing import Protocol

from bildval.domain.catalog import Catalog, CatalogEntry
from bildval.domain.errors import InsufficientCatalogError
from bildval.domain.game import Difficulty, Round
from bildval.services.randomness import RandomSource

logger = logging.getLogger(__name__)


class DistractorStrategy(Protocol):
    """Chooses the wrong options for a round."""

    def pick(
        self,
        solution: CatalogEntry,
        candidates: Sequence[CatalogEntry],
        count: int,
        rng: RandomSource,
    ) -> list[CatalogEntry]:
        """Return ``count`` distinct entries from ``candidates``."""


@dataclass(frozen=True)
class UniformDistractors(DistractorStrategy):
    """Samples distractors uniformly without replacement."""

    def pick(
        self,
        solution: CatalogEntry,
        candidates: Sequence[CatalogEntry],
        count: int,
        rng: RandomSource,
    ) -> list[CatalogEntry]:
        """Sample uniformly from every candidate."""
        return rng.sample(candidates, count)


@dataclass(frozen=True)
class SimilarNameDistractors(DistractorStrategy):
    """Samples distractors among the names closest to the solution.

    The pool holds ``pool_factor * count`` candidates ranked by
    ``SequenceMatcher`` ratio against the solution name. A smaller factor
    gives look-alike options more often.
    """

    pool_factor: int = 4

    def pick(
        self,
        solution: CatalogEntry,
        candidates: Sequence[CatalogEntry],
        count: int,
        rng: RandomSource,
    ) -> list[CatalogEntry]:
        """Sample from the most similar names."""
        pool_size = max(count * self.pool_factor, count)
        if len(candidates) <= pool_size:
            return rng.sample(candidates, count)
        ranked = sorted(
            candidates,
            key=lambda entry: (
                -_name_similarity(solution.name, entry.name),
                entry.name,
            ),
        )
        return rng.sample(ranked[:pool_size], count)


@dataclass(frozen=True)
class TierPolicy:
    """Number of options and distractor strategy for a difficulty."""

    option_count: int
    distractors: DistractorStrategy

    def __post_init__(self) -> None:
        if self.option_count < 1:
            raise ValueError("option_count must be at least 1.")


DEFAULT_TIERS: Mapping[Difficulty, TierPolicy] = {
    Difficulty.EASY: TierPolicy(option_count=4, distractors=UniformDistractors()),
    Difficulty.MEDIUM: TierPolicy(option_count=6, distractors=UniformDistractors()),
    Difficulty.HARD: TierPolicy(
        option_count=8, distractors=SimilarNameDistractors(pool_factor=4)
    ),
    Difficulty.INSANE: TierPolicy(
        option_count=8, distractors=SimilarNameDistractors(pool_factor=2)
    ),
}


@dataclass
class RoundGenerator:
    """Builds multiple-choice rounds from a catalog snapshot."""

    catalog: Catalog
    tiers: Mapping[Difficulty, TierPolicy] = field(
        default_factory=lambda: dict(DEFAULT_TIERS)
    )

    def option_count(self, difficulty: Difficulty) -> int:
        """Return how many guesses a round of this difficulty shows."""
        return self.tiers[difficulty].option_count

    def generate(
        self,
        difficulty: Difficulty,
        exclude_names: Collection[str],
        rng: RandomSource,
    ) -> Round:
        """Generate a round whose solution is not in ``exclude_names``."""
        tier = self.tiers[difficulty]
        entries = self.catalog.entries
        if len(entries) < tier.option_count:
            raise InsufficientCatalogError(
                f"Catalog has {len(entries)} entries, "
                f"{difficulty.value} needs {tier.option_count}."
            )
        eligible = [entry for entry in entries if entry.name not in exclude_names]
        if not eligible:
            raise InsufficientCatalogError("No unseen solutions remain.")

        solution = eligible[rng.randrange(len(eligible))]
        others = [entry for entry in entries if entry.name != solution.name]
        distractors = tier.distractors.pick(
            solution, others, tier.option_count - 1, rng
        )
        guesses = [solution, *distractors]
        rng.shuffle(guesses)
        logger.debug(
            "Generated round",
            extra={"difficulty": difficulty.value, "solution": solution.name},
        )
        return Round(solution=solution, guesses=tuple(guesses))


def _name_similarity(left: str, right: str) -> float:
    return SequenceMatcher(None, left.lower(), right.lower()).ratio()
