"""Injectable randomness."""

import random
from collections.abc import Callable, MutableSequence, Sequence
from typing import Protocol, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    """Subset of ``random.Random`` used by the game services."""

    def randrange(self, stop: int) -> int:
        """Return a random integer in ``[0, stop)``."""

    def sample(self, population: Sequence[T], k: int) -> list[T]:
        """Return ``k`` distinct elements chosen from ``population``."""

    def shuffle(self, x: MutableSequence[object]) -> None:
        """Shuffle ``x`` in place."""


RandomFactory = Callable[[], RandomSource]


def random_factory(seed: int | None = None) -> RandomFactory:
    """Return a factory producing independent random sources."""
    if seed is None:
        return random.Random

    def seeded() -> RandomSource:
        return random.Random(seed)

    return seeded
