"""Random word picking for the word endpoint."""

import logging
import math
from dataclasses import dataclass

from bildval.domain.catalog import Catalog, CatalogEntry
from bildval.domain.errors import InsufficientCatalogError
from bildval.services.randomness import RandomSource

logger = logging.getLogger(__name__)

DEFAULT_MAX_LENGTH = 7
MIN_MAX_LENGTH = 5
MAX_MAX_LENGTH = 7

DEFAULT_COUNT = 4
MIN_COUNT = 3
MAX_COUNT = 6


@dataclass(frozen=True)
class WordPick:
    """Sampled words with their catalog entries."""

    words: list[str]
    data: dict[str, CatalogEntry | None]


@dataclass
class WordSampler:
    """Rejection sampler over the catalog word corpus.

    With ``distinct`` off a word may be drawn more than once per call, in
    which case ``WordPick.data`` holds a single key for it.
    """

    catalog: Catalog
    distinct: bool = False

    def sample(self, max_length: int, count: int, rng: RandomSource) -> list[str]:
        """Draw ``count`` words no longer than ``max_length``."""
        corpus = self.catalog.words
        eligible = {word for word in corpus if len(word) <= max_length}
        if not eligible:
            raise InsufficientCatalogError(
                f"No words of length {max_length} or less in the corpus."
            )
        if self.distinct and len(eligible) < count:
            raise InsufficientCatalogError(
                f"Only {len(eligible)} distinct words fit length {max_length}."
            )

        words: list[str] = []
        while len(words) < count:
            word = corpus[rng.randrange(len(corpus))]
            if len(word) > max_length:
                continue
            if self.distinct and word in words:
                continue
            words.append(word)
        return words

    def pick(self, max_length: int, count: int, rng: RandomSource) -> WordPick:
        """Sample words and pair each with its catalog entry."""
        words = self.sample(max_length, count, rng)
        data = {word: self.catalog.lookup(word) for word in words}
        missing = [word for word, entry in data.items() if entry is None]
        if missing:
            logger.warning("Sampled words without catalog entries: %s", missing)
        return WordPick(words=words, data=data)


def parse_max_length(raw: object) -> int:
    """Parse the ``length`` query parameter, falling back to the default."""
    return _parse_bounded(raw, MIN_MAX_LENGTH, MAX_MAX_LENGTH, DEFAULT_MAX_LENGTH)


def parse_count(raw: object) -> int:
    """Parse the ``count`` query parameter, falling back to the default."""
    return _parse_bounded(raw, MIN_COUNT, MAX_COUNT, DEFAULT_COUNT)


def _parse_bounded(raw: object, low: int, high: int, default: int) -> int:
    if raw is None or isinstance(raw, bool):
        return default
    try:
        value = float(str(raw).strip())
    except ValueError:
        return default
    if not math.isfinite(value) or not value.is_integer():
        return default
    if not low <= value <= high:
        return default
    return int(value)
