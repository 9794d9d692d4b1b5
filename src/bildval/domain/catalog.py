"""Domain models for the product catalog."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class CatalogEntry:
    """A single product that can appear in a round."""

    id: str
    name: str
    image_ref: str


@dataclass(frozen=True)
class Catalog:
    """Read-only snapshot of catalog entries and the word corpus.

    ``by_word`` maps corpus words to entries as keyed in the source data and
    backs ``lookup``. When it is not given, entries are keyed by name.
    ``by_name`` is always keyed by product name and is what rounds use.
    """

    entries: tuple[CatalogEntry, ...]
    words: tuple[str, ...]
    by_word: Mapping[str, CatalogEntry] | None = field(
        default=None, repr=False, compare=False
    )
    by_name: Mapping[str, CatalogEntry] = field(
        init=False, repr=False, compare=False
    )
    _word_index: Mapping[str, CatalogEntry] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        lookup: dict[str, CatalogEntry] = {}
        for entry in self.entries:
            if entry.name in lookup:
                raise ValueError(f"Duplicate catalog entry name: {entry.name}")
            lookup[entry.name] = entry
        object.__setattr__(self, "by_name", MappingProxyType(lookup))
        by_word = lookup if self.by_word is None else dict(self.by_word)
        object.__setattr__(self, "_word_index", MappingProxyType(by_word))

    def __len__(self) -> int:
        return len(self.entries)

    def lookup(self, word: str) -> CatalogEntry | None:
        """Return the entry filed under a corpus word, if there is one."""
        return self._word_index.get(word)
