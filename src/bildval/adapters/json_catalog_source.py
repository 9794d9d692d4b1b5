"""Catalog loader for the JSON corpus on disk."""

import logging
from pathlib import Path
from typing import TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from bildval.domain.catalog import Catalog, CatalogEntry
from bildval.domain.errors import CatalogLoadError

logger = logging.getLogger(__name__)

WORDS_FILE = "words.json"
ITEMS_FILE = "items.json"


class CatalogItemPayload(BaseModel):
    """Product record as stored in ``items.json``."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    image: str

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: object) -> object:
        if isinstance(value, int):
            return str(value)
        return value


T = TypeVar("T")

_WORDS = TypeAdapter(list[str])
_ITEMS = TypeAdapter(dict[str, CatalogItemPayload])


def load_catalog(directory: Path) -> Catalog:
    """Read ``words.json`` and ``items.json`` from ``directory``."""
    words = _read(directory / WORDS_FILE, _WORDS)
    items = _read(directory / ITEMS_FILE, _ITEMS)

    entries: dict[str, CatalogEntry] = {}
    by_word: dict[str, CatalogEntry] = {}
    for key, item in items.items():
        entry = entries.setdefault(
            item.name, CatalogEntry(id=item.id, name=item.name, image_ref=item.image)
        )
        by_word[key] = entry
    unique_words = tuple(dict.fromkeys(words))
    logger.info(
        "Loaded catalog",
        extra={"entries": len(entries), "words": len(unique_words)},
    )
    return Catalog(
        entries=tuple(entries.values()), words=unique_words, by_word=by_word
    )


def _read(path: Path, adapter: TypeAdapter[T]) -> T:
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise CatalogLoadError(f"Cannot read {path}: {exc}") from exc
    try:
        return adapter.validate_json(raw)
    except ValidationError as exc:
        raise CatalogLoadError(f"Malformed {path.name}: {exc}") from exc
