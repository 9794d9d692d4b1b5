"""Tests for loading the JSON catalog corpus."""

import json
from pathlib import Path

import pytest

from bildval.adapters.json_catalog_source import load_catalog
from bildval.domain.catalog import Catalog, CatalogEntry
from bildval.domain.errors import CatalogLoadError


def _write_corpus(directory: Path, words: object, items: object) -> None:
    (directory / "words.json").write_text(json.dumps(words), encoding="utf-8")
    (directory / "items.json").write_text(json.dumps(items), encoding="utf-8")


def test_load_catalog(tmp_path: Path) -> None:
    _write_corpus(
        tmp_path,
        ["BILLY", "MALM", "BILLY", "SKOGSTA"],
        {
            "BILLY": {"id": 263850, "name": "BILLY", "image": "billy.jpg", "price": 59},
            "MALM": {"id": "80214545", "name": "MALM", "image": "malm.jpg"},
        },
    )

    catalog = load_catalog(tmp_path)

    assert catalog.words == ("BILLY", "MALM", "SKOGSTA")
    assert len(catalog) == 2
    assert catalog.lookup("BILLY") == CatalogEntry(
        id="263850", name="BILLY", image_ref="billy.jpg"
    )
    assert catalog.lookup("SKOGSTA") is None


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(CatalogLoadError):
        load_catalog(tmp_path)


def test_malformed_items_raise(tmp_path: Path) -> None:
    _write_corpus(tmp_path, ["BILLY"], {"BILLY": {"name": "BILLY"}})

    with pytest.raises(CatalogLoadError):
        load_catalog(tmp_path)


def test_bundled_sample_corpus_loads() -> None:
    sample_dir = Path(__file__).resolve().parents[1] / "data" / "catalog"

    catalog = load_catalog(sample_dir)

    assert len(catalog) >= 8
    assert all(catalog.lookup(word) is not None for word in catalog.words)


def test_catalog_rejects_duplicate_names() -> None:
    entry = CatalogEntry(id="1", name="BILLY", image_ref="")

    with pytest.raises(ValueError):
        Catalog(entries=(entry, entry), words=())


def test_catalog_lookup_is_read_only() -> None:
    catalog = Catalog(
        entries=(CatalogEntry(id="1", name="BILLY", image_ref=""),), words=()
    )

    with pytest.raises(TypeError):
        catalog.by_name["MALM"] = catalog.lookup("BILLY")  # type: ignore[index]


def test_lookup_uses_item_keys_not_names(tmp_path: Path) -> None:
    _write_corpus(
        tmp_path,
        ["poang", "BILLY"],
        {"poang": {"id": "1", "name": "POÄNG", "image": "poang.jpg"}},
    )

    catalog = load_catalog(tmp_path)

    assert catalog.lookup("poang") == CatalogEntry(
        id="1", name="POÄNG", image_ref="poang.jpg"
    )
    assert catalog.lookup("POÄNG") is None
    assert catalog.lookup("BILLY") is None
    assert catalog.by_name["POÄNG"].id == "1"
