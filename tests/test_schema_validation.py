from __future__ import annotations

import json
from pathlib import Path

import pytest

from memorymatch.paths import get_paths
from memorymatch.services.content import ContentError, ContentService


def _content() -> ContentService:
    paths = get_paths()
    return ContentService(paths.data_dir, paths.schema_dir)


def _content_with(tmp_path: Path, decks: object) -> ContentService:
    (tmp_path / "decks.json").write_text(json.dumps(decks), encoding="utf-8")
    return ContentService(tmp_path, get_paths().schema_dir)


def _deck(deck_id: str, symbol_ids: list[str]) -> dict[str, object]:
    return {
        "id": deck_id,
        "name": deck_id.title(),
        "columns": 4,
        "symbols": [{"id": s, "label": s.title(), "image_path": f"symbols/{s}.png"} for s in symbol_ids],
    }


def test_content_schemas_validate() -> None:
    _content().validate_all()


def test_shipped_default_deck() -> None:
    catalog = _content().load_decks()
    deck = catalog.default()
    assert deck.id == "animals"
    assert deck.columns == 4
    assert deck.symbol_ids() == ["cat", "dog", "elephant", "frog", "giraffe", "lion", "panda", "penguin"]
    assert catalog.match_config().resolve_delay_ms == 800
    assert deck.get_symbol("panda") is not None
    assert deck.get_symbol("unicorn") is None


def test_unknown_deck_lookup() -> None:
    with pytest.raises(ContentError):
        _content().load_decks().get("nope")


def test_schema_violation_is_reported(tmp_path: Path) -> None:
    content = _content_with(tmp_path, {"resolve_delay_ms": -5, "default_deck": "a", "decks": []})
    with pytest.raises(ContentError) as exc:
        content.load_decks()
    assert "Schema validation failed" in str(exc.value)


def test_repeated_symbol_in_deck(tmp_path: Path) -> None:
    content = _content_with(
        tmp_path,
        {"resolve_delay_ms": 800, "default_deck": "a", "decks": [_deck("a", ["cat", "dog", "cat"])]},
    )
    with pytest.raises(ContentError, match="twice"):
        content.load_decks()


def test_default_deck_must_exist(tmp_path: Path) -> None:
    content = _content_with(
        tmp_path,
        {"resolve_delay_ms": 800, "default_deck": "missing", "decks": [_deck("a", ["cat"])]},
    )
    with pytest.raises(ContentError, match="default_deck"):
        content.load_decks()


def test_missing_and_broken_files(tmp_path: Path) -> None:
    content = ContentService(tmp_path, get_paths().schema_dir)
    with pytest.raises(ContentError, match="Missing"):
        content.load_decks()

    (tmp_path / "decks.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(ContentError, match="Invalid JSON"):
        content.load_decks()
