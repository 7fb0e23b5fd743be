from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from jsonschema import Draft202012Validator

from memorymatch.engine.types import MatchConfig


class ContentError(RuntimeError):
    pass


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ContentError(f"Missing content file: {path}") from e
    except json.JSONDecodeError as e:
        raise ContentError(f"Invalid JSON in {path}: {e}") from e


def validate_json(instance: object, schema: object, *, context: str) -> None:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: [str(p) for p in e.path])
    if errors:
        lines = [f"Schema validation failed for {context}:"]
        for err in errors[:10]:
            loc = "/".join(str(p) for p in err.absolute_path)
            lines.append(f"- {loc}: {err.message}")
        raise ContentError("\n".join(lines))


def _require_str(obj: Mapping[str, object], key: str) -> str:
    v = obj.get(key)
    if not isinstance(v, str):
        raise ContentError(f"Expected string for {key}")
    return v


def _require_int(obj: Mapping[str, object], key: str) -> int:
    v = obj.get(key)
    if not isinstance(v, int) or isinstance(v, bool):
        raise ContentError(f"Expected int for {key}")
    return v


def _require_list(obj: Mapping[str, object], key: str) -> list[object]:
    v = obj.get(key)
    if not isinstance(v, list):
        raise ContentError(f"Expected list for {key}")
    return v


@dataclass(frozen=True)
class SymbolDefinition:
    id: str
    label: str
    image_path: str


@dataclass(frozen=True)
class DeckDefinition:
    id: str
    name: str
    columns: int
    symbols: tuple[SymbolDefinition, ...]

    def symbol_ids(self) -> list[str]:
        return [s.id for s in self.symbols]

    def get_symbol(self, symbol_id: str) -> SymbolDefinition | None:
        for s in self.symbols:
            if s.id == symbol_id:
                return s
        return None


@dataclass(frozen=True)
class DeckCatalog:
    """Immutable set of playable decks plus engine settings."""

    decks: dict[str, DeckDefinition]
    default_deck_id: str
    resolve_delay_ms: int

    def get(self, deck_id: str) -> DeckDefinition:
        try:
            return self.decks[deck_id]
        except KeyError as e:
            raise ContentError(f"Unknown deck: {deck_id}") from e

    def default(self) -> DeckDefinition:
        return self.get(self.default_deck_id)

    def match_config(self) -> MatchConfig:
        return MatchConfig(resolve_delay_ms=self.resolve_delay_ms)


def _parse_symbol(raw: Mapping[str, object]) -> SymbolDefinition:
    return SymbolDefinition(
        id=_require_str(raw, "id"),
        label=_require_str(raw, "label"),
        image_path=_require_str(raw, "image_path"),
    )


def _parse_deck(raw: Mapping[str, object]) -> DeckDefinition:
    deck_id = _require_str(raw, "id")
    symbols: list[SymbolDefinition] = []
    seen: set[str] = set()
    for item in _require_list(raw, "symbols"):
        if not isinstance(item, dict):
            continue
        sym = _parse_symbol(item)
        # the engine pairs each symbol itself; a repeat here is a content bug
        if sym.id in seen:
            raise ContentError(f"Deck {deck_id} lists symbol {sym.id} twice")
        seen.add(sym.id)
        symbols.append(sym)
    if not symbols:
        raise ContentError(f"Deck {deck_id} has no symbols")
    return DeckDefinition(
        id=deck_id,
        name=_require_str(raw, "name"),
        columns=_require_int(raw, "columns"),
        symbols=tuple(symbols),
    )


class ContentService:
    def __init__(self, data_dir: Path, schema_dir: Path) -> None:
        self._data_dir = data_dir
        self._schema_dir = schema_dir

    def load_schema(self, name: str) -> object:
        return _load_json(self._schema_dir / f"{name}.schema.json")

    def load_decks(self) -> DeckCatalog:
        path = self._data_dir / "decks.json"
        raw = _load_json(path)
        validate_json(raw, self.load_schema("decks"), context=str(path))
        if not isinstance(raw, dict):
            raise ContentError("decks.json must be an object")

        decks: dict[str, DeckDefinition] = {}
        for item in _require_list(raw, "decks"):
            if not isinstance(item, dict):
                continue
            deck = _parse_deck(item)
            if deck.id in decks:
                raise ContentError(f"Duplicate deck id: {deck.id}")
            decks[deck.id] = deck

        default_id = _require_str(raw, "default_deck")
        if default_id not in decks:
            raise ContentError(f"default_deck {default_id} is not defined")

        return DeckCatalog(
            decks=decks,
            default_deck_id=default_id,
            resolve_delay_ms=_require_int(raw, "resolve_delay_ms"),
        )

    def validate_all(self) -> None:
        # Load is validation (schema + parse)
        _ = self.load_decks()
        _ = self.load_schema("snapshot")
