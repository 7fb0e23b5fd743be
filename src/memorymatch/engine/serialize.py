from __future__ import annotations


from .types import CardView, Snapshot, Symbol


def _symbol_to_json(sym: Symbol) -> object:
    if isinstance(sym, (str, int, float, bool)) or sym is None:
        return sym
    # opaque tokens: fall back to their text form
    return str(sym)


def _card_to_dict(c: CardView) -> dict[str, object]:
    return {
        "position": c.position,
        "symbol": _symbol_to_json(c.symbol),
        "is_revealed": c.is_revealed,
        "is_matched": c.is_matched,
    }


def snapshot_to_dict(snap: Snapshot) -> dict[str, object]:
    """Return a JSON-serializable rendering of an engine snapshot."""
    return {
        "cards": [_card_to_dict(c) for c in snap.cards],
        "score": snap.score,
        "status": snap.status,
        "elapsed_ms": snap.elapsed_ms,
        "selection": list(snap.selection),
        "generation": snap.generation,
    }
