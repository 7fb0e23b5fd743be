from __future__ import annotations

import random
from collections import Counter
from typing import Iterable, Sequence

from .types import CardState, InvalidConfiguration, Symbol


def _shuffle(rng: random.Random, items: list[Symbol]) -> None:
    # random.Random.shuffle is a Fisher-Yates pass over the whole list
    rng.shuffle(items)


def _dedupe(symbols: Iterable[Symbol]) -> list[Symbol]:
    return list(dict.fromkeys(symbols))


def _cards_in_order(order: Sequence[Symbol]) -> list[CardState]:
    return [CardState(position=i, symbol=sym) for i, sym in enumerate(order)]


def generate_board(symbols: Iterable[Symbol], rng: random.Random | None = None) -> list[CardState]:
    """Pair up every distinct symbol and shuffle the result.

    Duplicate symbols are collapsed first, so each one always lands on the
    board exactly twice. Positions are assigned after the shuffle.
    """
    distinct = _dedupe(symbols)
    if not distinct:
        raise InvalidConfiguration("A board needs at least one symbol.")

    deck: list[Symbol] = []
    for sym in distinct:
        deck.extend([sym, sym])
    _shuffle(rng or random.Random(), deck)
    return _cards_in_order(deck)


def board_from_layout(layout: Sequence[Symbol]) -> list[CardState]:
    """Build a board in a fixed order (replays, tests)."""
    if not layout:
        raise InvalidConfiguration("A board needs at least one pair.")
    counts = Counter(layout)
    bad = [sym for sym, n in counts.items() if n != 2]
    if bad:
        raise InvalidConfiguration(f"Every symbol must appear exactly twice: {bad!r}")
    return _cards_in_order(list(layout))
