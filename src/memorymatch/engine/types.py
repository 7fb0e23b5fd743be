from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field
from typing import Literal

Symbol = Hashable

GameStatus = Literal["in_progress", "resolving", "complete"]
IgnoreReason = Literal["out_of_range", "not_accepting", "card_unavailable", "selection_full"]

Event = dict[str, object]


class InvalidConfiguration(ValueError):
    pass


@dataclass(frozen=True)
class MatchConfig:
    resolve_delay_ms: int = 800


@dataclass
class CardState:
    position: int
    symbol: Symbol
    is_revealed: bool = False
    is_matched: bool = False

    def view(self) -> "CardView":
        return CardView(
            position=self.position,
            symbol=self.symbol,
            is_revealed=self.is_revealed,
            is_matched=self.is_matched,
        )


@dataclass(frozen=True)
class CardView:
    position: int
    symbol: Symbol
    is_revealed: bool
    is_matched: bool

    @property
    def face_up(self) -> bool:
        return self.is_revealed or self.is_matched


@dataclass(frozen=True)
class Snapshot:
    """Immutable view of one engine state, safe to hand to the UI."""

    cards: tuple[CardView, ...]
    score: int
    status: GameStatus
    selection: tuple[int, ...]
    generation: int
    elapsed_ms: int | None = None

    @property
    def pairs_total(self) -> int:
        return len(self.cards) // 2

    @property
    def is_complete(self) -> bool:
        return self.status == "complete"


@dataclass
class SelectResult:
    ok: bool
    events: list[Event] = field(default_factory=list)
    reason: IgnoreReason | None = None
