from __future__ import annotations

import random
from typing import Callable, Iterable, Sequence

from .clock import Clock, MonotonicClock, PollingScheduler, Scheduler, Timer
from .deck import generate_board
from .types import (
    CardState,
    Event,
    GameStatus,
    IgnoreReason,
    InvalidConfiguration,
    MatchConfig,
    SelectResult,
    Snapshot,
    Symbol,
)

Deal = Callable[[Sequence[Symbol]], list[CardState]]
CompletionCallback = Callable[[int], None]


def _ignored(reason: IgnoreReason) -> SelectResult:
    return SelectResult(ok=False, events=[], reason=reason)


class MatchEngine:
    """One memory-match session: board, pending pair, score and clock.

    All transitions run on the caller's thread. The only deferred work is
    the pair resolution, which goes through `scheduler` and is tagged with
    the session generation so a reset can invalidate it.
    """

    def __init__(
        self,
        symbols: Iterable[Symbol],
        *,
        config: MatchConfig | None = None,
        clock: Clock | None = None,
        scheduler: Scheduler | None = None,
        seed: int | None = None,
        deal: Deal | None = None,
        on_complete: CompletionCallback | None = None,
    ) -> None:
        cfg = config or MatchConfig()
        if cfg.resolve_delay_ms < 0:
            raise InvalidConfiguration("resolve_delay_ms must be >= 0")
        self.config = cfg
        self.clock: Clock = clock or MonotonicClock()
        self.scheduler: Scheduler = scheduler or PollingScheduler(self.clock)
        self.rng = random.Random(seed)
        self.on_complete = on_complete
        self._deal: Deal = deal or (lambda syms: generate_board(syms, self.rng))

        self._symbols: tuple[Symbol, ...] = ()
        self._cards: list[CardState] = []
        self._selection: list[int] = []
        self._score = 0
        self._status: GameStatus = "in_progress"
        self._started_at_ms = 0
        self._elapsed_ms: int | None = None
        self._generation = 0
        self._pending: Timer | None = None
        self.event_log: list[Event] = []

        self._start(tuple(dict.fromkeys(symbols)))

    # -------- Queries --------
    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def score(self) -> int:
        return self._score

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def board_size(self) -> int:
        return len(self._cards)

    @property
    def symbols(self) -> tuple[Symbol, ...]:
        return self._symbols

    def elapsed_ms(self) -> int:
        """Time since the session started, frozen once the game is complete."""
        if self._elapsed_ms is not None:
            return self._elapsed_ms
        return max(0, self.clock.now_ms() - self._started_at_ms)

    def snapshot(self) -> Snapshot:
        return Snapshot(
            cards=tuple(c.view() for c in self._cards),
            score=self._score,
            status=self._status,
            selection=tuple(self._selection),
            generation=self._generation,
            elapsed_ms=self._elapsed_ms if self._status == "complete" else None,
        )

    # -------- Transitions --------
    def select_card(self, position: int) -> SelectResult:
        if position < 0 or position >= len(self._cards):
            return _ignored("out_of_range")
        if self._status != "in_progress":
            return _ignored("not_accepting")
        card = self._cards[position]
        if card.is_matched or card.is_revealed:
            return _ignored("card_unavailable")
        if len(self._selection) >= 2:
            return _ignored("selection_full")

        before = len(self.event_log)
        card.is_revealed = True
        self._selection.append(position)
        self.event_log.append({"type": "CARD_REVEALED", "position": position})

        if len(self._selection) == 2:
            self._status = "resolving"
            generation = self._generation
            self._pending = self.scheduler.call_later(
                self.config.resolve_delay_ms, lambda: self._resolution_due(generation)
            )
            self.event_log.append(
                {
                    "type": "RESOLUTION_SCHEDULED",
                    "positions": list(self._selection),
                    "delay_ms": self.config.resolve_delay_ms,
                }
            )
        return SelectResult(ok=True, events=self.event_log[before:])

    def _resolution_due(self, generation: int) -> None:
        # A reset since scheduling means this timer belongs to a dead session.
        if generation != self._generation:
            return
        self._pending = None
        self.resolve_selection()

    def resolve_selection(self) -> bool:
        """Settle the pending pair. Returns False if there was nothing to settle."""
        if self._status != "resolving" or len(self._selection) != 2:
            return False
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

        first, second = (self._cards[p] for p in self._selection)
        if first.symbol == second.symbol:
            first.is_matched = True
            second.is_matched = True
            self._score += 1
            self.event_log.append(
                {"type": "PAIR_MATCHED", "positions": [first.position, second.position], "score": self._score}
            )
        else:
            first.is_revealed = False
            second.is_revealed = False
            self.event_log.append({"type": "PAIR_MISSED", "positions": [first.position, second.position]})
        self._selection.clear()

        if all(c.is_matched for c in self._cards):
            self._elapsed_ms = max(0, self.clock.now_ms() - self._started_at_ms)
            self._status = "complete"
            self.event_log.append(
                {"type": "GAME_COMPLETED", "time_taken_ms": self._elapsed_ms, "score": self._score}
            )
            if self.on_complete is not None:
                self.on_complete(self._elapsed_ms)
        else:
            self._status = "in_progress"
        return True

    def reset(self, symbols: Iterable[Symbol] | None = None) -> None:
        """Start a new session, dropping whatever the current one was doing."""
        syms = self._symbols if symbols is None else tuple(dict.fromkeys(symbols))
        self._start(syms)

    def _start(self, symbols: tuple[Symbol, ...]) -> None:
        # Deal first so a bad symbol set leaves the running session intact.
        cards = self._deal(symbols)
        if not cards:
            raise InvalidConfiguration("A board needs at least one pair.")

        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        self._generation += 1
        self._symbols = symbols
        self._cards = cards
        self._selection = []
        self._score = 0
        self._status = "in_progress"
        self._elapsed_ms = None
        self._started_at_ms = self.clock.now_ms()
        self.event_log = [
            {"type": "GAME_STARTED", "generation": self._generation, "cards": len(cards)}
        ]
