from __future__ import annotations

import heapq
import itertools
import time
from dataclasses import dataclass, field
from typing import Callable, Protocol


class Clock(Protocol):
    def now_ms(self) -> int: ...


class Timer(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> Timer: ...


class MonotonicClock:
    def now_ms(self) -> int:
        return time.monotonic_ns() // 1_000_000


@dataclass
class ManualClock:
    """Clock that only moves when told to. Used by tests and replays."""

    ms: int = 0

    def now_ms(self) -> int:
        return self.ms

    def advance(self, ms: int) -> None:
        if ms < 0:
            raise ValueError("Cannot move a clock backwards.")
        self.ms += ms


@dataclass
class ScheduledCall:
    due_ms: int
    callback: Callable[[], None]
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class PollingScheduler:
    """Runs delayed callbacks when polled, on the caller's thread.

    Nothing fires on its own: the owner calls `run_due()` (once per frame in
    the client, or after advancing a ManualClock in tests). This keeps every
    engine transition on a single thread.
    """

    clock: Clock
    _heap: list[tuple[int, int, ScheduledCall]] = field(default_factory=list)
    _seq: itertools.count = field(default_factory=itertools.count)

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledCall:
        call = ScheduledCall(due_ms=self.clock.now_ms() + max(0, delay_ms), callback=callback)
        heapq.heappush(self._heap, (call.due_ms, next(self._seq), call))
        return call

    def pending(self) -> int:
        return sum(1 for _, _, c in self._heap if not c.cancelled)

    def run_due(self) -> int:
        """Fire every callback whose due time has passed. Returns how many ran."""
        fired = 0
        while self._heap and self._heap[0][0] <= self.clock.now_ms():
            _, _, call = heapq.heappop(self._heap)
            if call.cancelled:
                continue
            call.callback()
            fired += 1
        return fired

    def advance(self, ms: int) -> int:
        if not isinstance(self.clock, ManualClock):
            raise TypeError("advance() needs a ManualClock")
        self.clock.advance(ms)
        return self.run_due()
