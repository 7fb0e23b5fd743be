from __future__ import annotations

from memorymatch.engine.clock import ManualClock, PollingScheduler
from memorymatch.engine.match import MatchEngine
from memorymatch.engine.serialize import snapshot_to_dict
from memorymatch.engine.types import Snapshot

SYMBOLS = ["cat", "dog", "elephant", "frog", "giraffe", "lion"]


def _choose_position(snap: Snapshot, seen: dict[int, object]) -> int:
    """Perfect-memory player: finish a known pair, otherwise flip an unseen card."""
    hidden = [c.position for c in snap.cards if not c.face_up]
    unseen = [p for p in hidden if p not in seen]

    if snap.selection:
        first = snap.selection[0]
        for p in hidden:
            if p != first and seen.get(p) == seen[first]:
                return p
        return unseen[0] if unseen else hidden[0]

    by_symbol: dict[object, list[int]] = {}
    for p in hidden:
        if p in seen:
            by_symbol.setdefault(seen[p], []).append(p)
    for positions in by_symbol.values():
        if len(positions) == 2:
            return positions[0]
    return unseen[0] if unseen else hidden[0]


def _new_engine(seed: int) -> tuple[MatchEngine, PollingScheduler]:
    clock = ManualClock()
    sched = PollingScheduler(clock)
    return MatchEngine(SYMBOLS, clock=clock, scheduler=sched, seed=seed), sched


def _play(seed: int, max_steps: int = 200) -> tuple[list[int], list[dict[str, object]], dict[str, object]]:
    engine, sched = _new_engine(seed)
    seen: dict[int, object] = {}
    clicks: list[int] = []
    trail: list[dict[str, object]] = []
    for _ in range(max_steps):
        snap = engine.snapshot()
        if snap.status == "complete":
            break
        if snap.status == "resolving":
            sched.advance(800)
            continue
        pos = _choose_position(snap, seen)
        clicks.append(pos)
        engine.select_card(pos)
        seen[pos] = engine.snapshot().cards[pos].symbol
        trail.append(snapshot_to_dict(engine.snapshot()))
    return clicks, trail, snapshot_to_dict(engine.snapshot())


def test_same_seed_same_game() -> None:
    clicks1, trail1, final1 = _play(seed=424242)
    clicks2, trail2, final2 = _play(seed=424242)
    assert clicks1 == clicks2
    assert trail1 == trail2
    assert final1 == final2
    assert final1["status"] == "complete"


def test_replaying_clicks_reproduces_final_state() -> None:
    clicks, _, final = _play(seed=7)

    engine, sched = _new_engine(seed=7)
    for pos in clicks:
        engine.select_card(pos)
        if engine.status == "resolving":
            sched.advance(800)
    replayed = snapshot_to_dict(engine.snapshot())
    assert replayed == final
    assert replayed["score"] == len(SYMBOLS)
