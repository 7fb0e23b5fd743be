from __future__ import annotations

import json
from pathlib import Path

from memorymatch.services.telemetry import TelemetryService


def _records(path: Path) -> list[dict[str, object]]:
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


def test_log_appends_one_line_per_event(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "telemetry.jsonl"
    telemetry = TelemetryService(path)
    telemetry.log("boot", {"ok": True})
    telemetry.log("game_started", {"deck": "animals", "cards": 16})

    recs = _records(path)
    assert [r["type"] for r in recs] == ["boot", "game_started"]
    assert recs[1]["payload"] == {"deck": "animals", "cards": 16}
    assert "session" not in recs[0]
    assert recs[0]["ts"].endswith("+00:00")


def test_engine_events_keep_their_type(tmp_path: Path) -> None:
    path = tmp_path / "telemetry.jsonl"
    telemetry = TelemetryService(path, session="abc")
    telemetry.log_events(
        [
            {"type": "CARD_REVEALED", "position": 3},
            {"type": "PAIR_MATCHED", "positions": [3, 9], "score": 1},
        ]
    )
    recs = _records(path)
    assert [r["type"] for r in recs] == ["CARD_REVEALED", "PAIR_MATCHED"]
    assert recs[0]["payload"] == {"position": 3}
    assert all(r["session"] == "abc" for r in recs)


def test_nothing_to_log_writes_nothing(tmp_path: Path) -> None:
    path = tmp_path / "telemetry.jsonl"
    TelemetryService(path).log_events([])
    assert not path.exists()
