from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Mapping


@dataclass
class TelemetryService:
    """Append-only JSONL event log (one record per line)."""

    path: Path
    session: str | None = None

    def log(self, event_type: str, payload: Mapping[str, object]) -> None:
        self.log_many([(event_type, payload)])

    def log_events(self, events: Iterable[Mapping[str, object]]) -> None:
        """Record engine events, which carry their own "type" key."""
        self.log_many(
            (str(ev.get("type", "UNKNOWN")), {k: v for k, v in ev.items() if k != "type"}) for ev in events
        )

    def log_many(self, records: Iterable[tuple[str, Mapping[str, object]]]) -> None:
        lines: list[str] = []
        ts = datetime.now(tz=timezone.utc).isoformat()
        for event_type, payload in records:
            rec: dict[str, object] = {"ts": ts, "type": event_type, "payload": dict(payload)}
            if self.session is not None:
                rec["session"] = self.session
            lines.append(json.dumps(rec, ensure_ascii=False, default=str))
        if not lines:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as f:
            f.write("\n".join(lines) + "\n")
