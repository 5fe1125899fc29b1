from __future__ import annotations

import json
import threading
import time
from pathlib import Path
from typing import Any


class RuntimeEventLogger:
    """Append-only JSONL log of round lifecycle and poll failure events."""

    def __init__(self, data_dir: str, filename: str = "round_events.jsonl"):
        self.path = Path(data_dir) / filename
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    def emit(self, event: str, **fields: Any) -> None:
        payload = {
            "ts": time.time(),
            "event": event,
            **fields,
        }
        row = json.dumps(payload, separators=(",", ":"), ensure_ascii=True)
        with self._lock:
            with self.path.open("a", encoding="utf-8") as f:
                f.write(row + "\n")

    def round_started(self, round_id: int, start_unit: int, end_unit: int) -> None:
        self.emit("round_started", round_id=round_id, start_unit=start_unit, end_unit=end_unit)

    def round_finalized(self, round_id: int, winning_square: int) -> None:
        self.emit("round_finalized", round_id=round_id, winning_square=winning_square)

    def poll_error(self, exc: Exception, round_id: int | None = None) -> None:
        self.emit("poll_error", round_id=round_id, kind=type(exc).__name__, error=str(exc))

    def tail(self, limit: int = 50, event: str | None = None) -> list[dict[str, Any]]:
        limit = int(limit)
        if limit <= 0 or not self.path.exists():
            return []
        with self._lock:
            lines = self.path.read_text(encoding="utf-8").splitlines()
        rows = [json.loads(line) for line in lines if line.strip()]
        if event is not None:
            rows = [r for r in rows if r.get("event") == event]
        return rows[-limit:]
