from __future__ import annotations

import json
from pathlib import Path
from typing import Any


HISTORY_FILENAME = "ore_history.json"


class SnapshotStore:
    """Latest round snapshot on disk, shared by the monitor loop and the dashboard."""

    def __init__(self, data_dir: str, filename: str = "ore_snapshot.json"):
        self.path = Path(data_dir) / filename
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def write(self, payload: dict[str, Any]) -> None:
        tmp = self.path.with_suffix(".tmp")
        tmp.write_text(json.dumps(payload, ensure_ascii=True, separators=(",", ":")))
        tmp.replace(self.path)

    def read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {
                "ok": True,
                "summary": None,
                "last_round": None,
                "message": "snapshot not ready",
            }
        try:
            return json.loads(self.path.read_text())
        except (OSError, ValueError):
            return {
                "ok": False,
                "summary": None,
                "last_round": None,
                "message": "snapshot parse error",
            }
