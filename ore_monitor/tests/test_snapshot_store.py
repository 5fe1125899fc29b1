from pathlib import Path

from ore_monitor.data.snapshot_store import SnapshotStore


def test_snapshot_store_roundtrip(tmp_path: Path) -> None:
    store = SnapshotStore(str(tmp_path))
    payload = {"ok": True, "summary": {"round_id": 7, "squares": []}}
    store.write(payload)
    out = store.read()
    assert out["ok"] is True
    assert out["summary"]["round_id"] == 7


def test_snapshot_not_ready(tmp_path: Path) -> None:
    out = SnapshotStore(str(tmp_path)).read()
    assert out["summary"] is None
    assert out["message"] == "snapshot not ready"


def test_snapshot_parse_error(tmp_path: Path) -> None:
    store = SnapshotStore(str(tmp_path))
    store.path.write_text("{not json")
    assert store.read()["ok"] is False
