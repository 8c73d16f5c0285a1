from __future__ import annotations

import json
from pathlib import Path

from event_sales.logging.skip_log import SkipLogBuffer
from event_sales.models.skip_record import SkipRecord


def test_skip_record_json_line():
    rec = SkipRecord(row=4, order_id="1002", reason="SOURCE_MISMATCH")
    data = json.loads(rec.to_json_line("export.csv"))
    assert set(data) == {"timestamp", "file", "row", "order_id", "reason"}
    assert data["file"] == "export.csv"
    assert data["row"] == 4
    assert data["timestamp"].endswith("Z")


def test_flush_writes_json_lines(tmp_path: Path):
    buffer = SkipLogBuffer(logs_dir=tmp_path / "logs")
    buffer.extend("a.csv", [SkipRecord(2, "", "SHORT_ROW"), SkipRecord(3, "9", "MISSING_CUSTOMER")])
    assert len(buffer) == 2
    path = buffer.flush()
    assert path is not None and path.parent == tmp_path / "logs"
    assert path.name.startswith("skipped-") and path.suffix == ".log"
    lines = path.read_text(encoding="utf-8").splitlines()
    assert [json.loads(x)["reason"] for x in lines] == ["SHORT_ROW", "MISSING_CUSTOMER"]
    assert len(buffer) == 0


def test_flush_appends_to_same_file(tmp_path: Path):
    buffer = SkipLogBuffer(logs_dir=tmp_path)
    buffer.append("a.csv", SkipRecord(2, "", "SHORT_ROW"))
    first = buffer.flush()
    buffer.append("b.csv", SkipRecord(5, "7", "NOT_QUALIFIED"))
    second = buffer.flush()
    assert first == second
    assert len(first.read_text(encoding="utf-8").splitlines()) == 2


def test_empty_flush_creates_nothing(tmp_path: Path):
    buffer = SkipLogBuffer(logs_dir=tmp_path / "logs")
    assert buffer.flush() is None
    assert not (tmp_path / "logs").exists()
