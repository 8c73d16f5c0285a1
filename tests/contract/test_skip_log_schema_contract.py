from __future__ import annotations

import json
from pathlib import Path

from event_sales.logging.skip_log import SkipLogBuffer
from event_sales.models.parse_result import SkipReason
from event_sales.services.reconciler import reconcile

SKIP_LOG_KEYS = {"timestamp", "file", "row", "order_id", "reason"}
KNOWN_REASONS = {v for k, v in vars(SkipReason).items() if k.isupper()}


def test_skip_log_lines_have_fixed_keys(tmp_path: Path, sample_export):
    buffer = SkipLogBuffer(logs_dir=tmp_path)
    buffer.extend("export.csv", reconcile(sample_export, "dc").skipped)
    path = buffer.flush()
    assert path is not None
    for line in path.read_text(encoding="utf-8").splitlines():
        data = json.loads(line)
        assert set(data) == SKIP_LOG_KEYS
        assert data["reason"] in KNOWN_REASONS
        assert isinstance(data["row"], int) and data["row"] >= 2
