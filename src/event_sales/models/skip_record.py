from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""SkipRecord model for row-level diagnostics.

Rows the reconciler drops (short rows, foreign cities, non-completed orders,
continuation rows without a customer, ...) are never errors. Each one is kept
as a SkipRecord so callers can see what was left out and why.

row=-1 marks a record that cannot be tied to a physical line.
"""

__all__ = [
    "SkipRecord",
]


@dataclass(frozen=True)
class SkipRecord:
    """A data row left out of the output.

    Attributes:
        row: 1-based line number in the export (header = line 1)
        order_id: Order id as read from the row ("" when blank)
        reason: Skip classification in UPPER_SNAKE_CASE format
    """
    row: int
    order_id: str
    reason: str

    def to_json_line(self, file: str) -> str:
        """Serialize to one JSON Lines entry with a UTC timestamp.

        Parameters:
            file: Export file name the row came from
        """
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        payload = {"timestamp": ts, "file": file, **asdict(self)}
        return json.dumps(payload, ensure_ascii=False)
