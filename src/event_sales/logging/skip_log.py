from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from ..models.skip_record import SkipRecord

"""Skip log buffering.

Rows the reconciler leaves out are written as JSON Lines to
`logs/skipped-YYYYMMDD-HHMMSS.log` (UTC), one file per run, created on the
first flush that has something to write.
"""

__all__ = [
    "SkipRecord",
    "SkipLogBuffer",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class SkipLogBuffer:
    """In-memory buffer of (file, SkipRecord) pairs. Flush appends JSON Lines.

    Not thread safe; the CLI runs serially.
    """

    def __init__(self, logs_dir: Path = LOGS_DIR) -> None:
        self._entries: list[tuple[str, SkipRecord]] = []
        self._logs_dir = logs_dir
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"skipped-{stamp}.log"
        return self._file_path

    def append(self, file: str, record: SkipRecord) -> None:
        self._entries.append((file, record))

    def extend(self, file: str, records: Iterable[SkipRecord]) -> None:
        for r in records:
            self.append(file, r)

    def __len__(self) -> int:  # pragma: no cover (trivial)
        return len(self._entries)

    def flush(self) -> Path | None:
        """Write buffered entries; returns the log path, or None when nothing was buffered."""
        if not self._entries:
            return None
        fp = self.file_path
        fp.parent.mkdir(parents=True, exist_ok=True)
        with fp.open("a", encoding="utf-8") as f:
            for file, r in self._entries:
                f.write(r.to_json_line(file) + "\n")
        self._entries.clear()
        return fp
