from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from lotlister.models.event_record import EventRecord

"""Event log buffering.

Skipped rows and identifier collisions are buffered during the run and
written once as JSON Lines to ``<log_dir>/events-YYYYMMDD-HHMMSS.log`` (UTC).
Nothing is written (and no directory is created) when the buffer is empty.
"""

__all__ = [
    "EventRecord",
    "EventLogBuffer",
]

DEFAULT_LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class EventLogBuffer:
    """In-memory buffer for event records. Flush writes JSON Lines.

    Not thread safe; a run has a single writer.
    """
    def __init__(self, log_dir: Path | None = None) -> None:
        self._records: list[EventRecord] = []
        self._log_dir = log_dir if log_dir is not None else DEFAULT_LOGS_DIR
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._log_dir / f"events-{stamp}.log"
        return self._file_path

    @property
    def records(self) -> list[EventRecord]:
        return list(self._records)

    def append(self, record: EventRecord) -> None:
        self._records.append(record)

    def __len__(self) -> int:  # pragma: no cover (trivial)
        return len(self._records)

    def flush(self) -> Path | None:
        """Append buffered records to the log file and clear the buffer.

        Returns the file path, or None when there was nothing to write.
        """
        if not self._records:
            return None
        fp = self.file_path
        fp.parent.mkdir(parents=True, exist_ok=True)
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
