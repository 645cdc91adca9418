from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""EventRecord model for the JSON Lines event log.

Records rows that were skipped and identifier collisions so the user can
fix the inventory file after a run. ``row`` is -1 for run-level events.
"""

__all__ = [
    "EventRecord",
    "ROW_SKIPPED",
    "IDENTIFIER_COLLISION",
]

ROW_SKIPPED = "ROW_SKIPPED"
IDENTIFIER_COLLISION = "IDENTIFIER_COLLISION"


@dataclass(frozen=True)
class EventRecord:
    """Structured event for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        data_file: inventory file name being processed
        row: 1-based data row number, -1 when not row specific
        event_type: UPPER_SNAKE_CASE classification
        lot_number: LotNo as read (may be empty)
        message: human readable detail
    """
    timestamp: str
    data_file: str
    row: int
    event_type: str
    lot_number: str
    message: str

    @staticmethod
    def create(data_file: str, row: int, event_type: str, lot_number: str, message: str) -> EventRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return EventRecord(
            timestamp=ts,
            data_file=data_file,
            row=row,
            event_type=event_type,
            lot_number=lot_number,
            message=message,
        )

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
