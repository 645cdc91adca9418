from __future__ import annotations

from dataclasses import dataclass

"""Row model for the inventory -> listing generator.

A Row is one data line of the inventory file after header processing.
Columns are dynamic: whatever the header names is kept, in header order.
"""

__all__ = [
    "LOT_NUMBER_COLUMN",
    "Row",
]

LOT_NUMBER_COLUMN = "LotNo"


@dataclass(frozen=True)
class Row:
    """One inventory record.

    ``row_number`` is 1-based and counts data rows only (the header is not row 1).
    ``values`` keeps the header's column order.
    """
    row_number: int
    values: dict[str, str]

    @property
    def lot_number(self) -> str | None:
        """Raw ``LotNo`` cell, or None when the column is absent."""
        return self.values.get(LOT_NUMBER_COLUMN)

    @property
    def qualifies(self) -> bool:
        lot = self.lot_number
        return lot is not None and lot.strip() != ""
