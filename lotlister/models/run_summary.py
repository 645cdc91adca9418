from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from .listing import Listing

"""Run-level counters for the listing generator.

``RowCounters`` is the mutable accumulator used while rows are processed;
``RunSummary`` is the frozen result handed to the CLI for the SUMMARY line.
"""

__all__ = [
    "RowCounters",
    "RunSummary",
]


@dataclass
class RowCounters:
    """Counters accumulated across a run (single writer)."""
    total_rows: int = 0
    skipped_rows: int = 0
    listings_created: int = 0
    photos_matched: int = 0
    collisions: int = 0
    listings: list[Listing] = field(default_factory=list)


@dataclass(frozen=True)
class RunSummary:
    """Aggregated results of one generation run."""
    total_rows: int
    skipped_rows: int
    listings_created: int
    photos_matched: int
    collisions: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    output_directory: Path
    preview_path: Path | None = None
    listings: list[Listing] | None = None

    @classmethod
    def from_counters(
        cls,
        counters: RowCounters,
        *,
        start_time: datetime,
        end_time: datetime,
        output_directory: Path,
        preview_path: Path | None = None,
    ) -> RunSummary:
        return cls(
            total_rows=counters.total_rows,
            skipped_rows=counters.skipped_rows,
            listings_created=counters.listings_created,
            photos_matched=counters.photos_matched,
            collisions=counters.collisions,
            start_time=start_time,
            end_time=end_time,
            elapsed_seconds=(end_time - start_time).total_seconds(),
            output_directory=output_directory,
            preview_path=preview_path,
            listings=list(counters.listings),
        )
