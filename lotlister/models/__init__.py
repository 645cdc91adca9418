"""Domain models for the inventory -> listing generator."""

from .event_record import EventRecord
from .listing import Listing, PhotoMatch
from .row_data import LOT_NUMBER_COLUMN, Row
from .run_summary import RowCounters, RunSummary

__all__ = [
    "EventRecord",
    "Listing",
    "PhotoMatch",
    "LOT_NUMBER_COLUMN",
    "Row",
    "RowCounters",
    "RunSummary",
]
