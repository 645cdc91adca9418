from __future__ import annotations

import logging
import re
import shutil
from collections.abc import Iterable
from pathlib import Path

from ..logging.event_log import EventLogBuffer
from ..models.event_record import IDENTIFIER_COLLISION, ROW_SKIPPED, EventRecord
from ..models.listing import Listing, PhotoMatch
from ..models.row_data import LOT_NUMBER_COLUMN, Row
from ..models.run_summary import RowCounters
from .progress import ProgressTracker
from .renderer import render

"""Row processing: one listing file (and optionally one photo) per qualifying row.

Naming rules:
- The lot number is ``LotNo`` with surrounding whitespace trimmed.
- The identifier replaces every character outside ``[A-Za-z0-9_-]`` with ``_``.
- Listing file: ``Lot_<identifier><extension>``.
- Photo: first of ``<lot number>.jpg|.jpeg|.png|.gif|.bmp`` found in the photo
  directory, copied to ``Lot_<identifier><photo extension>``.

Two lot numbers that map to the same identifier write the same files; the
later row wins and the collision is logged and counted.
"""

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".bmp")
LISTING_PREFIX = "Lot_"

_UNSAFE_CHARS = re.compile(r"[^\w\-]", re.ASCII)


def sanitize_lot_number(lot_number: str) -> str:
    """Return the filesystem-safe identifier for a lot number.

    >>> sanitize_lot_number("A/12 b")
    'A_12_b'
    """
    return _UNSAFE_CHARS.sub("_", lot_number)


def listing_file_name(identifier: str, extension: str = ".txt") -> str:
    return f"{LISTING_PREFIX}{identifier}{extension}"


def find_photo(photos_dir: Path, lot_number: str) -> Path | None:
    """First ``<lot_number><ext>`` in ``photos_dir`` by extension priority."""
    # lot numbers with path separators never name a file directly in photos_dir
    if not lot_number or Path(lot_number).name != lot_number:
        return None
    for ext in IMAGE_EXTENSIONS:
        candidate = photos_dir / f"{lot_number}{ext}"
        if candidate.is_file():
            return candidate
    return None


class RowProcessor:
    """Turns Rows into Listings, writing files into ``output_dir``.

    Holds the run counters and the identifiers already written in this run.
    """

    def __init__(
        self,
        template: str,
        output_dir: Path,
        photos_dir: Path,
        *,
        extension: str = ".txt",
        event_log: EventLogBuffer | None = None,
        data_file_name: str = "",
    ) -> None:
        self.template = template
        self.output_dir = output_dir
        self.photos_dir = photos_dir
        self.extension = extension
        self.event_log = event_log
        self.data_file_name = data_file_name
        self.counters = RowCounters()
        self._written: dict[str, str] = {}  # identifier -> lot number that wrote it

    def _record(self, row: Row, event_type: str, message: str) -> None:
        if self.event_log is None:
            return
        self.event_log.append(
            EventRecord.create(
                data_file=self.data_file_name,
                row=row.row_number,
                event_type=event_type,
                lot_number=row.lot_number or "",
                message=message,
            )
        )

    def _remove_photos(self, identifier: str) -> None:
        stem = f"{LISTING_PREFIX}{identifier}"
        for p in self.output_dir.iterdir():
            if p.is_file() and p.stem == stem and p.suffix.lower() in IMAGE_EXTENSIONS:
                p.unlink()
                logger.debug("removed stale photo %s", p.name)

    def process(self, row: Row) -> Listing | None:
        """Process one row. Returns None when the row is skipped."""
        self.counters.total_rows += 1

        if not row.qualifies:
            self.counters.skipped_rows += 1
            reason = f"missing {LOT_NUMBER_COLUMN}"
            logger.warning("row %d skipped: %s", row.row_number, reason)
            self._record(row, ROW_SKIPPED, reason)
            return None

        lot_number = row.lot_number.strip()  # type: ignore[union-attr]
        identifier = sanitize_lot_number(lot_number)

        previous = self._written.get(identifier)
        if previous is not None:
            self.counters.collisions += 1
            message = f"lot {lot_number!r} overwrites lot {previous!r} (identifier {identifier})"
            logger.warning("row %d: %s", row.row_number, message)
            self._record(row, IDENTIFIER_COLLISION, message)
            # photos copied for the earlier lot must not outlive its listing
            self._remove_photos(identifier)
        self._written[identifier] = lot_number

        content = render(self.template, row.values)
        path = self.output_dir / listing_file_name(identifier, self.extension)
        path.write_text(content, encoding="utf-8")
        self.counters.listings_created += 1

        photo: PhotoMatch | None = None
        source = find_photo(self.photos_dir, lot_number)
        if source is not None:
            destination = self.output_dir / f"{LISTING_PREFIX}{identifier}{source.suffix}"
            shutil.copy2(source, destination)
            photo = PhotoMatch(source=source, destination=destination, extension=source.suffix)
            self.counters.photos_matched += 1
            logger.debug("row %d lot=%s listing=%s photo=%s", row.row_number, lot_number, path.name, source.name)
        else:
            logger.debug("row %d lot=%s listing=%s photo=none", row.row_number, lot_number, path.name)

        listing = Listing(
            row_number=row.row_number,
            lot_number=lot_number,
            identifier=identifier,
            path=path,
            content=content,
            photo=photo,
        )
        self.counters.listings.append(listing)
        return listing


def process_rows(
    rows: Iterable[Row],
    processor: RowProcessor,
    progress: ProgressTracker | None = None,
) -> RowCounters:
    """Process rows sequentially in input order and return the counters."""
    for row in rows:
        if progress is not None:
            progress.start_item(row.lot_number or f"row {row.row_number}")
        listing = processor.process(row)
        if progress is not None:
            c = processor.counters
            progress.set_postfix(created=c.listings_created, skipped=c.skipped_rows, photos=c.photos_matched)
            progress.finish_item(success=listing is not None)
    return processor.counters
