from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

from ..config.loader import ListingConfig
from ..data.reader import read_inventory, write_example_inventory
from ..logging.event_log import EventLogBuffer
from ..models.run_summary import RunSummary
from .errors import MissingDataFileError, MissingInputLocationError
from .preview import write_preview
from .progress import ProgressTracker
from .row_processor import RowProcessor, process_rows
from .template_store import load_template

"""Service orchestration for the listing generator.

Steps, in order:
1. Check the input directory
2. Load (or synthesise) the template
3. Read the inventory file (writing an example when it is missing)
4. Resolve the photo directory (falls back to the input directory)
5. Render one listing per qualifying row, copying matched photos
6. Write the HTML preview from the output directory contents
7. Flush the event log

Fatal conditions raise a ProcessingError subclass. Files written before the
failure are left in place.
"""

logger = logging.getLogger(__name__)


def resolve_photos_dir(config: ListingConfig) -> Path:
    photos = config.photos_path
    if photos.is_dir():
        return photos
    logger.warning("photo directory not found: %s -> using %s", photos, config.input_path)
    return config.input_path


def run(config: ListingConfig, event_log: EventLogBuffer | None = None) -> RunSummary:
    """Generate listings and preview for ``config``.

    Raises:
        MissingInputLocationError, UnreadableTemplateError,
        MissingDataFileError, EmptyDataFileError
    """
    start_time = datetime.now(UTC)
    if event_log is None:
        event_log = EventLogBuffer(Path(config.log_directory))

    input_dir = config.input_path
    if not input_dir.is_dir():
        raise MissingInputLocationError(f"input directory not found: {input_dir}")

    template = load_template(config.template_path)

    data_path = config.data_path
    if not data_path.exists():
        example = write_example_inventory(data_path.parent)
        raise MissingDataFileError(
            f"data file not found: {data_path} (example written to {example})",
            example_path=example,
        )
    inventory = read_inventory(data_path)
    logger.info("Read %d rows from %s", len(inventory.rows), data_path)

    photos_dir = resolve_photos_dir(config)
    output_dir = config.output_path
    output_dir.mkdir(parents=True, exist_ok=True)

    processor = RowProcessor(
        template,
        output_dir,
        photos_dir,
        extension=config.output_extension,
        event_log=event_log,
        data_file_name=data_path.name,
    )
    with ProgressTracker(len(inventory.rows)) as progress:
        counters = process_rows(inventory.rows, processor, progress)

    preview_path, report = write_preview(output_dir, config.output_extension, config.preview_name)
    logger.info(
        "Preview written: %s (%d listings, %d with photo, %d without photo)",
        preview_path,
        report.total,
        report.with_photo,
        report.without_photo,
    )

    log_path = event_log.flush()
    if log_path is not None:
        logger.info("Event log written: %s", log_path)

    end_time = datetime.now(UTC)
    return RunSummary.from_counters(
        counters,
        start_time=start_time,
        end_time=end_time,
        output_directory=output_dir,
        preview_path=preview_path,
    )
