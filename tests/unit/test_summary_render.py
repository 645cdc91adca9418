from __future__ import annotations

import re
from datetime import datetime, timezone
from pathlib import Path

import pytest

from lotlister.models.run_summary import RowCounters, RunSummary
from lotlister.services.summary import render_summary_line

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY rows=([0-9]+) created=([0-9]+) skipped=([0-9]+) photos=([0-9]+) "
    r"collisions=([0-9]+) elapsed_sec=([0-9]+\.?[0-9]*)$"
)

START = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)


def _summary(elapsed: float, **counts: int) -> RunSummary:
    counters = RowCounters(**counts)
    end = datetime.fromtimestamp(START.timestamp() + elapsed, tz=timezone.utc)
    return RunSummary.from_counters(counters, start_time=START, end_time=end, output_directory=Path("out"))


def test_render_summary_line_fields():
    s = _summary(2.0, total_rows=10, skipped_rows=2, listings_created=8, photos_matched=5, collisions=1)
    line = render_summary_line(s)
    m = SUMMARY_PATTERN.match(line)
    assert m, line
    assert m.groups() == ("10", "8", "2", "5", "1", "2")


@pytest.mark.parametrize(
    "elapsed, expected",
    [(0.0, "0"), (3.0, "3"), (1.5, "1.5"), (1.23456, "1.23"), (0.000125, "0.000125")],
)
def test_render_summary_elapsed_format(elapsed, expected):
    s = RunSummary(
        total_rows=0, skipped_rows=0, listings_created=0, photos_matched=0, collisions=0,
        start_time=START, end_time=START, elapsed_seconds=elapsed, output_directory=Path("out"),
    )
    assert render_summary_line(s).endswith(f"elapsed_sec={expected}")


def test_from_counters_copies_listings():
    counters = RowCounters(total_rows=1)
    s = RunSummary.from_counters(counters, start_time=START, end_time=START, output_directory=Path("out"))
    counters.total_rows = 99
    assert s.total_rows == 1
    assert s.listings == []
    assert s.elapsed_seconds == 0
