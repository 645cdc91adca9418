from __future__ import annotations

from ..models.run_summary import RunSummary

"""SUMMARY line rendering.

Format:
SUMMARY rows={total} created={created} skipped={skipped} photos={photos}
collisions={collisions} elapsed_sec={elapsed}
"""


def _format_seconds(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # avoid scientific notation for very small values
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.2f}".rstrip("0").rstrip(".")


def render_summary_line(summary: RunSummary) -> str:
    """Render the SUMMARY line for a finished run.

    >>> from datetime import datetime, timezone
    >>> from pathlib import Path
    >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
    >>> s = RunSummary(total_rows=3, skipped_rows=1, listings_created=2, photos_matched=1,
    ...                collisions=0, start_time=t, end_time=t, elapsed_seconds=0.0,
    ...                output_directory=Path("out"))
    >>> render_summary_line(s)
    'SUMMARY rows=3 created=2 skipped=1 photos=1 collisions=0 elapsed_sec=0'
    """
    return (
        f"SUMMARY rows={summary.total_rows} "
        f"created={summary.listings_created} "
        f"skipped={summary.skipped_rows} "
        f"photos={summary.photos_matched} "
        f"collisions={summary.collisions} "
        f"elapsed_sec={_format_seconds(summary.elapsed_seconds)}"
    )
