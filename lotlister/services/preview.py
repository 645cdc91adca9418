from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from jinja2 import Environment

from .row_processor import IMAGE_EXTENSIONS, LISTING_PREFIX

"""HTML preview of every listing in the output directory.

The preview is built from what is on disk, not from the run counters, so it
stays correct when listings were added or removed by hand between runs.
Only ``Lot_*`` files with the listing extension count as listings, so a
template or data file sharing the directory is ignored. Sections are ordered
by file name (plain string order: ``Lot_16`` sorts before ``Lot_3``).
"""

logger = logging.getLogger(__name__)

PREVIEW_NAME = "preview.html"
NO_PHOTO_TEXT = "No photo available"

_jinja_env = Environment(autoescape=True)

PREVIEW_TEMPLATE = _jinja_env.from_string("""\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>Listing preview</title>
<style>
body { font-family: sans-serif; margin: 2em; background: #f4f4f4; }
.summary { font-weight: bold; margin-bottom: 1.5em; }
.listing { background: #fff; border: 1px solid #ccc; border-radius: 6px; padding: 1em; margin-bottom: 1.5em; }
.listing img { max-width: 320px; max-height: 320px; display: block; margin-bottom: 0.8em; }
.no-photo { width: 320px; padding: 3em 0; text-align: center; color: #888; background: #eee; margin-bottom: 0.8em; }
pre { white-space: pre-wrap; font-family: inherit; margin: 0; }
</style>
</head>
<body>
<h1>Listing preview</h1>
<p class="summary">Total listings: {{ report.total }} | With photo: {{ report.with_photo }} | Without photo: {{ report.without_photo }}</p>
{% for entry in report.entries %}
<section class="listing" id="{{ entry.identifier }}">
<h2>{{ entry.identifier }}</h2>
{% if entry.image %}<img src="{{ entry.image }}" alt="{{ entry.identifier }}">{% else %}<div class="no-photo">{{ no_photo_text }}</div>{% endif %}
<pre>{{ entry.content }}</pre>
</section>
{% endfor %}
</body>
</html>
""")


@dataclass(frozen=True)
class PreviewEntry:
    name: str  # listing file name
    identifier: str  # file name without extension
    content: str
    image: str | None = None  # image file name in the same directory


@dataclass(frozen=True)
class PreviewReport:
    entries: list[PreviewEntry]

    @property
    def total(self) -> int:
        return len(self.entries)

    @property
    def with_photo(self) -> int:
        return sum(1 for e in self.entries if e.image is not None)

    @property
    def without_photo(self) -> int:
        return self.total - self.with_photo


def scan_listings(output_dir: Path, extension: str = ".txt", exclude: str | None = None) -> PreviewReport:
    files = sorted(
        (p for p in output_dir.iterdir() if p.is_file()),
        key=lambda p: p.name,
    )
    images: dict[str, str] = {}
    for p in files:
        if p.suffix.lower() in IMAGE_EXTENSIONS:
            images.setdefault(p.stem, p.name)

    entries: list[PreviewEntry] = []
    for p in files:
        if p.suffix != extension or p.name == exclude or not p.name.startswith(LISTING_PREFIX):
            continue
        entries.append(
            PreviewEntry(
                name=p.name,
                identifier=p.stem,
                content=p.read_text(encoding="utf-8"),
                image=images.get(p.stem),
            )
        )
    return PreviewReport(entries=entries)


def render_preview(report: PreviewReport) -> str:
    return PREVIEW_TEMPLATE.render(report=report, no_photo_text=NO_PHOTO_TEXT)


def write_preview(output_dir: Path, extension: str = ".txt", name: str = PREVIEW_NAME) -> tuple[Path, PreviewReport]:
    """Scan ``output_dir`` and write the preview page into it."""
    report = scan_listings(output_dir, extension, exclude=name)
    target = output_dir / name
    target.write_text(render_preview(report), encoding="utf-8")
    logger.debug(
        "preview=%s total=%d with_photo=%d without_photo=%d",
        target,
        report.total,
        report.with_photo,
        report.without_photo,
    )
    return target, report
