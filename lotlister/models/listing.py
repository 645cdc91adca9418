from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

"""Listing and PhotoMatch models.

A Listing is created once per qualifying Row and never mutated afterwards.
"""

__all__ = [
    "PhotoMatch",
    "Listing",
]


@dataclass(frozen=True)
class PhotoMatch:
    """Source image found for a lot and where it was copied to."""
    source: Path
    destination: Path
    extension: str  # as found on disk, e.g. ".jpg"


@dataclass(frozen=True)
class Listing:
    """Rendered listing for one Row."""
    row_number: int
    lot_number: str  # LotNo with surrounding whitespace trimmed
    identifier: str  # filesystem-safe form of lot_number
    path: Path
    content: str
    photo: PhotoMatch | None = None
