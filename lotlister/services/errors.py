from __future__ import annotations

from pathlib import Path

"""Fatal error kinds raised while generating listings.

Every error here aborts the run; the CLI maps them to a non-zero exit code.
Skipped rows are not errors and never raise.
"""

__all__ = [
    "ProcessingError",
    "MissingInputLocationError",
    "UnreadableTemplateError",
    "MissingDataFileError",
    "EmptyDataFileError",
    "UnreadableDataFileError",
]


class ProcessingError(Exception):
    """Base exception for fatal processing errors."""


class MissingInputLocationError(ProcessingError):
    """Raised when the input directory does not exist."""


class UnreadableTemplateError(ProcessingError):
    """Raised when the template file exists but cannot be read."""


class MissingDataFileError(ProcessingError):
    """Raised when the inventory data file is absent.

    ``example_path`` points at the sample file written for the user.
    """

    def __init__(self, message: str, example_path: Path | None = None) -> None:
        super().__init__(message)
        self.example_path = example_path


class EmptyDataFileError(ProcessingError):
    """Raised when the inventory data file has no data rows."""


class UnreadableDataFileError(ProcessingError):
    """Raised when the inventory data file cannot be decoded or parsed."""

