from __future__ import annotations

import logging
import zipfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pandas as pd

from lotlister.models.row_data import Row
from lotlister.services.errors import EmptyDataFileError, MissingDataFileError, UnreadableDataFileError

"""Inventory file reader.

The first line is the header; every following line is one Row. CSV files are
read as text. Workbooks (.xlsx/.xls) are read from their first sheet with
numbers rendered without a trailing ``.0``. Empty cells become "".

Only presence of the recommended columns is checked, and only as a warning.
"""

logger = logging.getLogger(__name__)

RECOMMENDED_COLUMNS = ("LotNo", "ModelNo", "Description", "ContactPhone")
EXCEL_SUFFIXES = {".xlsx", ".xls"}
EXAMPLE_FILE_NAME = "inventory_example.csv"

EXAMPLE_ROWS = [
    {
        "LotNo": "1601",
        "ModelNo": "Dexter 417167",
        "Description": "Heavy Duty Axle",
        "ContactPhone": "555-0100",
        "RetailPrice": "450",
        "AskingPrice": "300",
    },
    {
        "LotNo": "1602",
        "ModelNo": "Bosch GSR12V",
        "Description": "Cordless Drill, barely used",
        "ContactPhone": "555-0100",
        "RetailPrice": "129",
        "AskingPrice": "",
    },
]


@dataclass
class InventoryData:
    source: Path
    columns: list[str]
    rows: list[Row]
    missing_columns: list[str] = field(default_factory=list)


def _cell_to_str(value: Any) -> str:
    if isinstance(value, str):
        return value
    if value is None or pd.isna(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _read_frame(path: Path) -> pd.DataFrame:
    if path.suffix.lower() in EXCEL_SUFFIXES:
        return pd.read_excel(path, sheet_name=0, dtype=object)
    return pd.read_csv(path, dtype=str, keep_default_na=False, encoding="utf-8-sig")


def read_inventory(path: Path) -> InventoryData:
    """Read the inventory file into Rows.

    Raises:
        MissingDataFileError: file does not exist (no example is written here)
        EmptyDataFileError: no header, or a header without data rows
        UnreadableDataFileError: not UTF-8, malformed CSV, or a broken workbook
    """
    if not path.exists():
        raise MissingDataFileError(f"data file not found: {path}")
    try:
        df = _read_frame(path)
    except pd.errors.EmptyDataError as e:
        raise EmptyDataFileError(f"data file is empty: {path}") from e
    except (UnicodeDecodeError, ValueError, zipfile.BadZipFile, OSError) as e:
        raise UnreadableDataFileError(f"cannot read data file {path}: {e}") from e

    columns = [str(c).strip() for c in df.columns.tolist()]
    if df.shape[0] == 0:
        raise EmptyDataFileError(f"data file has no rows: {path}")

    rows: list[Row] = []
    for idx, raw in enumerate(df.itertuples(index=False, name=None), start=1):
        values = {col: _cell_to_str(val) for col, val in zip(columns, raw, strict=False)}
        rows.append(Row(row_number=idx, values=values))

    missing = [c for c in RECOMMENDED_COLUMNS if c not in columns]
    if missing:
        logger.warning("data file %s is missing recommended columns: %s", path.name, ", ".join(missing))

    return InventoryData(source=path, columns=columns, rows=rows, missing_columns=missing)


def write_example_inventory(directory: Path) -> Path:
    """Write an example inventory CSV showing the expected columns."""
    directory.mkdir(parents=True, exist_ok=True)
    target = directory / EXAMPLE_FILE_NAME
    pd.DataFrame(EXAMPLE_ROWS).to_csv(target, index=False, encoding="utf-8")
    return target
