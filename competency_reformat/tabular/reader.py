from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

from ..models.competency import InputRecord

"""Tabular reader for competency framework files (CSV / XLS / XLSX).

Layout of every input file:
- row 1: metadata (program title etc.), ignored
- row 2: header; the Name and Description columns are located by substring
- row 3+: data rows

Both formats are loaded into a raw header-less DataFrame first so that one
normalisation step serves them all.
"""

__all__ = [
    "SUPPORTED_SUFFIXES",
    "TabularReadError",
    "SheetHeaderError",
    "MissingColumnsError",
    "UnsupportedFormatError",
    "SheetData",
    "read_raw_frame",
    "normalize_sheet",
    "read_records",
]

SUPPORTED_SUFFIXES = (".csv", ".xls", ".xlsx")
NAME_HEADER = "Name"
DESCRIPTION_HEADER = "Description"


class TabularReadError(Exception):
    """Base class: the file could not be turned into records."""

class SheetHeaderError(TabularReadError):
    """Raised when header row (2nd line) is missing."""

class MissingColumnsError(TabularReadError):
    """Raised when neither a Name nor a Description column exists."""

class UnsupportedFormatError(TabularReadError):
    """Raised for file suffixes other than .csv / .xls / .xlsx."""


@dataclass
class SheetData:
    sheet_name: str
    columns: list[str]
    name_column: str | None
    description_column: str | None
    records: list[InputRecord]


def _read_csv_frame(path: Path) -> pd.DataFrame:
    # csv module tolerates ragged rows (metadata row is usually shorter than the header)
    try:
        text = path.read_text(encoding="utf-8-sig")
        rows = list(csv.reader(io.StringIO(text)))
    except (UnicodeDecodeError, csv.Error) as e:
        raise TabularReadError(f"{path.name}: malformed csv: {e}") from e
    # empty lines only; a comma-only metadata row still counts as row 1
    rows = [r for r in rows if r]
    return pd.DataFrame(rows)


def _read_excel_frame(path: Path) -> pd.DataFrame:
    try:
        xls = pd.ExcelFile(path)
    except OSError:
        raise
    except Exception as e:  # openpyxl / xlrd raise their own types (BadZipFile, XLRDError ...)
        raise TabularReadError(f"{path.name}: unreadable workbook: {e}") from e
    if not xls.sheet_names:
        raise SheetHeaderError(f"{path.name}: workbook has no sheets")
    # first sheet only; no header inference, NA strings kept as text
    return xls.parse(xls.sheet_names[0], header=None, keep_default_na=False, na_values=[])


def read_raw_frame(path: Path) -> pd.DataFrame:
    """Read a CSV or Excel file into a header-less DataFrame."""
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return _read_csv_frame(path)
    if suffix in (".xls", ".xlsx"):
        return _read_excel_frame(path)
    raise UnsupportedFormatError(f"{path.name}: unsupported format '{path.suffix}'")


def _cell_text(val: Any) -> str:
    if val is None:
        return ""
    try:
        if pd.isna(val):
            return ""
    except (TypeError, ValueError):
        pass
    return str(val).strip()


def _find_column(columns: list[str], needle: str) -> int | None:
    for idx, col in enumerate(columns):
        if needle in col:
            return idx
    return None


def normalize_sheet(df: pd.DataFrame, sheet_name: str) -> SheetData:
    """Normalize a raw DataFrame using the second row as header.

    Steps:
    1. Validate at least 2 rows exist (1: metadata, 2: header)
    2. Locate the Name / Description columns (case-sensitive substring)
    3. Extract trimmed (name, description) pairs from rows 3+
    4. Drop rows where both values are empty
    """
    if df.shape[0] < 2:
        raise SheetHeaderError(f"sheet '{sheet_name}' lacks second row header")
    columns = [_cell_text(c) for c in df.iloc[1].tolist()]
    name_idx = _find_column(columns, NAME_HEADER)
    desc_idx = _find_column(columns, DESCRIPTION_HEADER)
    if name_idx is None and desc_idx is None:
        raise MissingColumnsError(
            f"sheet '{sheet_name}' has neither a '{NAME_HEADER}' nor a '{DESCRIPTION_HEADER}' column: {columns}"
        )

    records: list[InputRecord] = []
    for raw in df.iloc[2:].itertuples(index=False, name=None):
        name = _cell_text(raw[name_idx]) if name_idx is not None and name_idx < len(raw) else ""
        description = _cell_text(raw[desc_idx]) if desc_idx is not None and desc_idx < len(raw) else ""
        if not name and not description:
            continue
        records.append(InputRecord(name=name, description=description))

    return SheetData(
        sheet_name=sheet_name,
        columns=columns,
        name_column=columns[name_idx] if name_idx is not None else None,
        description_column=columns[desc_idx] if desc_idx is not None else None,
        records=records,
    )


def read_records(path: Path) -> list[InputRecord]:
    """Read one framework file into ordered records.

    Raises:
        TabularReadError: malformed or unsupported file
        OSError: file-system failure
    """
    df = read_raw_frame(path)
    return normalize_sheet(df, path.stem).records
