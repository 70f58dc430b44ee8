"""Spreadsheet readers for catalog import.

Each reader yields ``(line, {header: cell})`` pairs, one per data row,
where ``line`` is the row's 1-based line in the source file (the header
is line 1). No typing or column interpretation happens here; that is the
row adapter's job.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Any, Iterator

import openpyxl

from stockledger.domain.exceptions import ValidationError

SourceRow = tuple[int, dict[str, Any]]


def read_rows(
    path: Path, delimiter: str | None = None, sheet: str | None = None
) -> Iterator[SourceRow]:
    """Dispatch on file suffix.

    ``delimiter`` only applies to CSV files and ``sheet`` only to
    workbooks.
    """
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return read_csv(path, delimiter=delimiter)
    if suffix in (".xlsx", ".xlsm"):
        return read_xlsx(path, sheet=sheet)
    raise ValidationError(f"Unsupported import file type: '{path.suffix}'")


def read_csv(path: Path, delimiter: str | None = None) -> Iterator[SourceRow]:
    """Read a CSV file, stripping a UTF-8 BOM.

    Without an explicit delimiter, ``;`` is used when the header line has
    more semicolons than commas (spreadsheet exports in comma-decimal
    locales).
    """
    with path.open("r", encoding="utf-8-sig", newline="") as f:
        if delimiter is None:
            header = f.readline()
            delimiter = ";" if header.count(";") > header.count(",") else ","
            f.seek(0)
        reader = csv.DictReader(f, delimiter=delimiter)
        for row in reader:
            # line_num is the last physical line of the record just read
            yield reader.line_num, {k: v for k, v in row.items() if k is not None}


def read_xlsx(path: Path, sheet: str | None = None) -> Iterator[SourceRow]:
    """Read the active sheet (or the one named ``sheet``) using its first row as header."""
    wb = openpyxl.load_workbook(path, read_only=True, data_only=True)
    try:
        if sheet is None:
            ws = wb.active
        elif sheet in wb.sheetnames:
            ws = wb[sheet]
        else:
            raise ValidationError(
                f"Sheet '{sheet}' not found; available: {', '.join(wb.sheetnames)}"
            )

        rows = ws.iter_rows(values_only=True)
        header = next(rows, None)
        if header is None:
            return
        columns = ["" if c is None else str(c).strip() for c in header]
        for line, values in enumerate(rows, start=2):
            if values is None or all(v is None for v in values):
                continue
            yield line, {
                col: value
                for col, value in zip(columns, values)
                if col
            }
    finally:
        wb.close()
