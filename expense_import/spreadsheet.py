"""
Reading uploaded spreadsheets into a header row plus data rows.

Supported:
- .xlsx / .xlsm via openpyxl (first sheet, cached formula values)
- .csv with encoding detection (charset-normalizer) and delimiter sniffing
"""

from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass
from typing import List, Sequence

from charset_normalizer import from_bytes
from openpyxl import load_workbook

from .errors import SpreadsheetError, UnsupportedFileError

logger = logging.getLogger(__name__)

EXCEL_EXTENSIONS = (".xlsx", ".xlsm")
CSV_EXTENSIONS = (".csv",)
SUPPORTED_EXTENSIONS = EXCEL_EXTENSIONS + CSV_EXTENSIONS


@dataclass
class Table:
    headers: List[object]
    rows: List[List[object]]
    # 1-based sheet line of the header row
    header_line: int = 1


def is_blank_row(row: Sequence[object]) -> bool:
    return all(c is None or (isinstance(c, str) and not c.strip()) for c in row)


def decode_text(raw: bytes) -> str:
    """Best-effort decode; a UTF-8 BOM is dropped, undecodable bytes are replaced."""
    match = from_bytes(raw).best()
    encoding = match.encoding if match is not None else "utf-8"
    if raw.startswith(b"\xef\xbb\xbf") and encoding.lower().replace("-", "_") in ("utf_8", "utf8"):
        encoding = "utf-8-sig"

    try:
        return raw.decode(encoding)
    except (UnicodeDecodeError, LookupError):
        logger.warning("could not decode upload as %s, falling back to utf-8 with replacement", encoding)
        return raw.decode("utf-8", errors="replace")


def read_csv(raw: bytes) -> List[List[object]]:
    text = decode_text(raw)
    text = text.replace("\r\n", "\n").replace("\r", "\n")

    delimiter = ","
    try:
        dialect = csv.Sniffer().sniff(text[:4096], delimiters=[",", ";", "\t", "|"])
        delimiter = dialect.delimiter
    except csv.Error:
        pass

    reader = csv.reader(io.StringIO(text, newline=""), delimiter=delimiter)
    return [list(row) for row in reader]


def read_xlsx(raw: bytes) -> List[List[object]]:
    try:
        workbook = load_workbook(io.BytesIO(raw), read_only=True, data_only=True)
    except Exception as exc:
        raise SpreadsheetError(f"could not open workbook: {exc}") from exc

    try:
        sheet = workbook.worksheets[0]
        return [list(row) for row in sheet.iter_rows(values_only=True)]
    except Exception as exc:
        raise SpreadsheetError(f"could not read workbook: {exc}") from exc
    finally:
        workbook.close()


def read_table(raw: bytes, filename: str) -> Table:
    """Locate the header (first non-blank row) and return it with the rows below it."""
    name = (filename or "").lower()
    if name.endswith(EXCEL_EXTENSIONS):
        rows = read_xlsx(raw)
    elif name.endswith(CSV_EXTENSIONS):
        rows = read_csv(raw)
    else:
        raise UnsupportedFileError(
            f"unsupported file type: {filename!r} (expected one of {', '.join(SUPPORTED_EXTENSIONS)})"
        )

    for idx, row in enumerate(rows):
        if not is_blank_row(row):
            return Table(headers=row, rows=rows[idx + 1:], header_line=idx + 1)
    return Table(headers=[], rows=[])
