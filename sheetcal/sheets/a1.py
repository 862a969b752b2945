"""
A1 notation helpers.

Builds and parses the range strings the Sheets values API takes, e.g.
``work05_sche``, ``work05_sche!A2:H2`` or ``'Week 1'!A:H``. Rows and columns
are 1-based, as in the sheet itself.
"""

import re
from dataclasses import dataclass


_PLAIN_SHEET_NAME = re.compile(r"^[A-Za-z0-9_]+$")
_CELL = re.compile(r"^([A-Za-z]*)(\d*)$")


@dataclass(frozen=True)
class RangeSpec:
    """A parsed A1 range. Unbounded sides are None."""

    sheet: str
    start_col: int | None = None
    start_row: int | None = None
    end_col: int | None = None
    end_row: int | None = None


def column_letter(index: int) -> str:
    """1 -> 'A', 26 -> 'Z', 27 -> 'AA'."""
    if index < 1:
        raise ValueError(f"Column index must be >= 1, got {index}")
    letters = ""
    while index:
        index, rem = divmod(index - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return letters


def column_index(letters: str) -> int:
    """'A' -> 1, 'H' -> 8, 'AA' -> 27."""
    if not letters or not letters.isalpha():
        raise ValueError(f"Invalid column letters: {letters!r}")
    index = 0
    for ch in letters.upper():
        index = index * 26 + (ord(ch) - ord("A") + 1)
    return index


def quote_sheet_name(sheet: str) -> str:
    if _PLAIN_SHEET_NAME.match(sheet):
        return sheet
    return "'" + sheet.replace("'", "''") + "'"


def row_range(sheet: str, row_number: int, width: int) -> str:
    """Range covering columns A..<width> of a single row."""
    if row_number < 1:
        raise ValueError(f"Row number must be >= 1, got {row_number}")
    last = column_letter(width)
    return f"{quote_sheet_name(sheet)}!A{row_number}:{last}{row_number}"


def _parse_cell(ref: str) -> tuple[int | None, int | None]:
    match = _CELL.match(ref)
    if not match or not ref:
        raise ValueError(f"Invalid cell reference: {ref!r}")
    letters, digits = match.groups()
    col = column_index(letters) if letters else None
    row = int(digits) if digits else None
    return col, row


def parse_range(range_str: str) -> RangeSpec:
    """Parse ``Sheet``, ``Sheet!A2``, ``Sheet!A2:H2`` or ``'Sheet name'!A:H``."""
    if "!" in range_str:
        sheet_part, _, cells = range_str.rpartition("!")
    else:
        sheet_part, cells = range_str, ""

    if sheet_part.startswith("'") and sheet_part.endswith("'") and len(sheet_part) >= 2:
        sheet = sheet_part[1:-1].replace("''", "'")
    else:
        sheet = sheet_part

    if not sheet:
        raise ValueError(f"Range has no sheet name: {range_str!r}")

    if not cells:
        return RangeSpec(sheet=sheet)

    start, _, end = cells.partition(":")
    start_col, start_row = _parse_cell(start)
    if end:
        end_col, end_row = _parse_cell(end)
    else:
        end_col, end_row = start_col, start_row

    return RangeSpec(
        sheet=sheet,
        start_col=start_col,
        start_row=start_row,
        end_col=end_col,
        end_row=end_row,
    )


__all__ = [
    "RangeSpec",
    "column_index",
    "column_letter",
    "parse_range",
    "quote_sheet_name",
    "row_range",
]
