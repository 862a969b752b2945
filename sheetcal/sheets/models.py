"""
Data structures for the event sheet.

Usage:
    from sheetcal.sheets.models import Event, EVENT_FIELDS, DeleteResult

The spreadsheet has no typed columns, so every field is a string (or None
when the cell or the whole column is missing). The field set itself is fixed
here; only the column *positions* come from the live header row.
"""

from dataclasses import asdict, dataclass, fields
from typing import Any


# Canonical order, also the column order used when appending new rows
EVENT_FIELDS: tuple[str, ...] = ("id", "title", "day", "h1", "m1", "h2", "m2", "category")

# Everything a client must supply on create (id is generated server-side)
CONTENT_FIELDS: tuple[str, ...] = EVENT_FIELDS[1:]

# Sentinel returned by the header resolver for a field with no column
NOT_FOUND = -1

# Header row plus 1-based addressing
ROW_NUMBER_OFFSET = 2


Grid = list[list[str]]


@dataclass
class Event:
    """
    One decoded schedule entry.

    ``day`` and the hour/minute fields are kept exactly as stored; the sheet is
    free-form and the calendar front end interprets them.
    """

    id: str | None = None
    title: str | None = None
    day: str | None = None
    h1: str | None = None
    m1: str | None = None
    h2: str | None = None
    m2: str | None = None
    category: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Event":
        """Build an Event from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self, include_none: bool = True) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        d = asdict(self)
        if not include_none:
            d = {k: v for k, v in d.items() if v is not None}
        return d

    def missing_fields(self, required: tuple[str, ...] = EVENT_FIELDS) -> list[str]:
        """Names of required fields that are absent or empty."""
        return [name for name in required if not getattr(self, name)]

    def is_blank(self) -> bool:
        """True when no field carries a value (e.g. a cleared row)."""
        return all(not getattr(self, name) for name in EVENT_FIELDS)


@dataclass(frozen=True)
class DeleteResult:
    """
    Outcome of deleting an event.

    Deletion clears the row's cells but keeps the row itself, so ``row_kept``
    is always True and every other record keeps its offset.
    """

    event_id: str
    row_offset: int
    row_number: int
    row_kept: bool = True


def row_number_for(offset: int) -> int:
    """Physical 1-based sheet row for a 0-based data row offset."""
    return offset + ROW_NUMBER_OFFSET


__all__ = [
    "CONTENT_FIELDS",
    "EVENT_FIELDS",
    "NOT_FOUND",
    "ROW_NUMBER_OFFSET",
    "DeleteResult",
    "Event",
    "Grid",
    "row_number_for",
]
