"""
Event Sheet Mapper

Treats one sheet of a spreadsheet as a table of events:
    row 1        header row, one logical field name per column
    rows 2..N    one event per row, cells aligned with the header

The sheet has no keys, types or transactions. Records are addressed by their
offset among the data rows (sheet row = offset + 2) and found by scanning the
``id`` column. Column positions are re-read from the header on every
operation, so reordered columns still decode and update correctly as long as
the field names are present.

New rows are appended in the fixed EVENT_FIELDS order, while updates write
each field at its header position. Both agree only when the header is in the
canonical order.

Usage:
    from sheetcal.sheets.mapper import EventSheetMapper

    mapper = EventSheetMapper(backend, sheet_name="work05_sche")
    events = await mapper.list_events()
    created = await mapper.create_event(Event(title="Standup", day="Mon", ...))
"""

import asyncio
import contextlib
import logging
from collections.abc import Callable
from datetime import datetime, timezone

from sheetcal.sheets.a1 import quote_sheet_name, row_range
from sheetcal.sheets.backends.base import GridBackend
from sheetcal.sheets.errors import BackendFailure, NotFound, ValidationError
from sheetcal.sheets.models import (
    CONTENT_FIELDS,
    EVENT_FIELDS,
    NOT_FOUND,
    DeleteResult,
    Event,
    Grid,
    row_number_for,
)

logger = logging.getLogger(__name__)

# Updates and clears always cover columns A..H
WRITE_WIDTH = len(EVENT_FIELDS)

NO_DATA = "No data found"
EVENT_NOT_FOUND = "Event not found"


# =============================================================================
# Header Index Resolver
# =============================================================================


def header_index(header: list[str], field: str) -> int:
    """Position of ``field`` in the header (first match, case-sensitive), or -1."""
    try:
        return header.index(field)
    except ValueError:
        return NOT_FOUND


def build_header_index(header: list[str]) -> dict[str, int]:
    """Map every event field to its column position for one request."""
    return {field: header_index(header, field) for field in EVENT_FIELDS}


# =============================================================================
# Decoder / Encoder
# =============================================================================


def _cell(row: list[str], position: int) -> str | None:
    if position < 0 or position >= len(row):
        return None
    return row[position]


def decode_row(row: list[str], index: dict[str, int]) -> Event:
    return Event(**{field: _cell(row, index[field]) for field in EVENT_FIELDS})


def decode_events(grid: Grid) -> list[Event]:
    """
    Decode every data row of a grid into an Event, in row order.

    Raises:
        NotFound: the grid has no header or no data rows
    """
    if len(grid) < 2:
        raise NotFound(NO_DATA)
    index = build_header_index(grid[0])
    return [decode_row(row, index) for row in grid[1:]]


def encode_row(row: list[str], index: dict[str, int], event: Event) -> list[str]:
    """
    Return a copy of ``row`` with each event field written at its header position.

    Fields without a header column are skipped. Cells outside the schema are
    left as they were; short rows are padded with empty strings.
    """
    patched = list(row)
    for field in EVENT_FIELDS:
        position = index[field]
        if position == NOT_FOUND:
            continue
        value = getattr(event, field)
        while len(patched) <= position:
            patched.append("")
        patched[position] = "" if value is None else value
    return patched


def canonical_row(event: Event) -> list[str]:
    """Row for appending, in EVENT_FIELDS order regardless of the header."""
    return ["" if getattr(event, f) is None else getattr(event, f) for f in EVENT_FIELDS]


# =============================================================================
# Locator
# =============================================================================


def locate_row(grid: Grid, event_id: str) -> int:
    """
    Offset of the first data row whose id cell equals ``event_id``.

    Raises:
        NotFound: the grid has no data rows, or no row matches
    """
    if len(grid) < 2:
        raise NotFound(NO_DATA, event_id=event_id)
    id_position = header_index(grid[0], "id")
    if id_position != NOT_FOUND:
        for offset, row in enumerate(grid[1:]):
            if _cell(row, id_position) == event_id:
                return offset
    raise NotFound(EVENT_NOT_FOUND, event_id=event_id)


# =============================================================================
# Validation / IDs
# =============================================================================


def require_fields(event: Event, required: tuple[str, ...]) -> None:
    """Raise ValidationError if any required field is missing or empty."""
    missing = event.missing_fields(required)
    if missing:
        raise ValidationError(missing)


def generate_event_id(now: datetime) -> str:
    """UTC ISO-8601 timestamp with millisecond precision, e.g. 2024-05-01T09:30:12.345Z."""
    utc = now.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# Mapper
# =============================================================================


class EventSheetMapper:
    """
    CRUD over one sheet of events.

    Every operation is one read-modify-write against the backend with no
    locking across processes: a concurrent writer between the read and the
    write wins or loses silently. ``serialize_writes`` only serializes writes
    issued through this mapper instance.
    """

    def __init__(
        self,
        backend: GridBackend,
        sheet_name: str = "work05_sche",
        clock: Callable[[], datetime] = _utcnow,
        serialize_writes: bool = False,
        skip_blank_rows: bool = False,
    ):
        self.backend = backend
        self.sheet_name = sheet_name
        self.clock = clock
        self.skip_blank_rows = skip_blank_rows
        self._write_lock = asyncio.Lock() if serialize_writes else None

    @property
    def sheet_range(self) -> str:
        return quote_sheet_name(self.sheet_name)

    def range_for_offset(self, offset: int) -> str:
        return row_range(self.sheet_name, row_number_for(offset), WRITE_WIDTH)

    def _writing(self):
        return self._write_lock if self._write_lock is not None else contextlib.nullcontext()

    async def read_grid(self) -> Grid:
        return await self.backend.read_range(self.sheet_range)

    async def list_events(self) -> list[Event]:
        """
        All events in sheet order.

        Cleared rows still in the middle of the sheet decode to blank events
        unless ``skip_blank_rows`` is set.
        """
        events = decode_events(await self.read_grid())
        if self.skip_blank_rows:
            events = [e for e in events if not e.is_blank()]
            if not events:
                raise NotFound(NO_DATA)
        return events

    async def locate(self, event_id: str) -> int:
        """Row offset of an event, scanning the current sheet contents."""
        return locate_row(await self.read_grid(), event_id)

    async def create_event(self, event: Event) -> Event:
        """
        Append a new event with a freshly generated id.

        Any id on the input is ignored. The backend decides which row the
        event lands on.
        """
        require_fields(event, CONTENT_FIELDS)
        created = Event.from_dict({**event.to_dict(), "id": generate_event_id(self.clock())})

        async with self._writing():
            await self.backend.append_rows(self.sheet_range, [canonical_row(created)])

        logger.info(f"Created event {created.id} in '{self.sheet_name}'")
        return created

    async def update_event(self, event: Event) -> Event:
        """Overwrite every field of an existing event in place."""
        require_fields(event, EVENT_FIELDS)

        async with self._writing():
            grid = await self.read_grid()
            offset = locate_row(grid, event.id)
            index = build_header_index(grid[0])

            beyond = [f for f, p in index.items() if p >= WRITE_WIDTH]
            if beyond:
                raise BackendFailure(
                    "update",
                    f"Fields {beyond} sit beyond column H in '{self.sheet_name}'",
                )

            patched = encode_row(grid[offset + 1], index, event)
            patched = (patched + [""] * WRITE_WIDTH)[:WRITE_WIDTH]

            await self.backend.update_range(self.range_for_offset(offset), [patched])

        logger.info(f"Updated event {event.id} at row {row_number_for(offset)}")
        return decode_row(patched, index)

    async def delete_event(self, event_id: str) -> DeleteResult:
        """Clear the event's row. The emptied row stays in the sheet."""
        if not event_id:
            raise ValidationError(["id"], message="Missing event ID")

        async with self._writing():
            offset = await self.locate(event_id)
            await self.backend.clear_range(self.range_for_offset(offset))

        logger.info(f"Deleted event {event_id} (cleared row {row_number_for(offset)})")
        return DeleteResult(
            event_id=event_id,
            row_offset=offset,
            row_number=row_number_for(offset),
        )


__all__ = [
    "WRITE_WIDTH",
    "EventSheetMapper",
    "build_header_index",
    "canonical_row",
    "decode_events",
    "decode_row",
    "encode_row",
    "generate_event_id",
    "header_index",
    "locate_row",
    "require_fields",
]
