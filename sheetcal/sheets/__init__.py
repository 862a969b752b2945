"""Event sheet - header-keyed spreadsheet used as a row store

Components:
    models.py: Event record and field constants
    mapper.py: header resolver, decoder, encoder, locator and CRUD
    a1.py: A1 range helpers
    backends/: grid storage implementations
"""

from sheetcal.sheets.errors import BackendFailure, NotFound, SheetCalError, ValidationError
from sheetcal.sheets.mapper import EventSheetMapper
from sheetcal.sheets.models import EVENT_FIELDS, DeleteResult, Event

__all__ = [
    "EVENT_FIELDS",
    "BackendFailure",
    "DeleteResult",
    "Event",
    "EventSheetMapper",
    "NotFound",
    "SheetCalError",
    "ValidationError",
]
