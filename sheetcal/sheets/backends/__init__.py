"""Grid Backends - Storage implementations for the event sheet

This package contains the row stores the mapper can sit on:
- google_sheets.py: Google Sheets v4 values API
- memory.py: in-process grid for development and tests

All backends implement the GridBackend abstract base class from base.py.
"""

import logging

from sheetcal.config import SheetCalConfig
from sheetcal.sheets.backends.base import GridBackend
from sheetcal.sheets.backends.memory import InMemoryGridBackend
from sheetcal.sheets.models import EVENT_FIELDS

logger = logging.getLogger(__name__)


def create_backend(config: SheetCalConfig) -> GridBackend:
    """
    Build the backend selected in config.

    The returned backend owns its network client; the caller keeps it for
    the lifetime of the application and closes it with ``aclose()``.

    Raises:
        ValueError: google backend selected without credentials
    """
    sheets = config.sheets
    if sheets.backend == "memory":
        logger.info(f"Using in-memory grid for sheet '{sheets.sheet_name}'")
        return InMemoryGridBackend({sheets.sheet_name: [list(EVENT_FIELDS)]})

    missing = config.credentials.missing()
    if missing:
        raise ValueError(f"Google Sheets backend requires: {', '.join(missing)}")

    from sheetcal.sheets.backends.google_sheets import (
        GoogleSheetsBackend,
        service_account_credentials,
    )

    creds = service_account_credentials(
        config.credentials.service_account_email,
        config.credentials.private_key,
    )
    logger.info(f"Using Google Sheets backend for sheet '{sheets.sheet_name}'")
    return GoogleSheetsBackend(
        config.credentials.spreadsheet_id,
        creds,
        value_input_option=sheets.value_input_option,
        timeout=sheets.timeout_seconds,
    )


__all__ = ["GridBackend", "InMemoryGridBackend", "create_backend"]
