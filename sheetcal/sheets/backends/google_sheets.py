"""
Tool: Google Sheets Backend
Purpose: Grid storage on a Google spreadsheet via the Sheets v4 values API

Implements the GridBackend interface with four REST calls:
    GET  /v4/spreadsheets/{id}/values/{range}
    POST /v4/spreadsheets/{id}/values/{range}:append
    PUT  /v4/spreadsheets/{id}/values/{range}
    POST /v4/spreadsheets/{id}/values/{range}:clear

Usage:
    from sheetcal.sheets.backends.google_sheets import GoogleSheetsBackend, service_account_credentials

    creds = service_account_credentials(email, private_key)
    backend = GoogleSheetsBackend(spreadsheet_id, creds)
    grid = await backend.read_range("work05_sche")
    await backend.aclose()

Dependencies:
    - httpx (pip install httpx)
    - google-auth[requests] (pip install "google-auth[requests]")
"""

import asyncio
import logging
from typing import Any
from urllib.parse import quote

import httpx
from google.auth import exceptions as google_auth_exceptions
from google.auth.transport.requests import Request as GoogleAuthRequest
from google.oauth2 import service_account

from sheetcal.sheets.backends.base import GridBackend
from sheetcal.sheets.errors import BackendFailure
from sheetcal.sheets.models import Grid

logger = logging.getLogger(__name__)


# Google API endpoints
SHEETS_API_BASE = "https://sheets.googleapis.com/v4/spreadsheets"
TOKEN_URI = "https://oauth2.googleapis.com/token"
SHEETS_SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


def service_account_credentials(
    client_email: str, private_key: str, token_uri: str = TOKEN_URI
) -> service_account.Credentials:
    """
    Build service account credentials from an email and PEM private key.

    Keys copied out of JSON key files into environment variables usually carry
    literal ``\\n`` sequences; those are turned back into newlines.
    """
    info = {
        "type": "service_account",
        "client_email": client_email,
        "private_key": private_key.replace("\\n", "\n"),
        "token_uri": token_uri,
    }
    return service_account.Credentials.from_service_account_info(info, scopes=SHEETS_SCOPES)


class GoogleSheetsBackend(GridBackend):
    """
    Google Sheets provider for one spreadsheet.

    The HTTP client and credentials are created once and reused for every
    request; call ``aclose()`` on shutdown.
    """

    def __init__(
        self,
        spreadsheet_id: str,
        credentials: Any,
        value_input_option: str = "USER_ENTERED",
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the backend.

        Args:
            spreadsheet_id: ID from the spreadsheet URL
            credentials: google-auth credentials with the spreadsheets scope
            value_input_option: How Sheets interprets written values
                (USER_ENTERED parses numbers and dates, RAW stores text as-is)
            timeout: Per-request timeout in seconds
            client: Optional preconfigured httpx client (tests use a MockTransport)
        """
        self.spreadsheet_id = spreadsheet_id
        self.credentials = credentials
        self.value_input_option = value_input_option
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._refresh_lock = asyncio.Lock()

    @property
    def backend_name(self) -> str:
        return "google"

    def _values_url(self, range_spec: str, action: str = "") -> str:
        encoded = quote(range_spec, safe="!:")
        return f"{SHEETS_API_BASE}/{self.spreadsheet_id}/values/{encoded}{action}"

    async def _get_headers(self, operation: str) -> dict[str, str]:
        """Get authorization headers, refreshing the token when needed."""
        async with self._refresh_lock:
            if not self.credentials.valid:
                try:
                    # google-auth refresh is blocking; keep it off the event loop
                    await asyncio.to_thread(self.credentials.refresh, GoogleAuthRequest())
                except google_auth_exceptions.GoogleAuthError as e:
                    raise BackendFailure(operation, f"Token refresh failed: {e}") from e
        return {
            "Authorization": f"Bearer {self.credentials.token}",
            "Content-Type": "application/json",
        }

    async def _make_request(
        self,
        operation: str,
        method: str,
        url: str,
        data: dict | None = None,
        params: dict | None = None,
    ) -> dict[str, Any]:
        """
        Make an authenticated API request.

        Args:
            operation: Name used in errors and logs (read, append, update, clear)
            method: HTTP method
            url: Full API URL
            data: Request body (for POST/PUT)
            params: Query parameters

        Returns:
            Decoded JSON response body

        Raises:
            BackendFailure: on transport errors and non-2xx responses
        """
        headers = await self._get_headers(operation)
        try:
            resp = await self._client.request(method, url, headers=headers, json=data, params=params)
        except httpx.HTTPError as e:
            raise BackendFailure(operation, f"Request failed: {e!s}") from e

        return self._handle_response(operation, resp)

    def _handle_response(self, operation: str, resp: httpx.Response) -> dict[str, Any]:
        """Handle API response."""
        try:
            data = resp.json()
        except ValueError:
            data = {}

        if resp.is_success:
            return data
        if resp.status_code == 401:
            message = "Authentication failed - token may be expired"
        elif resp.status_code == 403:
            message = "Permission denied - check the sheet is shared with the service account"
        elif resp.status_code == 404:
            message = "Spreadsheet not found"
        elif resp.status_code == 429:
            message = "Quota exceeded"
        else:
            error = data.get("error", {}) if isinstance(data, dict) else {}
            message = error.get("message", f"HTTP {resp.status_code}")
        raise BackendFailure(operation, message, resp.status_code)

    # =========================================================================
    # Range Operations
    # =========================================================================

    async def read_range(self, range_spec: str) -> Grid:
        data = await self._make_request("read", "GET", self._values_url(range_spec))
        values = data.get("values", [])
        return [["" if cell is None else str(cell) for cell in row] for row in values]

    async def append_rows(self, range_spec: str, rows: Grid) -> None:
        params = {
            "valueInputOption": self.value_input_option,
            "insertDataOption": "INSERT_ROWS",
        }
        data = await self._make_request(
            "append",
            "POST",
            self._values_url(range_spec, ":append"),
            data={"values": rows},
            params=params,
        )
        updated = data.get("updates", {}).get("updatedRange")
        logger.debug(f"Appended {len(rows)} row(s) to {updated or range_spec}")

    async def update_range(self, range_spec: str, rows: Grid) -> None:
        await self._make_request(
            "update",
            "PUT",
            self._values_url(range_spec),
            data={"values": rows},
            params={"valueInputOption": self.value_input_option},
        )

    async def clear_range(self, range_spec: str) -> None:
        await self._make_request("clear", "POST", self._values_url(range_spec, ":clear"), data={})

    async def aclose(self) -> None:
        await self._client.aclose()


__all__ = ["GoogleSheetsBackend", "SHEETS_SCOPES", "service_account_credentials"]
