"""
Integration test fixtures for sheetcal.

Provides fixtures specific to integration testing:
- FastAPI test clients wired to an in-memory grid
- A backend that fails every call, for the 500 paths
"""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from sheetcal.config import SheetCalConfig
from sheetcal.sheets.backends.base import GridBackend
from sheetcal.sheets.backends.memory import InMemoryGridBackend
from sheetcal.sheets.errors import BackendFailure


class FailingBackend(GridBackend):
    """Backend whose every call fails like an unreachable Sheets API."""

    @property
    def backend_name(self) -> str:
        return "failing"

    async def read_range(self, range_spec):
        raise BackendFailure("read", "Request failed: connection refused")

    async def append_rows(self, range_spec, rows):
        raise BackendFailure("append", "Request failed: connection refused")

    async def update_range(self, range_spec, rows):
        raise BackendFailure("update", "Request failed: connection refused")

    async def clear_range(self, range_spec):
        raise BackendFailure("clear", "Request failed: connection refused")


# ─────────────────────────────────────────────────────────────────────────────
# API Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def api_config() -> SheetCalConfig:
    return SheetCalConfig(sheets={"backend": "memory", "sheet_name": "work05_sche"})


def _client(config: SheetCalConfig, backend: GridBackend) -> Generator[TestClient, None, None]:
    from sheetcal.api.main import create_app

    app = create_app(config=config, backend=backend)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def test_client(api_config, memory_backend) -> Generator[TestClient, None, None]:
    """Test client over the shared sample grid (t1, t2, t3)."""
    yield from _client(api_config, memory_backend)


@pytest.fixture
def empty_client(api_config, header) -> Generator[TestClient, None, None]:
    """Test client over a sheet holding only the header row."""
    yield from _client(api_config, InMemoryGridBackend({"work05_sche": [header]}))


@pytest.fixture
def failing_client(api_config) -> Generator[TestClient, None, None]:
    yield from _client(api_config, FailingBackend())
