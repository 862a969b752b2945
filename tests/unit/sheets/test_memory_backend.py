"""Tests for sheetcal/sheets/backends/memory.py

The in-memory grid stands in for Google Sheets in development and tests, so
it has to reproduce the Sheets behaviour the mapper relies on.
"""

import pytest

from sheetcal.sheets.backends.memory import InMemoryGridBackend
from sheetcal.sheets.errors import BackendFailure


SHEET = "work05_sche"


@pytest.fixture
def backend() -> InMemoryGridBackend:
    return InMemoryGridBackend(
        {
            SHEET: [
                ["id", "title", "day"],
                ["a", "A", "Mon"],
                ["b", "B", ""],
                ["c", "C", "Wed"],
            ]
        }
    )


class TestRead:
    @pytest.mark.asyncio
    async def test_trailing_empty_cells_dropped(self, backend):
        grid = await backend.read_range(SHEET)
        assert grid[2] == ["b", "B"]

    @pytest.mark.asyncio
    async def test_bounded_range(self, backend):
        assert await backend.read_range(f"{SHEET}!A2:B3") == [["a", "A"], ["b", "B"]]

    @pytest.mark.asyncio
    async def test_trailing_blank_rows_dropped(self, backend):
        await backend.clear_range(f"{SHEET}!A4:H4")
        grid = await backend.read_range(SHEET)
        assert len(grid) == 3

    @pytest.mark.asyncio
    async def test_blank_middle_row_kept(self, backend):
        await backend.clear_range(f"{SHEET}!A3:H3")
        grid = await backend.read_range(SHEET)
        assert len(grid) == 4
        assert grid[2] == []

    @pytest.mark.asyncio
    async def test_unknown_sheet(self, backend):
        with pytest.raises(BackendFailure):
            await backend.read_range("other")

    @pytest.mark.asyncio
    async def test_bad_range(self, backend):
        with pytest.raises(BackendFailure):
            await backend.read_range(f"{SHEET}!9Z")


class TestAppend:
    @pytest.mark.asyncio
    async def test_appends_after_last_data_row(self, backend):
        await backend.append_rows(SHEET, [["d", "D", "Thu"]])
        assert backend.snapshot(SHEET)[4] == ["d", "D", "Thu"]

    @pytest.mark.asyncio
    async def test_reuses_trailing_cleared_rows(self, backend):
        await backend.clear_range(f"{SHEET}!A4:H4")
        await backend.append_rows(SHEET, [["d", "D", "Thu"]])

        grid = await backend.read_range(SHEET)
        assert grid[-1] == ["d", "D", "Thu"]
        assert len(grid) == 4

    @pytest.mark.asyncio
    async def test_append_to_empty_sheet(self):
        backend = InMemoryGridBackend({SHEET: []})
        await backend.append_rows(SHEET, [["id", "title"]])
        assert await backend.read_range(SHEET) == [["id", "title"]]


class TestUpdateAndClear:
    @pytest.mark.asyncio
    async def test_update_single_row(self, backend):
        await backend.update_range(f"{SHEET}!A3:C3", [["b", "Bee", "Tue"]])
        assert backend.snapshot(SHEET)[2] == ["b", "Bee", "Tue"]

    @pytest.mark.asyncio
    async def test_update_wider_than_range_rejected(self, backend):
        with pytest.raises(BackendFailure):
            await backend.update_range(f"{SHEET}!A3:B3", [["b", "Bee", "Tue"]])

    @pytest.mark.asyncio
    async def test_clear_keeps_row_slot(self, backend):
        await backend.clear_range(f"{SHEET}!A2:H2")
        snapshot = backend.snapshot(SHEET)
        assert len(snapshot) == 4
        assert snapshot[1] == ["", "", ""]
        assert snapshot[2][0] == "b"

    @pytest.mark.asyncio
    async def test_calls_are_recorded(self, backend):
        await backend.read_range(SHEET)
        await backend.clear_range(f"{SHEET}!A2:H2")
        assert backend.calls == [("read", SHEET), ("clear", f"{SHEET}!A2:H2")]
