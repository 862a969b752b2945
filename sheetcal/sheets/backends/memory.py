"""
In-memory grid backend for local development and tests.

Mimics the parts of Sheets behaviour the mapper depends on:
- reads drop trailing empty cells in each row and trailing empty rows
- appends land after the last row that holds any value
- clears blank cells but keep the row
"""

import copy
import logging

from sheetcal.sheets.a1 import RangeSpec, parse_range
from sheetcal.sheets.backends.base import GridBackend
from sheetcal.sheets.errors import BackendFailure
from sheetcal.sheets.models import Grid

logger = logging.getLogger(__name__)


def _trim_row(row: list[str]) -> list[str]:
    end = len(row)
    while end and row[end - 1] in ("", None):
        end -= 1
    return list(row[:end])


class InMemoryGridBackend(GridBackend):
    """Dict of sheet name -> grid, addressed with A1 ranges."""

    def __init__(self, sheets: dict[str, Grid] | None = None):
        self.sheets: dict[str, Grid] = {
            name: [list(row) for row in grid] for name, grid in (sheets or {}).items()
        }
        self.calls: list[tuple[str, str]] = []

    @property
    def backend_name(self) -> str:
        return "memory"

    def snapshot(self, sheet: str) -> Grid:
        """Raw copy of a sheet, including blank rows and cells."""
        return copy.deepcopy(self.sheets.get(sheet, []))

    def _sheet(self, spec: RangeSpec, operation: str) -> Grid:
        if spec.sheet not in self.sheets:
            raise BackendFailure(operation, f"Unable to parse range: {spec.sheet}", 400)
        return self.sheets[spec.sheet]

    @staticmethod
    def _parse(range_spec: str, operation: str) -> RangeSpec:
        try:
            return parse_range(range_spec)
        except ValueError as e:
            raise BackendFailure(operation, str(e), 400) from e

    @staticmethod
    def _bounds(spec: RangeSpec, grid: Grid) -> tuple[int, int, int, int]:
        """0-based inclusive (row0, row1, col0, col1) for a range."""
        width = max((len(r) for r in grid), default=0)
        row0 = (spec.start_row or 1) - 1
        row1 = (spec.end_row - 1) if spec.end_row else max(len(grid) - 1, row0)
        col0 = (spec.start_col or 1) - 1
        col1 = (spec.end_col - 1) if spec.end_col else max(width - 1, col0)
        return row0, row1, col0, col1

    @staticmethod
    def _ensure_cell(grid: Grid, row: int, col: int) -> None:
        while len(grid) <= row:
            grid.append([])
        while len(grid[row]) <= col:
            grid[row].append("")

    async def read_range(self, range_spec: str) -> Grid:
        self.calls.append(("read", range_spec))
        spec = self._parse(range_spec, "read")
        grid = self._sheet(spec, "read")
        row0, row1, col0, col1 = self._bounds(spec, grid)

        values = []
        for row in grid[row0 : row1 + 1]:
            values.append(_trim_row(row[col0 : col1 + 1]))
        while values and not values[-1]:
            values.pop()
        return values

    async def append_rows(self, range_spec: str, rows: Grid) -> None:
        self.calls.append(("append", range_spec))
        spec = self._parse(range_spec, "append")
        grid = self._sheet(spec, "append")

        last = len(grid)
        while last and not _trim_row(grid[last - 1]):
            last -= 1
        col0 = (spec.start_col or 1) - 1
        for i, row in enumerate(rows):
            target = last + i
            for j, value in enumerate(row):
                self._ensure_cell(grid, target, col0 + j)
                grid[target][col0 + j] = value
        logger.debug(f"Appended {len(rows)} row(s) to {spec.sheet} at row {last + 1}")

    async def update_range(self, range_spec: str, rows: Grid) -> None:
        self.calls.append(("update", range_spec))
        spec = self._parse(range_spec, "update")
        grid = self._sheet(spec, "update")
        row0, row1, col0, col1 = self._bounds(spec, grid)

        if spec.end_row and len(rows) > row1 - row0 + 1:
            raise BackendFailure("update", "Requested writing beyond range rows", 400)
        for i, row in enumerate(rows):
            if spec.end_col and len(row) > col1 - col0 + 1:
                raise BackendFailure("update", "Requested writing beyond range columns", 400)
            for j, value in enumerate(row):
                self._ensure_cell(grid, row0 + i, col0 + j)
                grid[row0 + i][col0 + j] = value

    async def clear_range(self, range_spec: str) -> None:
        self.calls.append(("clear", range_spec))
        spec = self._parse(range_spec, "clear")
        grid = self._sheet(spec, "clear")
        row0, row1, col0, col1 = self._bounds(spec, grid)

        for r in range(row0, min(row1, len(grid) - 1) + 1):
            row = grid[r]
            for c in range(col0, min(col1, len(row) - 1) + 1):
                row[c] = ""


__all__ = ["InMemoryGridBackend"]
