"""
Grid Backend Base
Purpose: Abstract base class for spreadsheet-like row stores

Defines the four range operations the event mapper relies on. Anything that
can read, append, overwrite and clear A1 ranges of string cells can back the
calendar.

Usage:
    from sheetcal.sheets.backends.base import GridBackend
    from sheetcal.sheets.backends.memory import InMemoryGridBackend

    backend = InMemoryGridBackend({"work05_sche": [["id", "title"]]})
    grid = await backend.read_range("work05_sche")
"""

from abc import ABC, abstractmethod

from sheetcal.sheets.models import Grid


class GridBackend(ABC):
    """
    Abstract base class for grid storage backends.

    Implementations raise ``BackendFailure`` for any storage-side error and
    never retry; the caller decides what a failure means.
    """

    @property
    @abstractmethod
    def backend_name(self) -> str:
        """Return the backend name (e.g., 'google', 'memory')."""
        pass

    @abstractmethod
    async def read_range(self, range_spec: str) -> Grid:
        """
        Read the cells of a range.

        Args:
            range_spec: A1 range, e.g. "work05_sche" for the whole sheet

        Returns:
            Rows of string cells. Trailing empty cells and rows may be omitted,
            so rows can be shorter than the header.
        """
        pass

    @abstractmethod
    async def append_rows(self, range_spec: str, rows: Grid) -> None:
        """
        Append rows after the last row holding data in the range.

        The backend picks the target rows; callers get no row address back.
        """
        pass

    @abstractmethod
    async def update_range(self, range_spec: str, rows: Grid) -> None:
        """Overwrite the cells of a range with the given values."""
        pass

    @abstractmethod
    async def clear_range(self, range_spec: str) -> None:
        """
        Blank every cell in a range.

        Rows are emptied, never removed, so the rows below keep their numbers.
        """
        pass

    async def aclose(self) -> None:
        """Release network clients or other resources."""
        return None


__all__ = ["GridBackend"]
