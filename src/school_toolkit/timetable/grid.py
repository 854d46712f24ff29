"""
Module: timetable.grid

Purpose:
    In-memory timetable grid keyed by (day, period). The grid is bounded
    by its Schedule: it never creates days or periods on the fly, and
    any access outside the schedule is an error.

Key Classes:
    - TimetableGrid: Mutable day x period grid of TimetableEntry

Used By:
    - timetable.clashes: Clash detection across grids
    - timetable.publishing: Publish gate
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Optional

from school_toolkit.core.errors import InvalidGridCoordinateError, TimetableReadOnlyError
from school_toolkit.core.models.timetable import (
    CellKey,
    Identifier,
    Schedule,
    TimetableEntry,
    TimetableStatus,
)

logger = logging.getLogger(__name__)


class TimetableGrid:
    """
    A class timetable: one optional entry per (day, period) cell.

    Writes overwrite unconditionally (last write wins). Entries are
    stored re-keyed to the cell they were written to, so an entry's
    day_of_week/period_id always match its cell.

    Example:
        >>> grid = TimetableGrid(Schedule.with_periods(1, 2))
        >>> grid.set_entry(1, 1, TimetableEntry(1, 1, "MATH", "T1"))
        >>> grid.get_entry(1, 1).subject_id
        'MATH'
        >>> grid.get_entry(1, 2) is None
        True
    """

    def __init__(
        self,
        schedule: Schedule,
        timetable_id: Optional[Identifier] = None,
        title: str = "",
        status: TimetableStatus = TimetableStatus.DRAFT,
    ):
        self.schedule = schedule
        self.timetable_id = timetable_id
        self.title = title
        self.status = TimetableStatus(status)
        self._cells: Dict[CellKey, TimetableEntry] = {}

    @classmethod
    def from_entries(
        cls,
        schedule: Schedule,
        entries: Iterable[TimetableEntry],
        **kwargs,
    ) -> TimetableGrid:
        """
        Build a grid from saved rows; later rows for a cell overwrite earlier ones.

        Raises:
            InvalidGridCoordinateError: If a row lies outside the schedule
        """
        grid = cls(schedule, **kwargs)
        # _put skips the archive check so archived timetables still load.
        for entry in entries:
            grid._put(entry.day_of_week, entry.period_id, entry)
        return grid

    # ─────────────────────────────────────────────────────────────────────
    # Cell access
    # ─────────────────────────────────────────────────────────────────────

    @property
    def is_read_only(self) -> bool:
        return self.status is TimetableStatus.ARCHIVED

    def _check_cell(self, day: int, period: int) -> CellKey:
        if not self.schedule.has_day(day):
            raise InvalidGridCoordinateError(day, period, "day not in schedule")
        if not self.schedule.has_period(period):
            raise InvalidGridCoordinateError(day, period, "period not in schedule")
        return CellKey(day, period)

    def _check_writable(self) -> None:
        if self.is_read_only:
            raise TimetableReadOnlyError(
                f"Timetable {self.timetable_id!r} is archived and cannot be modified"
            )

    def _put(self, day: int, period: int, entry: TimetableEntry) -> None:
        key = self._check_cell(day, period)
        if key in self._cells:
            logger.debug(f"Overwriting cell {key} in timetable {self.timetable_id!r}")
        self._cells[key] = entry.moved_to(day, period)

    def set_entry(self, day: int, period: int, entry: TimetableEntry) -> None:
        """
        Store an entry at (day, period), replacing any existing one.

        Raises:
            InvalidGridCoordinateError: If the cell is outside the schedule
            TimetableReadOnlyError: If the grid is archived
        """
        self._check_writable()
        self._put(day, period, entry)

    def clear_entry(self, day: int, period: int) -> None:
        """Empty a cell; clearing an empty cell is a no-op."""
        self._check_writable()
        key = self._check_cell(day, period)
        self._cells.pop(key, None)

    def get_entry(self, day: int, period: int) -> Optional[TimetableEntry]:
        key = self._check_cell(day, period)
        return self._cells.get(key)

    # ─────────────────────────────────────────────────────────────────────
    # Whole-grid views
    # ─────────────────────────────────────────────────────────────────────

    def entries(self) -> List[TimetableEntry]:
        """Filled cells ordered by day, then slot order."""
        order = {pid: i for i, pid in enumerate(self.schedule.period_ids)}
        keys = sorted(self._cells, key=lambda k: (k.day, order[k.period]))
        return [self._cells[k] for k in keys]

    def incomplete_cells(self) -> List[CellKey]:
        """Cells that have an entry missing its subject or instructor."""
        return [e.cell for e in self.entries() if not e.is_complete]

    def __iter__(self) -> Iterator[TimetableEntry]:
        return iter(self.entries())

    def __len__(self) -> int:
        return len(self._cells)

    def __contains__(self, key: object) -> bool:
        return key in self._cells

    def __repr__(self) -> str:
        return (
            f"TimetableGrid(id={self.timetable_id!r}, status={self.status.value}, "
            f"entries={len(self)})"
        )
