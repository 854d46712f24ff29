"""
Tests for TimetableGrid.
"""

import pytest

from school_toolkit.core.errors import InvalidGridCoordinateError, TimetableReadOnlyError
from school_toolkit.core.models import CellKey, TimetableEntry, TimetableStatus
from school_toolkit.timetable import TimetableGrid

MON, TUE, SAT = 1, 2, 6


class TestGridAccess:
    """Tests for set/get/clear."""

    def test_set_entry_when_cell_written_twice_then_last_write_wins(self, week_schedule):
        """Writing Math/T1 then English/T2 to Mon P1 leaves only English."""
        # Arrange
        grid = TimetableGrid(week_schedule)

        # Act
        grid.set_entry(MON, 1, TimetableEntry(MON, 1, "MATH", "T1"))
        grid.set_entry(MON, 1, TimetableEntry(MON, 1, "ENG", "T2"))

        # Assert
        entry = grid.get_entry(MON, 1)
        assert (entry.subject_id, entry.instructor_id) == ("ENG", "T2")
        assert len(grid) == 1

    def test_get_entry_when_empty_cell_then_none(self, week_schedule):
        assert TimetableGrid(week_schedule).get_entry(TUE, 2) is None

    def test_set_entry_when_entry_addressed_elsewhere_then_rekeyed(self, week_schedule):
        """The stored entry always matches the cell it was written to."""
        grid = TimetableGrid(week_schedule)

        grid.set_entry(TUE, 3, TimetableEntry(MON, 1, "MATH", "T1"))

        assert grid.get_entry(TUE, 3).cell == CellKey(TUE, 3)
        assert grid.get_entry(MON, 1) is None

    def test_clear_entry_when_filled_then_empties_cell(self, week_schedule):
        grid = TimetableGrid(week_schedule)
        grid.set_entry(MON, 1, TimetableEntry(MON, 1, "MATH", "T1"))

        grid.clear_entry(MON, 1)
        grid.clear_entry(MON, 1)

        assert grid.get_entry(MON, 1) is None
        assert len(grid) == 0

    @pytest.mark.parametrize("day,period", [(SAT, 1), (MON, 4), (0, 1)])
    def test_access_when_outside_schedule_then_raises_error(self, week_schedule, day, period):
        """set, get and clear all refuse cells outside the schedule."""
        grid = TimetableGrid(week_schedule)

        with pytest.raises(InvalidGridCoordinateError, match="Invalid grid cell"):
            grid.set_entry(day, period, TimetableEntry(MON, 1, "MATH", "T1"))
        with pytest.raises(InvalidGridCoordinateError):
            grid.get_entry(day, period)
        with pytest.raises(InvalidGridCoordinateError):
            grid.clear_entry(day, period)
        assert len(grid) == 0

    def test_invalid_coordinate_error_when_caught_then_is_key_error(self, week_schedule):
        with pytest.raises(KeyError):
            TimetableGrid(week_schedule).get_entry(SAT, 1)


class TestGridViews:
    """Tests for whole-grid views."""

    def test_entries_when_filled_then_ordered_by_day_then_slot(self, week_schedule):
        grid = TimetableGrid(week_schedule)
        grid.set_entry(TUE, 1, TimetableEntry(TUE, 1, "BIO", "T3"))
        grid.set_entry(MON, 3, TimetableEntry(MON, 3, "ENG", "T2"))
        grid.set_entry(MON, 1, TimetableEntry(MON, 1, "MATH", "T1"))

        assert [str(e.cell) for e in grid] == ["1:1", "1:3", "2:1"]

    def test_incomplete_cells_when_missing_teacher_then_listed(self, week_schedule):
        grid = TimetableGrid(week_schedule)
        grid.set_entry(MON, 1, TimetableEntry(MON, 1, "MATH", "T1"))
        grid.set_entry(MON, 2, TimetableEntry(MON, 2, "ENG", None))

        assert grid.incomplete_cells() == [CellKey(MON, 2)]

    def test_from_entries_when_duplicate_rows_then_later_overwrites(self, week_schedule):
        grid = TimetableGrid.from_entries(week_schedule, [
            TimetableEntry(MON, 1, "MATH", "T1"),
            TimetableEntry(MON, 1, "PHY", "T4"),
        ], timetable_id="tt1")

        assert grid.get_entry(MON, 1).subject_id == "PHY"
        assert grid.timetable_id == "tt1"

    def test_from_entries_when_row_outside_schedule_then_raises_error(self, week_schedule):
        with pytest.raises(InvalidGridCoordinateError):
            TimetableGrid.from_entries(week_schedule, [TimetableEntry(SAT, 1, "MATH", "T1")])


class TestArchivedGrid:
    """Tests for read-only archived grids."""

    def test_set_entry_when_archived_then_raises_error(self, week_schedule):
        grid = TimetableGrid(week_schedule, status=TimetableStatus.ARCHIVED)

        with pytest.raises(TimetableReadOnlyError, match="archived"):
            grid.set_entry(MON, 1, TimetableEntry(MON, 1, "MATH", "T1"))

    def test_clear_entry_when_archived_then_raises_error(self, week_schedule):
        grid = TimetableGrid.from_entries(
            week_schedule,
            [TimetableEntry(MON, 1, "MATH", "T1")],
            status="ARCHIVED",
        )

        with pytest.raises(TimetableReadOnlyError):
            grid.clear_entry(MON, 1)
        assert grid.get_entry(MON, 1) is not None
