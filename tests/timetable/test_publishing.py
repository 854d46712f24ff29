"""
Tests for the timetable publish gate.
"""

import pytest

from school_toolkit.core.errors import (
    IncompleteTimetableError,
    TimetableClashError,
    TimetableReadOnlyError,
)
from school_toolkit.core.models import CellKey, TimetableEntry, TimetableStatus
from school_toolkit.timetable import TimetableGrid, check_publishable


@pytest.fixture
def other_class(week_schedule):
    return TimetableGrid.from_entries(
        week_schedule, [TimetableEntry(1, 1, "PHY", "X")], timetable_id="S2"
    )


class TestCheckPublishable:
    """Tests for check_publishable()."""

    def test_check_when_clean_then_allowed_without_warning(self, week_schedule, other_class):
        grid = TimetableGrid.from_entries(
            week_schedule, [TimetableEntry(1, 2, "MATH", "X")], timetable_id="S1"
        )

        decision = check_publishable(grid, [other_class])

        assert decision.allowed is True
        assert decision.warning is None
        assert decision.report.has_clashes is False

    def test_check_when_clash_then_raises_with_report(self, week_schedule, other_class):
        """Clashes block publishing unless overridden."""
        grid = TimetableGrid.from_entries(
            week_schedule, [TimetableEntry(1, 1, "MATH", "X")], timetable_id="S1"
        )

        with pytest.raises(TimetableClashError, match="1 cell") as exc_info:
            check_publishable(grid, [other_class])

        assert exc_info.value.report.cells == {CellKey(1, 1)}

    def test_check_when_clash_allowed_then_warns(self, week_schedule, other_class, caplog):
        grid = TimetableGrid.from_entries(
            week_schedule, [TimetableEntry(1, 1, "MATH", "X")], timetable_id="S1"
        )

        with caplog.at_level("WARNING"):
            decision = check_publishable(grid, [other_class], allow_clashes=True)

        assert decision.allowed is True
        assert decision.warning == "Saved with clashes in 1 cell(s)."
        assert "Saved with clashes" in caplog.text

    def test_check_when_incomplete_then_always_blocks(self, week_schedule):
        """Incomplete cells block even when clashes are allowed."""
        grid = TimetableGrid.from_entries(week_schedule, [
            TimetableEntry(1, 1, "MATH", "X"),
            TimetableEntry(1, 2, "ENG", None),
            TimetableEntry(2, 2, None, "Y"),
        ])

        with pytest.raises(IncompleteTimetableError) as exc_info:
            check_publishable(grid, allow_clashes=True)

        assert str(exc_info.value) == "Please fill both Subject and Teacher for 2 cell(s)."
        assert exc_info.value.cells == (CellKey(1, 2), CellKey(2, 2))

    def test_check_when_archived_then_raises_read_only(self, week_schedule):
        grid = TimetableGrid(week_schedule, status=TimetableStatus.ARCHIVED)

        with pytest.raises(TimetableReadOnlyError):
            check_publishable(grid)

    def test_check_when_grid_among_others_then_not_self_clash(self, week_schedule, other_class):
        """Re-saving a timetable that is already active does not clash with itself."""
        grid = TimetableGrid.from_entries(
            week_schedule, [TimetableEntry(1, 3, "MATH", "X")], timetable_id="S1"
        )

        decision = check_publishable(grid, [grid, other_class])

        assert decision.report.has_clashes is False

    def test_check_when_saved_copy_among_others_then_not_self_clash(self, week_schedule, other_class):
        """A separately loaded copy with the same timetable_id is the grid itself."""
        rows = [TimetableEntry(1, 3, "MATH", "X"), TimetableEntry(2, 1, "ENG", "Y")]
        grid = TimetableGrid.from_entries(week_schedule, rows, timetable_id="S1")
        stored = TimetableGrid.from_entries(week_schedule, rows, timetable_id="S1")

        decision = check_publishable(grid, [stored, other_class])

        assert decision.allowed is True
        assert decision.report.has_clashes is False

    def test_check_when_unsaved_grid_and_unsaved_peer_then_still_clash(self, week_schedule):
        """Grids without an id are only matched by identity."""
        grid = TimetableGrid.from_entries(week_schedule, [TimetableEntry(1, 1, "MATH", "X")])
        peer = TimetableGrid.from_entries(week_schedule, [TimetableEntry(1, 1, "PHY", "X")])

        with pytest.raises(TimetableClashError):
            check_publishable(grid, [peer])
