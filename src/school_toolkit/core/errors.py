"""
Module: core.errors

Purpose:
    Error taxonomy shared by every school_toolkit package. All errors are
    programmer errors (malformed upstream rows, bad grid coordinates,
    misconfigured schemes) and fail the single calling operation.

Key Classes:
    - SchoolToolkitError: Base class for all library errors
    - InvalidScoreError: Score violates 0 <= awarded <= possible
    - InvalidGridCoordinateError: Day/period outside the configured schedule
    - TimetableReadOnlyError: Mutation of an archived timetable
    - IncompleteTimetableError: Cells missing a subject or instructor
    - TimetableClashError: Publish blocked by instructor clashes

Used By:
    - core.models.scores
    - timetable.grid, timetable.publishing
    - grading.bands
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from school_toolkit.core.models.timetable import CellKey
    from school_toolkit.timetable.clashes import ClashReport


class SchoolToolkitError(Exception):
    """Base class for all school_toolkit errors."""


class InvalidScoreError(SchoolToolkitError, ValueError):
    """Raised when a score or percentage is outside its valid domain."""


class InvalidGridCoordinateError(SchoolToolkitError, KeyError):
    """Raised when a grid is accessed outside its configured schedule."""

    def __init__(self, day: int, period: int, reason: str):
        super().__init__(f"Invalid grid cell ({day}, {period}): {reason}")
        self.day = day
        self.period = period

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0])


class TimetableReadOnlyError(SchoolToolkitError):
    """Raised when an archived timetable is modified or published."""


class IncompleteTimetableError(SchoolToolkitError):
    """Raised when a timetable has cells without a subject or instructor."""

    def __init__(self, cells: Sequence[CellKey]):
        super().__init__(
            f"Please fill both Subject and Teacher for {len(cells)} cell(s)."
        )
        self.cells = tuple(cells)


class TimetableClashError(SchoolToolkitError):
    """Raised when instructor clashes block a publish without override."""

    def __init__(self, report: ClashReport):
        super().__init__(
            f"Teacher clashes detected in {len(report.cells)} cell(s); "
            "resolve them or save with allow_clashes=True."
        )
        self.report = report
