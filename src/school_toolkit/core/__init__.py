"""
School Toolkit Core Package

Shared data models, error taxonomy, schema validation and serialization.
These models are the single source of truth for the grading, marks and
timetable packages.

Rows from the data-fetch layer are validated (``core.schemas``) and then
converted to frozen models (``core.utils.serialization``). Nothing past
that boundary re-checks invariants.
"""

from .errors import (
    SchoolToolkitError,
    InvalidScoreError,
    InvalidGridCoordinateError,
)
from .models import SubjectScore, TimetableEntry, CellKey, Schedule

__all__ = [
    "SchoolToolkitError",
    "InvalidScoreError",
    "InvalidGridCoordinateError",
    "SubjectScore",
    "TimetableEntry",
    "CellKey",
    "Schedule",
]
