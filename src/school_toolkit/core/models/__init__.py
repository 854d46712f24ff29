"""
Core Models Package

Immutable, validated data models shared by grading, marks and timetable.

All models in this package are frozen dataclasses. Derived values such
as percentages are calculated on access, never stored, so a model can
never disagree with itself.
"""

from .scores import SubjectScore
from .grades import (
    GradeBand,
    GradeScale,
    ResolvedGrade,
    ClassificationBand,
    ClassificationScale,
    SubjectGrade,
    StudentAggregate,
)
from .ranking import RankedEntry
from .timetable import (
    CellKey,
    Schedule,
    TimeSlot,
    TimetableEntry,
    TimetableStatus,
)

__all__ = [
    "SubjectScore",
    "GradeBand",
    "GradeScale",
    "ResolvedGrade",
    "ClassificationBand",
    "ClassificationScale",
    "SubjectGrade",
    "StudentAggregate",
    "RankedEntry",
    "CellKey",
    "Schedule",
    "TimeSlot",
    "TimetableEntry",
    "TimetableStatus",
]
