"""
Module: timetable (models)

Purpose:
    Immutable building blocks of a class timetable: the configured
    schedule (days and time slots), individual entries, and the cell key
    that addresses one (day, period) slot.

Key Classes:
    - TimeSlot: One period in the school day
    - Schedule: Configured days and ordered time slots
    - TimetableEntry: Subject + instructor assigned to one cell
    - CellKey: (day, period) address with a "day:period" string form
    - TimetableStatus: DRAFT / PUBLISHED / ARCHIVED

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - timetable.grid, timetable.clashes, timetable.publishing
    - core.utils.serialization
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union

Identifier = Union[int, str]

DAY_NAMES = {
    1: "Monday",
    2: "Tuesday",
    3: "Wednesday",
    4: "Thursday",
    5: "Friday",
    6: "Saturday",
    7: "Sunday",
}

WEEKDAYS: Tuple[int, ...] = (1, 2, 3, 4, 5)


class TimetableStatus(str, Enum):
    """Lifecycle state of a timetable."""

    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"


@dataclass(frozen=True, order=True)
class CellKey:
    """
    Address of one timetable cell.

    Example:
        >>> str(CellKey(1, 3))
        '1:3'
        >>> CellKey.parse("1:3")
        CellKey(day=1, period=3)
    """

    day: int
    period: int

    def __str__(self) -> str:
        return f"{self.day}:{self.period}"

    @classmethod
    def parse(cls, text: str) -> CellKey:
        day, _, period = text.partition(":")
        try:
            return cls(int(day), int(period))
        except ValueError as e:
            raise ValueError(f"Invalid cell key: {text!r}") from e


@dataclass(frozen=True, slots=True)
class TimeSlot:
    """
    One period of the school day.

    Attributes:
        id: Period identifier used as the grid column key
        name: Display name ("P1", "Break", ...)
        start_time: "HH:MM" start, informational
        end_time: "HH:MM" end, informational
        sort_order: Position within the day
    """

    id: int
    name: str = ""
    start_time: str = ""
    end_time: str = ""
    sort_order: int = 0


@dataclass(frozen=True)
class Schedule:
    """
    The configured days and periods a timetable grid may use.

    Attributes:
        slots: Time slots, stored ordered by (sort_order, id)
        days: Allowed day_of_week values (ISO weekday numbers)

    Invariants:
        - at least one slot and one day
        - slot ids are unique
        - days are within 1..7 and unique

    Example:
        >>> schedule = Schedule.with_periods(1, 2, 3)
        >>> schedule.has_cell(1, 2)
        True
        >>> schedule.has_cell(6, 2)
        False
    """

    slots: Tuple[TimeSlot, ...]
    days: Tuple[int, ...] = WEEKDAYS

    def __post_init__(self) -> None:
        """Validate and normalise ordering on construction."""
        slots = tuple(sorted(self.slots, key=lambda s: (s.sort_order, s.id)))
        object.__setattr__(self, "slots", slots)
        object.__setattr__(self, "days", tuple(sorted(self.days)))

        if not self.slots:
            raise ValueError("Schedule needs at least one time slot")
        if not self.days:
            raise ValueError("Schedule needs at least one day")
        ids = [s.id for s in self.slots]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Duplicate time slot ids: {ids}")
        if len(set(self.days)) != len(self.days):
            raise ValueError(f"Duplicate days: {self.days}")
        for day in self.days:
            if day not in DAY_NAMES:
                raise ValueError(f"Day must be within 1..7: {day}")

    @classmethod
    def with_periods(cls, *period_ids: int, days: Tuple[int, ...] = WEEKDAYS) -> Schedule:
        """Build a schedule from bare period ids, ordered as given."""
        slots = tuple(
            TimeSlot(id=pid, name=f"P{pid}", sort_order=i)
            for i, pid in enumerate(period_ids)
        )
        return cls(slots=slots, days=days)

    @property
    def period_ids(self) -> Tuple[int, ...]:
        return tuple(s.id for s in self.slots)

    def has_day(self, day: int) -> bool:
        return day in self.days

    def has_period(self, period: int) -> bool:
        return period in self.period_ids

    def has_cell(self, day: int, period: int) -> bool:
        return self.has_day(day) and self.has_period(period)

    def cells(self) -> Tuple[CellKey, ...]:
        """All cells, row by row (period) then day."""
        return tuple(CellKey(d, s.id) for s in self.slots for d in self.days)


@dataclass(frozen=True)
class TimetableEntry:
    """
    Assignment of a subject and instructor to one (day, period) cell.

    Attributes:
        day_of_week: ISO weekday (1 = Monday)
        period_id: TimeSlot id
        subject_id: Subject taught, None while the cell is being filled
        instructor_id: Instructor user id, None/"" while being filled
        note: Free text shown in the cell
        entry_id: Persistent id, None before the row is saved

    Example:
        >>> e = TimetableEntry(1, 1, subject_id="MATH", instructor_id="T1")
        >>> e.cell
        CellKey(day=1, period=1)
        >>> e.is_complete
        True
    """

    day_of_week: int
    period_id: int
    subject_id: Optional[Identifier] = None
    instructor_id: Optional[str] = None
    note: Optional[str] = None
    entry_id: Optional[str] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.day_of_week not in DAY_NAMES:
            raise ValueError(f"day_of_week must be within 1..7: {self.day_of_week}")

    @property
    def cell(self) -> CellKey:
        return CellKey(self.day_of_week, self.period_id)

    @property
    def is_complete(self) -> bool:
        """Both subject and instructor are filled in."""
        return bool(self.subject_id) and bool(self.instructor_id)

    def moved_to(self, day: int, period: int) -> TimetableEntry:
        """Copy of this entry addressed to another cell."""
        if (day, period) == (self.day_of_week, self.period_id):
            return self
        return TimetableEntry(
            day_of_week=day,
            period_id=period,
            subject_id=self.subject_id,
            instructor_id=self.instructor_id,
            note=self.note,
            entry_id=self.entry_id,
        )
