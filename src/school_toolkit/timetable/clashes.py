"""
Module: timetable.clashes

Purpose:
    Detect instructors double-booked in the same (day, period) across
    concurrently published timetables. Detection is advisory: it never
    raises and never mutates its inputs. Enforcement lives in
    timetable.publishing.

Key Functions:
    - detect_clashes(): Grids -> ClashReport
    - find_clashes(): Grids -> set of clashing CellKeys

Key Classes:
    - Clash: One instructor booked more than once in one cell
    - ClashReport: All clashes and the flagged cells
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Optional, Set, Tuple, Union

from school_toolkit.core.models.timetable import CellKey, Identifier

from .grid import TimetableGrid

logger = logging.getLogger(__name__)

GridInput = Union[TimetableGrid, Iterable[TimetableGrid]]


@dataclass(frozen=True)
class Clash:
    """
    One instructor scheduled more than once in one cell.

    Attributes:
        instructor_id: The double-booked instructor
        cell: The (day, period) of the clash
        timetable_ids: Timetables involved, in input order (repeated
            when the same timetable holds the instructor twice)
    """

    instructor_id: str
    cell: CellKey
    timetable_ids: Tuple[Optional[Identifier], ...]

    @property
    def count(self) -> int:
        return len(self.timetable_ids)


@dataclass(frozen=True)
class ClashReport:
    """Result of clash detection."""

    clashes: Tuple[Clash, ...] = ()

    @property
    def cells(self) -> FrozenSet[CellKey]:
        return frozenset(c.cell for c in self.clashes)

    @property
    def has_clashes(self) -> bool:
        return bool(self.clashes)

    def for_instructor(self, instructor_id: str) -> List[Clash]:
        return [c for c in self.clashes if c.instructor_id == instructor_id]

    def to_dict(self) -> dict:
        """Serialize with "day:period" cell keys."""
        return {
            "cells": sorted(str(c) for c in self.cells),
            "clashes": [
                {
                    "instructor_id": c.instructor_id,
                    "cell": str(c.cell),
                    "timetable_ids": list(c.timetable_ids),
                }
                for c in self.clashes
            ],
        }


def _as_grids(grids: GridInput) -> List[TimetableGrid]:
    """Distinct grids; a repeat object or a repeat non-None timetable_id is dropped."""
    if isinstance(grids, TimetableGrid):
        return [grids]
    unique: List[TimetableGrid] = []
    seen_objects: Set[int] = set()
    seen_ids: Set[Identifier] = set()
    for grid in grids:
        if id(grid) in seen_objects or (
            grid.timetable_id is not None and grid.timetable_id in seen_ids
        ):
            logger.debug(f"Skipping repeated timetable {grid.timetable_id!r}")
            continue
        seen_objects.add(id(grid))
        if grid.timetable_id is not None:
            seen_ids.add(grid.timetable_id)
        unique.append(grid)
    return unique


def detect_clashes(grids: GridInput) -> ClashReport:
    """
    Group filled cells by (instructor, day, period) across grids.

    Entries without an instructor are ignored. A group of two or more
    entries is a clash. A grid passed twice, as the same object or under
    the same timetable_id, is counted once.

    Args:
        grids: One grid or several concurrently active grids

    Returns:
        ClashReport, clashes ordered by cell then instructor
    """
    groups: Dict[Tuple[str, CellKey], List[Optional[Identifier]]] = defaultdict(list)
    for grid in _as_grids(grids):
        for entry in grid.entries():
            if not entry.instructor_id:
                continue
            groups[(str(entry.instructor_id), entry.cell)].append(grid.timetable_id)

    clashes = tuple(
        Clash(instructor_id=instructor, cell=cell, timetable_ids=tuple(ids))
        for (instructor, cell), ids in sorted(groups.items(), key=lambda kv: (kv[0][1], kv[0][0]))
        if len(ids) >= 2
    )
    if clashes:
        logger.debug(f"Found {len(clashes)} clash(es) in {len({c.cell for c in clashes})} cell(s)")
    return ClashReport(clashes=clashes)


def find_clashes(grids: GridInput) -> Set[CellKey]:
    """
    Cells where some instructor is booked more than once.

    Example:
        >>> schedule = Schedule.with_periods(1)
        >>> a = TimetableGrid(schedule, timetable_id="S1")
        >>> b = TimetableGrid(schedule, timetable_id="S2")
        >>> a.set_entry(1, 1, TimetableEntry(1, 1, "MATH", "T1"))
        >>> b.set_entry(1, 1, TimetableEntry(1, 1, "PHY", "T1"))
        >>> find_clashes([a, b])
        {CellKey(day=1, period=1)}
    """
    return set(detect_clashes(grids).cells)
