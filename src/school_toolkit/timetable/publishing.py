"""
Module: timetable.publishing

Purpose:
    Gate a timetable save/publish. Checks run in a fixed order: archived
    timetables are refused, then incomplete cells, then instructor
    clashes against the other active timetables (overridable).

Key Functions:
    - check_publishable(): Grid + other grids -> PublishDecision

Key Classes:
    - PublishDecision: Outcome with the clash report and any warning
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from school_toolkit.core.errors import (
    IncompleteTimetableError,
    TimetableClashError,
    TimetableReadOnlyError,
)

from .clashes import ClashReport, detect_clashes
from .grid import TimetableGrid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PublishDecision:
    """
    Outcome of a publish check.

    Attributes:
        allowed: Always True; blocked publishes raise instead
        report: Clash report against the other timetables
        warning: Message to show when saving with clashes, else None
    """

    allowed: bool
    report: ClashReport
    warning: Optional[str] = None


def check_publishable(
    grid: TimetableGrid,
    others: Iterable[TimetableGrid] = (),
    allow_clashes: bool = False,
) -> PublishDecision:
    """
    Decide whether a timetable may be saved/published.

    Args:
        grid: Timetable being saved
        others: Other active timetables the instructors also teach in
        allow_clashes: Save despite instructor clashes

    Returns:
        PublishDecision

    Raises:
        TimetableReadOnlyError: If grid is archived
        IncompleteTimetableError: If any entry lacks subject or instructor
        TimetableClashError: On clashes when allow_clashes is False
    """
    if grid.is_read_only:
        raise TimetableReadOnlyError(
            f"Timetable {grid.timetable_id!r} is archived and cannot be published"
        )

    incomplete = grid.incomplete_cells()
    if incomplete:
        raise IncompleteTimetableError(incomplete)

    # When re-saving, the stored copy of the grid may be among the others.
    peers = [
        g for g in others
        if g is not grid
        and (grid.timetable_id is None or g.timetable_id != grid.timetable_id)
    ]
    report = detect_clashes([grid, *peers])

    if not report.has_clashes:
        return PublishDecision(allowed=True, report=report)

    if not allow_clashes:
        raise TimetableClashError(report)

    warning = f"Saved with clashes in {len(report.cells)} cell(s)."
    logger.warning(f"Timetable {grid.timetable_id!r}: {warning}")
    return PublishDecision(allowed=True, report=report, warning=warning)
