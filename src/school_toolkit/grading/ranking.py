"""
Module: grading.ranking

Purpose:
    Competition ranking ("1, 1, 3") of a cohort by total score.

Key Functions:
    - rank(): (id, total) pairs -> ordered list of RankedEntry
    - positions(): (id, total) pairs -> {id: position}

Used By:
    - grading.report: Class position on the report card
    - marks.matrix: Positions column
"""

from __future__ import annotations

from typing import Dict, Hashable, Iterable, List, Tuple

from school_toolkit.core.models.ranking import RankedEntry


def rank(entries: Iterable[Tuple[Hashable, float]]) -> List[RankedEntry]:
    """
    Rank entries by descending total with standard competition ranking.

    Entries with equal totals share a position and keep their input
    order; the next lower total takes its 1-based index.

    Args:
        entries: (id, total_score) pairs

    Returns:
        RankedEntry list, best first

    Example:
        >>> [(r.id, r.position) for r in rank([("A", 10), ("B", 10), ("C", 5)])]
        [('A', 1), ('B', 1), ('C', 3)]
    """
    ordered = sorted(entries, key=lambda e: e[1], reverse=True)

    ranked: List[RankedEntry] = []
    position = 1
    for index, (entry_id, total) in enumerate(ordered):
        if index > 0 and total < ordered[index - 1][1]:
            position = index + 1
        ranked.append(RankedEntry(id=entry_id, total_score=total, position=position))
    return ranked


def positions(entries: Iterable[Tuple[Hashable, float]]) -> Dict[Hashable, int]:
    """Map each id to its competition-ranking position."""
    return {r.id: r.position for r in rank(entries)}
