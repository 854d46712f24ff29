"""
Module: ranking (models)

Purpose:
    Value types for cohort ranking results.

Key Classes:
    - RankedEntry: (id, total_score, position) row of a CohortRanking

Used By:
    - grading.ranking
    - marks.matrix, grading.report
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable


@dataclass(frozen=True, slots=True)
class RankedEntry:
    """
    One row of a cohort ranking.

    Attributes:
        id: Ranked item identifier (usually a student id)
        total_score: Score the ranking is ordered by
        position: Competition-style position (ties share, gaps follow)
    """

    id: Hashable
    total_score: float
    position: int

    def __post_init__(self) -> None:
        if self.position < 1:
            raise ValueError(f"Position must be >= 1: {self.position}")
