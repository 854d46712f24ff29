"""
Module: scores

Purpose:
    Provides the SubjectScore dataclass - one student's awarded and
    possible marks for one subject in one grading session. This is the
    boundary where malformed upstream rows are rejected.

Key Functions:
    - SubjectScore.percentage: Calculated, never stored
    - SubjectScore.combine(scores): Merge several sittings of a subject

Dependencies:
    - dataclasses (std)
    - math (std)

Used By:
    - grading.report: Report card building
    - core.utils.serialization: Row conversion
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List

from ..errors import InvalidScoreError


@dataclass(frozen=True, slots=True)
class SubjectScore:
    """
    Awarded and possible marks for one student in one subject.

    Attributes:
        subject_id: Subject identifier
        student_id: Student identifier (registration id)
        total_awarded: Sum of marks the student received
        total_possible: Sum of maximum marks available

    Invariants:
        - 0 <= total_awarded <= total_possible
        - both totals are finite

    Example:
        >>> s = SubjectScore("MATH", "S001", total_awarded=45, total_possible=50)
        >>> s.percentage
        90.0
    """

    subject_id: str
    student_id: str
    total_awarded: float
    total_possible: float

    def __post_init__(self) -> None:
        """Validate totals on construction."""
        for name in ("total_awarded", "total_possible"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidScoreError(f"{name} must be a number: {value!r}")
            if not math.isfinite(value):
                raise InvalidScoreError(f"{name} must be finite: {value}")
        if self.total_possible < 0:
            raise InvalidScoreError(
                f"total_possible cannot be negative: {self.total_possible} "
                f"(student={self.student_id}, subject={self.subject_id})"
            )
        if self.total_awarded < 0:
            raise InvalidScoreError(
                f"total_awarded cannot be negative: {self.total_awarded} "
                f"(student={self.student_id}, subject={self.subject_id})"
            )
        if self.total_awarded > self.total_possible:
            raise InvalidScoreError(
                f"total_awarded ({self.total_awarded}) exceeds total_possible "
                f"({self.total_possible}) (student={self.student_id}, subject={self.subject_id})"
            )

    @property
    def percentage(self) -> float:
        """Percentage of possible marks awarded, 0 when nothing was possible."""
        if self.total_possible > 0:
            return self.total_awarded / self.total_possible * 100
        return 0.0

    @property
    def is_graded(self) -> bool:
        """True if any marks were available for this subject."""
        return self.total_possible > 0

    @classmethod
    def combine(cls, scores: Iterable[SubjectScore]) -> SubjectScore:
        """
        Combine several sittings of the same subject into one score.

        Sittings with nothing possible are skipped, so an unmarked
        mid-term exam does not drag the term percentage down.

        Args:
            scores: Scores for one student and one subject

        Returns:
            SubjectScore with summed totals

        Raises:
            ValueError: If scores is empty or mixes students/subjects
        """
        items: List[SubjectScore] = list(scores)
        if not items:
            raise ValueError("Cannot combine an empty list of scores")

        first = items[0]
        for s in items[1:]:
            if s.student_id != first.student_id or s.subject_id != first.subject_id:
                raise ValueError(
                    f"Cannot combine scores for different student/subject: "
                    f"({first.student_id}, {first.subject_id}) vs ({s.student_id}, {s.subject_id})"
                )

        valid = [s for s in items if s.is_graded]
        return cls(
            subject_id=first.subject_id,
            student_id=first.student_id,
            total_awarded=sum(s.total_awarded for s in valid),
            total_possible=sum(s.total_possible for s in valid),
        )

    def __repr__(self) -> str:
        return (
            f"SubjectScore({self.student_id!r}, {self.subject_id!r}, "
            f"{self.total_awarded}/{self.total_possible})"
        )
