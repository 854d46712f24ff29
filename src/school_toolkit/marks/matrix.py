"""
Module: marks.matrix

Purpose:
    Pivot question-level results into a student x question matrix and
    derive the figures shown on an assessment results sheet: totals and
    percentages, class averages per question, below-average cells,
    positions, and per-topic top/bottom students.

Key Functions:
    - build_matrix(): Students, questions and results -> MarksMatrix

Key Classes:
    - Question: One assessment question with its max score and topic
    - QuestionResult: One student's score on one question
    - MarksMatrix: The pivoted matrix and its derived figures
    - TopicInsight: Per-topic average and top/bottom students

Dependencies:
    - grading.ranking: Competition-ranking positions
    - common.thresholds: Top/bottom list sizes

Used By:
    - Results sheet rendering (outside this library)
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Hashable, Iterable, List, Mapping, Optional, Sequence, Tuple

from school_toolkit.common.thresholds import MARKS_MATRIX_THRESHOLDS
from school_toolkit.core.errors import InvalidScoreError
from school_toolkit.grading.ranking import positions as rank_positions

logger = logging.getLogger(__name__)


def _check_mark(name: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidScoreError(f"{name} must be a number: {value!r}")
    if not math.isfinite(value) or value < 0:
        raise InvalidScoreError(f"{name} must be finite and non-negative: {value}")


@dataclass(frozen=True, slots=True)
class Question:
    """
    One question of an assessment.

    Attributes:
        id: Question identifier
        max_score: Maximum marks for the question
        topic_id: Syllabus topic, None when untagged
        subject_id: Subject the assessment belongs to
    """

    id: Hashable
    max_score: float
    topic_id: Optional[Hashable] = None
    subject_id: Optional[Hashable] = None

    def __post_init__(self) -> None:
        _check_mark("max_score", self.max_score)


@dataclass(frozen=True, slots=True)
class QuestionResult:
    """One student's score on one question."""

    student_id: str
    question_id: Hashable
    score: float

    def __post_init__(self) -> None:
        _check_mark("score", self.score)


@dataclass(frozen=True, slots=True)
class StudentTotal:
    """A student's matrix row summary."""

    student_id: str
    total: float
    percentage: float
    position: int


@dataclass(frozen=True)
class TopicInsight:
    """
    How a class performed on one topic.

    Attributes:
        topic_id: Topic identifier
        topic_name: Display name ("Topic #<id>" when unnamed)
        avg_pct: Mean student percentage on the topic
        top: (student_id, pct) best first
        bottom: (student_id, pct) worst first
    """

    topic_id: Hashable
    topic_name: str
    avg_pct: float
    top: Tuple[Tuple[str, float], ...] = ()
    bottom: Tuple[Tuple[str, float], ...] = ()


@dataclass(frozen=True)
class MarksMatrix:
    """
    Students x questions score matrix.

    Rows follow the student order given, columns the question order.
    A student with no recorded score for a question counts as 0 in
    totals but does not contribute to that question's class average.

    Example:
        >>> qs = [Question(1, 10), Question(2, 10)]
        >>> m = build_matrix(["S1", "S2"], qs, [
        ...     QuestionResult("S1", 1, 8), QuestionResult("S2", 1, 4),
        ... ])
        >>> m.question_average(1)
        6.0
        >>> m.is_below_average("S2", 1)
        True
    """

    students: Tuple[str, ...]
    questions: Tuple[Question, ...]
    scores: Mapping[Tuple[str, Hashable], float] = field(default_factory=dict)

    @property
    def total_possible(self) -> float:
        return sum(q.max_score for q in self.questions)

    def score(self, student_id: str, question_id: Hashable) -> Optional[float]:
        """Recorded score, None when the student has none for the question."""
        return self.scores.get((student_id, question_id))

    def student_total(self, student_id: str) -> Tuple[float, float]:
        """(total, percentage) over all questions, missing scores as 0."""
        total = sum(self.scores.get((student_id, q.id), 0) for q in self.questions)
        possible = self.total_possible
        pct = total / possible * 100 if possible > 0 else 0.0
        return total, pct

    def question_average(self, question_id: Hashable) -> float:
        """Mean of the recorded scores for a question, 0 when none."""
        recorded = [
            self.scores[(sid, question_id)]
            for sid in self.students
            if (sid, question_id) in self.scores
        ]
        return sum(recorded) / len(recorded) if recorded else 0.0

    def question_averages(self) -> Dict[Hashable, float]:
        return {q.id: self.question_average(q.id) for q in self.questions}

    def is_below_average(self, student_id: str, question_id: Hashable) -> bool:
        """True when the class average is positive and the student is below it."""
        avg = self.question_average(question_id)
        return avg > 0 and self.scores.get((student_id, question_id), 0) < avg

    def positions(self) -> Dict[str, int]:
        return rank_positions((sid, self.student_total(sid)[0]) for sid in self.students)

    def totals(self) -> List[StudentTotal]:
        """Row summaries in student order."""
        pos = self.positions()
        rows = []
        for sid in self.students:
            total, pct = self.student_total(sid)
            rows.append(StudentTotal(sid, total, pct, pos[sid]))
        return rows

    def topic_insights(
        self,
        topic_names: Optional[Mapping[Hashable, str]] = None,
        search: str = "",
    ) -> List[TopicInsight]:
        """
        Per-topic class performance, best average first.

        Only students with at least one recorded result take part. Within
        a topic, a participating student's missing scores count as 0.
        Untagged questions are left out.

        Args:
            topic_names: topic_id -> display name
            search: Case-insensitive filter on topic name

        Returns:
            TopicInsight list sorted by avg_pct descending
        """
        topic_names = topic_names or {}
        t = MARKS_MATRIX_THRESHOLDS
        participants = [
            sid for sid in self.students
            if any((sid, q.id) in self.scores for q in self.questions)
        ]

        # topic_id -> student_id -> [scored, possible]
        sums: Dict[Hashable, Dict[str, List[float]]] = {}
        for sid in participants:
            for q in self.questions:
                if q.topic_id is None:
                    continue
                cur = sums.setdefault(q.topic_id, {}).setdefault(sid, [0.0, 0.0])
                cur[0] += self.scores.get((sid, q.id), 0)
                cur[1] += q.max_score

        insights = []
        for topic_id, per_student in sums.items():
            rows = [
                (sid, s / m * 100 if m > 0 else 0.0)
                for sid, (s, m) in per_student.items()
            ]
            rows.sort(key=lambda r: r[1], reverse=True)
            avg_pct = sum(pct for _, pct in rows) / len(rows) if rows else 0.0
            insights.append(
                TopicInsight(
                    topic_id=topic_id,
                    topic_name=topic_names.get(topic_id, f"Topic #{topic_id}"),
                    avg_pct=avg_pct,
                    top=tuple(rows[: t.topic_top_n]),
                    bottom=tuple(reversed(rows[-t.topic_bottom_n:])),
                )
            )

        needle = search.strip().lower()
        if needle:
            insights = [i for i in insights if needle in i.topic_name.lower()]

        insights.sort(key=lambda i: i.avg_pct, reverse=True)
        return insights


def build_matrix(
    students: Iterable[str],
    questions: Sequence[Question],
    results: Iterable[QuestionResult],
) -> MarksMatrix:
    """
    Pivot results into a MarksMatrix.

    Results for unknown questions or students are ignored. When a
    student has several results for one question the last one wins.

    Args:
        students: Student ids in display order
        questions: Questions in display order
        results: Recorded question results

    Returns:
        MarksMatrix
    """
    student_ids = tuple(dict.fromkeys(students))
    question_ids = {q.id for q in questions}
    enrolled = set(student_ids)

    scores: Dict[Tuple[str, Hashable], float] = {}
    skipped = 0
    for r in results:
        if r.question_id not in question_ids or r.student_id not in enrolled:
            logger.debug(f"Ignoring result for student {r.student_id}, question {r.question_id}")
            skipped += 1
            continue
        scores[(r.student_id, r.question_id)] = r.score

    if skipped:
        logger.debug(f"Skipped {skipped} result(s) outside the matrix")
    return MarksMatrix(students=student_ids, questions=tuple(questions), scores=scores)
