"""
Module: grading.aggregator

Purpose:
    Reduce a student's subject grades to an aggregate score and a
    classification (division).

Key Functions:
    - aggregate(): Best-of lowest weights -> AggregateResult
    - apply_core_penalty(): Worsen the division when all core subjects fail
    - aggregate_student(): Both steps, producing a StudentAggregate

Key Classes:
    - AggregateResult: aggregate score, classification, counted grades

Invariants:
    - Lower weight is better, so the "best" subjects are the lowest weights
    - Ties at the selection boundary keep input order (first seen wins)
    - Fewer grades than best_of aggregates over what is available
    - Inputs are never mutated

Used By:
    - grading.report: Report card building
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

from school_toolkit.core.models.grades import (
    ClassificationScale,
    StudentAggregate,
    SubjectGrade,
)

from .schemes import GradingScheme, default_scheme

logger = logging.getLogger(__name__)

# (subject_id, weight) pairs are accepted alongside SubjectGrade objects.
GradeInput = Union[SubjectGrade, Tuple[str, int]]


@dataclass(frozen=True)
class AggregateResult:
    """
    Outcome of aggregating subject grades.

    Attributes:
        aggregate_score: Sum of the counted weights
        classification: Classification for aggregate_score
        counted: (subject_id, weight) pairs that were summed, best first
    """

    aggregate_score: int
    classification: str
    counted: Tuple[Tuple[str, int], ...] = ()


def _as_pair(grade: GradeInput) -> Tuple[str, int]:
    if isinstance(grade, SubjectGrade):
        return (grade.subject_id, grade.weight)
    subject_id, weight = grade
    return (subject_id, weight)


def aggregate(
    subject_grades: Sequence[GradeInput],
    best_of: int = 4,
    classification_scale: Optional[ClassificationScale] = None,
) -> AggregateResult:
    """
    Sum the best_of lowest weights and classify the total.

    Args:
        subject_grades: SubjectGrade objects or (subject_id, weight) pairs
        best_of: Number of subjects counted
        classification_scale: Division table, default scheme's if None

    Returns:
        AggregateResult

    Raises:
        ValueError: If best_of is not positive

    Example:
        >>> aggregate([("A", 1), ("B", 2), ("C", 3), ("D", 4), ("E", 9)]).aggregate_score
        10
    """
    if best_of < 1:
        raise ValueError(f"best_of must be positive: {best_of}")
    if classification_scale is None:
        classification_scale = default_scheme().classification_scale

    pairs = [_as_pair(g) for g in subject_grades]
    # sorted() is stable, so equal weights keep input order
    counted = tuple(sorted(pairs, key=lambda p: p[1])[:best_of])
    total = sum(weight for _, weight in counted)

    if len(pairs) < best_of:
        logger.debug(f"Only {len(pairs)} graded subject(s); aggregating all of them (best_of={best_of})")

    return AggregateResult(
        aggregate_score=total,
        classification=classification_scale.classify(total),
        counted=counted,
    )


def apply_core_penalty(
    classification: str,
    subject_grades: Sequence[SubjectGrade],
    scheme: Optional[GradingScheme] = None,
) -> str:
    """
    Worsen a classification by one band when every core subject failed.

    A core subject is matched by a case-insensitive substring of its
    name ("math" matches "Mathematics"). The penalty applies only if
    each configured core subject is present and graded with the scale's
    worst symbol.

    Args:
        classification: Classification before the penalty
        subject_grades: The student's graded subjects (with names)
        scheme: Scheme providing core subjects and scales

    Returns:
        The classification, possibly one band worse
    """
    if scheme is None:
        scheme = default_scheme()
    if not scheme.core_subjects:
        return classification

    worst = scheme.grade_scale.worst_symbol
    for fragment in scheme.core_subjects:
        match = next(
            (g for g in subject_grades if fragment in g.subject_name.lower()),
            None,
        )
        if match is None or match.symbol != worst:
            return classification

    worsened = scheme.classification_scale.worsen(classification)
    logger.debug(f"Core subjects all {worst}: {classification} -> {worsened}")
    return worsened


def aggregate_student(
    student_id: str,
    subject_grades: Sequence[SubjectGrade],
    scheme: Optional[GradingScheme] = None,
    best_of: Optional[int] = None,
    core_penalty: bool = True,
) -> StudentAggregate:
    """
    Aggregate one student's grades under a scheme, including the penalty.

    Args:
        student_id: Student identifier
        subject_grades: Graded subjects in display order
        scheme: Grading scheme, default if None
        best_of: Overrides the scheme's best_of when given
        core_penalty: Apply apply_core_penalty() to the classification

    Returns:
        StudentAggregate
    """
    if scheme is None:
        scheme = default_scheme()
    result = aggregate(
        subject_grades,
        best_of=best_of if best_of is not None else scheme.best_of,
        classification_scale=scheme.classification_scale,
    )
    classification = result.classification
    if core_penalty:
        classification = apply_core_penalty(classification, subject_grades, scheme)
    return StudentAggregate(
        student_id=student_id,
        subject_grades=tuple(subject_grades),
        aggregate_score=result.aggregate_score,
        classification=classification,
    )
