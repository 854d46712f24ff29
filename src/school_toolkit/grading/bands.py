"""
Module: grading.bands

Purpose:
    Resolve percentages to grade bands. Pure functions over an injected
    GradeScale; the default scale comes from the default grading scheme.

Key Functions:
    - resolve_grade(): Percentage -> ResolvedGrade
    - grade_subject(): SubjectScore -> SubjectGrade
    - grade_remark(): Grade weight -> short teacher remark

Dependencies:
    - grading.schemes: Default scale lookup
    - common.thresholds: Remark cut-offs

Used By:
    - grading.report: Report card building
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from school_toolkit.common.thresholds import SUBJECT_REMARK_THRESHOLDS
from school_toolkit.core.errors import InvalidScoreError
from school_toolkit.core.models.grades import GradeScale, ResolvedGrade, SubjectGrade
from school_toolkit.core.models.scores import SubjectScore

from .schemes import default_scheme

logger = logging.getLogger(__name__)


def resolve_grade(percentage: float, scale: Optional[GradeScale] = None) -> ResolvedGrade:
    """
    Resolve a percentage to exactly one grade band.

    Bands are checked highest bound first and the first band whose lower
    bound the percentage meets wins; anything below every band gets the
    scale's fail grade.

    Args:
        percentage: Finite percentage; clamped to [0, 100]
        scale: Grade table, default scheme's table if None

    Returns:
        ResolvedGrade with symbol, weight and label

    Raises:
        InvalidScoreError: If percentage is NaN, infinite or not a number

    Example:
        >>> resolve_grade(90.0).symbol
        'D1'
        >>> resolve_grade(19.99).symbol
        'F9'
    """
    if isinstance(percentage, bool) or not isinstance(percentage, (int, float)):
        raise InvalidScoreError(f"Percentage must be a number: {percentage!r}")
    if not math.isfinite(percentage):
        raise InvalidScoreError(f"Percentage must be finite: {percentage}")

    clamped = min(100.0, max(0.0, float(percentage)))
    if clamped != percentage:
        logger.debug(f"Clamped percentage {percentage} to {clamped}")

    if scale is None:
        scale = default_scheme().grade_scale
    return scale.lookup(clamped)


def grade_subject(
    score: SubjectScore,
    scale: Optional[GradeScale] = None,
    subject_name: str = "",
) -> SubjectGrade:
    """
    Grade one subject score.

    Args:
        score: Validated subject score
        scale: Grade table, default scheme's table if None
        subject_name: Display name carried onto the grade

    Returns:
        SubjectGrade for the score's subject
    """
    pct = score.percentage
    resolved = resolve_grade(pct, scale)
    return SubjectGrade(
        subject_id=score.subject_id,
        symbol=resolved.symbol,
        weight=resolved.weight,
        percentage=pct,
        subject_name=subject_name,
    )


def grade_remark(weight: int) -> str:
    """
    Short remark for a grade weight (lower is better).

    Example:
        >>> grade_remark(1)
        'Excellent work.'
        >>> grade_remark(9)
        'Weak. Improve.'
    """
    t = SUBJECT_REMARK_THRESHOLDS
    if weight <= t.excellent_max_weight:
        return "Excellent work."
    if weight <= t.good_max_weight:
        return "Good effort."
    if weight <= t.fair_max_weight:
        return "Fair attempt."
    return "Weak. Improve."
