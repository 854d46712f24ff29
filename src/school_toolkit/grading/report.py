"""
Module: grading.report

Purpose:
    Build student report cards from subject scores: per-subject grades
    and remarks, the overall percentage, aggregate and division, class
    position, and a short performance analysis.

    Load → Combine sittings → Grade → Aggregate → Rank → Remark

Key Functions:
    - build_report(): One student's StudentReport
    - build_cohort_reports(): Reports for a whole class, with positions
    - performance_band(), overall_remark(), analyze_performance()

Key Classes:
    - SubjectReportRow: One subject line of the report card
    - PerformanceAnalysis: Best/worst subject and counts
    - StudentReport: The complete report

Dependencies:
    - grading.bands, grading.aggregator, grading.ranking
    - common.thresholds: Remark and band cut-offs

Used By:
    - scripts/grade_report.py
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Hashable, Iterable, List, Mapping, Optional, Sequence, Tuple

from school_toolkit.common.thresholds import PERFORMANCE_THRESHOLDS
from school_toolkit.core.models.grades import StudentAggregate
from school_toolkit.core.models.scores import SubjectScore

from .aggregator import aggregate_student
from .bands import grade_remark, grade_subject
from .config import GradingConfig
from .ranking import positions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubjectReportRow:
    """One subject line on a report card."""

    subject_id: str
    subject_name: str
    total_awarded: float
    total_possible: float
    percentage: float
    symbol: str
    weight: int
    remark: str


@dataclass(frozen=True)
class PerformanceAnalysis:
    """
    Summary of a student's strongest and weakest subjects.

    Attributes:
        best_subject: Row with the highest percentage (first on ties)
        worst_subject: Row with the lowest percentage (first on ties)
        strength_count: Subjects at or above the strength threshold
        improvement_count: Subjects below the improvement threshold
    """

    best_subject: Optional[SubjectReportRow]
    worst_subject: Optional[SubjectReportRow]
    strength_count: int
    improvement_count: int


@dataclass(frozen=True)
class StudentReport:
    """
    A student's report card for one grading session.

    Attributes:
        student_id: Student identifier
        subjects: Subject rows in display order
        aggregate: Subject grades, aggregate and division
        overall_percentage: Mean of the positive subject percentages
        position: Class position, None when no cohort was supplied
        cohort_size: Number of ranked students (0 when unranked)
        overall_remark: Report footer remark
        performance_band: excellent / very_good / good / fair / poor
        analysis: Best and worst subjects
    """

    student_id: str
    subjects: Tuple[SubjectReportRow, ...]
    aggregate: StudentAggregate
    overall_percentage: float
    position: Optional[int]
    cohort_size: int
    overall_remark: str
    performance_band: str
    analysis: PerformanceAnalysis

    @property
    def division(self) -> str:
        return self.aggregate.classification

    @property
    def total_awarded(self) -> float:
        return sum(r.total_awarded for r in self.subjects)

    def to_dict(self) -> dict:
        """Serialize for display or JSON output."""
        return {
            "student_id": self.student_id,
            "aggregate": self.aggregate.aggregate_score,
            "division": self.division,
            "overall_percentage": round(self.overall_percentage, 2),
            "position": self.position,
            "cohort_size": self.cohort_size,
            "overall_remark": self.overall_remark,
            "performance_band": self.performance_band,
            "subjects": [
                {
                    "subject_id": r.subject_id,
                    "subject_name": r.subject_name,
                    "total_awarded": r.total_awarded,
                    "total_possible": r.total_possible,
                    "percentage": round(r.percentage, 2),
                    "grade": r.symbol,
                    "remark": r.remark,
                }
                for r in self.subjects
            ],
        }


# ─────────────────────────────────────────────────────────────────────────────
# Remarks
# ─────────────────────────────────────────────────────────────────────────────

def performance_band(percentage: float) -> str:
    t = PERFORMANCE_THRESHOLDS
    if percentage >= t.excellent:
        return "excellent"
    if percentage >= t.very_good:
        return "very_good"
    if percentage >= t.good:
        return "good"
    if percentage >= t.fair:
        return "fair"
    return "poor"


def overall_remark(percentage: float) -> str:
    """Footer remark for an overall percentage."""
    t = PERFORMANCE_THRESHOLDS
    if percentage >= t.remark_outstanding:
        return "Outstanding performance. Maintain the excellent effort."
    if percentage >= t.remark_very_good:
        return "Very good overall. With more focus, you can reach the top."
    if percentage >= t.remark_average:
        return "Average performance. Improve revision habits and class participation."
    if percentage >= t.remark_below:
        return "Below expectations. More practice is required across subjects."
    return "Weak overall performance. A serious improvement plan is required."


def analyze_performance(rows: Sequence[SubjectReportRow]) -> PerformanceAnalysis:
    """Find the best and worst subjects and count strengths/weaknesses."""
    if not rows:
        return PerformanceAnalysis(None, None, 0, 0)

    t = PERFORMANCE_THRESHOLDS
    best = rows[0]
    worst = rows[0]
    for row in rows[1:]:
        if row.percentage > best.percentage:
            best = row
        if row.percentage < worst.percentage:
            worst = row

    return PerformanceAnalysis(
        best_subject=best,
        worst_subject=worst,
        strength_count=sum(1 for r in rows if r.percentage >= t.strength_min_pct),
        improvement_count=sum(1 for r in rows if r.percentage < t.improvement_below_pct),
    )


# ─────────────────────────────────────────────────────────────────────────────
# Report Building
# ─────────────────────────────────────────────────────────────────────────────

def _combine_by_subject(
    student_id: str,
    scores: Iterable[SubjectScore],
    subject_names: Mapping[str, str],
) -> List[SubjectScore]:
    """One combined score per listed subject; unscored subjects get 0/0."""
    by_subject: Dict[str, List[SubjectScore]] = defaultdict(list)
    for score in scores:
        if score.student_id != student_id:
            continue
        if score.subject_id not in subject_names:
            logger.debug(f"Ignoring score for unlisted subject {score.subject_id} ({student_id})")
            continue
        by_subject[score.subject_id].append(score)

    combined = []
    for subject_id in subject_names:
        sittings = by_subject.get(subject_id)
        if sittings:
            combined.append(SubjectScore.combine(sittings))
        else:
            combined.append(SubjectScore(subject_id, student_id, 0, 0))
    return combined


def build_report(
    student_id: str,
    scores: Iterable[SubjectScore],
    subject_names: Mapping[str, str],
    config: Optional[GradingConfig] = None,
    cohort_totals: Optional[Mapping[Hashable, float]] = None,
) -> StudentReport:
    """
    Build a student's report card.

    Every subject in ``subject_names`` appears on the report, in mapping
    order. A subject with no scores shows 0% and the fail grade. Several
    scores for one subject (BOT/MOT/EOT sittings) are combined.

    Args:
        student_id: Student to report on
        scores: Subject scores; other students' scores are ignored
        subject_names: subject_id -> display name for the class's subjects
        config: Grading configuration, defaults to GradingConfig()
        cohort_totals: student_id -> total marks for the class, for position

    Returns:
        StudentReport

    Raises:
        UnsupportedSchemeError: If config names an unknown scheme
    """
    if config is None:
        config = GradingConfig()
    scheme = config.scheme

    rows: List[SubjectReportRow] = []
    grades = []
    for score in _combine_by_subject(student_id, scores, subject_names):
        name = subject_names[score.subject_id]
        grade = grade_subject(score, scheme.grade_scale, subject_name=name)
        grades.append(grade)
        rows.append(
            SubjectReportRow(
                subject_id=score.subject_id,
                subject_name=name,
                total_awarded=score.total_awarded,
                total_possible=score.total_possible,
                percentage=grade.percentage,
                symbol=grade.symbol,
                weight=grade.weight,
                remark=grade_remark(grade.weight),
            )
        )

    student_aggregate = aggregate_student(
        student_id,
        grades,
        scheme=scheme,
        best_of=config.effective_best_of,
        core_penalty=config.core_penalty,
    )

    positive = [r.percentage for r in rows if r.percentage > 0]
    overall_pct = sum(positive) / len(positive) if positive else 0.0

    position: Optional[int] = None
    cohort_size = 0
    if cohort_totals is not None:
        ranked = positions(cohort_totals.items())
        position = ranked.get(student_id)
        cohort_size = len(ranked)

    return StudentReport(
        student_id=student_id,
        subjects=tuple(rows),
        aggregate=student_aggregate,
        overall_percentage=overall_pct,
        position=position,
        cohort_size=cohort_size,
        overall_remark=overall_remark(overall_pct),
        performance_band=performance_band(overall_pct),
        analysis=analyze_performance(rows),
    )


def cohort_totals(
    scores: Iterable[SubjectScore],
    student_ids: Iterable[str],
    subject_ids: Iterable[str],
) -> Dict[str, float]:
    """
    Total awarded marks per student over the class's subjects.

    Students with no scores total 0 and are still ranked.
    """
    subjects = set(subject_ids)
    totals: Dict[str, float] = {sid: 0 for sid in student_ids}
    for score in scores:
        if score.student_id in totals and score.subject_id in subjects:
            totals[score.student_id] += score.total_awarded
    return totals


def build_cohort_reports(
    scores: Sequence[SubjectScore],
    subject_names: Mapping[str, str],
    config: Optional[GradingConfig] = None,
    student_ids: Optional[Sequence[str]] = None,
) -> List[StudentReport]:
    """
    Build report cards for a class, ranked by total marks.

    Args:
        scores: Every score for the class and session
        subject_names: subject_id -> display name
        config: Grading configuration
        student_ids: Class list; defaults to students seen in scores,
            in first-seen order

    Returns:
        Reports in class-list order
    """
    if student_ids is None:
        student_ids = list(dict.fromkeys(s.student_id for s in scores))

    totals = cohort_totals(scores, student_ids, subject_names)
    reports = [
        build_report(sid, scores, subject_names, config, cohort_totals=totals)
        for sid in student_ids
    ]
    logger.info(f"Built {len(reports)} report(s) across {len(subject_names)} subject(s)")
    return reports
