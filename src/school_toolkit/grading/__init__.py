"""
Module: grading

Purpose:
    Grade bands, best-of aggregation, competition ranking and report
    cards, driven by injectable grading schemes (UNEB by default).

Key Functions:
    - resolve_grade(): Percentage -> grade symbol and weight
    - aggregate(): Best-of weights -> aggregate and classification
    - rank(): Competition ranking of a cohort
    - build_report(): One student's report card

Key Classes:
    - GradingConfig: Configuration for report building
    - GradingScheme: Band tables and aggregation options

Dependencies:
    - school_toolkit.core.models: Scores, bands, aggregates
    - school_toolkit.core.schemas: Scheme manifest validation
"""

from .schemes import (
    GradingScheme,
    UnsupportedSchemeError,
    SchemeValidationError,
    get_scheme,
    load_scheme,
    register_scheme,
)
from .bands import resolve_grade, grade_subject, grade_remark
from .aggregator import aggregate, apply_core_penalty, aggregate_student, AggregateResult
from .ranking import rank, positions
from .config import GradingConfig
from .report import build_report, build_cohort_reports, StudentReport

__all__ = [
    # Schemes
    "GradingScheme",
    "UnsupportedSchemeError",
    "SchemeValidationError",
    "get_scheme",
    "load_scheme",
    "register_scheme",
    # Bands
    "resolve_grade",
    "grade_subject",
    "grade_remark",
    # Aggregation
    "aggregate",
    "apply_core_penalty",
    "aggregate_student",
    "AggregateResult",
    # Ranking
    "rank",
    "positions",
    # Reports
    "GradingConfig",
    "build_report",
    "build_cohort_reports",
    "StudentReport",
]
