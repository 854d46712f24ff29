"""Centralized threshold and magic number configuration.

This module contains the percentage cut-offs used for remarks,
performance bands and marks-matrix insights. Grade and division band
tables are NOT here: they live in grading-scheme manifests so that a
school can swap conventions without touching code.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class PerformanceThresholds:
    """Percentage cut-offs for performance bands and remarks."""

    # Performance bands (report comments)
    excellent: float = 85.0
    very_good: float = 70.0
    good: float = 60.0
    fair: float = 50.0

    # Overall remark cut-offs (report footer)
    remark_outstanding: float = 85.0
    remark_very_good: float = 75.0
    remark_average: float = 60.0
    remark_below: float = 50.0

    # Subject analysis
    strength_min_pct: float = 70.0  # Subjects at or above count as strengths
    improvement_below_pct: float = 50.0  # Subjects below need improvement


@dataclass
class SubjectRemarkThresholds:
    """Grade weight cut-offs for per-subject remarks (lower is better)."""

    excellent_max_weight: int = 2
    good_max_weight: int = 4
    fair_max_weight: int = 6


@dataclass
class MarksMatrixThresholds:
    """List sizes for marks-matrix insights."""

    topic_top_n: int = 3  # Students listed as top per topic
    topic_bottom_n: int = 3  # Students listed as bottom per topic


# Global instances for easy import
PERFORMANCE_THRESHOLDS = PerformanceThresholds()
SUBJECT_REMARK_THRESHOLDS = SubjectRemarkThresholds()
MARKS_MATRIX_THRESHOLDS = MarksMatrixThresholds()
