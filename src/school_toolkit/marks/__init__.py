"""
Marks Package

Question-level marks pivoted into a student x question matrix with
totals, averages, positions and per-topic insights.
"""

from .matrix import (
    Question,
    QuestionResult,
    StudentTotal,
    TopicInsight,
    MarksMatrix,
    build_matrix,
)

__all__ = [
    "Question",
    "QuestionResult",
    "StudentTotal",
    "TopicInsight",
    "MarksMatrix",
    "build_matrix",
]
