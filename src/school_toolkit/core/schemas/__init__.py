"""Schema validation for raw rows and grading-scheme manifests."""

from .validator import (
    ValidationError,
    validate_score_row,
    validate_timetable_row,
    validate_scheme_manifest,
)

__all__ = [
    "ValidationError",
    "validate_score_row",
    "validate_timetable_row",
    "validate_scheme_manifest",
]
