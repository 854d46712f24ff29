"""
Serialization Utilities

Converts between backend row dictionaries and core models.

- ``deserialize_*`` functions validate a row and build a frozen model
- ``serialize_*`` functions produce plain dicts ready for JSON
- Calculated values (percentage, position) are included on output for
  display, but are never read back on input
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Sequence

from ..errors import InvalidScoreError
from ..models.grades import StudentAggregate
from ..models.ranking import RankedEntry
from ..models.scores import SubjectScore
from ..models.timetable import TimetableEntry
from ..schemas.validator import (
    ValidationError,
    validate_score_row,
    validate_timetable_row,
)


# ─────────────────────────────────────────────────────────────────────────────
# Score Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_score(score: SubjectScore) -> dict[str, Any]:
    """Serialize a SubjectScore, including its calculated percentage."""
    return {
        "student_id": score.student_id,
        "subject_id": score.subject_id,
        "total_awarded": score.total_awarded,
        "total_possible": score.total_possible,
        "percentage": round(score.percentage, 2),
    }


def deserialize_score(data: dict[str, Any], *, validate: bool = True) -> SubjectScore:
    """
    Deserialize a SubjectScore from a row dictionary.

    Args:
        data: Row with student_id, subject_id and totals
        validate: Whether to run row validation first

    Returns:
        SubjectScore instance

    Raises:
        ValidationError: If validate=True and the row is malformed
        InvalidScoreError: If the totals break the score invariant
    """
    if validate:
        validate_score_row(data)

    return SubjectScore(
        subject_id=str(data["subject_id"]),
        student_id=str(data["student_id"]),
        total_awarded=data["total_awarded"],
        total_possible=data["total_possible"],
    )


def scores_from_rows(
    rows: Iterable[dict[str, Any]],
    *,
    validate: bool = True,
) -> list[SubjectScore]:
    """
    Deserialize a batch of score rows.

    Fails on the first bad row; the error names the row index.

    Raises:
        ValidationError: If any row is invalid
    """
    scores = []
    for index, row in enumerate(rows):
        try:
            scores.append(deserialize_score(row, validate=validate))
        except KeyError as e:
            raise ValidationError(
                f"Error parsing score row {index}: missing field {e}",
                path=f"[{index}].{e.args[0]}",
                errors=[f"missing field {e}"],
            ) from e
        except (ValidationError, InvalidScoreError) as e:
            path = getattr(e, "path", "")
            raise ValidationError(
                f"Error parsing score row {index}: {e}",
                path=f"[{index}].{path}" if path else f"[{index}]",
                errors=[str(e)],
            ) from e
    return scores


# ─────────────────────────────────────────────────────────────────────────────
# Timetable Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_timetable_entry(
    entry: TimetableEntry,
    timetable_id: str | None = None,
) -> dict[str, Any]:
    """Serialize an entry using the backend column names."""
    data: dict[str, Any] = {
        "day_of_week": entry.day_of_week,
        "time_slot_id": entry.period_id,
        "subject_id": entry.subject_id,
        "teacher_user_id": entry.instructor_id,
        "note": entry.note,
    }
    if entry.entry_id is not None:
        data["id"] = entry.entry_id
    if timetable_id is not None:
        data["timetable_id"] = timetable_id
    return data


def deserialize_timetable_entry(
    data: dict[str, Any],
    *,
    validate: bool = True,
) -> TimetableEntry:
    """
    Deserialize a TimetableEntry from a backend row.

    A subject id of 0 and an empty teacher id mean "not filled in yet"
    and become None.
    """
    if validate:
        validate_timetable_row(data)

    return TimetableEntry(
        day_of_week=data["day_of_week"],
        period_id=data["time_slot_id"],
        subject_id=data.get("subject_id") or None,
        instructor_id=data.get("teacher_user_id") or None,
        note=data.get("note"),
        entry_id=data.get("id"),
    )


# ─────────────────────────────────────────────────────────────────────────────
# Result Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_ranking(ranking: Sequence[RankedEntry]) -> list[dict[str, Any]]:
    """Serialize a cohort ranking, keeping its order."""
    return [
        {"id": r.id, "total_score": r.total_score, "position": r.position}
        for r in ranking
    ]


def serialize_aggregate(aggregate: StudentAggregate) -> dict[str, Any]:
    """Serialize a StudentAggregate for display."""
    return {
        "student_id": aggregate.student_id,
        "aggregate_score": aggregate.aggregate_score,
        "classification": aggregate.classification,
        "subject_grades": [
            {
                "subject_id": g.subject_id,
                "subject_name": g.subject_name,
                "symbol": g.symbol,
                "weight": g.weight,
                "percentage": round(g.percentage, 2),
            }
            for g in aggregate.subject_grades
        ],
    }


# ─────────────────────────────────────────────────────────────────────────────
# File Utilities
# ─────────────────────────────────────────────────────────────────────────────

def load_scores_json(path: Path, *, validate: bool = True) -> list[SubjectScore]:
    """
    Load score rows from a JSON file (a list of row objects).

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValidationError: If the file or any row is invalid
    """
    if not path.exists():
        raise FileNotFoundError(f"Scores file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid JSON in {path}: {e}", path=str(path)) from e

    if not isinstance(data, list):
        raise ValidationError(f"Scores file must contain a list of rows: {path}", path=str(path))

    return scores_from_rows(data, validate=validate)
