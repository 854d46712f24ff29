"""
Schema Validation Utilities

Validates raw row dictionaries (as returned by the data-fetch layer) and
grading-scheme manifests before they are turned into models.

Two levels of checking:
- Basic checks (always): required fields and value ranges, with a
  dotted path to the offending field
- Strict checks: full JSON Schema validation with ``jsonschema``

Scheme manifests are always validated strictly; they are configuration
and a bad band table silently mis-grades every student.
"""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any

import jsonschema

from ..errors import SchoolToolkitError


# Schema version constants
SCHEME_SCHEMA_VERSION = 1


# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(SchoolToolkitError, ValueError):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def _run_jsonschema(data: Any, schema_name: str) -> None:
    schema = _load_schema(schema_name)
    try:
        jsonschema.validate(data, schema)
    except jsonschema.ValidationError as e:
        raise ValidationError(
            f"Schema validation failed: {e.message}",
            path=".".join(str(p) for p in e.absolute_path),
            errors=[e.message],
        ) from e


def _require(data: dict[str, Any], required: list[str], path: str = "") -> None:
    missing = [f for f in required if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path=path,
            errors=[f"Missing field: {f}" for f in missing],
        )


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def validate_score_row(data: dict[str, Any], *, strict: bool = False) -> None:
    """
    Validate a subject score row.

    Args:
        data: Row with student_id, subject_id, total_awarded, total_possible
        strict: If True, also validate against score_row.schema.json

    Raises:
        ValidationError: If the row is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError("Score row must be a dict")
    _require(data, ["student_id", "subject_id", "total_awarded", "total_possible"])

    awarded = data["total_awarded"]
    possible = data["total_possible"]
    if not _is_number(awarded) or awarded < 0:
        raise ValidationError(
            f"Invalid total_awarded: {awarded!r} (must be a non-negative number)",
            path="total_awarded",
        )
    if not _is_number(possible) or possible < 0:
        raise ValidationError(
            f"Invalid total_possible: {possible!r} (must be a non-negative number)",
            path="total_possible",
        )
    if awarded > possible:
        raise ValidationError(
            f"total_awarded ({awarded}) exceeds total_possible ({possible})",
            path="total_awarded",
        )

    if strict:
        _run_jsonschema(data, "score_row")


def validate_timetable_row(data: dict[str, Any], *, strict: bool = False) -> None:
    """
    Validate a timetable entry row.

    Uses the backend column names (day_of_week, time_slot_id,
    teacher_user_id). Subject and teacher may be empty while a draft is
    being filled in.

    Raises:
        ValidationError: If the row is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError("Timetable row must be a dict")
    _require(data, ["day_of_week", "time_slot_id"])

    day = data["day_of_week"]
    if isinstance(day, bool) or not isinstance(day, int) or not 1 <= day <= 7:
        raise ValidationError(
            f"Invalid day_of_week: {day!r} (must be 1-7)",
            path="day_of_week",
        )
    slot = data["time_slot_id"]
    if isinstance(slot, bool) or not isinstance(slot, int):
        raise ValidationError(
            f"Invalid time_slot_id: {slot!r} (must be an integer)",
            path="time_slot_id",
        )

    if strict:
        _run_jsonschema(data, "timetable_entry")


def validate_scheme_manifest(data: dict[str, Any]) -> None:
    """
    Validate a grading-scheme manifest.

    JSON Schema covers structure; the semantic checks here cover what
    the schema cannot express (band ordering, classification ranges).

    Raises:
        ValidationError: If the manifest is invalid
    """
    _run_jsonschema(data, "grading_scheme")

    grades = data["grades"]
    bounds = [g["min_percentage"] for g in grades]
    for i, (prev, cur) in enumerate(zip(bounds, bounds[1:]), start=1):
        if cur >= prev:
            raise ValidationError(
                f"Grades must be listed highest min_percentage first: {prev} then {cur}",
                path=f"grades.{i}.min_percentage",
            )

    for i, band in enumerate(data["classifications"]):
        if band["max"] < band["min"]:
            raise ValidationError(
                f"Classification {band['label']!r} has max < min",
                path=f"classifications.{i}",
            )
