"""
Utils Package

Serialization between backend rows and core models.
"""

from .serialization import (
    serialize_score,
    deserialize_score,
    scores_from_rows,
    serialize_timetable_entry,
    deserialize_timetable_entry,
    serialize_ranking,
    serialize_aggregate,
    load_scores_json,
)

__all__ = [
    "serialize_score",
    "deserialize_score",
    "scores_from_rows",
    "serialize_timetable_entry",
    "deserialize_timetable_entry",
    "serialize_ranking",
    "serialize_aggregate",
    "load_scores_json",
]
