"""
Timetable Package

Schedule-bounded timetable grids, instructor clash detection across
concurrently active timetables, and the publish gate.
"""

from .grid import TimetableGrid
from .clashes import Clash, ClashReport, detect_clashes, find_clashes
from .publishing import PublishDecision, check_publishable

__all__ = [
    "TimetableGrid",
    "Clash",
    "ClashReport",
    "detect_clashes",
    "find_clashes",
    "PublishDecision",
    "check_publishable",
]
