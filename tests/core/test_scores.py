"""
Unit tests for the SubjectScore model.
"""

import math

import pytest

from school_toolkit.core.errors import InvalidScoreError, SchoolToolkitError
from school_toolkit.core.models import SubjectScore


class TestSubjectScoreValidation:
    """Tests for SubjectScore construction."""

    def test_init_when_valid_totals_then_creates_score(self):
        """Valid totals should construct a score."""
        score = SubjectScore("MATH", "S001", total_awarded=45, total_possible=50)

        assert score.subject_id == "MATH"
        assert score.student_id == "S001"

    def test_init_when_awarded_exceeds_possible_then_raises_error(self):
        """total_awarded above total_possible is rejected."""
        with pytest.raises(InvalidScoreError, match="exceeds total_possible"):
            SubjectScore("MATH", "S001", total_awarded=51, total_possible=50)

    def test_init_when_negative_awarded_then_raises_error(self):
        """Negative totals are rejected."""
        with pytest.raises(InvalidScoreError, match="cannot be negative"):
            SubjectScore("MATH", "S001", total_awarded=-1, total_possible=50)

    def test_init_when_negative_possible_then_raises_error(self):
        """Negative total_possible is rejected."""
        with pytest.raises(InvalidScoreError, match="cannot be negative"):
            SubjectScore("MATH", "S001", total_awarded=0, total_possible=-5)

    def test_init_when_nan_total_then_raises_error(self):
        """Non-finite totals are rejected."""
        with pytest.raises(InvalidScoreError, match="finite"):
            SubjectScore("MATH", "S001", total_awarded=math.nan, total_possible=50)

    def test_init_when_non_numeric_total_then_raises_error(self):
        """String totals are rejected."""
        with pytest.raises(InvalidScoreError, match="must be a number"):
            SubjectScore("MATH", "S001", total_awarded="45", total_possible=50)

    def test_invalid_score_error_when_raised_then_is_value_error(self):
        """InvalidScoreError is both a library error and a ValueError."""
        with pytest.raises(ValueError):
            SubjectScore("MATH", "S001", total_awarded=60, total_possible=50)
        assert issubclass(InvalidScoreError, SchoolToolkitError)


class TestSubjectScorePercentage:
    """Tests for the calculated percentage."""

    def test_percentage_when_45_of_50_then_returns_90(self):
        """45/50 is 90%."""
        score = SubjectScore("MATH", "S001", 45, 50)

        assert score.percentage == 90.0

    def test_percentage_when_nothing_possible_then_returns_zero(self):
        """A subject with no marks available is 0%, not a division error."""
        score = SubjectScore("MATH", "S001", 0, 0)

        assert score.percentage == 0.0
        assert score.is_graded is False

    def test_percentage_when_full_marks_then_returns_100(self):
        score = SubjectScore("MATH", "S001", 80, 80)

        assert score.percentage == 100.0


class TestSubjectScoreCombine:
    """Tests for combining sittings of one subject."""

    def test_combine_when_several_sittings_then_sums_totals(self):
        """BOT + EOT sittings are summed."""
        # Arrange
        bot = SubjectScore("MATH", "S001", 30, 50)
        eot = SubjectScore("MATH", "S001", 60, 100)

        # Act
        combined = SubjectScore.combine([bot, eot])

        # Assert
        assert combined.total_awarded == 90
        assert combined.total_possible == 150
        assert combined.percentage == pytest.approx(60.0)

    def test_combine_when_ungraded_sitting_then_skips_it(self):
        """A sitting with nothing possible does not change the totals."""
        combined = SubjectScore.combine([
            SubjectScore("MATH", "S001", 40, 50),
            SubjectScore("MATH", "S001", 0, 0),
        ])

        assert combined.percentage == pytest.approx(80.0)

    def test_combine_when_empty_then_raises_error(self):
        with pytest.raises(ValueError, match="empty"):
            SubjectScore.combine([])

    def test_combine_when_mixed_subjects_then_raises_error(self):
        """Scores for different subjects cannot be combined."""
        with pytest.raises(ValueError, match="different student/subject"):
            SubjectScore.combine([
                SubjectScore("MATH", "S001", 40, 50),
                SubjectScore("ENG", "S001", 40, 50),
            ])
