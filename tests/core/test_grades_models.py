"""
Unit tests for grade tables and classification scales.
"""

import pytest

from school_toolkit.core.models import (
    ClassificationBand,
    ClassificationScale,
    GradeBand,
    GradeScale,
    StudentAggregate,
    SubjectGrade,
)


def _division_scale():
    return ClassificationScale(
        bands=(
            ClassificationBand(4, 12, "Division 1"),
            ClassificationBand(13, 23, "Division 2"),
            ClassificationBand(24, 29, "Division 3"),
            ClassificationBand(30, 34, "Division 4"),
        ),
        fallback="U",
    )


class TestGradeScale:
    """Tests for GradeScale validation and lookup."""

    def test_lookup_when_at_boundary_then_returns_band(self):
        """A percentage equal to a lower bound belongs to that band."""
        scale = GradeScale(
            bands=(GradeBand(80, "A", 1), GradeBand(50, "B", 2)),
            fail=GradeBand(0, "F", 3),
        )

        assert scale.lookup(80).symbol == "A"
        assert scale.lookup(50).symbol == "B"
        assert scale.lookup(49.99).symbol == "F"

    def test_init_when_bounds_not_descending_then_raises_error(self):
        """Bands must be listed highest bound first."""
        with pytest.raises(ValueError, match="strictly descending"):
            GradeScale(
                bands=(GradeBand(50, "B", 2), GradeBand(80, "A", 1)),
                fail=GradeBand(0, "F", 3),
            )

    def test_init_when_weights_improve_downwards_then_raises_error(self):
        with pytest.raises(ValueError, match="must not improve"):
            GradeScale(
                bands=(GradeBand(80, "A", 2), GradeBand(50, "B", 1)),
                fail=GradeBand(0, "F", 3),
            )

    def test_init_when_duplicate_symbols_then_raises_error(self):
        with pytest.raises(ValueError, match="Duplicate grade symbols"):
            GradeScale(
                bands=(GradeBand(80, "A", 1), GradeBand(50, "A", 2)),
                fail=GradeBand(0, "F", 3),
            )

    def test_init_when_band_starts_at_zero_then_raises_error(self):
        """The fail band must stay reachable."""
        with pytest.raises(ValueError, match="unreachable"):
            GradeScale(bands=(GradeBand(0, "A", 1),), fail=GradeBand(0, "F", 2))

    def test_band_for_symbol_when_unknown_then_raises_key_error(self):
        scale = GradeScale(bands=(GradeBand(50, "P", 1),), fail=GradeBand(0, "F", 2))

        with pytest.raises(KeyError):
            scale.band_for_symbol("Z")

    def test_band_when_bound_above_100_then_raises_error(self):
        with pytest.raises(ValueError, match="within"):
            GradeBand(101, "X", 1)


class TestClassificationScale:
    """Tests for ClassificationScale."""

    def test_classify_when_in_band_then_returns_label(self):
        scale = _division_scale()

        assert scale.classify(4) == "Division 1"
        assert scale.classify(12) == "Division 1"
        assert scale.classify(13) == "Division 2"
        assert scale.classify(34) == "Division 4"

    def test_classify_when_outside_every_band_then_returns_fallback(self):
        """Aggregates below 4 or above 34 are ungraded."""
        scale = _division_scale()

        assert scale.classify(0) == "U"
        assert scale.classify(35) == "U"

    def test_worsen_when_division_then_moves_one_band(self):
        scale = _division_scale()

        assert scale.worsen("Division 1") == "Division 2"
        assert scale.worsen("Division 4") == "U"
        assert scale.worsen("U") == "U"

    def test_worsen_when_unknown_label_then_returns_fallback(self):
        assert _division_scale().worsen("Division 9") == "U"

    def test_init_when_bands_overlap_then_raises_error(self):
        with pytest.raises(ValueError, match="overlap"):
            ClassificationScale(
                bands=(
                    ClassificationBand(4, 12, "Division 1"),
                    ClassificationBand(12, 23, "Division 2"),
                ),
            )


class TestStudentAggregate:
    """Tests for StudentAggregate helpers."""

    def test_grade_for_when_subject_present_then_returns_grade(self):
        grade = SubjectGrade("MATH", "D1", 1, 85.0, "Mathematics")
        aggregate = StudentAggregate("S001", (grade,), 1, "U")

        assert aggregate.grade_for("MATH") is grade
        assert aggregate.grade_for("ENG") is None
