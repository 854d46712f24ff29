"""
Module: grades

Purpose:
    Immutable grade and classification band tables, plus the per-subject
    and per-student grading results derived from them. Band tables are
    data, not code, so any grading convention can be injected.

Key Classes:
    - GradeBand / GradeScale: percentage -> grade symbol and weight
    - ClassificationBand / ClassificationScale: aggregate -> division
    - ResolvedGrade: Result of a percentage lookup
    - SubjectGrade: A resolved grade attached to a subject
    - StudentAggregate: Subject grades + aggregate + classification

Dependencies:
    - dataclasses (std)

Used By:
    - grading.bands, grading.aggregator, grading.report
    - grading.schemes: Builds scales from JSON manifests
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True, slots=True)
class GradeBand:
    """
    One row of a percentage grade table.

    Attributes:
        lower_bound: Inclusive lower percentage bound
        symbol: Grade symbol such as "D1"
        weight: Numeric weight (lower is better)
        label: Descriptive label such as "Distinction"
    """

    lower_bound: float
    symbol: str
    weight: int
    label: str = ""

    def __post_init__(self) -> None:
        if not 0 <= self.lower_bound <= 100:
            raise ValueError(f"Band lower_bound must be within [0, 100]: {self.lower_bound}")
        if not self.symbol:
            raise ValueError("Band symbol cannot be empty")


@dataclass(frozen=True, slots=True)
class ResolvedGrade:
    """Result of resolving a percentage against a GradeScale."""

    symbol: str
    weight: int
    label: str = ""


@dataclass(frozen=True)
class GradeScale:
    """
    Ordered, exhaustive partition of [0, 100] into grade bands.

    Bands are stored highest-bound-first. A percentage resolves to the
    first band whose lower bound it meets, else to the fail band.

    Invariants:
        - bands strictly descending by lower_bound
        - weights non-decreasing as bounds descend
        - fail band sits below every other band

    Example:
        >>> scale = GradeScale(
        ...     bands=(GradeBand(50, "P", 1),),
        ...     fail=GradeBand(0, "F", 2),
        ... )
        >>> scale.lookup(72).symbol
        'P'
    """

    bands: Tuple[GradeBand, ...]
    fail: GradeBand

    def __post_init__(self) -> None:
        """Validate band ordering on construction."""
        if not isinstance(self.bands, tuple):
            object.__setattr__(self, "bands", tuple(self.bands))
        previous: Optional[GradeBand] = None
        for band in self.bands:
            if previous is not None:
                if band.lower_bound >= previous.lower_bound:
                    raise ValueError(
                        f"Grade bands must be strictly descending: "
                        f"{previous.symbol}@{previous.lower_bound} then {band.symbol}@{band.lower_bound}"
                    )
                if band.weight < previous.weight:
                    raise ValueError(
                        f"Grade weights must not improve as bounds fall: "
                        f"{previous.symbol}={previous.weight}, {band.symbol}={band.weight}"
                    )
            previous = band
        if previous is not None:
            if self.fail.weight < previous.weight:
                raise ValueError(f"Fail band {self.fail.symbol} must be the worst weight")
            if previous.lower_bound <= 0:
                raise ValueError(
                    f"Band {previous.symbol} starts at 0; the fail band would be unreachable"
                )
        symbols = [b.symbol for b in self.all_bands]
        if len(set(symbols)) != len(symbols):
            raise ValueError(f"Duplicate grade symbols: {symbols}")

    @property
    def all_bands(self) -> Tuple[GradeBand, ...]:
        """Every band including the fail band, best first."""
        return self.bands + (self.fail,)

    @property
    def worst_symbol(self) -> str:
        return self.fail.symbol

    @property
    def boundaries(self) -> Tuple[float, ...]:
        """Declared lower bounds, highest first."""
        return tuple(b.lower_bound for b in self.bands)

    def lookup(self, percentage: float) -> ResolvedGrade:
        """Resolve an already-validated percentage to a grade."""
        for band in self.bands:
            if percentage >= band.lower_bound:
                return ResolvedGrade(band.symbol, band.weight, band.label)
        return ResolvedGrade(self.fail.symbol, self.fail.weight, self.fail.label)

    def band_for_symbol(self, symbol: str) -> GradeBand:
        for band in self.all_bands:
            if band.symbol == symbol:
                return band
        raise KeyError(f"Unknown grade symbol: {symbol}")


@dataclass(frozen=True, slots=True)
class ClassificationBand:
    """Inclusive aggregate range mapped to a classification label."""

    lower: int
    upper: int
    label: str

    def __post_init__(self) -> None:
        if self.upper < self.lower:
            raise ValueError(f"Classification band {self.label!r} has upper < lower")

    def contains(self, aggregate: float) -> bool:
        return self.lower <= aggregate <= self.upper


@dataclass(frozen=True)
class ClassificationScale:
    """
    Ordered classification bands keyed on aggregate score.

    Bands are stored best first (lowest aggregate range first). Any
    aggregate outside every band gets the fallback label.

    Example:
        >>> scale = ClassificationScale(
        ...     bands=(ClassificationBand(4, 12, "Division 1"),),
        ...     fallback="U",
        ... )
        >>> scale.classify(10)
        'Division 1'
        >>> scale.classify(40)
        'U'
    """

    bands: Tuple[ClassificationBand, ...]
    fallback: str = "U"

    def __post_init__(self) -> None:
        if not isinstance(self.bands, tuple):
            object.__setattr__(self, "bands", tuple(self.bands))
        for prev, band in zip(self.bands, self.bands[1:]):
            if band.lower <= prev.upper:
                raise ValueError(
                    f"Classification bands overlap or are unordered: "
                    f"{prev.label} [{prev.lower}, {prev.upper}] and {band.label} [{band.lower}, {band.upper}]"
                )
        labels = [b.label for b in self.bands] + [self.fallback]
        if len(set(labels)) != len(labels):
            raise ValueError(f"Duplicate classification labels: {labels}")

    @property
    def labels(self) -> Tuple[str, ...]:
        """All labels best first, fallback last."""
        return tuple(b.label for b in self.bands) + (self.fallback,)

    def classify(self, aggregate: float) -> str:
        for band in self.bands:
            if band.contains(aggregate):
                return band.label
        return self.fallback

    def worsen(self, label: str) -> str:
        """
        Move a classification one band worse.

        The last band and any unknown label degrade to the fallback.
        """
        labels = self.labels
        if label not in labels:
            return self.fallback
        index = labels.index(label)
        return labels[min(index + 1, len(labels) - 1)]


@dataclass(frozen=True, slots=True)
class SubjectGrade:
    """
    A resolved grade for one subject.

    Attributes:
        subject_id: Subject identifier
        symbol: Grade symbol ("D1", "F9", ...)
        weight: Numeric weight used for aggregation (lower is better)
        percentage: Percentage the grade was resolved from
        subject_name: Display name, used for core-subject matching
    """

    subject_id: str
    symbol: str
    weight: int
    percentage: float = 0.0
    subject_name: str = ""


@dataclass(frozen=True)
class StudentAggregate:
    """
    Grading outcome for one student in one grading session.

    Never persisted by this library; recompute from scores on demand.

    Attributes:
        student_id: Student identifier
        subject_grades: Every graded subject, in input order
        aggregate_score: Sum of the best-of lowest weights
        classification: Division label after any core-subject penalty
    """

    student_id: str
    subject_grades: Tuple[SubjectGrade, ...]
    aggregate_score: int
    classification: str

    def grade_for(self, subject_id: str) -> Optional[SubjectGrade]:
        for grade in self.subject_grades:
            if grade.subject_id == subject_id:
                return grade
        return None
