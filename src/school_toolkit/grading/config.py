"""
Module: grading.config

Purpose:
    Configuration dataclass for report building. Immutable configuration
    with validation on construction; replaces ad hoc filter state with an
    explicit object passed into pure functions.

Key Classes:
    - GradingConfig: Scheme choice and aggregation options

Used By:
    - grading.report: build_report(), build_cohort_reports()
    - scripts/grade_report.py
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .schemes import GradingScheme, get_scheme


@dataclass(frozen=True)
class GradingConfig:
    """
    Configuration for grading a cohort (immutable).

    Attributes:
        scheme_code: Registered scheme code, None for the default scheme
        best_of: Overrides the scheme's best_of when set
        core_penalty: Apply the core-subject division penalty

    Invariants:
        - best_of is None or best_of >= 1

    Example:
        >>> config = GradingConfig(best_of=6)
        >>> config.effective_best_of
        6
    """

    scheme_code: Optional[str] = None
    best_of: Optional[int] = None
    core_penalty: bool = True

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.best_of is not None and self.best_of < 1:
            raise ValueError(f"best_of must be positive: {self.best_of}")

    @property
    def scheme(self) -> GradingScheme:
        """Resolve the configured scheme (raises UnsupportedSchemeError)."""
        return get_scheme(self.scheme_code)

    @property
    def effective_best_of(self) -> int:
        if self.best_of is not None:
            return self.best_of
        return self.scheme.best_of
