#!/usr/bin/env python3
"""Print term results for a class from a JSON file of subject scores.

Reads a JSON list of score rows (student_id, subject_id, total_awarded,
total_possible), grades every student under a grading scheme and prints
one line per student with aggregate, division and class position.

Usage:
    python scripts/grade_report.py --scores scores.json [--scheme uneb]
        [--subjects subjects.json] [--best-of N] [--json] [--verbose]
    python scripts/grade_report.py --list-schemes
"""

import argparse
import json
import sys
from pathlib import Path

# Add src to path for package imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from school_toolkit.common.logging_utils import configure_logging  # noqa: E402
from school_toolkit.core.schemas import ValidationError  # noqa: E402
from school_toolkit.core.utils import load_scores_json  # noqa: E402
from school_toolkit.grading import (  # noqa: E402
    GradingConfig,
    UnsupportedSchemeError,
    build_cohort_reports,
)
from school_toolkit.grading.schemes import default_scheme_code, list_schemes  # noqa: E402


def load_subject_names(path, scores):
    """subject_id -> display name, from a JSON object or the score rows."""
    if path is None:
        return {s.subject_id: s.subject_id for s in scores}
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object of subject_id -> name")
    return {str(k): str(v) for k, v in data.items()}


def format_line(report):
    position = f"{report.position}/{report.cohort_size}" if report.position else "-"
    return (
        f"{report.student_id:<12} aggregate {report.aggregate.aggregate_score:>3}  "
        f"{report.division:<11} {report.overall_percentage:6.2f}%  position {position}"
    )


def main(argv=None):
    parser = argparse.ArgumentParser(description="Grade a class and print term results")
    parser.add_argument("--scores", "-s", type=Path, help="JSON list of score rows")
    parser.add_argument("--scheme", help="Grading scheme code (default: bundled default)")
    parser.add_argument("--subjects", type=Path, help="JSON object of subject_id -> name")
    parser.add_argument("--best-of", type=int, help="Override the scheme's best-of count")
    parser.add_argument("--json", action="store_true", help="Print full reports as JSON")
    parser.add_argument("--list-schemes", action="store_true", help="List available grading schemes and exit")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    if args.list_schemes:
        default = default_scheme_code()
        for scheme in list_schemes():
            marker = " (default)" if scheme.code == default else ""
            print(f"{scheme.code:<10} {scheme.name}{marker}")
        return 0
    if args.scores is None:
        parser.error("--scores is required")

    logger = configure_logging(args.verbose)

    try:
        config = GradingConfig(scheme_code=args.scheme, best_of=args.best_of)
        scores = load_scores_json(args.scores)
        subject_names = load_subject_names(args.subjects, scores)
        reports = build_cohort_reports(scores, subject_names, config)
    except (OSError, ValidationError, UnsupportedSchemeError, ValueError) as e:
        logger.error(str(e))
        return 1

    if args.json:
        print(json.dumps([r.to_dict() for r in reports], indent=2))
    else:
        for report in reports:
            print(format_line(report))
    return 0


if __name__ == "__main__":
    sys.exit(main())
