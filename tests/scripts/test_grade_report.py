"""Tests for the grade_report command-line script."""

import importlib.util
import json
import logging
from pathlib import Path

import pytest

SCRIPT_PATH = Path(__file__).resolve().parents[2] / "scripts" / "grade_report.py"


@pytest.fixture
def grade_report():
    """Import the script as a module."""
    spec = importlib.util.spec_from_file_location("grade_report", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture(autouse=True)
def restore_root_logging():
    """The script reconfigures root logging; put it back afterwards."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def scores_file(tmp_path):
    rows = []
    for student, marks in (("S1", [85, 72, 65, 55]), ("S2", [40, 35, 20, 10])):
        for subject, mark in zip(("ENG", "MATH", "BIO", "CHEM"), marks):
            rows.append({
                "student_id": student,
                "subject_id": subject,
                "total_awarded": mark,
                "total_possible": 100,
            })
    path = tmp_path / "scores.json"
    path.write_text(json.dumps(rows))
    return path


class TestGradeReportScript:
    """Tests for main()."""

    def test_main_when_valid_scores_then_prints_line_per_student(self, grade_report, scores_file, capsys):
        # Act
        exit_code = grade_report.main(["--scores", str(scores_file)])

        # Assert
        out = capsys.readouterr().out.splitlines()
        assert exit_code == 0
        assert len(out) == 2
        assert out[0].startswith("S1")
        assert "Division 1" in out[0]
        assert "position 1/2" in out[0]
        assert "position 2/2" in out[1]

    def test_main_when_json_flag_then_prints_reports(self, grade_report, scores_file, capsys):
        exit_code = grade_report.main(["--scores", str(scores_file), "--json"])

        data = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert [r["student_id"] for r in data] == ["S1", "S2"]
        assert data[0]["aggregate"] == 10

    def test_main_when_subject_names_given_then_used(self, grade_report, scores_file, tmp_path, capsys):
        names = tmp_path / "subjects.json"
        names.write_text(json.dumps({"ENG": "English", "MATH": "Mathematics"}))

        grade_report.main(["--scores", str(scores_file), "--subjects", str(names), "--json"])

        data = json.loads(capsys.readouterr().out)
        assert [s["subject_name"] for s in data[0]["subjects"]] == ["English", "Mathematics"]

    def test_main_when_missing_file_then_returns_error(self, grade_report, tmp_path):
        assert grade_report.main(["--scores", str(tmp_path / "missing.json")]) == 1

    def test_main_when_unknown_scheme_then_returns_error(self, grade_report, scores_file):
        assert grade_report.main(["--scores", str(scores_file), "--scheme", "nope"]) == 1

    def test_main_when_invalid_best_of_then_returns_error(self, grade_report, scores_file):
        assert grade_report.main(["--scores", str(scores_file), "--best-of", "0"]) == 1

    def test_main_when_subjects_path_is_directory_then_returns_error(self, grade_report, scores_file, tmp_path):
        """An unreadable names file is bad input, not a crash."""
        assert grade_report.main(["--scores", str(scores_file), "--subjects", str(tmp_path)]) == 1

    def test_main_when_list_schemes_then_prints_bundled_default(self, grade_report, capsys):
        exit_code = grade_report.main(["--list-schemes"])

        out = capsys.readouterr().out.splitlines()
        assert exit_code == 0
        assert out == ["uneb       UNEB (Uganda National Examinations Board) (default)"]

    def test_main_when_scores_missing_then_usage_error(self, grade_report):
        with pytest.raises(SystemExit) as exc_info:
            grade_report.main([])

        assert exc_info.value.code == 2
