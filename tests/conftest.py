import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import school_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from school_toolkit.core.models import Schedule, SubjectScore  # noqa: E402
from school_toolkit.grading.schemes import reset_registry  # noqa: E402


# Common test fixtures
@pytest.fixture(autouse=True)
def fresh_scheme_registry():
    """Each test starts from the bundled schemes only."""
    reset_registry()
    yield
    reset_registry()


@pytest.fixture
def week_schedule():
    """Monday-Friday with three periods."""
    return Schedule.with_periods(1, 2, 3)


@pytest.fixture
def subject_names():
    return {
        "ENG": "English",
        "MATH": "Mathematics",
        "BIO": "Biology",
        "CHEM": "Chemistry",
        "PHY": "Physics",
    }


@pytest.fixture
def make_score():
    """Factory for SubjectScore with short positional args."""

    def _make(student_id, subject_id, awarded, possible=100):
        return SubjectScore(subject_id, student_id, awarded, possible)

    return _make
