import pytest

from examflow.config import OptimizationPreference, RelaxationPolicy, SchedulerConfig
from examflow.models import Classroom, Course, Enrollment, Student


@pytest.fixture
def make_courses():
    def _make(n):
        return [Course(id=i, code=f"C{i}", name=f"Course {i}") for i in range(1, n + 1)]
    return _make


@pytest.fixture
def make_students():
    def _make(n):
        return [Student(id=i, student_id=f"S{i:04d}", name=f"Student {i}") for i in range(1, n + 1)]
    return _make


@pytest.fixture
def enroll():
    """Build enrollments from {course_id: [student ids]}."""
    def _make(mapping):
        return [Enrollment(student_id=sid, course_id=cid)
                for cid, sids in mapping.items() for sid in sids]
    return _make


@pytest.fixture
def big_room():
    return [Classroom(id=1, name="Hall-1", capacity=500)]


@pytest.fixture
def make_config():
    def _make(days=1, slots=2, optimization=None, **relax):
        return SchedulerConfig(
            num_days=days,
            slots_per_day=slots,
            optimization=optimization or OptimizationPreference(),
            relaxations=RelaxationPolicy(**relax),
        )
    return _make
