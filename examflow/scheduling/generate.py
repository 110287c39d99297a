import logging
from typing import Iterable, Optional, Sequence

from ..algorithms.greedy import GreedyAllocator
from ..algorithms.strategy import AllocationStrategy
from ..config import ConfigurationError, SchedulerConfig
from ..models import Classroom, Course, Enrollment, ScheduleResult, Student
from .enrollment_index import build_enrollment_index
from .ledger import assemble_result
from .prioritizer import prioritize_courses

logger = logging.getLogger(__name__)

STRATEGIES = {
    GreedyAllocator.name: GreedyAllocator,
}


def make_strategy(algo: str) -> AllocationStrategy:
    if algo not in STRATEGIES:
        raise ValueError(f"algo must be one of {sorted(STRATEGIES)}, got {algo!r}")
    return STRATEGIES[algo]()


def check_classrooms(classrooms: Sequence[Classroom]) -> None:
    for room in classrooms:
        if room.capacity < 0:
            raise ConfigurationError(f"classroom {room.name!r} has negative capacity {room.capacity}")


def generate_schedule(courses: Sequence[Course], students: Optional[Iterable[Student]],
                      enrollments: Iterable[Enrollment], classrooms: Sequence[Classroom],
                      config: SchedulerConfig, algo: str = "greedy") -> ScheduleResult:
    """Assign every course to a (day, slot, classroom) triple.

    Courses that cannot be placed are reported as ``unassigned_course`` entries
    rather than raised. Every call builds its own state, so concurrent calls with
    independent inputs do not interact.
    """
    config.validate()
    check_classrooms(classrooms)
    strategy = make_strategy(algo)

    index = build_enrollment_index(courses, enrollments, students)
    ordered = prioritize_courses(courses, index, config.optimization)
    allocation = strategy.allocate(ordered, index, classrooms, config)
    result = assemble_result(allocation.assignments, allocation.ledger)

    logger.info(
        "Scheduled %d/%d courses over %d days x %d slots (%d violation entries, feasible=%s)",
        len(result.assignments), len(courses), config.num_days, config.slots_per_day,
        len(result.violations), result.is_feasible,
    )
    return result
