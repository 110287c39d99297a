import logging
from typing import Dict, Optional, Sequence, Tuple

from ..config import SchedulerConfig
from ..models import Assignment, Classroom, Course, ViolationKind
from ..scheduling.constraints import StudentCalendar, evaluate_slot
from ..scheduling.day_order import order_days
from ..scheduling.enrollment_index import EnrollmentIndex
from ..scheduling.ledger import ViolationLedger
from ..scheduling.occupancy import SlotTable
from ..scheduling.room_selection import select_classroom
from .strategy import Allocation, AllocationStrategy

logger = logging.getLogger(__name__)


class _GreedyRun:
    """Mutable state owned by a single allocate() call."""

    def __init__(self, index: EnrollmentIndex, classrooms: Sequence[Classroom], config: SchedulerConfig):
        self.index = index
        self.classrooms = list(classrooms)
        self.config = config
        self.table = SlotTable(config.num_days, config.slots_per_day)
        self.calendar = StudentCalendar()
        self.room_usage: Dict[int, int] = {r.id: 0 for r in self.classrooms}
        self.ledger = ViolationLedger(config.relaxations)
        self.allocation = Allocation(ledger=self.ledger)

    def place(self, course: Course, size: int) -> Optional[Assignment]:
        students = self.index.students_of(course.id)
        optimization = self.config.optimization
        for day in order_days(self.table, optimization):
            for slot in range(1, self.config.slots_per_day + 1):
                if not self.table.is_free(day, slot):
                    continue
                check = evaluate_slot(day, slot, students, self.calendar, self.ledger)
                if not check.accepted:
                    continue
                choice = select_classroom(self.classrooms, size, self.room_usage,
                                          optimization.minimize_rooms_used, self.config.relaxations)
                if choice is None:
                    continue
                # first feasible candidate wins, no backtracking
                self.table.occupy(day, slot, course.id)
                self.room_usage[choice.classroom.id] = self.room_usage.get(choice.classroom.id, 0) + 1
                if check.consecutive:
                    self.ledger.record(ViolationKind.CONSECUTIVE_SLOTS)
                if check.three_per_day:
                    self.ledger.record(ViolationKind.THREE_PER_DAY)
                if choice.overflow:
                    self.ledger.record(ViolationKind.CAPACITY_OVERFLOW)
                    logger.debug("%s overflows %s by %.1f%%", course.code,
                                 choice.classroom.name, choice.overflow_percent)
                self.calendar.book(students, day, slot)
                assignment = Assignment(course.id, choice.classroom.id, day, slot, check.tag)
                self.allocation.assignments.append(assignment)
                return assignment
        return None


class GreedyAllocator(AllocationStrategy):
    """Single deterministic pass: each course takes its first feasible placement."""

    name = "greedy"

    def allocate(self, ordered_courses: Sequence[Tuple[Course, int]], index: EnrollmentIndex,
                 classrooms: Sequence[Classroom], config: SchedulerConfig) -> Allocation:
        run = _GreedyRun(index, classrooms, config)
        for course, size in ordered_courses:
            placed = run.place(course, size)
            if placed is None:
                run.ledger.record_unassigned(course)
                logger.debug("%s (%d students) left unassigned", course.code, size)
            else:
                logger.debug("%s -> day %d slot %d room %d (%s)", course.code, placed.day,
                             placed.slot, placed.classroom_id, placed.tag.value)
        return run.allocation
