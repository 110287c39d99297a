from typing import Dict, List, Sequence

from ..config import RelaxationPolicy
from ..models import Assignment, Course, ScheduleResult, ViolationEntry, ViolationKind

DESCRIPTIONS = {
    ViolationKind.CONSECUTIVE_SLOTS: "Students with exams in consecutive slots",
    ViolationKind.THREE_PER_DAY: "Students with three or more exams in one day",
    ViolationKind.CAPACITY_OVERFLOW: "Exams seated above classroom capacity",
}


class ViolationLedger:
    """Running soft-violation counters and unassigned courses for one run."""

    def __init__(self, relaxations: RelaxationPolicy):
        self.relaxations = relaxations
        self.counts: Dict[ViolationKind, int] = {
            ViolationKind.CONSECUTIVE_SLOTS: 0,
            ViolationKind.THREE_PER_DAY: 0,
            ViolationKind.CAPACITY_OVERFLOW: 0,
        }
        self.unassigned: List[Course] = []

    def allows(self, kind: ViolationKind) -> bool:
        """Whether one more violation of ``kind`` fits the relaxation budget.

        Capacity overflow has no occurrence budget; room selection bounds each
        occurrence by percentage instead.
        """
        r = self.relaxations
        if kind is ViolationKind.CONSECUTIVE_SLOTS:
            return r.allow_consecutive_slots and self.counts[kind] < r.max_consecutive_violations
        if kind is ViolationKind.THREE_PER_DAY:
            return r.allow_three_per_day and self.counts[kind] < r.max_three_per_day_violations
        return False

    def record(self, kind: ViolationKind) -> None:
        self.counts[kind] += 1

    def record_unassigned(self, course: Course) -> None:
        self.unassigned.append(course)

    def entries(self) -> List[ViolationEntry]:
        out = [ViolationEntry(kind, DESCRIPTIONS[kind], n)
               for kind, n in self.counts.items() if n > 0]
        for course in self.unassigned:
            label = f"{course.code} ({course.name})" if course.name else course.code
            out.append(ViolationEntry(ViolationKind.UNASSIGNED_COURSE,
                                      f"Could not schedule {label}", 1, course_id=course.id))
        return out


def assemble_result(assignments: Sequence[Assignment], ledger: ViolationLedger) -> ScheduleResult:
    violations = ledger.entries()
    feasible = not ledger.unassigned and not violations
    return ScheduleResult(assignments=list(assignments), violations=violations, is_feasible=feasible)
