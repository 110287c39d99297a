from typing import Dict, Sequence, Set, Tuple

from ..config import RelaxationPolicy, SchedulerConfig
from ..models import Classroom, ScheduleResult, ViolationKind
from .enrollment_index import EnrollmentIndex
from .room_selection import overflow_percent

def slots_ok(result: ScheduleResult) -> bool:
    seen: Set[Tuple[int, int]] = set()
    for a in result.assignments:
        key = (a.day, a.slot)
        if key in seen:
            return False
        seen.add(key)
    return True

def calendar_ok(result: ScheduleResult, config: SchedulerConfig) -> bool:
    for a in result.assignments:
        if not (1 <= a.day <= config.num_days and 1 <= a.slot <= config.slots_per_day):
            return False
    return True

def students_ok(result: ScheduleResult, index: EnrollmentIndex) -> bool:
    booked: Dict[int, Set[Tuple[int, int]]] = {}
    for a in result.assignments:
        for sid in index.students_of(a.course_id):
            slots = booked.setdefault(sid, set())
            if (a.day, a.slot) in slots:
                return False
            slots.add((a.day, a.slot))
    return True

def violation_count(result: ScheduleResult, kind: ViolationKind) -> int:
    return sum(v.count for v in result.violations if v.kind is kind)

def budgets_ok(result: ScheduleResult, relaxations: RelaxationPolicy) -> bool:
    consecutive = violation_count(result, ViolationKind.CONSECUTIVE_SLOTS)
    three = violation_count(result, ViolationKind.THREE_PER_DAY)
    cap_consecutive = relaxations.max_consecutive_violations if relaxations.allow_consecutive_slots else 0
    cap_three = relaxations.max_three_per_day_violations if relaxations.allow_three_per_day else 0
    return consecutive <= cap_consecutive and three <= cap_three

def capacity_ok(result: ScheduleResult, index: EnrollmentIndex, classrooms: Sequence[Classroom],
                relaxations: RelaxationPolicy) -> bool:
    rooms = {r.id: r for r in classrooms}
    overflows = 0
    for a in result.assignments:
        if a.classroom_id not in rooms:
            return False
        need = index.count(a.course_id)
        cap = rooms[a.classroom_id].capacity
        if need <= cap:
            continue
        if not relaxations.allow_capacity_overflow:
            return False
        if overflow_percent(need, cap) > relaxations.max_capacity_overflow_percent:
            return False
        overflows += 1
    return overflows == violation_count(result, ViolationKind.CAPACITY_OVERFLOW)
