from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

@dataclass(frozen=True)
class Course:
    id: int
    code: str
    name: str = ""

@dataclass(frozen=True)
class Student:
    id: int
    student_id: str = ""  # external registration number
    name: str = ""

@dataclass(frozen=True)
class Enrollment:
    student_id: int
    course_id: int

@dataclass(frozen=True)
class Classroom:
    id: int
    name: str
    capacity: int


class SlotTag(Enum):
    """Soft rule recorded on a committed assignment."""
    NONE = "none"
    CONSECUTIVE_SLOTS = "consecutive_slots"
    THREE_PER_DAY = "three_per_day"


class ViolationKind(Enum):
    CONSECUTIVE_SLOTS = "consecutive_slots"
    THREE_PER_DAY = "three_per_day"
    CAPACITY_OVERFLOW = "capacity_overflow"
    UNASSIGNED_COURSE = "unassigned_course"


@dataclass(frozen=True)
class Assignment:
    course_id: int
    classroom_id: int
    day: int
    slot: int
    tag: SlotTag = SlotTag.NONE

    @property
    def violation_type(self) -> Optional[str]:
        # nullable column form used by storage rows
        if self.tag is SlotTag.NONE:
            return None
        return self.tag.value

@dataclass(frozen=True)
class ViolationEntry:
    kind: ViolationKind
    description: str
    count: int
    course_id: Optional[int] = None  # set for unassigned_course entries

@dataclass
class ScheduleResult:
    assignments: List[Assignment] = field(default_factory=list)
    violations: List[ViolationEntry] = field(default_factory=list)
    is_feasible: bool = False

    @property
    def total_violations(self) -> int:
        return sum(v.count for v in self.violations)

    @property
    def unassigned_course_ids(self) -> List[int]:
        return [v.course_id for v in self.violations
                if v.kind is ViolationKind.UNASSIGNED_COURSE]

    def assignment_for(self, course_id: int) -> Optional[Assignment]:
        for a in self.assignments:
            if a.course_id == course_id:
                return a
        return None
