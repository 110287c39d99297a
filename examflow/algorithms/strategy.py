from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..config import SchedulerConfig
from ..models import Assignment, Classroom, Course
from ..scheduling.enrollment_index import EnrollmentIndex
from ..scheduling.ledger import ViolationLedger


@dataclass
class Allocation:
    assignments: List[Assignment] = field(default_factory=list)
    ledger: Optional[ViolationLedger] = None


class AllocationStrategy(ABC):
    """Places prioritized courses into (day, slot, classroom) triples."""

    name = "base"

    @abstractmethod
    def allocate(self, ordered_courses: Sequence[Tuple[Course, int]], index: EnrollmentIndex,
                 classrooms: Sequence[Classroom], config: SchedulerConfig) -> Allocation:
        raise NotImplementedError
