from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Set

from ..models import Course, Enrollment, Student


@dataclass
class EnrollmentIndex:
    # course_id -> unique enrolled student ids
    students_by_course: Dict[int, Set[int]] = field(default_factory=dict)

    def students_of(self, course_id: int) -> Set[int]:
        return self.students_by_course.get(course_id, set())

    def count(self, course_id: int) -> int:
        return len(self.students_of(course_id))

    @property
    def counts(self) -> Dict[int, int]:
        return {cid: len(sids) for cid, sids in self.students_by_course.items()}


def build_enrollment_index(courses: Iterable[Course], enrollments: Iterable[Enrollment],
                           students: Optional[Iterable[Student]] = None) -> EnrollmentIndex:
    """Group enrollment pairs by course.

    Duplicate pairs collapse into the per-course set. Pairs naming a course outside
    ``courses`` (or, when ``students`` is given, an unknown student) are ignored.
    """
    index = EnrollmentIndex({c.id: set() for c in courses})
    known_students = None if students is None else {s.id for s in students}
    for e in enrollments:
        if e.course_id not in index.students_by_course:
            continue
        if known_students is not None and e.student_id not in known_students:
            continue
        index.students_by_course[e.course_id].add(e.student_id)
    return index
