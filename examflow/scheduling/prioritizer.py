from typing import Iterable, List, Tuple

from ..config import OptimizationPreference
from ..models import Course
from .enrollment_index import EnrollmentIndex


def prioritize_courses(courses: Iterable[Course], index: EnrollmentIndex,
                       preference: OptimizationPreference) -> List[Tuple[Course, int]]:
    """Return (course, student count) pairs in processing order.

    ``sorted`` is stable, so equal-sized courses keep their input order.
    """
    ordered = [(c, index.count(c.id)) for c in courses]
    if preference.place_difficult_early:
        ordered.sort(key=lambda pair: pair[1], reverse=True)
    elif preference.place_difficult_late:
        ordered.sort(key=lambda pair: pair[1])
    return ordered
