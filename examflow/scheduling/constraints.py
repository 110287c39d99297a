from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from ..models import SlotTag, ViolationKind
from .ledger import ViolationLedger


class StudentCalendar:
    """Committed (day, slot) pairs per student for one run."""

    def __init__(self):
        self._exams: Dict[int, List[Tuple[int, int]]] = {}

    def exams_of(self, student_id: int) -> List[Tuple[int, int]]:
        return self._exams.get(student_id, [])

    def book(self, student_ids: Iterable[int], day: int, slot: int) -> None:
        for sid in student_ids:
            self._exams.setdefault(sid, []).append((day, slot))


@dataclass(frozen=True)
class SlotCheck:
    accepted: bool
    consecutive: bool = False
    three_per_day: bool = False

    @property
    def tag(self) -> SlotTag:
        # three-per-day wins when both rules fire
        if self.three_per_day:
            return SlotTag.THREE_PER_DAY
        if self.consecutive:
            return SlotTag.CONSECUTIVE_SLOTS
        return SlotTag.NONE


REJECTED = SlotCheck(accepted=False)


def evaluate_slot(day: int, slot: int, student_ids: Iterable[int],
                  calendar: StudentCalendar, ledger: ViolationLedger) -> SlotCheck:
    """Check a candidate (day, slot) against the course's students.

    A student already sitting an exam in this exact slot rejects the candidate.
    Back-to-back slots and a third exam on the same day are accepted only while
    the matching relaxation is enabled and has budget left.
    """
    consecutive = False
    three_per_day = False
    for sid in student_ids:
        same_day = 0
        for d, s in calendar.exams_of(sid):
            if d != day:
                continue
            if s == slot:
                return REJECTED
            if abs(s - slot) == 1:
                consecutive = True
            same_day += 1
        if same_day >= 2:
            three_per_day = True
    if consecutive and not ledger.allows(ViolationKind.CONSECUTIVE_SLOTS):
        return REJECTED
    if three_per_day and not ledger.allows(ViolationKind.THREE_PER_DAY):
        return REJECTED
    return SlotCheck(True, consecutive=consecutive, three_per_day=three_per_day)
