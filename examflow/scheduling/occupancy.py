from typing import List, Optional


class SlotTable:
    """Institution-wide (day, slot) grid; each cell holds at most one course id.

    Days and slots are 1-based, matching the numbering stored on assignments.
    """

    def __init__(self, num_days: int, slots_per_day: int):
        self.num_days = num_days
        self.slots_per_day = slots_per_day
        self._cells: List[List[Optional[int]]] = [
            [None] * slots_per_day for _ in range(num_days)
        ]

    def course_at(self, day: int, slot: int) -> Optional[int]:
        return self._cells[day - 1][slot - 1]

    def is_free(self, day: int, slot: int) -> bool:
        return self.course_at(day, slot) is None

    def occupy(self, day: int, slot: int, course_id: int) -> None:
        if not self.is_free(day, slot):
            raise ValueError(f"day {day} slot {slot} already holds course {self.course_at(day, slot)}")
        self._cells[day - 1][slot - 1] = course_id

    def slots_used_on(self, day: int) -> int:
        return sum(1 for cell in self._cells[day - 1] if cell is not None)

    def days_in_use(self) -> List[int]:
        return [d for d in range(1, self.num_days + 1) if self.slots_used_on(d) > 0]
