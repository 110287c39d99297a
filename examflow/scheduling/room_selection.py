from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from ..config import RelaxationPolicy
from ..models import Classroom


@dataclass(frozen=True)
class RoomChoice:
    classroom: Classroom
    overflow: bool = False
    overflow_percent: float = 0.0


def overflow_percent(required: int, capacity: int) -> float:
    if capacity <= 0:
        return float("inf")
    return (required - capacity) * 100 / capacity


def _most_used_fitting(classrooms: Sequence[Classroom], required: int,
                       usage: Dict[int, int]) -> Optional[Classroom]:
    best = None
    for room in classrooms:
        used = usage.get(room.id, 0)
        if used > 0 and room.capacity >= required:
            if best is None or used > usage[best.id]:
                best = room
    return best


def select_classroom(classrooms: Sequence[Classroom], required: int, usage: Dict[int, int],
                     minimize_rooms_used: bool, relaxations: RelaxationPolicy) -> Optional[RoomChoice]:
    """Pick a room for ``required`` seats, or None when nothing is acceptable.

    With ``minimize_rooms_used`` the busiest already-used room that fits wins.
    Otherwise the smallest room that fits is taken. If no room fits and capacity
    overflow is allowed, the largest room is accepted when the overflow stays within
    the configured percentage.
    """
    if not classrooms:
        return None
    if minimize_rooms_used:
        room = _most_used_fitting(classrooms, required, usage)
        if room is not None:
            return RoomChoice(room)
    # sorted() is stable: equal capacities keep their input order
    by_size: List[Classroom] = sorted(classrooms, key=lambda r: r.capacity)
    for room in by_size:
        if room.capacity >= required:
            return RoomChoice(room)
    if not relaxations.allow_capacity_overflow:
        return None
    largest = max(classrooms, key=lambda r: r.capacity)
    pct = overflow_percent(required, largest.capacity)
    if pct <= relaxations.max_capacity_overflow_percent:
        return RoomChoice(largest, overflow=True, overflow_percent=pct)
    return None
