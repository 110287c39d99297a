from typing import List

from ..config import OptimizationPreference
from .occupancy import SlotTable


def balanced_days(table: SlotTable) -> List[int]:
    # least-loaded day first (lowest number on ties), then wrap around
    n = table.num_days
    start = min(range(1, n + 1), key=lambda d: (table.slots_used_on(d), d))
    return [(start - 1 + i) % n + 1 for i in range(n)]


def packed_days(table: SlotTable) -> List[int]:
    used = table.days_in_use()
    unused = [d for d in range(1, table.num_days + 1) if d not in used]
    return used + unused


def order_days(table: SlotTable, preference: OptimizationPreference) -> List[int]:
    if preference.balance_across_days:
        return balanced_days(table)
    if preference.minimize_days_used:
        return packed_days(table)
    return list(range(1, table.num_days + 1))
