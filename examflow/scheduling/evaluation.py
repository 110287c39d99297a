from typing import Sequence

import networkx as nx

from ..config import SchedulerConfig
from ..graph_build import build_conflict_graph
from ..models import Classroom, ScheduleResult
from .enrollment_index import EnrollmentIndex
from .validation import budgets_ok, calendar_ok, capacity_ok, slots_ok, students_ok


def _greedy_clique_lb(G: nx.Graph) -> int:
    """Fast lower bound on the number of distinct slots needed.

    Courses in a clique of the conflict graph pairwise share students, so each
    needs its own slot. Grows a clique greedily from the highest-degree course.
    """
    if G.number_of_nodes() == 0:
        return 0
    seed = max(G.nodes(), key=lambda u: G.degree(u))
    clique = {seed}
    candidates = set(G.neighbors(seed))
    while candidates:
        u = max(candidates, key=lambda v: G.degree(v))
        new_cands = {v for v in candidates if all(G.has_edge(v, w) for w in clique)}
        if u in new_cands:
            clique.add(u)
            candidates = new_cands.intersection(G.neighbors(u))
        else:
            candidates.remove(u)
    return len(clique)

def summary(index: EnrollmentIndex, classrooms: Sequence[Classroom], config: SchedulerConfig,
            result: ScheduleResult) -> str:
    G = build_conflict_graph(index)
    n = G.number_of_nodes()
    m = G.number_of_edges()
    total_slots = config.total_slots
    days_used = len({a.day for a in result.assignments})
    rooms_used = len({a.classroom_id for a in result.assignments})
    ok_slots = slots_ok(result) and calendar_ok(result, config)
    ok_students = students_ok(result, index)
    ok_budgets = budgets_ok(result, config.relaxations)
    ok_cap = capacity_ok(result, index, classrooms, config.relaxations)
    lb = _greedy_clique_lb(G)
    warning = ""
    if total_slots < n:
        warning += f"Warning: {n} courses but only {total_slots} slots; some courses cannot be placed.\n"
    if total_slots < lb:
        warning += f"Warning: slots={total_slots} < clique LB={lb}; conflict-free placement is impossible.\n"
    lines = [
        f"Courses: {n}  Conflicts: {m}",
        f"Slots available: {total_slots} ({config.num_days} days x {config.slots_per_day})  "
        f"Days used: {days_used}  Rooms used: {rooms_used}",
        f"Clique lower bound: {lb}",
        f"Placed: {len(result.assignments)}  Unassigned: {len(result.unassigned_course_ids)}",
        f"Valid (slots): {ok_slots}  Valid (students): {ok_students}  "
        f"Valid (budgets): {ok_budgets}  Valid (capacity): {ok_cap}",
        f"Feasible: {result.is_feasible}  Total violations: {result.total_violations}",
    ]
    for v in result.violations:
        lines.append(f"  - {v.kind.value}: {v.description} (x{v.count})")
    return "\n".join(lines) + "\n" + warning
