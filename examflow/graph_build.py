from typing import Dict, List, Set
import networkx as nx

from .scheduling.enrollment_index import EnrollmentIndex

def build_conflict_graph(index: EnrollmentIndex) -> nx.Graph:
    """Course conflict graph: an edge joins two courses sharing at least one student.

    Edge attribute ``weight`` is the number of shared students.
    """
    G = nx.Graph()
    courses_of: Dict[int, Set[int]] = {}
    for course_id, sids in index.students_by_course.items():
        G.add_node(course_id)
        for sid in sids:
            courses_of.setdefault(sid, set()).add(course_id)
    for course_ids in courses_of.values():
        ids: List[int] = sorted(course_ids)
        for i in range(len(ids)):
            for j in range(i + 1, len(ids)):
                u, v = ids[i], ids[j]
                if G.has_edge(u, v):
                    G[u][v]["weight"] += 1
                else:
                    G.add_edge(u, v, weight=1)
    return G
