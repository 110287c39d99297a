"""Tabular views of a schedule for browsing and export."""
from typing import Iterable, Optional

import pandas as pd

from .models import Classroom, Course, ScheduleResult, Student
from .scheduling.enrollment_index import EnrollmentIndex

COLUMNS = ["day", "slot", "course_id", "course_code", "course_name",
           "classroom", "capacity", "enrolled", "violation_type"]

VIEWS = ("day", "course", "classroom", "student")


def assignments_frame(result: ScheduleResult, courses: Iterable[Course], classrooms: Iterable[Classroom],
                      index: Optional[EnrollmentIndex] = None) -> pd.DataFrame:
    course_by_id = {c.id: c for c in courses}
    room_by_id = {r.id: r for r in classrooms}
    records = []
    for a in result.assignments:
        course = course_by_id.get(a.course_id)
        room = room_by_id.get(a.classroom_id)
        records.append({
            "day": a.day,
            "slot": a.slot,
            "course_id": a.course_id,
            "course_code": course.code if course else "",
            "course_name": course.name if course else "",
            "classroom": room.name if room else "",
            "capacity": room.capacity if room else 0,
            "enrolled": index.count(a.course_id) if index is not None else 0,
            "violation_type": a.violation_type,
        })
    return pd.DataFrame(records, columns=COLUMNS)


def flagged_only(df: pd.DataFrame) -> pd.DataFrame:
    return df[df["violation_type"].notna()].reset_index(drop=True)


def schedule_view(result: ScheduleResult, courses: Iterable[Course], classrooms: Iterable[Classroom],
                  index: EnrollmentIndex, view: str = "day", students: Iterable[Student] = (),
                  violations_only: bool = False) -> pd.DataFrame:
    """Assignments ordered for one of the browse modes in ``VIEWS``."""
    df = assignments_frame(result, courses, classrooms, index)
    if violations_only:
        df = flagged_only(df)
    if view == "day":
        df = df.sort_values(["day", "slot"], kind="stable")
    elif view == "course":
        df = df.sort_values(["course_code"], kind="stable")
    elif view == "classroom":
        df = df.sort_values(["classroom", "day", "slot"], kind="stable")
    elif view == "student":
        df = _student_rows(df, index, students)
    else:
        raise ValueError(f"view must be one of {VIEWS}")
    return df.reset_index(drop=True)


def _student_rows(df: pd.DataFrame, index: EnrollmentIndex, students: Iterable[Student]) -> pd.DataFrame:
    label = {s.id: s.student_id or str(s.id) for s in students}
    pairs = [{"course_id": cid, "student": label.get(sid, str(sid))}
             for cid, sids in index.students_by_course.items() for sid in sorted(sids)]
    members = pd.DataFrame(pairs, columns=["course_id", "student"])
    out = members.merge(df, on="course_id", how="inner")
    return out.sort_values(["student", "day", "slot"], kind="stable")


def day_load(result: ScheduleResult) -> pd.Series:
    """Number of exams per day."""
    days = pd.Series([a.day for a in result.assignments], dtype="int64")
    return days.value_counts().sort_index()
