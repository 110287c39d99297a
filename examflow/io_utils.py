import csv
import io
import json
import logging
import os
from typing import Dict, Iterable, List, Union, IO

from .config import SchedulerConfig
from .models import Classroom, Course, Enrollment, ScheduleResult, Student

logger = logging.getLogger(__name__)

TextOrPath = Union[str, os.PathLike, IO]


def _open_text(src: TextOrPath):
    """Return a text-mode file handle and a flag indicating whether to close it.

    Accepts a filesystem path, a text IO object, or a BytesIO buffer.
    Ensures CSV readers get strings, not bytes.
    """
    if isinstance(src, (str, os.PathLike)):
        f = open(src, 'r', newline='', encoding='utf-8-sig')
        return f, True
    if isinstance(src, io.BytesIO):
        src.seek(0)
        f = io.TextIOWrapper(src, encoding='utf-8-sig', newline='')
        return f, True
    if hasattr(src, 'read'):
        try:
            src.seek(0)
        except (AttributeError, OSError, io.UnsupportedOperation):
            pass  # non-seekable stream: read from the current position
        return src, False
    raise TypeError("Unsupported input type; expected path or file-like object")


def _rows(src: TextOrPath, required: Iterable[str]) -> List[Dict[str, str]]:
    f, should_close = _open_text(src)
    try:
        r = csv.DictReader(f)
        fieldnames = [h.strip() for h in (r.fieldnames or [])]
        for col in required:
            if col not in fieldnames:
                raise ValueError(f"Missing '{col}' column; found {fieldnames}")
        rows = []
        for row in r:
            clean = {str(k).strip(): (v or '').strip() for k, v in row.items() if k is not None}
            if not any(clean.values()):
                continue
            rows.append(clean)
        return rows
    finally:
        if should_close:
            f.close()


def load_classrooms(src: TextOrPath) -> List[Classroom]:
    """CSV ``name,capacity``; ids are assigned in file order from 1."""
    return [Classroom(id=i, name=row['name'], capacity=int(row['capacity']))
            for i, row in enumerate(_rows(src, ['name', 'capacity']), start=1)]


def load_courses(src: TextOrPath) -> List[Course]:
    return [Course(id=i, code=row['code'], name=row.get('name', ''))
            for i, row in enumerate(_rows(src, ['code']), start=1)]


def load_students(src: TextOrPath) -> List[Student]:
    return [Student(id=i, student_id=row['student_id'], name=row.get('name', ''))
            for i, row in enumerate(_rows(src, ['student_id']), start=1)]


def load_enrollments(src: TextOrPath, students: Iterable[Student], courses: Iterable[Course]) -> List[Enrollment]:
    """CSV ``student_id,course_code`` resolved against loaded students and courses.

    Rows naming an unknown student or course are skipped.
    """
    student_ids = {s.student_id: s.id for s in students}
    course_ids = {c.code: c.id for c in courses}
    enrollments: List[Enrollment] = []
    skipped = 0
    for row in _rows(src, ['student_id', 'course_code']):
        sid = student_ids.get(row['student_id'])
        cid = course_ids.get(row['course_code'])
        if sid is None or cid is None:
            skipped += 1
            continue
        enrollments.append(Enrollment(student_id=sid, course_id=cid))
    if skipped:
        logger.warning("Skipped %d enrollment row(s) with unknown student or course", skipped)
    return enrollments


def load_config(path: Union[str, os.PathLike]) -> SchedulerConfig:
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    return SchedulerConfig.from_dict(data).validate()


def save_assignments_csv(path: str, result: ScheduleResult, courses: Iterable[Course],
                         classrooms: Iterable[Classroom]):
    code_of = {c.id: c.code for c in courses}
    room_of = {r.id: r.name for r in classrooms}
    with open(path, 'w', newline='', encoding='utf-8') as f:
        w = csv.writer(f)
        w.writerow(['course_id', 'course_code', 'classroom', 'day', 'slot', 'violation_type'])
        for a in sorted(result.assignments, key=lambda a: (a.day, a.slot)):
            w.writerow([a.course_id, code_of.get(a.course_id, ''), room_of.get(a.classroom_id, ''),
                        a.day, a.slot, a.violation_type or ''])


def save_violations_csv(path: str, result: ScheduleResult):
    with open(path, 'w', newline='', encoding='utf-8') as f:
        w = csv.writer(f)
        w.writerow(['type', 'description', 'count'])
        for v in result.violations:
            w.writerow([v.kind.value, v.description, v.count])
