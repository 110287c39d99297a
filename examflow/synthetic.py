"""Seeded synthetic datasets in the import CSV formats."""
import os
import random
from dataclasses import dataclass, field
from typing import List

import numpy as np
import pandas as pd
from faker import Faker

from .models import Classroom, Course, Enrollment, Student

SUBJECTS = [
    ("CS", "Computer Science"), ("MATH", "Mathematics"), ("PHYS", "Physics"),
    ("CHEM", "Chemistry"), ("BIO", "Biology"), ("ENG", "English"), ("HIST", "History"),
    ("ECON", "Economics"), ("PSYC", "Psychology"), ("SOC", "Sociology"), ("ART", "Art"),
    ("MUS", "Music"), ("PE", "Physical Education"),
]
LEVELS = ["101", "102", "201", "202", "301", "302", "401", "402"]
PREFIXES = ["Introduction to", "Principles of", "Topics in", "Advanced", "Seminar in"]
BUILDINGS = ["Room", "Hall", "Lab", "Auditorium", "Studio"]
# (share of rooms, min capacity, max capacity)
ROOM_BANDS = [(0.18, 12, 25), (0.59, 26, 50), (0.18, 51, 80), (0.05, 81, 100)]


@dataclass
class Dataset:
    classrooms: List[Classroom] = field(default_factory=list)
    courses: List[Course] = field(default_factory=list)
    students: List[Student] = field(default_factory=list)
    enrollments: List[Enrollment] = field(default_factory=list)


def generate_dataset(n_students: int = 1000, n_courses: int = 200, n_classrooms: int = 85,
                     min_courses_per_student: int = 1, max_courses_per_student: int = 8,
                     seed: int = 42) -> Dataset:
    rnd = random.Random(seed)
    rng = np.random.default_rng(seed)
    fake = Faker()
    fake.seed_instance(seed)

    classrooms = []
    for i in range(n_classrooms):
        share = rnd.random()
        for weight, lo, hi in ROOM_BANDS:
            if share < weight:
                break
            share -= weight
        name = f"{BUILDINGS[i % len(BUILDINGS)]}-{101 + i:03d}"
        classrooms.append(Classroom(id=i + 1, name=name, capacity=rnd.randint(lo, hi)))

    courses = []
    for i in range(n_courses):
        prefix, subject = SUBJECTS[i % len(SUBJECTS)]
        level = LEVELS[(i // len(SUBJECTS)) % len(LEVELS)]
        cycle = i // (len(SUBJECTS) * len(LEVELS))
        code = f"{prefix}{level}" + (f"-{cycle}" if cycle else "")
        courses.append(Course(id=i + 1, code=code, name=f"{rnd.choice(PREFIXES)} {subject}"))

    students = [Student(id=i, student_id=f"S{i:04d}", name=fake.name())
                for i in range(1, n_students + 1)]

    # Zipf-like popularity: a few large courses, a long tail of small ones
    popularity = rng.zipf(a=1.4, size=n_courses).astype(float)
    if n_courses:
        popularity /= popularity.sum()
    enrollments = []
    k_max = min(max_courses_per_student, n_courses)
    for s in students:
        k = rnd.randint(min(min_courses_per_student, k_max), k_max)
        if k == 0:
            continue
        chosen = rng.choice(n_courses, size=k, replace=False, p=popularity)
        for idx in sorted(chosen):
            enrollments.append(Enrollment(student_id=s.id, course_id=courses[idx].id))
    return Dataset(classrooms, courses, students, enrollments)


def write_dataset(out_dir: str, data: Dataset) -> List[str]:
    """Write classrooms/courses/students/enrollments CSVs; return their paths."""
    os.makedirs(out_dir, exist_ok=True)
    code_of = {c.id: c.code for c in data.courses}
    sid_of = {s.id: s.student_id for s in data.students}
    frames = {
        "classrooms.csv": pd.DataFrame([{"name": r.name, "capacity": r.capacity} for r in data.classrooms],
                                       columns=["name", "capacity"]),
        "courses.csv": pd.DataFrame([{"code": c.code, "name": c.name} for c in data.courses],
                                    columns=["code", "name"]),
        "students.csv": pd.DataFrame([{"student_id": s.student_id, "name": s.name} for s in data.students],
                                     columns=["student_id", "name"]),
        "enrollments.csv": pd.DataFrame(
            [{"student_id": sid_of[e.student_id], "course_code": code_of[e.course_id]} for e in data.enrollments],
            columns=["student_id", "course_code"]),
    }
    paths = []
    for name, df in frames.items():
        path = os.path.join(out_dir, name)
        df.to_csv(path, index=False)
        paths.append(path)
    return paths
