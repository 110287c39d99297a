import pytest

from examflow.config import ConfigurationError, OptimizationPreference
from examflow.models import Classroom, Enrollment, SlotTag, ViolationKind
from examflow.scheduling.enrollment_index import build_enrollment_index
from examflow.scheduling.generate import generate_schedule
from examflow.scheduling.validation import (
    budgets_ok, calendar_ok, capacity_ok, slots_ok, students_ok, violation_count
)
from examflow.synthetic import generate_dataset

NO_BALANCE = OptimizationPreference(balance_across_days=False)


def _kinds(result):
    return [v.kind for v in result.violations]


def test_global_slot_capacity_leaves_course_unassigned(make_courses, make_students, enroll, big_room, make_config):
    courses = make_courses(3)
    result = generate_schedule(courses, make_students(3), enroll({1: [1], 2: [2], 3: [3]}),
                               big_room, make_config(days=1, slots=2))
    assert [(a.course_id, a.day, a.slot) for a in result.assignments] == [(1, 1, 1), (2, 1, 2)]
    assert _kinds(result) == [ViolationKind.UNASSIGNED_COURSE]
    assert result.violations[0].count == 1
    assert result.unassigned_course_ids == [3]
    assert not result.is_feasible


def test_balance_spreads_one_course_per_day(make_courses, make_students, enroll, big_room, make_config):
    courses = make_courses(4)
    config = make_config(days=2, slots=1, optimization=OptimizationPreference(balance_across_days=True))
    result = generate_schedule(courses, make_students(4), enroll({1: [1], 2: [2], 3: [3], 4: [4]}),
                               big_room, config)
    assert sorted(a.day for a in result.assignments) == [1, 2]
    assert result.unassigned_course_ids == [3, 4]
    assert _kinds(result) == [ViolationKind.UNASSIGNED_COURSE] * 2


def test_consecutive_disallowed_blocks_second_exam(make_courses, make_students, enroll, big_room, make_config):
    courses = make_courses(2)
    result = generate_schedule(courses, make_students(1), enroll({1: [1], 2: [1]}),
                               big_room, make_config(days=1, slots=2, allow_consecutive_slots=False))
    assert len(result.assignments) == 1
    assert result.unassigned_course_ids == [2]


def test_consecutive_allowed_within_budget(make_courses, make_students, enroll, big_room, make_config):
    courses = make_courses(2)
    config = make_config(days=1, slots=2, allow_consecutive_slots=True, max_consecutive_violations=1)
    result = generate_schedule(courses, make_students(1), enroll({1: [1], 2: [1]}), big_room, config)
    assert len(result.assignments) == 2
    assert result.assignment_for(2).tag is SlotTag.CONSECUTIVE_SLOTS
    assert result.assignment_for(2).violation_type == "consecutive_slots"
    assert result.assignment_for(1).violation_type is None
    assert _kinds(result) == [ViolationKind.CONSECUTIVE_SLOTS]
    assert result.violations[0].count == 1
    # a permitted relaxation still makes the schedule infeasible
    assert not result.is_feasible


def test_capacity_overflow_counts_each_occurrence(make_courses, make_students, enroll, make_config):
    courses = make_courses(2)
    rooms = [Classroom(1, "Room-101", 8)]
    enrollments = enroll({1: range(1, 11), 2: range(11, 23)})
    config = make_config(days=1, slots=2, allow_capacity_overflow=True, max_capacity_overflow_percent=100)
    result = generate_schedule(courses, make_students(22), enrollments, rooms, config)
    assert len(result.assignments) == 2
    assert _kinds(result) == [ViolationKind.CAPACITY_OVERFLOW]
    assert result.violations[0].count == 2
    # overflow is not an assignment tag
    assert all(a.tag is SlotTag.NONE for a in result.assignments)


def test_capacity_overflow_percentage_ceiling(make_courses, make_students, enroll, make_config):
    courses = make_courses(2)
    rooms = [Classroom(1, "Room-101", 8)]
    enrollments = enroll({1: range(1, 11), 2: range(11, 23)})  # 25% and 50% over
    config = make_config(days=1, slots=2, allow_capacity_overflow=True, max_capacity_overflow_percent=30)
    result = generate_schedule(courses, make_students(22), enrollments, rooms, config)
    assert [a.course_id for a in result.assignments] == [1]
    assert violation_count(result, ViolationKind.CAPACITY_OVERFLOW) == 1
    assert result.unassigned_course_ids == [2]


def test_no_room_fits_without_overflow(make_courses, make_students, enroll, make_config):
    rooms = [Classroom(1, "Room-101", 2)]
    result = generate_schedule(make_courses(1), make_students(3), enroll({1: [1, 2, 3]}), rooms,
                               make_config(days=2, slots=2))
    assert result.assignments == []
    assert result.unassigned_course_ids == [1]


def test_third_exam_in_a_day(make_courses, make_students, enroll, big_room, make_config):
    courses = make_courses(3)
    enrollments = enroll({1: [1], 2: [1], 3: [1]})
    strict = generate_schedule(courses, make_students(1), enrollments, big_room, make_config(days=1, slots=5))
    assert [(a.course_id, a.slot) for a in strict.assignments] == [(1, 1), (2, 3)]
    assert strict.unassigned_course_ids == [3]

    config = make_config(days=1, slots=5, allow_three_per_day=True, max_three_per_day_violations=1)
    relaxed = generate_schedule(courses, make_students(1), enrollments, big_room, config)
    placed = relaxed.assignment_for(3)
    assert (placed.slot, placed.tag) == (5, SlotTag.THREE_PER_DAY)
    assert _kinds(relaxed) == [ViolationKind.THREE_PER_DAY]


def test_both_soft_rules_increment_both_counters(make_courses, make_students, enroll, big_room, make_config):
    courses = make_courses(3)
    config = make_config(days=1, slots=3, allow_consecutive_slots=True, max_consecutive_violations=5,
                         allow_three_per_day=True, max_three_per_day_violations=5)
    result = generate_schedule(courses, make_students(1), enroll({1: [1], 2: [1], 3: [1]}), big_room, config)
    assert [a.tag for a in result.assignments] == [SlotTag.NONE, SlotTag.CONSECUTIVE_SLOTS, SlotTag.THREE_PER_DAY]
    assert violation_count(result, ViolationKind.CONSECUTIVE_SLOTS) == 2
    assert violation_count(result, ViolationKind.THREE_PER_DAY) == 1


def test_exhausted_budget_turns_soft_rule_hard(make_courses, make_students, enroll, big_room, make_config):
    courses = make_courses(4)
    config = make_config(days=1, slots=4, allow_consecutive_slots=True, max_consecutive_violations=1)
    result = generate_schedule(courses, make_students(2), enroll({1: [1], 2: [1], 3: [2], 4: [2]}),
                               big_room, config)
    assert [(a.course_id, a.slot) for a in result.assignments] == [(1, 1), (2, 2), (3, 3)]
    assert violation_count(result, ViolationKind.CONSECUTIVE_SLOTS) == 1
    assert result.unassigned_course_ids == [4]


def test_minimize_days_packs_same_day(make_courses, make_students, enroll, big_room, make_config):
    courses = make_courses(2)
    enrollments = enroll({1: [1], 2: [2]})
    pack = OptimizationPreference(balance_across_days=False, minimize_days_used=True)
    packed = generate_schedule(courses, make_students(2), enrollments, big_room, make_config(days=3, slots=2, optimization=pack))
    assert {a.day for a in packed.assignments} == {1}
    balanced = generate_schedule(courses, make_students(2), enrollments, big_room, make_config(days=3, slots=2))
    assert [a.day for a in balanced.assignments] == [1, 2]


def test_minimize_rooms_reuses_used_room(make_courses, make_students, enroll, make_config):
    courses = make_courses(2)
    rooms = [Classroom(1, "Small", 10), Classroom(2, "Big", 50)]
    enrollments = enroll({1: range(1, 41), 2: range(41, 46)})
    reuse = OptimizationPreference(balance_across_days=False, minimize_rooms_used=True)
    result = generate_schedule(courses, make_students(45), enrollments, rooms, make_config(slots=2, optimization=reuse))
    assert [a.classroom_id for a in result.assignments] == [2, 2]
    default = generate_schedule(courses, make_students(45), enrollments, rooms, make_config(slots=2, optimization=NO_BALANCE))
    assert [a.classroom_id for a in default.assignments] == [2, 1]


@pytest.mark.parametrize("flag, expected", [
    ("place_difficult_early", 2),
    ("place_difficult_late", 1),
])
def test_priority_decides_who_gets_the_only_slot(flag, expected, make_courses, make_students, enroll,
                                                 big_room, make_config):
    courses = make_courses(2)
    pref = OptimizationPreference(balance_across_days=False, **{flag: True})
    result = generate_schedule(courses, make_students(4), enroll({1: [1], 2: [2, 3, 4]}), big_room,
                               make_config(days=1, slots=1, optimization=pref))
    assert [a.course_id for a in result.assignments] == [expected]


def test_empty_input_is_feasible(big_room, make_config):
    result = generate_schedule([], [], [], big_room, make_config())
    assert result.assignments == [] and result.violations == []
    assert result.is_feasible


def test_dangling_enrollments_do_not_crash(make_courses, make_students, big_room, make_config):
    enrollments = [Enrollment(1, 1), Enrollment(99, 1), Enrollment(1, 99)]
    result = generate_schedule(make_courses(1), make_students(1), enrollments, big_room, make_config())
    assert result.is_feasible


def test_invalid_inputs_raise_configuration_error(make_courses, big_room, make_config):
    with pytest.raises(ConfigurationError):
        generate_schedule(make_courses(1), [], [], big_room, make_config(days=0))
    with pytest.raises(ConfigurationError):
        generate_schedule(make_courses(1), [], [], big_room, make_config(slots=0))
    with pytest.raises(ConfigurationError):
        generate_schedule(make_courses(1), [], [], [Classroom(1, "Broken", -1)], make_config())


def test_unknown_algorithm(make_courses, big_room, make_config):
    with pytest.raises(ValueError, match="algo"):
        generate_schedule(make_courses(1), [], [], big_room, make_config(), algo="dsatur")


@pytest.fixture(scope="module")
def dataset():
    return generate_dataset(n_students=150, n_courses=30, n_classrooms=8, max_courses_per_student=5, seed=7)


@pytest.mark.parametrize("relax", [
    {},
    {"allow_consecutive_slots": True, "max_consecutive_violations": 3,
     "allow_three_per_day": True, "max_three_per_day_violations": 2,
     "allow_capacity_overflow": True, "max_capacity_overflow_percent": 50},
])
@pytest.mark.parametrize("pref", [
    OptimizationPreference(),
    OptimizationPreference(balance_across_days=False, minimize_days_used=True, minimize_rooms_used=True,
                           place_difficult_early=True),
])
def test_generated_schedules_hold_invariants(dataset, relax, pref, make_config):
    config = make_config(days=5, slots=4, optimization=pref, **relax)
    result = generate_schedule(dataset.courses, dataset.students, dataset.enrollments, dataset.classrooms, config)
    index = build_enrollment_index(dataset.courses, dataset.enrollments, dataset.students)
    assert slots_ok(result)
    assert calendar_ok(result, config)
    assert students_ok(result, index)
    assert budgets_ok(result, config.relaxations)
    assert capacity_ok(result, index, dataset.classrooms, config.relaxations)
    assert len(result.assignments) <= config.total_slots
    assert len(result.assignments) + len(result.unassigned_course_ids) == len(dataset.courses)
    if not relax:
        assert violation_count(result, ViolationKind.CONSECUTIVE_SLOTS) == 0
        assert violation_count(result, ViolationKind.THREE_PER_DAY) == 0


def test_identical_inputs_give_identical_results(dataset, make_config):
    config = make_config(days=4, slots=3, allow_consecutive_slots=True, max_consecutive_violations=4)
    runs = [generate_schedule(dataset.courses, dataset.students, dataset.enrollments, dataset.classrooms, config)
            for _ in range(2)]
    assert runs[0] == runs[1]
