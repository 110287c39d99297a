import argparse
import logging
import os

from examflow.config import OptimizationPreference, SchedulerConfig
from examflow.io_utils import (
    load_classrooms, load_courses, load_students, load_enrollments, load_config,
    save_assignments_csv, save_violations_csv
)
from examflow.reporting import VIEWS, schedule_view
from examflow.scheduling.enrollment_index import build_enrollment_index
from examflow.scheduling.evaluation import summary
from examflow.scheduling.generate import STRATEGIES, generate_schedule
from examflow.synthetic import generate_dataset, write_dataset


def build_config(args) -> SchedulerConfig:
    config = load_config(args.config) if args.config else SchedulerConfig()
    if args.days is not None:
        config.num_days = args.days
    if args.slots is not None:
        config.slots_per_day = args.slots
    if args.prefer:
        # a preference given on the command line replaces the configured one
        config.optimization = OptimizationPreference(balance_across_days=False)
        for flag in args.prefer:
            setattr(config.optimization, flag, True)
    return config.validate()


def main(argv=None):
    p = argparse.ArgumentParser(description="ExamFlow - exam period scheduler")
    # Input modes
    p.add_argument('--classrooms', type=str, help='classrooms.csv with name,capacity')
    p.add_argument('--courses', type=str, help='courses.csv with code,name')
    p.add_argument('--students', type=str, help='students.csv with student_id,name')
    p.add_argument('--enrollments', type=str, help='enrollments.csv with student_id,course_code')
    p.add_argument('--generate', type=int, default=None, help='Generate a synthetic dataset with N students')
    p.add_argument('--gen_courses', type=int, default=200)
    p.add_argument('--gen_classrooms', type=int, default=85)
    p.add_argument('--seed', type=int, default=42)
    p.add_argument('--dataset_dir', type=str, default=None, help='Also write the generated input CSVs here')

    # Config
    p.add_argument('--config', type=str, help='JSON scheduler config')
    p.add_argument('--days', type=int, default=None)
    p.add_argument('--slots', type=int, default=None, help='Slots per day')
    p.add_argument('--prefer', action='append', choices=[
        'balance_across_days', 'minimize_days_used', 'minimize_rooms_used',
        'place_difficult_early', 'place_difficult_late'])
    p.add_argument('--algo', type=str, default='greedy', help=' | '.join(sorted(STRATEGIES)))

    # Output
    p.add_argument('--out_schedule', type=str, default='schedule.csv')
    p.add_argument('--out_violations', type=str, default='violations.csv')
    p.add_argument('--view', type=str, default=None, choices=VIEWS, help='Print the schedule in this view')
    p.add_argument('--violations_only', action='store_true')
    p.add_argument('-v', '--verbose', action='store_true')
    args = p.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")

    if args.generate is not None:
        data = generate_dataset(n_students=args.generate, n_courses=args.gen_courses,
                                n_classrooms=args.gen_classrooms, seed=args.seed)
        classrooms, courses, students, enrollments = data.classrooms, data.courses, data.students, data.enrollments
        if args.dataset_dir:
            write_dataset(args.dataset_dir, data)
            print(f"Saved dataset to {os.path.abspath(args.dataset_dir)}")
    elif args.classrooms and args.courses and args.students and args.enrollments:
        classrooms = load_classrooms(args.classrooms)
        courses = load_courses(args.courses)
        students = load_students(args.students)
        enrollments = load_enrollments(args.enrollments, students, courses)
    else:
        raise SystemExit("Provide --classrooms, --courses, --students and --enrollments, or --generate N")

    config = build_config(args)
    result = generate_schedule(courses, students, enrollments, classrooms, config, algo=args.algo)

    index = build_enrollment_index(courses, enrollments, students)
    print(summary(index, classrooms, config, result))

    if args.view:
        df = schedule_view(result, courses, classrooms, index, view=args.view,
                           students=students, violations_only=args.violations_only)
        print(df.to_string(index=False))

    save_assignments_csv(args.out_schedule, result, courses, classrooms)
    save_violations_csv(args.out_violations, result)
    print(f"Saved: {args.out_schedule}, {args.out_violations}")
    return result


if __name__ == '__main__':
    main()
