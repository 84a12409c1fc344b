# /tests/test_grade_aggregator.py

from app.services.assessment_helpers.grade_aggregator import (
    student_average, class_average, class_analytics, round_half_up,
)
from factories import make_grade, make_student, make_class


def test_student_average_without_grades_is_zero():
    assert student_average(make_student("stu_a")) == 0


def test_student_average_uses_percentages_not_raw_scores():
    student = make_student("stu_a", grades=[make_grade("g1", 8, 10), make_grade("g2", 30, 50)])
    # (80 + 60) / 2
    assert student_average(student) == 70


def test_class_average_pools_every_grade():
    """
    GIVEN: A with [80/100] and B with [40/100, 60/100].
    THEN:  the pooled mean (80+40+60)/3 = 60, not the mean of averages (80+50)/2 = 65.
    """
    a = make_student("stu_a", grades=[make_grade("g1", 80)])
    b = make_student("stu_b", grades=[make_grade("g2", 40), make_grade("g3", 60)])
    class_room = make_class("cls_1", students=[a, b])

    assert student_average(a) == 80
    assert student_average(b) == 50
    assert class_average(class_room) == 60
    assert class_average(class_room) != round_half_up((student_average(a) + student_average(b)) / 2)


def test_class_average_of_empty_class_is_zero():
    class_room = make_class("cls_1", students=[make_student("stu_a"), make_student("stu_b")])
    assert class_average(class_room) == 0


def test_averages_round_half_up():
    # 1/8 = 12.5% rounds up to 13, where Python's round() would give 12.
    student = make_student("stu_a", grades=[make_grade("g1", 1, 8)])
    assert student_average(student) == 13


def test_class_analytics_spotlights():
    students = [
        make_student("stu_top", grades=[make_grade("g1", 95)], participation=3),
        make_student("stu_mid", grades=[make_grade("g2", 65)], participation=1),
        make_student("stu_low", grades=[make_grade("g3", 20)]),
        make_student("stu_new"),
    ]
    analytics = class_analytics(make_class("cls_1", students=students))

    assert analytics.studentCount == 4
    assert analytics.totalGrades == 3
    assert analytics.totalParticipation == 4
    assert [s.id for s in analytics.topStudents] == ["stu_top"]
    # Students without grades are never flagged as at risk.
    assert [s.id for s in analytics.atRiskStudents] == ["stu_low"]
    assert analytics.classAverage == 60
