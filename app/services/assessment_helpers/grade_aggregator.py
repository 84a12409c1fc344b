# /app/services/assessment_helpers/grade_aggregator.py

"""
Pure grade statistics. Every average here is a percentage rounded half-up to
an integer.

`class_average` pools every grade of every student before averaging. It is
deliberately not the mean of the per-student averages; the two differ as soon
as students have unequal numbers of grades.
"""

import math
from typing import Iterable, List

import pandas as pd

from ...models import class_model, student_model

TOP_STUDENT_THRESHOLD = 70
AT_RISK_THRESHOLD = 60
SPOTLIGHT_SIZE = 5


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _mean_percentage(grades: Iterable[student_model.StudentGrade]) -> int:
    df = pd.DataFrame([{"score": g.score, "maxScore": g.maxScore} for g in grades])
    if df.empty:
        return 0
    return round_half_up((df["score"] / df["maxScore"] * 100).mean())


def student_average(student: student_model.Student) -> int:
    """Mean percentage over the student's grades; 0 when there are none."""
    return _mean_percentage(student.grades)


def class_average(class_room: class_model.ClassRoom) -> int:
    """Mean percentage over the pooled grades of every student in the class."""
    return _mean_percentage(g for s in class_room.students for g in s.grades)


def class_analytics(class_room: class_model.ClassRoom) -> class_model.ClassAnalytics:
    """Dashboard figures for one class, including the top and at-risk spotlights."""
    graded = [
        {"id": s.id, "name": s.name, "average": student_average(s)}
        for s in class_room.students if s.grades
    ]
    ranked: List[dict] = []
    if graded:
        # Stable sort keeps roster order between equal averages.
        ranked = pd.DataFrame(graded).sort_values("average", ascending=False, kind="mergesort").to_dict("records")

    top = [r for r in ranked if r["average"] >= TOP_STUDENT_THRESHOLD][:SPOTLIGHT_SIZE]
    at_risk = [r for r in ranked if r["average"] < AT_RISK_THRESHOLD][:SPOTLIGHT_SIZE]

    return class_model.ClassAnalytics(
        studentCount=len(class_room.students),
        classAverage=class_average(class_room),
        totalParticipation=sum(s.participationCount for s in class_room.students),
        totalGrades=sum(len(s.grades) for s in class_room.students),
        topStudents=[class_model.StudentSpotlight(**r) for r in top],
        atRiskStudents=[class_model.StudentSpotlight(**r) for r in at_risk],
    )
