# /app/services/database_helpers/row_mapping.py

"""
Translation between ORM rows and the API/domain models. The storage schema is
snake_case and keeps profile and enrollment data apart; the domain models
merge them into the single `Student` view a class exposes.
"""

from typing import List

from ...db.models.class_student_models import ClassRoom as ClassRoomRow, Enrollment as EnrollmentRow, StudentProfile as ProfileRow
from ...db.models.resource_models import Resource as ResourceRow
from ...db.models.calendar_models import CalendarEvent as CalendarEventRow
from ...models import class_model, student_model, resource_model, calendar_model

UNKNOWN_STUDENT_NAME = "طالب مجهول"


def _learning_style(value) -> student_model.LearningStyle:
    try:
        return student_model.LearningStyle(value or "")
    except ValueError:
        return student_model.LearningStyle.UNSET


def profile_from_row(row: ProfileRow) -> student_model.StudentProfile:
    return student_model.StudentProfile(
        id=row.id,
        name=row.full_name or UNKNOWN_STUDENT_NAME,
        registrationCode=row.registration_code,
        dob=row.dob,
        learningStyle=_learning_style(row.learning_style),
        parentContact=row.parent_contact,
        avatar=row.avatar_url,
    )


def student_from_enrollment(enrollment: EnrollmentRow) -> student_model.Student:
    profile = profile_from_row(enrollment.profile)
    return student_model.Student(
        **profile.model_dump(),
        behaviorNotes=enrollment.behavior_notes or "",
        participationCount=enrollment.participation_count or 0,
        grades=[student_model.StudentGrade.model_validate(g) for g in (enrollment.grades or [])],
    )


def class_from_row(row: ClassRoomRow, students: List[student_model.Student]) -> class_model.ClassRoom:
    return class_model.ClassRoom(
        id=row.id,
        name=row.name,
        gradeLevel=row.grade_level or "",
        subject=row.subject,
        classCode=row.class_code,
        color=row.color,
        announcements=row.announcements or [],
        assessments=row.assessments or [],
        students=students,
    )


def resource_from_row(row: ResourceRow) -> resource_model.Resource:
    return resource_model.Resource(
        id=row.id,
        title=row.title,
        type=row.type,
        url=row.url,
        tags=row.tags or [],
        classId=row.class_id,
        data=row.data,
        createdAt=row.created_at,
    )


def event_from_row(row: CalendarEventRow) -> calendar_model.CalendarEvent:
    return calendar_model.CalendarEvent(
        id=row.id,
        title=row.title,
        date=row.date,
        time=row.time,
        type=row.type,
        subject=row.subject,
        grade=row.grade,
        relatedClassId=row.related_class_id,
        notes=row.notes,
    )
