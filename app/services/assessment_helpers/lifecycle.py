# /app/services/assessment_helpers/lifecycle.py

"""
Lifecycle of class-wide assessments: creation (with an optional calendar
event), grading into the per-student grade lists, and deletion with cleanup
of every grade that references the deleted assessment.

Grades are embedded in each enrollment, so deleting an assessment cannot rely
on a database cascade. `delete_assessment` scans every enrollment of the
class and rewrites only those whose list actually changes. Running it again
after a partial failure finishes the job, and running it on an assessment
that is already gone is a no-op.
"""

import asyncio
import datetime
import logging
import math
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from ...core.exceptions import RosterSyncError, ValidationError, NotFoundError, PartialPropagationFailure
from ...models import class_model, student_model
from ...models.calendar_model import CalendarEventType
from ...models.sync_model import PropagationReport
from ..database_service import DatabaseService
from ..calendar_service import CalendarService

logger = logging.getLogger(__name__)


def _dump_grades(grades: List[student_model.StudentGrade]) -> List[Dict]:
    return [g.model_dump(mode="json", exclude_none=True) for g in grades]


def find_assessment(class_room: class_model.ClassRoom, assessment_id: str) -> class_model.ClassAssessment:
    for assessment in class_room.assessments:
        if assessment.id == assessment_id:
            return assessment
    raise NotFoundError(f"Assessment {assessment_id} not found in class {class_room.id}.")


def parse_score(raw: Any) -> Optional[float]:
    """Returns the numeric score, or None for blank and non-numeric input."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return None
    try:
        score = float(raw)
    except (TypeError, ValueError):
        return None
    if math.isnan(score) or math.isinf(score):
        return None
    return score


def upsert_assessment_grade(
    grades: List[student_model.StudentGrade],
    assessment: class_model.ClassAssessment,
    score: float,
) -> List[student_model.StudentGrade]:
    """
    Returns a new grade list where the entry for `assessment` carries `score`.
    An existing entry keeps every other field; otherwise one entry is appended.
    """
    for index, grade in enumerate(grades):
        if grade.assessmentId == assessment.id:
            updated = list(grades)
            updated[index] = grade.model_copy(update={"score": score})
            return updated
    return list(grades) + [student_model.StudentGrade(
        id=f"grd_{uuid.uuid4().hex[:12]}",
        title=assessment.title,
        score=score,
        maxScore=assessment.maxScore,
        date=assessment.date,
        type=assessment.type,
        assessmentId=assessment.id,
    )]


# --- Creation ---

def _sync_to_calendar(
    calendar: CalendarService,
    owner_id: str,
    class_room: class_model.ClassRoom,
    title: str,
    date: str,
    category: student_model.GradeCategory,
    max_score: float,
) -> Optional[str]:
    """Creates the single calendar event of an assessment. Failures are logged, never raised."""
    label = student_model.GRADE_CATEGORY_LABELS.get(category, "")
    try:
        return calendar.create_event(
            owner_id=owner_id,
            title=f"{title} — {class_room.name}",
            date=date,
            time="08:00",
            type=CalendarEventType.EXAM if category == student_model.GradeCategory.EXAM else CalendarEventType.EVENT,
            subject=class_room.subject,
            grade=class_room.gradeLevel or None,
            related_class_id=class_room.id,
            notes=f"{label} — الدرجة العظمى: {max_score:g}",
        )
    except Exception:
        logger.exception("Calendar sync failed for assessment %r in class %s; continuing without an event.", title, class_room.id)
        return None


def create_assessment(
    db: DatabaseService,
    calendar: CalendarService,
    owner_id: str,
    class_room: class_model.ClassRoom,
    payload: class_model.AssessmentCreate,
    sync_calendar: bool,
) -> class_model.ClassAssessment:
    title = (payload.title or "").strip()
    if not title:
        raise ValidationError("Assessment title is required.")
    date = payload.date or datetime.date.today().isoformat()

    event_id = None
    if sync_calendar:
        event_id = _sync_to_calendar(calendar, owner_id, class_room, title, date, payload.type, payload.maxScore)

    assessment = class_model.ClassAssessment(
        id=f"asmt_{uuid.uuid4().hex[:12]}",
        title=title,
        date=date,
        type=payload.type,
        maxScore=payload.maxScore,
        relatedCalendarEventId=event_id,
    )
    assessments = class_room.assessments + [assessment]
    if not db.update_class(class_room.id, {"assessments": [a.model_dump(mode="json") for a in assessments]}):
        raise NotFoundError(f"Class with ID {class_room.id} not found")
    logger.info("Created assessment %s in class %s (calendar event: %s).", assessment.id, class_room.id, event_id)
    return assessment


# --- Grading ---

async def _write_grades(db: DatabaseService, class_id: str, student_id: str, grades: List[student_model.StudentGrade]) -> None:
    if not db.update_enrollment(class_id, student_id, {"grades": _dump_grades(grades)}):
        raise NotFoundError(f"Student {student_id} is not enrolled in class {class_id}.")


async def grade_assessment(
    db: DatabaseService,
    class_room: class_model.ClassRoom,
    assessment_id: str,
    scores: Dict[str, Any],
) -> class_model.ClassRoom:
    """
    Upserts one grade per scored student and returns the class with the new
    grade lists. Blank or non-numeric scores leave that student ungraded.
    """
    assessment = find_assessment(class_room, assessment_id)
    students = {s.id: s for s in class_room.students}
    unknown = [sid for sid in scores if sid not in students]
    if unknown:
        raise NotFoundError(f"Students not enrolled in class {class_room.id}: {', '.join(unknown)}")

    new_grades: Dict[str, List[student_model.StudentGrade]] = {}
    for student_id, raw in scores.items():
        score = parse_score(raw)
        if score is None:
            continue
        new_grades[student_id] = upsert_assessment_grade(students[student_id].grades, assessment, score)

    # Each write targets a different enrollment row, so their order is irrelevant.
    # The writes share one Session and never await, so they run one after
    # another; gather only collects each outcome without stopping at the first error.
    student_ids = list(new_grades)
    outcomes = await asyncio.gather(
        *[_write_grades(db, class_room.id, sid, new_grades[sid]) for sid in student_ids],
        return_exceptions=True,
    )
    failed = [sid for sid, outcome in zip(student_ids, outcomes) if isinstance(outcome, BaseException)]
    if failed:
        written = len(student_ids) - len(failed)
        logger.error("Grading of %s saved %d of %d students; failed: %s", assessment_id, written, len(student_ids), failed)
        raise PartialPropagationFailure(
            f"Saved grades for {written} of {len(student_ids)} students.",
            completed=written, total=len(student_ids), subject_id=assessment_id,
        )

    updated_students = [
        s.model_copy(update={"grades": new_grades[s.id]}) if s.id in new_grades else s
        for s in class_room.students
    ]
    return class_room.model_copy(update={"students": updated_students})


# --- Deletion ---

def delete_assessment(db: DatabaseService, class_room: class_model.ClassRoom, assessment_id: str) -> PropagationReport:
    """
    Removes the assessment from the class, then strips its grades from every
    enrollment. Only enrollments whose grade list changes are written.
    """
    remaining = [a for a in class_room.assessments if a.id != assessment_id]
    if len(remaining) != len(class_room.assessments):
        db.update_class(class_room.id, {"assessments": [a.model_dump(mode="json") for a in remaining]})

    pending = []
    for student in class_room.students:
        kept = [g for g in student.grades if g.assessmentId != assessment_id]
        if len(kept) != len(student.grades):
            pending.append((student.id, kept))

    for index, (student_id, kept) in enumerate(pending):
        try:
            if not db.update_enrollment(class_room.id, student_id, {"grades": _dump_grades(kept)}):
                raise NotFoundError(f"Student {student_id} is not enrolled in class {class_room.id}.")
        except (RosterSyncError, SQLAlchemyError) as e:
            logger.error("Cleanup of assessment %s stopped after %d of %d enrollments: %s", assessment_id, index, len(pending), e)
            raise PartialPropagationFailure(
                f"Removed grades from {index} of {len(pending)} students; retry the delete to finish.",
                completed=index, total=len(pending), subject_id=assessment_id,
            ) from e

    logger.info("Deleted assessment %s from class %s; cleaned %d enrollment(s).", assessment_id, class_room.id, len(pending))
    return PropagationReport.applied(len(pending))
