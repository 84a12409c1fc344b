# /app/services/class_helpers/enrollment.py

"""
Enrollment management: adding a student to a class and to all of its sibling
classes under one shared profile, re-running that propagation safely,
removing a student from one class, and editing the class-scoped part of an
enrollment (notes, participation, manual grades).

Propagation is a sequence of single-row writes. A failure at write k leaves
writes 1..k-1 in place and raises PartialPropagationFailure; retries must go
through `enroll_existing_student`, never through `add_student` again, which
would mint a second profile for the same person.
"""

import datetime
import logging
import random
import uuid
from typing import List, Iterable

from sqlalchemy.exc import SQLAlchemyError

from ...core.exceptions import RosterSyncError, ValidationError, NotFoundError, ConflictError, PartialPropagationFailure
from ...models import class_model, student_model
from ...models.sync_model import PropagationReport
from ..database_service import DatabaseService
from .identity import siblings_of

logger = logging.getLogger(__name__)

REGISTRATION_CODE_ATTEMPTS = 5


def generate_registration_code() -> str:
    """A random 6-digit code, never starting with 0."""
    return str(random.randint(100000, 999999))


def _find_student(class_room: class_model.ClassRoom, student_id: str) -> student_model.Student:
    for student in class_room.students:
        if student.id == student_id:
            return student
    raise NotFoundError(f"Student {student_id} is not enrolled in class {class_room.id}.")


def _enroll_sequentially(
    db: DatabaseService,
    profile_id: str,
    targets: List[class_model.ClassRoom],
    behavior_notes: str = "",
) -> int:
    """Creates one enrollment per target class, in order. Returns how many were written."""
    completed = 0
    for target in targets:
        try:
            db.create_enrollment(target.id, profile_id, {"behavior_notes": behavior_notes})
        except (RosterSyncError, SQLAlchemyError) as e:
            logger.error(
                "Enrollment of profile %s stopped at class %s after %d of %d classes: %s",
                profile_id, target.id, completed, len(targets), e,
            )
            raise PartialPropagationFailure(
                f"Student was enrolled in {completed} of {len(targets)} classes.",
                completed=completed, total=len(targets), subject_id=profile_id,
            ) from e
        completed += 1
    return completed


def _create_profile(db: DatabaseService, name: str, student_data: student_model.StudentCreate) -> student_model.StudentProfile:
    """
    Stores the profile. A clash on a caller-supplied registration code is a
    ConflictError; a clash on a generated one is retried with a fresh code.
    """
    supplied_code = (student_data.registrationCode or "").strip()
    attempts = 1 if supplied_code else REGISTRATION_CODE_ATTEMPTS
    for attempt in range(1, attempts + 1):
        registration_code = supplied_code or generate_registration_code()
        try:
            return db.create_profile({
                "id": f"stu_{uuid.uuid4().hex[:12]}",
                "full_name": name,
                "registration_code": registration_code,
                "dob": student_data.dob or None,
                "learning_style": student_data.learningStyle.value,
                "parent_contact": student_data.parentContact or None,
            })
        except ConflictError:
            if supplied_code or attempt == attempts:
                raise
            logger.warning("Generated registration code %s is taken; drawing another.", registration_code)


# --- Propagating Operations ---

def add_student(
    db: DatabaseService,
    class_room: class_model.ClassRoom,
    all_classes: Iterable[class_model.ClassRoom],
    student_data: student_model.StudentCreate,
) -> student_model.AddStudentResult:
    """
    Creates one profile for the student and enrolls it in `class_room` and in
    every sibling class. A duplicate caller-supplied registration code
    surfaces as ConflictError and nothing is written.
    """
    name = (student_data.name or "").strip()
    if not name:
        raise ValidationError("Student name is required.")

    profile = _create_profile(db, name, student_data)

    targets = [class_room] + siblings_of(class_room, all_classes)
    completed = _enroll_sequentially(db, profile.id, targets, (student_data.behaviorNotes or "").strip())
    logger.info("Enrolled profile %s in %d class(es) named %r.", profile.id, completed, class_room.name)

    return student_model.AddStudentResult(
        profile=profile,
        classCount=completed,
        report=PropagationReport.applied(completed),
    )


def enroll_existing_student(
    db: DatabaseService,
    class_room: class_model.ClassRoom,
    all_classes: Iterable[class_model.ClassRoom],
    profile_id: str,
    behavior_notes: str = "",
) -> PropagationReport:
    """
    Enrolls an existing profile in `class_room` and its siblings, skipping
    every class the profile is already enrolled in. Safe to call repeatedly;
    this is the retry path after a PartialPropagationFailure.
    """
    if db.get_profile(profile_id) is None:
        raise NotFoundError(f"Student profile {profile_id} not found.")

    targets = [class_room] + siblings_of(class_room, all_classes)
    missing = [t for t in targets if all(s.id != profile_id for s in t.students)]
    if not missing:
        return PropagationReport.applied(0)
    return PropagationReport.applied(_enroll_sequentially(db, profile_id, missing, behavior_notes))


def copy_roster(
    db: DatabaseService,
    target: class_model.ClassRoom,
    source: class_model.ClassRoom,
) -> PropagationReport:
    """
    Enrolls every student of `source` in `target` under the same profile,
    with fresh grades and participation. Students already in `target` are
    skipped, so the copy can be re-run after a partial failure.
    """
    if source.id == target.id:
        raise ValidationError("A class cannot copy its own roster.")
    enrolled = {s.id for s in target.students}
    to_copy = [s for s in source.students if s.id not in enrolled]

    for index, student in enumerate(to_copy):
        try:
            db.create_enrollment(target.id, student.id)
        except (RosterSyncError, SQLAlchemyError) as e:
            logger.error("Roster copy %s -> %s stopped after %d of %d students: %s", source.id, target.id, index, len(to_copy), e)
            raise PartialPropagationFailure(
                f"Copied {index} of {len(to_copy)} students.",
                completed=index, total=len(to_copy), subject_id=target.id,
            ) from e
    return PropagationReport.applied(len(to_copy))


# --- Single-Class Operations ---

def remove_student(db: DatabaseService, class_room: class_model.ClassRoom, student_id: str) -> None:
    """Removes the student from this class only; sibling enrollments are left as they are."""
    if not db.delete_enrollment(class_room.id, student_id):
        raise NotFoundError(f"Student {student_id} is not enrolled in class {class_room.id}.")
    logger.info("Removed student %s from class %s.", student_id, class_room.id)


def update_enrollment(
    db: DatabaseService,
    class_room: class_model.ClassRoom,
    student_id: str,
    update: student_model.EnrollmentUpdate,
) -> student_model.Student:
    student = _find_student(class_room, student_id)
    fields = {}
    changes = update.model_dump(exclude_unset=True, exclude_none=True)
    if "behaviorNotes" in changes:
        fields["behavior_notes"] = changes["behaviorNotes"]
    if "participationCount" in changes:
        fields["participation_count"] = changes["participationCount"]
    if not fields:
        raise ValidationError("No update data provided.")
    if not db.update_enrollment(class_room.id, student_id, fields):
        raise NotFoundError(f"Student {student_id} is not enrolled in class {class_room.id}.")
    return student.model_copy(update=changes)


def record_participation(db: DatabaseService, class_room: class_model.ClassRoom, student_id: str, amount: int = 1) -> int:
    """Adds `amount` to the participation count and returns the new total."""
    student = _find_student(class_room, student_id)
    new_count = max(0, student.participationCount + amount)
    if not db.update_enrollment(class_room.id, student_id, {"participation_count": new_count}):
        raise NotFoundError(f"Student {student_id} is not enrolled in class {class_room.id}.")
    return new_count


def add_manual_grade(
    db: DatabaseService,
    class_room: class_model.ClassRoom,
    student_id: str,
    grade_data: student_model.GradeCreate,
) -> student_model.StudentGrade:
    """Appends a free-standing grade (no assessmentId) to one student in one class."""
    title = (grade_data.title or "").strip()
    if not title:
        raise ValidationError("Grade title is required.")
    student = _find_student(class_room, student_id)

    grade = student_model.StudentGrade(
        id=f"grd_{uuid.uuid4().hex[:12]}",
        title=title,
        score=grade_data.score,
        maxScore=grade_data.maxScore,
        date=grade_data.date or datetime.date.today().isoformat(),
        type=grade_data.type,
    )
    grades = [g.model_dump(mode="json", exclude_none=True) for g in student.grades + [grade]]
    if not db.update_enrollment(class_room.id, student_id, {"grades": grades}):
        raise NotFoundError(f"Student {student_id} is not enrolled in class {class_room.id}.")
    return grade

