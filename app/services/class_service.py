# /app/services/class_service.py

"""
This service module is the business logic layer for classes and students.

It is a facade over the specialist helpers in `class_helpers` and the
`DatabaseService`. Every function takes the `owner_id` of the teacher making
the request: a class is only ever loaded from that owner's classes, and the
same list is what sibling classes are resolved against.
"""

from typing import List, Tuple

from ..core.exceptions import NotFoundError
from ..models import class_model, student_model
from ..models.sync_model import PropagationReport
from .database_service import DatabaseService
from .assessment_helpers import grade_aggregator

# Import the specialist helper modules this service orchestrates.
from .class_helpers import crud, enrollment, roster_ingestion


def load_class(class_id: str, owner_id: str, db: DatabaseService) -> Tuple[class_model.ClassRoom, List[class_model.ClassRoom]]:
    """Returns the requested class plus all classes of its owner, or raises NotFoundError."""
    all_classes = db.get_classes_for_owner(owner_id)
    for class_room in all_classes:
        if class_room.id == class_id:
            return class_room, all_classes
    raise NotFoundError(f"Class with ID {class_id} not found")


# --- Class CRUD ---

def create_class(class_data: class_model.ClassCreate, db: DatabaseService, owner_id: str) -> class_model.ClassRoom:
    return crud.create_class(class_data, db, owner_id, db.get_classes_for_owner(owner_id))


def update_class(class_id: str, class_update: class_model.ClassUpdate, db: DatabaseService, owner_id: str) -> class_model.ClassRoom:
    class_room, _ = load_class(class_id, owner_id, db)
    return crud.update_class(class_room, class_update, db)


def delete_class_by_id(class_id: str, db: DatabaseService, owner_id: str) -> None:
    class_room, _ = load_class(class_id, owner_id, db)
    crud.delete_class(class_room, db)


def add_announcement(class_id: str, announcement_data: class_model.AnnouncementCreate, db: DatabaseService, owner_id: str) -> class_model.Announcement:
    class_room, _ = load_class(class_id, owner_id, db)
    return crud.add_announcement(class_room, announcement_data, db)


# --- Enrollment ---

def add_student_to_class(
    class_id: str,
    student_data: student_model.StudentCreate,
    db: DatabaseService,
    owner_id: str,
) -> student_model.AddStudentResult:
    class_room, all_classes = load_class(class_id, owner_id, db)
    return enrollment.add_student(db, class_room, all_classes, student_data)


def retry_student_propagation(class_id: str, student_id: str, db: DatabaseService, owner_id: str) -> PropagationReport:
    """Finishes an interrupted `add_student_to_class` without creating a new profile."""
    class_room, all_classes = load_class(class_id, owner_id, db)
    return enrollment.enroll_existing_student(db, class_room, all_classes, student_id)


def delete_student_from_class(class_id: str, student_id: str, db: DatabaseService, owner_id: str) -> None:
    class_room, _ = load_class(class_id, owner_id, db)
    enrollment.remove_student(db, class_room, student_id)


def update_student_enrollment(
    class_id: str,
    student_id: str,
    update: student_model.EnrollmentUpdate,
    db: DatabaseService,
    owner_id: str,
) -> student_model.Student:
    class_room, _ = load_class(class_id, owner_id, db)
    return enrollment.update_enrollment(db, class_room, student_id, update)


def record_participation(class_id: str, student_id: str, db: DatabaseService, owner_id: str) -> int:
    class_room, _ = load_class(class_id, owner_id, db)
    return enrollment.record_participation(db, class_room, student_id)


def add_manual_grade(
    class_id: str,
    student_id: str,
    grade_data: student_model.GradeCreate,
    db: DatabaseService,
    owner_id: str,
) -> student_model.StudentGrade:
    class_room, _ = load_class(class_id, owner_id, db)
    return enrollment.add_manual_grade(db, class_room, student_id, grade_data)


def copy_roster(class_id: str, source_class_id: str, db: DatabaseService, owner_id: str) -> PropagationReport:
    target, all_classes = load_class(class_id, owner_id, db)
    source = next((c for c in all_classes if c.id == source_class_id), None)
    if source is None:
        raise NotFoundError(f"Class with ID {source_class_id} not found")
    return enrollment.copy_roster(db, target, source)


def import_roster(class_id: str, file_bytes: bytes, content_type: str, db: DatabaseService, owner_id: str) -> class_model.RosterImportResponse:
    class_room, all_classes = load_class(class_id, owner_id, db)
    count = roster_ingestion.import_roster(db, class_room, all_classes, file_bytes, content_type)
    return class_model.RosterImportResponse(message="Roster imported.", importedCount=count)


# --- Data Assembly & Export Logic ---

def get_all_classes_with_summary(owner_id: str, db: DatabaseService) -> List[class_model.ClassSummary]:
    return [
        class_model.ClassSummary(
            id=c.id,
            name=c.name,
            gradeLevel=c.gradeLevel,
            subject=c.subject,
            color=c.color,
            studentCount=len(c.students),
            classAverage=grade_aggregator.class_average(c),
        )
        for c in db.get_classes_for_owner(owner_id)
    ]


def get_class_details_by_id(class_id: str, owner_id: str, db: DatabaseService) -> class_model.ClassDetails:
    class_room, _ = load_class(class_id, owner_id, db)
    return class_model.ClassDetails(
        **class_room.model_dump(),
        analytics=grade_aggregator.class_analytics(class_room),
    )


def export_roster_as_csv(class_id: str, owner_id: str, db: DatabaseService) -> str:
    class_room, _ = load_class(class_id, owner_id, db)
    return roster_ingestion.export_roster_as_csv(class_room)
