# /app/services/database_service.py

"""
The persistence gateway used by every roster and grading service.

It offers single-row create/update/delete operations only; there is no method
that writes several rows atomically. Reads come back as the domain models in
`app.models`, so the services never handle ORM rows directly.
"""

from typing import List, Dict, Optional, Generator

from sqlalchemy.orm import Session
from fastapi import Depends

# --- Core Database Setup ---
from app.db.database import get_db

# --- Repository Imports ---
from .database_helpers.class_student_repository_sql import ClassStudentRepositorySQL
from .database_helpers.resource_repository_sql import ResourceRepositorySQL
from .database_helpers.calendar_repository_sql import CalendarRepositorySQL
from .database_helpers import row_mapping
from ..models import class_model, student_model, resource_model, calendar_model


class DatabaseService:
    def __init__(self, db_session: Session):
        self.class_student_repo = ClassStudentRepositorySQL(db_session)
        self.resource_repo = ResourceRepositorySQL(db_session)
        self.calendar_repo = CalendarRepositorySQL(db_session)

    # --- CLASS METHODS ---
    def get_classes_for_owner(self, owner_id: str) -> List[class_model.ClassRoom]:
        """Loads every class of an owner together with its enrolled students."""
        rows = self.class_student_repo.get_classes_for_owner(owner_id)
        enrollments = self.class_student_repo.get_enrollments_for_classes([r.id for r in rows])

        students_by_class: Dict[str, List[student_model.Student]] = {}
        for enrollment in enrollments:
            if enrollment.profile is None:
                continue
            students_by_class.setdefault(enrollment.class_id, []).append(
                row_mapping.student_from_enrollment(enrollment)
            )
        return [row_mapping.class_from_row(r, students_by_class.get(r.id, [])) for r in rows]

    def create_class(self, class_record: Dict) -> class_model.ClassRoom:
        return row_mapping.class_from_row(self.class_student_repo.add_class(class_record), [])

    def update_class(self, class_id: str, fields: Dict) -> bool:
        return self.class_student_repo.update_class(class_id, fields) is not None

    def delete_class(self, class_id: str) -> bool:
        return self.class_student_repo.delete_class(class_id)

    # --- PROFILE METHODS ---
    def create_profile(self, fields: Dict) -> student_model.StudentProfile:
        return row_mapping.profile_from_row(self.class_student_repo.add_profile(fields))

    def get_profile(self, profile_id: str) -> Optional[student_model.StudentProfile]:
        row = self.class_student_repo.get_profile_by_id(profile_id)
        return row_mapping.profile_from_row(row) if row else None

    # --- ENROLLMENT METHODS ---
    def create_enrollment(self, class_id: str, profile_id: str, initial_fields: Optional[Dict] = None) -> None:
        record = {"class_id": class_id, "student_id": profile_id, "grades": [], "participation_count": 0, "behavior_notes": ""}
        record.update(initial_fields or {})
        self.class_student_repo.add_enrollment(record)

    def update_enrollment(self, class_id: str, student_id: str, fields: Dict) -> bool:
        return self.class_student_repo.update_enrollment(class_id, student_id, fields) is not None

    def delete_enrollment(self, class_id: str, student_id: str) -> bool:
        return self.class_student_repo.delete_enrollment(class_id, student_id)

    # --- RESOURCE METHODS ---
    def add_resource(self, record: Dict) -> resource_model.Resource:
        return row_mapping.resource_from_row(self.resource_repo.add_resource(record))

    def get_resources_for_owner(self, owner_id: str) -> List[resource_model.Resource]:
        return [row_mapping.resource_from_row(r) for r in self.resource_repo.get_resources_for_owner(owner_id)]

    # --- CALENDAR METHODS ---
    def add_calendar_event(self, record: Dict) -> calendar_model.CalendarEvent:
        return row_mapping.event_from_row(self.calendar_repo.add_event(record))

    def get_calendar_events(self, owner_id: str) -> List[calendar_model.CalendarEvent]:
        return [row_mapping.event_from_row(e) for e in self.calendar_repo.get_events_for_owner(owner_id)]


def get_db_service(db: Session = Depends(get_db)) -> Generator[DatabaseService, None, None]:
    """FastAPI dependency that provides a DatabaseService bound to the request's session."""
    yield DatabaseService(db_session=db)
