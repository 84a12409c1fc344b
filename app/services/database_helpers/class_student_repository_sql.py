# /app/services/database_helpers/class_student_repository_sql.py

"""
This module contains all the raw SQLAlchemy queries for the classes,
student_profiles and class_enrollments tables.

Every write method touches exactly one row and commits immediately. The
callers build multi-row behaviour (sibling propagation, assessment cleanup)
as a sequence of these single-row writes, so nothing here opens a
transaction that spans several records.
"""

import logging
from typing import List, Dict, Optional

from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.core.exceptions import ConflictError
from app.db.models.class_student_models import ClassRoom, StudentProfile, Enrollment

logger = logging.getLogger(__name__)


class ClassStudentRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def _commit(self, conflict_message: str) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning("%s (%s)", conflict_message, e.orig)
            raise ConflictError(conflict_message) from e
        except SQLAlchemyError:
            self.db.rollback()
            raise

    # --- Class Methods ---

    def get_classes_for_owner(self, owner_id: str) -> List[ClassRoom]:
        return (
            self.db.query(ClassRoom)
            .filter(ClassRoom.owner_id == owner_id)
            .order_by(ClassRoom.name, ClassRoom.id)
            .all()
        )

    def get_class_by_id(self, class_id: str) -> Optional[ClassRoom]:
        return self.db.query(ClassRoom).filter(ClassRoom.id == class_id).first()

    def add_class(self, record: Dict) -> ClassRoom:
        """Creates a new ClassRoom row. `owner_id` must already be stamped on the record."""
        new_class = ClassRoom(**record)
        self.db.add(new_class)
        self._commit(f"Class with ID {record.get('id')} already exists.")
        self.db.refresh(new_class)
        return new_class

    def update_class(self, class_id: str, data: Dict) -> Optional[ClassRoom]:
        db_class = self.get_class_by_id(class_id)
        if db_class:
            for key, value in data.items():
                setattr(db_class, key, value)
            self._commit(f"Update of class {class_id} was rejected.")
            self.db.refresh(db_class)
        return db_class

    def delete_class(self, class_id: str) -> bool:
        """
        Deletes a class row. There is no cascade: a class that still has
        enrollments is refused with a ConflictError.
        """
        db_class = self.get_class_by_id(class_id)
        if not db_class:
            return False
        enrolled = self.db.query(Enrollment).filter(Enrollment.class_id == class_id).count()
        if enrolled:
            raise ConflictError(f"Class {class_id} still has {enrolled} enrolled student(s).")
        self.db.delete(db_class)
        self._commit(f"Class {class_id} has dependent records.")
        return True

    # --- Profile Methods ---

    def add_profile(self, record: Dict) -> StudentProfile:
        new_profile = StudentProfile(**record)
        self.db.add(new_profile)
        self._commit(f"Registration code {record.get('registration_code')} is already in use.")
        self.db.refresh(new_profile)
        return new_profile

    def get_profile_by_id(self, profile_id: str) -> Optional[StudentProfile]:
        return self.db.query(StudentProfile).filter(StudentProfile.id == profile_id).first()

    # --- Enrollment Methods ---

    def get_enrollments_for_classes(self, class_ids: List[str]) -> List[Enrollment]:
        """Joins every enrollment of the given classes with its profile in one query."""
        if not class_ids:
            return []
        return (
            self.db.query(Enrollment)
            .join(StudentProfile, Enrollment.student_id == StudentProfile.id)
            .filter(Enrollment.class_id.in_(class_ids))
            .order_by(StudentProfile.full_name, StudentProfile.id)
            .all()
        )

    def get_enrollment(self, class_id: str, student_id: str) -> Optional[Enrollment]:
        return (
            self.db.query(Enrollment)
            .filter(Enrollment.class_id == class_id, Enrollment.student_id == student_id)
            .first()
        )

    def add_enrollment(self, record: Dict) -> Enrollment:
        conflict = f"Student {record.get('student_id')} is already enrolled in class {record.get('class_id')}."
        if self.get_enrollment(record.get("class_id"), record.get("student_id")):
            raise ConflictError(conflict)
        new_enrollment = Enrollment(**record)
        self.db.add(new_enrollment)
        self._commit(conflict)
        self.db.refresh(new_enrollment)
        return new_enrollment

    def update_enrollment(self, class_id: str, student_id: str, data: Dict) -> Optional[Enrollment]:
        enrollment = self.get_enrollment(class_id, student_id)
        if enrollment:
            for key, value in data.items():
                setattr(enrollment, key, value)
            self._commit(f"Update of enrollment ({class_id}, {student_id}) was rejected.")
            self.db.refresh(enrollment)
        return enrollment

    def delete_enrollment(self, class_id: str, student_id: str) -> bool:
        enrollment = self.get_enrollment(class_id, student_id)
        if enrollment:
            self.db.delete(enrollment)
            self._commit(f"Enrollment ({class_id}, {student_id}) could not be deleted.")
            return True
        return False
