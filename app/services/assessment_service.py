# /app/services/assessment_service.py

"""
This module defines the AssessmentService, the orchestrator for class-wide
assessments: creating them (optionally publishing one calendar event),
grading them into each student's grade list, and deleting them together with
every grade they produced.
"""

from typing import Any, Dict, Optional

from fastapi import Depends

from ..core.config import settings
from ..models import class_model
from ..models.sync_model import PropagationReport
from .database_service import DatabaseService, get_db_service
from .calendar_service import CalendarService
from .class_service import load_class
from .assessment_helpers import lifecycle


class AssessmentService:
    def __init__(self, db: DatabaseService, calendar: Optional[CalendarService] = None):
        self.db = db
        self.calendar = calendar or CalendarService(db)

    def create_assessment(self, class_id: str, payload: class_model.AssessmentCreate, owner_id: str) -> class_model.ClassAssessment:
        class_room, _ = load_class(class_id, owner_id, self.db)
        sync_calendar = settings.CALENDAR_SYNC_DEFAULT if payload.addToCalendar is None else payload.addToCalendar
        return lifecycle.create_assessment(self.db, self.calendar, owner_id, class_room, payload, sync_calendar)

    async def grade_assessment(self, class_id: str, assessment_id: str, scores: Dict[str, Any], owner_id: str) -> class_model.ClassRoom:
        class_room, _ = load_class(class_id, owner_id, self.db)
        return await lifecycle.grade_assessment(self.db, class_room, assessment_id, scores)

    def delete_assessment(self, class_id: str, assessment_id: str, owner_id: str) -> PropagationReport:
        """Idempotent: deleting an assessment that is already gone succeeds and writes nothing."""
        class_room, _ = load_class(class_id, owner_id, self.db)
        return lifecycle.delete_assessment(self.db, class_room, assessment_id)


def get_assessment_service(db: DatabaseService = Depends(get_db_service)) -> AssessmentService:
    return AssessmentService(db)
