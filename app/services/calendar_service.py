# /app/services/calendar_service.py

import logging
import uuid
from typing import List, Optional

from fastapi import Depends

from ..models.calendar_model import CalendarEvent, CalendarEventType
from .database_service import DatabaseService, get_db_service

logger = logging.getLogger(__name__)


class CalendarService:
    """The school calendar. Assessments use it to publish one event each."""

    def __init__(self, db: DatabaseService):
        self.db = db

    def create_event(
        self,
        owner_id: str,
        title: str,
        date: str,
        time: Optional[str] = None,
        type: CalendarEventType = CalendarEventType.EVENT,
        subject: Optional[str] = None,
        grade: Optional[str] = None,
        related_class_id: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> str:
        """Stores a calendar event and returns its id."""
        event = self.db.add_calendar_event({
            "id": f"evt_{uuid.uuid4().hex[:12]}",
            "owner_id": owner_id,
            "title": title,
            "date": date,
            "time": time,
            "type": CalendarEventType(type).value,
            "subject": subject,
            "grade": grade,
            "related_class_id": related_class_id,
            "notes": notes,
        })
        logger.debug("Calendar event %s created for class %s.", event.id, related_class_id)
        return event.id

    def list_events(self, owner_id: str) -> List[CalendarEvent]:
        return self.db.get_calendar_events(owner_id)


def get_calendar_service(db: DatabaseService = Depends(get_db_service)) -> CalendarService:
    return CalendarService(db)
