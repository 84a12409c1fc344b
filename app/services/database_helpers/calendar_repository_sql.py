# /app/services/database_helpers/calendar_repository_sql.py

from typing import List, Dict

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.db.models.calendar_models import CalendarEvent


class CalendarRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def add_event(self, record: Dict) -> CalendarEvent:
        new_event = CalendarEvent(**record)
        self.db.add(new_event)
        try:
            self.db.commit()
        except SQLAlchemyError:
            # Leave the shared session usable for the rest of the request.
            self.db.rollback()
            raise
        self.db.refresh(new_event)
        return new_event

    def get_events_for_owner(self, owner_id: str) -> List[CalendarEvent]:
        return (
            self.db.query(CalendarEvent)
            .filter(CalendarEvent.owner_id == owner_id)
            .order_by(CalendarEvent.date, CalendarEvent.time)
            .all()
        )
