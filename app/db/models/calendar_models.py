# /app/db/models/calendar_models.py

from sqlalchemy import Column, String, Text

from ..base_class import Base


class CalendarEvent(Base):
    """A school calendar entry, optionally linked back to the class it concerns."""
    __tablename__ = "calendar_events"

    id = Column(String, primary_key=True, index=True)
    owner_id = Column(String, nullable=False, index=True)
    title = Column(String, nullable=False)
    date = Column(String, nullable=False)
    time = Column(String, nullable=True)
    type = Column(String, nullable=False)
    subject = Column(String, nullable=True)
    grade = Column(String, nullable=True)
    related_class_id = Column(String, nullable=True, index=True)
    notes = Column(Text, nullable=True)
