# /app/models/calendar_model.py

from pydantic import BaseModel, ConfigDict
from typing import Optional
from enum import Enum


class CalendarEventType(str, Enum):
    LESSON = "lesson"
    GAME = "game"
    EXAM = "exam"
    EVENT = "event"


class CalendarEvent(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    date: str
    time: Optional[str] = None
    type: CalendarEventType = CalendarEventType.EVENT
    subject: Optional[str] = None
    grade: Optional[str] = None
    relatedClassId: Optional[str] = None
    notes: Optional[str] = None
