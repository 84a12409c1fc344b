# /app/routers/calendar_router.py

from fastapi import APIRouter, Depends
from typing import List

from ..core.deps import get_owner_id
from ..models import calendar_model
from ..services.calendar_service import CalendarService, get_calendar_service

router = APIRouter()


@router.get("/events", response_model=List[calendar_model.CalendarEvent], summary="List Calendar Events")
def list_events(calendar: CalendarService = Depends(get_calendar_service), owner_id: str = Depends(get_owner_id)):
    return calendar.list_events(owner_id=owner_id)
