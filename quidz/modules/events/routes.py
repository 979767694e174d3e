from fastapi import APIRouter, Depends, HTTPException
from quidz.database.supabase_client import get_supabase
from quidz.modules.events.schemas import EventCreate, EventUpdate, EventResponse, CalendarResponse
from quidz.modules.events.service import EventService
from quidz.core.dependencies import require_permission, check_owner
from supabase import Client
from typing import Dict, Optional
from datetime import date

router = APIRouter(prefix="/events", tags=["events"])


def get_event_service(supabase: Client = Depends(get_supabase)) -> EventService:
    return EventService(supabase)


@router.get("", response_model=CalendarResponse)
async def get_calendar(
    start: Optional[date] = None,
    end: Optional[date] = None,
    user_data: Dict = Depends(require_permission("events:read")),
    service: EventService = Depends(get_event_service)
):
    """Own events and task due dates, optionally limited to [start, end]"""
    if start and end and end < start:
        raise HTTPException(status_code=400, detail="end must not be before start")
    return service.calendar(user_data["id"], start, end)


@router.post("", response_model=EventResponse, status_code=201)
async def create_event(
    event_data: EventCreate,
    user_data: Dict = Depends(require_permission("events:write")),
    service: EventService = Depends(get_event_service)
):
    return service.create_event(user_data["id"], event_data)


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: str,
    event_data: EventUpdate,
    user_data: Dict = Depends(require_permission("events:write")),
    service: EventService = Depends(get_event_service)
):
    check_owner(service.get_event(event_id)["user_id"], user_data, detail="You can only edit your own events")
    return service.update_event(event_id, event_data)


@router.delete("/{event_id}", status_code=204)
async def delete_event(
    event_id: str,
    user_data: Dict = Depends(require_permission("events:write")),
    service: EventService = Depends(get_event_service)
):
    check_owner(service.get_event(event_id)["user_id"], user_data, detail="You can only delete your own events")
    if not service.delete_event(event_id):
        raise HTTPException(status_code=404, detail="Event not found")
    return None
