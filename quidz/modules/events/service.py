from supabase import Client
from quidz.modules.events.schemas import (
    EventCreate, EventUpdate, EventResponse, TaskDueEntry, CalendarResponse
)
from quidz.modules.progress.aggregation import to_datetime
from quidz.database.supabase_client import rows, first
from typing import Dict, Optional
from fastapi import HTTPException
from datetime import date, datetime, timedelta
import logging

logger = logging.getLogger(__name__)


class EventService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_event(self, event_id: str) -> Dict:
        event = first(self.supabase.table("events").select("*").eq("id", event_id).maybe_single().execute())
        if not event:
            raise HTTPException(status_code=404, detail="Event not found")
        return event

    def calendar(self, user_id: str, start: Optional[date] = None, end: Optional[date] = None) -> CalendarResponse:
        """Own events overlapping [start, end] plus own task due dates in that range"""
        try:
            query = self.supabase.table("events").select("*").eq("user_id", user_id)
            if start:
                query = query.gte("end_time", start.isoformat())
            if end:
                query = query.lt("start_time", (end + timedelta(days=1)).isoformat())
            events = rows(query.order("start_time", desc=False).execute())

            task_query = self.supabase.table("tasks")\
                .select("id, title, due_date, status")\
                .eq("assigned_to", user_id)
            if start:
                task_query = task_query.gte("due_date", start.isoformat())
            if end:
                task_query = task_query.lte("due_date", end.isoformat())
            tasks = rows(task_query.order("due_date", desc=False).execute())

            return CalendarResponse(
                events=[EventResponse(**e) for e in events],
                task_due_dates=[
                    TaskDueEntry(task_id=t["id"], title=t["title"], due_date=t["due_date"], status=t.get("status"))
                    for t in tasks if t.get("due_date")
                ],
            )
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_event(self, user_id: str, event_data: EventCreate) -> EventResponse:
        try:
            payload = event_data.model_dump(mode="json")
            payload["user_id"] = user_id
            created = first(self.supabase.table("events").insert(payload).execute())
            if not created:
                raise HTTPException(status_code=500, detail="Failed to create event")
            return EventResponse(**created)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_event(self, event_id: str, event_data: EventUpdate) -> EventResponse:
        try:
            current = self.get_event(event_id)
            update_data = event_data.model_dump(mode="json", exclude_none=True)
            start = update_data.get("start_time", current["start_time"])
            end = update_data.get("end_time", current["end_time"])
            if to_datetime(end) < to_datetime(start):
                raise HTTPException(status_code=400, detail="end_time must not be before start_time")
            update_data["updated_at"] = datetime.utcnow().isoformat()
            updated = first(self.supabase.table("events").update(update_data).eq("id", event_id).execute())
            if not updated:
                raise HTTPException(status_code=404, detail="Event not found")
            return EventResponse(**updated)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_event(self, event_id: str) -> bool:
        try:
            result = self.supabase.table("events").delete().eq("id", event_id).execute()
            return len(rows(result)) > 0
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
