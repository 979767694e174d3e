from supabase import Client
from quidz.modules.tasks.schemas import (
    TaskCreate, TaskUpdate, TaskResponse, TaskCreateResult, TASK_STATUSES
)
from quidz.database.supabase_client import rows, first
from quidz.config import settings
from typing import Any, Dict, Iterable, List, Optional, Tuple
from fastapi import HTTPException
from datetime import datetime, timedelta
import logging

logger = logging.getLogger(__name__)


def next_status(status: Optional[str]) -> str:
    """Status cycle used by the participant checklist: open -> in_progress -> completed -> open"""
    current = status if status in TASK_STATUSES else "open"
    return TASK_STATUSES[(TASK_STATUSES.index(current) + 1) % len(TASK_STATUSES)]


def plan_fanout(participant_ids: Iterable[str], existing: Iterable[Dict[str, Any]]) -> Tuple[List[str], List[str]]:
    """Split participants into (to_create, skipped) given fan-out rows that already exist for the same task.

    Order of participant_ids is kept; duplicate ids are collapsed.
    """
    already_assigned = {row.get("assigned_to") for row in existing if row.get("assigned_to")}
    to_create: List[str] = []
    skipped: List[str] = []
    seen = set()
    for pid in participant_ids:
        if pid in seen:
            continue
        seen.add(pid)
        if pid in already_assigned:
            skipped.append(pid)
        else:
            to_create.append(pid)
    return to_create, skipped


class TaskService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_task(self, task_id: str) -> TaskResponse:
        try:
            result = self.supabase.table("tasks")\
                .select("*")\
                .eq("id", task_id)\
                .maybe_single()\
                .execute()
            task = first(result)
            if not task:
                raise HTTPException(status_code=404, detail="Task not found")
            return TaskResponse(**task)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_tasks_for_user(self, user_id: str) -> List[TaskResponse]:
        """Tasks assigned to the participant, earliest due date first"""
        try:
            result = self.supabase.table("tasks")\
                .select("*")\
                .eq("assigned_to", user_id)\
                .order("due_date", desc=False)\
                .execute()
            return [TaskResponse(**t) for t in rows(result)]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_tasks(self, assigned_to: Optional[str] = None, status: Optional[str] = None) -> List[TaskResponse]:
        """All tasks for staff, newest first"""
        try:
            query = self.supabase.table("tasks").select("*")
            if assigned_to:
                query = query.eq("assigned_to", assigned_to)
            if status:
                query = query.eq("status", status)
            result = query.order("created_at", desc=True).execute()
            return [TaskResponse(**t) for t in rows(result)]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def _existing_fanout_rows(self, task_data: TaskCreate) -> List[Dict[str, Any]]:
        """Rows of an identical fan-out created inside the dedupe window, or sharing the idempotency key"""
        cutoff = (datetime.utcnow() - timedelta(minutes=settings.task_fanout_dedupe_minutes)).isoformat()
        result = self.supabase.table("tasks")\
            .select("id, assigned_to")\
            .eq("title", task_data.title)\
            .eq("assign_to_all", True)\
            .gte("created_at", cutoff)\
            .execute()
        existing = rows(result)
        if task_data.idempotency_key:
            keyed = self.supabase.table("tasks")\
                .select("id, assigned_to")\
                .eq("idempotency_key", task_data.idempotency_key)\
                .execute()
            existing.extend(rows(keyed))
        return existing

    def _row(self, task_data: TaskCreate, assigned_to: str, created_by: str) -> Dict[str, Any]:
        return {
            "title": task_data.title,
            "description": task_data.description,
            "category": task_data.category,
            "due_date": task_data.due_date.isoformat() if task_data.due_date else None,
            "priority": task_data.priority,
            "status": "open",
            "assigned_to": assigned_to,
            "assign_to_all": task_data.assign_to_all,
            "idempotency_key": task_data.idempotency_key,
            "file_url": task_data.file_url,
            "image_url": task_data.image_url,
            "links": task_data.links or [],
            "created_by": created_by,
        }

    def create_task(self, task_data: TaskCreate, created_by: str, participant_ids: Optional[List[str]] = None) -> TaskCreateResult:
        """Create a single task, or fan out one row per participant for assign_to_all"""
        try:
            if not task_data.assign_to_all:
                result = self.supabase.table("tasks")\
                    .insert(self._row(task_data, task_data.assigned_to, created_by))\
                    .execute()
                created = rows(result)
                if not created:
                    raise HTTPException(status_code=500, detail="Failed to create task")
                return TaskCreateResult(created=[TaskResponse(**t) for t in created])

            if not participant_ids:
                raise HTTPException(status_code=400, detail="No participants to assign the task to")
            to_create, skipped = plan_fanout(participant_ids, self._existing_fanout_rows(task_data))
            if skipped:
                logger.info(f"Fan-out '{task_data.title}': skipping {len(skipped)} participant(s) that already have it")
            if not to_create:
                return TaskCreateResult(created=[], skipped_assignees=skipped)

            # Single multi-row insert
            result = self.supabase.table("tasks")\
                .insert([self._row(task_data, pid, created_by) for pid in to_create])\
                .execute()
            created = rows(result)
            if not created:
                raise HTTPException(status_code=500, detail="Failed to create tasks")
            logger.info(f"Fan-out '{task_data.title}': created {len(created)} task(s)")
            return TaskCreateResult(created=[TaskResponse(**t) for t in created], skipped_assignees=skipped)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_task(self, task_id: str, task_data: TaskUpdate) -> TaskResponse:
        """Staff update of any field"""
        try:
            update_data = task_data.model_dump(exclude_none=True, mode="json")
            if not update_data:
                return self.get_task(task_id)
            update_data["updated_at"] = datetime.utcnow().isoformat()
            result = self.supabase.table("tasks")\
                .update(update_data)\
                .eq("id", task_id)\
                .execute()
            updated = first(result)
            if not updated:
                raise HTTPException(status_code=404, detail="Task not found")
            return TaskResponse(**updated)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_status(self, task_id: str, user_id: str, status: str) -> TaskResponse:
        """Participant status change; only on tasks assigned to the caller"""
        task = self.get_task(task_id)
        if task.assigned_to != user_id:
            raise HTTPException(status_code=403, detail="You can only update your own tasks")
        try:
            result = self.supabase.table("tasks")\
                .update({"status": status, "updated_at": datetime.utcnow().isoformat()})\
                .eq("id", task_id)\
                .execute()
            updated = first(result)
            if not updated:
                raise HTTPException(status_code=404, detail="Task not found")
            return TaskResponse(**updated)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_task(self, task_id: str) -> bool:
        try:
            self.supabase.table("skill_tasks").delete().eq("task_id", task_id).execute()
            result = self.supabase.table("tasks")\
                .delete()\
                .eq("id", task_id)\
                .execute()
            return len(rows(result)) > 0
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
