from supabase import Client
from quidz.modules.progress.schemas import (
    ProgressSummary, ParticipantDashboard, RecentTask, AdminStats, ParticipantDetail
)
from quidz.modules.progress.aggregation import summarize, percent
from quidz.modules.profiles.schemas import ProfileResponse
from quidz.modules.profiles.service import ProfileService
from quidz.modules.tasks.schemas import TaskResponse
from quidz.modules.absences.schemas import AbsenceResponse
from quidz.modules.absences.service import AbsenceService
from quidz.modules.skills.schemas import SkillResponse
from quidz.modules.projects.schemas import ProjectResponse
from quidz.modules.badges.service import BadgeService
from quidz.modules.feedback.schemas import MoodResponse
from quidz.database.supabase_client import rows, first
from typing import Any, Dict, List, Optional
from fastapi import HTTPException
from datetime import date, timedelta
import logging

logger = logging.getLogger(__name__)


class ProgressService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def source_rows(
        self, user_id: str, period_start: Optional[date] = None, period_end: Optional[date] = None
    ) -> Dict[str, List[Dict[str, Any]]]:
        """Rows feeding the summary, already narrowed to the period where the store can do it"""
        tasks = self.supabase.table("tasks").select("*").eq("assigned_to", user_id)
        absences = self.supabase.table("absences").select("*").eq("user_id", user_id)
        progress = self.supabase.table("learning_progress")\
            .select("flashcard_id, knew_answer, created_at")\
            .eq("user_id", user_id)\
            .eq("knew_answer", True)
        mood = self.supabase.table("mood_entries").select("*").eq("user_id", user_id)
        if period_start:
            tasks = tasks.gte("due_date", period_start.isoformat())
            absences = absences.gte("date", period_start.isoformat())
            progress = progress.gte("created_at", period_start.isoformat())
            mood = mood.gte("created_at", period_start.isoformat())
        if period_end:
            # created_at is a timestamp; include the whole last day
            day_after = (period_end + timedelta(days=1)).isoformat()
            tasks = tasks.lte("due_date", period_end.isoformat())
            absences = absences.lte("date", period_end.isoformat())
            progress = progress.lt("created_at", day_after)
            mood = mood.lt("created_at", day_after)
        return {
            "tasks": rows(tasks.order("due_date", desc=False).execute()),
            "absences": rows(absences.order("date", desc=True).execute()),
            "skills": rows(self.supabase.table("skills").select("*").eq("user_id", user_id).execute()),
            "progress": rows(progress.execute()),
            "mood": rows(mood.order("created_at", desc=True).execute()),
        }

    def _flashcards_available(self, user_id: str) -> int:
        result = self.supabase.table("flashcards")\
            .select("id", count="exact")\
            .or_(f"is_public.eq.true,created_by.eq.{user_id}")\
            .execute()
        return result.count if result.count is not None else len(rows(result))

    def summarize_rows(
        self,
        user_id: str,
        source: Dict[str, List[Dict[str, Any]]],
        period_start: Optional[date] = None,
        period_end: Optional[date] = None,
    ) -> ProgressSummary:
        return ProgressSummary(**summarize(
            source["tasks"], source["absences"], source["skills"], source["progress"], source["mood"],
            period_start=period_start,
            period_end=period_end,
            flashcards_available=self._flashcards_available(user_id),
        ))

    def summary(self, user_id: str, period_start: Optional[date] = None, period_end: Optional[date] = None) -> ProgressSummary:
        """Recomputed on every call"""
        if period_start and period_end and period_end < period_start:
            raise HTTPException(status_code=400, detail="period_end must not be before period_start")
        try:
            source = self.source_rows(user_id, period_start, period_end)
            return self.summarize_rows(user_id, source, period_start, period_end)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def participant_dashboard(self, user_id: str) -> ParticipantDashboard:
        try:
            profile = first(self.supabase.table("profiles").select("*").eq("id", user_id).maybe_single().execute())
            source = self.source_rows(user_id)
            upcoming = [t for t in source["tasks"] if t.get("status") != "completed"]
            return ParticipantDashboard(
                profile=ProfileResponse(**profile) if profile else None,
                summary=self.summarize_rows(user_id, source),
                upcoming_tasks=[TaskResponse(**t) for t in upcoming[:10]],
                badges=BadgeService(self.supabase).list_for_user(user_id),
                recent_mood=[MoodResponse(**m) for m in source["mood"][:7]],
            )
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def admin_stats(self, recent: int = 5) -> AdminStats:
        try:
            profiles = self.supabase.table("profiles").select("id", count="exact").execute()
            tasks = rows(self.supabase.table("tasks").select("*").order("created_at", desc=True).execute())
            completed = sum(1 for t in tasks if t.get("status") == "completed")
            pending = AbsenceService(self.supabase).list_absences("pending")

            recent_tasks = tasks[:recent]
            assignees = ProfileService(self.supabase).profiles_by_id([t.get("assigned_to") for t in recent_tasks])
            return AdminStats(
                profiles_total=profiles.count if profiles.count is not None else len(rows(profiles)),
                tasks_total=len(tasks),
                tasks_completed=completed,
                task_completion_percent=percent(completed, len(tasks)),
                pending_absences=len(pending),
                recent_tasks=[
                    RecentTask(**t, assignee_name=assignees.get(t.get("assigned_to"), {}).get("full_name"))
                    for t in recent_tasks
                ],
                recent_absences=pending[:recent],
            )
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def participant_detail(self, user_id: str) -> ParticipantDetail:
        """Everything staff see on the participant page"""
        profile = ProfileService(self.supabase).get_profile(user_id)
        try:
            roles = sorted({
                r["role"] for r in rows(self.supabase.table("user_roles").select("role").eq("user_id", user_id).execute())
            })
            source = self.source_rows(user_id)
            projects = rows(
                self.supabase.table("projects").select("*").eq("user_id", user_id).order("created_at", desc=True).execute()
            )
            return ParticipantDetail(
                profile=profile,
                roles=roles,
                summary=self.summarize_rows(user_id, source),
                tasks=[TaskResponse(**t) for t in source["tasks"]],
                absences=[AbsenceResponse(**a) for a in source["absences"]],
                skills=[SkillResponse(**s) for s in source["skills"]],
                projects=[ProjectResponse(**p) for p in projects],
                mood_entries=[MoodResponse(**m) for m in source["mood"][:30]],
                badges=BadgeService(self.supabase).list_for_user(user_id),
            )
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
