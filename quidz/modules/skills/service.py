from supabase import Client
from quidz.modules.skills.schemas import (
    SkillReview, SkillTaskCreate, SkillResponse, SkillWithOwnerResponse, LinkedTaskResponse
)
from quidz.modules.profiles.service import ProfileService
from quidz.database.supabase_client import rows, first
from typing import List, Optional
from fastapi import HTTPException
from datetime import datetime
import logging

logger = logging.getLogger(__name__)


def skill_task_description(skill_title: str, description: Optional[str], goal: Optional[str]) -> str:
    parts = [description or ""]
    if goal:
        parts.append(f"Goal: {goal}")
    parts.append(f"(Derived from skill: {skill_title})")
    return "\n\n".join(p for p in parts if p)


class SkillService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_skill(self, skill_id: str) -> SkillResponse:
        try:
            result = self.supabase.table("skills")\
                .select("*")\
                .eq("id", skill_id)\
                .maybe_single()\
                .execute()
            skill = first(result)
            if not skill:
                raise HTTPException(status_code=404, detail="Skill not found")
            return SkillResponse(**skill)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_for_user(self, user_id: str) -> List[SkillResponse]:
        try:
            result = self.supabase.table("skills")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .execute()
            return [SkillResponse(**s) for s in rows(result)]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_skills(
        self, status: Optional[str] = None, user_id: Optional[str] = None, category: Optional[str] = None
    ) -> List[SkillWithOwnerResponse]:
        """Staff review list with owner names, newest first"""
        try:
            query = self.supabase.table("skills").select("*")
            if status and status != "all":
                query = query.eq("status", status)
            if user_id:
                query = query.eq("user_id", user_id)
            if category and category != "all":
                query = query.eq("category", category)
            found = rows(query.order("created_at", desc=True).execute())
            owners = ProfileService(self.supabase).profiles_by_id([s["user_id"] for s in found])
            return [
                SkillWithOwnerResponse(
                    **s,
                    owner_name=owners.get(s["user_id"], {}).get("full_name"),
                    owner_email=owners.get(s["user_id"], {}).get("email"),
                )
                for s in found
            ]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def propose_skill(
        self,
        user_id: str,
        title: str,
        category: str,
        description: Optional[str] = None,
        proof_text: Optional[str] = None,
        proof_file_url: Optional[str] = None,
    ) -> SkillResponse:
        """Participant proposes a skill; review state always starts at in_pruefung"""
        try:
            result = self.supabase.table("skills").insert({
                "user_id": user_id,
                "title": title,
                "description": description,
                "category": category,
                "proof_text": proof_text or None,
                "proof_file_url": proof_file_url,
                "status": "in_pruefung",
                "is_integration_relevant": False,
            }).execute()
            created = first(result)
            if not created:
                raise HTTPException(status_code=500, detail="Failed to create skill")
            return SkillResponse(**created)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_own_skill(self, skill_id: str, user_id: str) -> bool:
        """Participants may withdraw their own skill while it is still under review"""
        skill = self.get_skill(skill_id)
        if skill.user_id != user_id:
            raise HTTPException(status_code=403, detail="You can only delete your own skills")
        if skill.status != "in_pruefung":
            raise HTTPException(status_code=409, detail="Only skills under review can be deleted")
        try:
            self.supabase.table("skill_tasks").delete().eq("skill_id", skill_id).execute()
            self.supabase.table("project_skills").delete().eq("skill_id", skill_id).execute()
            result = self.supabase.table("skills")\
                .delete()\
                .eq("id", skill_id)\
                .execute()
            return len(rows(result)) > 0
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def review_skill(self, skill_id: str, review: SkillReview) -> SkillResponse:
        """Staff sets status, comment, competence level and integration relevance"""
        try:
            update_data = {
                "status": review.status,
                "coach_comment": review.coach_comment or None,
                "competence_level": review.competence_level or None,
                "updated_at": datetime.utcnow().isoformat(),
            }
            if review.is_integration_relevant is not None:
                update_data["is_integration_relevant"] = review.is_integration_relevant
            elif review.status == "integrationsrelevant":
                update_data["is_integration_relevant"] = True
            result = self.supabase.table("skills")\
                .update(update_data)\
                .eq("id", skill_id)\
                .execute()
            updated = first(result)
            if not updated:
                raise HTTPException(status_code=404, detail="Skill not found")
            logger.info(f"Skill {skill_id} reviewed: {review.status}")
            return SkillResponse(**updated)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def linked_tasks(self, skill_id: str) -> List[LinkedTaskResponse]:
        try:
            links = rows(
                self.supabase.table("skill_tasks")
                .select("task_id, created_at")
                .eq("skill_id", skill_id)
                .order("created_at", desc=True)
                .execute()
            )
            if not links:
                return []
            tasks = {
                t["id"]: t for t in rows(
                    self.supabase.table("tasks")
                    .select("id, title, status, due_date")
                    .in_("id", [link["task_id"] for link in links])
                    .execute()
                )
            }
            return [
                LinkedTaskResponse(**tasks[link["task_id"]], linked_at=link.get("created_at"))
                for link in links if link["task_id"] in tasks
            ]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def link_task(self, skill_id: str, task_id: str) -> List[LinkedTaskResponse]:
        skill = self.get_skill(skill_id)
        try:
            task = first(self.supabase.table("tasks").select("id, assigned_to").eq("id", task_id).maybe_single().execute())
            if not task:
                raise HTTPException(status_code=404, detail="Task not found")
            if task.get("assigned_to") != skill.user_id:
                raise HTTPException(status_code=400, detail="Task is not assigned to the skill owner")
            existing = rows(
                self.supabase.table("skill_tasks").select("id").eq("skill_id", skill_id).eq("task_id", task_id).execute()
            )
            if not existing:
                self.supabase.table("skill_tasks").insert({"skill_id": skill_id, "task_id": task_id}).execute()
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        return self.linked_tasks(skill_id)

    def create_task_for_skill(self, skill_id: str, task_data: SkillTaskCreate, created_by: str) -> List[LinkedTaskResponse]:
        """Create a task for the skill owner and link it to the skill"""
        skill = self.get_skill(skill_id)
        try:
            result = self.supabase.table("tasks").insert({
                "title": task_data.title,
                "description": skill_task_description(skill.title, task_data.description, task_data.goal),
                "assigned_to": skill.user_id,
                "due_date": task_data.due_date.isoformat() if task_data.due_date else None,
                "status": "open",
                "priority": "medium",
                "created_by": created_by,
            }).execute()
            task = first(result)
            if not task:
                raise HTTPException(status_code=500, detail="Failed to create task")
            self.supabase.table("skill_tasks").insert({"skill_id": skill_id, "task_id": task["id"]}).execute()
            logger.info(f"Task {task['id']} created from skill {skill_id}")
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        return self.linked_tasks(skill_id)
