from supabase import Client
from quidz.modules.projects.schemas import (
    ProjectCreate, ProjectUpdate, ProjectResponse, GalleryProjectResponse, LikeResponse
)
from quidz.modules.profiles.service import ProfileService
from quidz.database.supabase_client import rows, first
from typing import Dict, List, Optional
from fastapi import HTTPException
from datetime import datetime
import logging

logger = logging.getLogger(__name__)


def matches_search(project: Dict, query: str) -> bool:
    """Case-insensitive match on title, description or any tag"""
    q = query.lower()
    if q in (project.get("title") or "").lower():
        return True
    if q in (project.get("description") or "").lower():
        return True
    return any(q in tag.lower() for tag in project.get("tags") or [])


class ProjectService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_project(self, project_id: str) -> ProjectResponse:
        try:
            result = self.supabase.table("projects")\
                .select("*")\
                .eq("id", project_id)\
                .maybe_single()\
                .execute()
            project = first(result)
            if not project:
                raise HTTPException(status_code=404, detail="Project not found")
            return ProjectResponse(**project)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_for_user(self, user_id: str) -> List[ProjectResponse]:
        try:
            result = self.supabase.table("projects")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .execute()
            return [ProjectResponse(**p) for p in rows(result)]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def _set_skills(self, project_id: str, skill_ids: List[str]):
        self.supabase.table("project_skills").delete().eq("project_id", project_id).execute()
        if skill_ids:
            self.supabase.table("project_skills").insert(
                [{"project_id": project_id, "skill_id": sid} for sid in dict.fromkeys(skill_ids)]
            ).execute()

    def create_project(self, user_id: str, project_data: ProjectCreate) -> ProjectResponse:
        try:
            payload = project_data.model_dump(exclude={"skill_ids"})
            payload["user_id"] = user_id
            result = self.supabase.table("projects").insert(payload).execute()
            created = first(result)
            if not created:
                raise HTTPException(status_code=500, detail="Failed to create project")
            if project_data.skill_ids:
                self._set_skills(created["id"], project_data.skill_ids)
            return ProjectResponse(**created)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_project(self, project_id: str, project_data: ProjectUpdate) -> ProjectResponse:
        try:
            update_data = project_data.model_dump(exclude_none=True, exclude={"skill_ids"})
            update_data["updated_at"] = datetime.utcnow().isoformat()
            result = self.supabase.table("projects")\
                .update(update_data)\
                .eq("id", project_id)\
                .execute()
            updated = first(result)
            if not updated:
                raise HTTPException(status_code=404, detail="Project not found")
            if project_data.skill_ids is not None:
                self._set_skills(project_id, project_data.skill_ids)
            return ProjectResponse(**updated)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def set_flag(self, project_id: str, field: str, value: bool) -> ProjectResponse:
        """Set published or featured"""
        try:
            result = self.supabase.table("projects")\
                .update({field: value, "updated_at": datetime.utcnow().isoformat()})\
                .eq("id", project_id)\
                .execute()
            updated = first(result)
            if not updated:
                raise HTTPException(status_code=404, detail="Project not found")
            return ProjectResponse(**updated)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_project(self, project_id: str) -> bool:
        try:
            self.supabase.table("project_likes").delete().eq("project_id", project_id).execute()
            self.supabase.table("project_skills").delete().eq("project_id", project_id).execute()
            result = self.supabase.table("projects")\
                .delete()\
                .eq("id", project_id)\
                .execute()
            return len(rows(result)) > 0
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def gallery(self, user_id: str, category: Optional[str] = None, search: Optional[str] = None) -> List[GalleryProjectResponse]:
        """Published projects, newest first, with author, like count and whether the caller liked it"""
        try:
            query = self.supabase.table("projects").select("*").eq("published", True)
            if category and category != "all":
                query = query.eq("category", category)
            projects = rows(query.order("created_at", desc=True).execute())
            if search:
                projects = [p for p in projects if matches_search(p, search)]
            if not projects:
                return []

            project_ids = [p["id"] for p in projects]
            likes = rows(
                self.supabase.table("project_likes")
                .select("project_id, user_id")
                .in_("project_id", project_ids)
                .execute()
            )
            like_counts: Dict[str, int] = {}
            liked = set()
            for like in likes:
                like_counts[like["project_id"]] = like_counts.get(like["project_id"], 0) + 1
                if like["user_id"] == user_id:
                    liked.add(like["project_id"])

            authors = ProfileService(self.supabase).profiles_by_id([p["user_id"] for p in projects])
            gallery = []
            for p in projects:
                author = authors.get(p["user_id"], {})
                gallery.append(GalleryProjectResponse(
                    **p,
                    author_name=author.get("full_name"),
                    author_avatar_url=author.get("avatar_url"),
                    likes_count=like_counts.get(p["id"], 0),
                    liked_by_me=p["id"] in liked,
                ))
            return gallery
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def toggle_like(self, project_id: str, user_id: str) -> LikeResponse:
        """Like a published project, or remove the caller's like if it exists"""
        project = self.get_project(project_id)
        if not project.published:
            raise HTTPException(status_code=404, detail="Project not found")
        try:
            existing = rows(
                self.supabase.table("project_likes")
                .select("id")
                .eq("project_id", project_id)
                .eq("user_id", user_id)
                .execute()
            )
            if existing:
                self.supabase.table("project_likes")\
                    .delete()\
                    .eq("project_id", project_id)\
                    .eq("user_id", user_id)\
                    .execute()
                liked = False
            else:
                self.supabase.table("project_likes")\
                    .insert({"project_id": project_id, "user_id": user_id})\
                    .execute()
                liked = True
            count = rows(
                self.supabase.table("project_likes").select("id").eq("project_id", project_id).execute()
            )
            return LikeResponse(project_id=project_id, liked=liked, likes_count=len(count))
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def linked_skills(self, project_ids: List[str]) -> Dict[str, List[Dict]]:
        """project id -> linked skill rows"""
        if not project_ids:
            return {}
        links = rows(
            self.supabase.table("project_skills")
            .select("project_id, skill_id")
            .in_("project_id", project_ids)
            .execute()
        )
        skill_ids = sorted({link["skill_id"] for link in links})
        skills = {}
        if skill_ids:
            skills = {
                s["id"]: s for s in rows(
                    self.supabase.table("skills").select("id, title, category").in_("id", skill_ids).execute()
                )
            }
        linked: Dict[str, List[Dict]] = {}
        for link in links:
            if link["skill_id"] in skills:
                linked.setdefault(link["project_id"], []).append(skills[link["skill_id"]])
        return linked
