from fastapi import APIRouter, Depends, HTTPException, UploadFile, File, Form
from quidz.database.supabase_client import get_supabase
from quidz.modules.skills.schemas import (
    SkillReview, SkillTaskCreate, SkillResponse, SkillWithOwnerResponse, LinkedTaskResponse, SKILL_CATEGORIES
)
from quidz.modules.skills.service import SkillService
from quidz.core.dependencies import require_permission, get_access_cache, check_owner_or_staff
from quidz.core.storage import FileStorage, SKILL_PROOFS
from supabase import Client
from typing import List, Dict, Optional

router = APIRouter(prefix="/skills", tags=["skills"])


def get_skill_service(supabase: Client = Depends(get_supabase)) -> SkillService:
    return SkillService(supabase)


@router.get("/mine", response_model=List[SkillResponse])
async def list_my_skills(
    user_data: Dict = Depends(require_permission("skills:read")),
    service: SkillService = Depends(get_skill_service)
):
    return service.list_for_user(user_data["id"])


@router.post("", response_model=SkillResponse, status_code=201)
async def propose_skill(
    title: str = Form(...),
    category: str = Form("sonstiges"),
    description: Optional[str] = Form(None),
    proof_text: Optional[str] = Form(None),
    proof_file: Optional[UploadFile] = File(None),
    user_data: Dict = Depends(require_permission("skills:create")),
    service: SkillService = Depends(get_skill_service),
    supabase: Client = Depends(get_supabase)
):
    """Propose a skill with optional proof text and proof file"""
    if not title.strip():
        raise HTTPException(status_code=400, detail="title is required")
    if category not in SKILL_CATEGORIES:
        raise HTTPException(status_code=400, detail=f"Invalid category. Must be one of: {', '.join(SKILL_CATEGORIES)}")
    proof_file_url = None
    if proof_file is not None and proof_file.filename:
        proof_file_url = await FileStorage(supabase).upload(SKILL_PROOFS, user_data["id"], proof_file)
    return service.propose_skill(
        user_id=user_data["id"],
        title=title.strip(),
        category=category,
        description=description,
        proof_text=proof_text,
        proof_file_url=proof_file_url,
    )


@router.get("", response_model=List[SkillWithOwnerResponse])
async def list_skills(
    status: Optional[str] = None,
    user_id: Optional[str] = None,
    category: Optional[str] = None,
    user_data: Dict = Depends(require_permission("skills:review")),
    service: SkillService = Depends(get_skill_service)
):
    """All skills with owners (staff)"""
    return service.list_skills(status=status, user_id=user_id, category=category)


@router.delete("/{skill_id}", status_code=204)
async def delete_skill(
    skill_id: str,
    user_data: Dict = Depends(require_permission("skills:delete")),
    service: SkillService = Depends(get_skill_service)
):
    """Withdraw an own skill that is still under review"""
    if not service.delete_own_skill(skill_id, user_data["id"]):
        raise HTTPException(status_code=404, detail="Skill not found")
    return None


@router.put("/{skill_id}/review", response_model=SkillResponse)
async def review_skill(
    skill_id: str,
    review: SkillReview,
    user_data: Dict = Depends(require_permission("skills:review")),
    service: SkillService = Depends(get_skill_service)
):
    return service.review_skill(skill_id, review)


@router.get("/{skill_id}/tasks", response_model=List[LinkedTaskResponse])
async def list_skill_tasks(
    skill_id: str,
    user_data: Dict = Depends(require_permission("skills:read")),
    service: SkillService = Depends(get_skill_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Tasks linked to a skill (owner or staff)"""
    check_owner_or_staff(service.get_skill(skill_id).user_id, user_data, supabase, cache)
    return service.linked_tasks(skill_id)


@router.post("/{skill_id}/tasks", response_model=List[LinkedTaskResponse], status_code=201)
async def create_skill_task(
    skill_id: str,
    task_data: SkillTaskCreate,
    user_data: Dict = Depends(require_permission("skills:review")),
    service: SkillService = Depends(get_skill_service)
):
    """Create a follow-up task for the skill owner and link it (staff)"""
    return service.create_task_for_skill(skill_id, task_data, user_data["id"])


@router.post("/{skill_id}/tasks/{task_id}", response_model=List[LinkedTaskResponse])
async def link_skill_task(
    skill_id: str,
    task_id: str,
    user_data: Dict = Depends(require_permission("skills:review")),
    service: SkillService = Depends(get_skill_service)
):
    return service.link_task(skill_id, task_id)
