from fastapi import APIRouter, Depends, HTTPException, UploadFile, File
from fastapi.responses import StreamingResponse
from quidz.database.supabase_client import get_supabase, rows, first
from quidz.modules.projects.schemas import (
    ProjectCreate, ProjectUpdate, ProjectFeature, ProjectResponse, GalleryProjectResponse, LikeResponse
)
from quidz.modules.projects.service import ProjectService
from quidz.modules.projects.portfolio_pdf import build_portfolio_pdf
from quidz.modules.tasks.schemas import UploadResponse
from quidz.core.dependencies import require_permission, check_owner
from quidz.core.storage import FileStorage, PROJECT_IMAGES
from supabase import Client
from typing import List, Dict, Optional
import io

router = APIRouter(prefix="/projects", tags=["projects"])


def get_project_service(supabase: Client = Depends(get_supabase)) -> ProjectService:
    return ProjectService(supabase)


@router.get("/mine", response_model=List[ProjectResponse])
async def list_my_projects(
    user_data: Dict = Depends(require_permission("projects:read")),
    service: ProjectService = Depends(get_project_service)
):
    return service.list_for_user(user_data["id"])


@router.get("/mine/export.pdf")
async def export_portfolio_pdf(
    user_data: Dict = Depends(require_permission("projects:read")),
    service: ProjectService = Depends(get_project_service),
    supabase: Client = Depends(get_supabase)
):
    """Download the caller's competence portfolio as PDF"""
    user_id = user_data["id"]
    profile = first(
        supabase.table("profiles").select("full_name, email").eq("id", user_id).maybe_single().execute()
    ) or {"email": user_data.get("email")}
    skills = rows(supabase.table("skills").select("*").eq("user_id", user_id).order("category").execute())
    projects = [p.model_dump() for p in service.list_for_user(user_id)]
    pdf_bytes = build_portfolio_pdf(profile, skills, projects, service.linked_skills([p["id"] for p in projects]))
    return StreamingResponse(
        io.BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="portfolio.pdf"'},
    )


@router.get("/gallery", response_model=List[GalleryProjectResponse])
async def project_gallery(
    category: Optional[str] = None,
    search: Optional[str] = None,
    user_data: Dict = Depends(require_permission("projects:read")),
    service: ProjectService = Depends(get_project_service)
):
    """Published projects of all participants"""
    return service.gallery(user_data["id"], category=category, search=search)


@router.post("/uploads/image", response_model=UploadResponse, status_code=201)
async def upload_project_image(
    file: UploadFile = File(...),
    user_data: Dict = Depends(require_permission("projects:create")),
    supabase: Client = Depends(get_supabase)
):
    url = await FileStorage(supabase).upload(PROJECT_IMAGES, user_data["id"], file, image_only=True)
    return UploadResponse(url=url)


@router.post("", response_model=ProjectResponse, status_code=201)
async def create_project(
    project_data: ProjectCreate,
    user_data: Dict = Depends(require_permission("projects:create")),
    service: ProjectService = Depends(get_project_service)
):
    return service.create_project(user_data["id"], project_data)


@router.put("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: str,
    project_data: ProjectUpdate,
    user_data: Dict = Depends(require_permission("projects:update")),
    service: ProjectService = Depends(get_project_service)
):
    """Update own project"""
    check_owner(service.get_project(project_id).user_id, user_data, detail="You can only edit your own projects")
    return service.update_project(project_id, project_data)


@router.post("/{project_id}/toggle-publish", response_model=ProjectResponse)
async def toggle_publish(
    project_id: str,
    user_data: Dict = Depends(require_permission("projects:update")),
    service: ProjectService = Depends(get_project_service)
):
    project = service.get_project(project_id)
    check_owner(project.user_id, user_data, detail="You can only publish your own projects")
    return service.set_flag(project_id, "published", not project.published)


@router.post("/{project_id}/feature", response_model=ProjectResponse)
async def feature_project(
    project_id: str,
    feature: ProjectFeature,
    user_data: Dict = Depends(require_permission("projects:feature")),
    service: ProjectService = Depends(get_project_service)
):
    """Mark a project as featured in the gallery (staff)"""
    return service.set_flag(project_id, "featured", feature.featured)


@router.post("/{project_id}/like", response_model=LikeResponse)
async def toggle_like(
    project_id: str,
    user_data: Dict = Depends(require_permission("projects:read")),
    service: ProjectService = Depends(get_project_service)
):
    return service.toggle_like(project_id, user_data["id"])


@router.delete("/{project_id}", status_code=204)
async def delete_project(
    project_id: str,
    user_data: Dict = Depends(require_permission("projects:delete")),
    service: ProjectService = Depends(get_project_service)
):
    check_owner(service.get_project(project_id).user_id, user_data, detail="You can only delete your own projects")
    if not service.delete_project(project_id):
        raise HTTPException(status_code=404, detail="Project not found")
    return None
