from fastapi import APIRouter, Depends, HTTPException, UploadFile, File
from quidz.database.supabase_client import get_supabase
from quidz.modules.tasks.schemas import (
    TaskCreate, TaskUpdate, TaskStatusUpdate, TaskResponse, TaskCreateResult, UploadResponse
)
from quidz.modules.tasks.service import TaskService, next_status
from quidz.modules.profiles.service import ProfileService
from quidz.core.dependencies import require_permission
from quidz.core.storage import FileStorage, DOCUMENTS, PROJECT_IMAGES
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/tasks", tags=["tasks"])


def get_task_service(supabase: Client = Depends(get_supabase)) -> TaskService:
    return TaskService(supabase)


def get_profile_service(supabase: Client = Depends(get_supabase)) -> ProfileService:
    return ProfileService(supabase)


@router.get("/mine", response_model=List[TaskResponse])
async def list_my_tasks(
    user_data: Dict = Depends(require_permission("tasks:read")),
    service: TaskService = Depends(get_task_service)
):
    """Tasks assigned to the caller"""
    return service.list_tasks_for_user(user_data["id"])


@router.patch("/{task_id}/status", response_model=TaskResponse)
async def update_task_status(
    task_id: str,
    status_update: TaskStatusUpdate,
    user_data: Dict = Depends(require_permission("tasks:update_status")),
    service: TaskService = Depends(get_task_service)
):
    """Participant status change on an own task"""
    return service.update_status(task_id, user_data["id"], status_update.status)


@router.post("/{task_id}/advance", response_model=TaskResponse)
async def advance_task_status(
    task_id: str,
    user_data: Dict = Depends(require_permission("tasks:update_status")),
    service: TaskService = Depends(get_task_service)
):
    """Move an own task to the next status in the open -> in_progress -> completed cycle"""
    task = service.get_task(task_id)
    return service.update_status(task_id, user_data["id"], next_status(task.status))


@router.get("", response_model=List[TaskResponse])
async def list_tasks(
    assigned_to: Optional[str] = None,
    status: Optional[str] = None,
    user_data: Dict = Depends(require_permission("tasks:create")),
    service: TaskService = Depends(get_task_service)
):
    """All tasks (staff)"""
    return service.list_tasks(assigned_to=assigned_to, status=status)


@router.post("", response_model=TaskCreateResult, status_code=201)
async def create_task(
    task_data: TaskCreate,
    user_data: Dict = Depends(require_permission("tasks:create")),
    service: TaskService = Depends(get_task_service),
    profile_service: ProfileService = Depends(get_profile_service)
):
    """Create a task for one participant or fan out to every participant"""
    participant_ids = profile_service.list_participant_ids() if task_data.assign_to_all else None
    return service.create_task(task_data, user_data["id"], participant_ids)


@router.post("/uploads/{kind}", response_model=UploadResponse, status_code=201)
async def upload_task_attachment(
    kind: str,
    file: UploadFile = File(...),
    user_data: Dict = Depends(require_permission("tasks:create")),
    supabase: Client = Depends(get_supabase)
):
    """Upload a task image (kind=image) or file (kind=file) and return its URL"""
    storage = FileStorage(supabase)
    if kind == "image":
        url = await storage.upload(PROJECT_IMAGES, user_data["id"], file, image_only=True)
    elif kind == "file":
        url = await storage.upload(DOCUMENTS, user_data["id"], file)
    else:
        raise HTTPException(status_code=400, detail="kind must be 'image' or 'file'")
    return UploadResponse(url=url)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str,
    user_data: Dict = Depends(require_permission("tasks:create")),
    service: TaskService = Depends(get_task_service)
):
    return service.get_task(task_id)


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    task_data: TaskUpdate,
    user_data: Dict = Depends(require_permission("tasks:update")),
    service: TaskService = Depends(get_task_service)
):
    """Update any task field (staff)"""
    return service.update_task(task_id, task_data)


@router.delete("/{task_id}", status_code=204)
async def delete_task(
    task_id: str,
    user_data: Dict = Depends(require_permission("tasks:delete")),
    service: TaskService = Depends(get_task_service)
):
    """Delete task (staff)"""
    if not service.delete_task(task_id):
        raise HTTPException(status_code=404, detail="Task not found")
    return None
