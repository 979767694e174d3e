from fastapi import APIRouter, Depends, HTTPException, UploadFile, File, Form
from quidz.database.supabase_client import get_supabase
from quidz.modules.tools.schemas import ToolResponse
from quidz.modules.tools.service import ToolService
from quidz.core.dependencies import require_permission
from quidz.core.storage import FileStorage, PROJECT_IMAGES
from supabase import Client
from typing import List, Dict, Optional

router = APIRouter(prefix="/tools", tags=["tools"])


def get_tool_service(supabase: Client = Depends(get_supabase)) -> ToolService:
    return ToolService(supabase)


@router.get("", response_model=List[ToolResponse])
async def list_tools(
    user_data: Dict = Depends(require_permission("tools:read")),
    service: ToolService = Depends(get_tool_service)
):
    return service.list_tools()


@router.post("", response_model=ToolResponse, status_code=201)
async def create_tool(
    title: str = Form(...),
    web_link: str = Form(...),
    description: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    user_data: Dict = Depends(require_permission("tools:create")),
    service: ToolService = Depends(get_tool_service),
    supabase: Client = Depends(get_supabase)
):
    """Add a tool link with optional image (staff)"""
    if not web_link.startswith(("http://", "https://")):
        raise HTTPException(status_code=400, detail="web_link must be an http(s) URL")
    image_url = None
    if image is not None and image.filename:
        image_url = await FileStorage(supabase).upload(PROJECT_IMAGES, user_data["id"], image, image_only=True)
    return service.create_tool(title, web_link, user_data["id"], description=description, image_url=image_url)


@router.delete("/{tool_id}", status_code=204)
async def delete_tool(
    tool_id: str,
    user_data: Dict = Depends(require_permission("tools:delete")),
    service: ToolService = Depends(get_tool_service)
):
    if not service.delete_tool(tool_id):
        raise HTTPException(status_code=404, detail="Tool not found")
    return None
