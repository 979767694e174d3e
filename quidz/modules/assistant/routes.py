from fastapi import APIRouter, Depends
from quidz.database.supabase_client import get_supabase
from quidz.modules.assistant.schemas import (
    AssistantMessageCreate, AssistantMessageResponse, AssistantSettingsUpdate, AssistantSettingsResponse
)
from quidz.modules.assistant.service import AssistantService
from quidz.core.dependencies import require_permission
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/assistant", tags=["assistant"])


def get_assistant_service(supabase: Client = Depends(get_supabase)) -> AssistantService:
    return AssistantService(supabase)


@router.get("/messages", response_model=List[AssistantMessageResponse])
async def get_history(
    user_data: Dict = Depends(require_permission("assistant:use")),
    service: AssistantService = Depends(get_assistant_service)
):
    return service.history(user_data["id"])


@router.post("/messages", response_model=List[AssistantMessageResponse])
async def send_message(
    message: AssistantMessageCreate,
    user_data: Dict = Depends(require_permission("assistant:use")),
    service: AssistantService = Depends(get_assistant_service)
):
    """Ask the assistant; returns the full history including the reply"""
    return service.send(user_data["id"], message.content)


@router.delete("/messages")
async def clear_history(
    user_data: Dict = Depends(require_permission("assistant:use")),
    service: AssistantService = Depends(get_assistant_service)
):
    deleted = service.clear(user_data["id"])
    return {"message": "Chat history cleared", "deleted": deleted}


@router.get("/settings", response_model=AssistantSettingsResponse)
async def get_settings(
    user_data: Dict = Depends(require_permission("assistant:use")),
    service: AssistantService = Depends(get_assistant_service)
):
    return service.get_settings()


@router.put("/settings", response_model=AssistantSettingsResponse)
async def save_settings(
    settings_data: AssistantSettingsUpdate,
    user_data: Dict = Depends(require_permission("assistant:configure")),
    service: AssistantService = Depends(get_assistant_service)
):
    return service.save_settings(settings_data)
