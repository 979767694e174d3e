from fastapi import APIRouter, Depends, HTTPException, Query
from quidz.database.supabase_client import get_supabase
from quidz.modules.chat.schemas import ChatMessageCreate, ChatMessageUpdate, ChatMessageResponse
from quidz.modules.chat.service import ChatService
from quidz.core.dependencies import require_permission, get_access_cache, get_user_permissions, check_owner
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/chat", tags=["chat"])


def get_chat_service(supabase: Client = Depends(get_supabase)) -> ChatService:
    return ChatService(supabase)


@router.get("/messages", response_model=List[ChatMessageResponse])
async def list_messages(
    limit: int = Query(200, ge=1, le=1000),
    user_data: Dict = Depends(require_permission("chat:read")),
    service: ChatService = Depends(get_chat_service)
):
    """Group chat history, oldest first"""
    return service.list_messages(limit=limit)


@router.post("/messages", response_model=ChatMessageResponse, status_code=201)
async def send_message(
    message_data: ChatMessageCreate,
    user_data: Dict = Depends(require_permission("chat:write")),
    service: ChatService = Depends(get_chat_service)
):
    if not message_data.message.strip():
        raise HTTPException(status_code=400, detail="Message is empty")
    return service.send_message(user_data["id"], message_data.message)


@router.put("/messages/{message_id}", response_model=ChatMessageResponse)
async def edit_message(
    message_id: str,
    message_data: ChatMessageUpdate,
    user_data: Dict = Depends(require_permission("chat:write")),
    service: ChatService = Depends(get_chat_service)
):
    """Edit an own message"""
    check_owner(service.get_message(message_id)["user_id"], user_data, detail="You can only edit your own messages")
    return service.edit_message(message_id, message_data.message)


@router.delete("/messages/{message_id}", status_code=204)
async def delete_message(
    message_id: str,
    user_data: Dict = Depends(require_permission("chat:write")),
    service: ChatService = Depends(get_chat_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Delete an own message; staff may delete any message"""
    owner_id = service.get_message(message_id)["user_id"]
    if owner_id != user_data["id"] and "chat:moderate" not in get_user_permissions(user_data["id"], supabase, cache):
        raise HTTPException(status_code=403, detail="You can only delete your own messages")
    if not service.delete_message(message_id):
        raise HTTPException(status_code=404, detail="Message not found")
    return None
