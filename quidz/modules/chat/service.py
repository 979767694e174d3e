from supabase import Client
from quidz.modules.chat.schemas import ChatMessageResponse
from quidz.modules.profiles.service import ProfileService
from quidz.database.supabase_client import rows, first
from typing import Dict, List
from fastapi import HTTPException
from datetime import datetime
import logging

logger = logging.getLogger(__name__)


class ChatService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _decorate(self, messages: List[Dict]) -> List[ChatMessageResponse]:
        senders = ProfileService(self.supabase).profiles_by_id([m["user_id"] for m in messages])
        return [
            ChatMessageResponse(
                **m,
                sender_name=senders.get(m["user_id"], {}).get("full_name") or senders.get(m["user_id"], {}).get("email"),
                sender_avatar_url=senders.get(m["user_id"], {}).get("avatar_url"),
            )
            for m in messages
        ]

    def get_message(self, message_id: str) -> Dict:
        message = first(
            self.supabase.table("chat_messages").select("*").eq("id", message_id).maybe_single().execute()
        )
        if not message:
            raise HTTPException(status_code=404, detail="Message not found")
        return message

    def list_messages(self, limit: int = 200) -> List[ChatMessageResponse]:
        """Latest messages, returned oldest first"""
        try:
            result = self.supabase.table("chat_messages")\
                .select("*")\
                .order("created_at", desc=True)\
                .limit(limit)\
                .execute()
            return self._decorate(list(reversed(rows(result))))
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def send_message(self, user_id: str, message: str) -> ChatMessageResponse:
        try:
            result = self.supabase.table("chat_messages").insert({
                "user_id": user_id,
                "message": message.strip(),
            }).execute()
            created = first(result)
            if not created:
                raise HTTPException(status_code=500, detail="Failed to send message")
            return self._decorate([created])[0]
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def edit_message(self, message_id: str, message: str) -> ChatMessageResponse:
        try:
            result = self.supabase.table("chat_messages")\
                .update({
                    "message": message.strip(),
                    "is_edited": True,
                    "edited_at": datetime.utcnow().isoformat(),
                })\
                .eq("id", message_id)\
                .execute()
            updated = first(result)
            if not updated:
                raise HTTPException(status_code=404, detail="Message not found")
            return self._decorate([updated])[0]
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_message(self, message_id: str) -> bool:
        try:
            result = self.supabase.table("chat_messages")\
                .delete()\
                .eq("id", message_id)\
                .execute()
            return len(rows(result)) > 0
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
