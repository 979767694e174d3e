from supabase import Client
from quidz.modules.assistant.schemas import (
    AssistantMessageResponse, AssistantSettingsUpdate, AssistantSettingsResponse
)
from quidz.database.supabase_client import rows, first
from quidz.config import settings
from typing import Dict, List
from fastapi import HTTPException
from datetime import datetime
import logging

logger = logging.getLogger(__name__)


def conversation_payload(messages: List[Dict]) -> Dict:
    """Body for the chat function: the full history as role/content pairs"""
    return {"messages": [{"role": m["role"], "content": m["content"]} for m in messages]}


class AssistantService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def history(self, user_id: str) -> List[AssistantMessageResponse]:
        try:
            result = self.supabase.table("ai_chat_messages")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at", desc=False)\
                .execute()
            return [AssistantMessageResponse(**m) for m in rows(result)]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def send(self, user_id: str, content: str) -> List[AssistantMessageResponse]:
        """
        Persist the user's message, let the chat function answer, then return the refreshed history.
        The function stores the assistant reply itself; its response body is not used.
        """
        try:
            saved = first(
                self.supabase.table("ai_chat_messages")
                .insert({"user_id": user_id, "role": "user", "content": content.strip()})
                .execute()
            )
            if not saved:
                raise HTTPException(status_code=500, detail="Failed to save message")
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        conversation = [m.model_dump() for m in self.history(user_id)]
        try:
            self.supabase.functions.invoke(
                settings.ai_chat_function,
                invoke_options={"body": conversation_payload(conversation)},
            )
        except Exception as e:
            logger.error(f"Chat function '{settings.ai_chat_function}' failed: {str(e)}")
            raise HTTPException(status_code=502, detail="The assistant could not answer right now")
        return self.history(user_id)

    def clear(self, user_id: str) -> int:
        try:
            result = self.supabase.table("ai_chat_messages")\
                .delete()\
                .eq("user_id", user_id)\
                .execute()
            return len(rows(result))
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def _settings_row(self):
        return first(self.supabase.table("ai_settings").select("*").limit(1).execute())

    def get_settings(self) -> AssistantSettingsResponse:
        try:
            row = self._settings_row()
            if not row:
                return AssistantSettingsResponse()
            return AssistantSettingsResponse(**row)
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def save_settings(self, settings_data: AssistantSettingsUpdate) -> AssistantSettingsResponse:
        """Upsert of the single settings row"""
        try:
            payload = {
                "bot_name": settings_data.bot_name,
                "system_prompt": settings_data.system_prompt,
                "updated_at": datetime.utcnow().isoformat(),
            }
            row = self._settings_row()
            if row:
                result = self.supabase.table("ai_settings").update(payload).eq("id", row["id"]).execute()
            else:
                result = self.supabase.table("ai_settings").insert(payload).execute()
            saved = first(result)
            if not saved:
                raise HTTPException(status_code=500, detail="Failed to save assistant settings")
            logger.info("Assistant settings updated")
            return AssistantSettingsResponse(**saved)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
