from supabase import Client
from quidz.modules.tools.schemas import ToolResponse
from quidz.database.supabase_client import rows, first
from typing import List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class ToolService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_tools(self) -> List[ToolResponse]:
        try:
            result = self.supabase.table("tools")\
                .select("*")\
                .order("created_at", desc=True)\
                .execute()
            return [ToolResponse(**t) for t in rows(result)]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_tool(
        self, title: str, web_link: str, created_by: str,
        description: Optional[str] = None, image_url: Optional[str] = None
    ) -> ToolResponse:
        try:
            created = first(self.supabase.table("tools").insert({
                "title": title,
                "web_link": web_link,
                "description": description,
                "image_url": image_url,
                "created_by": created_by,
            }).execute())
            if not created:
                raise HTTPException(status_code=500, detail="Failed to create tool")
            return ToolResponse(**created)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_tool(self, tool_id: str) -> bool:
        try:
            result = self.supabase.table("tools").delete().eq("id", tool_id).execute()
            return len(rows(result)) > 0
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
