from supabase import Client
from quidz.modules.documents.schemas import DocumentResponse
from quidz.database.supabase_client import rows, first
from typing import List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class DocumentService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_visible(self, user_id: str) -> List[DocumentResponse]:
        """Public documents plus documents assigned to the participant"""
        try:
            result = self.supabase.table("documents")\
                .select("*")\
                .or_(f"visibility.eq.public,assigned_to.eq.{user_id}")\
                .order("created_at", desc=True)\
                .execute()
            return [DocumentResponse(**d) for d in rows(result)]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_all(self) -> List[DocumentResponse]:
        try:
            result = self.supabase.table("documents")\
                .select("*")\
                .order("created_at", desc=True)\
                .execute()
            return [DocumentResponse(**d) for d in rows(result)]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_document(
        self,
        title: str,
        file_url: str,
        created_by: str,
        description: Optional[str] = None,
        category: Optional[str] = None,
        visibility: str = "public",
        assigned_to: Optional[str] = None,
    ) -> DocumentResponse:
        try:
            result = self.supabase.table("documents").insert({
                "title": title,
                "description": description,
                "category": category,
                "file_url": file_url,
                "visibility": visibility,
                "assigned_to": assigned_to,
                "created_by": created_by,
            }).execute()
            created = first(result)
            if not created:
                raise HTTPException(status_code=500, detail="Failed to create document")
            logger.info(f"Document '{title}' created by {created_by}")
            return DocumentResponse(**created)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_document(self, document_id: str) -> bool:
        try:
            result = self.supabase.table("documents")\
                .delete()\
                .eq("id", document_id)\
                .execute()
            return len(rows(result)) > 0
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
