from fastapi import APIRouter, Depends, HTTPException, UploadFile, File, Form
from quidz.database.supabase_client import get_supabase
from quidz.modules.documents.schemas import DocumentResponse
from quidz.modules.documents.service import DocumentService
from quidz.core.dependencies import require_permission
from quidz.core.storage import FileStorage, DOCUMENTS
from supabase import Client
from typing import List, Dict, Optional

router = APIRouter(prefix="/documents", tags=["documents"])


def get_document_service(supabase: Client = Depends(get_supabase)) -> DocumentService:
    return DocumentService(supabase)


@router.get("", response_model=List[DocumentResponse])
async def list_documents(
    user_data: Dict = Depends(require_permission("documents:read")),
    service: DocumentService = Depends(get_document_service)
):
    """Public documents and documents assigned to the caller"""
    return service.list_visible(user_data["id"])


@router.get("/all", response_model=List[DocumentResponse])
async def list_all_documents(
    user_data: Dict = Depends(require_permission("documents:create")),
    service: DocumentService = Depends(get_document_service)
):
    return service.list_all()


@router.post("", response_model=DocumentResponse, status_code=201)
async def upload_document(
    title: str = Form(...),
    file: UploadFile = File(...),
    description: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    visibility: str = Form("public"),
    assigned_to: Optional[str] = Form(None),
    user_data: Dict = Depends(require_permission("documents:create")),
    service: DocumentService = Depends(get_document_service),
    supabase: Client = Depends(get_supabase)
):
    """Upload a document file and register it (staff)"""
    if visibility not in ("public", "private"):
        raise HTTPException(status_code=400, detail="visibility must be 'public' or 'private'")
    file_url = await FileStorage(supabase).upload(DOCUMENTS, user_data["id"], file)
    return service.create_document(
        title=title,
        file_url=file_url,
        created_by=user_data["id"],
        description=description,
        category=category,
        visibility=visibility,
        assigned_to=assigned_to or None,
    )


@router.delete("/{document_id}", status_code=204)
async def delete_document(
    document_id: str,
    user_data: Dict = Depends(require_permission("documents:delete")),
    service: DocumentService = Depends(get_document_service)
):
    if not service.delete_document(document_id):
        raise HTTPException(status_code=404, detail="Document not found")
    return None
