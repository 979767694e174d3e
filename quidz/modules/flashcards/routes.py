from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse
from quidz.database.supabase_client import get_supabase
from quidz.modules.flashcards.schemas import (
    CategoryCreate, CategoryUpdate, CategoryResponse, TagCreate, TagResponse,
    FlashcardCreate, FlashcardUpdate, FlashcardResponse, FlashcardCreateResult, FlashcardScope,
    ImportRequest, ImportResult, ProgressCreate, ProgressResult, LearnedCardsResponse,
    FeedbackCreate, FeedbackResponse, FlashcardStats
)
from quidz.modules.flashcards.service import FlashcardService
from quidz.modules.flashcards.exporter import export_csv, export_pdf
from quidz.core.dependencies import require_permission, get_access_cache, check_owner_or_staff
from supabase import Client
from typing import List, Dict, Optional
from datetime import date
import io

router = APIRouter(prefix="/flashcards", tags=["flashcards"])


def get_flashcard_service(supabase: Client = Depends(get_supabase)) -> FlashcardService:
    return FlashcardService(supabase)


@router.get("/categories", response_model=List[CategoryResponse])
async def list_categories(
    user_data: Dict = Depends(require_permission("flashcards:read")),
    service: FlashcardService = Depends(get_flashcard_service)
):
    return service.list_categories()


@router.post("/categories", response_model=CategoryResponse, status_code=201)
async def create_category(
    category_data: CategoryCreate,
    user_data: Dict = Depends(require_permission("flashcards:curate")),
    service: FlashcardService = Depends(get_flashcard_service)
):
    return service.create_category(category_data, user_data["id"])


@router.put("/categories/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: str,
    category_data: CategoryUpdate,
    user_data: Dict = Depends(require_permission("flashcards:curate")),
    service: FlashcardService = Depends(get_flashcard_service)
):
    return service.update_category(category_id, category_data)


@router.delete("/categories/{category_id}", status_code=204)
async def delete_category(
    category_id: str,
    user_data: Dict = Depends(require_permission("flashcards:curate")),
    service: FlashcardService = Depends(get_flashcard_service)
):
    if not service.delete_category(category_id):
        raise HTTPException(status_code=404, detail="Category not found")
    return None


@router.get("/tags", response_model=List[TagResponse])
async def list_tags(
    user_data: Dict = Depends(require_permission("flashcards:read")),
    service: FlashcardService = Depends(get_flashcard_service)
):
    return service.list_tags()


@router.post("/tags", response_model=TagResponse, status_code=201)
async def create_tag(
    tag_data: TagCreate,
    user_data: Dict = Depends(require_permission("flashcards:curate")),
    service: FlashcardService = Depends(get_flashcard_service)
):
    return service.create_tag(tag_data.name)


@router.get("/stats", response_model=FlashcardStats)
async def flashcard_stats(
    user_data: Dict = Depends(require_permission("flashcards:curate")),
    service: FlashcardService = Depends(get_flashcard_service)
):
    return service.stats()


@router.get("/progress/learned", response_model=LearnedCardsResponse)
async def learned_cards(
    user_data: Dict = Depends(require_permission("flashcards:read")),
    service: FlashcardService = Depends(get_flashcard_service)
):
    """Distinct cards the caller has answered correctly at least once"""
    return service.learned_cards(user_data["id"])


@router.post("/import", response_model=ImportResult, status_code=201)
async def import_flashcards(
    request: ImportRequest,
    user_data: Dict = Depends(require_permission("flashcards:create")),
    service: FlashcardService = Depends(get_flashcard_service)
):
    """Batch import from a JSON array or ';'-separated CSV"""
    return service.import_flashcards(request, user_data["id"])


@router.get("/export.csv")
async def export_flashcards_csv(
    scope: FlashcardScope = "all",
    category_id: Optional[str] = None,
    tag_id: Optional[str] = None,
    user_data: Dict = Depends(require_permission("flashcards:read")),
    service: FlashcardService = Depends(get_flashcard_service)
):
    cards = service.list_flashcards(user_data["id"], scope=scope, category_id=category_id, tag_id=tag_id)
    content = export_csv([c.model_dump() for c in cards])
    return StreamingResponse(
        io.BytesIO(content.encode("utf-8")),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="flashcards_{date.today().isoformat()}.csv"'},
    )


@router.get("/export.pdf")
async def export_flashcards_pdf(
    scope: FlashcardScope = "all",
    category_id: Optional[str] = None,
    tag_id: Optional[str] = None,
    user_data: Dict = Depends(require_permission("flashcards:read")),
    service: FlashcardService = Depends(get_flashcard_service)
):
    cards = service.list_flashcards(user_data["id"], scope=scope, category_id=category_id, tag_id=tag_id)
    pdf_bytes = export_pdf([c.model_dump() for c in cards])
    return StreamingResponse(
        io.BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="flashcards_{date.today().isoformat()}.pdf"'},
    )


@router.get("", response_model=List[FlashcardResponse])
async def list_flashcards(
    scope: FlashcardScope = "all",
    category_id: Optional[str] = None,
    tag_id: Optional[str] = None,
    user_data: Dict = Depends(require_permission("flashcards:read")),
    service: FlashcardService = Depends(get_flashcard_service)
):
    return service.list_flashcards(user_data["id"], scope=scope, category_id=category_id, tag_id=tag_id)


@router.post("", response_model=FlashcardCreateResult, status_code=201)
async def create_flashcard(
    card_data: FlashcardCreate,
    user_data: Dict = Depends(require_permission("flashcards:create")),
    service: FlashcardService = Depends(get_flashcard_service)
):
    return service.create_flashcard(card_data, user_data["id"])


@router.put("/{flashcard_id}", response_model=FlashcardResponse)
async def update_flashcard(
    flashcard_id: str,
    card_data: FlashcardUpdate,
    user_data: Dict = Depends(require_permission("flashcards:update")),
    service: FlashcardService = Depends(get_flashcard_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Update a card (creator or staff)"""
    card = service.get_flashcard(flashcard_id)
    check_owner_or_staff(card.created_by, user_data, supabase, cache, detail="You can only edit your own flashcards")
    return service.update_flashcard(flashcard_id, card_data)


@router.delete("/{flashcard_id}", status_code=204)
async def delete_flashcard(
    flashcard_id: str,
    user_data: Dict = Depends(require_permission("flashcards:delete")),
    service: FlashcardService = Depends(get_flashcard_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    card = service.get_flashcard(flashcard_id)
    check_owner_or_staff(card.created_by, user_data, supabase, cache, detail="You can only delete your own flashcards")
    if not service.delete_flashcard(flashcard_id):
        raise HTTPException(status_code=404, detail="Flashcard not found")
    return None


@router.post("/{flashcard_id}/progress", response_model=ProgressResult, status_code=201)
async def record_progress(
    flashcard_id: str,
    progress: ProgressCreate,
    user_data: Dict = Depends(require_permission("flashcards:read")),
    service: FlashcardService = Depends(get_flashcard_service)
):
    """Record one learning-mode answer and award session badges"""
    return service.record_progress(flashcard_id, user_data["id"], progress.knew_answer)


@router.post("/{flashcard_id}/feedback", response_model=FeedbackResponse, status_code=201)
async def give_feedback(
    flashcard_id: str,
    feedback: FeedbackCreate,
    user_data: Dict = Depends(require_permission("flashcards:read")),
    service: FlashcardService = Depends(get_flashcard_service)
):
    return service.give_feedback(flashcard_id, user_data["id"], feedback.is_helpful)
