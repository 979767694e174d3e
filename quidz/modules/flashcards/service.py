from supabase import Client
from quidz.modules.flashcards.schemas import (
    CategoryCreate, CategoryUpdate, CategoryResponse, TagResponse,
    FlashcardCreate, FlashcardUpdate, FlashcardResponse, FlashcardCreateResult,
    ImportRequest, ImportResult, ProgressResult, LearnedCardsResponse,
    FeedbackResponse, FlashcardStats
)
from quidz.modules.flashcards.importer import FlashcardImporter
from quidz.modules.badges.service import BadgeService
from quidz.database.supabase_client import rows, first
from typing import Dict, List, Optional
from fastapi import HTTPException
from datetime import datetime
import logging

logger = logging.getLogger(__name__)


class FlashcardService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.badges = BadgeService(supabase)

    # Categories and tags

    def list_categories(self) -> List[CategoryResponse]:
        try:
            result = self.supabase.table("categories").select("*").order("name").execute()
            return [CategoryResponse(**c) for c in rows(result)]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_category(self, category_data: CategoryCreate, created_by: str) -> CategoryResponse:
        try:
            result = self.supabase.table("categories").insert({
                "name": category_data.name.strip(),
                "description": category_data.description,
                "created_by": created_by,
            }).execute()
            created = first(result)
            if not created:
                raise HTTPException(status_code=500, detail="Failed to create category")
            return CategoryResponse(**created)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_category(self, category_id: str, category_data: CategoryUpdate) -> CategoryResponse:
        try:
            update_data = category_data.model_dump(exclude_none=True)
            if not update_data:
                raise HTTPException(status_code=400, detail="Nothing to update")
            result = self.supabase.table("categories").update(update_data).eq("id", category_id).execute()
            updated = first(result)
            if not updated:
                raise HTTPException(status_code=404, detail="Category not found")
            return CategoryResponse(**updated)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_category(self, category_id: str) -> bool:
        """Cards of the category are kept and become uncategorized"""
        try:
            self.supabase.table("flashcards").update({"category_id": None}).eq("category_id", category_id).execute()
            result = self.supabase.table("categories").delete().eq("id", category_id).execute()
            return len(rows(result)) > 0
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_tags(self) -> List[TagResponse]:
        try:
            result = self.supabase.table("tags").select("*").order("name").execute()
            return [TagResponse(**t) for t in rows(result)]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_tag(self, name: str) -> TagResponse:
        try:
            existing = first(self.supabase.table("tags").select("*").eq("name", name.strip()).maybe_single().execute())
            if existing:
                return TagResponse(**existing)
            result = self.supabase.table("tags").insert({"name": name.strip()}).execute()
            created = first(result)
            if not created:
                raise HTTPException(status_code=500, detail="Failed to create tag")
            return TagResponse(**created)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    # Flashcards

    def _decorate(self, cards: List[Dict]) -> List[FlashcardResponse]:
        """Attach category names and tag ids"""
        if not cards:
            return []
        categories = {c.id: c.name for c in self.list_categories()}
        links = rows(
            self.supabase.table("flashcard_tags")
            .select("flashcard_id, tag_id")
            .in_("flashcard_id", [c["id"] for c in cards])
            .execute()
        )
        tags: Dict[str, List[str]] = {}
        for link in links:
            tags.setdefault(link["flashcard_id"], []).append(link["tag_id"])
        return [
            FlashcardResponse(
                **card,
                category_name=categories.get(card.get("category_id")),
                tag_ids=tags.get(card["id"], []),
            )
            for card in cards
        ]

    def get_flashcard(self, flashcard_id: str) -> FlashcardResponse:
        try:
            card = first(
                self.supabase.table("flashcards").select("*").eq("id", flashcard_id).maybe_single().execute()
            )
            if not card:
                raise HTTPException(status_code=404, detail="Flashcard not found")
            return self._decorate([card])[0]
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_visible_flashcard(self, flashcard_id: str, user_id: str) -> FlashcardResponse:
        """A card the user may learn with: public, or created by the user"""
        card = self.get_flashcard(flashcard_id)
        if not card.is_public and card.created_by != user_id:
            raise HTTPException(status_code=403, detail="Flashcard not accessible")
        return card

    def list_flashcards(
        self,
        user_id: str,
        scope: str = "all",
        category_id: Optional[str] = None,
        tag_id: Optional[str] = None,
    ) -> List[FlashcardResponse]:
        """Cards visible to the user: own cards plus public cards, newest first"""
        try:
            query = self.supabase.table("flashcards").select("*")
            if scope == "mine":
                query = query.eq("created_by", user_id)
            elif scope == "public":
                query = query.eq("is_public", True)
            else:
                query = query.or_(f"is_public.eq.true,created_by.eq.{user_id}")
            if category_id and category_id != "all":
                query = query.eq("category_id", category_id)
            cards = rows(query.order("created_at", desc=True).execute())

            if tag_id and tag_id != "all":
                tagged = {
                    t["flashcard_id"] for t in rows(
                        self.supabase.table("flashcard_tags").select("flashcard_id").eq("tag_id", tag_id).execute()
                    )
                }
                cards = [c for c in cards if c["id"] in tagged]
            return self._decorate(cards)
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def _set_tags(self, flashcard_id: str, tag_ids: List[str]):
        self.supabase.table("flashcard_tags").delete().eq("flashcard_id", flashcard_id).execute()
        if tag_ids:
            self.supabase.table("flashcard_tags").insert(
                [{"flashcard_id": flashcard_id, "tag_id": tid} for tid in dict.fromkeys(tag_ids)]
            ).execute()

    def create_flashcard(self, card_data: FlashcardCreate, created_by: str) -> FlashcardCreateResult:
        try:
            result = self.supabase.table("flashcards").insert({
                "front_text": card_data.front_text.strip(),
                "back_text": card_data.back_text.strip(),
                "category_id": card_data.category_id,
                "is_public": card_data.is_public,
                "created_by": created_by,
            }).execute()
            created = first(result)
            if not created:
                raise HTTPException(status_code=500, detail="Failed to create flashcard")
            if card_data.tag_ids:
                self._set_tags(created["id"], card_data.tag_ids)
            badges = self.badges.check_first_card(created_by)
            return FlashcardCreateResult(flashcard=self.get_flashcard(created["id"]), badges_awarded=badges)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_flashcard(self, flashcard_id: str, card_data: FlashcardUpdate) -> FlashcardResponse:
        try:
            update_data = card_data.model_dump(exclude_none=True, exclude={"tag_ids"})
            update_data["updated_at"] = datetime.utcnow().isoformat()
            result = self.supabase.table("flashcards").update(update_data).eq("id", flashcard_id).execute()
            if not first(result):
                raise HTTPException(status_code=404, detail="Flashcard not found")
            if card_data.tag_ids is not None:
                self._set_tags(flashcard_id, card_data.tag_ids)
            return self.get_flashcard(flashcard_id)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_flashcard(self, flashcard_id: str) -> bool:
        try:
            for table in ("flashcard_tags", "learning_progress", "flashcard_feedbacks"):
                self.supabase.table(table).delete().eq("flashcard_id", flashcard_id).execute()
            result = self.supabase.table("flashcards").delete().eq("id", flashcard_id).execute()
            return len(rows(result)) > 0
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def import_flashcards(self, request: ImportRequest, created_by: str) -> ImportResult:
        """Batch import; unknown category names are created first"""
        cards, errors = FlashcardImporter.parse(request.format, request.content)
        if errors:
            raise HTTPException(status_code=400, detail="; ".join(errors))
        try:
            categories = [c.model_dump() for c in self.list_categories()]
            missing = FlashcardImporter.missing_categories(cards, categories)
            created_names = []
            if missing:
                result = self.supabase.table("categories")\
                    .insert([{"name": name, "created_by": created_by} for name in missing])\
                    .execute()
                new_categories = rows(result)
                categories.extend(new_categories)
                created_names = [c["name"] for c in new_categories]
                logger.info(f"Import created {len(created_names)} new categories")

            to_insert = FlashcardImporter.build_rows(
                cards, categories, created_by,
                default_category_id=request.category_id,
                default_is_public=request.is_public,
            )
            self.supabase.table("flashcards").insert(to_insert).execute()
            logger.info(f"Imported {len(to_insert)} flashcard(s) for {created_by}")
            self.badges.check_first_card(created_by)
            return ImportResult(imported=len(to_insert), categories_created=created_names)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    # Learning

    def record_progress(self, flashcard_id: str, user_id: str, knew_answer: bool) -> ProgressResult:
        self.get_visible_flashcard(flashcard_id, user_id)
        try:
            self.supabase.table("learning_progress").insert({
                "user_id": user_id,
                "flashcard_id": flashcard_id,
                "knew_answer": knew_answer,
            }).execute()
            badges = self.badges.check_session_badges(user_id)
            return ProgressResult(flashcard_id=flashcard_id, knew_answer=knew_answer, badges_awarded=badges)
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def learned_cards(self, user_id: str) -> LearnedCardsResponse:
        try:
            result = self.supabase.table("learning_progress")\
                .select("flashcard_id")\
                .eq("user_id", user_id)\
                .eq("knew_answer", True)\
                .execute()
            ids = sorted({r["flashcard_id"] for r in rows(result)})
            return LearnedCardsResponse(flashcard_ids=ids, count=len(ids))
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def give_feedback(self, flashcard_id: str, user_id: str, is_helpful: bool) -> FeedbackResponse:
        self.get_visible_flashcard(flashcard_id, user_id)
        try:
            result = self.supabase.table("flashcard_feedbacks").insert({
                "flashcard_id": flashcard_id,
                "user_id": user_id,
                "is_helpful": is_helpful,
            }).execute()
            created = first(result)
            if not created:
                raise HTTPException(status_code=500, detail="Failed to save feedback")
            return FeedbackResponse(**created)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def stats(self) -> FlashcardStats:
        try:
            cards = rows(self.supabase.table("flashcards").select("id, is_public").execute())
            categories = rows(self.supabase.table("categories").select("id").execute())
            progress = self.supabase.table("learning_progress").select("id", count="exact").execute()
            feedback = rows(self.supabase.table("flashcard_feedbacks").select("is_helpful").execute())
            return FlashcardStats(
                flashcards_total=len(cards),
                public_flashcards=sum(1 for c in cards if c.get("is_public")),
                categories_total=len(categories),
                progress_records=progress.count if progress.count is not None else len(rows(progress)),
                helpful_feedback=sum(1 for f in feedback if f.get("is_helpful")),
                unhelpful_feedback=sum(1 for f in feedback if f.get("is_helpful") is False),
            )
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
