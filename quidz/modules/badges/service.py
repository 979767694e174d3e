from supabase import Client
from quidz.modules.badges.schemas import BadgeResponse, BADGE_LABELS, SESSION_BADGE_THRESHOLDS
from quidz.database.supabase_client import rows, first
from typing import List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


def session_badges_for_count(progress_count: Optional[int]) -> List[str]:
    """Badges due when the user's learning-progress record count hits a threshold exactly"""
    badge = SESSION_BADGE_THRESHOLDS.get(progress_count or 0)
    return [badge] if badge else []


class BadgeService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _response(self, row: dict) -> BadgeResponse:
        return BadgeResponse(**row, label=BADGE_LABELS.get(row.get("badge_type")))

    def list_for_user(self, user_id: str) -> List[BadgeResponse]:
        try:
            result = self.supabase.table("badges")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("earned_at", desc=True)\
                .execute()
            return [self._response(b) for b in rows(result)]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def award(self, user_id: str, badge_type: str) -> Optional[BadgeResponse]:
        """Award a badge unless the user already holds it. Returns the new badge, or None when already held."""
        existing = first(
            self.supabase.table("badges")
            .select("id")
            .eq("user_id", user_id)
            .eq("badge_type", badge_type)
            .maybe_single()
            .execute()
        )
        if existing:
            return None
        result = self.supabase.table("badges")\
            .insert({"user_id": user_id, "badge_type": badge_type})\
            .execute()
        created = first(result)
        logger.info(f"Badge {badge_type} awarded to {user_id}")
        return self._response(created) if created else None

    def award_many(self, user_id: str, badge_types: List[str]) -> List[BadgeResponse]:
        awarded = []
        for badge_type in badge_types:
            badge = self.award(user_id, badge_type)
            if badge:
                awarded.append(badge)
        return awarded

    def check_first_card(self, user_id: str) -> List[BadgeResponse]:
        """first_card as soon as the user owns a flashcard; repeat checks are no-ops"""
        result = self.supabase.table("flashcards")\
            .select("id", count="exact")\
            .eq("created_by", user_id)\
            .execute()
        count = result.count if result.count is not None else len(rows(result))
        return self.award_many(user_id, ["first_card"] if count >= 1 else [])

    def check_session_badges(self, user_id: str) -> List[BadgeResponse]:
        result = self.supabase.table("learning_progress")\
            .select("id", count="exact")\
            .eq("user_id", user_id)\
            .execute()
        count = result.count if result.count is not None else len(rows(result))
        return self.award_many(user_id, session_badges_for_count(count))
