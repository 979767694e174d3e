from pydantic import BaseModel
from typing import Optional, Literal
from datetime import datetime

BadgeType = Literal["first_card", "cards_10", "cards_50", "streak_5", "streak_10", "perfect_session"]

BADGE_LABELS = {
    "first_card": "First card",
    "cards_10": "10 cards learned",
    "cards_50": "50 cards learned",
    "streak_5": "5 day streak",
    "streak_10": "10 day streak",
    "perfect_session": "Perfect session",
}

# Learning-progress record counts that award a badge when reached exactly
SESSION_BADGE_THRESHOLDS = {10: "cards_10", 50: "cards_50"}


class BadgeAward(BaseModel):
    user_id: str
    badge_type: BadgeType


class BadgeResponse(BaseModel):
    id: Optional[str] = None
    user_id: str
    badge_type: str
    label: Optional[str] = None
    earned_at: Optional[datetime] = None

    class Config:
        from_attributes = True
