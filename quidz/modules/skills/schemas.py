from pydantic import BaseModel, Field
from typing import Optional, Literal
from datetime import date, datetime

SkillCategory = Literal["handwerk", "digital", "sozial", "kreativ", "sonstiges"]
SkillStatus = Literal["in_pruefung", "integrationsrelevant", "validiert", "abgelehnt"]

SKILL_CATEGORIES = ("handwerk", "digital", "sozial", "kreativ", "sonstiges")

SKILL_CATEGORY_LABELS = {
    "handwerk": "Craft",
    "digital": "Digital",
    "sozial": "Social",
    "kreativ": "Creative",
    "sonstiges": "Other",
}

SKILL_STATUS_LABELS = {
    "in_pruefung": "Under review",
    "integrationsrelevant": "Integration relevant",
    "validiert": "Validated",
    "abgelehnt": "Rejected",
}


class SkillReview(BaseModel):
    status: SkillStatus
    coach_comment: Optional[str] = None
    competence_level: Optional[str] = None
    is_integration_relevant: Optional[bool] = None


class SkillTaskCreate(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    goal: Optional[str] = None
    due_date: Optional[date] = None


class SkillResponse(BaseModel):
    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    category: Optional[str] = "sonstiges"
    proof_text: Optional[str] = None
    proof_file_url: Optional[str] = None
    status: Optional[str] = "in_pruefung"
    is_integration_relevant: Optional[bool] = False
    coach_comment: Optional[str] = None
    competence_level: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SkillWithOwnerResponse(SkillResponse):
    owner_name: Optional[str] = None
    owner_email: Optional[str] = None


class LinkedTaskResponse(BaseModel):
    id: str
    title: str
    status: Optional[str] = None
    due_date: Optional[date] = None
    linked_at: Optional[datetime] = None
