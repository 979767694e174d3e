from pydantic import BaseModel, Field
from typing import Optional, Literal
from datetime import date, datetime

AbsenceFilter = Literal["pending", "approved", "rejected", "all"]


class AbsenceCreate(BaseModel):
    date: date
    reason: str = Field(min_length=1)
    comment: Optional[str] = None


class AbsenceDecision(BaseModel):
    approved: bool


class AbsenceResponse(BaseModel):
    id: str
    user_id: str
    date: date
    reason: str
    comment: Optional[str] = None
    approved: Optional[bool] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AbsenceWithProfileResponse(AbsenceResponse):
    full_name: Optional[str] = None
    email: Optional[str] = None


def absence_state(approved: Optional[bool]) -> str:
    if approved is None:
        return "pending"
    return "approved" if approved else "rejected"
