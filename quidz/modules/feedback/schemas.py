from pydantic import BaseModel, Field, model_validator
from typing import Optional, List, Literal, Any
from datetime import datetime

QuestionType = Literal["text", "scale", "mood", "multiple_choice"]


class QuestionCreate(BaseModel):
    question_text: str = Field(min_length=1)
    type: QuestionType = "text"
    options: Optional[List[str]] = None
    is_active: bool = True
    active_from: Optional[datetime] = None
    active_until: Optional[datetime] = None
    target_user: Optional[str] = None

    @model_validator(mode="after")
    def check_options(self):
        if self.type == "multiple_choice":
            self.options = [o.strip() for o in self.options or [] if o and o.strip()]
            if not self.options:
                raise ValueError("multiple_choice questions need at least one option")
        if self.active_from and self.active_until and self.active_until < self.active_from:
            raise ValueError("active_until must not be before active_from")
        return self


class QuestionUpdate(BaseModel):
    question_text: Optional[str] = None
    options: Optional[List[str]] = None
    is_active: Optional[bool] = None
    active_from: Optional[datetime] = None
    active_until: Optional[datetime] = None
    target_user: Optional[str] = None


class QuestionResponse(BaseModel):
    id: str
    question_text: str
    type: str
    options: Optional[Any] = None
    is_active: Optional[bool] = True
    active_from: Optional[datetime] = None
    active_until: Optional[datetime] = None
    target_user: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AnswerCreate(BaseModel):
    question_id: str
    answer_text: Optional[str] = None
    mood_value: Optional[int] = Field(None, ge=1, le=10)


class AnswerResponse(BaseModel):
    id: str
    question_id: str
    user_id: str
    answer_text: Optional[str] = None
    mood_value: Optional[int] = None
    created_at: Optional[datetime] = None
    question_text: Optional[str] = None
    question_type: Optional[str] = None
    user_name: Optional[str] = None

    class Config:
        from_attributes = True


class MoodCreate(BaseModel):
    mood_value: int = Field(ge=1, le=10)


class MoodResponse(BaseModel):
    id: str
    user_id: str
    mood_value: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class DailyMood(BaseModel):
    day: str
    average: float
    entries: int


class MoodAlert(BaseModel):
    user_id: str
    full_name: Optional[str] = None
    email: Optional[str] = None
    low_entries: int


class MoodOverview(BaseModel):
    entries_count: int
    average_mood: Optional[float] = None
    daily_averages: List[DailyMood]
    alerts: List[MoodAlert]


class UserMoodChart(BaseModel):
    user_id: str
    entries: List[MoodResponse]
    average_mood: Optional[float] = None
