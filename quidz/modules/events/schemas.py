from pydantic import BaseModel, Field, model_validator
from typing import Optional, List
from datetime import date, datetime

DEFAULT_COLOR = "#3b82f6"


class EventCreate(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    start_time: datetime
    end_time: datetime
    all_day: bool = False
    color: str = Field(DEFAULT_COLOR, pattern=r"^#[0-9a-fA-F]{6}$")

    @model_validator(mode="after")
    def check_range(self):
        if self.end_time < self.start_time:
            raise ValueError("end_time must not be before start_time")
        return self


class EventUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    all_day: Optional[bool] = None
    color: Optional[str] = Field(None, pattern=r"^#[0-9a-fA-F]{6}$")


class EventResponse(BaseModel):
    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    start_time: datetime
    end_time: datetime
    all_day: Optional[bool] = False
    color: Optional[str] = DEFAULT_COLOR
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TaskDueEntry(BaseModel):
    task_id: str
    title: str
    due_date: date
    status: Optional[str] = None


class CalendarResponse(BaseModel):
    events: List[EventResponse]
    task_due_dates: List[TaskDueEntry]
