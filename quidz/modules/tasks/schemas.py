from pydantic import BaseModel, Field, model_validator
from typing import Optional, List, Literal
from datetime import date, datetime

TaskStatus = Literal["open", "in_progress", "completed"]
TaskPriority = Literal["low", "medium", "high"]

TASK_STATUSES = ("open", "in_progress", "completed")


class TaskCreate(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None
    due_date: Optional[date] = None
    priority: TaskPriority = "medium"
    assigned_to: Optional[str] = None
    assign_to_all: bool = False
    file_url: Optional[str] = None
    image_url: Optional[str] = None
    links: Optional[List[str]] = None
    idempotency_key: Optional[str] = None

    @model_validator(mode="after")
    def require_assignee(self):
        if not self.assign_to_all and not self.assigned_to:
            raise ValueError("Either assigned_to or assign_to_all must be set")
        if self.assign_to_all and self.assigned_to:
            raise ValueError("Cannot set both assigned_to and assign_to_all")
        return self


class TaskUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    due_date: Optional[date] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    assigned_to: Optional[str] = None
    file_url: Optional[str] = None
    image_url: Optional[str] = None
    links: Optional[List[str]] = None


class TaskStatusUpdate(BaseModel):
    status: TaskStatus


class TaskResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    category: Optional[str] = None
    due_date: Optional[date] = None
    status: Optional[str] = "open"
    priority: Optional[str] = "medium"
    assigned_to: Optional[str] = None
    assign_to_all: Optional[bool] = False
    file_url: Optional[str] = None
    image_url: Optional[str] = None
    links: Optional[List[str]] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TaskCreateResult(BaseModel):
    created: List[TaskResponse]
    skipped_assignees: List[str] = []


class UploadResponse(BaseModel):
    url: str
