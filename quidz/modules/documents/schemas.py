from pydantic import BaseModel
from typing import Optional, Literal
from datetime import datetime

Visibility = Literal["public", "private"]


class DocumentResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    category: Optional[str] = None
    file_url: str
    visibility: Optional[str] = "public"
    assigned_to: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
