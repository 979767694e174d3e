from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class ToolResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    web_link: str
    image_url: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
