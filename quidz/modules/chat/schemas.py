from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ChatMessageCreate(BaseModel):
    message: str = Field(min_length=1, max_length=5000)


class ChatMessageUpdate(BaseModel):
    message: str = Field(min_length=1, max_length=5000)


class ChatMessageResponse(BaseModel):
    id: str
    user_id: str
    message: str
    is_edited: Optional[bool] = False
    edited_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    sender_name: Optional[str] = None
    sender_avatar_url: Optional[str] = None

    class Config:
        from_attributes = True
