from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

DEFAULT_BOT_NAME = "QUIDZ Assistant"


class AssistantMessageCreate(BaseModel):
    content: str = Field(min_length=1, max_length=10000)


class AssistantMessageResponse(BaseModel):
    id: str
    user_id: str
    role: str
    content: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AssistantSettingsUpdate(BaseModel):
    bot_name: str = Field(min_length=1)
    system_prompt: Optional[str] = None


class AssistantSettingsResponse(BaseModel):
    bot_name: str = DEFAULT_BOT_NAME
    system_prompt: Optional[str] = None
    updated_at: Optional[datetime] = None
