from pydantic import BaseModel
from typing import Optional, List, Literal
from datetime import datetime

AppRole = Literal["admin", "coach"]


class ProfileUpdate(BaseModel):
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    onboarding_completed: Optional[bool] = None


class ProfileResponse(BaseModel):
    id: str
    email: str
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    onboarding_completed: Optional[bool] = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProfileWithRolesResponse(ProfileResponse):
    roles: List[str] = []


class RoleGrant(BaseModel):
    role: AppRole


class RoleResponse(BaseModel):
    user_id: str
    role: str
