from pydantic import BaseModel, Field
from typing import Optional, List, Literal
from datetime import datetime

ProjectCategory = Literal[
    "web_development", "mobile_app", "design", "data_science", "machine_learning", "other"
]

PROJECT_CATEGORY_LABELS = {
    "web_development": "Web Development",
    "mobile_app": "Mobile App",
    "design": "Design",
    "data_science": "Data Science",
    "machine_learning": "Machine Learning",
    "other": "Other",
}


class ProjectCreate(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    category: ProjectCategory = "other"
    tags: List[str] = []
    image_url: Optional[str] = None
    project_url: Optional[str] = None
    published: bool = False
    skill_ids: List[str] = []


class ProjectUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[ProjectCategory] = None
    tags: Optional[List[str]] = None
    image_url: Optional[str] = None
    project_url: Optional[str] = None
    published: Optional[bool] = None
    skill_ids: Optional[List[str]] = None


class ProjectFeature(BaseModel):
    featured: bool


class ProjectResponse(BaseModel):
    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    category: Optional[str] = "other"
    tags: Optional[List[str]] = []
    image_url: Optional[str] = None
    project_url: Optional[str] = None
    published: Optional[bool] = False
    featured: Optional[bool] = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class GalleryProjectResponse(ProjectResponse):
    author_name: Optional[str] = None
    author_avatar_url: Optional[str] = None
    likes_count: int = 0
    liked_by_me: bool = False


class LikeResponse(BaseModel):
    project_id: str
    liked: bool
    likes_count: int
