from pydantic import BaseModel, Field
from typing import Optional, List, Literal
from datetime import datetime
from quidz.modules.badges.schemas import BadgeResponse

MAX_CARD_TEXT = 10000

FlashcardScope = Literal["all", "mine", "public"]


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None


class CategoryUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


class CategoryResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TagCreate(BaseModel):
    name: str = Field(min_length=1)


class TagResponse(BaseModel):
    id: str
    name: str

    class Config:
        from_attributes = True


class FlashcardCreate(BaseModel):
    front_text: str = Field(min_length=1, max_length=MAX_CARD_TEXT)
    back_text: str = Field(min_length=1, max_length=MAX_CARD_TEXT)
    category_id: Optional[str] = None
    is_public: bool = False
    tag_ids: List[str] = []


class FlashcardUpdate(BaseModel):
    front_text: Optional[str] = Field(None, min_length=1, max_length=MAX_CARD_TEXT)
    back_text: Optional[str] = Field(None, min_length=1, max_length=MAX_CARD_TEXT)
    category_id: Optional[str] = None
    is_public: Optional[bool] = None
    tag_ids: Optional[List[str]] = None


class FlashcardResponse(BaseModel):
    id: str
    front_text: str
    back_text: str
    category_id: Optional[str] = None
    category_name: Optional[str] = None
    is_public: Optional[bool] = False
    created_by: Optional[str] = None
    tag_ids: List[str] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class FlashcardCreateResult(BaseModel):
    flashcard: FlashcardResponse
    badges_awarded: List[BadgeResponse] = []


class ImportRequest(BaseModel):
    format: Literal["json", "csv"] = "json"
    content: str
    category_id: Optional[str] = None
    is_public: bool = False


class ImportResult(BaseModel):
    imported: int
    categories_created: List[str] = []


class ProgressCreate(BaseModel):
    knew_answer: bool


class ProgressResult(BaseModel):
    flashcard_id: str
    knew_answer: bool
    badges_awarded: List[BadgeResponse] = []


class LearnedCardsResponse(BaseModel):
    flashcard_ids: List[str]
    count: int


class FeedbackCreate(BaseModel):
    is_helpful: bool


class FeedbackResponse(BaseModel):
    id: Optional[str] = None
    flashcard_id: str
    user_id: str
    is_helpful: bool
    created_at: Optional[datetime] = None


class FlashcardStats(BaseModel):
    flashcards_total: int
    public_flashcards: int
    categories_total: int
    progress_records: int
    helpful_feedback: int
    unhelpful_feedback: int
