from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from quidz.database.supabase_client import get_supabase
from quidz.modules.feedback.schemas import (
    QuestionCreate, QuestionUpdate, QuestionResponse, AnswerCreate, AnswerResponse,
    MoodCreate, MoodResponse, MoodOverview, UserMoodChart
)
from quidz.modules.feedback.service import FeedbackService
from quidz.core.dependencies import require_permission
from supabase import Client
from typing import List, Dict, Optional
from datetime import date
import io

router = APIRouter(prefix="/feedback", tags=["feedback"])


def get_feedback_service(supabase: Client = Depends(get_supabase)) -> FeedbackService:
    return FeedbackService(supabase)


@router.get("/questions/active", response_model=List[QuestionResponse])
async def list_active_questions(
    unanswered_only: bool = False,
    user_data: Dict = Depends(require_permission("feedback:answer")),
    service: FeedbackService = Depends(get_feedback_service)
):
    """Questions open for the caller right now"""
    return service.active_questions(user_data["id"], unanswered_only=unanswered_only)


@router.get("/questions", response_model=List[QuestionResponse])
async def list_questions(
    user_data: Dict = Depends(require_permission("feedback:manage")),
    service: FeedbackService = Depends(get_feedback_service)
):
    return service.list_questions()


@router.post("/questions", response_model=QuestionResponse, status_code=201)
async def create_question(
    question_data: QuestionCreate,
    user_data: Dict = Depends(require_permission("feedback:manage")),
    service: FeedbackService = Depends(get_feedback_service)
):
    return service.create_question(question_data, user_data["id"])


@router.put("/questions/{question_id}", response_model=QuestionResponse)
async def update_question(
    question_id: str,
    question_data: QuestionUpdate,
    user_data: Dict = Depends(require_permission("feedback:manage")),
    service: FeedbackService = Depends(get_feedback_service)
):
    return service.update_question(question_id, question_data)


@router.post("/answers", response_model=AnswerResponse, status_code=201)
async def submit_answer(
    answer_data: AnswerCreate,
    user_data: Dict = Depends(require_permission("feedback:answer")),
    service: FeedbackService = Depends(get_feedback_service)
):
    return service.submit_answer(user_data["id"], answer_data)


@router.get("/answers/mine", response_model=List[AnswerResponse])
async def list_my_answers(
    user_data: Dict = Depends(require_permission("feedback:answer")),
    service: FeedbackService = Depends(get_feedback_service)
):
    return service.answers_for_user(user_data["id"])


@router.get("/answers", response_model=List[AnswerResponse])
async def list_answers(
    question_id: Optional[str] = None,
    user_data: Dict = Depends(require_permission("feedback:read")),
    service: FeedbackService = Depends(get_feedback_service)
):
    return service.all_answers(question_id)


@router.get("/export.csv")
async def export_answers(
    user_data: Dict = Depends(require_permission("feedback:read")),
    service: FeedbackService = Depends(get_feedback_service)
):
    content = service.export_answers_csv()
    return StreamingResponse(
        io.BytesIO(content.encode("utf-8")),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="feedback-export-{date.today().isoformat()}.csv"'},
    )


@router.post("/mood", response_model=MoodResponse, status_code=201)
async def record_mood(
    mood: MoodCreate,
    user_data: Dict = Depends(require_permission("feedback:answer")),
    service: FeedbackService = Depends(get_feedback_service)
):
    return service.record_mood(user_data["id"], mood.mood_value)


@router.get("/mood/mine", response_model=List[MoodResponse])
async def list_my_mood(
    user_data: Dict = Depends(require_permission("feedback:answer")),
    service: FeedbackService = Depends(get_feedback_service)
):
    """Latest 30 mood entries of the caller"""
    return service.mood_for_user(user_data["id"])


@router.get("/mood/overview", response_model=MoodOverview)
async def mood_overview(
    limit: int = Query(100, ge=1, le=1000),
    user_data: Dict = Depends(require_permission("feedback:read")),
    service: FeedbackService = Depends(get_feedback_service)
):
    """Average, daily averages and low-mood alerts (staff)"""
    return service.mood_overview(limit=limit)


@router.get("/mood/{user_id}", response_model=UserMoodChart)
async def user_mood_chart(
    user_id: str,
    limit: int = Query(300, ge=1, le=1000),
    user_data: Dict = Depends(require_permission("feedback:read")),
    service: FeedbackService = Depends(get_feedback_service)
):
    return service.user_mood_chart(user_id, limit=limit)
