from supabase import Client
from quidz.modules.feedback.schemas import (
    QuestionCreate, QuestionUpdate, QuestionResponse, AnswerCreate, AnswerResponse,
    MoodResponse, MoodOverview, DailyMood, MoodAlert, UserMoodChart
)
from quidz.modules.feedback.mood import is_question_active, daily_averages, low_mood_alerts
from quidz.modules.progress.aggregation import average
from quidz.modules.profiles.service import ProfileService
from quidz.database.supabase_client import rows, first
from quidz.config import settings
from typing import Dict, List, Optional
from fastapi import HTTPException
from datetime import datetime, timezone
import csv
import io
import logging

logger = logging.getLogger(__name__)

EXPORT_HEADER = ["date", "user", "question", "answer", "mood"]


class FeedbackService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    # Questions

    def _get_question(self, question_id: str) -> Dict:
        question = first(
            self.supabase.table("feedback_questions").select("*").eq("id", question_id).maybe_single().execute()
        )
        if not question:
            raise HTTPException(status_code=404, detail="Question not found")
        return question

    def list_questions(self) -> List[QuestionResponse]:
        try:
            result = self.supabase.table("feedback_questions")\
                .select("*")\
                .order("created_at", desc=True)\
                .execute()
            return [QuestionResponse(**q) for q in rows(result)]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def active_questions(self, user_id: str, unanswered_only: bool = False) -> List[QuestionResponse]:
        """Questions the participant may answer right now"""
        try:
            result = self.supabase.table("feedback_questions")\
                .select("*")\
                .eq("is_active", True)\
                .order("created_at", desc=True)\
                .execute()
            now = datetime.now(timezone.utc)
            questions = [q for q in rows(result) if is_question_active(q, user_id, now)]
            if unanswered_only and questions:
                answered = {a.question_id for a in self.answers_for_user(user_id)}
                questions = [q for q in questions if q["id"] not in answered]
            return [QuestionResponse(**q) for q in questions]
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_question(self, question_data: QuestionCreate, created_by: str) -> QuestionResponse:
        try:
            payload = question_data.model_dump(mode="json", exclude_none=True)
            if question_data.type != "multiple_choice":
                payload.pop("options", None)
            payload.setdefault("active_from", datetime.now(timezone.utc).isoformat())
            payload["created_by"] = created_by
            result = self.supabase.table("feedback_questions").insert(payload).execute()
            created = first(result)
            if not created:
                raise HTTPException(status_code=500, detail="Failed to create question")
            logger.info(f"Feedback question created by {created_by}")
            return QuestionResponse(**created)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_question(self, question_id: str, question_data: QuestionUpdate) -> QuestionResponse:
        try:
            update_data = question_data.model_dump(mode="json", exclude_none=True)
            if not update_data:
                return QuestionResponse(**self._get_question(question_id))
            result = self.supabase.table("feedback_questions")\
                .update(update_data)\
                .eq("id", question_id)\
                .execute()
            updated = first(result)
            if not updated:
                raise HTTPException(status_code=404, detail="Question not found")
            return QuestionResponse(**updated)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    # Answers

    def submit_answer(self, user_id: str, answer_data: AnswerCreate) -> AnswerResponse:
        try:
            question = self._get_question(answer_data.question_id)
            if not is_question_active(question, user_id):
                raise HTTPException(status_code=409, detail="Question is not open for answers")
            if question["type"] in ("mood", "scale"):
                if answer_data.mood_value is None:
                    raise HTTPException(status_code=400, detail="mood_value is required for this question")
            elif not (answer_data.answer_text or "").strip():
                raise HTTPException(status_code=400, detail="answer_text is required for this question")
            if question["type"] == "multiple_choice" and answer_data.answer_text not in (question.get("options") or []):
                raise HTTPException(status_code=400, detail="Answer is not one of the question options")

            result = self.supabase.table("feedback_answers").insert({
                "question_id": answer_data.question_id,
                "user_id": user_id,
                "answer_text": answer_data.answer_text,
                "mood_value": answer_data.mood_value,
            }).execute()
            created = first(result)
            if not created:
                raise HTTPException(status_code=500, detail="Failed to save answer")
            return AnswerResponse(**created, question_text=question["question_text"], question_type=question["type"])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def _decorate_answers(self, answers: List[Dict]) -> List[AnswerResponse]:
        if not answers:
            return []
        questions = {
            q["id"]: q for q in rows(
                self.supabase.table("feedback_questions")
                .select("id, question_text, type")
                .in_("id", sorted({a["question_id"] for a in answers}))
                .execute()
            )
        }
        profiles = ProfileService(self.supabase).profiles_by_id([a["user_id"] for a in answers])
        decorated = []
        for a in answers:
            question = questions.get(a["question_id"], {})
            profile = profiles.get(a["user_id"], {})
            decorated.append(AnswerResponse(
                **a,
                question_text=question.get("question_text"),
                question_type=question.get("type"),
                user_name=profile.get("full_name") or profile.get("email"),
            ))
        return decorated

    def answers_for_user(self, user_id: str) -> List[AnswerResponse]:
        try:
            result = self.supabase.table("feedback_answers")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .execute()
            return self._decorate_answers(rows(result))
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def all_answers(self, question_id: Optional[str] = None) -> List[AnswerResponse]:
        try:
            query = self.supabase.table("feedback_answers").select("*")
            if question_id:
                query = query.eq("question_id", question_id)
            return self._decorate_answers(rows(query.order("created_at", desc=True).execute()))
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def export_answers_csv(self) -> str:
        answers = self.all_answers()
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(EXPORT_HEADER)
        for a in answers:
            writer.writerow([
                a.created_at.strftime("%Y-%m-%d %H:%M") if a.created_at else "",
                a.user_name or "Unknown",
                a.question_text or "",
                a.answer_text or "",
                "" if a.mood_value is None else a.mood_value,
            ])
        return output.getvalue()

    # Mood

    def record_mood(self, user_id: str, mood_value: int) -> MoodResponse:
        try:
            result = self.supabase.table("mood_entries").insert({
                "user_id": user_id,
                "mood_value": mood_value,
            }).execute()
            created = first(result)
            if not created:
                raise HTTPException(status_code=500, detail="Failed to save mood")
            return MoodResponse(**created)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def mood_for_user(self, user_id: str, limit: int = 30) -> List[MoodResponse]:
        """Latest entries, newest first"""
        try:
            result = self.supabase.table("mood_entries")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .limit(limit)\
                .execute()
            return [MoodResponse(**m) for m in rows(result)]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def user_mood_chart(self, user_id: str, limit: int = 300) -> UserMoodChart:
        entries = list(reversed(self.mood_for_user(user_id, limit=limit)))
        return UserMoodChart(
            user_id=user_id,
            entries=entries,
            average_mood=average(e.mood_value for e in entries),
        )

    def mood_overview(self, limit: int = 100) -> MoodOverview:
        """Staff overview over the latest entries of all participants"""
        try:
            entries = rows(
                self.supabase.table("mood_entries")
                .select("*")
                .order("created_at", desc=True)
                .limit(limit)
                .execute()
            )
            alerts = low_mood_alerts(
                entries,
                threshold=settings.low_mood_threshold,
                min_count=settings.low_mood_alert_count,
            )
            profiles = ProfileService(self.supabase).profiles_by_id([a["user_id"] for a in alerts])
            if alerts:
                logger.warning(f"{len(alerts)} participant(s) with repeated low mood")
            return MoodOverview(
                entries_count=len(entries),
                average_mood=average(e["mood_value"] for e in entries),
                daily_averages=[DailyMood(**d) for d in daily_averages(entries, days=14)],
                alerts=[
                    MoodAlert(
                        **a,
                        full_name=profiles.get(a["user_id"], {}).get("full_name"),
                        email=profiles.get(a["user_id"], {}).get("email"),
                    )
                    for a in alerts
                ],
            )
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
