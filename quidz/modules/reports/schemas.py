from pydantic import BaseModel, model_validator
from typing import Optional, Literal, Dict, Any
from datetime import date, datetime

ProgramType = Literal["arbeitstraining", "abklaerung", "integration", "coaching"]
ReportStatus = Literal["draft", "final"]

PROGRAM_TYPE_LABELS = {
    "arbeitstraining": "Work training",
    "abklaerung": "Assessment",
    "integration": "Integration",
    "coaching": "Coaching",
}

NOTE_FIELDS = (
    "attendance_notes",
    "tasks_notes",
    "skills_notes",
    "learning_notes",
    "behavior_notes",
    "mood_summary",
    "overall_assessment",
    "outlook",
)


class ReportNotes(BaseModel):
    attendance_notes: Optional[str] = None
    tasks_notes: Optional[str] = None
    skills_notes: Optional[str] = None
    learning_notes: Optional[str] = None
    behavior_notes: Optional[str] = None
    mood_summary: Optional[str] = None
    overall_assessment: Optional[str] = None
    outlook: Optional[str] = None


class ReportCreate(ReportNotes):
    user_id: str
    period_start: date
    period_end: date
    program_type: ProgramType = "arbeitstraining"

    @model_validator(mode="after")
    def check_period(self):
        if self.period_end < self.period_start:
            raise ValueError("period_end must not be before period_start")
        return self


class ReportUpdate(ReportNotes):
    period_start: Optional[date] = None
    period_end: Optional[date] = None
    program_type: Optional[ProgramType] = None


class ReportSnapshot(BaseModel):
    attendance_summary: Dict[str, Any]
    tasks_summary: Dict[str, Any]
    skills_summary: Dict[str, Any]
    learning_summary: Dict[str, Any]


class ReportResponse(ReportNotes):
    id: str
    user_id: str
    coach_id: Optional[str] = None
    period_start: date
    period_end: date
    program_type: Optional[str] = None
    attendance_summary: Optional[Dict[str, Any]] = None
    tasks_summary: Optional[Dict[str, Any]] = None
    skills_summary: Optional[Dict[str, Any]] = None
    learning_summary: Optional[Dict[str, Any]] = None
    status: ReportStatus = "draft"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ReportListItem(ReportResponse):
    participant_name: Optional[str] = None
    participant_email: Optional[str] = None
