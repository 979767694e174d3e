from pydantic import BaseModel
from typing import Optional, List, Literal
from datetime import date
from quidz.modules.profiles.schemas import ProfileResponse
from quidz.modules.tasks.schemas import TaskResponse
from quidz.modules.absences.schemas import AbsenceResponse, AbsenceWithProfileResponse
from quidz.modules.skills.schemas import SkillResponse
from quidz.modules.projects.schemas import ProjectResponse
from quidz.modules.badges.schemas import BadgeResponse
from quidz.modules.feedback.schemas import MoodResponse


class ProgressSummary(BaseModel):
    tasks_total: int = 0
    tasks_completed: int = 0
    tasks_in_progress: int = 0
    tasks_open: int = 0
    absences_count: int = 0
    skills_total: int = 0
    skills_validated: int = 0
    skills_integration_relevant: int = 0
    learned_flashcards_count: int = 0
    average_mood: Optional[float] = None
    mood_entries_count: int = 0
    task_completion_percent: int = 0
    flashcard_progress_percent: int = 0
    period_start: Optional[date] = None
    period_end: Optional[date] = None


class ParticipantDashboard(BaseModel):
    profile: Optional[ProfileResponse] = None
    summary: ProgressSummary
    upcoming_tasks: List[TaskResponse]
    badges: List[BadgeResponse]
    recent_mood: List[MoodResponse]


class RecentTask(TaskResponse):
    assignee_name: Optional[str] = None


class AdminStats(BaseModel):
    profiles_total: int
    tasks_total: int
    tasks_completed: int
    task_completion_percent: int
    pending_absences: int
    recent_tasks: List[RecentTask]
    recent_absences: List[AbsenceWithProfileResponse]


class ParticipantDetail(BaseModel):
    profile: ProfileResponse
    roles: List[str]
    summary: ProgressSummary
    tasks: List[TaskResponse]
    absences: List[AbsenceResponse]
    skills: List[SkillResponse]
    projects: List[ProjectResponse]
    mood_entries: List[MoodResponse]
    badges: List[BadgeResponse]


class DashboardResponse(BaseModel):
    view: Literal["admin", "participant"]
    is_admin: bool
    roles: List[str]
    participant: Optional[ParticipantDashboard] = None
    admin: Optional[AdminStats] = None
