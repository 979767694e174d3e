"""
Report section snapshot: the period-scoped aggregation frozen into a report's JSON summary columns.
"""
from datetime import date
from typing import Any, Dict, List, Optional

from quidz.modules.absences.schemas import absence_state
from quidz.modules.progress.aggregation import filter_period, summarize


def build_snapshot(
    tasks: List[Dict[str, Any]],
    absences: List[Dict[str, Any]],
    skills: List[Dict[str, Any]],
    progress_rows: List[Dict[str, Any]],
    mood_entries: List[Dict[str, Any]],
    period_start: Optional[date],
    period_end: Optional[date],
) -> Dict[str, Dict[str, Any]]:
    summary = summarize(
        tasks, absences, skills, progress_rows, mood_entries,
        period_start=period_start, period_end=period_end,
    )
    in_period = sorted(filter_period(absences, "date", period_start, period_end), key=lambda a: str(a.get("date")))
    return {
        "attendance_summary": {
            "absences_count": summary["absences_count"],
            "absences": [
                {
                    "id": a.get("id"),
                    "date": str(a.get("date")),
                    "reason": a.get("reason"),
                    "approved": a.get("approved"),
                    "status": absence_state(a.get("approved")),
                }
                for a in in_period
            ],
        },
        "tasks_summary": {
            "total": summary["tasks_total"],
            "completed": summary["tasks_completed"],
            "in_progress": summary["tasks_in_progress"],
            "open": summary["tasks_open"],
        },
        "skills_summary": {
            "total": summary["skills_total"],
            "validated": summary["skills_validated"],
            "integration_relevant": summary["skills_integration_relevant"],
        },
        "learning_summary": {
            "learned_flashcards_count": summary["learned_flashcards_count"],
            "average_mood": summary["average_mood"],
            "mood_entries_count": summary["mood_entries_count"],
        },
    }
