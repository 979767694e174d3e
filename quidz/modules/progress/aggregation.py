"""
Participant progress aggregation.

Pure functions over already-fetched rows. Nothing here is cached or stored; callers recompute
on every request. Period bounds are inclusive dates.
"""
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

COMPLETED = "completed"
IN_PROGRESS = "in_progress"
OPEN = "open"
VALIDATED = "validiert"


def to_date(value: Any) -> Optional[date]:
    """date from a date, datetime or ISO string; None when missing or unparseable"""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value)
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def to_datetime(value: Any) -> Optional[datetime]:
    """Timezone-aware datetime from a datetime or ISO string; naive values are taken as UTC"""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def in_period(value: Any, period_start: Optional[date] = None, period_end: Optional[date] = None) -> bool:
    """Inclusive range check. Without bounds everything matches; with bounds, undated rows do not."""
    if period_start is None and period_end is None:
        return True
    day = to_date(value)
    if day is None:
        return False
    if period_start is not None and day < period_start:
        return False
    if period_end is not None and day > period_end:
        return False
    return True


def filter_period(
    items: Iterable[Dict[str, Any]],
    field: str,
    period_start: Optional[date] = None,
    period_end: Optional[date] = None,
) -> List[Dict[str, Any]]:
    return [item for item in items if in_period(item.get(field), period_start, period_end)]


def percent(part: int, whole: int) -> int:
    """Rounded percentage; 0 for an empty denominator"""
    if not whole:
        return 0
    return int(round(100.0 * part / whole))


def average(values: Iterable[float]) -> Optional[float]:
    """Unweighted mean, None for no values"""
    values = [v for v in values if v is not None]
    if not values:
        return None
    return sum(values) / len(values)


def learned_flashcard_ids(progress_rows: Iterable[Dict[str, Any]]) -> List[str]:
    """Distinct flashcard ids with at least one knew_answer=true record"""
    return sorted({r["flashcard_id"] for r in progress_rows if r.get("knew_answer") and r.get("flashcard_id")})


def task_counts(tasks: List[Dict[str, Any]]) -> Dict[str, int]:
    return {
        "total": len(tasks),
        "completed": sum(1 for t in tasks if t.get("status") == COMPLETED),
        "in_progress": sum(1 for t in tasks if t.get("status") == IN_PROGRESS),
        "open": sum(1 for t in tasks if t.get("status") == OPEN),
    }


def skill_counts(skills: List[Dict[str, Any]]) -> Dict[str, int]:
    return {
        "total": len(skills),
        "validated": sum(1 for s in skills if s.get("status") == VALIDATED),
        "integration_relevant": sum(1 for s in skills if s.get("is_integration_relevant")),
    }


def summarize(
    tasks: List[Dict[str, Any]],
    absences: List[Dict[str, Any]],
    skills: List[Dict[str, Any]],
    progress_rows: List[Dict[str, Any]],
    mood_entries: List[Dict[str, Any]],
    period_start: Optional[date] = None,
    period_end: Optional[date] = None,
    flashcards_available: int = 0,
) -> Dict[str, Any]:
    """
    Progress summary for one participant.

    Tasks are scoped by due_date, absences by date, learning progress and mood by created_at.
    Skills are cumulative and never period scoped.
    """
    scoped_tasks = filter_period(tasks, "due_date", period_start, period_end)
    scoped_absences = filter_period(absences, "date", period_start, period_end)
    scoped_progress = filter_period(progress_rows, "created_at", period_start, period_end)
    scoped_mood = filter_period(mood_entries, "created_at", period_start, period_end)

    t = task_counts(scoped_tasks)
    s = skill_counts(skills)
    learned = learned_flashcard_ids(scoped_progress)
    return {
        "tasks_total": t["total"],
        "tasks_completed": t["completed"],
        "tasks_in_progress": t["in_progress"],
        "tasks_open": t["open"],
        "absences_count": len(scoped_absences),
        "skills_total": s["total"],
        "skills_validated": s["validated"],
        "skills_integration_relevant": s["integration_relevant"],
        "learned_flashcards_count": len(learned),
        "average_mood": average(e.get("mood_value") for e in scoped_mood),
        "mood_entries_count": len(scoped_mood),
        "task_completion_percent": percent(t["completed"], t["total"]),
        "flashcard_progress_percent": percent(len(learned), flashcards_available),
        "period_start": period_start,
        "period_end": period_end,
    }
