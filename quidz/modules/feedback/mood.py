"""Mood and feedback-question rules shared by the participant and staff views"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from quidz.modules.progress.aggregation import average, to_date, to_datetime


def is_question_active(question: Dict[str, Any], user_id: str, now: Optional[datetime] = None) -> bool:
    """Active flag set, now inside [active_from, active_until] and targeted at everyone or this user"""
    now = to_datetime(now) or datetime.now(timezone.utc)
    if not question.get("is_active"):
        return False
    target = question.get("target_user")
    if target and target != user_id:
        return False
    active_from = to_datetime(question.get("active_from"))
    if active_from and now < active_from:
        return False
    active_until = to_datetime(question.get("active_until"))
    if active_until and now > active_until:
        return False
    return True


def daily_averages(entries: List[Dict[str, Any]], days: int = 14) -> List[Dict[str, Any]]:
    """Average mood per calendar day for the latest `days` days that have entries, oldest first"""
    by_day: Dict[str, List[float]] = {}
    for entry in entries:
        day = to_date(entry.get("created_at"))
        if day is None:
            continue
        by_day.setdefault(day.isoformat(), []).append(entry["mood_value"])
    latest = sorted(by_day)[-days:] if days else sorted(by_day)
    return [
        {"day": day, "average": round(average(by_day[day]), 2), "entries": len(by_day[day])}
        for day in latest
    ]


def low_mood_alerts(entries: List[Dict[str, Any]], threshold: int = 2, min_count: int = 3) -> List[Dict[str, Any]]:
    """Users with at least min_count entries at or below threshold, most low entries first"""
    counts: Dict[str, int] = {}
    for entry in entries:
        if entry.get("mood_value") is not None and entry["mood_value"] <= threshold:
            counts[entry["user_id"]] = counts.get(entry["user_id"], 0) + 1
    alerts = [{"user_id": uid, "low_entries": n} for uid, n in counts.items() if n >= min_count]
    return sorted(alerts, key=lambda a: (-a["low_entries"], a["user_id"]))
