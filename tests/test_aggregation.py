from datetime import date, datetime, timezone

from quidz.modules.progress.aggregation import (
    average, filter_period, in_period, learned_flashcard_ids, percent, summarize, to_datetime
)

PERIOD = (date(2025, 3, 1), date(2025, 3, 31))


def test_zero_tasks_gives_zero_percent():
    summary = summarize([], [], [], [], [])
    assert summary["tasks_total"] == 0
    assert summary["tasks_completed"] == 0
    assert summary["task_completion_percent"] == 0
    assert summary["flashcard_progress_percent"] == 0


def test_average_mood_of_nothing_is_none():
    assert average([]) is None
    assert summarize([], [], [], [], [])["average_mood"] is None


def test_learned_cards_are_counted_once_per_flashcard():
    progress = [
        {"flashcard_id": "a", "knew_answer": True},
        {"flashcard_id": "a", "knew_answer": True},
        {"flashcard_id": "b", "knew_answer": False},
        {"flashcard_id": "c", "knew_answer": True},
    ]
    assert learned_flashcard_ids(progress) == ["a", "c"]
    summary = summarize([], [], [], progress, [], flashcards_available=4)
    assert summary["learned_flashcards_count"] == 2
    assert summary["flashcard_progress_percent"] == 50


def test_absences_outside_the_period_are_not_counted():
    absences = [
        {"date": "2025-03-01"},
        {"date": "2025-03-15"},
        {"date": "2025-03-31"},
        {"date": "2025-02-28"},
        {"date": "2025-04-01"},
    ]
    summary = summarize([], absences, [], [], [], *PERIOD)
    assert summary["absences_count"] == 3


def test_task_counts_and_percent():
    tasks = [
        {"status": "completed", "due_date": "2025-03-02"},
        {"status": "completed", "due_date": "2025-03-03"},
        {"status": "in_progress", "due_date": "2025-03-04"},
        {"status": "open", "due_date": None},
    ]
    summary = summarize(tasks, [], [], [], [])
    assert (summary["tasks_total"], summary["tasks_completed"]) == (4, 2)
    assert summary["tasks_in_progress"] == 1
    assert summary["tasks_open"] == 1
    assert summary["task_completion_percent"] == 50

    # undated tasks drop out once a period is set
    scoped = summarize(tasks, [], [], [], [], *PERIOD)
    assert scoped["tasks_total"] == 3
    assert scoped["task_completion_percent"] == 67


def test_skills_are_cumulative():
    skills = [
        {"status": "validiert", "is_integration_relevant": True, "created_at": "2024-01-01T00:00:00"},
        {"status": "in_pruefung", "is_integration_relevant": False, "created_at": "2025-03-02T00:00:00"},
    ]
    summary = summarize([], [], skills, [], [], *PERIOD)
    assert summary["skills_total"] == 2
    assert summary["skills_validated"] == 1
    assert summary["skills_integration_relevant"] == 1


def test_mood_is_scoped_by_created_at():
    mood = [
        {"mood_value": 8, "created_at": "2025-03-10T09:00:00+00:00"},
        {"mood_value": 4, "created_at": "2025-03-31T23:30:00"},
        {"mood_value": 1, "created_at": "2025-04-01T00:00:00"},
    ]
    summary = summarize([], [], [], [], mood, *PERIOD)
    assert summary["mood_entries_count"] == 2
    assert summary["average_mood"] == 6


def test_period_bounds_are_inclusive():
    assert in_period("2025-03-01", *PERIOD)
    assert in_period(datetime(2025, 3, 31, 18, 0), *PERIOD)
    assert not in_period(None, *PERIOD)
    assert in_period(None)
    assert filter_period([{"d": "2025-03-05"}, {"d": "2025-05-05"}], "d", *PERIOD) == [{"d": "2025-03-05"}]


def test_percent_rounds():
    assert percent(1, 3) == 33
    assert percent(2, 3) == 67
    assert percent(5, 0) == 0


def test_naive_timestamps_are_utc():
    assert to_datetime("2025-03-01T10:00:00") == datetime(2025, 3, 1, 10, tzinfo=timezone.utc)
    assert to_datetime("2025-03-01T10:00:00Z") == datetime(2025, 3, 1, 10, tzinfo=timezone.utc)
    assert to_datetime("not a date") is None
