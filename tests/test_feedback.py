from datetime import datetime, timezone

from quidz.modules.feedback.mood import daily_averages, is_question_active, low_mood_alerts

NOW = datetime(2025, 3, 15, 12, 0, tzinfo=timezone.utc)


def test_question_activity_window_and_target():
    question = {"is_active": True, "active_from": "2025-03-01T00:00:00Z", "active_until": "2025-03-31T00:00:00Z"}
    assert is_question_active(question, "u1", now=NOW)
    assert not is_question_active({**question, "is_active": False}, "u1", now=NOW)
    assert not is_question_active({**question, "active_from": "2025-03-20T00:00:00"}, "u1", now=NOW)
    assert not is_question_active({**question, "active_until": "2025-03-10T00:00:00"}, "u1", now=NOW)
    assert is_question_active({**question, "target_user": "u1"}, "u1", now=NOW)
    assert not is_question_active({**question, "target_user": "u2"}, "u1", now=NOW)


def test_low_mood_alert_needs_three_low_entries():
    entries = [
        {"user_id": "a", "mood_value": 1},
        {"user_id": "a", "mood_value": 2},
        {"user_id": "a", "mood_value": 2},
        {"user_id": "b", "mood_value": 1},
        {"user_id": "b", "mood_value": 2},
        {"user_id": "b", "mood_value": 7},
    ]
    assert low_mood_alerts(entries) == [{"user_id": "a", "low_entries": 3}]


def test_daily_averages_keep_latest_days_oldest_first():
    entries = [
        {"mood_value": 4, "created_at": "2025-03-01T08:00:00"},
        {"mood_value": 6, "created_at": "2025-03-01T18:00:00"},
        {"mood_value": 9, "created_at": "2025-03-03T08:00:00"},
        {"mood_value": 3, "created_at": "2025-02-01T08:00:00"},
    ]
    assert daily_averages(entries, days=2) == [
        {"day": "2025-03-01", "average": 5.0, "entries": 2},
        {"day": "2025-03-03", "average": 9.0, "entries": 1},
    ]


def test_answer_to_inactive_question_is_rejected(client, login, db, participant):
    question = db.seed("feedback_questions", {"question_text": "Wie geht's?", "type": "text", "is_active": False})[0]
    login(participant)
    response = client.post("/api/v1/feedback/answers", json={"question_id": question["id"], "answer_text": "gut"})
    assert response.status_code == 409


def test_multiple_choice_answer_must_be_an_option(client, login, db, participant):
    question = db.seed("feedback_questions", {
        "question_text": "Welcher Tag?", "type": "multiple_choice", "options": ["Mo", "Di"], "is_active": True,
    })[0]
    login(participant)
    bad = client.post("/api/v1/feedback/answers", json={"question_id": question["id"], "answer_text": "Fr"})
    assert bad.status_code == 400
    good = client.post("/api/v1/feedback/answers", json={"question_id": question["id"], "answer_text": "Di"})
    assert good.status_code == 201
    assert good.json()["question_type"] == "multiple_choice"


def test_mood_value_range(client, login, participant):
    login(participant)
    assert client.post("/api/v1/feedback/mood", json={"mood_value": 11}).status_code == 422
    assert client.post("/api/v1/feedback/mood", json={"mood_value": 7}).status_code == 201


def test_mood_overview_flags_low_mood(client, login, db, participant, coach):
    for value in (1, 2, 2, 8):
        db.seed("mood_entries", {"user_id": participant, "mood_value": value})
    login(coach)
    response = client.get("/api/v1/feedback/mood/overview")
    assert response.status_code == 200
    body = response.json()
    assert body["entries_count"] == 4
    assert body["alerts"][0]["user_id"] == participant
    assert body["alerts"][0]["full_name"] == "Pia Participant"


def test_feedback_export_is_staff_only(client, login, participant):
    login(participant)
    assert client.get("/api/v1/feedback/export.csv").status_code == 403


def test_mood_question_is_answered_with_a_mood_value(client, login, db, participant):
    question = db.seed("feedback_questions", {"question_text": "Stimmung heute?", "type": "mood", "is_active": True})[0]
    login(participant)
    missing = client.post("/api/v1/feedback/answers", json={"question_id": question["id"], "answer_text": "gut"})
    assert missing.status_code == 400
    answered = client.post("/api/v1/feedback/answers", json={"question_id": question["id"], "mood_value": 6})
    assert answered.status_code == 201
    assert answered.json()["mood_value"] == 6
