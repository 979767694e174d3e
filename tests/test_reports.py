import pytest

from quidz.modules.reports.snapshot import build_snapshot
from datetime import date


@pytest.fixture
def participant_history(db, participant):
    db.seed(
        "absences",
        {"user_id": participant, "date": "2025-03-03", "reason": "Krank", "approved": True},
        {"user_id": participant, "date": "2025-03-12", "reason": "Termin", "approved": None},
        {"user_id": participant, "date": "2025-03-28", "reason": "Krank", "approved": False},
        {"user_id": participant, "date": "2025-02-20", "reason": "Krank", "approved": True},
        {"user_id": participant, "date": "2025-04-02", "reason": "Krank", "approved": True},
    )
    db.seed(
        "tasks",
        {"title": "CV", "assigned_to": participant, "status": "completed", "due_date": "2025-03-05"},
        {"title": "Bewerbung", "assigned_to": participant, "status": "in_progress", "due_date": "2025-03-20"},
        {"title": "Später", "assigned_to": participant, "status": "open", "due_date": "2025-05-01"},
    )
    db.seed(
        "skills",
        {"user_id": participant, "title": "Excel", "status": "validiert", "is_integration_relevant": True},
    )
    db.seed(
        "mood_entries",
        {"user_id": participant, "mood_value": 6, "created_at": "2025-03-04T08:00:00"},
        {"user_id": participant, "mood_value": 8, "created_at": "2025-03-18T08:00:00"},
    )
    return participant


def _create(client, participant):
    return client.post("/api/v1/reports", json={
        "user_id": participant,
        "period_start": "2025-03-01",
        "period_end": "2025-03-31",
        "program_type": "integration",
        "attendance_notes": "Regelmässig anwesend",
    })


def test_create_computes_period_snapshot(client, login, coach, participant_history):
    login(coach)
    response = _create(client, participant_history)
    assert response.status_code == 201
    report = response.json()
    assert report["status"] == "draft"
    assert report["coach_id"] == coach
    assert report["attendance_summary"]["absences_count"] == 3
    assert [a["status"] for a in report["attendance_summary"]["absences"]] == ["approved", "pending", "rejected"]
    assert report["tasks_summary"] == {"total": 2, "completed": 1, "in_progress": 1, "open": 0}
    assert report["skills_summary"] == {"total": 1, "validated": 1, "integration_relevant": 1}
    assert report["learning_summary"]["average_mood"] == 7
    assert report["learning_summary"]["mood_entries_count"] == 2


def test_final_report_rejects_updates(client, login, db, coach, participant_history):
    login(coach)
    report_id = _create(client, participant_history).json()["id"]

    saved = client.put(f"/api/v1/reports/{report_id}", json={"outlook": "Praktikum suchen"})
    assert saved.status_code == 200
    assert saved.json()["outlook"] == "Praktikum suchen"

    final = client.post(f"/api/v1/reports/{report_id}/finalize")
    assert final.status_code == 200
    assert final.json()["status"] == "final"
    frozen = final.json()["tasks_summary"]

    # source rows change after finalization; the snapshot must not
    db.seed("tasks", {"title": "Neu", "assigned_to": participant_history, "status": "open", "due_date": "2025-03-25"})

    assert client.put(f"/api/v1/reports/{report_id}", json={"outlook": "x"}).status_code == 409
    assert client.post(f"/api/v1/reports/{report_id}/finalize").status_code == 409
    stored = client.get(f"/api/v1/reports/{report_id}").json()
    assert stored["status"] == "final"
    assert stored["tasks_summary"] == frozen
    assert stored["outlook"] == "Praktikum suchen"


def test_draft_update_recomputes_for_new_period(client, login, coach, participant_history):
    login(coach)
    report_id = _create(client, participant_history).json()["id"]
    response = client.put(f"/api/v1/reports/{report_id}", json={"period_end": "2025-04-30"})
    assert response.status_code == 200
    assert response.json()["attendance_summary"]["absences_count"] == 4


def test_update_rejects_inverted_period(client, login, coach, participant_history):
    login(coach)
    report_id = _create(client, participant_history).json()["id"]
    response = client.put(f"/api/v1/reports/{report_id}", json={"period_end": "2025-02-01"})
    assert response.status_code == 400


def test_preview_does_not_save(client, login, db, coach, participant_history):
    login(coach)
    report_id = _create(client, participant_history).json()["id"]
    db.seed("absences", {"user_id": participant_history, "date": "2025-03-20", "reason": "Krank", "approved": None})

    preview = client.get(f"/api/v1/reports/{report_id}/preview")
    assert preview.status_code == 200
    assert preview.json()["attendance_summary"]["absences_count"] == 4
    stored = client.get(f"/api/v1/reports/{report_id}").json()
    assert stored["attendance_summary"]["absences_count"] == 3


def test_list_has_participant_names(client, login, coach, participant_history):
    login(coach)
    _create(client, participant_history)
    response = client.get("/api/v1/reports")
    assert response.status_code == 200
    assert response.json()[0]["participant_name"] == "Pia Participant"


def test_participants_cannot_read_reports(client, login, participant):
    login(participant)
    assert client.get("/api/v1/reports").status_code == 403


def test_pdf_export(client, login, coach, participant_history):
    login(coach)
    report_id = _create(client, participant_history).json()["id"]
    response = client.get(f"/api/v1/reports/{report_id}/export.pdf")
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.content.startswith(b"%PDF")


def test_snapshot_layout():
    snapshot = build_snapshot([], [], [], [], [], date(2025, 1, 1), date(2025, 1, 31))
    assert snapshot["attendance_summary"] == {"absences_count": 0, "absences": []}
    assert snapshot["tasks_summary"] == {"total": 0, "completed": 0, "in_progress": 0, "open": 0}
    assert snapshot["learning_summary"] == {
        "learned_flashcards_count": 0, "average_mood": None, "mood_entries_count": 0
    }
