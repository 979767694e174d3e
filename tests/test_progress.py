def _history(db, participant):
    db.seed(
        "tasks",
        {"title": "A", "assigned_to": participant, "status": "completed", "due_date": "2025-03-05"},
        {"title": "B", "assigned_to": participant, "status": "open", "due_date": "2025-03-06"},
        {"title": "C", "assigned_to": participant, "status": "completed", "due_date": "2025-06-01"},
    )
    db.seed(
        "absences",
        {"user_id": participant, "date": "2025-03-02", "reason": "Krank", "approved": None},
        {"user_id": participant, "date": "2025-04-02", "reason": "Krank", "approved": True},
    )
    card = db.seed("flashcards", {"front_text": "Q", "back_text": "A", "is_public": True, "created_by": "x"})[0]
    db.seed("flashcards", {"front_text": "Q2", "back_text": "A2", "is_public": False, "created_by": participant})
    db.seed(
        "learning_progress",
        {"user_id": participant, "flashcard_id": card["id"], "knew_answer": True},
        {"user_id": participant, "flashcard_id": card["id"], "knew_answer": True},
    )


def test_my_progress(client, login, db, participant):
    _history(db, participant)
    login(participant)
    body = client.get("/api/v1/progress/me").json()
    assert body["tasks_total"] == 3
    assert body["tasks_completed"] == 2
    assert body["task_completion_percent"] == 67
    assert body["absences_count"] == 2
    assert body["learned_flashcards_count"] == 1
    assert body["flashcard_progress_percent"] == 50
    assert body["average_mood"] is None


def test_period_scoped_progress_for_staff(client, login, db, participant, coach):
    _history(db, participant)
    login(coach)
    response = client.get(
        f"/api/v1/progress/{participant}", params={"period_start": "2025-03-01", "period_end": "2025-03-31"}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["tasks_total"] == 2
    assert body["absences_count"] == 1
    assert body["period_start"] == "2025-03-01"


def test_inverted_period_is_rejected(client, login, participant, coach):
    login(coach)
    response = client.get(
        f"/api/v1/progress/{participant}", params={"period_start": "2025-03-31", "period_end": "2025-03-01"}
    )
    assert response.status_code == 400


def test_participants_cannot_read_other_progress(client, login, participant, other_participant):
    login(participant)
    assert client.get(f"/api/v1/progress/{other_participant}").status_code == 403


def test_dashboard_views(client, login, db, participant, coach):
    _history(db, participant)

    login(participant)
    mine = client.get("/api/v1/dashboard").json()
    assert mine["view"] == "participant"
    assert [t["title"] for t in mine["participant"]["upcoming_tasks"]] == ["B"]

    login(coach)
    staff = client.get("/api/v1/dashboard").json()
    assert staff["view"] == "admin"
    assert staff["is_admin"] is False
    assert staff["admin"]["tasks_total"] == 3
    assert staff["admin"]["pending_absences"] == 1
    assert staff["admin"]["profiles_total"] == 2


def test_participant_detail(client, login, db, participant, coach):
    _history(db, participant)
    db.seed("projects", {"user_id": participant, "title": "Website", "category": "digital"})
    login(coach)
    response = client.get(f"/api/v1/progress/{participant}/detail")
    assert response.status_code == 200
    body = response.json()
    assert body["profile"]["full_name"] == "Pia Participant"
    assert body["roles"] == []
    assert len(body["tasks"]) == 3
    assert len(body["projects"]) == 1
