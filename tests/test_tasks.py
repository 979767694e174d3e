from quidz.modules.tasks.service import next_status, plan_fanout


def test_next_status_cycles():
    assert next_status("open") == "in_progress"
    assert next_status("in_progress") == "completed"
    assert next_status("completed") == "open"
    assert next_status(None) == "in_progress"


def test_plan_fanout_skips_existing_and_duplicates():
    to_create, skipped = plan_fanout(["a", "b", "a", "c"], [{"assigned_to": "b"}])
    assert to_create == ["a", "c"]
    assert skipped == ["b"]


def test_single_assignment(client, login, coach, participant):
    login(coach)
    response = client.post("/api/v1/tasks", json={"title": "Lebenslauf", "assigned_to": participant})
    assert response.status_code == 201
    created = response.json()["created"]
    assert len(created) == 1
    assert created[0]["status"] == "open"
    assert created[0]["created_by"] == coach


def test_assignee_is_required(client, login, coach):
    login(coach)
    assert client.post("/api/v1/tasks", json={"title": "Ohne Ziel"}).status_code == 422


def test_fanout_creates_one_row_per_participant_once(client, login, db, coach, participant, other_participant):
    login(coach)
    payload = {"title": "Wochenziel", "assign_to_all": True, "due_date": "2025-03-14"}

    first = client.post("/api/v1/tasks", json=payload)
    assert first.status_code == 201
    assert sorted(t["assigned_to"] for t in first.json()["created"]) == sorted([participant, other_participant])

    # double submit inside the dedupe window
    second = client.post("/api/v1/tasks", json=payload)
    assert second.status_code == 201
    assert second.json()["created"] == []
    assert sorted(second.json()["skipped_assignees"]) == sorted([participant, other_participant])
    assert len(db.rows("tasks")) == 2


def test_fanout_idempotency_key(client, login, db, coach, participant):
    login(coach)
    db.seed("tasks", {
        "title": "Alt", "assigned_to": participant, "assign_to_all": True,
        "idempotency_key": "k-1", "created_at": "2020-01-01T00:00:00",
    })
    response = client.post("/api/v1/tasks", json={"title": "Neu", "assign_to_all": True, "idempotency_key": "k-1"})
    assert response.status_code == 201
    assert response.json()["created"] == []


def test_participant_updates_only_own_status(client, login, db, participant, other_participant):
    own = db.seed("tasks", {"title": "Mine", "assigned_to": participant, "status": "open"})[0]
    foreign = db.seed("tasks", {"title": "Theirs", "assigned_to": other_participant, "status": "open"})[0]
    login(participant)

    response = client.patch(f"/api/v1/tasks/{own['id']}/status", json={"status": "completed"})
    assert response.status_code == 200
    assert response.json()["status"] == "completed"

    assert client.patch(f"/api/v1/tasks/{foreign['id']}/status", json={"status": "completed"}).status_code == 403
    assert client.post(f"/api/v1/tasks/{own['id']}/advance").json()["status"] == "open"


def test_participants_cannot_create_or_delete(client, login, db, participant):
    task = db.seed("tasks", {"title": "Mine", "assigned_to": participant, "status": "open"})[0]
    login(participant)
    assert client.post("/api/v1/tasks", json={"title": "x", "assigned_to": participant}).status_code == 403
    assert client.delete(f"/api/v1/tasks/{task['id']}").status_code == 403


def test_my_tasks_sorted_by_due_date(client, login, db, participant):
    db.seed(
        "tasks",
        {"title": "Later", "assigned_to": participant, "due_date": "2025-05-01"},
        {"title": "Sooner", "assigned_to": participant, "due_date": "2025-04-01"},
    )
    login(participant)
    titles = [t["title"] for t in client.get("/api/v1/tasks/mine").json()]
    assert titles == ["Sooner", "Later"]
