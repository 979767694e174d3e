"""Access rules and small workflows of the remaining modules"""
from quidz.modules.skills.service import skill_task_description


def test_skill_proposal_starts_in_review(client, login, db, participant):
    login(participant)
    response = client.post("/api/v1/skills", data={"title": "Excel", "category": "digital"})
    assert response.status_code == 201
    assert response.json()["status"] == "in_pruefung"
    assert client.post("/api/v1/skills", data={"title": "x", "category": "kochen"}).status_code == 400


def test_skill_proof_file_is_uploaded(client, login, db, participant):
    login(participant)
    response = client.post(
        "/api/v1/skills",
        data={"title": "Schweissen", "category": "handwerk"},
        files={"proof_file": ("zertifikat.pdf", b"%PDF-1.4 data", "application/pdf")},
    )
    assert response.status_code == 201
    assert response.json()["proof_file_url"].startswith("https://storage.test/skill-proofs/participant-1/")
    assert response.json()["proof_file_url"].endswith(".pdf")


def test_reviewed_skill_cannot_be_withdrawn(client, login, db, participant, coach):
    skill = db.seed("skills", {"user_id": participant, "title": "Excel", "status": "in_pruefung"})[0]
    login(coach)
    reviewed = client.put(f"/api/v1/skills/{skill['id']}/review", json={"status": "integrationsrelevant"})
    assert reviewed.status_code == 200
    assert reviewed.json()["is_integration_relevant"] is True

    login(participant)
    assert client.delete(f"/api/v1/skills/{skill['id']}").status_code == 409


def test_skill_follow_up_task(client, login, db, participant, coach):
    skill = db.seed("skills", {"user_id": participant, "title": "Excel", "status": "validiert"})[0]
    login(coach)
    response = client.post(f"/api/v1/skills/{skill['id']}/tasks", json={"title": "Pivot-Tabelle", "goal": "Selbständig"})
    assert response.status_code == 201
    assert [t["title"] for t in response.json()] == ["Pivot-Tabelle"]
    task = db.rows("tasks")[0]
    assert task["assigned_to"] == participant
    assert task["description"] == skill_task_description("Excel", None, "Selbständig")


def test_linking_a_foreign_task_is_rejected(client, login, db, participant, other_participant, coach):
    skill = db.seed("skills", {"user_id": participant, "title": "Excel", "status": "validiert"})[0]
    task = db.seed("tasks", {"title": "Fremd", "assigned_to": other_participant, "status": "open"})[0]
    login(coach)
    assert client.post(f"/api/v1/skills/{skill['id']}/tasks/{task['id']}").status_code == 400


def test_like_toggle_on_published_projects_only(client, login, db, participant, other_participant):
    published = db.seed("projects", {"user_id": participant, "title": "Website", "published": True})[0]
    draft = db.seed("projects", {"user_id": participant, "title": "Entwurf", "published": False})[0]
    login(other_participant)

    liked = client.post(f"/api/v1/projects/{published['id']}/like").json()
    assert liked == {"project_id": published["id"], "liked": True, "likes_count": 1}
    unliked = client.post(f"/api/v1/projects/{published['id']}/like").json()
    assert unliked["liked"] is False
    assert unliked["likes_count"] == 0
    assert client.post(f"/api/v1/projects/{draft['id']}/like").status_code == 404

    gallery = client.get("/api/v1/projects/gallery").json()
    assert [p["title"] for p in gallery] == ["Website"]
    assert gallery[0]["author_name"] == "Pia Participant"


def test_only_owner_publishes(client, login, db, participant, other_participant):
    project = db.seed("projects", {"user_id": participant, "title": "Website", "published": False})[0]
    login(other_participant)
    assert client.post(f"/api/v1/projects/{project['id']}/toggle-publish").status_code == 403
    login(participant)
    assert client.post(f"/api/v1/projects/{project['id']}/toggle-publish").json()["published"] is True


def test_calendar_merges_events_and_task_due_dates(client, login, db, participant):
    db.seed(
        "events",
        {"user_id": participant, "title": "Coaching", "start_time": "2025-03-10T09:00:00", "end_time": "2025-03-10T10:00:00"},
        {"user_id": participant, "title": "April", "start_time": "2025-04-10T09:00:00", "end_time": "2025-04-10T10:00:00"},
    )
    db.seed(
        "tasks",
        {"title": "CV", "assigned_to": participant, "status": "open", "due_date": "2025-03-12"},
        {"title": "Ohne Datum", "assigned_to": participant, "status": "open", "due_date": None},
    )
    login(participant)
    response = client.get("/api/v1/events", params={"start": "2025-03-01", "end": "2025-03-31"})
    assert response.status_code == 200
    body = response.json()
    assert [e["title"] for e in body["events"]] == ["Coaching"]
    assert [t["title"] for t in body["task_due_dates"]] == ["CV"]
    assert client.get("/api/v1/events", params={"start": "2025-03-31", "end": "2025-03-01"}).status_code == 400


def test_event_end_before_start(client, login, participant):
    login(participant)
    response = client.post("/api/v1/events", json={
        "title": "x", "start_time": "2025-03-10T10:00:00", "end_time": "2025-03-10T09:00:00",
    })
    assert response.status_code == 422


def test_chat_delete_own_or_moderate(client, login, db, participant, other_participant, coach):
    message = db.seed("chat_messages", {"user_id": participant, "message": "Hallo"})[0]
    login(other_participant)
    assert client.delete(f"/api/v1/chat/messages/{message['id']}").status_code == 403
    assert client.put(f"/api/v1/chat/messages/{message['id']}", json={"message": "x"}).status_code == 403

    login(participant)
    edited = client.put(f"/api/v1/chat/messages/{message['id']}", json={"message": "Hallo zusammen"})
    assert edited.json()["is_edited"] is True

    login(coach)
    assert client.delete(f"/api/v1/chat/messages/{message['id']}").status_code == 204
    assert db.rows("chat_messages") == []


def test_assistant_failure_is_bad_gateway(client, login, db, participant):
    db.functions.error = RuntimeError("function timed out")
    login(participant)
    response = client.post("/api/v1/assistant/messages", json={"content": "Hilfe beim CV"})
    assert response.status_code == 502
    # the question itself is kept
    assert [m["content"] for m in db.rows("ai_chat_messages")] == ["Hilfe beim CV"]


def test_assistant_sends_full_history(client, login, db, participant):
    db.seed("ai_chat_messages", {"user_id": participant, "role": "assistant", "content": "Hallo!", "created_at": "2025-01-01T00:00:00"})
    login(participant)
    response = client.post("/api/v1/assistant/messages", json={"content": "Frage"})
    assert response.status_code == 200
    name, options = db.functions.invocations[0]
    assert name == "ai-chat"
    assert options["body"]["messages"] == [
        {"role": "assistant", "content": "Hallo!"},
        {"role": "user", "content": "Frage"},
    ]


def test_tool_links_must_be_http(client, login, coach):
    login(coach)
    assert client.post("/api/v1/tools", data={"title": "x", "web_link": "ftp://x"}).status_code == 400
    created = client.post("/api/v1/tools", data={"title": "Canva", "web_link": "https://canva.com"})
    assert created.status_code == 201
    assert created.json()["image_url"] is None


def test_documents_visible_when_public_or_assigned(client, login, db, participant, other_participant):
    db.seed(
        "documents",
        {"title": "Hausordnung", "file_url": "u1", "visibility": "public"},
        {"title": "Vertrag Pia", "file_url": "u2", "visibility": "private", "assigned_to": participant},
        {"title": "Vertrag Paul", "file_url": "u3", "visibility": "private", "assigned_to": other_participant},
    )
    login(participant)
    titles = sorted(d["title"] for d in client.get("/api/v1/documents").json())
    assert titles == ["Hausordnung", "Vertrag Pia"]
    assert client.get("/api/v1/documents/all").status_code == 403


def test_manual_badge_award_is_idempotent(client, login, db, participant, coach):
    login(coach)
    first = client.post("/api/v1/badges", json={"user_id": participant, "badge_type": "streak_5"})
    again = client.post("/api/v1/badges", json={"user_id": participant, "badge_type": "streak_5"})
    assert first.status_code == again.status_code == 201
    assert first.json()["id"] == again.json()["id"]
    assert len(db.rows("badges")) == 1


def test_coach_sees_only_participants_in_user_list(client, login, participant, coach, admin):
    login(coach)
    response = client.get("/api/v1/profiles")
    assert response.status_code == 200
    assert [p["id"] for p in response.json()] == [participant]

    login(admin)
    ids = sorted(p["id"] for p in client.get("/api/v1/profiles").json())
    assert ids == sorted([participant, coach, admin])


def test_participants_cannot_list_profiles(client, login, participant):
    login(participant)
    assert client.get("/api/v1/profiles").status_code == 403
