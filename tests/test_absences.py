def test_new_absence_is_pending(client, login, participant):
    login(participant)
    response = client.post("/api/v1/absences", json={"date": "2025-03-10", "reason": "Arzttermin"})
    assert response.status_code == 201
    assert response.json()["approved"] is None
    assert response.json()["user_id"] == participant


def test_participant_cannot_decide(client, login, db, participant):
    absence = db.seed("absences", {"user_id": participant, "date": "2025-03-10", "reason": "Krank", "approved": None})[0]
    login(participant)
    response = client.post(f"/api/v1/absences/{absence['id']}/decision", json={"approved": True})
    assert response.status_code == 403


def test_staff_decides_once(client, login, db, participant, coach):
    absence = db.seed("absences", {"user_id": participant, "date": "2025-03-10", "reason": "Krank", "approved": None})[0]
    login(coach)

    response = client.post(f"/api/v1/absences/{absence['id']}/decision", json={"approved": False})
    assert response.status_code == 200
    assert response.json()["approved"] is False

    again = client.post(f"/api/v1/absences/{absence['id']}/decision", json={"approved": True})
    assert again.status_code == 409
    assert db.rows("absences")[0]["approved"] is False


def test_decision_on_unknown_absence(client, login, coach):
    login(coach)
    response = client.post("/api/v1/absences/missing/decision", json={"approved": True})
    assert response.status_code == 404


def test_pending_filter_with_names(client, login, db, participant, coach):
    db.seed(
        "absences",
        {"user_id": participant, "date": "2025-03-10", "reason": "Krank", "approved": None},
        {"user_id": participant, "date": "2025-03-11", "reason": "Termin", "approved": True},
    )
    login(coach)
    response = client.get("/api/v1/absences", params={"status": "pending"})
    assert response.status_code == 200
    body = response.json()
    assert len(body) == 1
    assert body[0]["reason"] == "Krank"
    assert body[0]["full_name"] == "Pia Participant"
