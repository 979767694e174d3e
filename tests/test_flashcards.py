from quidz.modules.badges.service import session_badges_for_count
from quidz.modules.flashcards.importer import FlashcardImporter


def test_csv_import_with_german_headers():
    content = "\ufeffFrage;Antwort;Kategorie;öffentlich\nHauptstadt?;Bern;Geografie;ja\n2+2?;4;;\n"
    cards, errors = FlashcardImporter.parse("csv", content)
    assert errors == []
    assert cards[0] == {"front_text": "Hauptstadt?", "back_text": "Bern", "category": "Geografie", "is_public": True}
    assert cards[1]["category"] is None
    assert cards[1]["is_public"] is None


def test_json_import_rejects_incomplete_cards():
    cards, errors = FlashcardImporter.parse("json", '[{"front_text": "a", "back_text": "b"}, {"front_text": "c"}]')
    assert cards == []
    assert errors == ["1 card(s) have no valid front or back side"]


def test_import_rejects_bad_input():
    assert FlashcardImporter.parse("json", "{}")[1] == ["JSON must be an array of cards"]
    assert FlashcardImporter.parse("json", "[")[1][0].startswith("Invalid JSON")
    assert FlashcardImporter.parse("xml", "<a/>")[1] == ["Unsupported format: xml"]
    assert FlashcardImporter.parse("csv", "  ")[1] == ["No CSV data given"]


def test_build_rows_resolves_categories_and_defaults():
    categories = [{"id": "cat-1", "name": "Geografie"}]
    cards = [
        {"front_text": "a", "back_text": "b", "category": "geografie", "is_public": None},
        {"front_text": "c", "back_text": "d", "category": None, "is_public": False},
    ]
    rows = FlashcardImporter.build_rows(cards, categories, "u1", default_category_id="cat-9", default_is_public=True)
    assert rows[0]["category_id"] == "cat-1"
    assert rows[0]["is_public"] is True
    assert rows[1]["category_id"] == "cat-9"
    assert rows[1]["is_public"] is False
    assert FlashcardImporter.missing_categories(
        [{"category": "Neu"}, {"category": "neu"}, {"category": "cat-1"}], categories
    ) == ["Neu"]


def test_session_badges_only_on_exact_counts():
    assert session_badges_for_count(10) == ["cards_10"]
    assert session_badges_for_count(50) == ["cards_50"]
    assert session_badges_for_count(11) == []
    assert session_badges_for_count(None) == []


def test_first_card_badge(client, login, db, participant):
    login(participant)
    first = client.post("/api/v1/flashcards", json={"front_text": "Q", "back_text": "A"})
    assert first.status_code == 201
    assert [b["badge_type"] for b in first.json()["badges_awarded"]] == ["first_card"]

    second = client.post("/api/v1/flashcards", json={"front_text": "Q2", "back_text": "A2"})
    assert second.json()["badges_awarded"] == []
    assert len(db.rows("badges")) == 1


def test_tenth_progress_record_awards_badge(client, login, db, participant):
    card = db.seed("flashcards", {"front_text": "Q", "back_text": "A", "is_public": True, "created_by": "someone"})[0]
    for _ in range(9):
        db.seed("learning_progress", {"user_id": participant, "flashcard_id": card["id"], "knew_answer": True})
    login(participant)
    response = client.post(f"/api/v1/flashcards/{card['id']}/progress", json={"knew_answer": True})
    assert response.status_code == 201
    assert [b["badge_type"] for b in response.json()["badges_awarded"]] == ["cards_10"]


def test_visibility_public_plus_own(client, login, db, participant, other_participant):
    db.seed(
        "flashcards",
        {"front_text": "mine", "back_text": "a", "is_public": False, "created_by": participant},
        {"front_text": "public", "back_text": "a", "is_public": True, "created_by": other_participant},
        {"front_text": "private", "back_text": "a", "is_public": False, "created_by": other_participant},
    )
    login(participant)
    fronts = sorted(c["front_text"] for c in client.get("/api/v1/flashcards").json())
    assert fronts == ["mine", "public"]


def test_batch_import_awards_first_card(client, login, db, participant):
    login(participant)
    content = '[{"front_text": "Q1", "back_text": "A1"}, {"front_text": "Q2", "back_text": "A2"}]'
    response = client.post("/api/v1/flashcards/import", json={"format": "json", "content": content})
    assert response.status_code == 201
    assert response.json()["imported"] == 2
    assert [b["badge_type"] for b in db.rows("badges")] == ["first_card"]


def test_progress_and_feedback_need_a_visible_card(client, login, db, participant, other_participant):
    private, public = db.seed(
        "flashcards",
        {"front_text": "private", "back_text": "a", "is_public": False, "created_by": other_participant},
        {"front_text": "public", "back_text": "a", "is_public": True, "created_by": other_participant},
    )
    login(participant)
    assert client.post(f"/api/v1/flashcards/{private['id']}/progress", json={"knew_answer": True}).status_code == 403
    assert client.post(f"/api/v1/flashcards/{private['id']}/feedback", json={"is_helpful": True}).status_code == 403
    assert db.rows("learning_progress") == []
    assert db.rows("flashcard_feedbacks") == []

    assert client.post(f"/api/v1/flashcards/{public['id']}/progress", json={"knew_answer": True}).status_code == 201
