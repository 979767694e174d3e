"""
Shared fixtures.

Provides:
- db: in-memory Supabase fake (tests/fakes.py)
- client: TestClient with get_supabase pointed at the fake
- login(user_id): makes the client act as that user
- participant / coach / admin: seeded profiles with their roles
"""
import os

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("SUPABASE_URL", "http://supabase.test")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")
os.environ.setdefault("ENVIRONMENT", "test")

from quidz.main import app  # noqa: E402
from quidz.database.supabase_client import get_supabase  # noqa: E402
from quidz.core.dependencies import get_current_user_id  # noqa: E402
from tests.fakes import FakeSupabase  # noqa: E402


@pytest.fixture
def db():
    return FakeSupabase()


@pytest.fixture
def client(db):
    app.dependency_overrides[get_supabase] = lambda: db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def login(db):
    """Call with a profile id; later requests run as that user"""
    def _login(user_id: str):
        profile = next((p for p in db.rows("profiles") if p["id"] == user_id), {})
        app.dependency_overrides[get_current_user_id] = lambda: {"id": user_id, "email": profile.get("email")}
    return _login


def _make_user(db, user_id, name, roles=()):
    db.seed("profiles", {"id": user_id, "full_name": name, "email": f"{user_id}@example.org"})
    for role in roles:
        db.seed("user_roles", {"user_id": user_id, "role": role})
    return user_id


@pytest.fixture
def participant(db):
    return _make_user(db, "participant-1", "Pia Participant")


@pytest.fixture
def other_participant(db):
    return _make_user(db, "participant-2", "Paul Participant")


@pytest.fixture
def coach(db):
    return _make_user(db, "coach-1", "Clara Coach", roles=("coach",))


@pytest.fixture
def admin(db):
    return _make_user(db, "admin-1", "Adam Admin", roles=("admin",))
