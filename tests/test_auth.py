from types import SimpleNamespace

import pytest
from fastapi import HTTPException

from quidz.modules.auth.service import AuthService, TokenCache, token_cache


class FakeAuth:
    def __init__(self, user=None, error=None):
        self.user = user
        self.error = error
        self.get_user_calls = 0
        self.signed_out = False

    def get_user(self, jwt=None):
        self.get_user_calls += 1
        if self.error:
            raise self.error
        return SimpleNamespace(user=self.user)

    def sign_up(self, payload):
        if self.error:
            raise self.error
        return SimpleNamespace(user=SimpleNamespace(id="new-user", email=payload["email"]))

    def sign_out(self):
        self.signed_out = True


@pytest.fixture(autouse=True)
def empty_token_cache():
    token_cache.clear()
    yield
    token_cache.clear()


def make_service(auth):
    return AuthService(SimpleNamespace(auth=auth))


def test_current_user_is_cached_per_token():
    user = SimpleNamespace(id="u1", email="u1@example.org", user_metadata=None, created_at="2024-01-01")
    auth = FakeAuth(user=user)
    service = make_service(auth)

    first = service.get_current_user("token-a")
    second = service.get_current_user("token-a")

    assert first == second == {
        "id": "u1", "email": "u1@example.org", "user_metadata": {}, "created_at": "2024-01-01"
    }
    assert auth.get_user_calls == 1


def test_logout_forgets_cached_identity():
    user = SimpleNamespace(id="u1", email=None, user_metadata={}, created_at=None)
    auth = FakeAuth(user=user)
    service = make_service(auth)
    service.get_current_user("token-a")

    assert service.logout("token-a") is True
    assert auth.signed_out
    service.get_current_user("token-a")
    assert auth.get_user_calls == 2


def test_expired_token_is_401():
    service = make_service(FakeAuth(error=Exception("JWT expired")))
    with pytest.raises(HTTPException) as exc:
        service.get_current_user("stale")
    assert exc.value.status_code == 401


def test_missing_user_is_401():
    service = make_service(FakeAuth(user=None))
    with pytest.raises(HTTPException) as exc:
        service.get_current_user("token")
    assert exc.value.status_code == 401


def test_register_existing_email_is_400():
    from quidz.modules.auth.schemas import RegisterRequest

    service = make_service(FakeAuth(error=Exception("User already registered")))
    with pytest.raises(HTTPException) as exc:
        service.register(RegisterRequest(email="pia@example.org", password="secret1"))
    assert exc.value.status_code == 400


def test_token_cache_respects_capacity():
    cache = TokenCache(ttl_seconds=60, max_entries=1)
    cache.put("a", {"id": "1"})
    cache.put("b", {"id": "2"})
    assert cache.get("a") == {"id": "1"}
    assert cache.get("b") is None


def test_token_cache_expires_entries():
    cache = TokenCache(ttl_seconds=0)
    cache.put("a", {"id": "1"})
    assert cache.get("a") is None
