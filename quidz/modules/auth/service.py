import hashlib
import time
from supabase import Client
from quidz.modules.auth.schemas import LoginRequest, RegisterRequest, TokenResponse, RegisterResponse
from fastapi import HTTPException
from typing import Any, Dict, Optional, Tuple
import logging

logger = logging.getLogger(__name__)


class TokenCache:
    """Bearer token -> identity, kept for a short while so one page load costs one auth round trip"""

    def __init__(self, ttl_seconds: int = 60, max_entries: int = 500):
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._entries: Dict[str, Tuple[Dict[str, Any], float]] = {}

    @staticmethod
    def _key(token: str) -> str:
        return hashlib.sha256(token.encode()).hexdigest()

    def get(self, token: str) -> Optional[Dict[str, Any]]:
        key = self._key(token)
        entry = self._entries.get(key)
        if entry is None:
            return None
        identity, expires_at = entry
        if time.monotonic() >= expires_at:
            del self._entries[key]
            return None
        return identity

    def put(self, token: str, identity: Dict[str, Any]):
        if len(self._entries) >= self.max_entries:
            return
        self._entries[self._key(token)] = (identity, time.monotonic() + self.ttl_seconds)

    def drop(self, token: str):
        self._entries.pop(self._key(token), None)

    def clear(self):
        self._entries.clear()


token_cache = TokenCache()


def _mentions(error: Exception, *needles: str) -> bool:
    text = str(error).lower()
    return any(n.lower() in text for n in needles)


def _identity(user) -> Dict[str, Any]:
    return {
        "id": user.id,
        "email": user.email,
        "user_metadata": user.user_metadata or {},
        "created_at": user.created_at,
    }


class AuthService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def register(self, register_data: RegisterRequest) -> RegisterResponse:
        """Sign a new participant up; full_name travels as user metadata and the
        profiles row is created from it by the auth trigger."""
        metadata = {"full_name": register_data.full_name} if register_data.full_name else {}
        try:
            response = self.supabase.auth.sign_up({
                "email": register_data.email,
                "password": register_data.password,
                "options": {"data": metadata},
            })
        except Exception as e:
            if _mentions(e, "already registered", "already exists"):
                raise HTTPException(status_code=400, detail="User already exists")
            logger.error(f"Sign up failed for {register_data.email}: {e}")
            raise HTTPException(status_code=500, detail=f"Registration failed: {str(e)}")

        user = response.user
        if not user:
            raise HTTPException(status_code=400, detail="Failed to register user")
        logger.info(f"Registered participant {user.id}")
        return RegisterResponse(
            user_id=user.id,
            email=user.email or register_data.email,
            message="User registered successfully"
        )

    def login(self, login_data: LoginRequest) -> TokenResponse:
        try:
            response = self.supabase.auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password,
            })
        except Exception as e:
            if _mentions(e, "invalid", "credentials"):
                raise HTTPException(status_code=401, detail="Invalid email or password")
            raise HTTPException(status_code=500, detail=f"Login failed: {str(e)}")

        if not response.user or not response.session:
            raise HTTPException(status_code=401, detail="Invalid credentials")
        return TokenResponse(
            access_token=response.session.access_token,
            refresh_token=response.session.refresh_token,
            user_id=response.user.id,
            email=response.user.email or login_data.email
        )

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Identity behind a bearer token: id, email, user_metadata, created_at"""
        cached = token_cache.get(token)
        if cached is not None:
            return cached
        try:
            response = self.supabase.auth.get_user(jwt=token)
        except Exception as e:
            if _mentions(e, "jwt", "expired", "invalid"):
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            raise HTTPException(status_code=401, detail="Authentication failed")

        if not response or not response.user:
            raise HTTPException(status_code=401, detail="Invalid or expired token")
        identity = _identity(response.user)
        token_cache.put(token, identity)
        return identity

    def logout(self, token: str) -> bool:
        """Forget the cached identity and end the session; the JWT itself expires on its own"""
        token_cache.drop(token)
        try:
            self.supabase.auth.sign_out()
        except Exception as e:
            logger.warning(f"Sign out failed: {e}")
            return False
        return True
