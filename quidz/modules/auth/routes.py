from fastapi import APIRouter, Depends, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from quidz.database.supabase_client import get_supabase, first
from quidz.modules.auth.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, RegisterResponse, MeResponse
)
from quidz.modules.auth.service import AuthService
from quidz.core.dependencies import get_current_user_id, get_access_cache, get_user_roles, get_user_permissions
from quidz.config.permissions_config import STAFF_ROLES
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/auth", tags=["auth"])

# Security scheme for JWT Bearer token
security = HTTPBearer()


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_token(
    credentials: HTTPAuthorizationCredentials = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    return credentials.credentials


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(
    register_data: RegisterRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Register a new participant"""
    return service.register(register_data)


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Login and get access token"""
    return service.login(login_data)


@router.post("/logout", status_code=200)
async def logout(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and invalidate token"""
    service.logout(token)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=MeResponse)
async def get_current_user(
    current_user: Dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache),
):
    """Current identity with roles and permissions; the frontend picks participant or staff views from this."""
    roles = get_user_roles(current_user["id"], supabase, cache)
    profile = first(
        supabase.table("profiles").select("full_name").eq("id", current_user["id"]).maybe_single().execute()
    ) or {}
    return MeResponse(
        id=current_user["id"],
        email=current_user.get("email"),
        full_name=profile.get("full_name"),
        roles=roles,
        is_admin="admin" in roles,
        is_staff=any(r in STAFF_ROLES for r in roles),
        permissions=get_user_permissions(current_user["id"], supabase, cache),
    )
