"""
Core dependencies for route protection, role lookup and permission checking
"""

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from quidz.config.permissions_config import STAFF_ROLES, permissions_for_roles
from quidz.database.supabase_client import get_supabase, rows
from quidz.modules.auth.service import AuthService
from supabase import Client
from typing import List, Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()


def _get_request_cache(request: Request) -> Dict[str, Any]:
    """Return request-scoped cache for access data (roles, permissions)."""
    if not hasattr(request.state, "access_cache"):
        request.state.access_cache = {}
    return request.state.access_cache


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current user info from JWT token"""
    token = credentials.credentials
    user_data = auth_service.get_current_user(token)
    return user_data


def get_user_roles(user_id: str, supabase: Client, cache: Optional[Dict[str, Any]] = None) -> List[str]:
    """Return role names from user_roles. Uses request-scoped cache when provided."""
    if cache is not None and "roles" in cache:
        return cache["roles"]
    try:
        result = supabase.table("user_roles")\
            .select("role")\
            .eq("user_id", user_id)\
            .execute()
        roles = sorted({r["role"] for r in rows(result)})
    except Exception as e:
        logger.error(f"Error getting user roles: {e}")
        roles = []
    if cache is not None:
        cache["roles"] = roles
    return roles


def is_admin(user_data: dict, supabase: Client, cache: Optional[Dict[str, Any]] = None) -> bool:
    """True when an admin row exists for the user"""
    return "admin" in get_user_roles(user_data["id"], supabase, cache)


def is_coach(user_data: dict, supabase: Client, cache: Optional[Dict[str, Any]] = None) -> bool:
    return "coach" in get_user_roles(user_data["id"], supabase, cache)


def is_staff(user_data: dict, supabase: Client, cache: Optional[Dict[str, Any]] = None) -> bool:
    """Coaches and admins are both staff; most views do not tell them apart."""
    roles = get_user_roles(user_data["id"], supabase, cache)
    return any(role in STAFF_ROLES for role in roles)


def get_user_permissions(user_id: str, supabase: Client, cache: Optional[Dict[str, Any]] = None) -> List[str]:
    """Get all permissions for a user through their app roles. Populates request-scoped cache when provided."""
    if cache is not None and "permission_names" in cache:
        return cache["permission_names"]
    names = permissions_for_roles(get_user_roles(user_id, supabase, cache))
    if cache is not None:
        cache["permission_names"] = names
    return names


def require_permission(required_permission: str):
    """Factory function to create permission check dependency"""
    def check_permission(
        request: Request,
        user_data: dict = Depends(get_current_user_id),
        supabase: Client = Depends(get_supabase)
    ) -> dict:
        """Dependency to check if user has required permission"""
        cache = _get_request_cache(request)
        user_permissions = get_user_permissions(user_data["id"], supabase, cache)
        if required_permission not in user_permissions:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Insufficient permissions. Required: {required_permission}"
            )
        return user_data
    return check_permission


def get_access_cache(request: Request) -> Dict[str, Any]:
    """Dependency that returns request-scoped access cache (populated by require_permission when used)."""
    return _get_request_cache(request)


def check_owner_or_staff(
    owner_id: Optional[str],
    user_data: dict,
    supabase: Client,
    cache: Optional[Dict[str, Any]] = None,
    detail: str = "You can only access your own records"
) -> dict:
    """Allow the row owner or any staff member"""
    if owner_id and owner_id == user_data["id"]:
        return user_data
    if is_staff(user_data, supabase, cache):
        return user_data
    raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


def check_owner(owner_id: Optional[str], user_data: dict, detail: str = "You can only modify your own records") -> dict:
    """Allow the row owner only; staff get no bypass"""
    if owner_id and owner_id == user_data["id"]:
        return user_data
    raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
