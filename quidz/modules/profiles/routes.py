from fastapi import APIRouter, Depends, HTTPException, UploadFile, File
from quidz.database.supabase_client import get_supabase
from quidz.modules.profiles.schemas import (
    ProfileUpdate, ProfileResponse, ProfileWithRolesResponse, RoleGrant, RoleResponse
)
from quidz.modules.profiles.service import ProfileService
from quidz.core.dependencies import (
    require_permission, get_access_cache, is_admin, check_owner_or_staff
)
from quidz.core.storage import FileStorage, AVATARS
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/profiles", tags=["profiles"])


def get_profile_service(supabase: Client = Depends(get_supabase)) -> ProfileService:
    return ProfileService(supabase)


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    user_data: Dict = Depends(require_permission("profiles:read")),
    service: ProfileService = Depends(get_profile_service)
):
    return service.get_profile(user_data["id"])


@router.put("/me", response_model=ProfileResponse)
async def update_my_profile(
    profile_data: ProfileUpdate,
    user_data: Dict = Depends(require_permission("profiles:update")),
    service: ProfileService = Depends(get_profile_service)
):
    return service.update_profile(user_data["id"], profile_data)


@router.post("/me/avatar", response_model=ProfileResponse)
async def upload_avatar(
    file: UploadFile = File(...),
    user_data: Dict = Depends(require_permission("profiles:update")),
    service: ProfileService = Depends(get_profile_service),
    supabase: Client = Depends(get_supabase)
):
    """Upload an avatar image and store its public URL on the profile"""
    avatar_url = await FileStorage(supabase).upload(AVATARS, user_data["id"], file, image_only=True)
    return service.update_profile(user_data["id"], ProfileUpdate(avatar_url=avatar_url))


@router.get("", response_model=List[ProfileWithRolesResponse])
async def list_profiles(
    user_data: Dict = Depends(require_permission("profiles:list")),
    service: ProfileService = Depends(get_profile_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """User list for staff. Admins see everyone; coaches see only profiles without a staff role."""
    participants_only = not is_admin(user_data, supabase, cache)
    return service.list_profiles(participants_only=participants_only)


@router.get("/{user_id}", response_model=ProfileResponse)
async def get_profile(
    user_id: str,
    user_data: Dict = Depends(require_permission("profiles:read")),
    service: ProfileService = Depends(get_profile_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Get a profile (self or staff)"""
    check_owner_or_staff(user_id, user_data, supabase, cache, detail="Profile not accessible")
    return service.get_profile(user_id)


@router.post("/{user_id}/roles", response_model=RoleResponse, status_code=201)
async def grant_role(
    user_id: str,
    grant: RoleGrant,
    user_data: Dict = Depends(require_permission("profiles:manage_roles")),
    service: ProfileService = Depends(get_profile_service)
):
    """Grant admin or coach role (admins only)"""
    return service.grant_role(user_id, grant.role)


@router.delete("/{user_id}/roles/{role}", status_code=204)
async def revoke_role(
    user_id: str,
    role: str,
    user_data: Dict = Depends(require_permission("profiles:manage_roles")),
    service: ProfileService = Depends(get_profile_service)
):
    """Revoke admin or coach role (admins only). Admins cannot revoke their own admin role."""
    if user_id == user_data["id"] and role == "admin":
        raise HTTPException(status_code=400, detail="You cannot remove your own admin role")
    if not service.revoke_role(user_id, role):
        raise HTTPException(status_code=404, detail="Role assignment not found")
    return None
