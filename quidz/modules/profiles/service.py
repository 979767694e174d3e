from supabase import Client
from quidz.modules.profiles.schemas import (
    ProfileUpdate, ProfileResponse, ProfileWithRolesResponse, RoleResponse
)
from quidz.config.permissions_config import STAFF_ROLES
from quidz.database.supabase_client import rows, first
from typing import Dict, List
from fastapi import HTTPException
from datetime import datetime
import logging

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_profile(self, user_id: str) -> ProfileResponse:
        """Get profile by ID"""
        try:
            result = self.supabase.table("profiles")\
                .select("*")\
                .eq("id", user_id)\
                .maybe_single()\
                .execute()
            profile = first(result)
            if not profile:
                raise HTTPException(status_code=404, detail="Profile not found")
            return ProfileResponse(**profile)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_profile(self, user_id: str, profile_data: ProfileUpdate) -> ProfileResponse:
        """Update own profile"""
        try:
            update_data = profile_data.model_dump(exclude_none=True)
            update_data["updated_at"] = datetime.utcnow().isoformat()

            result = self.supabase.table("profiles")\
                .update(update_data)\
                .eq("id", user_id)\
                .execute()
            updated = first(result)
            if not updated:
                raise HTTPException(status_code=404, detail="Profile not found")
            return ProfileResponse(**updated)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def profiles_by_id(self, user_ids: List[str]) -> Dict[str, Dict]:
        """id -> profile row for the given ids; unknown ids are simply missing"""
        ids = sorted({uid for uid in user_ids if uid})
        if not ids:
            return {}
        result = self.supabase.table("profiles")\
            .select("id, full_name, email, avatar_url")\
            .in_("id", ids)\
            .execute()
        return {p["id"]: p for p in rows(result)}

    def _roles_by_user(self) -> Dict[str, List[str]]:
        result = self.supabase.table("user_roles").select("user_id, role").execute()
        roles: Dict[str, List[str]] = {}
        for r in rows(result):
            roles.setdefault(r["user_id"], []).append(r["role"])
        return roles

    def list_profiles(self, participants_only: bool = False) -> List[ProfileWithRolesResponse]:
        """All profiles with roles, newest first. participants_only hides admin and coach profiles."""
        try:
            result = self.supabase.table("profiles")\
                .select("*")\
                .order("created_at", desc=True)\
                .execute()
            roles = self._roles_by_user()
            profiles = []
            for p in rows(result):
                user_roles = sorted(roles.get(p["id"], []))
                if participants_only and any(r in STAFF_ROLES for r in user_roles):
                    continue
                profiles.append(ProfileWithRolesResponse(**p, roles=user_roles))
            return profiles
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_participant_ids(self) -> List[str]:
        """Profile ids without a staff role; the audience of assign-to-all tasks"""
        return [p.id for p in self.list_profiles(participants_only=True)]

    def grant_role(self, user_id: str, role: str) -> RoleResponse:
        """Grant an app role; granting an existing role is a no-op"""
        try:
            self.get_profile(user_id)
            existing = self.supabase.table("user_roles")\
                .select("id")\
                .eq("user_id", user_id)\
                .eq("role", role)\
                .execute()
            if not rows(existing):
                self.supabase.table("user_roles").insert({"user_id": user_id, "role": role}).execute()
                logger.info(f"Granted role {role} to {user_id}")
            return RoleResponse(user_id=user_id, role=role)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def revoke_role(self, user_id: str, role: str) -> bool:
        try:
            result = self.supabase.table("user_roles")\
                .delete()\
                .eq("user_id", user_id)\
                .eq("role", role)\
                .execute()
            removed = len(rows(result)) > 0
            if removed:
                logger.info(f"Revoked role {role} from {user_id}")
            return removed
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
