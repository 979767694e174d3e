from fastapi import APIRouter, Depends
from quidz.database.supabase_client import get_supabase
from quidz.modules.progress.schemas import (
    ProgressSummary, AdminStats, ParticipantDetail, DashboardResponse
)
from quidz.modules.progress.service import ProgressService
from quidz.core.dependencies import (
    require_permission, get_current_user_id, get_access_cache, get_user_roles
)
from quidz.config.permissions_config import STAFF_ROLES
from supabase import Client
from typing import Dict, Optional
from datetime import date

router = APIRouter(prefix="/progress", tags=["progress"])
dashboard_router = APIRouter(tags=["dashboard"])


def get_progress_service(supabase: Client = Depends(get_supabase)) -> ProgressService:
    return ProgressService(supabase)


@dashboard_router.get("/dashboard", response_model=DashboardResponse)
async def dashboard(
    user_data: Dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache),
    service: ProgressService = Depends(get_progress_service)
):
    """Staff get the admin dashboard, everyone else the participant dashboard"""
    roles = get_user_roles(user_data["id"], supabase, cache)
    if any(role in STAFF_ROLES for role in roles):
        return DashboardResponse(view="admin", is_admin="admin" in roles, roles=roles, admin=service.admin_stats())
    return DashboardResponse(
        view="participant", is_admin=False, roles=roles, participant=service.participant_dashboard(user_data["id"])
    )


@router.get("/me", response_model=ProgressSummary)
async def my_progress(
    period_start: Optional[date] = None,
    period_end: Optional[date] = None,
    user_data: Dict = Depends(require_permission("progress:read_own")),
    service: ProgressService = Depends(get_progress_service)
):
    return service.summary(user_data["id"], period_start, period_end)


@router.get("/admin/stats", response_model=AdminStats)
async def admin_stats(
    user_data: Dict = Depends(require_permission("progress:read_all")),
    service: ProgressService = Depends(get_progress_service)
):
    return service.admin_stats()


@router.get("/{user_id}", response_model=ProgressSummary)
async def participant_progress(
    user_id: str,
    period_start: Optional[date] = None,
    period_end: Optional[date] = None,
    user_data: Dict = Depends(require_permission("progress:read_all")),
    service: ProgressService = Depends(get_progress_service)
):
    """Progress of any participant, optionally limited to an inclusive period (staff)"""
    return service.summary(user_id, period_start, period_end)


@router.get("/{user_id}/detail", response_model=ParticipantDetail)
async def participant_detail(
    user_id: str,
    user_data: Dict = Depends(require_permission("progress:read_all")),
    service: ProgressService = Depends(get_progress_service)
):
    return service.participant_detail(user_id)
