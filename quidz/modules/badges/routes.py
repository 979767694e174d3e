from fastapi import APIRouter, Depends, HTTPException
from quidz.database.supabase_client import get_supabase
from quidz.modules.badges.schemas import BadgeAward, BadgeResponse
from quidz.modules.badges.service import BadgeService
from quidz.core.dependencies import require_permission, get_access_cache, check_owner_or_staff
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/badges", tags=["badges"])


def get_badge_service(supabase: Client = Depends(get_supabase)) -> BadgeService:
    return BadgeService(supabase)


@router.get("/mine", response_model=List[BadgeResponse])
async def list_my_badges(
    user_data: Dict = Depends(require_permission("badges:read")),
    service: BadgeService = Depends(get_badge_service)
):
    return service.list_for_user(user_data["id"])


@router.get("/{user_id}", response_model=List[BadgeResponse])
async def list_user_badges(
    user_id: str,
    user_data: Dict = Depends(require_permission("badges:read")),
    service: BadgeService = Depends(get_badge_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    check_owner_or_staff(user_id, user_data, supabase, cache)
    return service.list_for_user(user_id)


@router.post("", response_model=BadgeResponse, status_code=201)
async def award_badge(
    award: BadgeAward,
    user_data: Dict = Depends(require_permission("badges:award")),
    service: BadgeService = Depends(get_badge_service)
):
    """Manually award a badge (staff). Awarding a held badge returns the existing one."""
    try:
        badge = service.award(award.user_id, award.badge_type)
        if badge is None:
            badge = next(b for b in service.list_for_user(award.user_id) if b.badge_type == award.badge_type)
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    return badge
