from fastapi import APIRouter, Depends
from quidz.database.supabase_client import get_supabase
from quidz.modules.absences.schemas import (
    AbsenceCreate, AbsenceDecision, AbsenceResponse, AbsenceWithProfileResponse, AbsenceFilter
)
from quidz.modules.absences.service import AbsenceService
from quidz.core.dependencies import require_permission
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/absences", tags=["absences"])


def get_absence_service(supabase: Client = Depends(get_supabase)) -> AbsenceService:
    return AbsenceService(supabase)


@router.post("", response_model=AbsenceResponse, status_code=201)
async def report_absence(
    absence_data: AbsenceCreate,
    user_data: Dict = Depends(require_permission("absences:create")),
    service: AbsenceService = Depends(get_absence_service)
):
    """Report an absence (starts pending)"""
    return service.report_absence(user_data["id"], absence_data)


@router.get("/mine", response_model=List[AbsenceResponse])
async def list_my_absences(
    user_data: Dict = Depends(require_permission("absences:read")),
    service: AbsenceService = Depends(get_absence_service)
):
    return service.list_for_user(user_data["id"])


@router.get("", response_model=List[AbsenceWithProfileResponse])
async def list_absences(
    status: AbsenceFilter = "all",
    user_data: Dict = Depends(require_permission("absences:approve")),
    service: AbsenceService = Depends(get_absence_service)
):
    """All absences with participant names (staff)"""
    return service.list_absences(status)


@router.post("/{absence_id}/decision", response_model=AbsenceResponse)
async def decide_absence(
    absence_id: str,
    decision: AbsenceDecision,
    user_data: Dict = Depends(require_permission("absences:approve")),
    service: AbsenceService = Depends(get_absence_service)
):
    """Approve or reject a pending absence (staff)"""
    return service.decide(absence_id, decision.approved)
