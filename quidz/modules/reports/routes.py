from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from quidz.database.supabase_client import get_supabase
from quidz.modules.reports.schemas import (
    ReportCreate, ReportUpdate, ReportResponse, ReportListItem, ReportSnapshot, ReportStatus
)
from quidz.modules.reports.service import ReportService
from quidz.modules.reports.pdf_export import build_report_pdf
from quidz.core.dependencies import require_permission
from supabase import Client
from typing import List, Dict, Optional
import io

router = APIRouter(prefix="/reports", tags=["reports"])


def get_report_service(supabase: Client = Depends(get_supabase)) -> ReportService:
    return ReportService(supabase)


@router.get("", response_model=List[ReportListItem])
async def list_reports(
    status: Optional[ReportStatus] = None,
    user_id: Optional[str] = None,
    user_data: Dict = Depends(require_permission("reports:read")),
    service: ReportService = Depends(get_report_service)
):
    return service.list_reports(status=status, user_id=user_id)


@router.post("", response_model=ReportResponse, status_code=201)
async def create_report(
    report_data: ReportCreate,
    user_data: Dict = Depends(require_permission("reports:create")),
    service: ReportService = Depends(get_report_service)
):
    """Create a draft report; summaries are computed for the chosen period"""
    return service.create_report(report_data, user_data["id"])


@router.get("/{report_id}", response_model=ReportResponse)
async def get_report(
    report_id: str,
    user_data: Dict = Depends(require_permission("reports:read")),
    service: ReportService = Depends(get_report_service)
):
    return service.get_report(report_id)


@router.put("/{report_id}", response_model=ReportResponse)
async def update_report(
    report_id: str,
    report_data: ReportUpdate,
    user_data: Dict = Depends(require_permission("reports:update")),
    service: ReportService = Depends(get_report_service)
):
    """Save a draft. Final reports answer 409."""
    return service.update_report(report_id, report_data)


@router.post("/{report_id}/finalize", response_model=ReportResponse)
async def finalize_report(
    report_id: str,
    user_data: Dict = Depends(require_permission("reports:finalize")),
    service: ReportService = Depends(get_report_service)
):
    return service.finalize_report(report_id)


@router.get("/{report_id}/preview", response_model=ReportSnapshot)
async def preview_report(
    report_id: str,
    user_data: Dict = Depends(require_permission("reports:read")),
    service: ReportService = Depends(get_report_service)
):
    """Summaries as they would be saved now"""
    return service.preview(report_id)


@router.get("/{report_id}/export.pdf")
async def export_report_pdf(
    report_id: str,
    user_data: Dict = Depends(require_permission("reports:read")),
    service: ReportService = Depends(get_report_service)
):
    report = service.get_report(report_id)
    pdf = build_report_pdf(report.model_dump(), service.participant_name(report.user_id))
    filename = f"report-{report.period_start.isoformat()}-{report.period_end.isoformat()}.pdf"
    return StreamingResponse(
        io.BytesIO(pdf),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )
