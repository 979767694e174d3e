from supabase import Client
from quidz.modules.reports.schemas import (
    ReportCreate, ReportUpdate, ReportResponse, ReportListItem, ReportSnapshot
)
from quidz.modules.reports.snapshot import build_snapshot
from quidz.modules.progress.service import ProgressService
from quidz.modules.profiles.service import ProfileService
from quidz.database.supabase_client import rows, first
from typing import Any, Dict, List, Optional
from fastapi import HTTPException
from datetime import date, datetime
import logging

logger = logging.getLogger(__name__)


class ReportService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_report(self, report_id: str) -> ReportResponse:
        try:
            result = self.supabase.table("reports")\
                .select("*")\
                .eq("id", report_id)\
                .maybe_single()\
                .execute()
            report = first(result)
            if not report:
                raise HTTPException(status_code=404, detail="Report not found")
            return ReportResponse(**report)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_reports(self, status: Optional[str] = None, user_id: Optional[str] = None) -> List[ReportListItem]:
        """Most recently edited first, with participant names"""
        try:
            query = self.supabase.table("reports").select("*")
            if status:
                query = query.eq("status", status)
            if user_id:
                query = query.eq("user_id", user_id)
            found = rows(query.order("updated_at", desc=True).execute())
            profiles = ProfileService(self.supabase).profiles_by_id([r["user_id"] for r in found])
            reports = []
            for r in found:
                profile = profiles.get(r["user_id"], {})
                reports.append(ReportListItem(
                    **r, participant_name=profile.get("full_name"), participant_email=profile.get("email")
                ))
            return reports
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def compute_snapshot(self, user_id: str, period_start: date, period_end: date) -> Dict[str, Dict[str, Any]]:
        source = ProgressService(self.supabase).source_rows(user_id, period_start, period_end)
        return build_snapshot(
            source["tasks"], source["absences"], source["skills"], source["progress"], source["mood"],
            period_start, period_end,
        )

    def create_report(self, report_data: ReportCreate, coach_id: str) -> ReportResponse:
        """New draft with summaries computed for its period"""
        ProfileService(self.supabase).get_profile(report_data.user_id)
        try:
            now = datetime.utcnow().isoformat()
            row = report_data.model_dump(mode="json")
            row.update(self.compute_snapshot(report_data.user_id, report_data.period_start, report_data.period_end))
            row.update({"coach_id": coach_id, "status": "draft", "updated_at": now})
            result = self.supabase.table("reports").insert(row).execute()
            created = first(result)
            if not created:
                raise HTTPException(status_code=500, detail="Failed to create report")
            logger.info(f"Report {created['id']} created for {report_data.user_id}")
            return ReportResponse(**created)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def _require_draft(self, report_id: str) -> ReportResponse:
        report = self.get_report(report_id)
        if report.status == "final":
            raise HTTPException(status_code=409, detail="Report is final and can no longer be changed")
        return report

    def update_report(self, report_id: str, report_data: ReportUpdate) -> ReportResponse:
        """Save a draft; summaries are recomputed for the (possibly new) period in the same row update"""
        report = self._require_draft(report_id)
        update_data = report_data.model_dump(exclude_unset=True, mode="json")
        period_start = report_data.period_start or report.period_start
        period_end = report_data.period_end or report.period_end
        if period_end < period_start:
            raise HTTPException(status_code=400, detail="period_end must not be before period_start")
        return self._write(report_id, report.user_id, period_start, period_end, update_data)

    def finalize_report(self, report_id: str) -> ReportResponse:
        """Freeze the snapshot and move draft -> final. There is no way back."""
        report = self._require_draft(report_id)
        updated = self._write(report_id, report.user_id, report.period_start, report.period_end, {"status": "final"})
        logger.info(f"Report {report_id} finalized")
        return updated

    def _write(self, report_id: str, user_id: str, period_start: date, period_end: date, fields: Dict[str, Any]) -> ReportResponse:
        try:
            fields.update(self.compute_snapshot(user_id, period_start, period_end))
            fields["updated_at"] = datetime.utcnow().isoformat()
            result = self.supabase.table("reports")\
                .update(fields)\
                .eq("id", report_id)\
                .eq("status", "draft")\
                .execute()
            updated = first(result)
            if not updated:
                # finalized between the read and the write
                raise HTTPException(status_code=409, detail="Report is final and can no longer be changed")
            return ReportResponse(**updated)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Saving report {report_id} failed: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def preview(self, report_id: str) -> ReportSnapshot:
        """Fresh aggregation for the report's period; nothing is saved"""
        report = self.get_report(report_id)
        try:
            return ReportSnapshot(**self.compute_snapshot(report.user_id, report.period_start, report.period_end))
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def participant_name(self, user_id: str) -> Optional[str]:
        profile = ProfileService(self.supabase).profiles_by_id([user_id]).get(user_id, {})
        return profile.get("full_name") or profile.get("email")
