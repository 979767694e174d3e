from supabase import Client
from quidz.modules.absences.schemas import (
    AbsenceCreate, AbsenceResponse, AbsenceWithProfileResponse
)
from quidz.modules.profiles.service import ProfileService
from quidz.database.supabase_client import rows, first
from typing import List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class AbsenceService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def report_absence(self, user_id: str, absence_data: AbsenceCreate) -> AbsenceResponse:
        """Participant reports an absence; it always starts pending"""
        try:
            result = self.supabase.table("absences").insert({
                "user_id": user_id,
                "date": absence_data.date.isoformat(),
                "reason": absence_data.reason,
                "comment": absence_data.comment,
                "approved": None,
            }).execute()
            created = first(result)
            if not created:
                raise HTTPException(status_code=500, detail="Failed to report absence")
            return AbsenceResponse(**created)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_for_user(self, user_id: str) -> List[AbsenceResponse]:
        try:
            result = self.supabase.table("absences")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("date", desc=True)\
                .execute()
            return [AbsenceResponse(**a) for a in rows(result)]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_absences(self, status: str = "all") -> List[AbsenceWithProfileResponse]:
        """Staff view with participant names, newest first"""
        try:
            query = self.supabase.table("absences").select("*")
            if status == "pending":
                query = query.is_("approved", "null")
            elif status == "approved":
                query = query.eq("approved", True)
            elif status == "rejected":
                query = query.eq("approved", False)
            result = query.order("date", desc=True).execute()

            found = rows(result)
            profiles = ProfileService(self.supabase).profiles_by_id([a["user_id"] for a in found])
            absences = []
            for a in found:
                profile = profiles.get(a["user_id"], {})
                absences.append(AbsenceWithProfileResponse(
                    **a, full_name=profile.get("full_name"), email=profile.get("email")
                ))
            return absences
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def decide(self, absence_id: str, approved: bool) -> AbsenceResponse:
        """Approve or reject a pending absence. Decided absences are final."""
        try:
            current = first(
                self.supabase.table("absences").select("*").eq("id", absence_id).maybe_single().execute()
            )
            if not current:
                raise HTTPException(status_code=404, detail="Absence not found")
            if current.get("approved") is not None:
                raise HTTPException(status_code=409, detail="Absence has already been decided")

            result = self.supabase.table("absences")\
                .update({"approved": approved})\
                .eq("id", absence_id)\
                .execute()
            updated = first(result)
            if not updated:
                raise HTTPException(status_code=404, detail="Absence not found")
            logger.info(f"Absence {absence_id} {'approved' if approved else 'rejected'}")
            return AbsenceResponse(**updated)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
