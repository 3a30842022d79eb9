import io
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from sqlmodel import Session

from claimdesk.core.errors import NotFoundError
from claimdesk.db.session import get_session
from claimdesk.services.report_service import ReportFilters, ReportService

router = APIRouter()

# URL slug -> ReportService method
REPORTS = {
    "patient-billed": "patient_billed_stats",
    "tpa-collection": "tpa_collection_stats",
    "hospital-business": "hospital_business_stats",
    "rejected-cases": "rejected_cases",
    "final-approval": "final_approval_details",
    "settled-status": "settled_status_details",
    "company-admin-dashboard": "company_admin_dashboard_stats",
    "simple-hospital": "simple_hospital_stats",
    "staff-performance": "staff_performance_stats",
    "pre-auth-summary": "pre_auth_summary",
}

@router.get("/hospital-staff-dashboard")
async def hospital_staff_dashboard(hospital_id: Optional[str] = None, session: Session = Depends(get_session)):
    return ReportService(session).hospital_staff_dashboard(hospital_id)

@router.get("/{name}")
async def run_report(name: str, filters: ReportFilters = Depends(), session: Session = Depends(get_session)):
    method = REPORTS.get(name)
    if not method:
        raise NotFoundError(f"Unknown report: {name}")
    return getattr(ReportService(session), method)(filters)

@router.get("/{name}/export")
async def export_report(name: str, filters: ReportFilters = Depends(), session: Session = Depends(get_session)):
    content = ReportService(session).export_report(name, filters)
    return StreamingResponse(
        io.BytesIO(content.encode()),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={name}.csv"},
    )
