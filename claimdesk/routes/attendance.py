from typing import Dict, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlmodel import Session

from claimdesk.db.session import get_session
from claimdesk.routes.deps import get_actor
from claimdesk.services.activity_log import ActionType, log_activity
from claimdesk.services.attendance_service import AttendanceService

router = APIRouter()

class AttendanceIn(BaseModel):
    month: int
    year: int
    hospital_id: str
    # {staff_id: {day: present}}
    data: Dict[str, Dict[str, bool]] = {}

@router.get("")
async def get_attendance(month: int, year: int, hospital_id: str, session: Session = Depends(get_session)):
    return AttendanceService(session).get_attendance_for_month(month, year, hospital_id)

@router.post("")
async def save_attendance(payload: AttendanceIn, session: Session = Depends(get_session), actor: dict = Depends(get_actor)):
    saved = AttendanceService(session).save_attendance(payload.month, payload.year, payload.hospital_id, payload.data)
    log_activity(session, actor["uid"], actor["name"], ActionType.SAVE_ATTENDANCE,
                 f"Saved attendance for {payload.month}/{payload.year}", payload.hospital_id, "hospital")
    return {"message": "Attendance saved successfully.", "saved": saved}

@router.get("/staff")
async def staff_for_attendance(hospital_id: Optional[str] = None, session: Session = Depends(get_session)):
    return AttendanceService(session).list_staff_for_attendance(hospital_id)

@router.get("/salary")
async def salary_report(
    month: int,
    year: int,
    hospital_id: Optional[str] = None,
    session: Session = Depends(get_session),
):
    return AttendanceService(session).staff_salary_report(month, year, hospital_id)
