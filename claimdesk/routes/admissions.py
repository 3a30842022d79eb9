from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlmodel import Session

from claimdesk.db.session import get_session
from claimdesk.routes.deps import found
from claimdesk.services.admission_repository import AdmissionRepository

router = APIRouter()

class AdmissionIn(BaseModel):
    patient_id: int
    admission_id: str
    hospital_id: Optional[str] = None
    tpa_id: Optional[int] = None
    insurance_company: Optional[str] = None
    policy_number: Optional[str] = None
    status: str = "Active"
    admission_date: Optional[date] = None

@router.post("", status_code=status.HTTP_201_CREATED)
async def create_admission(payload: AdmissionIn, session: Session = Depends(get_session)):
    return AdmissionRepository(session).create_admission(payload.model_dump())

@router.get("/{admission_id}")
async def get_admission(admission_id: str, session: Session = Depends(get_session)):
    return found(AdmissionRepository(session).get_admission_by_admission_id(admission_id), "Admission not found")
