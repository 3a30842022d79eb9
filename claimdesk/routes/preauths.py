from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlmodel import Session

from claimdesk.db.session import get_session
from claimdesk.routes.deps import found, get_actor
from claimdesk.services.activity_log import ActionType, log_activity
from claimdesk.services.preauth_repository import PreAuthRepository
from claimdesk.services.status_workflow import PreAuthStatus

router = APIRouter()

class PreAuthIn(BaseModel):
    patient_id: int
    hospital_id: str
    admission_id: Optional[str] = None
    tpa_id: Optional[int] = None
    company_id: Optional[str] = None
    staff_id: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    policy_number: Optional[str] = None
    corporate_policy_number: Optional[str] = None
    treat_doc_name: Optional[str] = None
    room_category: Optional[str] = None
    admission_date: Optional[date] = None
    sum_insured: Optional[float] = None
    total_expected_cost: Optional[float] = None
    treatment_medical: Optional[str] = None
    treatment_surgical: Optional[str] = None
    treatment_intensive_care: Optional[str] = None
    treatment_investigation: Optional[str] = None
    treatment_non_allopathic: Optional[str] = None
    draft: bool = False

class StatusIn(BaseModel):
    status: str

@router.get("")
async def list_preauths(hospital_id: Optional[str] = None, session: Session = Depends(get_session)):
    return PreAuthRepository(session).list_preauths(hospital_id)

@router.get("/{preauth_id}")
async def get_preauth(preauth_id: int, session: Session = Depends(get_session)):
    return found(PreAuthRepository(session).get_preauth_by_id(preauth_id), "Pre-auth request not found")

@router.post("", status_code=status.HTTP_201_CREATED)
async def create_preauth(payload: PreAuthIn, session: Session = Depends(get_session), actor: dict = Depends(get_actor)):
    initial = PreAuthStatus.DRAFT if payload.draft else PreAuthStatus.PENDING
    preauth_id = PreAuthRepository(session).create_preauth(payload.model_dump(exclude={"draft"}), initial)
    log_activity(session, actor["uid"], actor["name"], ActionType.CREATE_PREAUTH,
                 f"Created pre-auth for patient {payload.patient_id}", preauth_id, "preauth")
    return {"message": "Pre-auth request saved.", "id": preauth_id}

@router.patch("/{preauth_id}/status")
async def update_preauth_status(
    preauth_id: int,
    payload: StatusIn,
    session: Session = Depends(get_session),
    actor: dict = Depends(get_actor),
):
    found(PreAuthRepository(session).update_preauth_status(preauth_id, payload.status), "Pre-auth request not found")
    log_activity(session, actor["uid"], actor["name"], ActionType.UPDATE_PREAUTH_STATUS,
                 f"Pre-auth {preauth_id} moved to {payload.status}", preauth_id, "preauth")
    return {"message": "Status updated successfully."}

@router.delete("/{preauth_id}")
async def delete_preauth(preauth_id: int, session: Session = Depends(get_session), actor: dict = Depends(get_actor)):
    found(PreAuthRepository(session).delete_preauth(preauth_id), "Pre-auth request not found")
    log_activity(session, actor["uid"], actor["name"], ActionType.DELETE_PREAUTH,
                 f"Deleted pre-auth {preauth_id}", preauth_id, "preauth")
    return {"message": "Pre-auth request deleted."}
