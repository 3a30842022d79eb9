from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlmodel import Session

from claimdesk.db.session import get_session
from claimdesk.routes.deps import found, get_actor
from claimdesk.services.activity_log import ActionType, log_activity
from claimdesk.services.claim_repository import ClaimRepository

router = APIRouter()

# --- Pydantic Models ---

class ClaimIn(BaseModel):
    patient_id: int
    admission_id: Optional[str] = None
    hospital_id: Optional[str] = None
    tpa_id: Optional[int] = None
    patient_name: Optional[str] = None
    status: Optional[str] = None
    reason: Optional[str] = None
    claim_id: Optional[str] = None
    amount: Optional[float] = None
    paid_amount: Optional[float] = None
    final_bill: Optional[float] = None
    hospital_discount: Optional[float] = None
    nm_deductions: Optional[float] = None
    co_pay: Optional[float] = None
    final_amount: Optional[float] = None
    tds: Optional[float] = None
    final_settle_amount: Optional[float] = None
    utr_no: Optional[str] = None

class ClaimStatusUpdate(BaseModel):
    status: str
    reason: Optional[str] = None
    paid_amount: Optional[float] = None
    claim_id: Optional[str] = None
    final_amount: Optional[float] = None

class ClaimAmountsUpdate(BaseModel):
    amount: Optional[float] = None
    paid_amount: Optional[float] = None
    final_bill: Optional[float] = None
    hospital_discount: Optional[float] = None
    nm_deductions: Optional[float] = None
    co_pay: Optional[float] = None
    final_amount: Optional[float] = None
    tds: Optional[float] = None
    final_settle_amount: Optional[float] = None
    utr_no: Optional[str] = None

# --- Endpoints ---

@router.get("")
async def list_claims(
    hospital_id: Optional[str] = None,
    page: int = 1,
    limit: int = 10,
    session: Session = Depends(get_session),
):
    return ClaimRepository(session).list_claims(hospital_id, page, limit)

@router.get("/{claim_pk}")
async def get_claim(claim_pk: str, session: Session = Depends(get_session)):
    return found(ClaimRepository(session).get_claim_by_id(claim_pk), "Claim not found")

@router.post("", status_code=status.HTTP_201_CREATED)
async def create_claim(payload: ClaimIn, session: Session = Depends(get_session), actor: dict = Depends(get_actor)):
    data = payload.model_dump()
    data["created_by"] = actor["name"]
    claim_pk = ClaimRepository(session).create_claim(data)
    log_activity(session, actor["uid"], actor["name"], ActionType.CREATE_CLAIM,
                 f"Created claim for patient {payload.patient_id}", claim_pk, "claim")
    return {"message": "Claim added successfully.", "id": claim_pk}

@router.put("/{claim_pk}")
async def update_claim(
    claim_pk: str,
    payload: ClaimStatusUpdate,
    session: Session = Depends(get_session),
    actor: dict = Depends(get_actor),
):
    updated = ClaimRepository(session).update_claim(
        claim_pk,
        payload.status,
        reason=payload.reason,
        paid_amount=payload.paid_amount,
        claim_id=payload.claim_id,
        final_amount=payload.final_amount,
    )
    found(updated, "Claim not found")
    log_activity(session, actor["uid"], actor["name"], ActionType.UPDATE_CLAIM,
                 f"Claim {claim_pk} moved to {payload.status}", claim_pk, "claim")
    return {"message": "Claim updated successfully."}

@router.patch("/{claim_pk}/amounts")
async def update_claim_amounts(
    claim_pk: str,
    payload: ClaimAmountsUpdate,
    session: Session = Depends(get_session),
    actor: dict = Depends(get_actor),
):
    found(ClaimRepository(session).update_claim_details(claim_pk, payload.model_dump()), "Claim not found")
    log_activity(session, actor["uid"], actor["name"], ActionType.UPDATE_CLAIM,
                 f"Updated amounts on claim {claim_pk}", claim_pk, "claim")
    return {"message": "Claim updated successfully."}

@router.delete("/{claim_pk}")
async def delete_claim(claim_pk: str, session: Session = Depends(get_session), actor: dict = Depends(get_actor)):
    found(ClaimRepository(session).delete_claim(claim_pk), "Claim not found")
    log_activity(session, actor["uid"], actor["name"], ActionType.DELETE_CLAIM,
                 f"Deleted claim {claim_pk}", claim_pk, "claim")
    return {"message": "Claim deleted successfully."}
