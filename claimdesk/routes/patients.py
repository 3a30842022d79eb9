from datetime import date
from typing import Optional, Union

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlmodel import Session

from claimdesk.db.session import get_session
from claimdesk.routes.deps import found, get_actor
from claimdesk.services.activity_log import ActionType, log_activity
from claimdesk.services.claim_repository import ClaimRepository
from claimdesk.services.patient_repository import PatientRepository

router = APIRouter()

# --- Pydantic Models ---

class DocumentIn(BaseModel):
    url: str
    name: Optional[str] = None

Document = Optional[Union[DocumentIn, str]]

class PatientFields(BaseModel):
    email_address: Optional[str] = None
    phone_number: Optional[str] = None
    alternative_number: Optional[str] = None
    gender: Optional[str] = None
    age: Optional[int] = None
    birth_date: Optional[date] = None
    address: Optional[str] = None
    occupation: Optional[str] = None
    employee_id: Optional[str] = None
    abha_id: Optional[str] = None
    health_id: Optional[str] = None
    hospital_id: Optional[str] = None
    photo: Document = None
    adhaar_path: Document = None
    pan_path: Document = None
    passport_path: Document = None
    voter_id_path: Document = None
    driving_licence_path: Document = None
    other_path: Document = None

class PatientIn(PatientFields):
    first_name: str
    last_name: str

class PatientUpdate(PatientFields):
    first_name: Optional[str] = None
    last_name: Optional[str] = None

# --- Endpoints ---

@router.get("")
async def list_patients(
    hospital_id: Optional[str] = None,
    page: int = 1,
    limit: int = 10,
    session: Session = Depends(get_session),
):
    return PatientRepository(session).list_patients(hospital_id, page, limit)

@router.get("/for-preauth")
async def patients_for_preauth(hospital_id: Optional[str] = None, session: Session = Depends(get_session)):
    return PatientRepository(session).list_patients_for_preauth(hospital_id)

@router.get("/{patient_id}")
async def get_patient(patient_id: int, session: Session = Depends(get_session)):
    return found(PatientRepository(session).get_patient_by_id(patient_id), "Patient not found")

@router.get("/{patient_id}/claims")
async def patient_claims(patient_id: int, session: Session = Depends(get_session)):
    return ClaimRepository(session).list_claims_for_patient(patient_id)

@router.post("", status_code=status.HTTP_201_CREATED)
async def create_patient(payload: PatientIn, session: Session = Depends(get_session), actor: dict = Depends(get_actor)):
    patient_id = PatientRepository(session).create_patient(payload.model_dump())
    log_activity(session, actor["uid"], actor["name"], ActionType.CREATE_PATIENT,
                 f"Created patient {payload.first_name} {payload.last_name}", patient_id, "patient")
    return {"message": "Patient added successfully.", "id": patient_id}

@router.put("/{patient_id}")
async def update_patient(
    patient_id: int,
    payload: PatientUpdate,
    session: Session = Depends(get_session),
    actor: dict = Depends(get_actor),
):
    found(PatientRepository(session).update_patient(patient_id, payload.model_dump()), "Patient not found")
    log_activity(session, actor["uid"], actor["name"], ActionType.UPDATE_PATIENT,
                 f"Updated patient {patient_id}", patient_id, "patient")
    return {"message": "Patient updated successfully."}

@router.delete("/{patient_id}")
async def delete_patient(patient_id: int, session: Session = Depends(get_session), actor: dict = Depends(get_actor)):
    found(PatientRepository(session).delete_patient(patient_id), "Patient not found")
    log_activity(session, actor["uid"], actor["name"], ActionType.DELETE_PATIENT,
                 f"Deleted patient {patient_id}", patient_id, "patient")
    return {"message": "Patient deleted successfully."}
