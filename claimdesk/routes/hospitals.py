from typing import List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlmodel import Session

from claimdesk.db.session import get_session
from claimdesk.routes.deps import found, get_actor
from claimdesk.services.activity_log import ActionType, log_activity
from claimdesk.services.hospital_repository import HospitalRepository

router = APIRouter()

HOSPITAL_COLUMNS = ("name", "location", "address", "contact_person", "email", "phone", "photo")

# --- Pydantic Models ---

class HospitalIn(BaseModel):
    name: str
    location: Optional[str] = None
    address: Optional[str] = None
    contact_person: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    photo: Optional[str] = None
    assigned_companies: List[str] = []
    assigned_tpas: List[int] = []
    assigned_staff: List[str] = []

class HospitalUpdate(BaseModel):
    name: Optional[str] = None
    location: Optional[str] = None
    address: Optional[str] = None
    contact_person: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    photo: Optional[str] = None

class AssignmentsIn(BaseModel):
    assigned_companies: List[str] = []
    assigned_tpas: List[int] = []
    assigned_staff: List[str] = []

# --- Endpoints ---

@router.get("")
async def list_hospitals(session: Session = Depends(get_session)):
    return HospitalRepository(session).list_hospitals()

@router.get("/options")
async def hospital_options(session: Session = Depends(get_session)):
    return HospitalRepository(session).list_hospital_options()

@router.get("/{hospital_id}")
async def get_hospital(hospital_id: str, session: Session = Depends(get_session)):
    return found(HospitalRepository(session).get_hospital_by_id(hospital_id), "Hospital not found")

@router.post("", status_code=status.HTTP_201_CREATED)
async def create_hospital(
    payload: HospitalIn,
    session: Session = Depends(get_session),
    actor: dict = Depends(get_actor),
):
    fields = payload.model_dump(include=set(HOSPITAL_COLUMNS))
    hospital_id = HospitalRepository(session).create_hospital(
        fields, payload.assigned_companies, payload.assigned_tpas, payload.assigned_staff
    )
    log_activity(session, actor["uid"], actor["name"], ActionType.CREATE_HOSPITAL,
                 f"Created hospital {payload.name}", hospital_id, "hospital")
    return {"message": "Hospital added successfully.", "id": hospital_id}

@router.put("/{hospital_id}")
async def update_hospital(
    hospital_id: str,
    payload: HospitalUpdate,
    session: Session = Depends(get_session),
    actor: dict = Depends(get_actor),
):
    found(HospitalRepository(session).update_hospital(hospital_id, payload.model_dump()), "Hospital not found")
    log_activity(session, actor["uid"], actor["name"], ActionType.UPDATE_HOSPITAL,
                 f"Updated hospital {hospital_id}", hospital_id, "hospital")
    return {"message": "Hospital updated successfully."}

@router.put("/{hospital_id}/assignments")
async def replace_assignments(
    hospital_id: str,
    payload: AssignmentsIn,
    session: Session = Depends(get_session),
    actor: dict = Depends(get_actor),
):
    repo = HospitalRepository(session)
    found(repo.get_hospital_by_id(hospital_id), "Hospital not found")
    repo.replace_assignments(hospital_id, payload.assigned_companies, payload.assigned_tpas, payload.assigned_staff)
    log_activity(session, actor["uid"], actor["name"], ActionType.UPDATE_HOSPITAL,
                 f"Updated assignments for hospital {hospital_id}", hospital_id, "hospital")
    return {"message": "Assignments updated successfully."}

@router.delete("/{hospital_id}")
async def archive_hospital(
    hospital_id: str,
    session: Session = Depends(get_session),
    actor: dict = Depends(get_actor),
):
    found(HospitalRepository(session).archive_hospital(hospital_id), "Hospital not found")
    log_activity(session, actor["uid"], actor["name"], ActionType.ARCHIVE_HOSPITAL,
                 f"Archived hospital {hospital_id}", hospital_id, "hospital")
    return {"message": "Hospital archived successfully."}
