from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlmodel import Session

from claimdesk.db.session import get_session
from claimdesk.routes.deps import found, get_actor
from claimdesk.services.activity_log import ActionType, log_activity
from claimdesk.services.tpa_repository import TPARepository

router = APIRouter()

class TPAIn(BaseModel):
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    portal_link: Optional[str] = None

class TPAUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    portal_link: Optional[str] = None

@router.get("")
async def list_tpas(session: Session = Depends(get_session)):
    return TPARepository(session).list_tpas()

@router.get("/options")
async def tpa_options(session: Session = Depends(get_session)):
    return TPARepository(session).list_tpa_options()

@router.get("/{tpa_id}")
async def get_tpa(tpa_id: int, session: Session = Depends(get_session)):
    return found(TPARepository(session).get_tpa_by_id(tpa_id), "TPA not found")

@router.post("", status_code=status.HTTP_201_CREATED)
async def create_tpa(payload: TPAIn, session: Session = Depends(get_session), actor: dict = Depends(get_actor)):
    tpa_id = TPARepository(session).create_tpa(payload.model_dump())
    log_activity(session, actor["uid"], actor["name"], ActionType.CREATE_TPA,
                 f"Created TPA {payload.name}", tpa_id, "tpa")
    return {"message": "TPA added successfully.", "id": tpa_id}

@router.put("/{tpa_id}")
async def update_tpa(
    tpa_id: int,
    payload: TPAUpdate,
    session: Session = Depends(get_session),
    actor: dict = Depends(get_actor),
):
    found(TPARepository(session).update_tpa(tpa_id, payload.model_dump()), "TPA not found")
    log_activity(session, actor["uid"], actor["name"], ActionType.UPDATE_TPA,
                 f"Updated TPA {tpa_id}", tpa_id, "tpa")
    return {"message": "TPA updated successfully."}

@router.delete("/{tpa_id}")
async def delete_tpa(tpa_id: int, session: Session = Depends(get_session), actor: dict = Depends(get_actor)):
    found(TPARepository(session).delete_tpa(tpa_id), "TPA not found")
    log_activity(session, actor["uid"], actor["name"], ActionType.DELETE_TPA,
                 f"Deleted TPA {tpa_id}", tpa_id, "tpa")
    return {"message": "TPA deleted successfully."}
