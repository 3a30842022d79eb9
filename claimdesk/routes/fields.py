from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlmodel import Session

from claimdesk.db.session import get_session
from claimdesk.routes.deps import found, get_actor
from claimdesk.services.activity_log import ActionType, log_activity
from claimdesk.services.field_repository import FieldRepository

router = APIRouter()

class FieldIn(BaseModel):
    name: str
    type: str
    required: bool = False
    company_id: str

@router.get("")
async def list_fields(company_id: str, session: Session = Depends(get_session)):
    return FieldRepository(session).list_fields(company_id)

@router.post("", status_code=status.HTTP_201_CREATED)
async def create_field(payload: FieldIn, session: Session = Depends(get_session), actor: dict = Depends(get_actor)):
    field_id = FieldRepository(session).create_field(payload.model_dump())
    log_activity(session, actor["uid"], actor["name"], ActionType.CREATE_FIELD,
                 f"Added field {payload.name} for company {payload.company_id}", field_id, "field")
    return {"message": "Field added successfully.", "id": field_id}

@router.delete("/{field_id}")
async def delete_field(field_id: int, session: Session = Depends(get_session), actor: dict = Depends(get_actor)):
    found(FieldRepository(session).delete_field(field_id), "Field not found")
    log_activity(session, actor["uid"], actor["name"], ActionType.DELETE_FIELD,
                 f"Deleted field {field_id}", field_id, "field")
    return {"message": "Field deleted successfully."}
