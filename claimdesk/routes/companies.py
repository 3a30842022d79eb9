from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlmodel import Session

from claimdesk.db.session import get_session
from claimdesk.routes.deps import found, get_actor
from claimdesk.services.activity_log import ActionType, log_activity
from claimdesk.services.company_repository import CompanyRepository

router = APIRouter()

# --- Pydantic Models ---

class CompanyIn(BaseModel):
    name: str
    contact_person: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    portal_link: Optional[str] = None

class CompanyUpdate(BaseModel):
    name: Optional[str] = None
    contact_person: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    portal_link: Optional[str] = None

class DocumentIn(BaseModel):
    url: str
    name: Optional[str] = None

class CompanySettingsIn(BaseModel):
    name: Optional[str] = None
    address: Optional[str] = None
    gst_no: Optional[str] = None
    pan_no: Optional[str] = None
    contact_no: Optional[str] = None
    banking_details: Optional[str] = None
    account_name: Optional[str] = None
    bank_name: Optional[str] = None
    branch: Optional[str] = None
    account_no: Optional[str] = None
    ifsc_code: Optional[str] = None
    header_img: Optional[DocumentIn] = None
    footer_img: Optional[DocumentIn] = None

# --- Endpoints ---

@router.get("")
async def list_companies(page: int = 1, limit: int = 10, session: Session = Depends(get_session)):
    return CompanyRepository(session).list_companies(page, limit)

@router.get("/options")
async def company_options(session: Session = Depends(get_session)):
    return CompanyRepository(session).list_company_options()

@router.get("/{company_id}")
async def get_company(company_id: str, session: Session = Depends(get_session)):
    return found(CompanyRepository(session).get_company_by_id(company_id), "Company not found")

@router.post("", status_code=status.HTTP_201_CREATED)
async def create_company(
    payload: CompanyIn,
    session: Session = Depends(get_session),
    actor: dict = Depends(get_actor),
):
    company_id = CompanyRepository(session).create_company(payload.model_dump())
    log_activity(session, actor["uid"], actor["name"], ActionType.CREATE_COMPANY,
                 f"Created company {payload.name}", company_id, "company")
    return {"message": "Company added successfully.", "id": company_id}

@router.put("/{company_id}")
async def update_company(
    company_id: str,
    payload: CompanyUpdate,
    session: Session = Depends(get_session),
    actor: dict = Depends(get_actor),
):
    found(CompanyRepository(session).update_company(company_id, payload.model_dump()), "Company not found")
    log_activity(session, actor["uid"], actor["name"], ActionType.UPDATE_COMPANY,
                 f"Updated company {company_id}", company_id, "company")
    return {"message": "Company updated successfully."}

@router.delete("/{company_id}")
async def delete_company(
    company_id: str,
    session: Session = Depends(get_session),
    actor: dict = Depends(get_actor),
):
    found(CompanyRepository(session).delete_company(company_id), "Company not found")
    log_activity(session, actor["uid"], actor["name"], ActionType.DELETE_COMPANY,
                 f"Deleted company {company_id}", company_id, "company")
    return {"message": "Company deleted successfully."}

@router.get("/{company_id}/settings")
async def get_company_settings(company_id: str, session: Session = Depends(get_session)):
    return found(CompanyRepository(session).get_company_settings(company_id), "Company settings not found")

@router.put("/{company_id}/settings")
async def save_company_settings(
    company_id: str,
    payload: CompanySettingsIn,
    session: Session = Depends(get_session),
):
    repo = CompanyRepository(session)
    found(repo.get_company_by_id(company_id), "Company not found")
    return repo.save_company_settings(company_id, payload.model_dump(exclude_unset=True))
