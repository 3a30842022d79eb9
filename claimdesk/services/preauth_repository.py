import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import delete, update
from sqlmodel import Session, select

from claimdesk.core.errors import ValidationError
from claimdesk.db.models import Company, Hospital, PreAuthRequest, TPA
from claimdesk.services.common import require
from claimdesk.services.status_workflow import PreAuthStatus, parse_preauth_status

logger = logging.getLogger(__name__)


class PreAuthRepository:
    def __init__(self, session: Session):
        self.session = session

    def list_preauths(self, hospital_id: Optional[str]) -> list:
        if not hospital_id:
            return []
        rows = self.session.exec(
            select(PreAuthRequest, TPA.name, Company.name)
            .join(TPA, TPA.id == PreAuthRequest.tpa_id, isouter=True)
            .join(Company, Company.id == PreAuthRequest.company_id, isouter=True)
            .where(PreAuthRequest.hospital_id == hospital_id)
            .order_by(PreAuthRequest.created_at.desc(), PreAuthRequest.id.desc())
        ).all()
        items = []
        for preauth, tpa_name, company_name in rows:
            data = preauth.model_dump()
            data["tpa_name"] = tpa_name
            data["company_name"] = company_name
            items.append(data)
        return items

    def get_preauth_by_id(self, preauth_id: int) -> Optional[dict]:
        row = self.session.exec(
            select(PreAuthRequest, Company.name, Hospital.name)
            .join(Company, Company.id == PreAuthRequest.company_id, isouter=True)
            .join(Hospital, Hospital.id == PreAuthRequest.hospital_id, isouter=True)
            .where(PreAuthRequest.id == preauth_id)
        ).first()
        if not row:
            return None
        preauth, company_name, hospital_name = row
        data = preauth.model_dump()
        data["company_name"] = company_name
        data["hospital_name"] = hospital_name
        return data

    def create_preauth(self, fields: dict, status=PreAuthStatus.PENDING) -> int:
        require(fields, "patient_id", "hospital_id")
        status = parse_preauth_status(status)
        if status not in (PreAuthStatus.PENDING, PreAuthStatus.DRAFT):
            raise ValidationError("New pre-auth requests start as Pending or Draft")
        preauth = PreAuthRequest(**fields, status=status.value)
        self.session.add(preauth)
        self.session.commit()
        self.session.refresh(preauth)
        logger.info(f"Created pre-auth {preauth.id} for patient {preauth.patient_id}")
        return preauth.id

    def update_preauth_status(self, preauth_id: int, status) -> int:
        status = parse_preauth_status(status)
        result = self.session.exec(
            update(PreAuthRequest)
            .where(PreAuthRequest.id == preauth_id)
            .values(status=status.value, updated_at=datetime.utcnow())
        )
        self.session.commit()
        return result.rowcount

    def delete_preauth(self, preauth_id: int) -> int:
        result = self.session.exec(delete(PreAuthRequest).where(PreAuthRequest.id == preauth_id))
        self.session.commit()
        return result.rowcount
