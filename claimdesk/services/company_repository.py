import logging
from typing import Optional

from sqlalchemy import delete, update
from sqlmodel import Session, select

from claimdesk.core.errors import ValidationError
from claimdesk.core.utils import new_prefixed_id, decode_document, encode_document
from claimdesk.db.models import Company, CompanySettings, Hospital, HospitalCompany
from claimdesk.services.common import (
    build_update_values, check_contact_fields, check_email, check_url, count_rows, page_result, paginate,
)

logger = logging.getLogger(__name__)

SETTINGS_FIELDS = (
    "name", "address", "gst_no", "pan_no", "contact_no", "banking_details",
    "account_name", "bank_name", "branch", "account_no", "ifsc_code",
)


class CompanyRepository:
    def __init__(self, session: Session):
        self.session = session

    def list_companies(self, page: int = 1, limit: int = 10) -> dict:
        page, limit, offset = paginate(page, limit)
        statement = select(Company)
        total = count_rows(self.session, statement)
        rows = self.session.exec(statement.order_by(Company.name).offset(offset).limit(limit)).all()
        return page_result([row.model_dump() for row in rows], total)

    def get_company_by_id(self, company_id: str) -> Optional[dict]:
        company = self.session.get(Company, company_id)
        if not company:
            return None
        hospitals = self.session.exec(
            select(Hospital.id, Hospital.name)
            .join(HospitalCompany, HospitalCompany.hospital_id == Hospital.id)
            .where(HospitalCompany.company_id == company_id)
            .order_by(Hospital.name)
        ).all()
        data = company.model_dump()
        data["assigned_hospitals"] = [{"id": h.id, "name": h.name} for h in hospitals]
        return data

    def create_company(self, fields: dict) -> str:
        check_contact_fields(fields)
        company = Company(id=new_prefixed_id("comp"), **fields)
        self.session.add(company)
        self.session.commit()
        logger.info(f"Created company {company.id} ({company.name})")
        return company.id

    def update_company(self, company_id: str, fields: dict) -> int:
        values = build_update_values(fields)
        if "name" in values and not str(values["name"]).strip():
            raise ValidationError("Company name cannot be empty")
        check_email(values.get("email"))
        check_url(values.get("portal_link"), "portal link")
        result = self.session.exec(update(Company).where(Company.id == company_id).values(**values))
        self.session.commit()
        return result.rowcount

    def delete_company(self, company_id: str) -> int:
        result = self.session.exec(delete(Company).where(Company.id == company_id))
        self.session.commit()
        return result.rowcount

    def list_company_options(self) -> list:
        rows = self.session.exec(select(Company.id, Company.name).order_by(Company.name)).all()
        return [{"id": r.id, "name": r.name} for r in rows]

    # --- Invoice letterhead / banking settings ---

    def get_company_settings(self, company_id: str) -> Optional[dict]:
        row = self.session.exec(select(CompanySettings).where(CompanySettings.company_id == company_id)).first()
        if not row:
            return None
        data = row.model_dump()
        data["header_img"] = decode_document(row.header_img)
        data["footer_img"] = decode_document(row.footer_img)
        return data

    def save_company_settings(self, company_id: str, fields: dict) -> dict:
        row = self.session.exec(select(CompanySettings).where(CompanySettings.company_id == company_id)).first()
        if not row:
            row = CompanySettings(company_id=company_id)

        for key in SETTINGS_FIELDS:
            if key in fields:
                setattr(row, key, fields[key])
        for key in ("header_img", "footer_img"):
            image = fields.get(key)
            if isinstance(image, dict):
                setattr(row, key, encode_document(image.get("url"), image.get("name")))
            elif image:
                setattr(row, key, image)

        self.session.add(row)
        self.session.commit()
        return self.get_company_settings(company_id)
