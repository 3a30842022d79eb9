import logging
from typing import Optional

from sqlalchemy import delete, update
from sqlmodel import Session, select

from claimdesk.core.errors import ValidationError
from claimdesk.db.models import TPA, Hospital, HospitalTPA
from claimdesk.services.common import build_update_values, check_contact_fields, check_email, check_url

logger = logging.getLogger(__name__)


class TPARepository:
    def __init__(self, session: Session):
        self.session = session

    def list_tpas(self) -> list:
        return [row.model_dump() for row in self.session.exec(select(TPA).order_by(TPA.name)).all()]

    def list_tpa_options(self) -> list:
        rows = self.session.exec(select(TPA.id, TPA.name).order_by(TPA.name)).all()
        return [{"id": r.id, "name": r.name} for r in rows]

    def get_tpa_by_id(self, tpa_id: int) -> Optional[dict]:
        tpa = self.session.get(TPA, tpa_id)
        if not tpa:
            return None
        hospitals = self.session.exec(
            select(Hospital.id, Hospital.name)
            .join(HospitalTPA, HospitalTPA.hospital_id == Hospital.id)
            .where(HospitalTPA.tpa_id == tpa_id)
            .order_by(Hospital.name)
        ).all()
        data = tpa.model_dump()
        data["assigned_hospitals"] = [{"id": h.id, "name": h.name} for h in hospitals]
        return data

    def create_tpa(self, fields: dict) -> int:
        check_contact_fields(fields)
        tpa = TPA(**fields)
        self.session.add(tpa)
        self.session.commit()
        self.session.refresh(tpa)
        logger.info(f"Created TPA {tpa.id} ({tpa.name})")
        return tpa.id

    def update_tpa(self, tpa_id: int, fields: dict) -> int:
        values = build_update_values(fields)
        if "name" in values and not str(values["name"]).strip():
            raise ValidationError("TPA name cannot be empty")
        check_email(values.get("email"))
        check_url(values.get("portal_link"), "portal link")
        result = self.session.exec(update(TPA).where(TPA.id == tpa_id).values(**values))
        self.session.commit()
        return result.rowcount

    def delete_tpa(self, tpa_id: int) -> int:
        """0 means no such TPA; callers decide whether that is a 404."""
        result = self.session.exec(delete(TPA).where(TPA.id == tpa_id))
        self.session.commit()
        return result.rowcount
