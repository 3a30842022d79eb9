import logging
from typing import Optional, Iterable

from sqlalchemy import delete, insert, update
from sqlmodel import Session, select

from claimdesk.core.errors import ValidationError
from claimdesk.core.utils import new_prefixed_id, decode_photo_url
from claimdesk.db.models import Hospital, HospitalCompany, HospitalTPA, HospitalStaff
from claimdesk.db.session import atomic
from claimdesk.services.common import build_update_values, check_email, require

logger = logging.getLogger(__name__)


class HospitalRepository:
    def __init__(self, session: Session):
        self.session = session

    def list_hospitals(self) -> list:
        rows = self.session.exec(
            select(Hospital).where(Hospital.archived == False).order_by(Hospital.name)  # noqa: E712
        ).all()
        return [self._to_dict(row) for row in rows]

    def get_hospital_by_id(self, hospital_id: str) -> Optional[dict]:
        hospital = self.session.get(Hospital, hospital_id)
        if not hospital:
            return None
        data = self._to_dict(hospital)
        data["assigned_companies"] = list(self.session.exec(
            select(HospitalCompany.company_id).where(HospitalCompany.hospital_id == hospital_id)
        ).all())
        data["assigned_tpas"] = list(self.session.exec(
            select(HospitalTPA.tpa_id).where(HospitalTPA.hospital_id == hospital_id)
        ).all())
        data["assigned_staff"] = list(self.session.exec(
            select(HospitalStaff.staff_id).where(HospitalStaff.hospital_id == hospital_id)
        ).all())
        return data

    def create_hospital(
        self,
        fields: dict,
        companies: Iterable[str] = (),
        tpas: Iterable[int] = (),
        staff: Iterable[str] = (),
    ) -> str:
        require(fields, "name")
        check_email(fields.get("email"))
        hospital_id = new_prefixed_id("hosp")

        with atomic(self.session):
            self.session.add(Hospital(id=hospital_id, **fields))
            # Parent row must exist before junction rows reference it
            self.session.flush()
            self._insert_assignments(hospital_id, companies, tpas, staff)

        logger.info(f"Created hospital {hospital_id} ({fields.get('name')})")
        return hospital_id

    def update_hospital(self, hospital_id: str, fields: dict) -> int:
        values = build_update_values(fields)
        if "name" in values and not str(values["name"]).strip():
            raise ValidationError("Hospital name cannot be empty")
        check_email(values.get("email"))
        result = self.session.exec(update(Hospital).where(Hospital.id == hospital_id).values(**values))
        self.session.commit()
        return result.rowcount

    def replace_assignments(
        self,
        hospital_id: str,
        companies: Iterable[str] = (),
        tpas: Iterable[int] = (),
        staff: Iterable[str] = (),
    ):
        with atomic(self.session):
            self.session.exec(delete(HospitalCompany).where(HospitalCompany.hospital_id == hospital_id))
            self.session.exec(delete(HospitalTPA).where(HospitalTPA.hospital_id == hospital_id))
            self.session.exec(delete(HospitalStaff).where(HospitalStaff.hospital_id == hospital_id))
            self._insert_assignments(hospital_id, companies, tpas, staff)

    def archive_hospital(self, hospital_id: str) -> int:
        result = self.session.exec(
            update(Hospital).where(Hospital.id == hospital_id).values(archived=True)
        )
        self.session.commit()
        return result.rowcount

    def list_hospital_options(self) -> list:
        rows = self.session.exec(
            select(Hospital.id, Hospital.name).where(Hospital.archived == False).order_by(Hospital.name)  # noqa: E712
        ).all()
        return [{"id": r.id, "name": r.name} for r in rows]

    def _insert_assignments(self, hospital_id, companies, tpas, staff):
        # Plain INSERTs keep junction rows out of the identity map, so a
        # delete-then-insert of the same pairs never collides
        tables = (
            (HospitalCompany, "company_id", companies),
            (HospitalTPA, "tpa_id", tpas),
            (HospitalStaff, "staff_id", staff),
        )
        for model, column, ids in tables:
            rows = [{"hospital_id": hospital_id, column: value} for value in dict.fromkeys(ids or ())]
            if rows:
                self.session.exec(insert(model).values(rows))

    @staticmethod
    def _to_dict(hospital: Hospital) -> dict:
        data = hospital.model_dump()
        data["photo_url"] = decode_photo_url(hospital.photo)
        return data
