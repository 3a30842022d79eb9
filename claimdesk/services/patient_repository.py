import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import delete, update
from sqlmodel import Session, select

from claimdesk.core.utils import decode_document, decode_photo_url, encode_document, full_name
from claimdesk.db.models import Admission, Company, Patient
from claimdesk.services.common import build_update_values, check_email, count_rows, page_result, paginate, require

logger = logging.getLogger(__name__)

DOCUMENT_FIELDS = (
    "photo", "adhaar_path", "pan_path", "passport_path",
    "voter_id_path", "driving_licence_path", "other_path",
)


def _encode_documents(fields: dict) -> dict:
    data = dict(fields)
    for key in DOCUMENT_FIELDS:
        value = data.get(key)
        if isinstance(value, dict):
            data[key] = encode_document(value.get("url"), value.get("name"))
    return data


def _latest_admission(column):
    """Correlated lookup of a column on the patient's most recent admission."""
    return (
        select(column)
        .where(Admission.patient_id == Patient.id)
        .order_by(Admission.created_at.desc(), Admission.id.desc())
        .limit(1)
        .correlate(Patient)
        .scalar_subquery()
    )


class PatientRepository:
    def __init__(self, session: Session):
        self.session = session

    def list_patients(self, hospital_id: Optional[str] = None, page: int = 1, limit: int = 10) -> dict:
        page, limit, offset = paginate(page, limit)

        base = select(Patient)
        if hospital_id:
            base = base.where(Patient.hospital_id == hospital_id)
        total = count_rows(self.session, base)

        insurer = (
            select(Company.name)
            .join(Admission, Admission.insurance_company == Company.id)
            .where(Admission.patient_id == Patient.id)
            .order_by(Admission.created_at.desc(), Admission.id.desc())
            .limit(1)
            .correlate(Patient)
            .scalar_subquery()
        )
        statement = select(
            Patient,
            _latest_admission(Admission.policy_number).label("policy_number"),
            insurer.label("insurance_company"),
        )
        if hospital_id:
            statement = statement.where(Patient.hospital_id == hospital_id)
        statement = statement.order_by(Patient.created_at.desc(), Patient.id.desc()).offset(offset).limit(limit)

        items = []
        for patient, policy_number, insurance_company in self.session.exec(statement).all():
            items.append({
                "id": patient.id,
                "full_name": full_name(patient.first_name, patient.last_name),
                "email_address": patient.email_address,
                "phone_number": patient.phone_number,
                "hospital_id": patient.hospital_id,
                "photo_url": decode_photo_url(patient.photo),
                "policy_number": policy_number,
                "insurance_company": insurance_company,
                "created_at": patient.created_at,
            })
        return page_result(items, total)

    def get_patient_by_id(self, patient_id: int) -> Optional[dict]:
        patient = self.session.get(Patient, patient_id)
        if not patient:
            return None
        data = patient.model_dump()
        data["full_name"] = full_name(patient.first_name, patient.last_name)
        for key in DOCUMENT_FIELDS:
            data[key] = decode_document(getattr(patient, key))
        data["photo_url"] = data["photo"]["url"] if data["photo"] else None
        return data

    def create_patient(self, fields: dict) -> int:
        require(fields, "first_name", "last_name")
        check_email(fields.get("email_address"))
        patient = Patient(**_encode_documents(fields))
        self.session.add(patient)
        self.session.commit()
        self.session.refresh(patient)
        logger.info(f"Created patient {patient.id}")
        return patient.id

    def update_patient(self, patient_id: int, fields: dict) -> int:
        values = build_update_values(_encode_documents(fields), drop_empty_strings=True)
        check_email(values.get("email_address"))
        values["updated_at"] = datetime.utcnow()
        result = self.session.exec(update(Patient).where(Patient.id == patient_id).values(**values))
        self.session.commit()
        return result.rowcount

    def delete_patient(self, patient_id: int) -> int:
        result = self.session.exec(delete(Patient).where(Patient.id == patient_id))
        self.session.commit()
        return result.rowcount

    def list_patients_for_preauth(self, hospital_id: Optional[str]) -> list:
        """Patients currently admitted (Active admission) at the hospital."""
        if not hospital_id:
            return []
        rows = self.session.exec(
            select(Patient.id, Patient.first_name, Patient.last_name, Admission.admission_id)
            .join(Admission, Admission.patient_id == Patient.id)
            .where(Admission.hospital_id == hospital_id, Admission.status == "Active")
            .order_by(Patient.first_name, Patient.last_name)
        ).all()
        return [
            {"id": r.id, "full_name": full_name(r.first_name, r.last_name), "admission_id": r.admission_id}
            for r in rows
        ]
