import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import delete, func, update
from sqlalchemy.orm import aliased
from sqlmodel import Session, select

from claimdesk.core.errors import ValidationError
from claimdesk.core.utils import full_name
from claimdesk.db.models import Admission, Claim, Company, Hospital, Patient, PreAuthRequest, TPA
from claimdesk.db.session import atomic
from claimdesk.services.common import build_update_values, count_rows, page_result, paginate
from claimdesk.services.status_workflow import ClaimStatus, parse_claim_status, parse_new_claim_status

logger = logging.getLogger(__name__)

# Monetary breakdown columns editable after creation
AMOUNT_FIELDS = (
    "amount", "paid_amount", "final_bill", "hospital_discount", "nm_deductions",
    "co_pay", "final_amount", "tds", "final_settle_amount", "utr_no",
)


def _parse_claim_pk(value) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid claim id: {value}")


class ClaimRepository:
    def __init__(self, session: Session):
        self.session = session

    def list_claims(self, hospital_id: Optional[str] = None, page: int = 1, limit: int = 10) -> dict:
        """Most recently updated claim per patient, newest first."""
        page, limit, offset = paginate(page, limit)

        ranked = select(
            Claim.id,
            func.row_number().over(
                partition_by=Claim.patient_id,
                order_by=(Claim.updated_at.desc(), Claim.id.desc()),
            ).label("rn"),
        )
        if hospital_id:
            ranked = ranked.where(Claim.hospital_id == hospital_id)
        ranked = ranked.subquery()

        base = select(Claim).join(ranked, ranked.c.id == Claim.id).where(ranked.c.rn == 1)
        total = count_rows(self.session, base)

        statement = (
            select(Claim, Hospital.name, TPA.name)
            .join(ranked, ranked.c.id == Claim.id)
            .join(Hospital, Hospital.id == Claim.hospital_id, isouter=True)
            .join(TPA, TPA.id == Claim.tpa_id, isouter=True)
            .where(ranked.c.rn == 1)
            .order_by(Claim.updated_at.desc(), Claim.id.desc())
            .offset(offset)
            .limit(limit)
        )
        items = []
        for claim, hospital_name, tpa_name in self.session.exec(statement).all():
            data = claim.model_dump()
            data["hospital_name"] = hospital_name
            data["tpa_name"] = tpa_name
            items.append(data)
        return page_result(items, total)

    def get_claim_by_id(self, claim_pk) -> Optional[dict]:
        claim_pk = _parse_claim_pk(claim_pk)
        preauth_company = aliased(Company)
        admission_company = aliased(Company)
        row = self.session.exec(
            select(
                Claim,
                Hospital.name,
                Patient.first_name,
                Patient.last_name,
                PreAuthRequest.id,
                PreAuthRequest.total_expected_cost,
                TPA.name,
                func.coalesce(preauth_company.name, admission_company.name),
            )
            .join(Hospital, Hospital.id == Claim.hospital_id, isouter=True)
            .join(Patient, Patient.id == Claim.patient_id, isouter=True)
            .join(PreAuthRequest, PreAuthRequest.admission_id == Claim.admission_id, isouter=True)
            .join(Admission, Admission.admission_id == Claim.admission_id, isouter=True)
            .join(TPA, TPA.id == Claim.tpa_id, isouter=True)
            .join(preauth_company, preauth_company.id == PreAuthRequest.company_id, isouter=True)
            .join(admission_company, admission_company.id == Admission.insurance_company, isouter=True)
            .where(Claim.id == claim_pk)
        ).first()
        if not row:
            return None

        claim, hospital_name, first_name, last_name, preauth_id, billed, tpa_name, company_name = row
        data = claim.model_dump()
        data.update(
            hospital_name=hospital_name,
            patient_full_name=full_name(first_name, last_name) or claim.patient_name,
            preauth_id=preauth_id,
            billed_amount=billed,
            tpa_name=tpa_name,
            company_name=company_name,
        )
        return data

    def list_claims_for_patient(self, patient_id: int) -> list:
        rows = self.session.exec(
            select(Claim).where(Claim.patient_id == patient_id).order_by(Claim.created_at.desc(), Claim.id.desc())
        ).all()
        return [row.model_dump() for row in rows]

    def create_claim(self, fields: dict) -> int:
        data = dict(fields)
        data["status"] = parse_new_claim_status(data.get("status") or ClaimStatus.PENDING)
        if data.get("patient_id") and not data.get("patient_name"):
            patient = self.session.get(Patient, data["patient_id"])
            if patient:
                data["patient_name"] = full_name(patient.first_name, patient.last_name)

        claim = Claim(**data)
        self.session.add(claim)
        self.session.commit()
        self.session.refresh(claim)
        logger.info(f"Created claim {claim.id} ({claim.status})")
        return claim.id

    def update_claim(
        self,
        claim_pk,
        status,
        reason: Optional[str] = None,
        paid_amount: Optional[float] = None,
        claim_id: Optional[str] = None,
        final_amount: Optional[float] = None,
    ) -> int:
        """
        Sets a new status (any listed status, no transition check) and mirrors it
        onto the pre-auth with the same admission id. Returns rows affected; 0 when
        the claim does not exist.
        """
        claim_pk = _parse_claim_pk(claim_pk)
        status = parse_claim_status(status)

        values = {"status": status.value, "updated_at": datetime.utcnow()}
        if reason is not None:
            values["reason"] = reason
        if paid_amount is not None:
            values["paid_amount"] = float(paid_amount)
        if claim_id:
            values["claim_id"] = claim_id
        if final_amount is not None:
            values["final_amount"] = float(final_amount)

        with atomic(self.session):
            result = self.session.exec(update(Claim).where(Claim.id == claim_pk).values(**values))
            if result.rowcount == 0:
                return 0

            admission_id = self.session.exec(select(Claim.admission_id).where(Claim.id == claim_pk)).first()
            if admission_id:
                preauth_values = {"status": status.value, "updated_at": values["updated_at"]}
                if claim_id:
                    preauth_values["claim_id"] = claim_id
                self.session.exec(
                    update(PreAuthRequest)
                    .where(PreAuthRequest.admission_id == admission_id)
                    .values(**preauth_values)
                )
        return result.rowcount

    def update_claim_details(self, claim_pk, fields: dict) -> int:
        claim_pk = _parse_claim_pk(claim_pk)
        values = build_update_values({k: v for k, v in fields.items() if k in AMOUNT_FIELDS})
        values["updated_at"] = datetime.utcnow()
        result = self.session.exec(update(Claim).where(Claim.id == claim_pk).values(**values))
        self.session.commit()
        return result.rowcount

    def delete_claim(self, claim_pk) -> int:
        claim_pk = _parse_claim_pk(claim_pk)
        result = self.session.exec(delete(Claim).where(Claim.id == claim_pk))
        self.session.commit()
        return result.rowcount
