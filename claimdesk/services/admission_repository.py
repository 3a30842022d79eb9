from typing import Optional

from sqlmodel import Session, select

from claimdesk.db.models import Admission
from claimdesk.services.common import require


class AdmissionRepository:
    def __init__(self, session: Session):
        self.session = session

    def create_admission(self, fields: dict) -> Admission:
        require(fields, "admission_id", "patient_id")
        admission = Admission(**fields)
        self.session.add(admission)
        self.session.commit()
        self.session.refresh(admission)
        return admission

    def get_admission_by_admission_id(self, admission_id: str) -> Optional[Admission]:
        return self.session.exec(
            select(Admission)
            .where(Admission.admission_id == admission_id)
            .order_by(Admission.created_at.desc())
        ).first()
