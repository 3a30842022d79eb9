import csv
import io
import logging
from datetime import date
from typing import Optional

from pydantic import BaseModel
from sqlalchemy import and_, case, distinct, exists, func
from sqlmodel import Session, select

from claimdesk.core.config import get_settings
from claimdesk.core.errors import ValidationError
from claimdesk.core.utils import decode_photo_url, full_name, resolve_date_window
from claimdesk.db.models import Admission, Claim, Company, Hospital, HospitalStaff, Patient, PreAuthRequest, TPA, User
from claimdesk.services.common import count_rows, page_result, paginate
from claimdesk.services.status_workflow import (
    APPROVAL_AMOUNT_STATUSES,
    BILLED_STATUSES,
    BILLED_WITH_ENHANCEMENT,
    DISCHARGED_STATUS,
    PENDING_PREAUTH_STATUS,
    QUERY_RAISED_STATUS,
    RECEIVED_STATUSES,
    REJECTED_STATUSES,
    SANCTIONED_STATUSES,
    SETTLED_STATUSES,
)

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"


class ReportFilters(BaseModel):
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    hospital_id: Optional[str] = None
    tpa_id: Optional[int] = None
    page: Optional[int] = None
    limit: Optional[int] = None


# --- Expression helpers ---

def _between(column, window):
    return [column.between(*window)] if window else []


def _sum_when(column, condition):
    return func.coalesce(func.sum(case((condition, column), else_=0)), 0)


def _claim_total(column, statuses, *criteria):
    """Correlated SUM over claims, 0 when nothing matches."""
    return (
        select(func.coalesce(func.sum(column), 0))
        .select_from(Claim)
        .where(Claim.status.in_(statuses), *criteria)
        .scalar_subquery()
    )


def _count(model, *criteria):
    return select(func.count()).select_from(model).where(*criteria).scalar_subquery()


def _money(value) -> float:
    return float(value or 0)


def _totals(items: list, keys) -> dict:
    return {key: sum(_money(item.get(key)) for item in items) for key in keys}


class ReportService:
    """
    Dashboard reports. Every method accepts no filters (global figures).
    Paginated reports count first and then fetch the page in a separate
    statement, so the two can drift apart under concurrent writes.
    """

    def __init__(self, session: Session):
        self.session = session

    def _claim_criteria(self, f: ReportFilters, window, tpa: bool = True) -> list:
        criteria = _between(Claim.created_at, window)
        if f.hospital_id:
            criteria.append(Claim.hospital_id == f.hospital_id)
        if tpa and f.tpa_id:
            criteria.append(Claim.tpa_id == f.tpa_id)
        return criteria

    def _preauth_criteria(self, f: ReportFilters, window) -> list:
        criteria = _between(PreAuthRequest.created_at, window)
        if f.hospital_id:
            criteria.append(PreAuthRequest.hospital_id == f.hospital_id)
        if f.tpa_id:
            criteria.append(PreAuthRequest.tpa_id == f.tpa_id)
        return criteria

    # 1
    def patient_billed_stats(self, filters: Optional[ReportFilters] = None) -> dict:
        f = filters or ReportFilters()
        page, limit, offset = paginate(f.page, f.limit)
        window = resolve_date_window(f.date_from, f.date_to)

        scope = self._claim_criteria(f, window)
        row_filter = []
        if scope:
            row_filter.append(exists().where(Claim.patient_id == Patient.id, *scope))
        if f.hospital_id:
            row_filter.append(Patient.hospital_id == f.hospital_id)

        total = count_rows(self.session, select(Patient.id).where(*row_filter))

        in_window = _between(Claim.created_at, window)
        billed = _claim_total(Claim.amount, BILLED_STATUSES, Claim.patient_id == Patient.id, *in_window)
        sanctioned = _claim_total(Claim.paid_amount, RECEIVED_STATUSES, Claim.patient_id == Patient.id, *in_window)
        latest_tpa = (
            select(TPA.name)
            .select_from(Claim)
            .join(TPA, TPA.id == Claim.tpa_id)
            .where(Claim.patient_id == Patient.id)
            .order_by(Claim.created_at.desc())
            .limit(1)
            .scalar_subquery()
        )
        insurer = (
            select(Company.name)
            .select_from(PreAuthRequest)
            .join(Company, Company.id == PreAuthRequest.company_id)
            .where(PreAuthRequest.patient_id == Patient.id)
            .order_by(PreAuthRequest.created_at.desc())
            .limit(1)
            .scalar_subquery()
        )

        rows = self.session.exec(
            select(
                Patient.id,
                Patient.first_name,
                Patient.last_name,
                Patient.photo,
                func.coalesce(latest_tpa, insurer, NOT_AVAILABLE).label("tpa_name"),
                billed.label("billed_amount"),
                sanctioned.label("sanctioned_amount"),
            )
            .where(*row_filter)
            .order_by(Patient.first_name, Patient.last_name, Patient.id)
            .offset(offset)
            .limit(limit)
        ).all()

        items = [
            {
                "patient_id": r.id,
                "patient_name": full_name(r.first_name, r.last_name),
                "patient_photo": decode_photo_url(r.photo),
                "tpa_name": r.tpa_name,
                "billed_amount": _money(r.billed_amount),
                "sanctioned_amount": _money(r.sanctioned_amount),
            }
            for r in rows
        ]
        result = page_result(items, total)
        result["totals"] = _totals(items, ("billed_amount", "sanctioned_amount"))
        return result

    # 2
    def tpa_collection_stats(self, filters: Optional[ReportFilters] = None) -> dict:
        f = filters or ReportFilters()
        window = resolve_date_window(f.date_from, f.date_to)

        # Filters sit in the join condition so TPAs without matching claims still show up
        on_clause = and_(Claim.tpa_id == TPA.id, *self._claim_criteria(f, window, tpa=False))
        statement = (
            select(
                TPA.id,
                TPA.name,
                _sum_when(Claim.amount, Claim.status.in_(BILLED_STATUSES)).label("amount"),
                _sum_when(Claim.paid_amount, Claim.status.in_(RECEIVED_STATUSES)).label("received"),
            )
            .select_from(TPA)
            .join(Claim, on_clause, isouter=True)
        )
        if f.tpa_id:
            statement = statement.where(TPA.id == f.tpa_id)
        rows = self.session.exec(statement.group_by(TPA.id, TPA.name).order_by(TPA.name)).all()

        items = []
        for r in rows:
            amount, received = _money(r.amount), _money(r.received)
            # May go negative when more was received than billed
            items.append({
                "tpa_id": r.id,
                "tpa_name": r.name,
                "amount": amount,
                "received": received,
                "deductions": amount - received,
            })
        result = page_result(items, len(items))
        result["totals"] = _totals(items, ("amount", "received", "deductions"))
        return result

    # 3
    def hospital_business_stats(self, filters: Optional[ReportFilters] = None) -> dict:
        f = filters or ReportFilters()
        window = resolve_date_window(f.date_from, f.date_to)
        pr_scope = _between(PreAuthRequest.created_at, window)
        if f.tpa_id:
            pr_scope.append(PreAuthRequest.tpa_id == f.tpa_id)
        claim_scope = _between(Claim.created_at, window)
        if f.tpa_id:
            claim_scope.append(Claim.tpa_id == f.tpa_id)

        def preauth_count(status):
            return _count(PreAuthRequest, PreAuthRequest.hospital_id == Hospital.id, PreAuthRequest.status == status, *pr_scope)

        statement = select(
            Hospital.id,
            Hospital.name,
            _count(
                Admission,
                Admission.hospital_id == Hospital.id,
                Admission.status == "Active",
                *_between(Admission.created_at, window),
            ).label("active_patients"),
            preauth_count(DISCHARGED_STATUS).label("pre_auth_approved"),
            preauth_count(PENDING_PREAUTH_STATUS).label("pre_auth_pending"),
            preauth_count(SANCTIONED_STATUSES[0]).label("final_auth_sanctioned"),
            _claim_total(Claim.amount, BILLED_WITH_ENHANCEMENT, Claim.hospital_id == Hospital.id, *claim_scope).label("billed_amount"),
            _claim_total(Claim.paid_amount, SANCTIONED_STATUSES, Claim.hospital_id == Hospital.id, *claim_scope).label("collection"),
        ).where(Hospital.archived == False)  # noqa: E712
        if f.hospital_id:
            statement = statement.where(Hospital.id == f.hospital_id)
        rows = self.session.exec(statement.order_by(Hospital.name)).all()

        items = [
            {
                "hospital_id": r.id,
                "hospital_name": r.name,
                "active_patients": r.active_patients,
                "pre_auth_approved": r.pre_auth_approved,
                "pre_auth_pending": r.pre_auth_pending,
                "final_auth_sanctioned": r.final_auth_sanctioned,
                "billed_amount": _money(r.billed_amount),
                "collection": _money(r.collection),
            }
            for r in rows
        ]
        result = page_result(items, len(items))
        result["totals"] = _totals(items, ("billed_amount", "collection"))
        return result

    # 4
    def rejected_cases(self, filters: Optional[ReportFilters] = None) -> dict:
        f = filters or ReportFilters()
        window = resolve_date_window(f.date_from, f.date_to)
        rows = self.session.exec(
            select(
                Claim.id,
                Claim.claim_id,
                Claim.patient_name,
                Patient.first_name,
                Patient.last_name,
                TPA.name.label("tpa_name"),
                Claim.reason,
                Claim.amount,
                Claim.created_at,
            )
            .select_from(Claim)
            .join(Patient, Patient.id == Claim.patient_id, isouter=True)
            .join(TPA, TPA.id == Claim.tpa_id, isouter=True)
            .where(Claim.status.in_(REJECTED_STATUSES), *self._claim_criteria(f, window))
            .order_by(Claim.created_at.desc(), Claim.id.desc())
        ).all()

        items = [
            {
                "id": r.id,
                "claim_id": r.claim_id,
                "patient_name": full_name(r.first_name, r.last_name) or r.patient_name,
                "tpa_name": r.tpa_name or NOT_AVAILABLE,
                "reason": r.reason,
                "amount": _money(r.amount),
                "created_at": r.created_at,
            }
            for r in rows
        ]
        result = page_result(items, len(items))
        result["totals"] = _totals(items, ("amount",))
        return result

    def _claim_breakdown(self, f: ReportFilters, statuses, columns: dict) -> dict:
        page, limit, offset = paginate(f.page, f.limit)
        window = resolve_date_window(f.date_from, f.date_to)
        criteria = [Claim.status.in_(statuses), *self._claim_criteria(f, window)]

        total = count_rows(self.session, select(Claim.id).where(*criteria))
        rows = self.session.exec(
            select(Claim, Patient.first_name, Patient.last_name, Patient.photo, TPA.name)
            .join(Patient, Patient.id == Claim.patient_id, isouter=True)
            .join(TPA, TPA.id == Claim.tpa_id, isouter=True)
            .where(*criteria)
            .order_by(Claim.created_at.desc(), Claim.id.desc())
            .offset(offset)
            .limit(limit)
        ).all()

        items = []
        for claim, first_name, last_name, photo, tpa_name in rows:
            item = {
                "claim_pk": claim.id,
                "patient_name": claim.patient_name or full_name(first_name, last_name),
                "patient_photo": decode_photo_url(photo),
                "tpa_name": tpa_name or NOT_AVAILABLE,
                "created_at": claim.created_at,
            }
            for key, attr in columns.items():
                item[key] = _money(getattr(claim, attr))
            items.append(item)

        result = page_result(items, total)
        # Totals cover the returned page only
        result["totals"] = _totals(items, columns.keys())
        return result

    # 5
    def final_approval_details(self, filters: Optional[ReportFilters] = None) -> dict:
        return self._claim_breakdown(filters or ReportFilters(), RECEIVED_STATUSES, {
            "final_bill": "final_bill",
            "hospital_discount": "hospital_discount",
            "nm_deductions": "nm_deductions",
            "co_pay": "co_pay",
            "final_authorised_amount": "final_amount",
            "amount_paid_by_insured": "amount",
        })

    # 6
    def settled_status_details(self, filters: Optional[ReportFilters] = None) -> dict:
        return self._claim_breakdown(filters or ReportFilters(), SETTLED_STATUSES, {
            "final_authorised_amount": "final_amount",
            "deduction": "nm_deductions",
            "tds": "tds",
            "final_settlement_amount": "final_settle_amount",
            "net_amount_credited": "amount",
        })

    # 7
    def company_admin_dashboard_stats(self, filters: Optional[ReportFilters] = None) -> dict:
        f = filters or ReportFilters()
        window = resolve_date_window(f.date_from, f.date_to)
        pr_window = _between(PreAuthRequest.created_at, window)

        def scalar(statement):
            return self.session.exec(statement).one() or 0

        return {
            "total_hospitals": scalar(
                select(func.count()).select_from(Hospital).where(Hospital.archived == False)  # noqa: E712
            ),
            "live_patients": scalar(
                select(func.count()).select_from(Admission).where(
                    Admission.status == "Active", *_between(Admission.created_at, window)
                )
            ),
            "pending_requests": scalar(
                select(func.count()).select_from(PreAuthRequest).where(
                    PreAuthRequest.status == PENDING_PREAUTH_STATUS, *pr_window
                )
            ),
            "rejected_requests": scalar(
                select(func.count()).select_from(PreAuthRequest).where(
                    PreAuthRequest.status.in_(REJECTED_STATUSES), *pr_window
                )
            ),
        }

    # 8
    def simple_hospital_stats(self, filters: Optional[ReportFilters] = None) -> dict:
        f = filters or ReportFilters()
        window = resolve_date_window(f.date_from, f.date_to)
        on_clause = and_(Claim.hospital_id == Hospital.id, *_between(Claim.created_at, window))
        if f.tpa_id:
            on_clause = and_(on_clause, Claim.tpa_id == f.tpa_id)

        statement = (
            select(
                Hospital.id,
                Hospital.name,
                func.count(distinct(Claim.patient_id)).label("num_of_patients"),
                _sum_when(Claim.amount, Claim.status.in_(BILLED_WITH_ENHANCEMENT)).label("amount"),
            )
            .select_from(Hospital)
            .join(Claim, on_clause, isouter=True)
            .where(Hospital.archived == False)  # noqa: E712
        )
        if f.hospital_id:
            statement = statement.where(Hospital.id == f.hospital_id)
        rows = self.session.exec(statement.group_by(Hospital.id, Hospital.name).order_by(Hospital.name)).all()

        items = [
            {"hospital_id": r.id, "hospital_name": r.name, "num_of_patients": r.num_of_patients, "amount": _money(r.amount)}
            for r in rows
        ]
        result = page_result(items, len(items))
        result["totals"] = _totals(items, ("amount",))
        return result

    # 9
    def staff_performance_stats(self, filters: Optional[ReportFilters] = None) -> dict:
        f = filters or ReportFilters()
        window = resolve_date_window(f.date_from, f.date_to)
        pr_window = _between(PreAuthRequest.created_at, window)

        cases = (
            select(func.count(distinct(PreAuthRequest.id)))
            .where(PreAuthRequest.staff_id == User.uid, *pr_window)
            .scalar_subquery()
        )
        collection = (
            select(func.coalesce(func.sum(Claim.paid_amount), 0))
            .select_from(Claim)
            .join(PreAuthRequest, PreAuthRequest.admission_id == Claim.admission_id)
            .where(PreAuthRequest.staff_id == User.uid, Claim.status.in_(SANCTIONED_STATUSES), *pr_window)
            .scalar_subquery()
        )
        statement = (
            select(
                User.uid,
                User.name,
                func.coalesce(Hospital.name, NOT_AVAILABLE).label("hospital_name"),
                cases.label("num_of_cases"),
                collection.label("total_collection"),
            )
            .select_from(User)
            .join(HospitalStaff, HospitalStaff.staff_id == User.uid, isouter=True)
            .join(Hospital, Hospital.id == HospitalStaff.hospital_id, isouter=True)
            .where(User.role == "Hospital Staff")
        )
        if f.hospital_id:
            statement = statement.where(HospitalStaff.hospital_id == f.hospital_id)
        rows = self.session.exec(statement.order_by(User.name, User.uid)).all()

        items = [
            {
                "staff_id": r.uid,
                "staff_name": r.name,
                "hospital_name": r.hospital_name,
                "num_of_cases": r.num_of_cases,
                "total_collection": _money(r.total_collection),
            }
            for r in rows
        ]
        result = page_result(items, len(items))
        result["totals"] = _totals(items, ("total_collection",))
        return result

    # 10
    def hospital_staff_dashboard(self, hospital_id: Optional[str]) -> dict:
        if not hospital_id:
            raise ValidationError("Hospital ID is required to fetch dashboard data.")

        live_patients = self.session.exec(
            select(func.count()).select_from(Admission).where(
                Admission.hospital_id == hospital_id, Admission.status == "Active"
            )
        ).one()
        statuses = self.session.exec(
            select(PreAuthRequest.status).where(PreAuthRequest.hospital_id == hospital_id)
        ).all()

        return {
            "stats": {
                "live_patients": live_patients,
                "total_requests": len(statuses),
                "pending_requests": sum(1 for s in statuses if s == PENDING_PREAUTH_STATUS),
                "rejected_requests": sum(1 for s in statuses if s in REJECTED_STATUSES),
            },
            "pending_preauths": self._preauths_in_status(hospital_id, PENDING_PREAUTH_STATUS),
            "query_raised_preauths": self._preauths_in_status(hospital_id, QUERY_RAISED_STATUS),
        }

    def _preauths_in_status(self, hospital_id: str, status: str) -> list:
        rows = self.session.exec(
            select(
                PreAuthRequest.id,
                PreAuthRequest.patient_id,
                Patient.first_name,
                Patient.last_name,
                func.coalesce(TPA.name, Company.name, NOT_AVAILABLE).label("tpa_or_insurer_name"),
                PreAuthRequest.total_expected_cost,
            )
            .select_from(PreAuthRequest)
            .join(Patient, Patient.id == PreAuthRequest.patient_id)
            .join(Company, Company.id == PreAuthRequest.company_id, isouter=True)
            .join(TPA, TPA.id == PreAuthRequest.tpa_id, isouter=True)
            .where(PreAuthRequest.hospital_id == hospital_id, PreAuthRequest.status == status)
            .order_by(PreAuthRequest.created_at.desc())
        ).all()
        return [
            {
                "id": r.id,
                "patient_id": r.patient_id,
                "patient_name": full_name(r.first_name, r.last_name),
                "tpa_or_insurer_name": r.tpa_or_insurer_name,
                "amount_requested": _money(r.total_expected_cost),
            }
            for r in rows
        ]

    # 11
    def pre_auth_summary(self, filters: Optional[ReportFilters] = None) -> dict:
        f = filters or ReportFilters()
        page, limit, offset = paginate(f.page, f.limit)
        window = resolve_date_window(f.date_from, f.date_to)
        criteria = self._preauth_criteria(f, window)

        total = count_rows(self.session, select(PreAuthRequest.id).where(*criteria))
        approval = _claim_total(
            Claim.amount, APPROVAL_AMOUNT_STATUSES, Claim.admission_id == PreAuthRequest.admission_id
        )
        rows = self.session.exec(
            select(
                PreAuthRequest,
                Patient.photo,
                func.coalesce(TPA.name, NOT_AVAILABLE),
                func.coalesce(Company.name, NOT_AVAILABLE),
                approval,
            )
            .join(Patient, Patient.id == PreAuthRequest.patient_id, isouter=True)
            .join(Company, Company.id == PreAuthRequest.company_id, isouter=True)
            .join(TPA, TPA.id == PreAuthRequest.tpa_id, isouter=True)
            .where(*criteria)
            .order_by(PreAuthRequest.created_at.desc(), PreAuthRequest.id.desc())
            .offset(offset)
            .limit(limit)
        ).all()

        items = []
        for pr, photo, tpa_name, insurer_name, approval_amount in rows:
            plan = [
                pr.treatment_medical, pr.treatment_surgical, pr.treatment_intensive_care,
                pr.treatment_investigation, pr.treatment_non_allopathic,
            ]
            items.append({
                "preauth_id": pr.id,
                "patient_name": full_name(pr.first_name, pr.last_name),
                "patient_photo": decode_photo_url(photo),
                "status": pr.status,
                "admission_date": pr.admission_date,
                "tpa_name": tpa_name,
                "insurance_name": insurer_name,
                "corporate_policy_number": pr.corporate_policy_number,
                "doctor_in_charge": pr.treat_doc_name,
                "room_category": pr.room_category,
                "budget": _money(pr.total_expected_cost),
                "sum_insured": _money(pr.sum_insured),
                "approval_amount": _money(approval_amount),
                "plan_of_management": ", ".join(p for p in plan if p),
            })
        result = page_result(items, total)
        result["totals"] = _totals(items, ("budget", "approval_amount"))
        return result

    # --- CSV export ---

    def export_report(self, name: str, filters: Optional[ReportFilters] = None) -> str:
        """
        Re-run a report with the "export all" limit and render it as CSV.
        Strings are quoted, numbers are written raw, and reports with
        monetary totals end with a TOTAL row.
        """
        entry = EXPORTS.get(name)
        if not entry:
            raise ValidationError(f"Unknown report: {name}")
        method, columns = entry

        f = (filters or ReportFilters()).model_copy(update={"page": 1, "limit": get_settings().EXPORT_ALL_LIMIT})
        result = getattr(self, method)(f)
        items = result["items"]

        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_NONNUMERIC)
        writer.writerow([header for _, header in columns])
        for item in items:
            writer.writerow([_csv_value(item.get(key)) for key, _ in columns])

        totals = _totals(items, result.get("totals", {}).keys())
        if totals:
            row = ["TOTAL"] + [totals.get(key, "") for key, _ in columns[1:]]
            writer.writerow(row)

        logger.info(f"Exported {len(items)} rows for report {name}")
        return buffer.getvalue()


def _csv_value(value):
    if value is None:
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return str(value)


# report name -> (method, [(key, header), ...]); first column carries the TOTAL label
EXPORTS = {
    "patient-billed": ("patient_billed_stats", [
        ("patient_name", "Patient Name"),
        ("tpa_name", "TPA / Insurance"),
        ("billed_amount", "Billed Amount"),
        ("sanctioned_amount", "Sanctioned Amount"),
    ]),
    "tpa-collection": ("tpa_collection_stats", [
        ("tpa_name", "TPA Name"),
        ("amount", "Amount"),
        ("received", "Received"),
        ("deductions", "Deductions"),
    ]),
    "hospital-business": ("hospital_business_stats", [
        ("hospital_name", "Hospital Name"),
        ("active_patients", "Active Patients"),
        ("pre_auth_approved", "Pre-Auth Approved"),
        ("pre_auth_pending", "Pre-Auth Pending"),
        ("final_auth_sanctioned", "Final Auth Sanctioned"),
        ("billed_amount", "Billed Amount"),
        ("collection", "Collection"),
    ]),
    "rejected-cases": ("rejected_cases", [
        ("patient_name", "Patient Name"),
        ("tpa_name", "TPA Name"),
        ("reason", "Reason"),
        ("amount", "Amount"),
    ]),
    "final-approval": ("final_approval_details", [
        ("patient_name", "Patient Name"),
        ("tpa_name", "TPA Name"),
        ("final_bill", "Final Bill"),
        ("hospital_discount", "Hospital Discount"),
        ("nm_deductions", "NM Deductions"),
        ("co_pay", "Co-Pay"),
        ("final_authorised_amount", "Final Authorised Amount"),
        ("amount_paid_by_insured", "Amount Paid By Insured"),
    ]),
    "settled-status": ("settled_status_details", [
        ("patient_name", "Patient Name"),
        ("tpa_name", "TPA Name"),
        ("final_authorised_amount", "Final Authorised Amount"),
        ("deduction", "Deduction"),
        ("tds", "TDS"),
        ("final_settlement_amount", "Final Settlement Amount"),
        ("net_amount_credited", "Net Amount Credited"),
    ]),
    "simple-hospital": ("simple_hospital_stats", [
        ("hospital_name", "Hospital Name"),
        ("num_of_patients", "No. of Patients"),
        ("amount", "Amount"),
    ]),
    "staff-performance": ("staff_performance_stats", [
        ("staff_name", "Staff Name"),
        ("hospital_name", "Hospital"),
        ("num_of_cases", "No. of Cases"),
        ("total_collection", "Total Collection"),
    ]),
    "pre-auth-summary": ("pre_auth_summary", [
        ("patient_name", "Patient Name"),
        ("status", "Status"),
        ("admission_date", "Admission Date"),
        ("tpa_name", "TPA"),
        ("insurance_name", "Insurance"),
        ("doctor_in_charge", "Doctor In Charge"),
        ("room_category", "Room Category"),
        ("budget", "Budget"),
        ("sum_insured", "Sum Insured"),
        ("approval_amount", "Approval Amount"),
        ("plan_of_management", "Plan Of Management"),
    ]),
}
