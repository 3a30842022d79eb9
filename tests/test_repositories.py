from datetime import datetime

import pytest
from sqlmodel import Session

from claimdesk.core.errors import ConflictError, NotFoundError, AuthenticationError, ValidationError
from claimdesk.db.models import Claim, Hospital, PreAuthRequest, User
from claimdesk.services.admission_repository import AdmissionRepository
from claimdesk.services.claim_repository import ClaimRepository
from claimdesk.services.company_repository import CompanyRepository
from claimdesk.services.field_repository import FieldRepository
from claimdesk.services.hospital_repository import HospitalRepository
from claimdesk.services.patient_repository import PatientRepository
from claimdesk.services.preauth_repository import PreAuthRepository
from claimdesk.services.tpa_repository import TPARepository
from claimdesk.services.user_repository import UserRepository

from conftest import make_claim, make_company, make_hospital, make_patient, make_preauth, make_tpa


# --- Company ---

def test_new_company_listed_alphabetically(session: Session):
    make_company(session, id="comp-a", name="Bajaj Allianz")
    make_company(session, id="comp-b", name="Zurich Kotak")
    repo = CompanyRepository(session)

    company_id = repo.create_company({"name": "Acme Insurance", "email": "a@acme.com"})

    page = repo.list_companies(1, 10)
    assert page["total"] == 3
    assert [c["name"] for c in page["items"]] == ["Acme Insurance", "Bajaj Allianz", "Zurich Kotak"]
    assert page["items"][0]["id"] == company_id
    assert company_id.startswith("comp-")


def test_list_companies_pages(session: Session):
    for i in range(12):
        make_company(session, id=f"comp-{i:02d}", name=f"Insurer {i:02d}")
    page = CompanyRepository(session).list_companies(2, 10)
    assert page["total"] == 12
    assert [c["name"] for c in page["items"]] == ["Insurer 10", "Insurer 11"]


def test_duplicate_company_names_allowed(session: Session):
    repo = CompanyRepository(session)
    repo.create_company({"name": "Same"})
    repo.create_company({"name": "Same"})
    assert repo.list_companies()["total"] == 2


@pytest.mark.parametrize("fields", [
    {"name": ""},
    {"name": "X", "email": "not-an-email"},
    {"name": "X", "portal_link": "portal"},
])
def test_create_company_validation(session: Session, fields):
    with pytest.raises(ValidationError):
        CompanyRepository(session).create_company(fields)


def test_get_company_is_idempotent(session: Session):
    make_company(session, id="comp-1", name="Star Health")
    hospitals = HospitalRepository(session)
    hospitals.create_hospital({"name": "City Hospital"}, companies=["comp-1"])
    repo = CompanyRepository(session)

    first = repo.get_company_by_id("comp-1")
    second = repo.get_company_by_id("comp-1")
    assert first == second
    assert [h["name"] for h in first["assigned_hospitals"]] == ["City Hospital"]


def test_get_missing_company_is_none(session: Session):
    assert CompanyRepository(session).get_company_by_id("comp-404") is None


def test_update_and_delete_company_rowcounts(session: Session):
    make_company(session, id="comp-1")
    repo = CompanyRepository(session)
    assert repo.update_company("comp-1", {"phone": "999", "name": None}) == 1
    assert repo.get_company_by_id("comp-1")["phone"] == "999"
    assert repo.update_company("comp-404", {"phone": "1"}) == 0
    assert repo.delete_company("comp-1") == 1
    assert repo.delete_company("comp-1") == 0


def test_company_settings_upsert(session: Session):
    make_company(session, id="comp-1")
    repo = CompanyRepository(session)
    assert repo.get_company_settings("comp-1") is None

    repo.save_company_settings("comp-1", {"gst_no": "GST1", "header_img": {"url": "https://x/h.png"}})
    saved = repo.save_company_settings("comp-1", {"bank_name": "SBI"})
    assert saved["gst_no"] == "GST1"
    assert saved["bank_name"] == "SBI"
    assert saved["header_img"] == {"url": "https://x/h.png", "name": "View Document"}


# --- Hospital ---

def test_create_hospital_with_assignments(session: Session):
    make_company(session, id="comp-1")
    tpa = make_tpa(session)
    repo = HospitalRepository(session)

    hospital_id = repo.create_hospital(
        {"name": "City Hospital", "location": "Pune"}, companies=["comp-1"], tpas=[tpa.id], staff=["user-1"]
    )
    hospital = repo.get_hospital_by_id(hospital_id)
    assert hospital_id.startswith("hosp-")
    assert hospital["assigned_companies"] == ["comp-1"]
    assert hospital["assigned_tpas"] == [tpa.id]
    assert hospital["assigned_staff"] == ["user-1"]


def test_update_hospital_only_present_fields(session: Session):
    make_hospital(session, id="hosp-1", name="City Hospital", location="Pune")
    repo = HospitalRepository(session)
    assert repo.update_hospital("hosp-1", {"phone": "123", "location": None}) == 1
    hospital = repo.get_hospital_by_id("hosp-1")
    assert hospital["phone"] == "123"
    assert hospital["location"] == "Pune"


def test_update_hospital_empty_partial_rejected(session: Session):
    with pytest.raises(ValidationError, match="No fields to update"):
        HospitalRepository(session).update_hospital("hosp-1", {"name": None, "phone": None})


def test_replace_assignments(session: Session):
    make_company(session, id="comp-1")
    make_company(session, id="comp-2", name="Other")
    repo = HospitalRepository(session)
    hospital_id = repo.create_hospital({"name": "City"}, companies=["comp-1"])

    repo.replace_assignments(hospital_id, companies=["comp-2", "comp-1"])
    assert sorted(repo.get_hospital_by_id(hospital_id)["assigned_companies"]) == ["comp-1", "comp-2"]

    repo.replace_assignments(hospital_id)
    assert repo.get_hospital_by_id(hospital_id)["assigned_companies"] == []


def test_archived_hospitals_hidden_from_list(session: Session):
    make_hospital(session, id="hosp-1", name="Alpha")
    make_hospital(session, id="hosp-2", name="Beta")
    repo = HospitalRepository(session)

    assert repo.archive_hospital("hosp-1") == 1
    assert [h["id"] for h in repo.list_hospitals()] == ["hosp-2"]
    assert session.get(Hospital, "hosp-1").archived is True
    assert repo.archive_hospital("hosp-404") == 0


# --- TPA ---

def test_delete_missing_tpa_returns_zero(session: Session):
    assert TPARepository(session).delete_tpa(9999) == 0


def test_tpa_crud(session: Session):
    repo = TPARepository(session)
    tpa_id = repo.create_tpa({"name": "Vidal", "portal_link": "https://vidal.example.com"})
    assert repo.get_tpa_by_id(tpa_id)["name"] == "Vidal"
    assert repo.update_tpa(tpa_id, {"phone": "555"}) == 1
    assert repo.list_tpa_options() == [{"id": tpa_id, "name": "Vidal"}]
    assert repo.delete_tpa(tpa_id) == 1


# --- Patient ---

def test_patient_photo_forms(session: Session):
    repo = PatientRepository(session)
    json_id = make_patient(session, first_name="A", photo='{"url":"https://x/y.png"}').id
    bare_id = make_patient(session, first_name="B", photo="https://x/y.png").id
    junk_id = make_patient(session, first_name="C", photo="garbage").id

    assert repo.get_patient_by_id(json_id)["photo_url"] == "https://x/y.png"
    assert repo.get_patient_by_id(bare_id)["photo_url"] == "https://x/y.png"
    assert repo.get_patient_by_id(junk_id)["photo_url"] is None

    urls = {p["id"]: p["photo_url"] for p in repo.list_patients()["items"]}
    assert urls == {json_id: "https://x/y.png", bare_id: "https://x/y.png", junk_id: None}


def test_list_patients_with_latest_admission(session: Session):
    make_company(session, id="comp-1", name="Star Health")
    patient = make_patient(session, hospital_id="hosp-1")
    make_patient(session, first_name="Other", hospital_id="hosp-2")
    AdmissionRepository(session).create_admission({
        "patient_id": patient.id, "admission_id": "ADM-1", "hospital_id": "hosp-1",
        "insurance_company": "comp-1", "policy_number": "POL-9",
    })

    page = PatientRepository(session).list_patients(hospital_id="hosp-1")
    assert page["total"] == 1
    item = page["items"][0]
    assert item["full_name"] == "Asha Rao"
    assert item["policy_number"] == "POL-9"
    assert item["insurance_company"] == "Star Health"


def test_patient_documents_roundtrip(session: Session):
    repo = PatientRepository(session)
    patient_id = repo.create_patient({
        "first_name": "Asha", "last_name": "Rao",
        "pan_path": {"url": "https://x/pan.pdf", "name": "PAN"},
    })
    patient = repo.get_patient_by_id(patient_id)
    assert patient["pan_path"] == {"url": "https://x/pan.pdf", "name": "PAN"}
    assert patient["adhaar_path"] is None

    assert repo.update_patient(patient_id, {"occupation": "Engineer", "address": ""}) == 1
    assert repo.get_patient_by_id(patient_id)["occupation"] == "Engineer"
    assert repo.delete_patient(patient_id) == 1
    assert repo.get_patient_by_id(patient_id) is None


def test_patients_for_preauth_only_active(session: Session):
    active = make_patient(session, first_name="Live")
    discharged = make_patient(session, first_name="Gone")
    admissions = AdmissionRepository(session)
    admissions.create_admission({"patient_id": active.id, "admission_id": "ADM-1", "hospital_id": "hosp-1"})
    admissions.create_admission({
        "patient_id": discharged.id, "admission_id": "ADM-2", "hospital_id": "hosp-1", "status": "Discharged",
    })

    rows = PatientRepository(session).list_patients_for_preauth("hosp-1")
    assert rows == [{"id": active.id, "full_name": "Live Rao", "admission_id": "ADM-1"}]
    assert PatientRepository(session).list_patients_for_preauth(None) == []


# --- Pre-auth ---

def test_preauth_status_update(session: Session):
    repo = PreAuthRepository(session)
    preauth_id = repo.create_preauth({"patient_id": 1, "hospital_id": "hosp-1"})
    assert repo.get_preauth_by_id(preauth_id)["status"] == "Pending"

    assert repo.update_preauth_status(preauth_id, "Enhancement Request") == 1
    assert repo.get_preauth_by_id(preauth_id)["status"] == "Enhancement Request"
    with pytest.raises(ValidationError):
        repo.update_preauth_status(preauth_id, "Paid")
    assert repo.update_preauth_status(9999, "Settled") == 0


def test_preauth_list_newest_first(session: Session):
    make_preauth(session, patient_id=1, hospital_id="hosp-1", created_at=datetime(2024, 1, 1))
    newer = make_preauth(session, patient_id=2, hospital_id="hosp-1", created_at=datetime(2024, 2, 1))
    repo = PreAuthRepository(session)
    assert repo.list_preauths("hosp-1")[0]["id"] == newer.id
    assert repo.list_preauths(None) == []


# --- Claim ---

def test_update_claim_sets_status_and_timestamp(session: Session):
    claim = make_claim(session, patient_id=1, status="Pending", created_at=datetime(2024, 1, 1))
    before = claim.updated_at
    repo = ClaimRepository(session)

    assert repo.update_claim(claim.id, "Settlement Done", reason="Paid out", paid_amount="1200") == 1

    stored = repo.get_claim_by_id(claim.id)
    assert stored["status"] == "Settlement Done"
    assert stored["updated_at"] > before
    assert stored["paid_amount"] == 1200.0
    assert stored["reason"] == "Paid out"


def test_any_status_may_follow_any_other(session: Session):
    claim = make_claim(session, patient_id=1, status="Settled")
    repo = ClaimRepository(session)
    assert repo.update_claim(claim.id, "Pending") == 1
    assert repo.update_claim(claim.id, "Rejected") == 1
    assert repo.get_claim_by_id(claim.id)["status"] == "Rejected"


def test_update_claim_mirrors_onto_preauth(session: Session):
    preauth = make_preauth(session, patient_id=1, hospital_id="hosp-1", admission_id="ADM-7", status="Pre auth Sent")
    claim = make_claim(session, patient_id=1, admission_id="ADM-7", status="Pre auth Sent")

    ClaimRepository(session).update_claim(claim.id, "Final Approval", claim_id="CLM-77")

    session.expire_all()
    mirrored = session.get(PreAuthRequest, preauth.id)
    assert mirrored.status == "Final Approval"
    assert mirrored.claim_id == "CLM-77"


def test_update_missing_claim_returns_zero(session: Session):
    assert ClaimRepository(session).update_claim(424242, "Paid") == 0


@pytest.mark.parametrize("claim_pk,status", [("abc", "Paid"), (1, ""), (1, "Teleported")])
def test_update_claim_validates_before_database(session: Session, claim_pk, status):
    with pytest.raises(ValidationError):
        ClaimRepository(session).update_claim(claim_pk, status)


def test_orphan_claim_readable(session: Session):
    claim = make_claim(session, patient_id=1, admission_id="NO-PREAUTH", amount=100)
    data = ClaimRepository(session).get_claim_by_id(claim.id)
    assert data["preauth_id"] is None
    assert data["billed_amount"] is None
    assert data["company_name"] is None


def test_claim_detail_company_from_admission(session: Session):
    make_company(session, id="comp-1", name="Star Health")
    patient = make_patient(session)
    AdmissionRepository(session).create_admission({
        "patient_id": patient.id, "admission_id": "ADM-1", "insurance_company": "comp-1",
    })
    claim = make_claim(session, patient_id=patient.id, admission_id="ADM-1")
    data = ClaimRepository(session).get_claim_by_id(claim.id)
    assert data["company_name"] == "Star Health"
    assert data["patient_full_name"] == "Asha Rao"


def test_list_claims_latest_per_patient(session: Session):
    make_claim(session, patient_id=1, status="Pending", created_at=datetime(2024, 1, 1))
    latest = make_claim(session, patient_id=1, status="Approved", created_at=datetime(2024, 1, 5))
    other = make_claim(session, patient_id=2, status="Paid", created_at=datetime(2024, 1, 3))

    page = ClaimRepository(session).list_claims()
    assert page["total"] == 2
    assert [c["id"] for c in page["items"]] == [latest.id, other.id]


def test_list_claims_for_patient(session: Session):
    first = make_claim(session, patient_id=5, created_at=datetime(2024, 1, 1))
    second = make_claim(session, patient_id=5, created_at=datetime(2024, 1, 2))
    rows = ClaimRepository(session).list_claims_for_patient(5)
    assert [r["id"] for r in rows] == [second.id, first.id]


def test_create_claim_fills_patient_name(session: Session):
    patient = make_patient(session)
    repo = ClaimRepository(session)
    claim_pk = repo.create_claim({"patient_id": patient.id, "amount": 10})
    stored = session.get(Claim, claim_pk)
    assert stored.patient_name == "Asha Rao"
    assert stored.status == "Pending"
    with pytest.raises(ValidationError):
        repo.create_claim({"patient_id": patient.id, "status": "Unknown"})


def test_delete_claim(session: Session):
    claim = make_claim(session, patient_id=1)
    repo = ClaimRepository(session)
    assert repo.delete_claim(claim.id) == 1
    assert repo.delete_claim(claim.id) == 0


# --- User ---

def test_create_user_hashes_password(session: Session):
    repo = UserRepository(session)
    uid = repo.create_user({"name": "Neha", "email": "neha@city.com", "password": "s3cret", "role": "Hospital Staff"})
    user = session.get(User, uid)
    assert uid.startswith("user-")
    assert user.password_hash and user.password_hash != "s3cret"
    assert "password_hash" not in repo.get_user_by_id(uid)


def test_duplicate_email_conflicts(session: Session):
    repo = UserRepository(session)
    repo.create_user({"name": "A", "email": "dup@city.com", "password": "x", "role": "Admin"})
    with pytest.raises(ConflictError):
        repo.create_user({"name": "B", "email": "dup@city.com", "password": "y", "role": "Admin"})


def test_authenticate(session: Session):
    repo = UserRepository(session)
    repo.create_user({"name": "A", "email": "a@city.com", "password": "right", "role": "Admin"})
    assert repo.authenticate("a@city.com", "right")["name"] == "A"
    with pytest.raises(AuthenticationError):
        repo.authenticate("a@city.com", "wrong")
    with pytest.raises(NotFoundError):
        repo.authenticate("nobody@city.com", "right")


def test_list_staff_by_hospital(session: Session):
    repo = UserRepository(session)
    direct = repo.create_user({"name": "Direct", "email": "d@city.com", "role": "Hospital Staff", "hospital_id": "hosp-1"})
    assigned = repo.create_user({"name": "Assigned", "email": "s@city.com", "role": "Hospital Staff"})
    repo.create_user({"name": "Boss", "email": "b@city.com", "role": "Hospital Admin", "hospital_id": "hosp-1"})
    make_hospital(session, id="hosp-1")
    HospitalRepository(session).replace_assignments("hosp-1", staff=[assigned])

    assert {s["uid"] for s in repo.list_staff("hosp-1")} == {direct, assigned}


def test_invalid_role_rejected(session: Session):
    with pytest.raises(ValidationError):
        UserRepository(session).create_user({"name": "A", "email": "a@city.com", "role": "Superuser"})


# --- Field ---

def test_fields(session: Session):
    repo = FieldRepository(session)
    field_id = repo.create_field({"name": "Employer", "type": "Text", "company_id": "comp-1", "required": True})
    repo.create_field({"name": "Blood Group", "type": "Dropdown", "company_id": "comp-1"})

    assert [f["name"] for f in repo.list_fields("comp-1")] == ["Blood Group", "Employer"]
    with pytest.raises(ConflictError):
        repo.create_field({"name": "Employer", "type": "Text", "company_id": "comp-1"})
    with pytest.raises(ValidationError):
        repo.create_field({"name": "X", "type": "Slider", "company_id": "comp-1"})

    assert repo.delete_field(field_id) == 1
    assert repo.delete_field(field_id) == 0


@pytest.mark.parametrize("name", ["", "   "])
def test_blank_names_rejected_on_update(session: Session, name):
    make_company(session, id="comp-1")
    tpa = make_tpa(session)
    with pytest.raises(ValidationError):
        CompanyRepository(session).update_company("comp-1", {"name": name})
    with pytest.raises(ValidationError):
        TPARepository(session).update_tpa(tpa.id, {"name": name})
    assert CompanyRepository(session).get_company_by_id("comp-1")["name"] == "Star Health"


def test_overlong_password_rejected(session: Session):
    with pytest.raises(ValidationError):
        UserRepository(session).create_user(
            {"name": "A", "email": "a@city.com", "password": "x" * 73, "role": "Admin"}
        )
