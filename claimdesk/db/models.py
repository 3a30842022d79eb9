from typing import Optional
from datetime import datetime, date
from sqlmodel import SQLModel, Field
from sqlalchemy import Column, Date, Text, UniqueConstraint

# --- Insurers / Administrators ---
class Company(SQLModel, table=True):
    __tablename__ = "companies"

    id: str = Field(primary_key=True)  # comp-<millis>
    name: str = Field(index=True)
    contact_person: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = Field(default=None, sa_column=Column(Text))
    portal_link: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)

class CompanySettings(SQLModel, table=True):
    """Letterhead / banking details printed on company invoices."""
    __tablename__ = "company_settings"

    id: Optional[int] = Field(default=None, primary_key=True)
    company_id: str = Field(foreign_key="companies.id", unique=True)
    name: Optional[str] = None
    address: Optional[str] = Field(default=None, sa_column=Column(Text))
    gst_no: Optional[str] = None
    pan_no: Optional[str] = None
    contact_no: Optional[str] = None
    banking_details: Optional[str] = Field(default=None, sa_column=Column(Text))
    account_name: Optional[str] = None
    bank_name: Optional[str] = None
    branch: Optional[str] = None
    account_no: Optional[str] = None
    ifsc_code: Optional[str] = None
    header_img: Optional[str] = Field(default=None, sa_column=Column(Text))  # JSON {url,name} or bare URL
    footer_img: Optional[str] = Field(default=None, sa_column=Column(Text))

class TPA(SQLModel, table=True):
    __tablename__ = "tpas"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = Field(default=None, sa_column=Column(Text))
    portal_link: Optional[str] = None

class Hospital(SQLModel, table=True):
    __tablename__ = "hospitals"

    id: str = Field(primary_key=True)  # hosp-<millis>
    name: str = Field(index=True)
    location: Optional[str] = None
    address: Optional[str] = Field(default=None, sa_column=Column(Text))
    contact_person: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    photo: Optional[str] = Field(default=None, sa_column=Column(Text))
    archived: bool = False
    created_at: datetime = Field(default_factory=datetime.utcnow)

# --- Junction tables ---
class HospitalCompany(SQLModel, table=True):
    __tablename__ = "hospital_companies"

    hospital_id: str = Field(foreign_key="hospitals.id", primary_key=True)
    company_id: str = Field(foreign_key="companies.id", primary_key=True)

class HospitalTPA(SQLModel, table=True):
    __tablename__ = "hospital_tpas"

    hospital_id: str = Field(foreign_key="hospitals.id", primary_key=True)
    tpa_id: int = Field(foreign_key="tpas.id", primary_key=True)

class HospitalStaff(SQLModel, table=True):
    __tablename__ = "hospital_staff"

    hospital_id: str = Field(foreign_key="hospitals.id", primary_key=True)
    staff_id: str = Field(foreign_key="users.uid", primary_key=True)

# --- Users / Staff ---
class User(SQLModel, table=True):
    __tablename__ = "users"

    uid: str = Field(primary_key=True)  # user-<millis>
    name: str
    email: str = Field(unique=True, index=True)
    role: str  # Admin, Hospital Admin, Hospital Staff, Company Admin
    password_hash: Optional[str] = None
    hospital_id: Optional[str] = None
    company_id: Optional[str] = None
    designation: Optional[str] = None
    department: Optional[str] = None
    joining_date: Optional[date] = None
    end_date: Optional[date] = None
    shift_time: Optional[str] = None
    status: Optional[str] = "Active"
    number: Optional[str] = None
    salary: Optional[float] = None  # monthly
    created_at: datetime = Field(default_factory=datetime.utcnow)

# --- Patients / Admissions ---
class Patient(SQLModel, table=True):
    __tablename__ = "patients"

    id: Optional[int] = Field(default=None, primary_key=True)
    first_name: str
    last_name: str
    email_address: Optional[str] = None
    phone_number: Optional[str] = None
    alternative_number: Optional[str] = None
    gender: Optional[str] = None
    age: Optional[int] = None
    birth_date: Optional[date] = None
    address: Optional[str] = Field(default=None, sa_column=Column(Text))
    occupation: Optional[str] = None
    employee_id: Optional[str] = None
    abha_id: Optional[str] = None
    health_id: Optional[str] = None
    hospital_id: Optional[str] = Field(default=None, index=True)

    # Document columns hold JSON {"url","name"} or a legacy bare URL
    photo: Optional[str] = Field(default=None, sa_column=Column(Text))
    adhaar_path: Optional[str] = Field(default=None, sa_column=Column(Text))
    pan_path: Optional[str] = Field(default=None, sa_column=Column(Text))
    passport_path: Optional[str] = Field(default=None, sa_column=Column(Text))
    voter_id_path: Optional[str] = Field(default=None, sa_column=Column(Text))
    driving_licence_path: Optional[str] = Field(default=None, sa_column=Column(Text))
    other_path: Optional[str] = Field(default=None, sa_column=Column(Text))

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

class Admission(SQLModel, table=True):
    __tablename__ = "admissions"

    id: Optional[int] = Field(default=None, primary_key=True)
    patient_id: Optional[int] = Field(default=None, foreign_key="patients.id")
    admission_id: str = Field(index=True)
    hospital_id: Optional[str] = Field(default=None, index=True)
    tpa_id: Optional[int] = None
    insurance_company: Optional[str] = None  # companies.id
    policy_number: Optional[str] = None
    status: str = "Active"  # Active, Discharged
    admission_date: Optional[date] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

# --- Workflow ---
class PreAuthRequest(SQLModel, table=True):
    __tablename__ = "preauth_request"

    id: Optional[int] = Field(default=None, primary_key=True)
    patient_id: Optional[int] = Field(default=None, index=True)
    admission_id: Optional[str] = Field(default=None, index=True)
    hospital_id: Optional[str] = Field(default=None, index=True)
    tpa_id: Optional[int] = None
    company_id: Optional[str] = None
    staff_id: Optional[str] = None
    status: str = "Pending"
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    policy_number: Optional[str] = None
    corporate_policy_number: Optional[str] = None
    claim_id: Optional[str] = None
    treat_doc_name: Optional[str] = None
    room_category: Optional[str] = None
    admission_date: Optional[date] = None
    sum_insured: Optional[float] = None
    total_expected_cost: Optional[float] = None
    amount_sanctioned: Optional[float] = None
    treatment_medical: Optional[str] = None
    treatment_surgical: Optional[str] = None
    treatment_intensive_care: Optional[str] = None
    treatment_investigation: Optional[str] = None
    treatment_non_allopathic: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

class Claim(SQLModel, table=True):
    __tablename__ = "claims"

    id: Optional[int] = Field(default=None, primary_key=True)
    claim_id: Optional[str] = None  # external reference number
    patient_id: Optional[int] = Field(default=None, index=True)
    patient_name: Optional[str] = None
    # Correlates to preauth_request.admission_id; not a foreign key, orphans allowed
    admission_id: Optional[str] = Field(default=None, index=True)
    hospital_id: Optional[str] = Field(default=None, index=True)
    tpa_id: Optional[int] = None
    status: str = "Pending"
    reason: Optional[str] = Field(default=None, sa_column=Column(Text))
    created_by: Optional[str] = None
    amount: Optional[float] = None
    paid_amount: Optional[float] = None
    final_bill: Optional[float] = None
    hospital_discount: Optional[float] = None
    nm_deductions: Optional[float] = None
    co_pay: Optional[float] = None
    final_amount: Optional[float] = None
    tds: Optional[float] = None
    final_settle_amount: Optional[float] = None
    utr_no: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

# --- Attendance ---
class Attendance(SQLModel, table=True):
    """One row per staff member per day marked present. Absence has no row."""
    __tablename__ = "attendance"
    __table_args__ = (UniqueConstraint("hospital_id", "staff_id", "date", name="uq_attendance_staff_day"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    staff_id: str = Field(index=True)
    attendance_date: date = Field(sa_column=Column("date", Date, nullable=False))
    status: str = "present"
    hospital_id: Optional[str] = Field(default=None, index=True)

# --- Audit ---
class ActivityLog(SQLModel, table=True):
    __tablename__ = "activity_log"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: Optional[str] = None
    user_name: Optional[str] = None
    action_type: str
    details: Optional[str] = Field(default=None, sa_column=Column(Text))
    target_id: Optional[str] = None
    target_type: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow, index=True)

# --- Custom form fields ---
class FormField(SQLModel, table=True):
    __tablename__ = "fields"
    __table_args__ = (UniqueConstraint("company_id", "name", name="uq_fields_company_name"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    type: str  # Text, Dropdown, Radio, Checkbox, Number, Textarea
    required: bool = False
    company_id: str = Field(index=True)
