import pytest
from sqlmodel import Session, select

from claimdesk.core.errors import ValidationError
from claimdesk.db.models import Attendance, User
from claimdesk.services.attendance_service import AttendanceService, payable_salary

from conftest import add


def test_attendance_round_trip(session: Session):
    service = AttendanceService(session)
    saved = service.save_attendance(3, 2024, "hosp-1", {
        "user-1": {"1": True, "2": False, "15": True},
        "user-2": {"31": True},
    })

    assert saved == 3
    assert service.get_attendance_for_month(3, 2024, "hosp-1") == {
        "user-1": {1: True, 15: True},
        "user-2": {31: True},
    }


def test_save_replaces_whole_month(session: Session):
    service = AttendanceService(session)
    service.save_attendance(3, 2024, "hosp-1", {"user-1": {"1": True, "2": True}})
    service.save_attendance(4, 2024, "hosp-1", {"user-1": {"1": True}})
    service.save_attendance(3, 2024, "hosp-2", {"user-1": {"5": True}})

    service.save_attendance(3, 2024, "hosp-1", {"user-1": {"2": True}})

    assert service.get_attendance_for_month(3, 2024, "hosp-1") == {"user-1": {2: True}}
    assert service.get_attendance_for_month(4, 2024, "hosp-1") == {"user-1": {1: True}}
    assert service.get_attendance_for_month(3, 2024, "hosp-2") == {"user-1": {5: True}}


def test_save_empty_clears_month(session: Session):
    service = AttendanceService(session)
    service.save_attendance(3, 2024, "hosp-1", {"user-1": {"1": True}})
    assert service.save_attendance(3, 2024, "hosp-1", {}) == 0
    assert session.exec(select(Attendance)).all() == []


@pytest.mark.parametrize("month,year,data", [
    (2, 2023, {"user-1": {"29": True}}),
    (4, 2024, {"user-1": {"0": True}}),
    (13, 2024, {}),
    ("x", 2024, {}),
    (1, 2024, {"user-1": {"first": True}}),
])
def test_invalid_days_rejected(session: Session, month, year, data):
    with pytest.raises(ValidationError):
        AttendanceService(session).save_attendance(month, year, "hosp-1", data)


def test_invalid_save_leaves_existing_rows(session: Session):
    service = AttendanceService(session)
    service.save_attendance(2, 2024, "hosp-1", {"user-1": {"3": True}})
    with pytest.raises(ValidationError):
        service.save_attendance(2, 2024, "hosp-1", {"user-1": {"30": True}})
    assert service.get_attendance_for_month(2, 2024, "hosp-1") == {"user-1": {3: True}}


def test_hospital_required(session: Session):
    with pytest.raises(ValidationError):
        AttendanceService(session).get_attendance_for_month(1, 2024, None)


def test_payable_salary():
    assert payable_salary(31000, 1, 2024, 10) == pytest.approx(10000)
    assert payable_salary(29000, 2, 2024, 29) == pytest.approx(29000)
    assert payable_salary(None, 1, 2024, 10) == 0


def test_staff_salary_report(session: Session):
    add(session, User(uid="user-1", name="Neha", email="neha@city.com", role="Hospital Staff",
                      hospital_id="hosp-1", salary=30000, designation="Coordinator"))
    add(session, User(uid="user-2", name="Vikram", email="vikram@city.com", role="Hospital Staff",
                      hospital_id="hosp-1"))
    AttendanceService(session).save_attendance(4, 2024, "hosp-1", {
        "user-1": {str(day): True for day in range(1, 16)},
    })

    report = AttendanceService(session).staff_salary_report(4, 2024, "hosp-1")
    assert [r["name"] for r in report] == ["Neha", "Vikram"]
    neha, vikram = report
    assert neha["present_days"] == 15
    assert neha["days_in_month"] == 30
    assert neha["payable_salary"] == pytest.approx(15000)
    assert vikram["present_days"] == 0
    assert vikram["payable_salary"] == 0


def test_list_staff_for_attendance(session: Session):
    add(session, User(uid="user-1", name="Neha", email="neha@city.com", role="Hospital Staff",
                      hospital_id="hosp-1", designation="Nurse"))
    assert AttendanceService(session).list_staff_for_attendance("hosp-1") == [
        {"uid": "user-1", "name": "Neha", "designation": "Nurse"},
    ]
