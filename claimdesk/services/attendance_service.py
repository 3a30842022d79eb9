import logging
from datetime import date
from typing import Optional

from sqlalchemy import delete, func, insert
from sqlmodel import Session, select

from claimdesk.core.errors import ValidationError
from claimdesk.core.utils import days_in_month, month_bounds
from claimdesk.db.models import Attendance
from claimdesk.db.session import atomic
from claimdesk.services.user_repository import UserRepository

logger = logging.getLogger(__name__)

PRESENT = "present"


def _check_period(month, year):
    try:
        month, year = int(month), int(year)
    except (TypeError, ValueError):
        raise ValidationError("Month and year must be numbers")
    if not 1 <= month <= 12:
        raise ValidationError(f"Invalid month: {month}")
    if not 1900 <= year <= 9999:
        raise ValidationError(f"Invalid year: {year}")
    return month, year


def payable_salary(monthly_salary: Optional[float], month: int, year: int, present_days: int) -> float:
    """Monthly salary pro-rated by days present. Always derived, never stored."""
    if not monthly_salary:
        return 0.0
    per_day = float(monthly_salary) / days_in_month(month, year)
    return per_day * present_days


class AttendanceService:
    def __init__(self, session: Session):
        self.session = session

    def get_attendance_for_month(self, month, year, hospital_id: Optional[str]) -> dict:
        month, year = _check_period(month, year)
        if not hospital_id:
            raise ValidationError("Hospital id is required")
        first, last = month_bounds(month, year)
        rows = self.session.exec(
            select(Attendance).where(
                Attendance.hospital_id == hospital_id,
                Attendance.attendance_date >= first,
                Attendance.attendance_date <= last,
                Attendance.status == PRESENT,
            )
        ).all()

        result = {}
        for row in rows:
            result.setdefault(row.staff_id, {})[row.attendance_date.day] = True
        return result

    def save_attendance(self, month, year, hospital_id: Optional[str], data: dict) -> int:
        """
        Replace the hospital's attendance for the month with `data`
        ({staff_id: {day: bool}}). All or nothing.
        """
        month, year = _check_period(month, year)
        if not hospital_id:
            raise ValidationError("Hospital id is required")

        max_day = days_in_month(month, year)
        rows = []
        for staff_id, days in (data or {}).items():
            for day, present in (days or {}).items():
                try:
                    day_number = int(day)
                except (TypeError, ValueError):
                    raise ValidationError(f"Invalid day: {day}")
                if not 1 <= day_number <= max_day:
                    raise ValidationError(f"Invalid day {day_number} for {month}/{year}")
                if present:
                    rows.append({
                        "staff_id": staff_id,
                        "date": date(year, month, day_number),
                        "status": PRESENT,
                        "hospital_id": hospital_id,
                    })

        first, last = month_bounds(month, year)
        with atomic(self.session):
            self.session.exec(
                delete(Attendance).where(
                    Attendance.hospital_id == hospital_id,
                    Attendance.attendance_date >= first,
                    Attendance.attendance_date <= last,
                )
            )
            if rows:
                self.session.exec(insert(Attendance.__table__).values(rows))

        logger.info(f"Saved {len(rows)} attendance rows for {hospital_id} {month}/{year}")
        return len(rows)

    def list_staff_for_attendance(self, hospital_id: Optional[str] = None) -> list:
        staff = UserRepository(self.session).list_staff(hospital_id)
        return [{"uid": s["uid"], "name": s["name"], "designation": s["designation"]} for s in staff]

    def staff_salary_report(self, month, year, hospital_id: Optional[str] = None) -> list:
        month, year = _check_period(month, year)
        first, last = month_bounds(month, year)

        counts = select(Attendance.staff_id, func.count().label("present_days")).where(
            Attendance.attendance_date >= first,
            Attendance.attendance_date <= last,
            Attendance.status == PRESENT,
        )
        if hospital_id:
            counts = counts.where(Attendance.hospital_id == hospital_id)
        present = {r.staff_id: r.present_days for r in self.session.exec(counts.group_by(Attendance.staff_id)).all()}

        report = []
        for staff in UserRepository(self.session).list_staff(hospital_id):
            present_days = present.get(staff["uid"], 0)
            report.append({
                "staff_id": staff["uid"],
                "name": staff["name"],
                "designation": staff["designation"],
                "salary": staff["salary"] or 0,
                "days_in_month": days_in_month(month, year),
                "present_days": present_days,
                "payable_salary": payable_salary(staff["salary"], month, year, present_days),
            })
        return report
