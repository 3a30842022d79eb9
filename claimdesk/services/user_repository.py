import logging
from enum import Enum
from typing import Optional

from sqlalchemy import or_
from sqlmodel import Session, select

from claimdesk.core.errors import AuthenticationError, ConflictError, NotFoundError, ValidationError
from claimdesk.core.utils import new_prefixed_id
from claimdesk.db.models import HospitalStaff, User
from claimdesk.services.auth_service import hash_password, verify_password
from claimdesk.services.common import check_email, require

logger = logging.getLogger(__name__)

# bcrypt only hashes the first 72 bytes and rejects longer input
MAX_PASSWORD_BYTES = 72


class Role(str, Enum):
    ADMIN = "Admin"
    HOSPITAL_ADMIN = "Hospital Admin"
    HOSPITAL_STAFF = "Hospital Staff"
    COMPANY_ADMIN = "Company Admin"


def public_user(user: User) -> dict:
    data = user.model_dump()
    data.pop("password_hash", None)
    return data


class UserRepository:
    def __init__(self, session: Session):
        self.session = session

    def list_users(self, role: Optional[str] = None) -> list:
        statement = select(User)
        if role:
            statement = statement.where(User.role == role)
        return [public_user(u) for u in self.session.exec(statement.order_by(User.name)).all()]

    def get_user_by_id(self, uid: str) -> Optional[dict]:
        user = self.session.get(User, uid)
        return public_user(user) if user else None

    def list_staff(self, hospital_id: Optional[str] = None) -> list:
        statement = select(User).where(User.role == Role.HOSPITAL_STAFF.value)
        if hospital_id:
            assigned = select(HospitalStaff.staff_id).where(HospitalStaff.hospital_id == hospital_id)
            statement = statement.where(or_(User.hospital_id == hospital_id, User.uid.in_(assigned)))
        return [public_user(u) for u in self.session.exec(statement.order_by(User.name)).all()]

    def create_user(self, fields: dict) -> str:
        require(fields, "name", "email", "role")
        check_email(fields["email"])
        try:
            role = Role(fields["role"])
        except ValueError:
            raise ValidationError(f"Invalid role: {fields['role']}")
        if fields.get("password") and len(fields["password"].encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes")

        existing = self.session.exec(select(User).where(User.email == fields["email"])).first()
        if existing:
            raise ConflictError("A user with this email already exists")

        data = {k: v for k, v in fields.items() if k != "password"}
        data["role"] = role.value
        if fields.get("password"):
            data["password_hash"] = hash_password(fields["password"])

        user = User(uid=new_prefixed_id("user"), **data)
        self.session.add(user)
        self.session.commit()
        logger.info(f"Created user {user.uid} ({user.role})")
        return user.uid

    def authenticate(self, email: str, password: str) -> dict:
        if not email or not password:
            raise ValidationError("Email and password are required")
        user = self.session.exec(select(User).where(User.email == email)).first()
        if not user:
            raise NotFoundError("User not found")
        if not verify_password(password, user.password_hash):
            raise AuthenticationError("Invalid credentials")
        return public_user(user)
