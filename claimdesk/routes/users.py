from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr
from sqlmodel import Session

from claimdesk.db.session import get_session
from claimdesk.routes.deps import found, get_actor
from claimdesk.services.activity_log import ActionType, log_activity
from claimdesk.services.auth_service import create_access_token
from claimdesk.services.user_repository import Role, UserRepository

router = APIRouter()

# --- Pydantic Models ---

class SignupIn(BaseModel):
    name: str
    email: EmailStr
    password: str
    role: str = Role.HOSPITAL_STAFF.value
    hospital_id: Optional[str] = None
    company_id: Optional[str] = None
    designation: Optional[str] = None
    department: Optional[str] = None
    joining_date: Optional[date] = None
    end_date: Optional[date] = None
    shift_time: Optional[str] = None
    number: Optional[str] = None
    salary: Optional[float] = None

class LoginIn(BaseModel):
    email: str
    password: str

# --- Endpoints ---

@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(payload: SignupIn, session: Session = Depends(get_session), actor: dict = Depends(get_actor)):
    uid = UserRepository(session).create_user(payload.model_dump())
    log_activity(session, actor["uid"], actor["name"], ActionType.CREATE_STAFF,
                 f"Created {payload.role} {payload.name}", uid, "staff")
    return {"message": "User created successfully.", "uid": uid}

@router.post("/login")
async def login(payload: LoginIn, session: Session = Depends(get_session)):
    user = UserRepository(session).authenticate(payload.email, payload.password)
    log_activity(session, user["uid"], user["name"], ActionType.LOGIN, f"{user['name']} logged in", user["uid"], "user")
    return {"message": "Login successful.", "token": create_access_token(user), "user": user}

@router.post("/logout")
async def logout(session: Session = Depends(get_session), actor: dict = Depends(get_actor)):
    if actor["uid"]:
        log_activity(session, actor["uid"], actor["name"], ActionType.LOGOUT, f"{actor['name']} logged out",
                     actor["uid"], "user")
    return {"message": "Logged out."}

@router.get("/users")
async def list_users(role: Optional[str] = None, session: Session = Depends(get_session)):
    return UserRepository(session).list_users(role)

@router.get("/users/{uid}")
async def get_user(uid: str, session: Session = Depends(get_session)):
    return found(UserRepository(session).get_user_by_id(uid), "User not found")

@router.get("/staff")
async def list_staff(hospital_id: Optional[str] = None, session: Session = Depends(get_session)):
    return UserRepository(session).list_staff(hospital_id)
