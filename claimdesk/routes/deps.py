from typing import Optional

from fastapi import Header, Request

from claimdesk.core.errors import NotFoundError
from claimdesk.services.auth_service import decode_token
from claimdesk.services.storage_service import StorageService


def get_actor(authorization: Optional[str] = Header(default=None)) -> dict:
    """Who is acting, for the audit trail. Anonymous requests log as System."""
    if authorization and authorization.lower().startswith("bearer "):
        payload = decode_token(authorization[7:].strip())
        if payload:
            return {"uid": payload.get("uid"), "name": payload.get("name")}
    return {"uid": None, "name": "System"}


def get_storage(request: Request) -> StorageService:
    return request.app.state.storage


def found(result, message: str):
    """Repositories signal not-found with None or zero rows affected."""
    if not result:
        raise NotFoundError(message)
    return result
