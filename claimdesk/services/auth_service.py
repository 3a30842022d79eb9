from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import JWTError, jwt

from claimdesk.core.config import get_settings

# Only non-secret user fields go into the token
TOKEN_FIELDS = ("uid", "name", "email", "role", "hospital_id", "company_id")


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    if not password_hash:
        return False
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


def create_access_token(user: dict, now: Optional[datetime] = None) -> str:
    settings = get_settings()
    issued = now or datetime.now(timezone.utc)
    payload = {key: user.get(key) for key in TOKEN_FIELDS}
    payload.update(
        iat=int(issued.timestamp()),
        exp=int((issued + timedelta(seconds=settings.TOKEN_EXPIRE_SECONDS)).timestamp()),
    )
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.TOKEN_ALGORITHM)


def decode_token(token: str) -> Optional[dict]:
    """Payload of a valid, unexpired token, otherwise None."""
    settings = get_settings()
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.TOKEN_ALGORITHM])
    except JWTError:
        return None
