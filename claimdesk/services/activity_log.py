import logging
from enum import Enum
from typing import Optional

from sqlmodel import Session, select

from claimdesk.db.models import ActivityLog
from claimdesk.services.common import count_rows, page_result, paginate

logger = logging.getLogger(__name__)

ACTIVITY_PAGE_SIZE = 20


class ActionType(str, Enum):
    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"
    CREATE_PATIENT = "CREATE_PATIENT"
    UPDATE_PATIENT = "UPDATE_PATIENT"
    DELETE_PATIENT = "DELETE_PATIENT"
    CREATE_CLAIM = "CREATE_CLAIM"
    UPDATE_CLAIM = "UPDATE_CLAIM"
    DELETE_CLAIM = "DELETE_CLAIM"
    CREATE_COMPANY = "CREATE_COMPANY"
    UPDATE_COMPANY = "UPDATE_COMPANY"
    DELETE_COMPANY = "DELETE_COMPANY"
    CREATE_HOSPITAL = "CREATE_HOSPITAL"
    UPDATE_HOSPITAL = "UPDATE_HOSPITAL"
    DELETE_HOSPITAL = "DELETE_HOSPITAL"
    ARCHIVE_HOSPITAL = "ARCHIVE_HOSPITAL"
    CREATE_TPA = "CREATE_TPA"
    UPDATE_TPA = "UPDATE_TPA"
    DELETE_TPA = "DELETE_TPA"
    CREATE_STAFF = "CREATE_STAFF"
    UPDATE_STAFF = "UPDATE_STAFF"
    DELETE_STAFF = "DELETE_STAFF"
    CREATE_FIELD = "CREATE_FIELD"
    UPDATE_FIELD = "UPDATE_FIELD"
    DELETE_FIELD = "DELETE_FIELD"
    CREATE_PREAUTH = "CREATE_PREAUTH"
    UPDATE_PREAUTH_STATUS = "UPDATE_PREAUTH_STATUS"
    DELETE_PREAUTH = "DELETE_PREAUTH"
    SAVE_ATTENDANCE = "SAVE_ATTENDANCE"


def log_activity(
    session: Session,
    user_id: Optional[str],
    user_name: Optional[str],
    action_type: ActionType,
    details: str,
    target_id=None,
    target_type: Optional[str] = None,
) -> bool:
    """
    Append one audit row. Never raises: a failed write is rolled back and
    logged so it cannot undo or block the mutation that triggered it.
    """
    try:
        entry = ActivityLog(
            user_id=user_id,
            user_name=user_name,
            action_type=ActionType(action_type).value,
            details=details,
            target_id=str(target_id) if target_id is not None else None,
            target_type=target_type,
        )
        session.add(entry)
        session.commit()
        return True
    except Exception:
        session.rollback()
        logger.exception(f"Failed to write activity log ({action_type})")
        return False


def list_activity_logs(session: Session, page: int = 1, limit: int = ACTIVITY_PAGE_SIZE) -> dict:
    page, limit, offset = paginate(page, limit or ACTIVITY_PAGE_SIZE)
    statement = select(ActivityLog)
    total = count_rows(session, statement)
    rows = session.exec(
        statement.order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc()).offset(offset).limit(limit)
    ).all()
    return page_result([row.model_dump() for row in rows], total)
