from fastapi import APIRouter, Depends
from sqlmodel import Session

from claimdesk.db.session import get_session
from claimdesk.services.activity_log import ACTIVITY_PAGE_SIZE, list_activity_logs

router = APIRouter()

@router.get("")
async def activity_logs(page: int = 1, limit: int = ACTIVITY_PAGE_SIZE, session: Session = Depends(get_session)):
    return list_activity_logs(session, page, limit)
