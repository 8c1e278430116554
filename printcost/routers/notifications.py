from typing import List

from fastapi import APIRouter, Depends

from ..schemas import Notification
from ..session import EstimateSession, get_session

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=List[Notification])
def list_notifications(session: EstimateSession = Depends(get_session)):
    return session.notifications


@router.delete("")
def clear_notifications(session: EstimateSession = Depends(get_session)):
    """Dismiss every notification."""
    session.clear_notifications()
    return {"ok": True}
