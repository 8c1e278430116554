"""
Estimate form API — the cost record of the current session.

GET   /api/estimate           — inputs, breakdown, request states, notifications
PATCH /api/estimate/fields    — edit form fields ({field: raw_text, ...})
PUT   /api/estimate/currency  — select the display currency
PUT   /api/estimate/urgency   — select an urgency surcharge tier
POST  /api/estimate/reset     — back to defaults
POST  /api/estimate/save      — confirm save (no persistence)

Every mutation answers with the full recomputed view.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException

from ..schemas import CurrencyUpdate, EstimateView, UrgencyUpdate
from ..session import EstimateSession, get_session
from ..store import InvalidChoice, UnknownField

router = APIRouter(prefix="/estimate", tags=["estimate"])


def _bad_request(session: EstimateSession):
    return HTTPException(
        status_code=400,
        detail=session.notifications[-1].model_dump(mode="json"),
    )


@router.get("", response_model=EstimateView)
def get_estimate(session: EstimateSession = Depends(get_session)):
    return session.view()


@router.patch("/fields", response_model=EstimateView)
def update_fields(values: Dict[str, Any], session: EstimateSession = Depends(get_session)):
    """Malformed numbers are stored as 0; unknown field names are rejected."""
    try:
        session.set_fields(values)
    except UnknownField:
        raise _bad_request(session)
    return session.view()


@router.put("/currency", response_model=EstimateView)
def update_currency(update: CurrencyUpdate, session: EstimateSession = Depends(get_session)):
    try:
        session.set_currency(update.currency)
    except InvalidChoice:
        raise _bad_request(session)
    return session.view()


@router.put("/urgency", response_model=EstimateView)
def update_urgency(update: UrgencyUpdate, session: EstimateSession = Depends(get_session)):
    try:
        session.set_urgency(update.urgency_surcharge_percentage)
    except InvalidChoice:
        raise _bad_request(session)
    return session.view()


@router.post("/reset", response_model=EstimateView)
def reset_estimate(session: EstimateSession = Depends(get_session)):
    session.reset()
    return session.view()


@router.post("/save")
def save_estimate(session: EstimateSession = Depends(get_session)):
    notification = session.save()
    return {"saved": True, "notification": notification.model_dump(mode="json")}
