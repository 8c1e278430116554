"""
AI assistance endpoints — powered by Gemini.

POST /api/ai/estimate  — describe a print job, get the form pre-filled
POST /api/ai/optimize  — suggestions for lowering cost of the current form

Both are one-shot: a call that is still running answers a second trigger
with 409 instead of being cancelled.
"""

from fastapi import APIRouter, Depends, HTTPException

from ..estimator import EmptyDescription
from ..request_state import RequestInProgress
from ..schemas import EstimatePromptRequest, EstimateView
from ..session import AIRequestFailed, EstimateSession, get_session

router = APIRouter(prefix="/ai", tags=["ai-assist"])


@router.post("/estimate", response_model=EstimateView)
def ai_estimate(request: EstimatePromptRequest, session: EstimateSession = Depends(get_session)):
    """
    Replace the form with an AI estimate for the description.
    On failure the form keeps its previous values.
    """
    try:
        session.generate_estimate(request.prompt)
    except EmptyDescription:
        raise HTTPException(
            status_code=400,
            detail=session.notifications[-1].model_dump(mode="json"),
        )
    except RequestInProgress:
        raise HTTPException(status_code=409, detail="An estimate is already being generated")
    except AIRequestFailed as e:
        raise HTTPException(status_code=502, detail=e.notification.model_dump(mode="json"))
    return session.view()


@router.post("/optimize")
def ai_optimize(session: EstimateSession = Depends(get_session)):
    """Advisory only — the cost form is never changed."""
    try:
        suggestions = session.suggest_optimizations()
    except RequestInProgress:
        raise HTTPException(status_code=409, detail="Suggestions are already being generated")
    except AIRequestFailed as e:
        raise HTTPException(status_code=502, detail=e.notification.model_dump(mode="json"))
    return {"optimization_suggestions": suggestions}
