from typing import Any, Dict, List

from fastapi import APIRouter, HTTPException

from ..calculator import compute
from ..formatting import format_breakdown, BREAKDOWN_LABELS
from ..models import CURRENCIES, URGENCY_TIERS
from ..store import InvalidChoice, UnknownField, build_record

router = APIRouter(tags=["catalog"])


@router.get("/currencies")
def list_currencies() -> List[dict]:
    return [
        {"code": code.value, "label": meta["label"], "symbol": meta["symbol"]}
        for code, meta in CURRENCIES.items()
    ]


@router.get("/urgency-tiers")
def list_urgency_tiers() -> List[dict]:
    return [
        {"percentage": pct, "label": label}
        for pct, label in URGENCY_TIERS.items()
    ]


@router.get("/breakdown-labels")
def list_breakdown_labels() -> dict:
    return BREAKDOWN_LABELS


@router.post("/calculate")
def calculate(values: Dict[str, Any]):
    """
    Stateless breakdown of a posted record — the session is not touched.
    Posted values go through the same input rules as form edits.
    """
    try:
        inputs = build_record(values)
    except (UnknownField, InvalidChoice) as e:
        raise HTTPException(status_code=400, detail=str(e))
    costs = compute(inputs)
    return {
        "inputs": inputs.model_dump(mode="json"),
        "costs": costs.model_dump(),
        "formatted": format_breakdown(costs, inputs.currency),
    }
