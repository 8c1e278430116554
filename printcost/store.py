"""
Estimate record store — the single mutation boundary for the cost form.

Every change to the CostInput goes through reduce(record, action), which
returns a new record and never touches the one it was given.

Numeric form entries are lenient: empty or malformed text is stored as 0
rather than rejected, so a half-typed value never breaks the breakdown.
"""

import logging
import math
from dataclasses import dataclass
from typing import Union

from .models import Currency, URGENCY_TIERS, TEXT_FIELDS, NUMERIC_FIELDS
from .schemas import CostInput

logger = logging.getLogger(__name__)


class UnknownField(ValueError):
    """Raised when an action names a field the cost form does not have."""


class InvalidChoice(ValueError):
    """Raised when a value is outside an enumerated set (currency, urgency tier)."""


def coerce_number(raw) -> float:
    """Parse a form entry as a float; anything unusable becomes 0."""
    if raw is None or isinstance(raw, bool):
        return 0.0
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return 0.0
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 0.0
    return value if math.isfinite(value) else 0.0


def parse_currency(code) -> Currency:
    try:
        return Currency(str(code).strip().upper())
    except ValueError:
        raise InvalidChoice(
            f"Unsupported currency: {code}. "
            f"Available: {[c.value for c in Currency]}"
        )


def parse_urgency(percentage) -> float:
    try:
        value = float(str(percentage).strip())
    except ValueError:
        value = None
    if value not in URGENCY_TIERS:
        raise InvalidChoice(
            f"Unsupported urgency surcharge: {percentage}. "
            f"Available: {list(URGENCY_TIERS.keys())}"
        )
    return float(value)


# --- Actions ---

@dataclass(frozen=True)
class SetField:
    name: str
    raw: object


@dataclass(frozen=True)
class SetCurrency:
    code: str


@dataclass(frozen=True)
class SetUrgency:
    percentage: object


@dataclass(frozen=True)
class ApplyEstimate:
    record: CostInput


@dataclass(frozen=True)
class Reset:
    pass


Action = Union[SetField, SetCurrency, SetUrgency, ApplyEstimate, Reset]


def default_record() -> CostInput:
    return CostInput()


def reduce(record: CostInput, action: Action) -> CostInput:
    """Apply one action and return the resulting record."""
    if isinstance(action, SetField):
        if action.name in NUMERIC_FIELDS:
            return record.model_copy(update={action.name: coerce_number(action.raw)})
        if action.name in TEXT_FIELDS:
            text = "" if action.raw is None else str(action.raw)
            return record.model_copy(update={action.name: text})
        raise UnknownField(f"Unknown cost field: {action.name}")

    if isinstance(action, SetCurrency):
        return record.model_copy(update={"currency": parse_currency(action.code)})

    if isinstance(action, SetUrgency):
        return record.model_copy(
            update={"urgency_surcharge_percentage": parse_urgency(action.percentage)}
        )

    if isinstance(action, ApplyEstimate):
        return action.record.model_copy()

    if isinstance(action, Reset):
        return default_record()

    raise TypeError(f"Unsupported action: {action!r}")


def build_record(values: dict) -> CostInput:
    """
    Build a record from posted form values, starting from the defaults.

    Same rules as interactive edits: numbers are coerced, currency and
    urgency must be in their sets, unknown names raise UnknownField.
    """
    record = default_record()
    for name, raw in values.items():
        if name == "currency":
            record = reduce(record, SetCurrency(raw))
        elif name == "urgency_surcharge_percentage":
            record = reduce(record, SetUrgency(raw))
        else:
            record = reduce(record, SetField(name, raw))
    return record


class EstimateStore:
    """Holds the current record; all writes go through dispatch()."""

    def __init__(self, record: CostInput = None):
        self._record = record if record is not None else default_record()

    @property
    def record(self) -> CostInput:
        return self._record

    def dispatch(self, action: Action) -> CostInput:
        self._record = reduce(self._record, action)
        if isinstance(action, (ApplyEstimate, Reset)):
            logger.info("Cost record replaced (%s)", type(action).__name__)
        return self._record
