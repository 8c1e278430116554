"""
Display formatting for money amounts.

Follows the es-ES convention: "." groups thousands, "," separates decimals,
the currency symbol trails after a non-breaking space. Four-digit integer
parts are not grouped (12.345,67 but 1234,56).
"""

import math

from .models import Currency, CURRENCIES
from .schemas import CalculatedCosts

NBSP = "\u00a0"

BREAKDOWN_LABELS = {
    "material_cost": "Costo del Material",
    "electricity_cost": "Electricidad",
    "labor_cost": "Mano de Obra",
    "printer_wear_cost": "Desgaste de Impresora",
    "post_processing_cost": "Costo de Post-procesamiento",
    "subtotal": "Subtotal",
    "failure_risk_cost": "Riesgo de Falla",
    "production_cost": "Costo de Producción",
    "profit": "Ganancia",
    "urgency_cost": "Recargo por Urgencia",
    "selling_price": "Precio de Venta",
}


def _group_thousands(digits: str) -> str:
    if len(digits) <= 4:
        return digits
    groups = []
    while len(digits) > 3:
        groups.insert(0, digits[-3:])
        digits = digits[:-3]
    groups.insert(0, digits)
    return ".".join(groups)


def format_currency(value: float, currency) -> str:
    """Format an amount in the given currency, e.g. 12.699,23 ARS."""
    code = Currency(currency)
    meta = CURRENCIES[code]
    decimals = meta["decimals"]

    if not math.isfinite(value):
        value = 0.0
    text = f"{abs(value):.{decimals}f}"
    if decimals:
        int_part, frac_part = text.split(".")
        number = _group_thousands(int_part) + "," + frac_part
    else:
        number = _group_thousands(text)

    # Negative zero after rounding prints without a sign
    sign = "-" if value < 0 and float(text) != 0 else ""
    return f"{sign}{number}{NBSP}{meta['symbol']}"


def format_breakdown(costs: CalculatedCosts, currency) -> dict:
    """Every breakdown figure formatted for display, keyed by field name."""
    return {
        field: format_currency(getattr(costs, field), currency)
        for field in BREAKDOWN_LABELS
    }
