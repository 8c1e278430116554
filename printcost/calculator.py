"""
Cost calculator — the pricing core.

Pure math — no AI, no I/O, no rounding. Every call derives the whole
breakdown from scratch; rounding is left to display formatting.

Input: CostInput
Output: CalculatedCosts
"""

from .schemas import CostInput, CalculatedCosts


def compute(inputs: CostInput) -> CalculatedCosts:
    """
    Derive the cost breakdown and selling price for one print job.

    subtotal        = material + electricity + labor + printer wear + post-processing
    production_cost = subtotal * (1 + failure_risk% / 100)
    selling_price   = production_cost + profit + urgency surcharge
    """
    material_cost = (inputs.filament_kilo_cost / 1000) * inputs.filament_grams
    electricity_cost = (
        inputs.printer_consumption_watts * inputs.printing_time_hours / 1000
    ) * inputs.kwh_cost
    labor_cost = inputs.labor_hours * inputs.labor_cost_per_hour
    printer_wear_cost = inputs.printing_time_hours * inputs.printer_depreciation
    post_processing_cost = inputs.post_processing_cost

    subtotal = (
        material_cost + electricity_cost + labor_cost +
        printer_wear_cost + post_processing_cost
    )
    failure_risk_cost = subtotal * (inputs.failure_risk_percentage / 100)
    production_cost = subtotal + failure_risk_cost

    # Profit and urgency both apply to production cost, not to each other
    profit = production_cost * (inputs.profit_margin / 100)
    urgency_cost = production_cost * (inputs.urgency_surcharge_percentage / 100)
    selling_price = production_cost + profit + urgency_cost

    return CalculatedCosts(
        material_cost=material_cost,
        electricity_cost=electricity_cost,
        labor_cost=labor_cost,
        printer_wear_cost=printer_wear_cost,
        post_processing_cost=post_processing_cost,
        subtotal=subtotal,
        failure_risk_cost=failure_risk_cost,
        production_cost=production_cost,
        profit=profit,
        urgency_cost=urgency_cost,
        selling_price=selling_price,
    )
