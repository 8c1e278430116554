from pydantic import BaseModel, Field
from typing import Optional, List, Dict
from .models import Currency, NotificationVariant, ESTIMATE_FALLBACK_CURRENCY
from .config import settings


class CostInput(BaseModel):
    # Identity
    piece_name: str = ""
    client_name: str = ""
    notes: str = ""
    # Material
    filament_kilo_cost: float = 25000.0
    filament_grams: float = 100.0
    # Time
    printing_time_hours: float = 5.0
    # Electricity
    printer_consumption_watts: float = 350.0
    kwh_cost: float = 45.0
    # Labor
    labor_hours: float = 1.0
    labor_cost_per_hour: float = 2000.0
    # Fixed per-hour and flat costs
    printer_depreciation: float = 500.0
    post_processing_cost: float = 5000.0
    # Risk and pricing
    failure_risk_percentage: float = 5.0
    urgency_surcharge_percentage: float = 0.0
    profit_margin: float = 20.0
    currency: Currency = Field(default_factory=lambda: Currency(settings.DEFAULT_CURRENCY))

    @classmethod
    def from_simple(
        cls,
        material_cost: float,
        printing_time_hours: float,
        electricity_cost: float,
        labor_cost: float,
        printer_depreciation: float,
        post_processing_cost: float,
        profit_margin: float,
        currency: Currency = ESTIMATE_FALLBACK_CURRENCY,
    ) -> "CostInput":
        """
        Express the flat seven-field estimate as a full cost record.

        material_cost is a lump sum, electricity/labor/depreciation are per
        printing hour. Mapped as 1000 g of filament at material_cost per kg,
        a 1 kW printer at electricity_cost per kWh and labor billed for the
        whole printing time. Risk and urgency are zero.
        """
        return cls(
            filament_kilo_cost=material_cost,
            filament_grams=1000.0,
            printing_time_hours=printing_time_hours,
            printer_consumption_watts=1000.0,
            kwh_cost=electricity_cost,
            labor_hours=printing_time_hours,
            labor_cost_per_hour=labor_cost,
            printer_depreciation=printer_depreciation,
            post_processing_cost=post_processing_cost,
            failure_risk_percentage=0.0,
            urgency_surcharge_percentage=0.0,
            profit_margin=profit_margin,
            currency=currency,
        )


class CalculatedCosts(BaseModel):
    material_cost: float
    electricity_cost: float
    labor_cost: float
    printer_wear_cost: float
    post_processing_cost: float
    subtotal: float
    failure_risk_cost: float
    production_cost: float
    profit: float
    urgency_cost: float
    selling_price: float

    class Config:
        frozen = True


class EstimatesOutput(BaseModel):
    """Answer shape requested from the estimate prompt (camelCase on the wire)."""
    material_cost: float = Field(0.0, alias="materialCost")
    printing_time_hours: float = Field(0.0, alias="printingTimeHours")
    electricity_cost: float = Field(0.0, alias="electricityCost")
    labor_cost: float = Field(0.0, alias="laborCost")
    printer_depreciation: float = Field(0.0, alias="printerDepreciation")
    post_processing_cost: float = Field(0.0, alias="postProcessingCost")
    profit_margin: float = Field(20.0, alias="profitMargin")
    currency: Optional[str] = None

    class Config:
        populate_by_name = True


class Notification(BaseModel):
    title: str
    description: str
    variant: NotificationVariant = NotificationVariant.DEFAULT


# --- Request bodies ---

class EstimatePromptRequest(BaseModel):
    prompt: str


class CurrencyUpdate(BaseModel):
    currency: str


class UrgencyUpdate(BaseModel):
    urgency_surcharge_percentage: float


# --- Views ---

class RequestStatus(BaseModel):
    state: str
    busy: bool


class EstimateView(BaseModel):
    inputs: CostInput
    costs: CalculatedCosts
    formatted: Dict[str, str]
    prompt: str = ""
    optimization_suggestions: str = ""
    generator: RequestStatus
    advisor: RequestStatus
    notifications: List[Notification] = []
