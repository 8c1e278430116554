import enum


# --- Enums ---

class Currency(str, enum.Enum):
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    JPY = "JPY"
    ARS = "ARS"


class NotificationVariant(str, enum.Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


# --- Currency reference table ---
# decimals: minor units shown at display time (JPY has none)

CURRENCIES = {
    Currency.USD: {"label": "USD - Dólar estadounidense", "symbol": "US$", "decimals": 2},
    Currency.EUR: {"label": "EUR - Euro", "symbol": "€", "decimals": 2},
    Currency.GBP: {"label": "GBP - Libra esterlina", "symbol": "GBP", "decimals": 2},
    Currency.JPY: {"label": "JPY - Yen japonés", "symbol": "JPY", "decimals": 0},
    Currency.ARS: {"label": "ARS - Peso argentino", "symbol": "ARS", "decimals": 2},
}

# Currency used when the AI estimate does not name one
ESTIMATE_FALLBACK_CURRENCY = Currency.USD


# --- Urgency surcharge tiers (percent of production cost) ---

URGENCY_TIERS = {
    0: "Normal",
    10: "Prioritario",
    25: "Express",
    50: "Mismo día",
}


# --- Field groups of the cost form ---

TEXT_FIELDS = ("piece_name", "client_name", "notes")

NUMERIC_FIELDS = (
    "filament_kilo_cost",
    "filament_grams",
    "printing_time_hours",
    "printer_consumption_watts",
    "kwh_cost",
    "labor_hours",
    "labor_cost_per_hour",
    "printer_depreciation",
    "post_processing_cost",
    "failure_risk_percentage",
    "profit_margin",
)
