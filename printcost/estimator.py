"""
AI estimate generator — pre-fills the cost form from a job description.

User describes a print job in plain language.
Gemini answers with the flat seven-field estimate (plus currency).
The answer is mapped onto a full CostInput; the app does all the math.
"""

import logging

from pydantic import ValidationError

from .ai_client import AIServiceError, call_gemini, parse_json_object
from .models import Currency, ESTIMATE_FALLBACK_CURRENCY
from .schemas import CostInput, EstimatesOutput

logger = logging.getLogger(__name__)

ESTIMATE_PROMPT = """You are an expert in 3D printing cost estimation. Based on the user's description of the 3D print job, provide reasonable estimates for the following cost parameters in JSON format. Use USD as the default currency.

Description: %s

Cost Parameters:
- materialCost: Estimated cost of the material used for printing.
- printingTimeHours: Estimated printing time in hours.
- electricityCost: Estimated cost of electricity consumption per printing hour.
- laborCost: Estimated labor cost per hour for the print job.
- printerDepreciation: Estimated depreciation cost of the printer per printing hour.
- postProcessingCost: Estimated post-processing costs.
- profitMargin: Desired profit margin for the print job, as a percentage.
- currency: The currency to use for the cost estimates. Defaults to USD.

Ensure that the estimates are realistic and consider the context provided in the description.

Output ONLY the estimates as a JSON object, no explanation or markdown:
{"materialCost":0,"printingTimeHours":0,"electricityCost":0,"laborCost":0,"printerDepreciation":0,"postProcessingCost":0,"profitMargin":0,"currency":"USD"}
"""


class EmptyDescription(ValueError):
    """Raised when an estimate is requested for a blank description."""


class EstimateGenerator:
    """
    Turns a free-text job description into a CostInput.

    Raises EmptyDescription before any network call for blank input and
    AIServiceError for anything the provider gets wrong.
    """

    def generate(self, description: str) -> CostInput:
        if not description or not description.strip():
            raise EmptyDescription("A job description is required")

        response_text = call_gemini(self._build_prompt(description))
        estimate = self._parse_response(response_text)
        return self._to_cost_input(estimate)

    def _build_prompt(self, description: str) -> str:
        return ESTIMATE_PROMPT % description.strip()

    def _parse_response(self, response_text: str) -> EstimatesOutput:
        data = parse_json_object(response_text)
        # Provider may send null for fields it could not estimate
        data = {k: v for k, v in data.items() if v is not None}
        try:
            return EstimatesOutput.model_validate(data)
        except ValidationError as e:
            raise AIServiceError(f"AI estimate has invalid fields: {e}") from e

    def _to_cost_input(self, estimate: EstimatesOutput) -> CostInput:
        return CostInput.from_simple(
            material_cost=estimate.material_cost,
            printing_time_hours=estimate.printing_time_hours,
            electricity_cost=estimate.electricity_cost,
            labor_cost=estimate.labor_cost,
            printer_depreciation=estimate.printer_depreciation,
            post_processing_cost=estimate.post_processing_cost,
            profit_margin=estimate.profit_margin,
            currency=self._resolve_currency(estimate.currency),
        )

    def _resolve_currency(self, code) -> Currency:
        if not code:
            return ESTIMATE_FALLBACK_CURRENCY
        try:
            return Currency(str(code).strip().upper())
        except ValueError:
            logger.info("AI estimate used unsupported currency %r — using %s",
                        code, ESTIMATE_FALLBACK_CURRENCY.value)
            return ESTIMATE_FALLBACK_CURRENCY
