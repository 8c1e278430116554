"""
AI optimization advisor — free-text suggestions for a cost estimate.

Advisory only: the answer is shown verbatim and never parsed back into the
cost record.
"""

import json

from .ai_client import AIServiceError, call_gemini, parse_json_object
from .schemas import CostInput, CalculatedCosts


ADVICE_PROMPT = """Analyze the following 3D printing cost estimation details and suggest optimizations to reduce costs and improve profitability. Consider factors like material cost, print time, electricity consumption, labor, printer depreciation, post-processing costs, failure risk, urgency surcharge, and desired profit margin.

Cost Estimation Details: %s

Return ONLY a JSON object, no markdown around it:
{"optimizationSuggestions": ""}
"""


def serialize_estimate(inputs: CostInput, costs: CalculatedCosts) -> str:
    """Snapshot of the form and its breakdown, as the advisor sees it."""
    return json.dumps({
        "inputs": inputs.model_dump(mode="json"),
        "calculated": costs.model_dump(mode="json"),
    }, indent=2, ensure_ascii=False)


class OptimizationAdvisor:

    def suggest(self, cost_estimation_details: str) -> str:
        response_text = call_gemini(ADVICE_PROMPT % cost_estimation_details)
        data = parse_json_object(response_text)
        suggestions = data.get("optimizationSuggestions")
        if not isinstance(suggestions, str):
            raise AIServiceError("AI advice is missing optimizationSuggestions")
        return suggestions
