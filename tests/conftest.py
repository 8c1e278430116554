"""
Shared test fixtures — a fresh estimate session per test and a test client
wired to it. No test talks to Gemini; AI calls are patched per test.
"""

import os
import pytest
from fastapi.testclient import TestClient

# Keep tests independent of any local .env
os.environ["GEMINI_API_KEY"] = ""
os.environ["DEFAULT_CURRENCY"] = "ARS"

from printcost.main import app
from printcost.schemas import CostInput
from printcost.session import EstimateSession, get_session


@pytest.fixture
def session():
    """A brand-new session, as after page load."""
    return EstimateSession()


@pytest.fixture
def client(session):
    """FastAPI test client bound to the session fixture."""
    app.dependency_overrides[get_session] = lambda: session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def example_input():
    """Reference job with a hand-checked breakdown."""
    return CostInput(
        filament_kilo_cost=25000,
        filament_grams=100,
        printing_time_hours=5,
        printer_consumption_watts=350,
        kwh_cost=45,
        labor_hours=1,
        labor_cost_per_hour=2000,
        printer_depreciation=500,
        post_processing_cost=5000,
        failure_risk_percentage=5,
        profit_margin=20,
        urgency_surcharge_percentage=0,
    )
