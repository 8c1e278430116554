"""
Estimate session — one user's cost form and everything hanging off it.

Owns the record store, the AI description prompt, the latest optimization
suggestions, the request trackers for both AI calls and the notification
feed. Routes talk to the session; the session talks to the calculator and
the AI collaborators.

Failure policy: nothing here is fatal. Validation problems and AI failures
each leave exactly one notification and the cost record as it was.
"""

import logging
from typing import List, Optional

from .advisor import OptimizationAdvisor, serialize_estimate
from .calculator import compute
from .estimator import EmptyDescription, EstimateGenerator
from .formatting import format_breakdown
from .models import NotificationVariant, NUMERIC_FIELDS, TEXT_FIELDS
from .request_state import RequestTracker
from .schemas import CalculatedCosts, EstimateView, Notification, RequestStatus
from .store import (
    ApplyEstimate, EstimateStore, InvalidChoice, Reset, SetCurrency, SetField,
    SetUrgency, UnknownField,
)

logger = logging.getLogger(__name__)

# --- Notification texts ---
MSG_EMPTY_DESCRIPTION = ("Error", "Por favor, introduzca una descripción para generar la estimación.")
MSG_ESTIMATE_APPLIED = ("Éxito", "Estimaciones generadas con IA y aplicadas.")
MSG_ESTIMATE_FAILED = ("Error de IA", "No se pudieron generar las estimaciones.")
MSG_ADVICE_FAILED = ("Error de IA", "No se pudieron generar las sugerencias de optimización.")
MSG_SAVED = ("Guardado", "Su estimación de costos ha sido guardada.")
MSG_INVALID_INPUT = "Dato inválido"

MAX_NOTIFICATIONS = 5


class AIRequestFailed(Exception):
    """An AI call settled with an error; the notification is attached."""

    def __init__(self, notification: Notification):
        super().__init__(notification.description)
        self.notification = notification


class EstimateSession:

    def __init__(self, generator: Optional[EstimateGenerator] = None,
                 advisor: Optional[OptimizationAdvisor] = None):
        self.store = EstimateStore()
        self.generator = generator or EstimateGenerator()
        self.advisor = advisor or OptimizationAdvisor()
        self.generator_request = RequestTracker("estimate")
        self.advisor_request = RequestTracker("optimize")
        self.prompt = ""
        self.optimization_suggestions = ""
        self.notifications: List[Notification] = []

    # --- Derived state ---

    @property
    def costs(self) -> CalculatedCosts:
        return compute(self.store.record)

    def view(self) -> EstimateView:
        record = self.store.record
        costs = compute(record)
        return EstimateView(
            inputs=record,
            costs=costs,
            formatted=format_breakdown(costs, record.currency),
            prompt=self.prompt,
            optimization_suggestions=self.optimization_suggestions,
            generator=self._status(self.generator_request),
            advisor=self._status(self.advisor_request),
            notifications=list(self.notifications),
        )

    def _status(self, tracker: RequestTracker) -> RequestStatus:
        return RequestStatus(state=tracker.state.value, busy=tracker.busy)

    # --- Notifications ---

    def notify(self, title: str, description: str,
               variant: NotificationVariant = NotificationVariant.DEFAULT) -> Notification:
        notification = Notification(title=title, description=description, variant=variant)
        self.notifications.append(notification)
        # Only the most recent toasts are kept
        del self.notifications[:-MAX_NOTIFICATIONS]
        return notification

    def clear_notifications(self):
        self.notifications.clear()

    # --- Form edits ---

    def set_fields(self, values: dict):
        """
        Apply several form entries at once. Unknown field names reject the
        whole batch so a typo never leaves a half-applied edit.
        """
        unknown = [name for name in values if name not in TEXT_FIELDS + NUMERIC_FIELDS]
        if unknown:
            message = "Unknown cost field: %s" % ", ".join(unknown)
            self.notify(MSG_INVALID_INPUT, message, NotificationVariant.DESTRUCTIVE)
            raise UnknownField(message)
        for name, raw in values.items():
            self.store.dispatch(SetField(name, raw))

    def set_currency(self, code: str):
        self._dispatch_choice(SetCurrency(code))

    def set_urgency(self, percentage):
        self._dispatch_choice(SetUrgency(percentage))

    def _dispatch_choice(self, action):
        try:
            self.store.dispatch(action)
        except InvalidChoice as e:
            self.notify(MSG_INVALID_INPUT, str(e), NotificationVariant.DESTRUCTIVE)
            raise

    def reset(self):
        self.store.dispatch(Reset())
        self.optimization_suggestions = ""

    def save(self) -> Notification:
        # Persistence is not implemented; saving only confirms to the user.
        return self.notify(*MSG_SAVED)

    # --- AI flows ---

    def generate_estimate(self, prompt: str):
        """
        Replace the cost record with an AI estimate for the description.

        Blank descriptions are refused before the tracker or the network is
        touched. Raises RequestInProgress while a previous estimate runs.
        """
        text = prompt or ""
        if not text.strip():
            self.notify(*MSG_EMPTY_DESCRIPTION, variant=NotificationVariant.DESTRUCTIVE)
            raise EmptyDescription("A job description is required")

        self.generator_request.start()
        self.prompt = text
        try:
            estimate = self.generator.generate(text)
        except Exception as e:
            logger.warning("AI estimate failed: %s — keeping current values", e)
            self.generator_request.fail()
            raise AIRequestFailed(self.notify(
                *MSG_ESTIMATE_FAILED, variant=NotificationVariant.DESTRUCTIVE,
            )) from e

        self.store.dispatch(ApplyEstimate(estimate))
        self.generator_request.succeed()
        self.notify(*MSG_ESTIMATE_APPLIED)

    def suggest_optimizations(self) -> str:
        """Ask the advisor about the current record. Never mutates it."""
        self.advisor_request.start()
        self.optimization_suggestions = ""
        details = serialize_estimate(self.store.record, self.costs)
        try:
            suggestions = self.advisor.suggest(details)
        except Exception as e:
            logger.warning("AI optimization advice failed: %s", e)
            self.advisor_request.fail()
            raise AIRequestFailed(self.notify(
                *MSG_ADVICE_FAILED, variant=NotificationVariant.DESTRUCTIVE,
            )) from e

        self.optimization_suggestions = suggestions
        self.advisor_request.succeed()
        return suggestions


# Process-local, single-user: one session lives for the life of the app
_current_session = EstimateSession()


def get_session() -> EstimateSession:
    return _current_session
