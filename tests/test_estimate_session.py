"""
Estimate session tests — form edits, notifications, and the AI failure policy.

Every failure must leave exactly one notification and the cost record as
it was.
"""

from unittest.mock import MagicMock, patch

import pytest

from printcost.ai_client import AIServiceError
from printcost.estimator import EmptyDescription
from printcost.models import Currency, NotificationVariant
from printcost.request_state import RequestInProgress, RequestState
from printcost.schemas import CostInput
from printcost.session import AIRequestFailed, EstimateSession, MAX_NOTIFICATIONS
from printcost.store import InvalidChoice, UnknownField


def _estimate():
    return CostInput.from_simple(10, 5, 0.15, 20, 0.5, 5, 20)


# ============================================================
# Form edits
# ============================================================

def test_new_session_has_defaults_and_no_notifications(session):
    view = session.view()
    assert view.inputs == CostInput()
    assert view.notifications == []
    assert view.generator.state == "idle"
    assert view.advisor.busy is False


def test_view_recomputes_after_every_edit(session):
    first = session.view().costs.selling_price
    session.set_fields({"filament_grams": "200"})
    second = session.view().costs.selling_price
    assert second > first
    session.set_fields({"filament_grams": ""})
    assert session.view().costs.material_cost == 0


def test_set_fields_unknown_name_rejects_whole_batch(session):
    with pytest.raises(UnknownField):
        session.set_fields({"filament_grams": "300", "colour": "red"})
    assert session.store.record.filament_grams == 100
    assert len(session.notifications) == 1
    assert session.notifications[0].variant == NotificationVariant.DESTRUCTIVE


def test_invalid_currency_notifies_once_and_keeps_state(session):
    with pytest.raises(InvalidChoice):
        session.set_currency("BTC")
    assert session.store.record.currency == Currency.ARS
    assert len(session.notifications) == 1


def test_urgency_tier_selection(session):
    session.set_urgency(25)
    costs = session.view().costs
    assert costs.urgency_cost == pytest.approx(costs.production_cost * 0.25)


def test_view_formats_in_selected_currency(session):
    session.set_currency("EUR")
    assert session.view().formatted["selling_price"].endswith("€")


def test_reset_restores_defaults_and_clears_suggestions(session):
    session.set_fields({"client_name": "Ana", "labor_hours": "4"})
    session.optimization_suggestions = "old advice"
    session.reset()
    assert session.store.record == CostInput()
    assert session.optimization_suggestions == ""


def test_save_only_notifies(session):
    before = session.store.record
    notification = session.save()
    assert notification.title == "Guardado"
    assert session.notifications == [notification]
    assert session.store.record is before


def test_clear_notifications(session):
    session.save()
    session.clear_notifications()
    assert session.notifications == []


# ============================================================
# Estimate generator flow
# ============================================================

def test_generate_estimate_success_replaces_record():
    generator = MagicMock()
    generator.generate.return_value = _estimate()
    session = EstimateSession(generator=generator)
    session.set_fields({"piece_name": "old"})

    session.generate_estimate("soporte de cámara en PETG")

    generator.generate.assert_called_once_with("soporte de cámara en PETG")
    assert session.store.record == _estimate()
    assert session.generator_request.state is RequestState.SETTLED_OK
    assert len(session.notifications) == 1
    assert session.notifications[0].variant == NotificationVariant.DEFAULT


def test_generate_estimate_failure_keeps_record_and_notifies_once():
    generator = MagicMock()
    generator.generate.side_effect = AIServiceError("provider down")
    session = EstimateSession(generator=generator)
    session.set_fields({"filament_grams": "321", "client_name": "Ana"})
    before = session.store.record

    with pytest.raises(AIRequestFailed) as exc:
        session.generate_estimate("a vase")

    assert session.store.record == before
    assert len(session.notifications) == 1
    assert session.notifications[0] is exc.value.notification
    assert session.notifications[0].variant == NotificationVariant.DESTRUCTIVE
    assert session.generator_request.state is RequestState.SETTLED_ERROR
    assert session.generator_request.busy is False


def test_generate_estimate_unexpected_error_is_not_fatal():
    generator = MagicMock()
    generator.generate.side_effect = RuntimeError("weird")
    session = EstimateSession(generator=generator)
    with pytest.raises(AIRequestFailed):
        session.generate_estimate("a vase")
    # Session still usable
    generator.generate.side_effect = None
    generator.generate.return_value = _estimate()
    session.generate_estimate("a vase")
    assert session.store.record == _estimate()


@pytest.mark.parametrize("prompt", ["", "   ", "\n\t", None])
def test_blank_description_no_call_one_notification(session, prompt):
    fake = MagicMock()
    before = session.store.record
    with patch("printcost.estimator.call_gemini", fake):
        with pytest.raises(EmptyDescription):
            session.generate_estimate(prompt)
    fake.assert_not_called()
    assert len(session.notifications) == 1
    assert session.notifications[0].title == "Error"
    assert session.store.record is before
    assert session.generator_request.state is RequestState.IDLE


def test_provider_rejection_through_real_generator(session):
    """Simulated Gemini rejection: prior record kept, one failure notification."""
    before = session.store.record
    with patch("printcost.estimator.call_gemini", side_effect=AIServiceError("429")):
        with pytest.raises(AIRequestFailed):
            session.generate_estimate("a phone stand")
    assert session.store.record == before
    assert [n.title for n in session.notifications] == ["Error de IA"]


def test_second_estimate_while_busy_is_refused():
    generator = MagicMock()
    session = EstimateSession(generator=generator)
    session.generator_request.start()
    with pytest.raises(RequestInProgress):
        session.generate_estimate("another")
    generator.generate.assert_not_called()
    assert session.notifications == []


# ============================================================
# Optimization advisor flow
# ============================================================

def test_suggest_optimizations_sends_snapshot_and_keeps_record():
    advisor = MagicMock()
    advisor.suggest.return_value = "Reduce infill."
    session = EstimateSession(advisor=advisor)
    before = session.store.record

    assert session.suggest_optimizations() == "Reduce infill."

    details = advisor.suggest.call_args[0][0]
    assert '"selling_price"' in details
    assert session.optimization_suggestions == "Reduce infill."
    assert session.store.record is before
    assert session.advisor_request.state is RequestState.SETTLED_OK


def test_suggest_optimizations_failure_clears_old_text_and_notifies():
    advisor = MagicMock()
    advisor.suggest.side_effect = AIServiceError("timeout")
    session = EstimateSession(advisor=advisor)
    session.optimization_suggestions = "stale"

    with pytest.raises(AIRequestFailed):
        session.suggest_optimizations()

    assert session.optimization_suggestions == ""
    assert len(session.notifications) == 1
    assert session.advisor_request.state is RequestState.SETTLED_ERROR


def test_advisor_busy_does_not_block_estimates():
    generator = MagicMock()
    generator.generate.return_value = _estimate()
    session = EstimateSession(generator=generator, advisor=MagicMock())
    session.advisor_request.start()
    session.generate_estimate("still works")
    assert session.store.record == _estimate()
    with pytest.raises(RequestInProgress):
        session.suggest_optimizations()


def test_refused_estimate_keeps_prompt_of_running_request(session):
    session.generator_request.start()
    session.prompt = "first job"
    with pytest.raises(RequestInProgress):
        session.generate_estimate("second job")
    assert session.prompt == "first job"


def test_blank_description_does_not_overwrite_prompt(session):
    session.prompt = "earlier job"
    with pytest.raises(EmptyDescription):
        session.generate_estimate("   ")
    assert session.prompt == "earlier job"


# ============================================================
# Notification feed
# ============================================================

def test_notification_feed_keeps_only_most_recent(session):
    for _ in range(500):
        session.save()
    assert len(session.notifications) == MAX_NOTIFICATIONS
    assert all(n.title == "Guardado" for n in session.notifications)


def test_notification_feed_drops_oldest_first(session):
    session.set_currency("EUR")
    with pytest.raises(InvalidChoice):
        session.set_currency("BTC")
    for _ in range(MAX_NOTIFICATIONS):
        session.save()
    titles = [n.title for n in session.notifications]
    assert "Dato inválido" not in titles
    assert len(titles) == MAX_NOTIFICATIONS
