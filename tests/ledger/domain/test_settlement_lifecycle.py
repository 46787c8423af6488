"""Tests for the Settlement aggregate's lifecycle."""

from datetime import datetime

import pytest
from marketplace.errors import PreconditionFailed
from marketplace.ledger.events import SettlementPaid, SettlementRecorded, SettlementStatusChanged
from marketplace.ledger.settlement import Settlement
from protean.exceptions import ValidationError


def _settlement(**kwargs):
    defaults = {
        "booking_id": "booking-1",
        "vendor_id": "vendor-1",
        "amount_due": 5000.0,
        "scheduled_date": datetime(2026, 4, 1),
    }
    defaults.update(kwargs)
    return Settlement.record(**defaults)


class TestRecord:
    def test_defaults(self):
        settlement = _settlement()
        assert settlement.status == "pending"
        assert settlement.currency == "INR"
        assert settlement.amount_paid == 0.0
        assert settlement.paid_at is None
        assert settlement.scheduled_date.tzinfo is not None
        assert isinstance(settlement._events[-1], SettlementRecorded)

    def test_currency_upper_cased(self):
        assert _settlement(currency="usd").currency == "USD"


class TestApplyUpdate:
    def test_happy_path_to_paid(self):
        settlement = _settlement()
        settlement.apply_update(status="Processing")
        settlement.apply_update(status=" PAID ", amount_paid=5000.0)

        assert settlement.status == "paid"
        assert settlement.amount_paid == 5000.0
        assert settlement.paid_at is not None
        paid = settlement._events[-1]
        assert isinstance(paid, SettlementPaid)
        assert paid.amount_paid == 5000.0

    def test_status_change_event(self):
        settlement = _settlement()
        settlement._events.clear()
        settlement.apply_update(status="processing")
        [event] = settlement._events
        assert isinstance(event, SettlementStatusChanged)
        assert (event.from_status, event.to_status) == ("pending", "processing")

    def test_pending_cannot_jump_to_paid(self):
        with pytest.raises(PreconditionFailed):
            _settlement().apply_update(status="paid")

    @pytest.mark.parametrize("terminal", ["cancelled", "paid"])
    def test_terminal_states_are_final(self, terminal):
        settlement = _settlement()
        if terminal == "paid":
            settlement.apply_update(status="processing")
        settlement.apply_update(status=terminal)
        with pytest.raises(PreconditionFailed):
            settlement.apply_update(status="pending")

    def test_same_status_is_noop(self):
        settlement = _settlement()
        settlement._events.clear()
        settlement.apply_update(status="pending", notes="Checked")
        assert settlement.status == "pending"
        assert settlement.notes == "Checked"
        assert settlement._events == []

    def test_unknown_status(self):
        with pytest.raises(ValidationError) as exc:
            _settlement().apply_update(status="refunded")
        assert "Invalid status" in exc.value.messages["status"][0]

    def test_nothing_to_update(self):
        with pytest.raises(PreconditionFailed):
            _settlement().apply_update()

    def test_amount_and_notes_without_status(self):
        settlement = _settlement()
        settlement.apply_update(amount_paid=1000.0, notes="Partial")
        assert settlement.status == "pending"
        assert settlement.amount_paid == 1000.0
        assert settlement.paid_at is None

    @pytest.mark.parametrize("terminal", ["cancelled", "paid"])
    def test_terminal_record_still_takes_notes(self, terminal):
        settlement = _settlement()
        if terminal == "paid":
            settlement.apply_update(status="processing")
        settlement.apply_update(status=terminal)

        settlement.apply_update(notes="Bank reference 4471")

        assert settlement.status == terminal
        assert settlement.notes == "Bank reference 4471"
