"""Tests for BillingService."""

from datetime import date
from decimal import Decimal

import pytest

from flowsync_kernel.exceptions import EntityNotFoundError, InvalidTransitionError
from flowsync_modules.billing.models import InvoiceStatus
from flowsync_modules.billing.service import BillingService
from flowsync_modules.timesheet.models import TimesheetStatus
from flowsync_modules.timesheet.service import TimesheetService


@pytest.fixture
def billing(store, config, clock):
    return BillingService(store, config, clock=clock)


class TestWip:

    def test_ledger_and_total(self, billing):
        ledger = billing.wip_ledger()

        assert [r.project_code for r in ledger] == ["ACM-CONS-01"]
        assert billing.total_unbilled_wip() == Decimal("4465")

    def test_ledger_follows_approvals(self, billing, store, config):
        timesheet = TimesheetService(store, config)
        timesheet.submit_grid("e3", {"p2": {date(2023, 10, 23): "2"}})
        assert billing.wip_for_project("p2") is None

        timesheet.approve("t-e3-p2-2023-10-23")

        assert billing.wip_for_project("p2").wip_amount == Decimal("800")


class TestInvoices:

    def test_generate_invoice(self, billing, store):
        invoice = billing.generate_invoice("p1")

        assert invoice.id.startswith("INV-")
        assert invoice.issue_date == date(2023, 10, 27)
        assert invoice.amount == Decimal("4465")
        assert invoice.status == InvoiceStatus.DRAFT
        assert store.invoices[0] == invoice

    def test_generate_twice_gives_distinct_ids(self, billing, store):
        first = billing.generate_invoice("p1")
        second = billing.generate_invoice("p1")

        assert first.id != second.id
        assert first.amount == second.amount
        assert store.invoices == (second, first)

    def test_invoice_is_a_snapshot(self, billing, store, config):
        invoice = billing.generate_invoice("p1")
        timesheet = TimesheetService(store, config)
        entry = timesheet.add_entry(
            "e2", "p1", date(2023, 10, 23), Decimal("4"), status=TimesheetStatus.SUBMITTED,
        )
        timesheet.approve(entry.id)

        assert store.find_invoice(invoice.id).amount == Decimal("4465")
        assert billing.total_unbilled_wip() > invoice.amount

    def test_no_wip_for_project(self, billing):
        with pytest.raises(EntityNotFoundError):
            billing.generate_invoice("p3")

    def test_injected_id_factory(self, store, config, clock, sequential_ids):
        billing = BillingService(store, config, clock=clock, id_factory=sequential_ids)

        assert billing.generate_invoice("p1").id == "id-1"

    def test_lifecycle(self, billing):
        invoice = billing.generate_invoice("p1")
        assert billing.draft_invoices() == (invoice,)

        sent = billing.mark_sent(invoice.id)
        paid = billing.mark_paid(invoice.id)

        assert sent.status == InvoiceStatus.SENT
        assert paid.status == InvoiceStatus.PAID
        assert billing.draft_invoices() == ()

    def test_cannot_pay_draft(self, billing):
        invoice = billing.generate_invoice("p1")

        with pytest.raises(InvalidTransitionError):
            billing.mark_paid(invoice.id)

    def test_unknown_invoice(self, billing):
        with pytest.raises(EntityNotFoundError):
            billing.mark_sent("INV-NOPE")
