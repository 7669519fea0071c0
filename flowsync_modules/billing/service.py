"""
Billing Service (``flowsync_modules.billing.service``).

Responsibility
--------------
Reads the WIP ledger off approved billable time and turns ledger rows into
draft invoices, then walks invoices through ``INVOICE_WORKFLOW``
(Draft -> Sent -> Paid).

Architecture position
---------------------
**Modules layer** -- ``flowsync_engines.wip`` computes the ledger on every
call (nothing is cached); ``flowsync_engines.invoicing`` drafts the
invoice.  The clock and id factory are injected so invoice dates and ids
are reproducible in tests.

Invariants enforced
-------------------
* A drafted invoice is a snapshot; later approvals never change it.
* No double-billing prevention: drafting twice yields two invoices.
* New invoices are placed first in the store's invoice collection.

Failure modes
-------------
* ``EntityNotFoundError`` -- no WIP activity on the project, or unknown
  invoice id.
* ``InvalidTransitionError`` -- e.g. paying a Draft invoice.
"""

from __future__ import annotations

from dataclasses import replace
from decimal import Decimal

from flowsync_config.schema import FirmConfig
from flowsync_engines.invoicing import draft_invoice
from flowsync_engines.wip import calculate_wip_ledger, total_wip
from flowsync_kernel.domain.clock import Clock, SystemClock
from flowsync_kernel.exceptions import EntityNotFoundError
from flowsync_kernel.logging_config import get_logger
from flowsync_kernel.utils.ids import IdFactory, prefixed_id_factory
from flowsync_modules.billing.models import Invoice, InvoiceStatus, WIPRecord
from flowsync_modules.billing.workflows import INVOICE_WORKFLOW
from flowsync_services.store import EntityStore

logger = get_logger("modules.billing.service")


class BillingService:
    """
    WIP and invoicing over an ``EntityStore``.

    Usage::

        billing = BillingService(store, config, clock=DeterministicClock())
        for record in billing.wip_ledger():
            billing.generate_invoice_from_record(record)
    """

    def __init__(
        self,
        store: EntityStore,
        config: FirmConfig | None = None,
        clock: Clock | None = None,
        id_factory: IdFactory | None = None,
    ):
        self._store = store
        self._config = config or FirmConfig()
        self._clock = clock or SystemClock()
        self._new_id = id_factory or prefixed_id_factory(self._config.invoice_id_prefix)

    # =========================================================================
    # WIP
    # =========================================================================

    def wip_ledger(self) -> tuple[WIPRecord, ...]:
        return calculate_wip_ledger(
            self._store.timesheets,
            self._store.projects,
            self._store.employees,
            self._store.clients,
        )

    def total_unbilled_wip(self) -> Decimal:
        return total_wip(self.wip_ledger())

    def wip_for_project(self, project_id: str) -> WIPRecord | None:
        return next((r for r in self.wip_ledger() if r.project_id == project_id), None)

    # =========================================================================
    # Invoices
    # =========================================================================

    def generate_invoice(self, project_id: str) -> Invoice:
        """Draft an invoice for the project's current WIP."""
        record = self.wip_for_project(project_id)
        if record is None:
            raise EntityNotFoundError("WIPRecord", project_id)
        return self.generate_invoice_from_record(record)

    def generate_invoice_from_record(self, record: WIPRecord) -> Invoice:
        invoice = draft_invoice(
            record,
            invoice_id=self._new_id(),
            issue_date=self._clock.today(),
            line_template=self._config.invoice_line_template,
        )
        self._store.replace_invoices((invoice,) + self._store.invoices)
        return invoice

    def mark_sent(self, invoice_id: str) -> Invoice:
        return self._transition(invoice_id, "send")

    def mark_paid(self, invoice_id: str) -> Invoice:
        return self._transition(invoice_id, "record_payment")

    def draft_invoices(self) -> tuple[Invoice, ...]:
        return tuple(i for i in self._store.invoices if i.status == InvoiceStatus.DRAFT)

    def _transition(self, invoice_id: str, action: str) -> Invoice:
        invoice = self._store.find_invoice(invoice_id)
        if invoice is None:
            raise EntityNotFoundError("Invoice", invoice_id)

        to_state = INVOICE_WORKFLOW.next_state(invoice.status.value, action)
        updated = replace(invoice, status=InvoiceStatus(to_state))
        self._store.replace_invoices(
            updated if i.id == invoice_id else i for i in self._store.invoices
        )
        logger.info("invoice_transitioned", extra={
            "invoice_id": invoice_id,
            "action": action,
            "from_status": invoice.status.value,
            "to_status": to_state,
        })
        return updated
