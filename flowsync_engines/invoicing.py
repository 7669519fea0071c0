"""
Invoice Drafting Engine (``flowsync_engines.invoicing``).

Converts one ``WIPRecord`` into one draft ``Invoice`` -- 1:1, a single line
at the full WIP amount.  The invoice id and issue date are supplied by the
caller so the function stays pure.

No link back to the source timesheet entries is kept, and nothing marks
those entries as invoiced.  Drafting twice from the same record yields two
invoices with equal amounts; duplicate suppression is the caller's concern.
"""

from __future__ import annotations

from datetime import date

from flowsync_kernel.logging_config import get_logger
from flowsync_modules.billing.models import Invoice, InvoiceLine, InvoiceStatus, WIPRecord

logger = get_logger("engines.invoicing")

DEFAULT_LINE_TEMPLATE = "Professional Services for {project_code}"


def draft_invoice(
    record: WIPRecord,
    invoice_id: str,
    issue_date: date,
    line_template: str = DEFAULT_LINE_TEMPLATE,
) -> Invoice:
    """Build a Draft invoice snapshotting ``record.wip_amount``."""
    line = InvoiceLine(
        description=line_template.format(project_code=record.project_code),
        amount=record.wip_amount,
    )
    invoice = Invoice(
        id=invoice_id,
        client_id=record.client_id,
        client_name=record.client_name,
        amount=record.wip_amount,
        issue_date=issue_date,
        status=InvoiceStatus.DRAFT,
        items=(line,),
    )
    logger.info("invoice_drafted", extra={
        "invoice_id": invoice_id,
        "project_id": record.project_id,
        "client_id": record.client_id,
        "amount": str(invoice.amount),
    })
    return invoice
