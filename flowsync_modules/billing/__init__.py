"""
Billing Module (``flowsync_modules.billing``).

Work-in-progress valuation and invoices.  WIP is derived on every read
from approved billable time; invoices are snapshots moving through
Draft -> Sent -> Paid.
"""

from flowsync_modules.billing.models import (
    Invoice,
    InvoiceLine,
    InvoiceStatus,
    WIPRecord,
)
from flowsync_modules.billing.workflows import INVOICE_WORKFLOW

__all__ = [
    "Invoice",
    "InvoiceLine",
    "InvoiceStatus",
    "WIPRecord",
    "INVOICE_WORKFLOW",
]
