"""
Billing Domain Models (``flowsync_modules.billing.models``).

Responsibility
--------------
Frozen dataclass value objects for work-in-progress and invoices.

* ``WIPRecord`` is derived: rebuilt from approved billable time on every
  read and never stored.
* ``Invoice`` is a point-in-time snapshot.  It keeps no reference to the
  timesheet entries it was drafted from, so its ``amount`` does not move
  when those entries change.

Invariants enforced
-------------------
* All models are ``frozen=True``.
* All monetary fields use ``Decimal`` -- NEVER ``float``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum


class InvoiceStatus(str, Enum):
    """Invoice lifecycle states."""
    DRAFT = "Draft"
    SENT = "Sent"
    PAID = "Paid"


@dataclass(frozen=True)
class WIPRecord:
    """Unbilled value accumulated on one project."""
    project_id: str
    client_id: str
    client_name: str
    project_code: str
    total_hours: Decimal
    wip_amount: Decimal
    last_updated: date | None = None


@dataclass(frozen=True)
class InvoiceLine:
    """A single line on an invoice."""
    description: str
    amount: Decimal


@dataclass(frozen=True)
class Invoice:
    """A client invoice."""
    id: str
    client_id: str
    client_name: str
    amount: Decimal
    issue_date: date
    status: InvoiceStatus = InvoiceStatus.DRAFT
    items: tuple[InvoiceLine, ...] = ()
