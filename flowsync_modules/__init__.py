"""
FlowSync Modules.

Per-domain glue over the kernel and engines.  Each module contains:
- Domain models (frozen dataclass value objects)
- Workflows (state machines), where a lifecycle exists
- A service facade operating on the ``EntityStore``
- SQLAlchemy ORM models for snapshot persistence

Modules:
- Registry: clients, projects, firm project codes
- Resourcing: employees, assignments, leave, utilization
- Timesheet: weekly grid capture, approval
- Billing: WIP ledger, invoices

Services are imported from their submodules directly
(``from flowsync_modules.billing.service import BillingService``).
"""

from flowsync_modules import (
    billing,
    registry,
    resourcing,
    timesheet,
)

__all__ = [
    "billing",
    "registry",
    "resourcing",
    "timesheet",
]
