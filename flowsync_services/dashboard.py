"""
Dashboard Summary (``flowsync_services.dashboard``).

Responsibility
--------------
The firm overview: accumulated WIP, billable hours, active project count,
firm utilization, and the list of over-allocated employees.

Architecture position
---------------------
**Services layer** -- cross-module orchestration.  Reads the store through
``BillingService`` and ``ResourcingService`` so every figure agrees with
the WIP ledger and planner views.

Invariants enforced
-------------------
* ``billable_hours`` counts every billable entry regardless of status.
* ``utilization = round(billable_hours / (employee_count x standard week) x 100)``,
  rounded half up to a whole percent; 0 when no hours are recorded at all
  or there are no employees.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from flowsync_config.schema import FirmConfig
from flowsync_engines.utilization import EmployeeUtilization
from flowsync_kernel.domain.values import HUNDRED, ZERO
from flowsync_kernel.logging_config import get_logger
from flowsync_modules.billing.service import BillingService
from flowsync_modules.registry.models import ProjectStatus
from flowsync_modules.resourcing.service import ResourcingService
from flowsync_services.store import EntityStore

logger = get_logger("services.dashboard")


@dataclass(frozen=True)
class DashboardSummary:
    """Headline figures for the overview page."""
    total_wip: Decimal
    billable_hours: Decimal
    active_projects: int
    utilization: int  # whole percent
    overallocated: tuple[EmployeeUtilization, ...] = ()


def firm_utilization(billable_hours: Decimal, total_hours: Decimal,
                     employee_count: int, standard_week_hours: Decimal) -> int:
    """Billable share of the firm's standard week, as a whole percent."""
    if total_hours <= 0 or employee_count == 0:
        return 0
    ratio = billable_hours / (employee_count * standard_week_hours) * HUNDRED
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class DashboardService:
    """Builds ``DashboardSummary`` from the current store contents."""

    def __init__(self, store: EntityStore, config: FirmConfig | None = None,
                 billing: BillingService | None = None,
                 resourcing: ResourcingService | None = None):
        self._store = store
        self._config = config or FirmConfig()
        self._billing = billing or BillingService(store, self._config)
        self._resourcing = resourcing or ResourcingService(store, self._config)

    def summary(self) -> DashboardSummary:
        t0 = time.monotonic()
        timesheets = self._store.timesheets
        total_hours = sum((t.hours for t in timesheets), ZERO)
        billable_hours = sum((t.hours for t in timesheets if t.is_billable), ZERO)

        summary = DashboardSummary(
            total_wip=self._billing.total_unbilled_wip(),
            billable_hours=billable_hours,
            active_projects=sum(
                1 for p in self._store.projects if p.status == ProjectStatus.ACTIVE
            ),
            utilization=firm_utilization(
                billable_hours,
                total_hours,
                len(self._store.employees),
                self._config.standard_week_hours,
            ),
            overallocated=self.overallocation_alerts(),
        )

        logger.info("dashboard_summary_built", extra={
            "total_wip": str(summary.total_wip),
            "billable_hours": str(summary.billable_hours),
            "active_projects": summary.active_projects,
            "utilization": summary.utilization,
            "overallocated_count": len(summary.overallocated),
            "duration_ms": round((time.monotonic() - t0) * 1000, 2),
        })
        return summary

    def overallocation_alerts(self) -> tuple[EmployeeUtilization, ...]:
        """Employees whose planner utilization exceeds 100%."""
        return tuple(
            u for u in self._resourcing.employee_utilization() if u.is_overallocated
        )
