"""
WIP Ledger Engine (``flowsync_engines.wip``).

Pure functions with deterministic behavior. No I/O.

Aggregates approved, billable timesheet entries per project into hours and
unbilled value:

    wip_amount += hours x employee.hourly_rate x project.recovery_rate

Only entries with ``status == Approved`` AND ``is_billable`` contribute.
An entry whose project, employee, or client cannot be resolved is dropped
silently (logged at DEBUG).  A project with no qualifying hours produces no
record.

Usage:
    from flowsync_engines.wip import calculate_wip_ledger

    ledger = calculate_wip_ledger(timesheets, projects, employees, clients)
    total = total_wip(ledger)
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Sequence

from flowsync_kernel.domain.values import ZERO
from flowsync_kernel.logging_config import get_logger
from flowsync_modules.billing.models import WIPRecord
from flowsync_modules.registry.models import Client, Project
from flowsync_modules.resourcing.models import Employee
from flowsync_modules.timesheet.models import TimesheetEntry, TimesheetStatus

logger = get_logger("engines.wip")


@dataclass
class _Accumulator:
    project: Project
    client: Client
    total_hours: Decimal = ZERO
    wip_amount: Decimal = ZERO
    last_updated: date | None = None


def is_wip_eligible(entry: TimesheetEntry) -> bool:
    """True when an entry may contribute to WIP."""
    return entry.status == TimesheetStatus.APPROVED and entry.is_billable


def entry_wip_amount(entry: TimesheetEntry, employee: Employee, project: Project) -> Decimal:
    """Value of a single entry at the employee's rate and project recovery."""
    return entry.hours * employee.hourly_rate * project.recovery_rate


def calculate_wip_ledger(
    timesheets: Sequence[TimesheetEntry],
    projects: Sequence[Project],
    employees: Sequence[Employee],
    clients: Sequence[Client],
) -> tuple[WIPRecord, ...]:
    """
    Build one ``WIPRecord`` per project with approved billable time.

    Records are returned in order of each project's first qualifying entry.
    ``last_updated`` is the latest work date contributing to the record.
    """
    t0 = time.monotonic()
    projects_by_id = {p.id: p for p in projects}
    employees_by_id = {e.id: e for e in employees}
    clients_by_id = {c.id: c for c in clients}

    groups: dict[str, _Accumulator] = {}
    eligible = 0
    dropped = 0

    for entry in timesheets:
        if not is_wip_eligible(entry):
            continue
        eligible += 1

        project = projects_by_id.get(entry.project_id)
        employee = employees_by_id.get(entry.employee_id)
        client = clients_by_id.get(project.client_id) if project else None
        if project is None or employee is None or client is None:
            dropped += 1
            logger.debug("wip_entry_unresolved", extra={
                "entry_id": entry.id,
                "project_found": project is not None,
                "employee_found": employee is not None,
                "client_found": client is not None,
            })
            continue

        acc = groups.get(project.id)
        if acc is None:
            acc = groups[project.id] = _Accumulator(project=project, client=client)
        acc.total_hours += entry.hours
        acc.wip_amount += entry_wip_amount(entry, employee, project)
        if acc.last_updated is None or entry.work_date > acc.last_updated:
            acc.last_updated = entry.work_date

    records = tuple(
        WIPRecord(
            project_id=acc.project.id,
            client_id=acc.client.id,
            client_name=acc.client.name,
            project_code=acc.project.code,
            total_hours=acc.total_hours,
            wip_amount=acc.wip_amount,
            last_updated=acc.last_updated,
        )
        for acc in groups.values()
    )

    logger.info("wip_ledger_calculated", extra={
        "entry_count": len(timesheets),
        "eligible_count": eligible,
        "dropped_count": dropped,
        "record_count": len(records),
        "total_wip": str(total_wip(records)),
        "duration_ms": round((time.monotonic() - t0) * 1000, 2),
    })
    return records


def total_wip(records: Sequence[WIPRecord]) -> Decimal:
    """Sum of ``wip_amount`` over a ledger."""
    return sum((r.wip_amount for r in records), ZERO)
