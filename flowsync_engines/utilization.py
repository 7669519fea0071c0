"""
Resource Utilization Engine (``flowsync_engines.utilization``).

Responsibility
--------------
Pure functions that turn assignments and leave into capacity figures:

* per-employee allocated hours, leave hours, total load and utilization %
* projected weekly revenue of an employee's bookings
* the capacity check shown while creating or editing an assignment
* firm-wide allocated vs. capacity totals

Architecture position
---------------------
**Engines layer** -- pure functional core.  ZERO I/O, ZERO clock reads.
Inputs are plain sequences of module value objects.

Invariants enforced
-------------------
* Utilization is NOT clamped: a value above 100 is the over-allocation
  warning signal, not an error.
* Missing project or employee lookups contribute zero; nothing raises.
* Leave scaling is an explicit ``leave_multiplier`` argument.  The planner
  view counts ``hours_per_day`` once per week (x1); the assignment dialog
  counts it for each working day (x5).  Callers pick, the engine does not.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from flowsync_kernel.domain.values import HUNDRED, ZERO, percentage
from flowsync_kernel.logging_config import get_logger
from flowsync_modules.registry.models import Project
from flowsync_modules.resourcing.models import Assignment, Employee, Leave

logger = get_logger("engines.utilization")


@dataclass(frozen=True)
class EmployeeUtilization:
    """Capacity figures for one employee."""
    employee_id: str
    employee_name: str
    capacity: Decimal
    allocated_hours: Decimal
    leave_hours: Decimal
    total_load: Decimal
    utilization: Decimal  # percent, unclamped
    weekly_revenue: Decimal
    assignments: tuple[Assignment, ...] = ()
    leaves: tuple[Leave, ...] = ()

    @property
    def is_overallocated(self) -> bool:
        return self.utilization > HUNDRED


@dataclass(frozen=True)
class AssignmentConflict:
    """Result of checking a proposed booking against the standard week."""
    employee_id: str
    existing_assignments: tuple[Assignment, ...]
    existing_leaves: tuple[Leave, ...]
    committed_hours: Decimal  # existing assignments + scaled leave
    proposed_hours: Decimal
    total_hours: Decimal
    standard_week_hours: Decimal
    projected_weekly_revenue: Decimal

    @property
    def is_overallocated(self) -> bool:
        return self.total_hours > self.standard_week_hours


def sum_leave_hours(leaves: Sequence[Leave], leave_multiplier: Decimal) -> Decimal:
    """Sum ``hours_per_day * leave_multiplier`` over ``leaves``."""
    return sum((lv.hours_per_day * leave_multiplier for lv in leaves), ZERO)


def booking_revenue(
    hours_per_week: Decimal,
    employee: Employee | None,
    project: Project | None,
) -> Decimal:
    """Weekly revenue of a booking: hours x rate x recovery (missing -> 0)."""
    if employee is None or project is None:
        return ZERO
    return hours_per_week * employee.hourly_rate * project.recovery_rate


def calculate_employee_utilization(
    employee: Employee,
    assignments: Sequence[Assignment],
    leaves: Sequence[Leave],
    projects: Sequence[Project],
    leave_multiplier: Decimal = Decimal("1"),
) -> EmployeeUtilization:
    """
    Compute utilization for a single employee.

    ``assignments`` and ``leaves`` may cover the whole firm; only rows whose
    ``employee_id`` matches are used.
    """
    projects_by_id = {p.id: p for p in projects}
    own_assignments = tuple(a for a in assignments if a.employee_id == employee.id)
    own_leaves = tuple(lv for lv in leaves if lv.employee_id == employee.id)

    allocated = sum((a.hours_per_week for a in own_assignments), ZERO)
    leave_hours = sum_leave_hours(own_leaves, leave_multiplier)
    total_load = allocated + leave_hours
    revenue = sum(
        (
            booking_revenue(a.hours_per_week, employee, projects_by_id.get(a.project_id))
            for a in own_assignments
        ),
        ZERO,
    )

    return EmployeeUtilization(
        employee_id=employee.id,
        employee_name=employee.name,
        capacity=employee.capacity,
        allocated_hours=allocated,
        leave_hours=leave_hours,
        total_load=total_load,
        utilization=percentage(total_load, employee.capacity),
        weekly_revenue=revenue,
        assignments=own_assignments,
        leaves=own_leaves,
    )


def calculate_utilization(
    employees: Sequence[Employee],
    assignments: Sequence[Assignment],
    leaves: Sequence[Leave],
    projects: Sequence[Project],
    leave_multiplier: Decimal = Decimal("1"),
) -> tuple[EmployeeUtilization, ...]:
    """
    Compute utilization for every employee, in employee order.

    Pure function - no side effects, deterministic output.
    """
    t0 = time.monotonic()
    logger.debug("utilization_calculation_started", extra={
        "employee_count": len(employees),
        "assignment_count": len(assignments),
        "leave_count": len(leaves),
        "leave_multiplier": str(leave_multiplier),
    })

    results = tuple(
        calculate_employee_utilization(emp, assignments, leaves, projects, leave_multiplier)
        for emp in employees
    )

    overallocated = [r.employee_id for r in results if r.is_overallocated]
    if overallocated:
        logger.warning("utilization_overallocation_detected", extra={
            "employee_ids": overallocated,
        })

    logger.info("utilization_calculation_completed", extra={
        "employee_count": len(results),
        "overallocated_count": len(overallocated),
        "duration_ms": round((time.monotonic() - t0) * 1000, 2),
    })
    return results


def calculate_assignment_conflict(
    employee_id: str,
    proposed_hours: Decimal,
    assignments: Sequence[Assignment],
    leaves: Sequence[Leave],
    standard_week_hours: Decimal,
    leave_multiplier: Decimal = Decimal("5"),
    exclude_assignment_id: str | None = None,
    employee: Employee | None = None,
    project: Project | None = None,
) -> AssignmentConflict:
    """
    Check a proposed booking against the standard working week.

    The assignment being edited (``exclude_assignment_id``) is left out of
    the committed hours so that editing does not count it twice.
    """
    existing = tuple(
        a for a in assignments
        if a.employee_id == employee_id and a.id != exclude_assignment_id
    )
    existing_leaves = tuple(lv for lv in leaves if lv.employee_id == employee_id)
    committed = (
        sum((a.hours_per_week for a in existing), ZERO)
        + sum_leave_hours(existing_leaves, leave_multiplier)
    )

    conflict = AssignmentConflict(
        employee_id=employee_id,
        existing_assignments=existing,
        existing_leaves=existing_leaves,
        committed_hours=committed,
        proposed_hours=proposed_hours,
        total_hours=committed + proposed_hours,
        standard_week_hours=standard_week_hours,
        projected_weekly_revenue=booking_revenue(proposed_hours, employee, project),
    )

    if conflict.is_overallocated:
        logger.warning("assignment_overallocation", extra={
            "employee_id": employee_id,
            "total_hours": str(conflict.total_hours),
            "standard_week_hours": str(standard_week_hours),
        })
    return conflict


def capacity_totals(
    employees: Sequence[Employee],
    assignments: Sequence[Assignment],
) -> tuple[Decimal, Decimal]:
    """Return (total allocated hours, total capacity) across the firm."""
    allocated = sum((a.hours_per_week for a in assignments), ZERO)
    capacity = sum((e.capacity for e in employees), ZERO)
    return allocated, capacity
