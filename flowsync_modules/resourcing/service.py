"""
Resourcing Service (``flowsync_modules.resourcing.service``).

Responsibility
--------------
Books employees onto projects and records leave, and answers the two
capacity questions the planner asks:

* "how loaded is each employee this week?"  (``employee_utilization``)
* "does this proposed booking overload them?"  (``assignment_conflict``)

Architecture position
---------------------
**Modules layer** -- thin glue over ``flowsync_engines.utilization``.  All
arithmetic lives in the engine; this class selects inputs from the store
and picks the leave multiplier for each view from ``FirmConfig``.

Failure modes
-------------
* ``EntityNotFoundError`` when updating or removing an unknown assignment.
* ``ValueError`` from the value objects for negative hours or rates.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import Decimal

from flowsync_config.schema import FirmConfig
from flowsync_engines.utilization import (
    AssignmentConflict,
    EmployeeUtilization,
    calculate_assignment_conflict,
    calculate_utilization,
)
from flowsync_engines.utilization import capacity_totals as _capacity_totals
from flowsync_kernel.exceptions import EntityNotFoundError
from flowsync_kernel.logging_config import get_logger
from flowsync_kernel.utils.ids import IdFactory, new_record_id
from flowsync_modules.resourcing.models import Assignment, Employee, Leave, LeaveType
from flowsync_services.store import EntityStore

logger = get_logger("modules.resourcing.service")


class ResourcingService:
    """Assignments, leave and utilization over an ``EntityStore``."""

    def __init__(
        self,
        store: EntityStore,
        config: FirmConfig | None = None,
        id_factory: IdFactory | None = None,
    ):
        self._store = store
        self._config = config or FirmConfig()
        self._new_id = id_factory or new_record_id

    # =========================================================================
    # Employees and leave
    # =========================================================================

    def add_employee(
        self,
        name: str,
        hourly_rate: Decimal,
        capacity: Decimal = Decimal("40"),
        role: str = "",
        skills: tuple[str, ...] = (),
    ) -> Employee:
        employee = Employee(
            id=self._new_id(),
            name=name,
            hourly_rate=hourly_rate,
            capacity=capacity,
            role=role,
            skills=tuple(skills),
        )
        self._store.replace_employees(self._store.employees + (employee,))
        logger.info("employee_added", extra={
            "employee_id": employee.id,
            "hourly_rate": str(hourly_rate),
            "capacity": str(capacity),
        })
        return employee

    def add_leave(
        self,
        employee_id: str,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        hours_per_day: Decimal = Decimal("8"),
    ) -> Leave:
        """Record a leave booking; dates are informational only."""
        if self._store.find_employee(employee_id) is None:
            raise EntityNotFoundError("Employee", employee_id)
        leave = Leave(
            id=self._new_id(),
            employee_id=employee_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            hours_per_day=hours_per_day,
        )
        self._store.replace_leaves(self._store.leaves + (leave,))
        logger.info("leave_recorded", extra={
            "leave_id": leave.id,
            "employee_id": employee_id,
            "leave_type": leave_type.value,
            "hours_per_day": str(hours_per_day),
        })
        return leave

    # =========================================================================
    # Assignments
    # =========================================================================

    def add_assignment(
        self,
        employee_id: str,
        project_id: str,
        hours_per_week: Decimal,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> Assignment:
        """
        Book an employee onto a project.

        Over-allocation does not block the booking; callers show the result
        of ``assignment_conflict`` as a warning beforehand.
        """
        assignment = Assignment(
            id=self._new_id(),
            employee_id=employee_id,
            project_id=project_id,
            hours_per_week=hours_per_week,
            start_date=start_date,
            end_date=end_date,
        )
        self._store.replace_assignments(self._store.assignments + (assignment,))
        logger.info("assignment_added", extra={
            "assignment_id": assignment.id,
            "employee_id": employee_id,
            "project_id": project_id,
            "hours_per_week": str(hours_per_week),
        })
        return assignment

    def update_assignment(
        self,
        assignment_id: str,
        employee_id: str,
        project_id: str,
        hours_per_week: Decimal,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> Assignment:
        """Replace every field of an existing assignment, keeping its id."""
        current = self._store.find_assignment(assignment_id)
        if current is None:
            raise EntityNotFoundError("Assignment", assignment_id)

        updated = replace(
            current,
            employee_id=employee_id,
            project_id=project_id,
            hours_per_week=hours_per_week,
            start_date=start_date,
            end_date=end_date,
        )
        self._store.replace_assignments(
            updated if a.id == assignment_id else a for a in self._store.assignments
        )
        logger.info("assignment_updated", extra={
            "assignment_id": assignment_id,
            "employee_id": employee_id,
            "project_id": project_id,
            "hours_per_week": str(hours_per_week),
        })
        return updated

    def remove_assignment(self, assignment_id: str) -> None:
        if self._store.find_assignment(assignment_id) is None:
            raise EntityNotFoundError("Assignment", assignment_id)
        self._store.replace_assignments(
            a for a in self._store.assignments if a.id != assignment_id
        )
        logger.info("assignment_removed", extra={"assignment_id": assignment_id})

    # =========================================================================
    # Capacity views
    # =========================================================================

    def employee_utilization(self) -> tuple[EmployeeUtilization, ...]:
        """Planner view: one row per employee, leave counted once per week."""
        return calculate_utilization(
            self._store.employees,
            self._store.assignments,
            self._store.leaves,
            self._store.projects,
            leave_multiplier=self._config.planner_leave_multiplier,
        )

    def assignment_conflict(
        self,
        employee_id: str,
        proposed_hours: Decimal,
        project_id: str | None = None,
        exclude_assignment_id: str | None = None,
    ) -> AssignmentConflict:
        """
        Capacity check for a booking being created or edited.

        Leave is scaled by the conflict multiplier (one day per working day)
        and compared against the standard week, not the employee's capacity.
        """
        return calculate_assignment_conflict(
            employee_id=employee_id,
            proposed_hours=proposed_hours,
            assignments=self._store.assignments,
            leaves=self._store.leaves,
            standard_week_hours=self._config.standard_week_hours,
            leave_multiplier=self._config.conflict_leave_multiplier,
            exclude_assignment_id=exclude_assignment_id,
            employee=self._store.find_employee(employee_id),
            project=self._store.find_project(project_id) if project_id else None,
        )

    def capacity_totals(self) -> tuple[Decimal, Decimal]:
        """(allocated hours, capacity) summed across the firm."""
        return _capacity_totals(self._store.employees, self._store.assignments)
