"""
Timesheet Service (``flowsync_modules.timesheet.service``).

Responsibility
--------------
Weekly time capture and review:

* seed an editable grid from stored entries and apply keystrokes to it
* save the grid as Draft or Submitted with full-week-replace semantics
* add single entries keyed by ``(employee_id, project_id, work_date)``
* approve or reject submitted entries via ``TIMESHEET_WORKFLOW``

Architecture position
---------------------
**Modules layer** -- delegates grid arithmetic and reconciliation to
``flowsync_engines.timesheet_grid`` and status changes to
``flowsync_engines.approval``.

Failure modes
-------------
* ``InvalidTransitionError`` -- saving a grid as anything but Draft or
  Submitted, or an action the workflow does not allow.
* ``DuplicateTimesheetEntryError`` -- ``add_entry`` for a taken natural key.
* ``InvalidHoursInputError`` -- ``set_cell(..., strict=True)`` with text the
  keystroke filter refuses.
* ``EntityNotFoundError`` -- approving or rejecting an unknown entry id.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from flowsync_config.schema import FirmConfig
from flowsync_engines import timesheet_grid
from flowsync_engines.approval import approve_entry, reject_entry
from flowsync_kernel.exceptions import (
    DuplicateTimesheetEntryError,
    EntityNotFoundError,
    InvalidHoursInputError,
    InvalidTransitionError,
)
from flowsync_kernel.logging_config import LogContext, get_logger
from flowsync_modules.registry.models import Project
from flowsync_modules.timesheet.models import (
    EntryKey,
    TimesheetEntry,
    TimesheetGrid,
    TimesheetStatus,
    entry_id_for,
)
from flowsync_modules.timesheet.workflows import TIMESHEET_WORKFLOW
from flowsync_services.store import EntityStore

logger = get_logger("modules.timesheet.service")

_SAVEABLE_STATUSES = frozenset({TimesheetStatus.DRAFT, TimesheetStatus.SUBMITTED})


class TimesheetService:
    """Timesheet capture and approval over an ``EntityStore``."""

    def __init__(self, store: EntityStore, config: FirmConfig | None = None):
        self._store = store
        self._config = config or FirmConfig()

    # =========================================================================
    # Grid
    # =========================================================================

    def week_dates(self) -> tuple[date, ...]:
        return self._config.timesheet_week

    def timesheet_projects(self, employee_id: str) -> tuple[Project, ...]:
        """Rows offered in the grid: assigned projects plus every non-billable one."""
        assigned = {a.project_id for a in self._store.assignments if a.employee_id == employee_id}
        return tuple(
            p for p in self._store.projects
            if p.id in assigned or not p.is_billable
        )

    def load_grid(self, employee_id: str) -> TimesheetGrid:
        week = set(self.week_dates())
        return timesheet_grid.grid_from_entries(
            (t for t in self._store.timesheets if t.work_date in week),
            employee_id,
        )

    def set_cell(
        self,
        grid: TimesheetGrid,
        project_id: str,
        work_date: date,
        text: str,
        strict: bool = False,
    ) -> TimesheetGrid:
        """
        Apply one keystroke result to ``grid``.

        Refused input leaves the grid unchanged; with ``strict=True`` it
        raises ``InvalidHoursInputError`` instead.
        """
        if strict and not timesheet_grid.is_valid_hours_input(text):
            raise InvalidHoursInputError(text)
        return timesheet_grid.set_cell(grid, project_id, work_date, text)

    def row_total(self, grid: TimesheetGrid, project_id: str) -> Decimal:
        return timesheet_grid.row_total(grid, project_id)

    def column_total(self, grid: TimesheetGrid, work_date: date) -> Decimal:
        return timesheet_grid.column_total(grid, work_date)

    def submit_grid(
        self,
        employee_id: str,
        grid: TimesheetGrid,
        status: TimesheetStatus = TimesheetStatus.SUBMITTED,
    ) -> tuple[TimesheetEntry, ...]:
        """
        Save the employee's week as ``status`` (Draft or Submitted).

        Every stored entry of the employee inside the configured week is
        replaced by the grid's non-zero cells.  Returns the saved entries.
        """
        if status not in _SAVEABLE_STATUSES:
            raise InvalidTransitionError(
                TIMESHEET_WORKFLOW.name, TimesheetStatus.DRAFT.value, f"save_as_{status.value}",
            )

        with LogContext.bind(employee_id=employee_id):
            new_entries = timesheet_grid.synthesize_entries(
                grid,
                employee_id,
                status,
                self._store.projects,
                description=self._config.default_entry_description,
            )
            self._store.replace_timesheets(
                timesheet_grid.reconcile_week(
                    self._store.timesheets, new_entries, employee_id, self.week_dates(),
                )
            )
            logger.info("timesheet_grid_saved", extra={
                "status": status.value,
                "entry_count": len(new_entries),
                "total_hours": str(timesheet_grid.grid_total(grid)),
            })
        return new_entries

    # =========================================================================
    # Single entries
    # =========================================================================

    def add_entry(
        self,
        employee_id: str,
        project_id: str,
        work_date: date,
        hours: Decimal,
        description: str = "",
        status: TimesheetStatus = TimesheetStatus.DRAFT,
    ) -> TimesheetEntry:
        """Record one entry; a second entry for the same natural key is refused."""
        entry_id = entry_id_for(employee_id, project_id, work_date)
        if any(
            t.key == (employee_id, project_id, work_date) for t in self._store.timesheets
        ):
            raise DuplicateTimesheetEntryError(employee_id, project_id, work_date.isoformat())

        project = self._store.find_project(project_id)
        entry = TimesheetEntry(
            id=entry_id,
            employee_id=employee_id,
            project_id=project_id,
            work_date=work_date,
            hours=hours,
            status=status,
            is_billable=project.is_billable if project is not None else True,
            description=description,
        )
        self._store.replace_timesheets(self._store.timesheets + (entry,))
        logger.info("timesheet_entry_added", extra={
            "entry_id": entry_id,
            "employee_id": employee_id,
            "project_id": project_id,
            "hours": str(hours),
        })
        return entry

    # =========================================================================
    # Review
    # =========================================================================

    def approve(self, entry: str | EntryKey) -> TimesheetEntry:
        """Approve a submitted entry, given by id or by natural key."""
        return self._review(entry, approve_entry)

    def reject(self, entry: str | EntryKey) -> TimesheetEntry:
        return self._review(entry, reject_entry)

    def pending_approvals(self) -> tuple[TimesheetEntry, ...]:
        return tuple(
            t for t in self._store.timesheets if t.status == TimesheetStatus.SUBMITTED
        )

    def _review(self, entry: str | EntryKey, transition) -> TimesheetEntry:
        if isinstance(entry, EntryKey):
            current = self._store.find_timesheet_by_key(entry)
        else:
            current = self._store.find_timesheet(entry)
        if current is None:
            raise EntityNotFoundError("TimesheetEntry", str(entry))
        updated = transition(current)
        # Derived ids can collide across keys; the natural key cannot.
        self._store.replace_timesheets(
            updated if t.key == current.key else t for t in self._store.timesheets
        )
        return updated
