"""
Timesheet Grid Reducer (``flowsync_engines.timesheet_grid``).

Responsibility
--------------
Pure functions over the weekly entry grid ``{project_id: {date: text}}``:

* keystroke filtering of hour text (digits and at most one decimal point)
* row and column totals
* seeding a grid from stored entries
* turning a grid into ``TimesheetEntry`` rows
* reconciling those rows into the stored collection

Architecture position
---------------------
**Engines layer** -- ZERO I/O.  Grids are never mutated in place; every
edit returns a new grid.

Invariants enforced
-------------------
* Cell text is kept verbatim so partially typed decimals ("1.") survive.
* Totals parse each cell with fallback to zero; they never raise.
* Only cells whose parsed value is > 0 become entries.
* Reconciliation is "full week replace": every prior entry of the employee
  dated inside the week is removed, then the synthesized rows are added.
  A blank cell on resubmission therefore deletes the previously saved entry.
  A synthesized row also replaces any stored entry with the same natural
  key, so resubmitting a cell never produces a duplicate.
"""

from __future__ import annotations

import re
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Iterable, Sequence

from flowsync_kernel.domain.values import ZERO
from flowsync_kernel.logging_config import get_logger
from flowsync_modules.registry.models import Project
from flowsync_modules.timesheet.models import (
    TimesheetEntry,
    TimesheetGrid,
    TimesheetStatus,
    entry_id_for,
)

logger = get_logger("engines.timesheet_grid")

HOURS_INPUT_PATTERN = re.compile(r"^[0-9]*\.?[0-9]*$")


# ---------------------------------------------------------------------------
# Cell input
# ---------------------------------------------------------------------------


def is_valid_hours_input(text: str) -> bool:
    """True for "", "7", "7.", ".5", "7.25"; False for anything else."""
    return text == "" or HOURS_INPUT_PATTERN.fullmatch(text) is not None


def parse_hours(text: str | None) -> Decimal:
    """Parse cell text to hours; blank or non-numeric text yields zero."""
    if not text or not HOURS_INPUT_PATTERN.fullmatch(text):
        return ZERO
    try:
        return Decimal(text)
    except InvalidOperation:
        # "." passes the keystroke filter but is not a number
        return ZERO


def set_cell(grid: TimesheetGrid, project_id: str, work_date: date, text: str) -> TimesheetGrid:
    """
    Apply one edit to a grid.

    Input that fails the keystroke filter is ignored: the original grid is
    returned unchanged, mirroring a text field that refuses the keystroke.
    """
    if not is_valid_hours_input(text):
        logger.debug("timesheet_cell_input_rejected", extra={
            "project_id": project_id,
            "work_date": work_date.isoformat(),
        })
        return grid
    updated = {pid: dict(cells) for pid, cells in grid.items()}
    updated.setdefault(project_id, {})[work_date] = text
    return updated


# ---------------------------------------------------------------------------
# Totals
# ---------------------------------------------------------------------------


def row_total(grid: TimesheetGrid, project_id: str) -> Decimal:
    """Total hours entered against one project."""
    return sum((parse_hours(v) for v in grid.get(project_id, {}).values()), ZERO)


def column_total(grid: TimesheetGrid, work_date: date) -> Decimal:
    """Total hours entered on one date across all projects."""
    return sum((parse_hours(cells.get(work_date)) for cells in grid.values()), ZERO)


def grid_total(grid: TimesheetGrid) -> Decimal:
    """Total hours in the grid."""
    return sum((row_total(grid, pid) for pid in grid), ZERO)


# ---------------------------------------------------------------------------
# Grid <-> entries
# ---------------------------------------------------------------------------


def grid_from_entries(entries: Iterable[TimesheetEntry], employee_id: str) -> TimesheetGrid:
    """Seed a grid from an employee's stored entries (hours as text)."""
    grid: TimesheetGrid = {}
    for entry in entries:
        if entry.employee_id != employee_id:
            continue
        grid.setdefault(entry.project_id, {})[entry.work_date] = format(entry.hours, "f")
    return grid


def synthesize_entries(
    grid: TimesheetGrid,
    employee_id: str,
    status: TimesheetStatus,
    projects: Sequence[Project],
    description: str = "",
) -> tuple[TimesheetEntry, ...]:
    """
    Turn every cell with hours > 0 into a ``TimesheetEntry``.

    ``is_billable`` is copied from the project; an unknown project id is
    treated as billable.
    """
    projects_by_id = {p.id: p for p in projects}
    entries: list[TimesheetEntry] = []
    for project_id, cells in grid.items():
        project = projects_by_id.get(project_id)
        is_billable = project.is_billable if project is not None else True
        for work_date, text in cells.items():
            hours = parse_hours(text)
            if hours <= 0:
                continue
            entries.append(TimesheetEntry(
                id=entry_id_for(employee_id, project_id, work_date),
                employee_id=employee_id,
                project_id=project_id,
                work_date=work_date,
                hours=hours,
                status=status,
                is_billable=is_billable,
                description=description,
            ))
    return tuple(entries)


def reconcile_week(
    existing: Sequence[TimesheetEntry],
    new_entries: Sequence[TimesheetEntry],
    employee_id: str,
    week_dates: Sequence[date],
) -> tuple[TimesheetEntry, ...]:
    """
    Replace an employee's week with ``new_entries``.

    Other employees' entries, and this employee's entries outside the week,
    are kept in their original order; the new rows are appended.
    """
    week = set(week_dates)
    new_keys = {e.key for e in new_entries}
    kept = tuple(
        e for e in existing
        if not (e.employee_id == employee_id and e.work_date in week)
        and e.key not in new_keys
    )
    removed = len(existing) - len(kept)

    logger.info("timesheet_week_reconciled", extra={
        "employee_id": employee_id,
        "week_start": min(week_dates).isoformat() if week_dates else None,
        "removed_count": removed,
        "inserted_count": len(new_entries),
    })
    return kept + tuple(new_entries)
