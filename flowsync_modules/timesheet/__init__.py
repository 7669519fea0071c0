"""
Timesheet Module (``flowsync_modules.timesheet``).

Weekly time capture and review.  Entries are keyed by
``(employee_id, project_id, work_date)`` and move through
Draft -> Submitted -> Approved | Rejected.
"""

from flowsync_modules.timesheet.models import (
    EntryKey,
    TimesheetEntry,
    TimesheetGrid,
    TimesheetStatus,
    entry_id_for,
)
from flowsync_modules.timesheet.workflows import TIMESHEET_WORKFLOW

__all__ = [
    "EntryKey",
    "TimesheetEntry",
    "TimesheetGrid",
    "TimesheetStatus",
    "TIMESHEET_WORKFLOW",
    "entry_id_for",
]
