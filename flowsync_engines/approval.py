"""
Timesheet Approval Engine (``flowsync_engines.approval``).

Applies ``TIMESHEET_WORKFLOW`` actions to entries.  A transition returns a
copy of the entry with only ``status`` changed; hours, date, project and
billable flag are carried over untouched.

Failure modes
-------------
* ``InvalidTransitionError`` when the action is not declared from the
  entry's current state (e.g. approving a Draft, re-approving a Rejected).
"""

from __future__ import annotations

from dataclasses import replace

from flowsync_kernel.logging_config import get_logger
from flowsync_modules.timesheet.models import TimesheetEntry, TimesheetStatus
from flowsync_modules.timesheet.workflows import TIMESHEET_WORKFLOW

logger = get_logger("engines.approval")


def transition_entry(entry: TimesheetEntry, action: str) -> TimesheetEntry:
    """Apply ``action`` to ``entry`` and return the updated copy."""
    to_state = TIMESHEET_WORKFLOW.next_state(entry.status.value, action)
    updated = replace(entry, status=TimesheetStatus(to_state))
    logger.info("timesheet_entry_transitioned", extra={
        "entry_id": entry.id,
        "action": action,
        "from_status": entry.status.value,
        "to_status": to_state,
    })
    return updated


def submit_entry(entry: TimesheetEntry) -> TimesheetEntry:
    return transition_entry(entry, "submit")


def approve_entry(entry: TimesheetEntry) -> TimesheetEntry:
    return transition_entry(entry, "approve")


def reject_entry(entry: TimesheetEntry) -> TimesheetEntry:
    return transition_entry(entry, "reject")
