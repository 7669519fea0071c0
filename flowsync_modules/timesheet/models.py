"""
Timesheet Domain Models (``flowsync_modules.timesheet.models``).

Responsibility
--------------
Frozen dataclass value objects for recorded time.  A ``TimesheetEntry`` is
identified by its natural key ``(employee_id, project_id, work_date)``; the
string ``id`` is derived from that key, so saving the same grid cell twice
addresses the same entry.

Invariants enforced
-------------------
* All models are ``frozen=True``.
* Hours are ``Decimal`` and non-negative.
* ``is_billable`` is copied from the project when the entry is created and
  never re-read afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import NamedTuple

# {project_id: {work_date: hours_text}}
TimesheetGrid = dict[str, dict[date, str]]


class TimesheetStatus(str, Enum):
    """Timesheet entry lifecycle states."""
    DRAFT = "Draft"
    SUBMITTED = "Submitted"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class EntryKey(NamedTuple):
    """Natural key of a timesheet entry."""
    employee_id: str
    project_id: str
    work_date: date


def entry_id_for(employee_id: str, project_id: str, work_date: date) -> str:
    """Deterministic entry id derived from the natural key."""
    return f"t-{employee_id}-{project_id}-{work_date.isoformat()}"


@dataclass(frozen=True)
class TimesheetEntry:
    """Hours one employee worked on one project on one day."""
    id: str
    employee_id: str
    project_id: str
    work_date: date
    hours: Decimal
    status: TimesheetStatus = TimesheetStatus.DRAFT
    is_billable: bool = True
    description: str = ""

    def __post_init__(self):
        if self.hours < 0:
            raise ValueError("hours cannot be negative")

    @property
    def key(self) -> EntryKey:
        return EntryKey(self.employee_id, self.project_id, self.work_date)
