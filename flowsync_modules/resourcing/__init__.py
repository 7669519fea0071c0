"""
Resourcing Module (``flowsync_modules.resourcing``).

Employees, their project assignments (hours per week) and leave.  Capacity
figures come from ``flowsync_engines.utilization``.
"""

from flowsync_modules.resourcing.models import (
    Assignment,
    Employee,
    Leave,
    LeaveType,
)

__all__ = [
    "Assignment",
    "Employee",
    "Leave",
    "LeaveType",
]
