"""
Resourcing Domain Models (``flowsync_modules.resourcing.models``).

Frozen dataclass value objects for people and their bookings: employees,
project assignments (hours per week) and leave.  Dates on assignments and
leave are informational; no date-range enforcement is applied anywhere.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum


class LeaveType(str, Enum):
    """Kinds of leave an employee can book."""
    ANNUAL = "Annual Leave"
    SICK = "Sick Leave"
    PUBLIC_HOLIDAY = "Public Holiday"


@dataclass(frozen=True)
class Employee:
    """A fee earner."""
    id: str
    name: str
    hourly_rate: Decimal
    capacity: Decimal = Decimal("40")  # hours per week
    role: str = ""
    skills: tuple[str, ...] = ()

    def __post_init__(self):
        if self.hourly_rate < 0:
            raise ValueError("hourly_rate cannot be negative")
        if self.capacity < 0:
            raise ValueError("capacity cannot be negative")


@dataclass(frozen=True)
class Assignment:
    """One employee booked onto one project for a number of hours per week."""
    id: str
    employee_id: str
    project_id: str
    hours_per_week: Decimal
    start_date: date | None = None
    end_date: date | None = None

    def __post_init__(self):
        if self.hours_per_week < 0:
            raise ValueError("hours_per_week cannot be negative")


@dataclass(frozen=True)
class Leave:
    """A leave booking."""
    id: str
    employee_id: str
    leave_type: LeaveType
    start_date: date
    end_date: date
    hours_per_day: Decimal = Decimal("8")
