"""
Pytest fixtures for the FlowSync test suite.

Provides:
- Structured logging configuration and JSON log capture
- A sample firm (clients, projects, employees, assignments, leave, time)
- Deterministic clock and id factories
- An in-memory SQLite engine with all module tables
"""

import itertools
import json
import logging
from datetime import date
from decimal import Decimal
from io import StringIO
from typing import Generator

import pytest
from sqlalchemy.orm import Session

from flowsync_config.schema import FirmConfig
from flowsync_kernel.db.engine import drop_tables, get_session, init_engine_from_url, reset_engine
from flowsync_kernel.domain.clock import DeterministicClock
from flowsync_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from flowsync_modules._orm_registry import create_all_tables
from flowsync_modules.registry.models import Client, Project
from flowsync_modules.resourcing.models import Assignment, Employee, Leave, LeaveType
from flowsync_modules.timesheet.models import TimesheetEntry, TimesheetStatus
from flowsync_services.store import EntityStore


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture flowsync logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, billing):
            billing.wip_ledger()
            logs = captured_logs()
            assert any(r["message"] == "wip_ledger_calculated" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("flowsync")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Configuration, clock, ids
# =============================================================================


@pytest.fixture
def config() -> FirmConfig:
    return FirmConfig()


@pytest.fixture
def clock() -> DeterministicClock:
    return DeterministicClock()


@pytest.fixture
def sequential_ids():
    """Id factory yielding ``id-1``, ``id-2``, ..."""
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


# =============================================================================
# Sample firm
# =============================================================================

WEEK = (
    date(2023, 10, 23),
    date(2023, 10, 24),
    date(2023, 10, 25),
    date(2023, 10, 26),
    date(2023, 10, 27),
)


@pytest.fixture
def clients() -> list[Client]:
    return [
        Client(id="c1", name="Acme Corp", code="ACM", address="123 Sky Way",
               contact_name="John Doe", contact_email="john@acme.com"),
        Client(id="c2", name="Globex", code="GBX", address="456 Earth Rd",
               contact_name="Jane Smith", contact_email="jane@globex.com"),
    ]


@pytest.fixture
def projects() -> list[Project]:
    return [
        Project(id="p1", client_id="c1", code="ACM-CONS-01", name="Strategy Consulting",
                service_type="CONS", recovery_rate=Decimal("0.95")),
        Project(id="p2", client_id="c2", code="GBX-AUD-01", name="Annual Audit",
                service_type="AUD", recovery_rate=Decimal("1.0")),
        Project(id="p3", client_id="c1", code="ACM-INT-01", name="Internal Training",
                service_type="LD", is_billable=False, recovery_rate=Decimal("0")),
    ]


@pytest.fixture
def employees() -> list[Employee]:
    return [
        Employee(id="e1", name="Sarah Wilson", hourly_rate=Decimal("250"),
                 role="Senior Consultant", skills=("Strategy", "Finance")),
        Employee(id="e2", name="Michael Chen", hourly_rate=Decimal("150"),
                 role="Analyst", skills=("Data", "Excel")),
        Employee(id="e3", name="Elena Rodriguez", hourly_rate=Decimal("400"),
                 role="Director", skills=("Leadership", "Sales")),
    ]


@pytest.fixture
def assignments() -> list[Assignment]:
    return [
        Assignment(id="a1", employee_id="e1", project_id="p1", hours_per_week=Decimal("20"),
                   start_date=date(2023, 10, 1), end_date=date(2023, 12, 31)),
        Assignment(id="a2", employee_id="e2", project_id="p1", hours_per_week=Decimal("35"),
                   start_date=date(2023, 10, 1), end_date=date(2023, 12, 31)),
        Assignment(id="a3", employee_id="e1", project_id="p2", hours_per_week=Decimal("15"),
                   start_date=date(2023, 11, 1), end_date=date(2023, 11, 30)),
    ]


@pytest.fixture
def leaves() -> list[Leave]:
    return [
        Leave(id="l1", employee_id="e2", leave_type=LeaveType.ANNUAL,
              start_date=date(2023, 10, 26), end_date=date(2023, 10, 27),
              hours_per_day=Decimal("8")),
    ]


@pytest.fixture
def timesheets() -> list[TimesheetEntry]:
    return [
        TimesheetEntry(id="t1", employee_id="e1", project_id="p1", work_date=date(2023, 10, 25),
                       hours=Decimal("8"), status=TimesheetStatus.APPROVED,
                       description="Client meeting and drafting strategy doc"),
        TimesheetEntry(id="t2", employee_id="e1", project_id="p1", work_date=date(2023, 10, 26),
                       hours=Decimal("6"), status=TimesheetStatus.APPROVED,
                       description="Follow up research"),
        TimesheetEntry(id="t3", employee_id="e2", project_id="p1", work_date=date(2023, 10, 25),
                       hours=Decimal("8"), status=TimesheetStatus.APPROVED,
                       description="Data modeling"),
    ]


@pytest.fixture
def store(clients, projects, employees, assignments, leaves, timesheets) -> EntityStore:
    """Store seeded with the sample firm."""
    return EntityStore(
        clients=clients,
        projects=projects,
        employees=employees,
        assignments=assignments,
        leaves=leaves,
        timesheets=timesheets,
    )


# =============================================================================
# Database
# =============================================================================


@pytest.fixture
def db_engine():
    """Fresh in-memory SQLite database with every module table."""
    eng = init_engine_from_url("sqlite://")
    create_all_tables()
    yield eng
    drop_tables()
    reset_engine()


@pytest.fixture
def session(db_engine) -> Generator[Session, None, None]:
    session = get_session()
    yield session
    session.rollback()
    session.close()
