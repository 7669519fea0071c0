"""
Entity Store (``flowsync_services.store``).

Responsibility
--------------
Hold the firm's collections in process memory: clients, projects,
employees, assignments, leaves, timesheet entries and invoices.

Invariants enforced
-------------------
* Collections are tuples of frozen value objects; the only mutation is
  replacing a whole collection (``replace_*``).
* Every replacement bumps ``version`` so callers can tell that derived
  figures (WIP, utilization) must be recomputed.
* Lookups return ``None`` for unknown ids; they never raise.

Single-writer: the store is not thread-safe and does not need to be.
"""

from __future__ import annotations

from typing import Iterable

from flowsync_kernel.logging_config import get_logger
from flowsync_modules.billing.models import Invoice
from flowsync_modules.registry.models import Client, Project
from flowsync_modules.resourcing.models import Assignment, Employee, Leave
from flowsync_modules.timesheet.models import EntryKey, TimesheetEntry

logger = get_logger("services.store")


class EntityStore:
    """In-memory collections for one firm session."""

    COLLECTIONS = (
        "clients",
        "projects",
        "employees",
        "assignments",
        "leaves",
        "timesheets",
        "invoices",
    )

    def __init__(
        self,
        clients: Iterable[Client] = (),
        projects: Iterable[Project] = (),
        employees: Iterable[Employee] = (),
        assignments: Iterable[Assignment] = (),
        leaves: Iterable[Leave] = (),
        timesheets: Iterable[TimesheetEntry] = (),
        invoices: Iterable[Invoice] = (),
    ):
        self._clients: tuple[Client, ...] = tuple(clients)
        self._projects: tuple[Project, ...] = tuple(projects)
        self._employees: tuple[Employee, ...] = tuple(employees)
        self._assignments: tuple[Assignment, ...] = tuple(assignments)
        self._leaves: tuple[Leave, ...] = tuple(leaves)
        self._timesheets: tuple[TimesheetEntry, ...] = tuple(timesheets)
        self._invoices: tuple[Invoice, ...] = tuple(invoices)
        self._version = 0

    # =========================================================================
    # Read access
    # =========================================================================

    @property
    def version(self) -> int:
        return self._version

    @property
    def clients(self) -> tuple[Client, ...]:
        return self._clients

    @property
    def projects(self) -> tuple[Project, ...]:
        return self._projects

    @property
    def employees(self) -> tuple[Employee, ...]:
        return self._employees

    @property
    def assignments(self) -> tuple[Assignment, ...]:
        return self._assignments

    @property
    def leaves(self) -> tuple[Leave, ...]:
        return self._leaves

    @property
    def timesheets(self) -> tuple[TimesheetEntry, ...]:
        return self._timesheets

    @property
    def invoices(self) -> tuple[Invoice, ...]:
        return self._invoices

    def find_client(self, client_id: str) -> Client | None:
        return next((c for c in self._clients if c.id == client_id), None)

    def find_project(self, project_id: str) -> Project | None:
        return next((p for p in self._projects if p.id == project_id), None)

    def find_employee(self, employee_id: str) -> Employee | None:
        return next((e for e in self._employees if e.id == employee_id), None)

    def find_assignment(self, assignment_id: str) -> Assignment | None:
        return next((a for a in self._assignments if a.id == assignment_id), None)

    def find_timesheet(self, entry_id: str) -> TimesheetEntry | None:
        return next((t for t in self._timesheets if t.id == entry_id), None)

    def find_timesheet_by_key(self, key: EntryKey) -> TimesheetEntry | None:
        return next((t for t in self._timesheets if t.key == key), None)

    def find_invoice(self, invoice_id: str) -> Invoice | None:
        return next((i for i in self._invoices if i.id == invoice_id), None)

    # =========================================================================
    # Whole-collection replacement
    # =========================================================================

    def replace_clients(self, items: Iterable[Client]) -> None:
        self._clients = self._replace("clients", items)

    def replace_projects(self, items: Iterable[Project]) -> None:
        self._projects = self._replace("projects", items)

    def replace_employees(self, items: Iterable[Employee]) -> None:
        self._employees = self._replace("employees", items)

    def replace_assignments(self, items: Iterable[Assignment]) -> None:
        self._assignments = self._replace("assignments", items)

    def replace_leaves(self, items: Iterable[Leave]) -> None:
        self._leaves = self._replace("leaves", items)

    def replace_timesheets(self, items: Iterable[TimesheetEntry]) -> None:
        self._timesheets = self._replace("timesheets", items)

    def replace_invoices(self, items: Iterable[Invoice]) -> None:
        self._invoices = self._replace("invoices", items)

    def _replace(self, collection: str, items: Iterable) -> tuple:
        new_items = tuple(items)
        self._version += 1
        logger.debug("store_collection_replaced", extra={
            "collection": collection,
            "size": len(new_items),
            "version": self._version,
        })
        return new_items

    def counts(self) -> dict[str, int]:
        """Collection sizes, keyed by collection name."""
        return {name: len(getattr(self, name)) for name in self.COLLECTIONS}
