"""
Store Snapshot Persistence (``flowsync_services.persistence``).

Responsibility
--------------
Write the whole ``EntityStore`` to the database and read it back.

Architecture position
---------------------
**Services layer** -- the only code that moves data between the in-memory
store and the module ORM models.  The caller owns the transaction
(``session_scope()``); nothing here commits.

Invariants enforced
-------------------
* ``save_store`` is replace-all: every module table is emptied and
  rewritten, mirroring whole-collection replacement in the store.
* Invoices keep their collection order through ``position``; other
  collections are loaded ordered by id (timesheets by date, then id).
* Natural-key and code uniqueness are enforced by the tables' unique
  constraints; a violating store raises ``IntegrityError`` on flush.
"""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from flowsync_kernel.logging_config import get_logger
from flowsync_modules.billing.orm import InvoiceLineModel, InvoiceModel
from flowsync_modules.registry.orm import ClientModel, ProjectModel
from flowsync_modules.resourcing.orm import AssignmentModel, EmployeeModel, LeaveModel
from flowsync_modules.timesheet.orm import TimesheetEntryModel
from flowsync_services.store import EntityStore

logger = get_logger("services.persistence")

# Children before parents.
_TABLES_IN_DELETE_ORDER = (
    InvoiceLineModel,
    InvoiceModel,
    TimesheetEntryModel,
    LeaveModel,
    AssignmentModel,
    EmployeeModel,
    ProjectModel,
    ClientModel,
)


def save_store(session: Session, store: EntityStore) -> dict[str, int]:
    """
    Replace the persisted snapshot with ``store``'s contents.

    Returns the number of rows written per collection.
    """
    for model in _TABLES_IN_DELETE_ORDER:
        session.execute(delete(model))

    session.add_all(ClientModel.from_dto(c) for c in store.clients)
    session.add_all(ProjectModel.from_dto(p) for p in store.projects)
    session.add_all(EmployeeModel.from_dto(e) for e in store.employees)
    session.add_all(AssignmentModel.from_dto(a) for a in store.assignments)
    session.add_all(LeaveModel.from_dto(lv) for lv in store.leaves)
    session.add_all(TimesheetEntryModel.from_dto(t) for t in store.timesheets)
    session.add_all(
        InvoiceModel.from_dto(inv, position=index)
        for index, inv in enumerate(store.invoices)
    )
    session.flush()

    counts = store.counts()
    logger.info("store_snapshot_saved", extra={
        "store_version": store.version,
        **{f"{name}_count": size for name, size in counts.items()},
    })
    return counts


def load_store(session: Session) -> EntityStore:
    """Rebuild an ``EntityStore`` from the persisted snapshot."""

    def _load(model, *order_by):
        rows = session.scalars(select(model).order_by(*order_by)).all()
        return [row.to_dto() for row in rows]

    store = EntityStore(
        clients=_load(ClientModel, ClientModel.id),
        projects=_load(ProjectModel, ProjectModel.id),
        employees=_load(EmployeeModel, EmployeeModel.id),
        assignments=_load(AssignmentModel, AssignmentModel.id),
        leaves=_load(LeaveModel, LeaveModel.id),
        timesheets=_load(
            TimesheetEntryModel, TimesheetEntryModel.work_date, TimesheetEntryModel.id,
        ),
        invoices=_load(InvoiceModel, InvoiceModel.position),
    )
    logger.info("store_snapshot_loaded", extra={
        f"{name}_count": size for name, size in store.counts().items()
    })
    return store
