"""Tests for SQLAlchemy snapshot persistence of the store."""

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError

from flowsync_kernel.db.engine import drop_tables, session_scope
from flowsync_modules._orm_registry import create_all_tables
from flowsync_modules.billing.service import BillingService
from flowsync_modules.registry.models import Client
from flowsync_modules.timesheet.models import TimesheetEntry
from flowsync_services.persistence import load_store, save_store
from flowsync_services.store import EntityStore


class TestSnapshotRoundTrip:

    def test_save_then_load(self, db_engine, store, config, clock):
        invoice = BillingService(store, config, clock=clock).generate_invoice("p1")

        with session_scope() as session:
            counts = save_store(session, store)
        with session_scope() as session:
            loaded = load_store(session)

        assert counts["timesheets"] == 3
        assert loaded.clients == store.clients
        assert loaded.projects == store.projects
        assert loaded.employees == store.employees
        assert loaded.assignments == store.assignments
        assert loaded.leaves == store.leaves
        assert {t.id for t in loaded.timesheets} == {"t1", "t2", "t3"}
        assert loaded.find_project("p1").recovery_rate == Decimal("0.95")
        assert loaded.find_employee("e1").skills == ("Strategy", "Finance")
        assert loaded.invoices == (invoice,)

    def test_save_replaces_previous_snapshot(self, db_engine, store):
        with session_scope() as session:
            save_store(session, store)

        store.replace_assignments(())
        store.replace_timesheets(t for t in store.timesheets if t.id != "t1")
        with session_scope() as session:
            save_store(session, store)
        with session_scope() as session:
            loaded = load_store(session)

        assert loaded.assignments == ()
        assert {t.id for t in loaded.timesheets} == {"t2", "t3"}

    def test_invoice_order_preserved(self, db_engine, store, config, clock, sequential_ids):
        billing = BillingService(store, config, clock=clock, id_factory=sequential_ids)
        billing.generate_invoice("p1")
        billing.generate_invoice("p1")

        with session_scope() as session:
            save_store(session, store)
        with session_scope() as session:
            loaded = load_store(session)

        assert [i.id for i in loaded.invoices] == ["id-2", "id-1"]
        assert loaded.invoices[0].items[0].description == "Professional Services for ACM-CONS-01"

    def test_empty_database_loads_empty_store(self, session):
        assert sum(load_store(session).counts().values()) == 0


class TestSchema:

    def test_drop_and_recreate_tables(self, db_engine, store):
        drop_tables()
        assert inspect(db_engine).get_table_names() == []

        create_all_tables()
        with session_scope() as session:
            save_store(session, store)
        assert "timesheet_entries" in inspect(db_engine).get_table_names()


class TestConstraints:

    def test_timesheet_natural_key_is_unique(self, session):
        entry = TimesheetEntry(id="x1", employee_id="e1", project_id="p1",
                               work_date=date(2023, 10, 23), hours=Decimal("1"))
        clash = TimesheetEntry(id="x2", employee_id="e1", project_id="p1",
                               work_date=date(2023, 10, 23), hours=Decimal("2"))

        with pytest.raises(IntegrityError):
            save_store(session, EntityStore(timesheets=[entry, clash]))

    def test_client_code_is_unique(self, session):
        clients = [
            Client(id="c1", name="Acme", code="ACM"),
            Client(id="c9", name="Acme Clone", code="ACM"),
        ]

        with pytest.raises(IntegrityError):
            save_store(session, EntityStore(clients=clients))

    def test_failed_scope_rolls_back(self, db_engine, store, captured_logs):
        with session_scope() as session:
            save_store(session, store)

        with pytest.raises(IntegrityError):
            with session_scope() as session:
                save_store(session, EntityStore(clients=[
                    Client(id="x", name="A", code="DUP"),
                    Client(id="y", name="B", code="DUP"),
                ]))

        with session_scope() as session:
            assert len(load_store(session).clients) == 2
        assert any(r["message"] == "transaction_rolled_back" for r in captured_logs())
