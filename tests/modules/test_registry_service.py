"""Tests for RegistryService."""

from decimal import Decimal

import pytest

from flowsync_kernel.exceptions import (
    DuplicateClientCodeError,
    DuplicateProjectCodeError,
    EntityNotFoundError,
    InvalidClientCodeError,
    InvalidServiceCodeError,
)
from flowsync_modules.registry.models import ClientStatus, ProjectStatus
from flowsync_modules.registry.service import RegistryService, contact_email_for


@pytest.fixture
def registry(store, config, sequential_ids):
    return RegistryService(store, config, id_factory=sequential_ids)


class TestRegisterClient:

    def test_registers_active_client(self, registry, store):
        client = registry.register_client("Initech", "int", "1 Office Park", "Bill Lumbergh")

        assert client.id == "id-1"
        assert client.code == "INT"
        assert client.status == ClientStatus.ACTIVE
        assert client.contact_email == "bill.lumbergh@example.com"
        assert store.find_client("id-1") == client

    @pytest.mark.parametrize("code", ["AB", "ABCD", "A-C", ""])
    def test_rejects_malformed_code(self, registry, code):
        with pytest.raises(InvalidClientCodeError):
            registry.register_client("Bad", code)

    def test_rejects_duplicate_code(self, registry):
        with pytest.raises(DuplicateClientCodeError) as exc_info:
            registry.register_client("Acme Again", "acm")
        assert exc_info.value.existing_client_id == "c1"

    def test_set_client_status(self, registry, store):
        updated = registry.set_client_status("c2", ClientStatus.INACTIVE)

        assert updated.status == ClientStatus.INACTIVE
        assert store.find_client("c2").status == ClientStatus.INACTIVE
        assert store.find_client("c1").status == ClientStatus.ACTIVE

    def test_set_status_unknown_client(self, registry):
        with pytest.raises(EntityNotFoundError):
            registry.set_client_status("zz", ClientStatus.INACTIVE)


class TestContactEmail:

    def test_only_first_space_replaced(self):
        assert contact_email_for("Mary Ann Smith") == "mary.ann smith@example.com"

    def test_empty_contact(self):
        assert contact_email_for("") == ""


class TestRegisterProject:

    def test_next_sequence_for_client_service(self, registry):
        project = registry.register_project("c1", "cons", "Phase Two")

        assert project.code == "ACM-CONS-02"
        assert project.service_type == "CONS"
        assert project.is_billable
        assert project.status == ProjectStatus.ACTIVE

    def test_first_sequence(self, registry):
        assert registry.next_project_code("c2", "TAX") == "GBX-TAX-01"

    def test_internal_project_uses_firm_prefix(self, registry):
        project = registry.register_project(
            "c1", "ADMIN", "Firm Admin", is_billable=False,
            recovery_rate=Decimal("0"), status=ProjectStatus.INTERNAL,
        )

        assert project.code == "PA-ADMIN-01"
        assert not project.is_billable

    def test_rejects_unknown_service_code(self, registry):
        with pytest.raises(InvalidServiceCodeError):
            registry.register_project("c1", "XYZ", "Mystery")

    def test_unknown_client(self, registry):
        with pytest.raises(EntityNotFoundError):
            registry.register_project("nope", "CONS", "Orphan")

    def test_explicit_duplicate_code(self, registry):
        with pytest.raises(DuplicateProjectCodeError):
            registry.register_project("c1", "CONS", "Copy", code="acm-cons-01")

    def test_recovery_rate_out_of_range(self, registry):
        with pytest.raises(ValueError):
            registry.register_project("c1", "CONS", "Overbilled", recovery_rate=Decimal("1.2"))

    def test_active_projects(self, registry, store):
        registry.register_project("c1", "AUD", "Paused", status=ProjectStatus.PENDING)

        assert {p.id for p in registry.active_projects()} == {"p1", "p2", "p3"}
