"""
Client & Project Registry Service (``flowsync_modules.registry.service``).

Responsibility
--------------
Single source of truth for client and project identifiers.  Registers
clients (3-character codes, unique firm-wide) and opens projects whose codes
follow the firm code standard:

* client work:    ``[CLI]-[SRV]-[SEQ]``   e.g. ``ACM-CONS-01``
* internal work:  ``PA-[TYPE]-[SEQ]``     e.g. ``PA-ADMIN-01``

Failure modes
-------------
* ``InvalidClientCodeError`` / ``DuplicateClientCodeError`` on bad codes.
* ``InvalidServiceCodeError`` for client work outside the configured
  service lines.
* ``EntityNotFoundError`` for an unknown client id.
* ``DuplicateProjectCodeError`` if an explicit code is already taken.
"""

from __future__ import annotations

import re
from dataclasses import replace
from decimal import Decimal

from flowsync_config.schema import FirmConfig
from flowsync_kernel.exceptions import (
    DuplicateClientCodeError,
    DuplicateProjectCodeError,
    EntityNotFoundError,
    InvalidClientCodeError,
    InvalidServiceCodeError,
)
from flowsync_kernel.logging_config import get_logger
from flowsync_kernel.utils.ids import IdFactory, new_record_id
from flowsync_modules.registry.models import Client, ClientStatus, Project, ProjectStatus
from flowsync_services.store import EntityStore

logger = get_logger("modules.registry.service")

_CLIENT_CODE = re.compile(r"^[A-Z0-9]{3}$")


def contact_email_for(contact_name: str) -> str:
    """Placeholder mailbox: lower-cased name, first space turned into a dot."""
    if not contact_name:
        return ""
    return f"{contact_name.lower().replace(' ', '.', 1)}@example.com"


class RegistryService:
    """
    Registers clients and projects in an ``EntityStore``.

    Contract
    --------
    * Every command replaces the affected collection in the store and
      returns the created/updated value object.
    * Codes are upper-cased before validation.
    """

    def __init__(
        self,
        store: EntityStore,
        config: FirmConfig | None = None,
        id_factory: IdFactory | None = None,
    ):
        self._store = store
        self._config = config or FirmConfig()
        self._new_id = id_factory or new_record_id

    # =========================================================================
    # Clients
    # =========================================================================

    def register_client(
        self,
        name: str,
        code: str,
        address: str = "",
        contact_name: str = "",
    ) -> Client:
        """Register a new Active client."""
        normalized = code.strip().upper()
        if not _CLIENT_CODE.match(normalized):
            raise InvalidClientCodeError(code)

        existing = next((c for c in self._store.clients if c.code == normalized), None)
        if existing is not None:
            raise DuplicateClientCodeError(normalized, existing.id)

        client = Client(
            id=self._new_id(),
            name=name,
            code=normalized,
            address=address,
            contact_name=contact_name,
            contact_email=contact_email_for(contact_name),
            status=ClientStatus.ACTIVE,
        )
        self._store.replace_clients(self._store.clients + (client,))

        logger.info("client_registered", extra={
            "client_id": client.id,
            "client_code": client.code,
        })
        return client

    def set_client_status(self, client_id: str, status: ClientStatus) -> Client:
        """Activate or deactivate a client."""
        client = self._store.find_client(client_id)
        if client is None:
            raise EntityNotFoundError("Client", client_id)

        updated = replace(client, status=status)
        self._store.replace_clients(
            updated if c.id == client_id else c for c in self._store.clients
        )
        logger.info("client_status_changed", extra={
            "client_id": client_id,
            "from_status": client.status.value,
            "to_status": status.value,
        })
        return updated

    # =========================================================================
    # Projects
    # =========================================================================

    def next_project_code(self, client_id: str, service_code: str, internal: bool = False) -> str:
        """
        Next free project code for a client/service line.

        Internal codes use the firm prefix instead of the client code and
        accept any TYPE; client codes require a configured service code.
        """
        srv = service_code.strip().upper()
        if internal:
            prefix = f"{self._config.internal_code_prefix}-{srv}"
        else:
            if srv not in self._config.service_codes:
                raise InvalidServiceCodeError(srv, self._config.service_codes)
            client = self._store.find_client(client_id)
            if client is None:
                raise EntityNotFoundError("Client", client_id)
            prefix = f"{client.code}-{srv}"

        used = [
            int(p.code.rsplit("-", 1)[1])
            for p in self._store.projects
            if p.code.startswith(prefix + "-") and p.code.rsplit("-", 1)[1].isdigit()
        ]
        return f"{prefix}-{max(used, default=0) + 1:02d}"

    def register_project(
        self,
        client_id: str,
        service_code: str,
        name: str,
        is_billable: bool = True,
        recovery_rate: Decimal = Decimal("1"),
        status: ProjectStatus = ProjectStatus.ACTIVE,
        code: str | None = None,
    ) -> Project:
        """
        Open a project for a client.

        Non-billable projects are internal and take a ``PA-`` code.  Pass
        ``code`` to register a pre-existing code verbatim.
        """
        if self._store.find_client(client_id) is None:
            raise EntityNotFoundError("Client", client_id)

        project_code = code.upper() if code else self.next_project_code(
            client_id, service_code, internal=not is_billable,
        )
        if any(p.code == project_code for p in self._store.projects):
            raise DuplicateProjectCodeError(project_code)

        project = Project(
            id=self._new_id(),
            client_id=client_id,
            code=project_code,
            name=name,
            service_type=service_code.upper(),
            is_billable=is_billable,
            status=status,
            recovery_rate=recovery_rate,
        )
        self._store.replace_projects(self._store.projects + (project,))

        logger.info("project_registered", extra={
            "project_id": project.id,
            "project_code": project.code,
            "client_id": client_id,
            "is_billable": is_billable,
            "recovery_rate": str(recovery_rate),
        })
        return project

    def active_projects(self) -> tuple[Project, ...]:
        return tuple(p for p in self._store.projects if p.status == ProjectStatus.ACTIVE)
