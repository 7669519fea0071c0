"""
Client & Project Registry Domain Models (``flowsync_modules.registry.models``).

Responsibility
--------------
Frozen dataclass value objects for the firm's master data: clients and the
projects (engagements) opened against them.

Invariants enforced
-------------------
* All models are ``frozen=True`` (immutable after construction).
* ``Project.recovery_rate`` lies in [0, 1] and is a ``Decimal``.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class ClientStatus(str, Enum):
    """Client lifecycle states."""
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class ProjectStatus(str, Enum):
    """Project lifecycle states."""
    ACTIVE = "Active"
    PENDING = "Pending"
    CLOSED = "Closed"
    INTERNAL = "Internal"


@dataclass(frozen=True)
class Client:
    """A client of the firm."""
    id: str
    name: str
    code: str  # unique, 3 characters
    address: str = ""
    contact_name: str = ""
    contact_email: str = ""
    status: ClientStatus = ClientStatus.ACTIVE


@dataclass(frozen=True)
class Project:
    """An engagement billed (or not) to a client."""
    id: str
    client_id: str
    code: str
    name: str
    service_type: str = ""
    is_billable: bool = True
    status: ProjectStatus = ProjectStatus.ACTIVE
    recovery_rate: Decimal = Decimal("1")  # 0.9 bills 90% of standard rate

    def __post_init__(self):
        if not (Decimal("0") <= self.recovery_rate <= Decimal("1")):
            raise ValueError(
                f"recovery_rate must be between 0 and 1, got {self.recovery_rate}"
            )
