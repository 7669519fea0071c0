"""
Module: flowsync_modules.registry.orm
Responsibility: SQLAlchemy ORM persistence models for the registry module.
    Maps the frozen ``Client`` and ``Project`` DTOs from registry.models to
    relational tables.

Architecture position: Modules > Registry > ORM.  Inherits from Base
    (flowsync_kernel.db.base).  ``ProjectModel.client_id`` carries no
    foreign key: unresolved references are tolerated everywhere else, and
    snapshots are written collection by collection.

Invariants enforced:
    - recovery_rate uses Decimal (Numeric(38,9)) -- NEVER float.
    - Enum fields stored as String(50).
    - Client codes and project codes are unique firm-wide.

Failure modes:
    - IntegrityError on duplicate client code (uq_registry_client_code).
    - IntegrityError on duplicate project code (uq_registry_project_code).
"""

from decimal import Decimal

from sqlalchemy import Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from flowsync_kernel.db.base import Base


# =============================================================================
# ClientModel
# =============================================================================

class ClientModel(Base):
    """
    ORM model for clients.

    Maps to: flowsync_modules.registry.models.Client (frozen dataclass).
    """

    __tablename__ = "registry_clients"

    __table_args__ = (
        UniqueConstraint("code", name="uq_registry_client_code"),
    )

    name: Mapped[str] = mapped_column(String(255))
    code: Mapped[str] = mapped_column(String(3))
    address: Mapped[str] = mapped_column(String(500), default="")
    contact_name: Mapped[str] = mapped_column(String(255), default="")
    contact_email: Mapped[str] = mapped_column(String(255), default="")
    status: Mapped[str] = mapped_column(String(50), default="Active")

    def to_dto(self):
        """Convert ORM model to frozen Client DTO."""
        from flowsync_modules.registry.models import Client, ClientStatus
        return Client(
            id=self.id,
            name=self.name,
            code=self.code,
            address=self.address,
            contact_name=self.contact_name,
            contact_email=self.contact_email,
            status=ClientStatus(self.status),
        )

    @classmethod
    def from_dto(cls, dto) -> "ClientModel":
        """Create ORM model from frozen Client DTO."""
        return cls(
            id=dto.id,
            name=dto.name,
            code=dto.code,
            address=dto.address,
            contact_name=dto.contact_name,
            contact_email=dto.contact_email,
            status=dto.status.value,
        )

    def __repr__(self) -> str:
        return f"<ClientModel {self.code} {self.name}>"


# =============================================================================
# ProjectModel
# =============================================================================

class ProjectModel(Base):
    """
    ORM model for projects.

    Maps to: flowsync_modules.registry.models.Project (frozen dataclass).
    """

    __tablename__ = "registry_projects"

    __table_args__ = (
        UniqueConstraint("code", name="uq_registry_project_code"),
        Index("idx_registry_project_client", "client_id"),
    )

    client_id: Mapped[str] = mapped_column(String(100))
    code: Mapped[str] = mapped_column(String(50))
    name: Mapped[str] = mapped_column(String(255))
    service_type: Mapped[str] = mapped_column(String(50), default="")
    is_billable: Mapped[bool] = mapped_column(default=True)
    status: Mapped[str] = mapped_column(String(50), default="Active")
    recovery_rate: Mapped[Decimal] = mapped_column(default=Decimal("1"))

    def to_dto(self):
        """Convert ORM model to frozen Project DTO."""
        from flowsync_modules.registry.models import Project, ProjectStatus
        return Project(
            id=self.id,
            client_id=self.client_id,
            code=self.code,
            name=self.name,
            service_type=self.service_type,
            is_billable=self.is_billable,
            status=ProjectStatus(self.status),
            recovery_rate=self.recovery_rate,
        )

    @classmethod
    def from_dto(cls, dto) -> "ProjectModel":
        """Create ORM model from frozen Project DTO."""
        return cls(
            id=dto.id,
            client_id=dto.client_id,
            code=dto.code,
            name=dto.name,
            service_type=dto.service_type,
            is_billable=dto.is_billable,
            status=dto.status.value,
            recovery_rate=dto.recovery_rate,
        )

    def __repr__(self) -> str:
        return f"<ProjectModel {self.code} billable={self.is_billable}>"
