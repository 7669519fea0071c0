"""
Module: flowsync_modules.billing.orm
Responsibility: SQLAlchemy ORM persistence models for invoices and their
    lines.  WIP records are derived and never stored.

Architecture position: Modules > Billing > ORM.  Invoice lines reference
    their invoice with an explicit ForeignKey (parent-child within the
    module); the client reference has no FK.

Invariants enforced:
    - Amounts use Decimal (Numeric(38,9)) -- NEVER float.
    - Line order is preserved through the ``position`` column.
    - Deleting an invoice deletes its lines (cascade delete-orphan).
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from flowsync_kernel.db.base import Base


# =============================================================================
# InvoiceModel
# =============================================================================

class InvoiceModel(Base):
    """
    ORM model for invoices.

    Maps to: flowsync_modules.billing.models.Invoice (frozen dataclass).
    ``position`` keeps the store's collection order (newest first).
    """

    __tablename__ = "billing_invoices"

    __table_args__ = (
        Index("idx_billing_invoice_client", "client_id"),
        Index("idx_billing_invoice_status", "status"),
    )

    client_id: Mapped[str] = mapped_column(String(100))
    client_name: Mapped[str] = mapped_column(String(255))
    amount: Mapped[Decimal] = mapped_column()
    issue_date: Mapped[date] = mapped_column()
    status: Mapped[str] = mapped_column(String(50), default="Draft")
    position: Mapped[int] = mapped_column(default=0)

    lines: Mapped[list["InvoiceLineModel"]] = relationship(
        back_populates="invoice",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="InvoiceLineModel.position",
    )

    def to_dto(self):
        """Convert ORM model to frozen Invoice DTO."""
        from flowsync_modules.billing.models import Invoice, InvoiceStatus
        return Invoice(
            id=self.id,
            client_id=self.client_id,
            client_name=self.client_name,
            amount=self.amount,
            issue_date=self.issue_date,
            status=InvoiceStatus(self.status),
            items=tuple(line.to_dto() for line in self.lines),
        )

    @classmethod
    def from_dto(cls, dto, position: int = 0) -> "InvoiceModel":
        """Create ORM model (with lines) from frozen Invoice DTO."""
        return cls(
            id=dto.id,
            client_id=dto.client_id,
            client_name=dto.client_name,
            amount=dto.amount,
            issue_date=dto.issue_date,
            status=dto.status.value,
            position=position,
            lines=[
                InvoiceLineModel.from_dto(item, dto.id, index)
                for index, item in enumerate(dto.items)
            ],
        )

    def __repr__(self) -> str:
        return f"<InvoiceModel {self.id} {self.amount} status={self.status}>"


# =============================================================================
# InvoiceLineModel
# =============================================================================

class InvoiceLineModel(Base):
    """Maps to: flowsync_modules.billing.models.InvoiceLine."""

    __tablename__ = "billing_invoice_lines"

    invoice_id: Mapped[str] = mapped_column(ForeignKey("billing_invoices.id"))
    position: Mapped[int] = mapped_column(default=0)
    description: Mapped[str] = mapped_column(String(500))
    amount: Mapped[Decimal] = mapped_column()

    invoice: Mapped[InvoiceModel] = relationship(back_populates="lines")

    def to_dto(self):
        from flowsync_modules.billing.models import InvoiceLine
        return InvoiceLine(description=self.description, amount=self.amount)

    @classmethod
    def from_dto(cls, dto, invoice_id: str, position: int) -> "InvoiceLineModel":
        return cls(
            id=f"{invoice_id}-{position}",
            invoice_id=invoice_id,
            position=position,
            description=dto.description,
            amount=dto.amount,
        )
