"""
Module: flowsync_modules.timesheet.orm
Responsibility: SQLAlchemy ORM persistence model for timesheet entries.

Architecture position: Modules > Timesheet > ORM.  Inherits from Base
    (flowsync_kernel.db.base).

Invariants enforced:
    - The natural key (employee_id, project_id, work_date) is a composite
      unique constraint, so a second row for the same cell is an error
      rather than a silent overwrite.
    - hours uses Decimal (Numeric(38,9)).
    - is_billable is stored as captured; it is never re-derived from the
      project on load.

Failure modes:
    - IntegrityError on a duplicate natural key (uq_timesheet_entry_key).
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import Index, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from flowsync_kernel.db.base import Base


class TimesheetEntryModel(Base):
    """
    ORM model for timesheet entries.

    Maps to: flowsync_modules.timesheet.models.TimesheetEntry (frozen dataclass).
    """

    __tablename__ = "timesheet_entries"

    __table_args__ = (
        UniqueConstraint(
            "employee_id", "project_id", "work_date", name="uq_timesheet_entry_key",
        ),
        Index("idx_timesheet_status", "status"),
        Index("idx_timesheet_project", "project_id"),
    )

    employee_id: Mapped[str] = mapped_column(String(100))
    project_id: Mapped[str] = mapped_column(String(100))
    work_date: Mapped[date] = mapped_column()
    hours: Mapped[Decimal] = mapped_column()
    status: Mapped[str] = mapped_column(String(50), default="Draft")
    is_billable: Mapped[bool] = mapped_column(default=True)
    description: Mapped[str] = mapped_column(Text, default="")

    def to_dto(self):
        """Convert ORM model to frozen TimesheetEntry DTO."""
        from flowsync_modules.timesheet.models import TimesheetEntry, TimesheetStatus
        return TimesheetEntry(
            id=self.id,
            employee_id=self.employee_id,
            project_id=self.project_id,
            work_date=self.work_date,
            hours=self.hours,
            status=TimesheetStatus(self.status),
            is_billable=self.is_billable,
            description=self.description,
        )

    @classmethod
    def from_dto(cls, dto) -> "TimesheetEntryModel":
        """Create ORM model from frozen TimesheetEntry DTO."""
        return cls(
            id=dto.id,
            employee_id=dto.employee_id,
            project_id=dto.project_id,
            work_date=dto.work_date,
            hours=dto.hours,
            status=dto.status.value,
            is_billable=dto.is_billable,
            description=dto.description,
        )

    def __repr__(self) -> str:
        return (
            f"<TimesheetEntryModel {self.employee_id}/{self.project_id} "
            f"{self.work_date} {self.hours}h status={self.status}>"
        )
