"""
Module: flowsync_modules.resourcing.orm
Responsibility: SQLAlchemy ORM persistence models for employees, assignments
    and leave.

Architecture position: Modules > Resourcing > ORM.  Employee and project
    references are plain string columns with NO foreign key constraints.

Invariants enforced:
    - Rates, capacities and hours use Decimal (Numeric(38,9)).
    - Employee skills are stored as a JSON list and restored as a tuple.
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import JSON, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from flowsync_kernel.db.base import Base


# =============================================================================
# EmployeeModel
# =============================================================================

class EmployeeModel(Base):
    """Maps to: flowsync_modules.resourcing.models.Employee."""

    __tablename__ = "resourcing_employees"

    name: Mapped[str] = mapped_column(String(255))
    role: Mapped[str] = mapped_column(String(255), default="")
    hourly_rate: Mapped[Decimal] = mapped_column()
    capacity: Mapped[Decimal] = mapped_column(default=Decimal("40"))
    skills: Mapped[list] = mapped_column(JSON, default=list)

    def to_dto(self):
        from flowsync_modules.resourcing.models import Employee
        return Employee(
            id=self.id,
            name=self.name,
            hourly_rate=self.hourly_rate,
            capacity=self.capacity,
            role=self.role,
            skills=tuple(self.skills or ()),
        )

    @classmethod
    def from_dto(cls, dto) -> "EmployeeModel":
        return cls(
            id=dto.id,
            name=dto.name,
            role=dto.role,
            hourly_rate=dto.hourly_rate,
            capacity=dto.capacity,
            skills=list(dto.skills),
        )


# =============================================================================
# AssignmentModel
# =============================================================================

class AssignmentModel(Base):
    """Maps to: flowsync_modules.resourcing.models.Assignment."""

    __tablename__ = "resourcing_assignments"

    __table_args__ = (
        Index("idx_resourcing_assignment_employee", "employee_id"),
        Index("idx_resourcing_assignment_project", "project_id"),
    )

    employee_id: Mapped[str] = mapped_column(String(100))
    project_id: Mapped[str] = mapped_column(String(100))
    hours_per_week: Mapped[Decimal] = mapped_column()
    start_date: Mapped[date | None] = mapped_column(nullable=True)
    end_date: Mapped[date | None] = mapped_column(nullable=True)

    def to_dto(self):
        from flowsync_modules.resourcing.models import Assignment
        return Assignment(
            id=self.id,
            employee_id=self.employee_id,
            project_id=self.project_id,
            hours_per_week=self.hours_per_week,
            start_date=self.start_date,
            end_date=self.end_date,
        )

    @classmethod
    def from_dto(cls, dto) -> "AssignmentModel":
        return cls(
            id=dto.id,
            employee_id=dto.employee_id,
            project_id=dto.project_id,
            hours_per_week=dto.hours_per_week,
            start_date=dto.start_date,
            end_date=dto.end_date,
        )


# =============================================================================
# LeaveModel
# =============================================================================

class LeaveModel(Base):
    """Maps to: flowsync_modules.resourcing.models.Leave."""

    __tablename__ = "resourcing_leaves"

    __table_args__ = (
        Index("idx_resourcing_leave_employee", "employee_id"),
    )

    employee_id: Mapped[str] = mapped_column(String(100))
    leave_type: Mapped[str] = mapped_column(String(50))
    start_date: Mapped[date] = mapped_column()
    end_date: Mapped[date] = mapped_column()
    hours_per_day: Mapped[Decimal] = mapped_column(default=Decimal("8"))

    def to_dto(self):
        from flowsync_modules.resourcing.models import Leave, LeaveType
        return Leave(
            id=self.id,
            employee_id=self.employee_id,
            leave_type=LeaveType(self.leave_type),
            start_date=self.start_date,
            end_date=self.end_date,
            hours_per_day=self.hours_per_day,
        )

    @classmethod
    def from_dto(cls, dto) -> "LeaveModel":
        return cls(
            id=dto.id,
            employee_id=dto.employee_id,
            leave_type=dto.leave_type.value,
            start_date=dto.start_date,
            end_date=dto.end_date,
            hours_per_day=dto.hours_per_day,
        )
