"""
Module: flowsync_kernel.db.base
Responsibility: Declarative base for all SQLAlchemy ORM models.  Provides the
    string primary key convention and the type annotation map that keeps
    column types consistent across module tables.
Architecture position: Kernel > DB.  Lowest-level import target for every
    ``flowsync_modules.*.orm`` file.  MUST NOT import modules or services.

Invariants enforced:
    - Decimal precision: type_annotation_map maps Python Decimal to
      Numeric(38, 9).  NEVER use float for hours, rates or money.
    - Primary keys are the same string ids the in-memory value objects
      carry, so a snapshot round-trip preserves identity.

Failure modes:
    - IntegrityError on a duplicate primary key or unique constraint.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import ClassVar

from sqlalchemy import Date, DateTime, Numeric, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """
    Declarative base for all FlowSync models.

    Guarantees:
        - id is a caller-supplied string (no server-side generation).
        - Decimal maps to Numeric(38, 9).
        - date maps to Date, datetime to DateTime(timezone=True).
    """

    type_annotation_map: ClassVar[dict] = {
        Decimal: Numeric(38, 9),
        date: Date,
        datetime: DateTime(timezone=True),
    }

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
