"""
Firm Configuration Schema (``flowsync_config.schema``).

Responsibility
--------------
Frozen dataclass describing every tunable the engines and module services
read.  Field defaults match the packaged ``defaults.yaml``.

Invariants enforced
-------------------
* Multipliers and week lengths are positive.
* ``invoice_line_template`` contains the ``{project_code}`` placeholder.
* Numeric fields are ``Decimal`` or ``int`` -- never ``float``.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Self

from flowsync_kernel.logging_config import get_logger

logger = get_logger("config.schema")


@dataclass(frozen=True)
class FirmConfig:
    """
    Configuration for one firm.

    Override at instantiation with firm-specific values:

        config = FirmConfig(
            standard_week_hours=Decimal("37.5"),
            currency="GBP",
        )
    """

    currency: str = "USD"
    standard_week_hours: Decimal = Decimal("40")

    timesheet_week_start: date = date(2023, 10, 23)
    timesheet_working_days: int = 5

    planner_leave_multiplier: Decimal = Decimal("1")
    conflict_leave_multiplier: Decimal = Decimal("5")

    invoice_id_prefix: str = "INV-"
    invoice_line_template: str = "Professional Services for {project_code}"
    default_entry_description: str = "Weekly time entry"

    service_codes: tuple[str, ...] = field(default=("CONS", "AUD", "TAX", "LD"))
    internal_code_prefix: str = "PA"

    def __post_init__(self) -> None:
        if self.standard_week_hours <= 0:
            raise ValueError("standard_week_hours must be positive")
        if not 1 <= self.timesheet_working_days <= 7:
            raise ValueError("timesheet_working_days must be between 1 and 7")
        if self.planner_leave_multiplier < 0 or self.conflict_leave_multiplier < 0:
            raise ValueError("leave multipliers must be non-negative")
        if "{project_code}" not in self.invoice_line_template:
            raise ValueError("invoice_line_template must contain {project_code}")
        if not self.service_codes:
            raise ValueError("at least one service code is required")

    @property
    def timesheet_week(self) -> tuple[date, ...]:
        """Dates of the timesheet grid week, Monday first."""
        return tuple(
            self.timesheet_week_start + timedelta(days=offset)
            for offset in range(self.timesheet_working_days)
        )

    @classmethod
    def with_defaults(cls) -> Self:
        """Create config with the packaged defaults."""
        logger.info("firm_config_created_with_defaults")
        return cls()

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict view used for checksums and YAML round-trips."""
        return asdict(self)
