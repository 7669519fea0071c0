"""Identifier generation for records created by user actions."""

from typing import Callable
from uuid import uuid4

IdFactory = Callable[[], str]


def new_record_id() -> str:
    """Short random id for master-data records (clients, assignments, ...)."""
    return uuid4().hex[:9]


def prefixed_id_factory(prefix: str, length: int = 8) -> IdFactory:
    """Factory producing ``<prefix><RANDOM>`` ids, e.g. ``INV-3F9A02C1``."""

    def _factory() -> str:
        return f"{prefix}{uuid4().hex[:length].upper()}"

    return _factory
