"""
Module ORM Registry (``flowsync_modules._orm_registry``).

Responsibility
--------------
Ensure all module-level SQLAlchemy ORM models are imported so that
``Base.metadata`` contains their table definitions before tables are
created, and provide ``create_all_tables()`` -- the one entry point that
registers every module model and then creates the schema.

Architecture position
---------------------
**Modules layer** -- utility.  Imports sibling ``flowsync_modules`` ORM
files and ``flowsync_kernel.db.engine`` (allowed: modules -> kernel).
MUST NOT be imported by ``flowsync_kernel``.
"""


def import_all_orm_models() -> None:
    """Import every ``flowsync_modules.*.orm`` module to register ORM models.

    This function is idempotent -- repeated calls are harmless.
    """
    # fmt: off
    import flowsync_modules.billing.orm  # noqa: F401
    import flowsync_modules.registry.orm  # noqa: F401
    import flowsync_modules.resourcing.orm  # noqa: F401
    import flowsync_modules.timesheet.orm  # noqa: F401
    # fmt: on


def create_all_tables() -> None:
    """Register all module ORM models, then create every table.

    Preconditions:
        Engine must be initialized via ``init_engine_from_url()``.
    """
    from flowsync_kernel.db.engine import create_tables

    import_all_orm_models()
    create_tables()
