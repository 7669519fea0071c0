"""
Module: flowsync_engines
Responsibility:
    Pure calculation layer: the rules that turn timesheet entries and
    assignments into financial and capacity figures.

Architecture position:
    Engines -- zero I/O.  May import ``flowsync_kernel`` and module value
    objects (``flowsync_modules.*.models`` / ``workflows``).
    MUST NOT import module services or ``flowsync_services``.

Invariants enforced:
    - Purity: engines NEVER read the clock; dates and ids are parameters.
    - Decimal-only arithmetic; floats are rejected upstream.
    - Determinism: identical inputs always produce identical outputs.

Usage:
    from flowsync_engines.utilization import calculate_utilization
    from flowsync_engines.wip import calculate_wip_ledger
    from flowsync_engines.invoicing import draft_invoice
    from flowsync_engines.timesheet_grid import synthesize_entries, reconcile_week
    from flowsync_engines.approval import approve_entry, reject_entry
"""
