"""
FlowSync services: the in-memory entity store plus cross-module
orchestration (dashboard summary, SQLAlchemy snapshot persistence).

Import submodules directly; this package does not eagerly import them.
"""
