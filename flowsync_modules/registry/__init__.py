"""
Client & Project Registry Module (``flowsync_modules.registry``).

Master data for the firm: clients (unique 3-character codes) and the
projects opened against them, coded ``[CLI]-[SRV]-[SEQ]`` for client work
and ``PA-[TYPE]-[SEQ]`` for internal work.
"""

from flowsync_modules.registry.models import (
    Client,
    ClientStatus,
    Project,
    ProjectStatus,
)

__all__ = [
    "Client",
    "ClientStatus",
    "Project",
    "ProjectStatus",
]
