"""
Guarded access to the remote store.
"""
from medlink.store.guard import (
    Outcome,
    RecordNotFound,
    StoreGuard,
    StoreReadiness,
    StoreResult,
    guard,
    readiness,
)
from medlink.store.relations import attach, attach_related, fetch_by_ids

__all__ = [
    "Outcome",
    "RecordNotFound",
    "StoreGuard",
    "StoreReadiness",
    "StoreResult",
    "guard",
    "readiness",
    "attach",
    "attach_related",
    "fetch_by_ids",
]
