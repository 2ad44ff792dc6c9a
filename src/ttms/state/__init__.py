"""State/store layer.

This package is the single source of truth for how fetched and mutated
remote data is merged into the shared, per-key entity cache.
"""

from ttms.state.events import EntityKey, IntentType, OperationChannel, OperationStatus, StoreIntent
from ttms.state.store import EntityState, KeyedEntityStore, reduce
from ttms.state.tracking import track_fetch, track_secondary

__all__ = [
    "EntityKey",
    "EntityState",
    "IntentType",
    "KeyedEntityStore",
    "OperationChannel",
    "OperationStatus",
    "StoreIntent",
    "reduce",
    "track_fetch",
    "track_secondary",
]
