"""
Sync services package.

Push/pull reconciliation for offline clients and the sync audit log.
"""

from .exceptions import (
    SyncServiceError,
    SyncUnavailableError,
    SyncLogImmutableError,
    RecordIdConflictError,
)
from .audit import record_sync, get_sync_status
from .handlers import HANDLERS, RecordOutcome
from .reconciler import CollectionResult, PullResult, push, pull

__all__ = [
    # Exceptions
    'SyncServiceError',
    'SyncUnavailableError',
    'SyncLogImmutableError',
    'RecordIdConflictError',
    # Audit
    'record_sync',
    'get_sync_status',
    # Reconciler
    'HANDLERS',
    'RecordOutcome',
    'CollectionResult',
    'PullResult',
    'push',
    'pull',
]
