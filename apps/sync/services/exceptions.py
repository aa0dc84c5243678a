"""Domain-specific exceptions for the sync app."""

from config.exceptions import ConflictError, DomainError, StateError, UnavailableError


class SyncServiceError(DomainError):
    """Base exception for sync services."""
    pass


class SyncUnavailableError(UnavailableError, SyncServiceError):
    """Storage failed mid-sync; the client should retry the whole call."""
    code = 'sync_unavailable'
    default_message = 'Sync failed, please retry later.'


class SyncLogImmutableError(StateError, SyncServiceError):
    """Raised on any attempt to change or remove a sync audit row."""
    code = 'sync_log_immutable'
    default_message = 'Sync log entries cannot be modified or deleted.'


class RecordIdConflictError(ConflictError, SyncServiceError):
    """Client identifier already belongs to a record the caller cannot see."""
    code = 'id_in_use'
    default_message = 'Identifier already in use.'
