"""Domain-specific exceptions for the directory app."""

from config.exceptions import ConflictError, DomainError, NotFoundOrForbiddenError


class DirectoryServiceError(DomainError):
    """Base exception for directory services."""
    pass


class ProviderNotFoundError(NotFoundOrForbiddenError, DirectoryServiceError):
    default_message = 'Provider not found.'


class ClientNotFoundError(NotFoundOrForbiddenError, DirectoryServiceError):
    default_message = 'Client not found.'


class ProductNotFoundError(NotFoundOrForbiddenError, DirectoryServiceError):
    default_message = 'Product not found.'


class ProviderInUseError(ConflictError, DirectoryServiceError):
    """Raised when deleting a provider that still has open operations."""
    code = 'provider_in_use'
    default_message = 'Cannot delete provider with open operations.'


class RecordInUseError(ConflictError, DirectoryServiceError):
    """Raised when deleting a record other rows still reference."""
    code = 'record_in_use'
    default_message = 'Record is referenced by other records and cannot be deleted.'
