"""Services for providers, clients and products."""

from .exceptions import (
    DirectoryServiceError,
    ProviderNotFoundError,
    ClientNotFoundError,
    ProductNotFoundError,
    ProviderInUseError,
    RecordInUseError,
)
from .provider_management import (
    create_provider,
    search_providers,
    get_provider,
    update_provider,
    delete_provider,
)
from .record_management import delete_record

__all__ = [
    # Exceptions
    'DirectoryServiceError',
    'ProviderNotFoundError',
    'ClientNotFoundError',
    'ProductNotFoundError',
    'ProviderInUseError',
    'RecordInUseError',
    # Services
    'create_provider',
    'search_providers',
    'get_provider',
    'update_provider',
    'delete_provider',
    'delete_record',
]
