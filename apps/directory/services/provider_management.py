"""
Provider management service.

Providers are visible to their owner and, when shared, to every member
of the provider's organization. Updates and deletes use a single
filtered query so the access check and the write cannot drift apart.
"""

import logging
from typing import Optional
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Count, Q, QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.directory.models import Provider
from apps.operations.models import Operation, OperationStatus
from apps.organizations.models import Organization
from apps.organizations.services import get_organization

from .exceptions import ProviderNotFoundError, ProviderInUseError

logger = logging.getLogger(__name__)

PROVIDER_MUTABLE_FIELDS = ('name', 'phone', 'address', 'notes')


def _resolve_organization(organization_id: Optional[UUID], user: User) -> Optional[Organization]:
    if organization_id is None:
        return None
    return get_organization(organization_id=organization_id, user=user)


@transaction.atomic
def create_provider(
    *,
    user: User,
    name: str,
    phone: str = "",
    address: str = "",
    notes: str = "",
    organization_id: Optional[UUID] = None,
) -> Provider:
    """
    Create a provider, optionally shared with one of the user's organizations.

    Raises:
        OrganizationNotFoundError: If the user is not a member of the organization
    """
    organization = _resolve_organization(organization_id, user)

    return Provider.objects.create(
        user=user,
        organization=organization,
        name=name,
        phone=phone,
        address=address,
        notes=notes,
    )


def search_providers(
    *,
    user: User,
    search: Optional[str] = None,
    organization_id: Optional[str] = None,
) -> QuerySet[Provider]:
    """Providers visible to the user, with operation counts."""
    queryset = Provider.objects.accessible_to(user)

    if organization_id:
        queryset = queryset.filter(organization_id=organization_id)

    if search:
        queryset = queryset.filter(
            Q(name__icontains=search) |
            Q(phone__icontains=search) |
            Q(address__icontains=search)
        )

    return queryset.annotate(operation_count=Count('operations', distinct=True)).order_by('name')


def get_provider(*, provider_id: UUID, user: User) -> Provider:
    try:
        return Provider.objects.accessible_to(user).get(id=provider_id)
    except (Provider.DoesNotExist, ValueError, ValidationError):
        raise ProviderNotFoundError()


def update_provider(*, provider_id: UUID, user: User, **fields) -> Provider:
    """
    Update mutable provider fields for the owner or an organization member.

    Raises:
        ProviderNotFoundError: If the provider is not visible to the user
    """
    changes = {k: v for k, v in fields.items() if k in PROVIDER_MUTABLE_FIELDS}

    try:
        updated = (
            Provider.objects
            .accessible_to(user)
            .filter(id=provider_id)
            .update(**changes, updated_at=timezone.now())
        )
    except ValidationError:
        raise ProviderNotFoundError()
    if updated == 0:
        raise ProviderNotFoundError()

    return Provider.objects.get(id=provider_id)


@transaction.atomic
def delete_provider(*, provider_id: UUID, user: User) -> None:
    """
    Delete a provider that has no open operations.

    Raises:
        ProviderNotFoundError: If the provider is not visible to the user
        ProviderInUseError: If open operations still reference it
    """
    provider = get_provider(provider_id=provider_id, user=user)

    open_operations = Operation.objects.filter(
        provider=provider,
        status=OperationStatus.OPEN,
    ).count()
    if open_operations:
        raise ProviderInUseError(
            f"Cannot delete provider with {open_operations} open operation(s)."
        )

    if provider.operations.exists():
        # Closed history keeps its provider
        raise ProviderInUseError("Cannot delete provider with recorded operations.")

    provider.delete()
    logger.info("Provider %s deleted by user %s", provider_id, user.id)
