"""
Organization management service.

Handles organization creation and member-scoped lookups.
"""

import logging
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Count, QuerySet

from apps.accounts.models import User
from apps.organizations.models import Organization, OrganizationMember, OrganizationRole

from .exceptions import OrganizationNotFoundError, InsufficientPermissionsError

logger = logging.getLogger(__name__)


@transaction.atomic
def create_organization(
    *,
    name: str,
    creator: User,
    description: str = ""
) -> Organization:
    """
    Create a new organization with the creator as its first ADMIN.

    Args:
        name: Organization name
        creator: User creating the organization
        description: Optional description

    Returns:
        Created Organization instance
    """
    organization = Organization.objects.create(
        name=name,
        description=description,
        created_by=creator,
    )

    OrganizationMember.objects.create(
        user=creator,
        organization=organization,
        role=OrganizationRole.ADMIN,
    )

    logger.info("Organization %s created by user %s", organization.id, creator.id)
    return organization


def list_organizations(*, user: User) -> QuerySet[Organization]:
    """Organizations the user is a member of, with member counts."""
    return (
        Organization.objects
        .for_member(user)
        .select_related('created_by')
        .prefetch_related('members__user')
        .annotate(member_count=Count('members', distinct=True))
    )


def get_organization(*, organization_id: UUID, user: User) -> Organization:
    """
    Fetch an organization the user belongs to.

    Raises:
        OrganizationNotFoundError: If it doesn't exist or user is not a member
    """
    try:
        return (
            Organization.objects
            .for_member(user)
            .select_related('created_by')
            .prefetch_related('members__user')
            .get(id=organization_id)
        )
    except (Organization.DoesNotExist, ValueError, ValidationError):
        raise OrganizationNotFoundError()


@transaction.atomic
def update_organization(
    *,
    organization_id: UUID,
    user: User,
    **fields
) -> Organization:
    """
    Update name/description (admin only).

    Raises:
        OrganizationNotFoundError: If not a member
        InsufficientPermissionsError: If user is not an ADMIN member
    """
    organization = get_organization(organization_id=organization_id, user=user)

    if not organization.is_admin(user):
        raise InsufficientPermissionsError()

    allowed = {k: v for k, v in fields.items() if k in ('name', 'description')}
    for field, value in allowed.items():
        setattr(organization, field, value)
    organization.save(update_fields=[*allowed, 'updated_at'])

    return organization
