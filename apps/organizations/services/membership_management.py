"""
Membership management service.

Handles organization membership with concurrency protection. Admin
checks happen here so the rules hold for every caller, not only the API.
"""

import logging
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction, IntegrityError
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.organizations.models import Organization, OrganizationMember, OrganizationRole

from .exceptions import (
    OrganizationNotFoundError,
    UserNotFoundError,
    NotMemberError,
    AlreadyMemberError,
    LastAdminError,
    InsufficientPermissionsError,
)

logger = logging.getLogger(__name__)


def _lock_organization_as_admin(organization_id: UUID, actor: User) -> Organization:
    """Lock the organization row and verify the actor administers it."""
    try:
        organization = (
            Organization.objects
            .select_for_update()
            .get(id=organization_id)
        )
    except (Organization.DoesNotExist, ValueError, ValidationError):
        raise OrganizationNotFoundError()

    role = organization.get_user_role(actor)
    if role is None:
        raise OrganizationNotFoundError()
    if role != OrganizationRole.ADMIN:
        raise InsufficientPermissionsError()

    return organization


def _get_membership(organization: Organization, user_id: UUID) -> OrganizationMember:
    try:
        return (
            OrganizationMember.objects
            .select_for_update()
            .select_related('user')
            .get(organization=organization, user_id=user_id)
        )
    except (OrganizationMember.DoesNotExist, ValueError, ValidationError):
        raise NotMemberError()


def _is_last_admin(membership: OrganizationMember) -> bool:
    if membership.role != OrganizationRole.ADMIN:
        return False
    return not (
        OrganizationMember.objects
        .filter(organization_id=membership.organization_id, role=OrganizationRole.ADMIN)
        .exclude(id=membership.id)
        .exists()
    )


@transaction.atomic
def add_member(
    *,
    organization_id: UUID,
    actor: User,
    email: str,
    role: str = OrganizationRole.OPERATOR
) -> OrganizationMember:
    """
    Add an existing user to the organization by email (admin only).

    Raises:
        OrganizationNotFoundError: If organization doesn't exist or actor is not a member
        InsufficientPermissionsError: If actor is not an ADMIN member
        UserNotFoundError: If no user has that email
        AlreadyMemberError: If the user is already a member
    """
    organization = _lock_organization_as_admin(organization_id, actor)

    try:
        user = User.objects.get(email__iexact=email)
    except User.DoesNotExist:
        raise UserNotFoundError()

    if organization.has_member(user):
        raise AlreadyMemberError()

    try:
        with transaction.atomic():
            membership = OrganizationMember.objects.create(
                user=user,
                organization=organization,
                role=role,
            )
    except IntegrityError:
        raise AlreadyMemberError()

    logger.info("User %s added to organization %s as %s", user.id, organization.id, role)
    return membership


@transaction.atomic
def update_member_role(
    *,
    organization_id: UUID,
    user_id: UUID,
    new_role: str,
    actor: User
) -> OrganizationMember:
    """
    Change a member's role (admin only).

    Raises:
        NotMemberError: If target user is not a member
        LastAdminError: If demoting the only remaining ADMIN
    """
    organization = _lock_organization_as_admin(organization_id, actor)
    membership = _get_membership(organization, user_id)

    if new_role != OrganizationRole.ADMIN and _is_last_admin(membership):
        raise LastAdminError()

    membership.role = new_role
    membership.save(update_fields=['role'])
    return membership


@transaction.atomic
def remove_member(
    *,
    organization_id: UUID,
    user_id: UUID,
    actor: User
) -> None:
    """
    Remove a member from the organization (admin only).

    Raises:
        NotMemberError: If target user is not a member
        LastAdminError: If removing the only remaining ADMIN
    """
    organization = _lock_organization_as_admin(organization_id, actor)
    membership = _get_membership(organization, user_id)

    if _is_last_admin(membership):
        raise LastAdminError()

    membership.delete()
    logger.info("User %s removed from organization %s", user_id, organization.id)


def get_organization_members(*, organization_id: UUID, user: User) -> QuerySet[OrganizationMember]:
    """
    Members of an organization the user belongs to.

    Raises:
        OrganizationNotFoundError: If it doesn't exist or user is not a member
    """
    if not Organization.objects.for_member(user).filter(id=organization_id).exists():
        raise OrganizationNotFoundError()

    return (
        OrganizationMember.objects
        .filter(organization_id=organization_id)
        .select_related('user')
        .order_by('role', 'joined_at')
    )
