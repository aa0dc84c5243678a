"""
Domain-specific exceptions for organizations app.

Every class maps onto the shared taxonomy so the API exception handler
can classify it without per-view try/except blocks.
"""

from rest_framework import status

from config.exceptions import ConflictError, DomainError, NotFoundOrForbiddenError, StateError


class OrganizationsServiceError(DomainError):
    """Base exception for all organizations service errors."""
    pass


class OrganizationNotFoundError(NotFoundOrForbiddenError, OrganizationsServiceError):
    """Raised when an organization does not exist or the user is not a member."""
    default_message = 'Organization not found.'


class UserNotFoundError(NotFoundOrForbiddenError, OrganizationsServiceError):
    """Raised when no account matches the invited email."""
    default_message = 'User not found.'


class NotMemberError(NotFoundOrForbiddenError, OrganizationsServiceError):
    """Raised when the target user is not a member of the organization."""
    default_message = 'User is not a member of this organization.'


class AlreadyMemberError(ConflictError, OrganizationsServiceError):
    """Raised when adding a user who is already a member."""
    code = 'already_member'
    default_message = 'User is already a member.'


class LastAdminError(StateError, OrganizationsServiceError):
    """Raised when an action would leave the organization without an admin."""
    code = 'last_admin'
    default_message = 'An organization must keep at least one admin.'


class InsufficientPermissionsError(OrganizationsServiceError):
    """Raised when a member lacks the admin role for an action."""
    status_code = status.HTTP_403_FORBIDDEN
    code = 'forbidden'
    default_message = 'Organization admin access required.'
